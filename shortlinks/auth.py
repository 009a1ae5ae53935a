import hmac
import logging
from typing import Optional
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from .errors import error_response

logger = logging.getLogger(__name__)

ADMIN_PREFIX = "/api/admin"
BEARER_PREFIX = "Bearer "

def is_admin_authorized(authorization: Optional[str], admin_token: Optional[str]) -> bool:
    """True only for ``Bearer <admin_token>``; no configured token means no admin access."""
    if not admin_token or not authorization or not authorization.startswith(BEARER_PREFIX):
        return False
    token = authorization[len(BEARER_PREFIX):]
    return hmac.compare_digest(token.encode(), admin_token.encode())

class AdminAuthMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        # Prefix match, so unknown admin paths still answer 401 before 404
        if not request.url.path.startswith(ADMIN_PREFIX):
            return await call_next(request)

        settings = request.app.state.settings
        if not is_admin_authorized(request.headers.get("authorization"), settings.ADMIN_TOKEN):
            logger.warning("Rejected admin request", extra={"path": request.url.path})
            return error_response(401, "Unauthorized")

        return await call_next(request)
