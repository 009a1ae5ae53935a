from typing import Any, Optional
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

class APIError(Exception):
    """Raised by handlers to answer with ``{"error": message}``."""

    def __init__(self, status_code: int, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.details = details

def error_response(status_code: int, message: str, **extra: Any) -> JSONResponse:
    return JSONResponse({"error": message, **extra}, status_code=status_code)

def not_found() -> JSONResponse:
    return error_response(404, "Not found")

async def api_error_handler(request: Request, exc: APIError):
    if exc.details is not None:
        return error_response(exc.status_code, exc.message, details=exc.details)
    return error_response(exc.status_code, exc.message)

async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Unknown paths and unsupported methods both read as a miss
    if exc.status_code in (404, 405):
        return not_found()
    return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code, headers=exc.headers)

def register_error_handlers(app: FastAPI):
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
