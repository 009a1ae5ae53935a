import logging
import re
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import PlainTextResponse, Response
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..crud import create_link, get_link_by_code
from ..database import get_db
from ..errors import APIError
from ..models import Link
from ..schemas import Health, LinkCreate, LinkCreated
from ..utils import generate_random_code

logger = logging.getLogger(__name__)

router = APIRouter()

CODE_PATTERN = re.compile(r"\w{4,32}", re.ASCII)

async def read_json(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        raise APIError(400, "Invalid JSON")

def store_failure(exc: Exception) -> APIError:
    return APIError(500, "Failed to store short link", details=str(exc))

@router.get("/api/health", response_model=Health)
async def health():
    timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return Health(ok=True, timestamp=timestamp)

@router.post("/api/create", response_model=LinkCreated)
async def create_short_link(request: Request, db: AsyncSession = Depends(get_db)):
    link_in = LinkCreate.from_payload(await read_json(request))
    settings = request.app.state.settings

    # Codes are random, so a unique-constraint hit is retried with a fresh one
    last_error = None
    for _ in range(max(1, settings.CODE_MAX_ATTEMPTS)):
        code = generate_random_code(settings.CODE_LENGTH)
        try:
            link = await create_link(db, Link(code=code, target_url=link_in.url, note=link_in.note))
            break
        except IntegrityError as e:
            await db.rollback()
            last_error = e
            logger.warning("Short code collision", extra={"code": code})
        except SQLAlchemyError as e:
            await db.rollback()
            logger.exception("Failed to store short link")
            raise store_failure(e)
    else:
        logger.error("Gave up generating a unique short code", exc_info=last_error)
        raise store_failure(last_error)

    logger.info("Created short link", extra={"link_id": link.id, "code": link.code})
    return LinkCreated(code=link.code)

@router.get("/", response_class=PlainTextResponse)
async def root():
    return PlainTextResponse("OK")

@router.get("/{code}")
async def redirect_to_target(code: str, db: AsyncSession = Depends(get_db)):
    if not CODE_PATTERN.fullmatch(code):
        raise HTTPException(status_code=404)

    link = await get_link_by_code(db, code)
    if not link or link.is_deleted or not link.is_active:
        return PlainTextResponse("Short link not found", status_code=404)

    # RedirectResponse would re-quote the URL; the stored value goes out as is
    return Response(status_code=302, headers={"Location": link.target_url})
