import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..crud import count_links, list_links, soft_delete_link, update_link
from ..database import get_db
from ..schemas import LinkEnvelope, LinkOut, LinkPage, LinkUpdate, Ok
from ..utils import parse_number
from .public import read_json

logger = logging.getLogger(__name__)

# Authorization happens in AdminAuthMiddleware, ahead of routing
router = APIRouter(prefix="/api/admin")

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
# Largest value a SQLite INTEGER (and a Postgres BIGINT) holds
MAX_STORE_INT = 2**63 - 1

@router.get("/links", response_model=LinkPage)
async def list_short_links(
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    db: AsyncSession = Depends(get_db),
):
    page_num = max(1, parse_number(page, 1))
    size = min(MAX_PAGE_SIZE, max(1, parse_number(page_size, DEFAULT_PAGE_SIZE)))
    offset = min((page_num - 1) * size, MAX_STORE_INT)

    links = await list_links(db, offset=offset, limit=size)
    total = await count_links(db)

    return LinkPage(
        data=[LinkOut.model_validate(link) for link in links],
        page=page_num,
        page_size=size,
        total=total,
    )

# Anchored: "/links/12abc" is a miss, not id 12
@router.patch("/links/{link_id:int}", response_model=LinkEnvelope)
async def update_short_link(link_id: int, request: Request, db: AsyncSession = Depends(get_db)):
    changes = LinkUpdate.from_payload(await read_json(request))

    link = None
    if link_id <= MAX_STORE_INT:
        link = await update_link(db, link_id, changes.values())
    logger.info("Updated short link", extra={"link_id": link_id})

    return LinkEnvelope(data=LinkOut.model_validate(link) if link else None)

@router.delete("/links/{link_id:int}", response_model=Ok)
async def delete_short_link(link_id: int, db: AsyncSession = Depends(get_db)):
    deleted = link_id <= MAX_STORE_INT and await soft_delete_link(db, link_id)
    logger.info("Soft-deleted short link" if deleted else "Delete matched no link", extra={"link_id": link_id})
    return Ok()
