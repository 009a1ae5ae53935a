from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, func
from .models import Link
from typing import Any, Optional, Sequence

async def create_link(db: AsyncSession, link: Link) -> Link:
    db.add(link)
    await db.commit()
    await db.refresh(link)
    return link

async def get_link_by_code(db: AsyncSession, code: str) -> Optional[Link]:
    result = await db.execute(select(Link).where(Link.code == code))
    return result.scalar_one_or_none()

async def get_link_by_id(db: AsyncSession, link_id: int) -> Optional[Link]:
    result = await db.execute(select(Link).where(Link.id == link_id))
    return result.scalar_one_or_none()

async def list_links(db: AsyncSession, offset: int, limit: int) -> Sequence[Link]:
    result = await db.execute(
        select(Link)
        .where(Link.is_deleted.is_(False))
        .order_by(Link.created_at.desc(), Link.id.desc())
        .limit(limit)
        .offset(offset)
    )
    return result.scalars().all()

async def count_links(db: AsyncSession) -> int:
    result = await db.execute(
        select(func.count()).select_from(Link).where(Link.is_deleted.is_(False))
    )
    return result.scalar_one()

async def update_link(db: AsyncSession, link_id: int, values: dict[str, Any]) -> Optional[Link]:
    """Apply ``values`` to a live link and return the row as stored afterwards.

    The write and the re-read share one transaction. Deleted or unknown ids
    are left untouched; the re-read does not filter on ``is_deleted``.
    """
    await db.execute(
        update(Link)
        .where(Link.id == link_id, Link.is_deleted.is_(False))
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    result = await db.execute(
        select(Link).where(Link.id == link_id).execution_options(populate_existing=True)
    )
    link = result.scalar_one_or_none()
    await db.commit()
    return link

async def soft_delete_link(db: AsyncSession, link_id: int) -> bool:
    result = await db.execute(
        update(Link)
        .where(Link.id == link_id)
        .values(is_deleted=True)
    )
    await db.commit()
    return result.rowcount > 0
