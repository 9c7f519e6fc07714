from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import CachedGlossary


async def get_cached_payload(session: AsyncSession, key: str) -> str | None:
    result = await session.execute(select(CachedGlossary).where(CachedGlossary.key == key))
    row = result.scalar_one_or_none()
    return row.payload if row is not None else None


async def put_cached_payload(session: AsyncSession, key: str, payload: str) -> CachedGlossary:
    result = await session.execute(select(CachedGlossary).where(CachedGlossary.key == key))
    row = result.scalar_one_or_none()
    if row is None:
        row = CachedGlossary(key=key, payload=payload)
        session.add(row)
    else:
        row.payload = payload
        row.updated_at = datetime.utcnow()
    await session.commit()
    return row


async def delete_cached_payload(session: AsyncSession, key: str) -> bool:
    row = await session.get(CachedGlossary, key)
    if row is None:
        return False
    await session.delete(row)
    await session.commit()
    return True
