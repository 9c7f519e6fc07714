from __future__ import annotations

from pathlib import Path

from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine


def create_sessionmaker(database_path: str) -> async_sessionmaker:
    Path(database_path).parent.mkdir(parents=True, exist_ok=True)
    url = f"sqlite+aiosqlite:///{database_path}"
    engine = create_async_engine(url, future=True, echo=False)
    return async_sessionmaker(engine, expire_on_commit=False)


async def init_db(session_maker: async_sessionmaker) -> None:
    from . import models  # noqa: F401

    engine = session_maker.kw["bind"]
    async with engine.begin() as conn:
        await conn.run_sync(models.Base.metadata.create_all)


async def dispose(session_maker: async_sessionmaker) -> None:
    engine = session_maker.kw.get("bind")
    if engine is not None:
        await engine.dispose()
