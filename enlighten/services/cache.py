from __future__ import annotations

from typing import Iterable, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import async_sessionmaker

from enlighten.db import crud
from enlighten.db.session import create_sessionmaker, dispose, init_db
from enlighten.exceptions import GlossaryFetchError

from .glossary import GlossaryEntry, GlossaryPayload
from .source import parse_payload


class GlossaryCache:
    """Local copy of the last fetched glossary, one row per language."""

    def __init__(self, session_maker: async_sessionmaker, namespace: str = "enlighten_words") -> None:
        self._sessionmaker = session_maker
        self.namespace = namespace

    def key(self, language: str) -> str:
        return f"{self.namespace}_{language}"

    async def load(self, language: str) -> Optional[list[GlossaryEntry]]:
        async with self._sessionmaker() as session:
            raw = await crud.get_cached_payload(session, self.key(language))
        if not raw:
            logger.debug("No cached glossary for '{}'", language)
            return None
        try:
            entries = parse_payload(raw, f"cache:{self.key(language)}")
        except GlossaryFetchError as exc:
            logger.warning("Ignoring corrupt cached glossary for '{}': {}", language, exc)
            return None
        logger.debug("Loaded {} cached glossary entries for '{}'", len(entries), language)
        return entries

    async def store(self, language: str, entries: Iterable[GlossaryEntry]) -> None:
        payload = GlossaryPayload(data=list(entries)).model_dump_json()
        async with self._sessionmaker() as session:
            await crud.put_cached_payload(session, self.key(language), payload)

    async def clear(self, language: str) -> bool:
        async with self._sessionmaker() as session:
            return await crud.delete_cached_payload(session, self.key(language))

    async def aclose(self) -> None:
        await dispose(self._sessionmaker)


async def open_cache(database_path: str, namespace: str = "enlighten_words") -> GlossaryCache:
    session_maker = create_sessionmaker(database_path)
    await init_db(session_maker)
    return GlossaryCache(session_maker, namespace)
