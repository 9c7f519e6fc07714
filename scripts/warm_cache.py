from __future__ import annotations

import asyncio
import sys

from loguru import logger

from config import get_settings
from enlighten.services.cache import open_cache
from enlighten.services.source import build_source


async def main(language: str | None = None) -> None:
    settings = get_settings()
    language = (language or settings.language).lower()
    if not settings.cache_path:
        logger.error("ENLIGHTEN_CACHE_PATH is empty; nothing to warm.")
        return
    source = build_source(settings)
    cache = await open_cache(settings.cache_path, settings.cache_namespace)
    try:
        entries = await source.fetch(language)
        await cache.store(language, entries)
        logger.info("Cached {} entries under '{}'", len(entries), cache.key(language))
    finally:
        await source.aclose()
        await cache.aclose()


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else None))
