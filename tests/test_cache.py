from __future__ import annotations

import pytest

from enlighten.db import crud
from enlighten.services.cache import open_cache

from conftest import make_entries


@pytest.mark.asyncio
async def test_store_and_load(tmp_path) -> None:
    cache = await open_cache(str(tmp_path / "cache.db"))
    try:
        assert cache.key("sv") == "enlighten_words_sv"
        assert await cache.load("sv") is None
        await cache.store("sv", make_entries())
        await cache.store("sv", make_entries()[:2])
        loaded = await cache.load("sv")
        assert [entry.id for entry in loaded] == [38, 54]
        assert await cache.load("en") is None
    finally:
        await cache.aclose()


@pytest.mark.asyncio
async def test_corrupt_payload_counts_as_missing(tmp_path) -> None:
    cache = await open_cache(str(tmp_path / "cache.db"), namespace="custom")
    try:
        async with cache._sessionmaker() as session:
            await crud.put_cached_payload(session, "custom_en", "{not json")
        assert await cache.load("en") is None
    finally:
        await cache.aclose()


@pytest.mark.asyncio
async def test_clear(tmp_path) -> None:
    cache = await open_cache(str(tmp_path / "nested" / "cache.db"))
    try:
        await cache.store("en", make_entries())
        assert await cache.clear("en") is True
        assert await cache.clear("en") is False
        assert await cache.load("en") is None
    finally:
        await cache.aclose()
