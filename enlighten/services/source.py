from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

import httpx
from loguru import logger
from pydantic import ValidationError

from config import EnlightenSettings
from enlighten.exceptions import ConfigError, GlossaryFetchError

from .glossary import GlossaryEntry, GlossaryPayload

LANGUAGE_PLACEHOLDER = "{language}"


def parse_payload(raw: str | bytes, origin: str) -> list[GlossaryEntry]:
    try:
        return GlossaryPayload.model_validate_json(raw).data
    except ValidationError as exc:
        raise GlossaryFetchError(f"Malformed glossary from {origin}", detail=str(exc)) from exc


class GlossarySource(ABC):
    name: str = "source"

    @abstractmethod
    async def fetch(self, language: str) -> list[GlossaryEntry]:
        raise NotImplementedError

    async def aclose(self) -> None:
        return None


class HttpGlossarySource(GlossarySource):
    name = "http"

    def __init__(self, url_template: str, *, timeout: float = 20.0, client: httpx.AsyncClient | None = None) -> None:
        self.url_template = url_template
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def fetch(self, language: str) -> list[GlossaryEntry]:
        url = self.url_template.replace(LANGUAGE_PLACEHOLDER, language)
        logger.debug("Fetching glossary from {}", url)
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as exc:
            raise GlossaryFetchError(f"Network error fetching {url}", detail=str(exc)) from exc
        if not response.is_success:
            raise GlossaryFetchError(f"Glossary source returned {response.status_code}", detail=response.text)
        return parse_payload(response.content, url)

    async def aclose(self) -> None:
        await self._client.aclose()


class FileGlossarySource(GlossarySource):
    """Reads the glossary document from a static JSON file."""

    name = "file"

    def __init__(self, path_template: str) -> None:
        self.path_template = path_template

    async def fetch(self, language: str) -> list[GlossaryEntry]:
        path = Path(self.path_template.replace(LANGUAGE_PLACEHOLDER, language))
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise GlossaryFetchError(f"Cannot read glossary file {path}", detail=str(exc)) from exc
        return parse_payload(raw, str(path))


def build_source(settings: EnlightenSettings) -> GlossarySource:
    url = settings.source_url
    if url.startswith(("http://", "https://")):
        return HttpGlossarySource(url, timeout=settings.request_timeout)
    if url.startswith("file://"):
        return FileGlossarySource(url.removeprefix("file://"))
    if "://" in url:
        raise ConfigError(f"Unsupported glossary source scheme: {url}")
    return FileGlossarySource(url)
