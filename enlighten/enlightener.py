from __future__ import annotations

import asyncio
from functools import partial
from typing import Any, Callable, Iterable, Optional

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from config import EnlightenSettings, get_settings

from .document import MarkupDocument
from .exceptions import ElementNotFoundError, GlossaryFetchError
from .services.annotator import Annotator
from .services.cache import GlossaryCache, open_cache
from .services.dispatch import ClickDispatcher, DefaultPopup, PopupCallback
from .services.glossary import GlossaryEntry, GlossaryStore
from .services.readiness import ReadinessGate
from .services.scanner import find_entry_ids
from .services.source import GlossarySource, build_source
from .services.views import build_index, build_wordlist

FailureCallback = Callable[[GlossaryFetchError], Any]


class Enlightener:
    """Glossary annotation for markup held by a host document.

    Call :meth:`start` (or use ``async with``) to load the cached glossary and
    begin the refresh from the glossary source. Element operations issued
    before the glossary is usable are deferred and replayed in order.
    """

    def __init__(
        self,
        settings: Optional[EnlightenSettings] = None,
        *,
        document: Optional[MarkupDocument] = None,
        source: Optional[GlossarySource] = None,
        cache: Optional[GlossaryCache] = None,
        popup: Optional[DefaultPopup] = None,
        on_failure: Optional[FailureCallback] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.language = self.settings.language
        self.exclude: set[int] = set(self.settings.exclude)
        self.store = GlossaryStore()
        self.document = document or MarkupDocument()
        self.popup = popup or DefaultPopup()
        self.dispatcher = ClickDispatcher(
            self.store.get, self.popup.show, function_name=self.settings.popup_function
        )
        self.annotator = Annotator(self.store, self.dispatcher, anchor_prefix=self.settings.anchor_prefix)
        self._source = source or build_source(self.settings)
        self._cache = cache
        self._owns_cache = False
        self._on_failure = on_failure
        self._gate = ReadinessGate()
        self._refresh_task: Optional[asyncio.Task] = None
        self.refreshed = False

    async def __aenter__(self) -> "Enlightener":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    @property
    def ready(self) -> bool:
        return self._gate.is_open

    async def start(self) -> None:
        if self._refresh_task is not None:
            return
        if self._cache is None and self.settings.cache_path:
            self._cache = await open_cache(self.settings.cache_path, self.settings.cache_namespace)
            self._owns_cache = True
        if self._cache is not None:
            cached = await self._cache.load(self.language)
            if cached:
                self.store.replace(cached)
                if self.settings.use_local_cache:
                    logger.info("Using {} cached glossary entries for '{}'", len(cached), self.language)
                    self._gate.open()
        self._refresh_task = asyncio.create_task(self.refresh(), name="enlighten-refresh")

    async def refresh(self) -> None:
        language = self.language
        try:
            entries = await self._source.fetch(language)
        except GlossaryFetchError as exc:
            self._handle_failure(exc)
            return
        except Exception as exc:
            logger.exception("Glossary source {} failed unexpectedly", self._source.name)
            self._handle_failure(GlossaryFetchError(f"Glossary source {self._source.name} failed", detail=repr(exc)))
            return
        if language != self.language:
            logger.debug("Discarding glossary for '{}'; language is now '{}'", language, self.language)
            return
        if not entries:
            self._handle_failure(GlossaryFetchError(f"Glossary for '{language}' is empty"))
            return
        self.store.replace(entries)
        if self._cache is not None:
            try:
                await self._cache.store(language, entries)
            except SQLAlchemyError as exc:
                logger.warning("Could not cache glossary for '{}': {}", language, exc)
        self.refreshed = True
        logger.info("Loaded {} glossary entries for '{}'", len(entries), language)
        self._gate.open()

    def _handle_failure(self, exc: GlossaryFetchError) -> None:
        logger.error("Glossary refresh failed: {}", exc)
        if self._gate.is_open:
            return
        if self.store.loaded:
            logger.warning("Continuing with the cached glossary for '{}'", self.language)
            self._gate.open()
            return
        self._gate.fail(exc)
        if self._on_failure is not None:
            self._on_failure(exc)

    async def wait_ready(self, timeout: Optional[float] = None) -> None:
        if timeout is None:
            timeout = self.settings.ready_timeout
        await self._gate.wait(timeout)

    async def wait_refreshed(self) -> None:
        if self._refresh_task is not None:
            await self._refresh_task

    async def close(self) -> None:
        if self._refresh_task is not None and not self._refresh_task.done():
            self._refresh_task.cancel()
            try:
                await self._refresh_task
            except asyncio.CancelledError:
                pass
        await self._source.aclose()
        if self._cache is not None and self._owns_cache:
            await self._cache.aclose()

    def configure(self, *, language: Optional[str] = None, exclude: Optional[Iterable[int]] = None) -> None:
        if exclude is not None:
            self.exclude = set(exclude)
        if language is not None and language != self.language:
            self.language = language
            if self._refresh_task is not None:
                if not self._refresh_task.done():
                    self._refresh_task.cancel()
                self._refresh_task = asyncio.create_task(self.refresh(), name="enlighten-refresh")

    def register_callback(self, name: str, callback: PopupCallback) -> None:
        self.dispatcher.register(name, callback)

    def on_click(self, entry_id: int, method: Optional[str] = None) -> Any:
        return self.dispatcher.dispatch(entry_id, self.dispatcher.reference(method))

    def get_word(self, entry_id: int) -> Optional[GlossaryEntry]:
        return self.store.get(entry_id)

    def find_entry_ids(self, text: str = "") -> set[int]:
        if not text:
            return {entry.id for entry in self.store.entries if entry.id not in self.exclude}
        return find_entry_ids(text, self.store.rules, self.exclude)

    def parse_text(self, text: str, multiple: Optional[bool] = True, method: Optional[str] = None) -> str:
        return self.annotator.annotate(text, multiple is not False, method, self.exclude)

    def build_index(self, text: str = "", linked: bool = True) -> str:
        return build_index(self._entries_in(text), linked=linked, anchor_prefix=self.settings.anchor_prefix)

    def build_wordlist(self, text: str = "", linked: bool = True) -> str:
        return build_wordlist(self._entries_in(text), linked=linked, anchor_prefix=self.settings.anchor_prefix)

    def _entries_in(self, text: str) -> list[GlossaryEntry]:
        entries = (self.store.get(entry_id) for entry_id in self.find_entry_ids(text))
        return [entry for entry in entries if entry is not None]

    def add_word(self, title: str, matches: Iterable[str], text: str = "") -> Optional[int]:
        matches = tuple(matches)
        if not self._gate.admit(partial(self._add_word, title, matches, text)):
            return None
        return self._add_word(title, matches, text)

    def _add_word(self, title: str, matches: tuple[str, ...], text: str) -> int:
        return self.store.add(title, matches, text).id

    def parse_element(self, source_ref: str, multiple: Optional[bool] = True, method: Optional[str] = None) -> None:
        if not self._gate.admit(partial(self._parse_element, source_ref, multiple, method)):
            return
        self._parse_element(source_ref, multiple, method)

    def _parse_element(self, source_ref: str, multiple: Optional[bool], method: Optional[str]) -> None:
        element = self.document.select(source_ref)
        element.html = self.parse_text(element.html, multiple, method)

    def insert_index(
        self,
        source_ref: str = "",
        target_ref: Optional[str] = None,
        prepend: Optional[bool] = True,
        linked: bool = True,
    ) -> None:
        if not self._gate.admit(partial(self._insert_index, source_ref, target_ref, prepend, linked)):
            return
        self._insert_index(source_ref, target_ref, prepend, linked)

    def _insert_index(self, source_ref: str, target_ref: Optional[str], prepend: Optional[bool], linked: bool) -> None:
        source, target = self._resolve_pair(source_ref, target_ref)
        index = self.build_index(source, linked)
        target.html = index + target.html if prepend else index

    def insert_wordlist(
        self,
        source_ref: str = "",
        target_ref: Optional[str] = None,
        append: Optional[bool] = True,
    ) -> None:
        if not self._gate.admit(partial(self._insert_wordlist, source_ref, target_ref, append)):
            return
        self._insert_wordlist(source_ref, target_ref, append)

    def _insert_wordlist(self, source_ref: str, target_ref: Optional[str], append: Optional[bool]) -> None:
        source, target = self._resolve_pair(source_ref, target_ref)
        wordlist = self.build_wordlist(source)
        target.html = target.html + wordlist if append else wordlist

    def _resolve_pair(self, source_ref: str, target_ref: Optional[str]):
        target_ref = target_ref or source_ref
        if not target_ref:
            raise ElementNotFoundError("No target element given")
        source = self.document.select(source_ref).html if source_ref else ""
        return source, self.document.select(target_ref)
