from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Optional

from loguru import logger

from enlighten.exceptions import CallbackNotFoundError

from .glossary import GlossaryEntry

PopupCallback = Callable[[int, str, str], Any]
Resolver = Callable[[int], Optional[GlossaryEntry]]

DEFAULT_POPUP = "_defaultPopup"
CALLBACK_NAME_PATTERN = re.compile(r"^[A-Za-z_$][\w$.]*$")


@dataclass(slots=True)
class PopupState:
    entry_id: int
    title: str
    text: str


class DefaultPopup:
    """Keeps track of the entry the default popup is showing."""

    def __init__(self) -> None:
        self.current: PopupState | None = None

    @property
    def visible(self) -> bool:
        return self.current is not None

    def show(self, entry_id: int, title: str, text: str) -> None:
        logger.debug("Showing popup for entry {}", entry_id)
        self.current = PopupState(entry_id=entry_id, title=title, text=text)

    def close(self) -> None:
        self.current = None


class ClickDispatcher:
    """Resolves marker clicks to the default popup or a registered callback.

    Markers carry ``function_name(id, "reference")``; the host wires that
    function to :meth:`dispatch`.
    """

    def __init__(self, resolve: Resolver, default_popup: PopupCallback, *, function_name: str = "enlightenPopup") -> None:
        if not CALLBACK_NAME_PATTERN.match(function_name):
            raise ValueError(f"Invalid click function name: {function_name!r}")
        self.function_name = function_name
        self._resolve = resolve
        self._default_popup = default_popup
        self._callbacks: dict[str, PopupCallback] = {}

    def register(self, name: str, callback: PopupCallback) -> None:
        self.reference(name)
        self._callbacks[name] = callback

    def unregister(self, name: str) -> None:
        self._callbacks.pop(name, None)

    def reference(self, method: str | None) -> str:
        if method is None:
            return DEFAULT_POPUP
        if not CALLBACK_NAME_PATTERN.match(method):
            raise ValueError(f"Invalid callback name: {method!r}")
        return method

    def dispatch(self, entry_id: int, method: str = DEFAULT_POPUP) -> Any:
        entry = self._resolve(entry_id)
        if entry is None:
            logger.warning("Click on unknown glossary entry {}", entry_id)
            return None
        if method == DEFAULT_POPUP:
            return self._default_popup(entry.id, entry.title, entry.text)
        callback = self._callbacks.get(method)
        if callback is None:
            raise CallbackNotFoundError(f"No callback registered as {method!r}")
        return callback(entry.id, entry.title, entry.text)
