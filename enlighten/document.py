from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from enlighten.exceptions import ElementNotFoundError


@dataclass(slots=True)
class Element:
    id: str | None = None
    classes: tuple[str, ...] = field(default_factory=tuple)
    html: str = ""


class MarkupDocument:
    """Minimal host page: elements addressed as ``#id`` or ``.class``."""

    def __init__(self) -> None:
        self._elements: list[Element] = []

    def add(self, html: str = "", *, id: str | None = None, classes: Iterable[str] = ()) -> Element:
        element = Element(id=id, classes=tuple(classes), html=html)
        self._elements.append(element)
        return element

    def select(self, ref: str) -> Element:
        if ref.startswith("#"):
            wanted = ref[1:]
            for element in self._elements:
                if element.id == wanted:
                    return element
        elif ref.startswith("."):
            wanted = ref[1:]
            for element in self._elements:
                if wanted in element.classes:
                    return element
        raise ElementNotFoundError(f"No element matches {ref!r}")

    def __iter__(self):
        return iter(self._elements)
