from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import List


class SpanType(Enum):
    IGNORE = auto()
    ANCHOR = auto()
    FORCED = auto()
    TAG = auto()


@dataclass(slots=True)
class Span:
    type: SpanType
    start: int
    end: int
    original: str


IGNORE_PATTERN = re.compile(r"<en-ignore\b[^>]*>.*?</en-ignore\s*>", re.IGNORECASE | re.DOTALL)
ANCHOR_PATTERN = re.compile(r"<a\b[^>]*>.*?</a\s*>", re.IGNORECASE | re.DOTALL)
FORCED_PATTERN = re.compile(r"<enlighten\b([^>]*)>(.*?)</enlighten\s*>", re.IGNORECASE | re.DOTALL)
FORCED_TAG_PATTERN = re.compile(
    r"<enlighten data-word=['\"](.*?)['\"]>(.*?)</enlighten>", re.IGNORECASE | re.DOTALL
)
TAG_PATTERN = re.compile(r"<[^<>]*>")
PROTECTED_PATTERN = re.compile(
    "|".join(
        f"(?P<{span_type.name}>{pattern.pattern})"
        for pattern, span_type in (
            (IGNORE_PATTERN, SpanType.IGNORE),
            (ANCHOR_PATTERN, SpanType.ANCHOR),
            (FORCED_PATTERN, SpanType.FORCED),
            (TAG_PATTERN, SpanType.TAG),
        )
    ),
    re.IGNORECASE | re.DOTALL,
)
DATA_WORD_PATTERN = re.compile(r"data-word\s*=\s*(['\"])(.*?)\1", re.IGNORECASE | re.DOTALL)


def forced_keyword(attributes: str) -> str:
    """Keyword of a forced tag: ``data-word="X"`` or the bare ``<enlighten X>`` form."""
    found = DATA_WORD_PATTERN.search(attributes)
    if found:
        return found.group(2)
    return attributes.strip()


def visible_text(markup: str) -> str:
    """Text a reader would scan for glossary words.

    Ignore regions vanish, forced tags are reduced to their keyword and all
    remaining tags are dropped.
    """
    text = IGNORE_PATTERN.sub("", markup)
    text = FORCED_PATTERN.sub(lambda match: forced_keyword(match.group(1)), text)
    return TAG_PATTERN.sub("", text)


def find_protected(markup: str) -> list[Span]:
    """Spans of ``markup`` that must be copied through untouched when annotating.

    Spans are taken leftmost first, so a region nested in an enclosing one
    stays part of it.
    """
    spans: List[Span] = []
    for match in PROTECTED_PATTERN.finditer(markup):
        start, end = match.span()
        if start == end:
            continue
        span_type = next(kind for kind in SpanType if match.group(kind.name) is not None)
        spans.append(Span(span_type, start, end, match.group(0)))
    return spans


def split_protected(markup: str) -> list[tuple[str, bool]]:
    """Cut ``markup`` into ``(chunk, protected)`` pieces, in order."""
    pieces: list[tuple[str, bool]] = []
    cursor = 0
    for span in find_protected(markup):
        if span.start > cursor:
            pieces.append((markup[cursor:span.start], False))
        pieces.append((span.original, True))
        cursor = span.end
    if cursor < len(markup):
        pieces.append((markup[cursor:], False))
    return pieces
