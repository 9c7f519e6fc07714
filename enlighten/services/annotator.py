from __future__ import annotations

from typing import AbstractSet, Optional

from loguru import logger

from .dispatch import ClickDispatcher
from .formatting import INDEX_LINK, render_marker
from .glossary import GlossaryStore, MatchRule
from .scanner import find_entry_ids
from .spans import FORCED_TAG_PATTERN, SpanType, find_protected, split_protected


class Annotator:
    """Rewrites markup so glossary words become clickable markers.

    Rules are applied longest core first. Each rule only touches text outside
    anchors, ignore regions, forced tags and tags, and markers are anchors, so
    text claimed by an earlier rule is out of reach for later ones.
    """

    def __init__(self, store: GlossaryStore, dispatcher: ClickDispatcher, *, anchor_prefix: str = "ENLIGHT_WORD") -> None:
        self.store = store
        self.dispatcher = dispatcher
        self.anchor_prefix = anchor_prefix

    def annotate(
        self,
        text: str,
        multiple: bool = True,
        method: Optional[str] = None,
        exclude: AbstractSet[int] = frozenset(),
    ) -> str:
        if method != INDEX_LINK:
            method = self.dispatcher.reference(method)
        candidates = find_entry_ids(text, self.store.rules, exclude) if text else set()
        wrapped: set[int] = set()
        for rule in self.store.rules:
            if rule.entry.id not in candidates:
                continue
            text = self._apply_rule(text, rule, multiple, method, wrapped)
        return self._apply_forced(text, method, exclude)

    def _marker(self, entry_id: int, shown: str, method: str) -> str:
        return render_marker(
            entry_id,
            shown,
            method,
            anchor_prefix=self.anchor_prefix,
            popup_function=self.dispatcher.function_name,
        )

    def _apply_rule(self, text: str, rule: MatchRule, multiple: bool, method: str, wrapped: set[int]) -> str:
        entry_id = rule.entry.id
        builder: list[str] = []
        for chunk, protected in split_protected(text):
            if protected:
                builder.append(chunk)
                continue
            cursor = 0
            for occurrence in rule.pattern.occurrences(chunk):
                if not occurrence.accepted:
                    continue
                if not multiple and entry_id in wrapped:
                    break
                builder.append(chunk[cursor:occurrence.start])
                builder.append(self._marker(entry_id, occurrence.text, method))
                cursor = occurrence.end
                wrapped.add(entry_id)
            builder.append(chunk[cursor:])
        return "".join(builder)

    def _apply_forced(self, text: str, method: str, exclude: AbstractSet[int]) -> str:
        builder: list[str] = []
        cursor = 0
        for span in find_protected(text):
            if span.type is not SpanType.FORCED:
                continue
            match = FORCED_TAG_PATTERN.fullmatch(span.original)
            if match is None:
                continue
            keyword, shown = match.group(1), match.group(2)
            rule = self.store.first_rule_for(keyword) if keyword else None
            if rule is None:
                logger.debug("No glossary word for forced keyword '{}'", keyword)
                continue
            if rule.entry.id in exclude:
                continue
            builder.append(text[cursor:span.start])
            builder.append(self._marker(rule.entry.id, shown, method))
            cursor = span.end
        builder.append(text[cursor:])
        return "".join(builder)
