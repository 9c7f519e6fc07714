from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from .patterns import CompiledPattern, compile_pattern


class GlossaryEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    matches: tuple[str, ...] = Field(default_factory=tuple)
    text: str = ""


class GlossaryPayload(BaseModel):
    data: list[GlossaryEntry] = Field(default_factory=list)


@dataclass(frozen=True, slots=True)
class MatchRule:
    pattern: CompiledPattern
    entry: GlossaryEntry


def compile_rules(entries: Iterable[GlossaryEntry]) -> list[MatchRule]:
    """Cross every entry with its patterns, longest core first.

    The sort is stable, so rules with equally long cores keep glossary order.
    """
    rules = [MatchRule(pattern=compile_pattern(raw), entry=entry) for entry in entries for raw in entry.matches]
    rules.sort(key=lambda rule: len(rule.pattern.core), reverse=True)
    return rules


class GlossaryStore:
    """Entries loaded from the glossary source plus locally added ones.

    Added entries get ids -1, -2, ... and survive a wholesale replacement of
    the loaded entries.
    """

    def __init__(self) -> None:
        self._entries: list[GlossaryEntry] = []
        self._extra: list[GlossaryEntry] = []
        self._by_id: dict[int, GlossaryEntry] = {}
        self._rules: list[MatchRule] = []

    @property
    def loaded(self) -> bool:
        return bool(self._entries)

    @property
    def rules(self) -> Sequence[MatchRule]:
        return self._rules

    @property
    def entries(self) -> list[GlossaryEntry]:
        return self._entries + self._extra

    def __len__(self) -> int:
        return len(self._entries) + len(self._extra)

    def replace(self, entries: Iterable[GlossaryEntry]) -> None:
        unique: list[GlossaryEntry] = []
        seen: set[int] = set()
        for entry in entries:
            if entry.id in seen:
                logger.warning("Ignoring duplicate glossary id {} ('{}')", entry.id, entry.title)
                continue
            seen.add(entry.id)
            unique.append(entry)
        self._entries = unique
        self._rebuild()

    def add(self, title: str, matches: Iterable[str], text: str = "") -> GlossaryEntry:
        entry = GlossaryEntry(id=-len(self._extra) - 1, title=title, matches=tuple(matches), text=text)
        self._extra.append(entry)
        self._rebuild()
        return entry

    def get(self, entry_id: int) -> Optional[GlossaryEntry]:
        return self._by_id.get(entry_id)

    def first_rule_for(self, keyword: str) -> Optional[MatchRule]:
        wanted = keyword.lower()
        for rule in self._rules:
            if rule.pattern.core.lower() == wanted:
                return rule
        return None

    def _rebuild(self) -> None:
        combined = self.entries
        self._by_id = {entry.id: entry for entry in combined}
        self._rules = compile_rules(combined)
