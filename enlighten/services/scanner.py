from __future__ import annotations

from typing import AbstractSet, Iterable

from .glossary import MatchRule
from .spans import visible_text

# Stands in for claimed text so shorter patterns cannot match inside it.
MASK = "\x00"


def find_entry_ids(markup: str, rules: Iterable[MatchRule], exclude: AbstractSet[int] = frozenset()) -> set[int]:
    """Ids of the glossary entries that occur in ``markup``.

    Empty input selects every entry that is not excluded. Rules run longest
    core first and each accepted occurrence is masked out, so a shorter
    pattern never counts text already claimed by a longer one.
    """
    ids: set[int] = set()
    if not markup:
        for rule in rules:
            if rule.entry.id not in exclude:
                ids.add(rule.entry.id)
        return ids

    text = visible_text(markup)
    for rule in rules:
        entry_id = rule.entry.id
        if entry_id in exclude:
            continue
        pieces: list[str] = []
        cursor = 0
        for occurrence in rule.pattern.occurrences(text, markup=False):
            if not occurrence.accepted:
                continue
            ids.add(entry_id)
            pieces.append(text[cursor:occurrence.start])
            pieces.append(MASK * (occurrence.end - occurrence.start))
            cursor = occurrence.end
        if pieces:
            pieces.append(text[cursor:])
            text = "".join(pieces)
    return ids
