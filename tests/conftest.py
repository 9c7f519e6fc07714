from __future__ import annotations

import pytest

from enlighten.services.glossary import GlossaryEntry, GlossaryStore

SAMPLE = [
    {"id": 38, "title": "Asexual", "matches": ["asexual", "asexuality"], "text": "Not sexually attracted to others."},
    {"id": 54, "title": "Gender", "matches": ["gender"], "text": "Socially constructed roles."},
    {"id": 69, "title": "Age", "matches": ["age"], "text": "Time lived."},
    {"id": 70, "title": "Heterosexual", "matches": ["heterosexual"], "text": "Attracted to another gender."},
    {"id": 80, "title": "Ethnicity", "matches": ["ethnicity", "ethnic*"], "text": "Shared cultural identity."},
    {"id": 90, "title": "Intergender", "matches": ["intergender"], "text": "Between genders."},
]


def make_entries() -> list[GlossaryEntry]:
    return [GlossaryEntry(**item) for item in SAMPLE]


@pytest.fixture
def entries() -> list[GlossaryEntry]:
    return make_entries()


@pytest.fixture
def store(entries: list[GlossaryEntry]) -> GlossaryStore:
    glossary = GlossaryStore()
    glossary.replace(entries)
    return glossary
