from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Iterator

WILDCARD = "*"

# Characters that count as part of a word when checking match boundaries.
LETTERS = "a-zA-ZåäöÅÄÖ"
LETTER_RUN = f"[{LETTERS}]*"


@dataclass(frozen=True, slots=True)
class Occurrence:
    start: int
    end: int
    text: str
    accepted: bool


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """A match pattern reduced to its literal core and boundary flags.

    ``loose_start``/``loose_end`` allow letters to run on before/after the
    core. An occurrence is the whole letter run around a hit of the core, so
    the boundary checks are plain prefix/suffix tests on that run.
    """

    raw: str
    core: str
    loose_start: bool
    loose_end: bool
    regex: re.Pattern[str] = field(repr=False, compare=False)
    word_regex: re.Pattern[str] = field(repr=False, compare=False)

    def accepts(self, word: str) -> bool:
        if not word:
            return False
        folded = word.lower()
        core = self.core.lower()
        if not self.loose_start and not folded.startswith(core):
            return False
        if not self.loose_end and not folded.endswith(core):
            return False
        if not (self.loose_start or self.loose_end):
            return folded == core
        return True

    def occurrences(self, text: str, *, markup: bool = True) -> Iterator[Occurrence]:
        """Yield every candidate occurrence in ``text``, accepted or not.

        In ``markup`` a run that is directly followed by ``>`` sits inside a
        tag and is never accepted. Plain text has no tags to guard against.
        """
        regex = self.regex if markup else self.word_regex
        for match in regex.finditer(text):
            word = match.group("word")
            accepted = word is not None and self.accepts(word)
            yield Occurrence(match.start(), match.end(), match.group(0), accepted)


@lru_cache(maxsize=4096)
def compile_pattern(raw: str) -> CompiledPattern:
    loose_start = raw.startswith(WILDCARD)
    loose_end = raw.endswith(WILDCARD)
    core = raw.replace(WILDCARD, "")
    escaped = re.escape(core)
    regex = re.compile(
        rf"(?P<tag>{LETTER_RUN}{escaped}{LETTER_RUN}.?>)|(?P<word>{LETTER_RUN}{escaped}{LETTER_RUN})",
        re.IGNORECASE,
    )
    word_regex = re.compile(rf"(?P<word>{LETTER_RUN}{escaped}{LETTER_RUN})", re.IGNORECASE)
    return CompiledPattern(
        raw=raw, core=core, loose_start=loose_start, loose_end=loose_end, regex=regex, word_regex=word_regex
    )
