from __future__ import annotations

import unicodedata

from .glossary import GlossaryEntry

CLICKABLE_CLASS = "enlighten-clickable"
INDEX_LINK = "index"


def render_marker(entry_id: int, shown: str, method: str, *, anchor_prefix: str, popup_function: str) -> str:
    """Wrap ``shown`` in a clickable marker for ``entry_id``.

    ``method`` is either ``"index"`` (link to the word list anchor) or the
    callback reference handed to ``popup_function`` on click.
    """
    if method == INDEX_LINK:
        return f"<a href='#{anchor_prefix}{entry_id}' class='{CLICKABLE_CLASS}'>{shown}</a>"
    return f"<a onClick='{popup_function}({entry_id},\"{method}\")' class='{CLICKABLE_CLASS}'>{shown}</a>"


def collation_key(title: str) -> tuple[str, str]:
    decomposed = unicodedata.normalize("NFKD", title)
    base = "".join(char for char in decomposed if not unicodedata.combining(char))
    return base.casefold(), title


def alphabetize(entries: list[GlossaryEntry]) -> list[GlossaryEntry]:
    return sorted(entries, key=lambda entry: collation_key(entry.title))
