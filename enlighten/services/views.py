from __future__ import annotations

from typing import Iterable

from .formatting import alphabetize
from .glossary import GlossaryEntry


def build_index(entries: Iterable[GlossaryEntry], *, linked: bool = True, anchor_prefix: str) -> str:
    bullets = ""
    for entry in alphabetize(list(entries)):
        if linked:
            bullets += f'<li><a href="#{anchor_prefix}{entry.id}">{entry.title}</a></li>\n'
        else:
            bullets += f"<li>{entry.title}</li>\n"
    return f"""
      <div class="enlighten-index">
        <ol>
          {bullets}
        </ol>
      </div>
    """


def build_wordlist(entries: Iterable[GlossaryEntry], *, linked: bool = True, anchor_prefix: str) -> str:
    html = ""
    for entry in alphabetize(list(entries)):
        html += '<div class="enlighten-word">'
        if linked:
            html += f'<a name="{anchor_prefix}{entry.id}"></a>'
        html += f"""<h3>{entry.title}</h3>
             <span>{entry.text}</span>
           </div>"""
    return f"""<div class="enlighten-word-explainations">
           {html}
       </div>
     """
