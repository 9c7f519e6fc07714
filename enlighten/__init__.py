from __future__ import annotations

from .enlightener import Enlightener
from .exceptions import EnlightenError
from .services.formatting import INDEX_LINK
from .services.glossary import GlossaryEntry

__all__ = ["__version__", "Enlightener", "EnlightenError", "GlossaryEntry", "INDEX_LINK"]

__version__ = "0.1.0"
