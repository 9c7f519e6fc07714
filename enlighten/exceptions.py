from __future__ import annotations

from typing import Optional


class EnlightenError(Exception):
    """Base exception for Enlighten-specific errors."""

    def __init__(self, message: str, *, detail: Optional[str] = None) -> None:
        super().__init__(message)
        self.detail = detail


class ConfigError(EnlightenError):
    """Raised when configuration is invalid or incomplete."""


class GlossaryFetchError(EnlightenError):
    """Raised when the glossary source cannot deliver a usable glossary."""


class GlossaryUnavailableError(EnlightenError):
    """Raised for glossary-dependent calls after loading has failed for good."""


class ElementNotFoundError(EnlightenError):
    """Raised when a host selector does not resolve to an element."""


class CallbackNotFoundError(EnlightenError):
    """Raised when a click is dispatched to an unregistered callback."""
