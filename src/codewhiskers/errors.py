"""
Error taxonomy for codewhiskers.

codewhiskers/src/codewhiskers/errors.py
"""

from typing import Iterable

__all__ = [
    "CodeWhiskersError",
    "UnsupportedLanguageError",
    "ConfigurationError",
    "MalformedInputWarning",
]


class CodeWhiskersError(Exception):
    """Base class for errors raised by codewhiskers."""


class UnsupportedLanguageError(CodeWhiskersError, ValueError):
    """Raised when a language tag is not handled by the structural extractor."""

    def __init__(self, language: str, supported: Iterable[str] = ()):
        self.language = language
        self.supported = tuple(supported)
        message = f"Language '{language}' is not currently supported"
        if self.supported:
            message += f" (supported: {', '.join(self.supported)})"
        super().__init__(message)


class ConfigurationError(CodeWhiskersError):
    """Raised when [tool.codewhiskers] holds values that cannot be used."""


class MalformedInputWarning(UserWarning):
    """Source text matched no structural pattern at all.

    Non-fatal: extraction still returns an (empty) inventory.
    """
