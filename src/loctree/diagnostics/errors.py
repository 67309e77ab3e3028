"""Localisation exception hierarchy with structured diagnostics.

Internal layers (loaders, definitions parser, registry) raise these.
LocalisationService catches the recoverable ones at its public boundary
and degrades to marker strings unless strict mode is enabled.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic

__all__ = [
    "ConfigurationError",
    "KeyLookupError",
    "LanguageNotFoundError",
    "LocalisationError",
    "MalformedDocumentError",
    "MissingSourceError",
    "MisuseError",
]


class LocalisationError(Exception):
    """Base exception for all loctree errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize LocalisationError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class ConfigurationError(LocalisationError):
    """No usable language configuration.

    Raised when activating with no languages registered, or when the
    definitions document is not an object at all.
    """


class MissingSourceError(LocalisationError):
    """Referenced document file or folder does not exist.

    Raised by JsonDocumentLoader. Other loaders may raise the builtin
    FileNotFoundError instead; the registry treats both the same way.
    """


class MalformedDocumentError(LocalisationError):
    """Document failed to parse, is empty, or is not the expected shape."""


class LanguageNotFoundError(LocalisationError, LookupError):
    """Language index out of range or language code unknown."""


class KeyLookupError(LocalisationError, KeyError):
    """Key absent or variant index out of range (strict mode only).

    Attributes:
        marker: The marker string non-strict mode would have returned
    """

    def __init__(self, message: str | Diagnostic, marker: str) -> None:
        """Initialize KeyLookupError.

        Args:
            message: Error message string OR Diagnostic object
            marker: Fallback text for callers that still need something to show
        """
        super().__init__(message)
        self.marker = marker

    def __str__(self) -> str:
        # KeyError.__str__ reprs its argument; keep the formatted diagnostic.
        return str(self.args[0]) if self.args else ""


class MisuseError(LocalisationError):
    """API misuse reported in strict mode (e.g. resolve before activation)."""
