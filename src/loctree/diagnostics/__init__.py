"""Diagnostic system for localisation errors and reported conditions.

Provides condition codes, structured diagnostics, message templates and
the exception hierarchy.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    ConfigurationError,
    KeyLookupError,
    LanguageNotFoundError,
    LocalisationError,
    MalformedDocumentError,
    MissingSourceError,
    MisuseError,
)
from .templates import ErrorTemplate

__all__ = [
    "ConfigurationError",
    "Diagnostic",
    "DiagnosticCode",
    "ErrorTemplate",
    "KeyLookupError",
    "LanguageNotFoundError",
    "LocalisationError",
    "MalformedDocumentError",
    "MissingSourceError",
    "MisuseError",
]
