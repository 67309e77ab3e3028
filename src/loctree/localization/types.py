"""Type aliases for the localization domain.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "DocumentPath",
    "FlatKey",
    "LanguageCode",
    "LanguageTag",
]

type LanguageTag = str
"""Registry identity of a language (e.g., 'English', 'German')."""

type LanguageCode = str
"""Short language code (e.g., 'en', 'pt-BR'); target of switch-by-code."""

type FlatKey = str
"""Slash-joined lookup key (e.g., 'ui/menu/play')."""

type DocumentPath = str
"""File or folder reference as written in a definitions document."""
