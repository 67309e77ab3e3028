"""Locale utilities backed by Babel.

Language codes in definitions documents are short BCP-47 tags ("en",
"pt-BR"). Babel supplies canonical parsing and the human-readable
language name used when a definitions entry omits "name".

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "language_display_name",
    "normalize_locale",
]

logger = logging.getLogger(__name__)


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    Example:
        >>> normalize_locale("pt-BR")
        'pt_BR'
        >>> normalize_locale("en")
        'en'
    """
    return locale_code.strip().replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def language_display_name(locale_code: str, default: str | None = None) -> str:
    """Human-readable name of a language in that language.

    Args:
        locale_code: Language code, e.g. "de" or "pt-BR"
        default: Returned when Babel does not know the code
            (defaults to the code itself)

    Returns:
        Display name such as "Deutsch", or the fallback

    Example:
        >>> language_display_name("de")
        'Deutsch'
        >>> language_display_name("xx-unknown", default="Custom")
        'Custom'
    """
    # Lazy import: see get_babel_locale
    from babel.core import UnknownLocaleError  # noqa: PLC0415

    fallback = default if default is not None else locale_code
    try:
        locale = get_babel_locale(locale_code)
    except (UnknownLocaleError, ValueError, TypeError) as e:
        logger.debug("No Babel locale for '%s': %s", locale_code, e)
        return fallback
    name = locale.get_display_name(locale)
    return name if name else fallback
