"""Locale utilities for BCP-47 to POSIX conversion and CLDR lookups.

Centralizes locale format normalization used throughout the codebase.
Provides canonical locale handling to ensure consistent cache keys and lookups.

Python 3.13+.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING

from babel.core import UnknownLocaleError as BabelUnknownLocaleError

from mfcompiler.enums import TextDirection

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "language_of",
    "normalize_locale",
    "text_direction",
]


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")
        'en'
    """
    return locale_code.replace("-", "_")


def language_of(locale_code: str) -> str:
    """Return the language-only prefix of a locale code.

    Example:
        >>> language_of("pt-BR")
        'pt'
        >>> language_of("sr_Latn_RS")
        'sr'
    """
    return normalize_locale(locale_code).split("_", 1)[0]


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Parses the locale code once and caches the result. Thread-safe via
    lru_cache internal locking.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def text_direction(locale_code: str) -> TextDirection:
    """Writing direction of a locale from CLDR character order.

    Unknown or malformed codes are treated as left-to-right.

    Example:
        >>> text_direction("he")
        <TextDirection.RTL: 'rtl'>
        >>> text_direction("en-US")
        <TextDirection.LTR: 'ltr'>
    """
    try:
        locale = get_babel_locale(locale_code)
    except (BabelUnknownLocaleError, ValueError):
        locale = None
    if locale is None:
        try:
            locale = get_babel_locale(language_of(locale_code))
        except (BabelUnknownLocaleError, ValueError):
            return TextDirection.LTR
    return TextDirection(locale.text_direction)
