"""CLDR plural rules registry using Babel.

Provides plural category selection for the locales a compiler is bound
to. Babel's CLDR data supplies cardinal (plural) and ordinal
(selectordinal) rule sets; callers may also register their own plural
functions per locale.

Python 3.13+. Depends on Babel for CLDR data.

Reference: https://www.unicode.org/cldr/charts/47/supplemental/language_plural_rules.html
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType

from babel.core import UnknownLocaleError as BabelUnknownLocaleError
from babel.localedata import locale_identifiers
from babel.plural import PluralRule

from mfcompiler.constants import ALL_LOCALES, OTHER_CASE
from mfcompiler.diagnostics import ErrorTemplate, UnknownLocaleError
from mfcompiler.locale_utils import get_babel_locale, language_of, normalize_locale

__all__ = [
    "BabelPluralFunction",
    "PluralFunction",
    "PluralRuleRegistry",
    "babel_plural_function",
]

logger = logging.getLogger(__name__)

type PluralFunction = Callable[..., str]
"""(value, ordinal=False) -> plural category."""


@dataclass(frozen=True, slots=True)
class BabelPluralFunction:
    """Plural function backed by a locale's CLDR rule sets.

    Example:
        >>> lv = babel_plural_function("lv")
        >>> lv(0), lv(1), lv(2)
        ('zero', 'one', 'other')
        >>> babel_plural_function("en")(2, ordinal=True)
        'two'
    """

    locale_code: str
    cardinal: PluralRule
    ordinal: PluralRule

    def __call__(self, value: int | float | Decimal, ordinal: bool = False) -> str:
        rule = self.ordinal if ordinal else self.cardinal
        return rule(value)

    def categories(self, ordinal: bool = False) -> frozenset[str]:
        """Categories the cardinal or ordinal rule set can produce."""
        rule = self.ordinal if ordinal else self.cardinal
        return rule.tags | {OTHER_CASE}

    def rules(self, ordinal: bool = False) -> dict[str, str]:
        """CLDR rule text by category, as accepted by PluralRule()."""
        rule = self.ordinal if ordinal else self.cardinal
        return rule.rules


@functools.lru_cache(maxsize=256)
def babel_plural_function(locale_code: str) -> BabelPluralFunction:
    """Build the plural function for a CLDR locale.

    Raises:
        babel.core.UnknownLocaleError: If Babel has no data for the locale
        ValueError: If the code is malformed
    """
    locale = get_babel_locale(locale_code)
    return BabelPluralFunction(
        locale_code=normalize_locale(locale_code),
        cardinal=locale.plural_form,
        ordinal=locale.ordinal_form,
    )


class PluralRuleRegistry:
    """Read-only table of plural functions for a set of locales.

    Constructed once and shared by every compilation. Locale codes are
    matched in POSIX form, so 'en-US' and 'en_US' name the same entry.

    Lookup order for resolve():
        1. The full code
        2. Its language-only prefix
        3. The fallback locale, when one is configured
        Otherwise UnknownLocaleError.

    Example:
        >>> registry = PluralRuleRegistry(["en", "fr"])
        >>> registry.resolve("en-GB")(1)
        'one'
        >>> registry.codes
        ('en', 'fr')
    """

    __slots__ = ("_codes", "_custom", "_fallback_locale", "_known")

    def __init__(
        self,
        locales: str | Iterable[str] | Mapping[str, PluralFunction],
        *,
        fallback_locale: str | None = None,
    ) -> None:
        """Bind the registry to a set of locales.

        Args:
            locales: One code, several codes, '*' for every CLDR locale, or
                a mapping of code to caller-supplied plural function
            fallback_locale: Registered locale used when resolution fails

        Raises:
            UnknownLocaleError: If a requested code has no CLDR plural data
        """
        if isinstance(locales, str):
            locales = [locales]
        custom: dict[str, PluralFunction] = {}
        codes: list[str] = []
        all_babel = False
        if isinstance(locales, Mapping):
            for code, func in locales.items():
                key = normalize_locale(code)
                custom[key] = func
                codes.append(key)
        else:
            for code in locales:
                if code == ALL_LOCALES:
                    all_babel = True
                    continue
                key = normalize_locale(code)
                self._load_babel(key)
                if key not in codes:
                    codes.append(key)
        if all_babel:
            codes.extend(c for c in locale_identifiers() if c not in codes)

        self._codes = tuple(codes)
        self._known = frozenset(codes)
        self._custom = MappingProxyType(custom)
        self._fallback_locale = normalize_locale(fallback_locale) if fallback_locale else None

    @property
    def codes(self) -> tuple[str, ...]:
        """Registered locale codes in registration order."""
        return self._codes

    @property
    def fallback_locale(self) -> str | None:
        """Locale used when neither the code nor its language is registered."""
        return self._fallback_locale

    def __contains__(self, locale_code: object) -> bool:
        """Check whether a code is registered (no fallback)."""
        if not isinstance(locale_code, str):
            return False
        return normalize_locale(locale_code) in self._known

    def __len__(self) -> int:
        return len(self._codes)

    def is_custom(self, locale_code: str) -> bool:
        """True when the locale resolves to a caller-supplied function."""
        return self.resolve_code(locale_code) in self._custom

    def resolve_code(self, locale_code: str) -> str:
        """Registered code that answers for locale_code.

        Raises:
            UnknownLocaleError: If nothing matches after fallback
        """
        key = normalize_locale(locale_code)
        known = self._known
        if key in known:
            return key
        language = language_of(key)
        if language in known:
            logger.warning("Locale %s not registered, using language %s", locale_code, language)
            return language
        if self._fallback_locale is not None and self._fallback_locale in known:
            logger.warning(
                "Locale %s not registered, using fallback %s", locale_code, self._fallback_locale
            )
            return self._fallback_locale
        raise UnknownLocaleError(ErrorTemplate.unknown_locale(locale_code))

    def resolve(self, locale_code: str) -> PluralFunction:
        """Plural function for a locale, with language and fallback lookup.

        Raises:
            UnknownLocaleError: If nothing matches after fallback
        """
        code = self.resolve_code(locale_code)
        if code in self._custom:
            return self._custom[code]
        return self._load_babel(code)

    def categories(self, locale_code: str, *, ordinal: bool = False) -> frozenset[str] | None:
        """Categories a locale can select, or None for custom functions."""
        func = self.resolve(locale_code)
        if isinstance(func, BabelPluralFunction):
            return func.categories(ordinal)
        return None

    @staticmethod
    def _load_babel(code: str) -> BabelPluralFunction:
        try:
            return babel_plural_function(code)
        except (BabelUnknownLocaleError, ValueError) as e:
            raise UnknownLocaleError(ErrorTemplate.unknown_locale(code)) from e
