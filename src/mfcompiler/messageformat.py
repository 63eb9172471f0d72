"""MessageFormat: compile ICU MessageFormat patterns into callables.

Binds a plural rule registry (for the requested locales) and a set of
compile options once; every compile() call then shares that immutable
state and allocates its own parse trees and dependency sets.

Python 3.13+. Depends on Babel for CLDR data.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType

from mfcompiler.compiler import (
    ArtifactRuntime,
    CompiledGroup,
    CompiledMessage,
    Compiler,
    MessageTree,
    wrap,
)
from mfcompiler.config import CompileOptions
from mfcompiler.constants import ALL_LOCALES, DEFAULT_LOCALE, MAX_DEPTH
from mfcompiler.locale_utils import normalize_locale
from mfcompiler.runtime import BUILTIN_FORMATTERS, PluralFunction, PluralRuleRegistry, RuntimeSupport

__all__ = ["MessageFormat"]

logger = logging.getLogger(__name__)


class MessageFormat:
    """Compiler front-end bound to a set of locales and options.

    Thread Safety:
        All bound state is read-only, so compile() may be called from
        several threads at once. Compiled artifacts are immutable.

    Examples:
        >>> mf = MessageFormat("en")
        >>> msg = mf.compile("{count, plural, one{# item} other{# items}}")
        >>> msg({"count": 1}), msg({"count": 5})
        ('1 item', '5 items')

        >>> mf = MessageFormat(["en", "fr"])
        >>> tree = mf.compile({"en": {"n": "{n, plural, one{one} other{#}}"},
        ...                    "fr": {"n": "{n, plural, one{un} other{#}}"}})
        >>> tree["fr"]["n"]({"n": 0})
        'un'

        >>> print(msg.render())  # doctest: +SKIP
    """

    __slots__ = ("_compiler", "_options", "_registry", "_runtime")

    def __init__(
        self,
        locales: str | Iterable[str] | Mapping[str, PluralFunction] | None = None,
        *,
        bidi_support: bool = False,
        custom_formatters: Mapping[str, Callable[..., str]] | None = None,
        strict_number_sign: bool = False,
        max_depth: int = MAX_DEPTH,
    ) -> None:
        """Bind locales and options.

        Args:
            locales: Locale code, list of codes, '*' for every CLDR locale,
                or a mapping of code to custom plural function
                ``(value, ordinal=False) -> category``. The first locale
                is the default for leaves outside any locale key, and
                the fallback for codes that are not registered.
                Default: every CLDR locale, with 'en' as the default.
            bidi_support: Wrap arguments in directional marks
            custom_formatters: Formatter by format type name
            strict_number_sign: Strict '#' handling
            max_depth: Maximum selector and message tree nesting

        Raises:
            UnknownLocaleError: If a requested locale has no CLDR data
            ValueError: If no locale is requested or max_depth is invalid
        """
        if locales is None:
            locales = ALL_LOCALES
        elif not isinstance(locales, str | Mapping):
            locales = list(locales)
        self._options = CompileOptions(
            bidi_support=bidi_support,
            custom_formatters=custom_formatters or {},
            strict_number_sign=strict_number_sign,
            max_depth=max_depth,
        )
        default_locale = _first_locale(locales)
        if default_locale is None:
            msg = "At least one locale is required"
            raise ValueError(msg)
        self._registry = PluralRuleRegistry(locales, fallback_locale=default_locale)

        formatters = MappingProxyType({**BUILTIN_FORMATTERS, **self._options.custom_formatters})
        self._compiler = Compiler(
            self._registry,
            formatters=formatters,
            default_locale=default_locale,
            options=self._options,
        )
        self._runtime = ArtifactRuntime(
            support=RuntimeSupport(strict_number_sign=strict_number_sign),
            registry=self._registry,
            formatters=formatters,
        )
        logger.debug(
            "MessageFormat bound to %d locale(s), default %s", len(self._registry), default_locale
        )

    @property
    def options(self) -> CompileOptions:
        """Bound compile options."""
        return self._options

    @property
    def locales(self) -> tuple[str, ...]:
        """Registered locale codes (POSIX form)."""
        return self._registry.codes

    @property
    def default_locale(self) -> str:
        """Locale used for leaves outside any locale key."""
        return self._compiler.default_locale

    @property
    def registry(self) -> PluralRuleRegistry:
        """Bound plural rule registry."""
        return self._registry

    def compile(
        self, messages: str | MessageTree, locale: str | None = None
    ) -> CompiledMessage | CompiledGroup:
        """Compile a pattern or a message tree.

        Args:
            messages: Pattern text, or a mapping of keys to patterns and
                nested mappings
            locale: Locale for every message (default: the first locale
                key on each message's path, else the default locale)

        Returns:
            CompiledMessage for a pattern, CompiledGroup for a tree

        Raises:
            MessageSyntaxError: A pattern is malformed
            MissingOtherCaseError: A selector lacks 'other'
            DuplicateCaseError: A selector repeats a key
            InvalidCaseKeyError: A plural key is not a category of the locale
            UnknownFormatterError: A format type has no formatter
            UnknownLocaleError: A locale has no plural rules
            RecursionLimitError: Nesting exceeds max_depth
        """
        return wrap(self._compiler.compile(messages, locale), self._runtime)


def _first_locale(locales: str | list[str] | Mapping[str, PluralFunction]) -> str | None:
    """Default locale: the first one requested, 'en' when '*' comes first."""
    first = locales if isinstance(locales, str) else next(iter(locales), None)
    if first is None:
        return None
    if first == ALL_LOCALES:
        return DEFAULT_LOCALE
    return normalize_locale(first)
