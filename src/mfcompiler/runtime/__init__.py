"""Runtime support for compiled messages.

Provides the helpers compiled messages call, the Babel-backed plural rule
registry and built-in formatters, and dependency sets that keep rendered
output minimal.

Python 3.13+.
"""

from .dependencies import DependencySet
from .formatters import BUILTIN_FORMATTERS, Formatter, format_date, format_number, format_time
from .plural_rules import (
    BabelPluralFunction,
    PluralFunction,
    PluralRuleRegistry,
    babel_plural_function,
)
from .support import (
    HELPER_NAMES,
    RuntimeSupport,
    default_number,
    plural,
    select,
    strict_number,
)

__all__ = [
    "BUILTIN_FORMATTERS",
    "HELPER_NAMES",
    "BabelPluralFunction",
    "DependencySet",
    "Formatter",
    "PluralFunction",
    "PluralRuleRegistry",
    "RuntimeSupport",
    "babel_plural_function",
    "default_number",
    "format_date",
    "format_number",
    "format_time",
    "plural",
    "select",
    "strict_number",
]
