"""Enumerations for mfcompiler type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class SelectorKind(StrEnum):
    """Kind of selector block.

    StrEnum provides automatic string conversion: str(SelectorKind.PLURAL) == "plural"
    """

    PLURAL = "plural"
    """Cardinal plural selection: {n, plural, one{...} other{...}}"""

    SELECTORDINAL = "selectordinal"
    """Ordinal plural selection: {n, selectordinal, one{#st} other{#th}}"""

    SELECT = "select"
    """Exact string selection: {g, select, male{...} other{...}}"""

    @property
    def is_plural(self) -> bool:
        """True for the kinds dispatched through plural rules."""
        return self is not SelectorKind.SELECT


class ModuleFormat(StrEnum):
    """Host-module packaging format for rendered artifacts.

    StrEnum provides automatic string conversion: str(ModuleFormat.MODULE) == "module"
    """

    MODULE = "module"
    """Module export: messages = {...} with __all__ = ["messages"]"""

    VARIABLE = "variable"
    """Isolated variable: <name> = {...}"""

    NAMESPACE = "namespace"
    """Namespaced export: attach to an attribute of an importable module"""


class TextDirection(StrEnum):
    """Writing direction of a locale."""

    LTR = "ltr"
    RTL = "rtl"


__all__ = [
    "ModuleFormat",
    "SelectorKind",
    "TextDirection",
]
