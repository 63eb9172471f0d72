"""Compilation options.

Provides a single frozen dataclass holding every option that affects how
messages are compiled. Shared unchanged by all compile() calls of one
MessageFormat instance.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from mfcompiler.constants import MAX_DEPTH

__all__ = ["CompileOptions"]


@dataclass(frozen=True, slots=True)
class CompileOptions:
    """Immutable options for one MessageFormat instance.

    Attributes:
        bidi_support: Wrap interpolated values in directional marks
            matching the locale's writing direction (default: False).
        custom_formatters: Formatter by format type name, called as
            ``formatter(value, locale, style)``. Overrides built-ins of the
            same name.
        strict_number_sign: '#' requires a numeric value even without an
            offset, and is literal text inside a select nested in a plural
            case (default: False).
        max_depth: Maximum nesting of selector sub-messages and of message
            tree levels (default: 100).

    Example:
        >>> options = CompileOptions(strict_number_sign=True)
        >>> options.bidi_support
        False
    """

    bidi_support: bool = False
    custom_formatters: Mapping[str, Callable[..., str]] = field(default_factory=dict)
    strict_number_sign: bool = False
    max_depth: int = MAX_DEPTH

    def __post_init__(self) -> None:
        """Validate and freeze option values.

        Raises:
            ValueError: If max_depth is not positive
            TypeError: If a custom formatter is not callable
        """
        if self.max_depth <= 0:
            msg = "max_depth must be positive"
            raise ValueError(msg)
        for name, formatter in self.custom_formatters.items():
            if not callable(formatter):
                msg = f"Custom formatter '{name}' is not callable"
                raise TypeError(msg)
        object.__setattr__(self, "custom_formatters", MappingProxyType(dict(self.custom_formatters)))
