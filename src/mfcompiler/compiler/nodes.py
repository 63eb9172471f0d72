"""Compiled message representation.

Lowering turns each parsed Message into a Template: a sequence of parts
whose outputs are concatenated. Templates are interpreted two ways, by
the evaluator (in-process calls) and by the emitter (Python source).

A compiled catalogue is a tree of CompiledNode values: FunctionDef leaves
(one per pattern) and NestedGroup branches mirroring the input mapping.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from typing import TypeIs

from mfcompiler.runtime.dependencies import DependencySet

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Template parts
    "Text",
    "Interpolation",
    "NumberSign",
    "FormatterCall",
    "PluralCall",
    "SelectCall",
    "Template",
    # Tree
    "FunctionDef",
    "NestedGroup",
    # Type aliases
    "Part",
    "CompiledNode",
]


@dataclass(frozen=True, slots=True)
class Text:
    """Literal output."""

    text: str


@dataclass(frozen=True, slots=True)
class Interpolation:
    """str(params[name]), surrounded by mark (a bidi mark or '')."""

    name: str
    mark: str = ""


@dataclass(frozen=True, slots=True)
class NumberSign:
    """number(params[name], name, offset) of the closest plural block."""

    name: str
    offset: int = 0


@dataclass(frozen=True, slots=True)
class FormatterCall:
    """formatters[format_type](params[name], locale, style), surrounded by mark."""

    name: str
    format_type: str
    style: str | None
    locale: str
    mark: str = ""


@dataclass(frozen=True, slots=True)
class PluralCall:
    """plural(params[name], offset, plural_function(locale), cases, ordinal)."""

    name: str
    offset: int
    locale: str
    ordinal: bool
    cases: tuple[tuple[str, "Template"], ...]


@dataclass(frozen=True, slots=True)
class SelectCall:
    """select(params[name], cases)."""

    name: str
    cases: tuple[tuple[str, "Template"], ...]


type Part = Text | Interpolation | NumberSign | FormatterCall | PluralCall | SelectCall


@dataclass(frozen=True, slots=True)
class Template:
    """Concatenation of parts."""

    parts: tuple[Part, ...]

    @property
    def is_static(self) -> bool:
        """True when the output does not depend on parameters."""
        return all(isinstance(part, Text) for part in self.parts)


@dataclass(frozen=True, slots=True)
class FunctionDef:
    """Compiled pattern.

    Attributes:
        template: Lowered pattern
        locale: Locale the pattern was compiled for
        dependencies: Runtime names this pattern references
        source: Pattern text
    """

    template: Template
    locale: str
    dependencies: DependencySet
    source: str = ""

    @staticmethod
    def guard(node: object) -> TypeIs["FunctionDef"]:
        """Type guard for FunctionDef."""
        return isinstance(node, FunctionDef)


@dataclass(frozen=True, slots=True)
class NestedGroup:
    """Compiled mapping; children keep the input's key order.

    Attributes:
        children: (key, node) pairs
        dependencies: Union of the children's dependencies
    """

    children: tuple[tuple[str, "CompiledNode"], ...]
    dependencies: DependencySet

    @staticmethod
    def guard(node: object) -> TypeIs["NestedGroup"]:
        """Type guard for NestedGroup."""
        return isinstance(node, NestedGroup)


type CompiledNode = FunctionDef | NestedGroup
