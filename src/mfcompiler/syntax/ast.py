"""Message AST (Abstract Syntax Tree) node definitions.

One parsed pattern is a Message: an ordered tuple of elements. Selector
blocks hold cases whose values are Messages again, so nesting is
unbounded in the data model (the parser bounds it).
Includes type guards as static methods.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import TypeIs

from mfcompiler.constants import OTHER_CASE
from mfcompiler.enums import SelectorKind

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Base types
    "Span",
    # Message structure
    "Message",
    # Elements
    "Literal",
    "Argument",
    "NumberSign",
    "FormatArg",
    "SelectorBlock",
    "Case",
    # Type aliases
    "MessageElement",
    "ASTNode",
]


@dataclass(frozen=True, slots=True)
class Span:
    """Source position span.

    Attributes:
        start: Starting character offset (inclusive)
        end: Ending character offset (exclusive)

    Example:
        Source: "Hi {name}!"
        Argument span: Span(start=3, end=9)
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate span invariants."""
        if self.start < 0:
            msg = f"Span start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"Span end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Message:
    """Parse result of one pattern, or the value of one selector case."""

    elements: tuple["MessageElement", ...]

    @property
    def is_static(self) -> bool:
        """True when the message is plain text."""
        return all(isinstance(e, Literal) for e in self.elements)


@dataclass(frozen=True, slots=True)
class Literal:
    """Verbatim text, with quoting and apostrophe escapes already applied."""

    text: str


@dataclass(frozen=True, slots=True)
class Argument:
    """Simple placeholder.

    Example:
        {name}
    """

    name: str
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class NumberSign:
    """'#' inside a plural case: the enclosing plural argument minus its offset."""

    span: Span | None = None

    @staticmethod
    def guard(element: object) -> TypeIs["NumberSign"]:
        """Type guard for NumberSign."""
        return isinstance(element, NumberSign)


@dataclass(frozen=True, slots=True)
class FormatArg:
    """Placeholder formatted by a named formatter.

    Examples:
        {price, number, currency:EUR}
        {when, date, long}
        {elapsed, duration}
    """

    name: str
    format_type: str
    style: str | None = None
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class Case:
    """One selector case.

    Attributes:
        key: Key as written, e.g. "=0", "one", "male"
        value: Sub-message produced when the case is selected
        span: Location of the key
    """

    key: str
    value: Message
    span: Span | None = None

    @property
    def is_exact(self) -> bool:
        """True for '=N' exact-value keys."""
        return self.key.startswith("=")

    @property
    def exact_value(self) -> str:
        """Normalised number of an '=N' key, as matched at format time.

        Integral values drop their fraction so that '=1' and '=1.0' both
        match the value 1.

        Example:
            >>> Case("=1.0", Message(())).exact_value
            '1'
            >>> Case("=-0.50", Message(())).exact_value
            '-0.5'
        """
        number = Decimal(self.key[1:])
        if number == number.to_integral_value():
            return str(int(number))
        return str(float(number))


@dataclass(frozen=True, slots=True)
class SelectorBlock:
    """plural, selectordinal or select block.

    Examples:
        {count, plural, offset:1 =0{nobody} one{# other} other{# others}}
        {gender, select, female{her} male{his} other{their}}
    """

    kind: SelectorKind
    name: str
    cases: tuple[Case, ...]
    offset: int | None = None
    span: Span | None = None

    @staticmethod
    def guard(element: object) -> TypeIs["SelectorBlock"]:
        """Type guard for SelectorBlock."""
        return isinstance(element, SelectorBlock)

    @property
    def keys(self) -> tuple[str, ...]:
        """Case keys in source order."""
        return tuple(case.key for case in self.cases)

    @property
    def has_other(self) -> bool:
        """True when the mandatory 'other' case is present."""
        return OTHER_CASE in self.keys

    def match_key(self, case: Case) -> str:
        """Key under which a case is looked up at format time.

        Exact plural keys are normalised ('=1.0' -> '=1'); other keys are
        used as written.
        """
        if self.kind.is_plural and case.is_exact:
            return "=" + case.exact_value
        return case.key


type MessageElement = Literal | Argument | NumberSign | FormatArg | SelectorBlock

type ASTNode = Message | MessageElement | Case
