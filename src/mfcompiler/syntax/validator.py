"""Semantic validation for parsed messages.

Two-level validation:
1. Well-formed: conforms to the message grammar (handled by parser)
2. Valid: passes semantic checks (this module)

Checks, each enforced exactly once per compilation:
- every selector block has an 'other' case
- case keys are unique within a block ('=1' and '=1.0' are the same key)
- plural category keys exist in the active locale's rule set
"""

from collections.abc import Set

from mfcompiler.constants import MAX_DEPTH
from mfcompiler.core.depth_guard import DepthGuard
from mfcompiler.diagnostics import (
    DuplicateCaseError,
    ErrorTemplate,
    InvalidCaseKeyError,
    MissingOtherCaseError,
    SourceSpan,
)
from mfcompiler.enums import SelectorKind
from mfcompiler.syntax.ast import Message, SelectorBlock, Span
from mfcompiler.syntax.cursor import Cursor

__all__ = ["MessageValidator"]


class MessageValidator:
    """Validates selector blocks of a parsed message.

    Category checks need the locale's rule sets; pass None for a rule set
    that is unknown (caller-supplied plural functions) to skip the check.

    Attributes:
        locale_code: Locale named in InvalidCaseKeyError diagnostics
        cardinal: Categories valid for plural blocks
        ordinal: Categories valid for selectordinal blocks
    """

    __slots__ = ("_depth_guard", "cardinal", "locale_code", "ordinal")

    def __init__(
        self,
        *,
        locale_code: str = "",
        cardinal: Set[str] | None = None,
        ordinal: Set[str] | None = None,
        max_depth: int | None = None,
    ) -> None:
        self.locale_code = locale_code
        self.cardinal = cardinal
        self.ordinal = ordinal
        self._depth_guard = DepthGuard(max_depth=max_depth if max_depth is not None else MAX_DEPTH)

    def validate(self, message: Message, source: str = "") -> None:
        """Validate a message and all of its sub-messages.

        Args:
            message: Parsed message
            source: Pattern text, used to locate errors

        Raises:
            MissingOtherCaseError: Selector block without 'other'
            DuplicateCaseError: Repeated case key
            InvalidCaseKeyError: Category not defined for the locale
            RecursionLimitError: More than max_depth nested sub-messages
        """
        for element in message.elements:
            if SelectorBlock.guard(element):
                self._validate_block(element, source)
                for case in element.cases:
                    with self._depth_guard:
                        self.validate(case.value, source)

    def _validate_block(self, block: SelectorBlock, source: str) -> None:
        span = _locate(source, block.span)
        if not block.has_other:
            raise MissingOtherCaseError(
                ErrorTemplate.missing_other_case(block.name, block.kind, span)
            )

        categories = self._categories(block.kind)
        seen: set[str] = set()
        for case in block.cases:
            key = block.match_key(case)
            if key in seen:
                raise DuplicateCaseError(
                    ErrorTemplate.duplicate_case(case.key, block.name, _locate(source, case.span))
                )
            seen.add(key)
            if categories is not None and not case.is_exact and case.key not in categories:
                raise InvalidCaseKeyError(
                    ErrorTemplate.invalid_case_key(
                        case.key,
                        block.kind,
                        self.locale_code,
                        sorted(categories),
                        _locate(source, case.span),
                    )
                )

    def _categories(self, kind: SelectorKind) -> Set[str] | None:
        match kind:
            case SelectorKind.PLURAL:
                return self.cardinal
            case SelectorKind.SELECTORDINAL:
                return self.ordinal
            case SelectorKind.SELECT:
                return None


def _locate(source: str, span: Span | None) -> SourceSpan | None:
    if span is None or not source or span.start > len(source):
        return None
    return Cursor(source, span.start).source_span(span.end)
