"""Tests for syntax.validator: selector semantics after parsing."""

from __future__ import annotations

import pytest

from mfcompiler.diagnostics import (
    DiagnosticCode,
    DuplicateCaseError,
    InvalidCaseKeyError,
    MissingOtherCaseError,
    RecursionLimitError,
)
from mfcompiler.syntax import MessageValidator, parse

EN_CARDINAL = frozenset({"one", "other"})
EN_ORDINAL = frozenset({"one", "two", "few", "other"})


def _validator() -> MessageValidator:
    return MessageValidator(locale_code="en", cardinal=EN_CARDINAL, ordinal=EN_ORDINAL)


class TestMissingOther:
    """The 'other' case is mandatory for every selector kind."""

    @pytest.mark.parametrize(
        "source",
        [
            "{n, plural, one{x}}",
            "{n, selectordinal, one{x}}",
            "{g, select, male{x}}",
        ],
    )
    def test_top_level(self, source: str) -> None:
        """Top-level blocks without 'other' are rejected."""
        with pytest.raises(MissingOtherCaseError) as exc_info:
            _validator().validate(parse(source), source)

        diagnostic = exc_info.value.diagnostic
        assert diagnostic is not None
        assert diagnostic.code == DiagnosticCode.MISSING_OTHER_CASE
        assert diagnostic.span is not None
        assert diagnostic.span.start == 0

    def test_nested(self) -> None:
        """A nested block without 'other' is found."""
        source = "{g, select, other{{n, plural, one{x}}}}"

        with pytest.raises(MissingOtherCaseError) as exc_info:
            _validator().validate(parse(source), source)

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.argument_name == "n"

    def test_valid_message_passes(self) -> None:
        """A well-formed message raises nothing."""
        source = "{g, select, a{{n, plural, =0{none} one{#} other{#}}} other{x}}"

        _validator().validate(parse(source), source)


class TestDuplicates:
    """Case keys are unique per block."""

    def test_duplicate_category(self) -> None:
        """Repeated category keys are rejected."""
        with pytest.raises(DuplicateCaseError):
            _validator().validate(parse("{n, plural, one{a} one{b} other{c}}"))

    def test_duplicate_select_key(self) -> None:
        """Repeated select keys are rejected."""
        with pytest.raises(DuplicateCaseError):
            _validator().validate(parse("{g, select, a{1} a{2} other{3}}"))

    def test_equivalent_exact_keys(self) -> None:
        """'=1' and '=1.0' denote the same value."""
        with pytest.raises(DuplicateCaseError):
            _validator().validate(parse("{n, plural, =1{a} =1.0{b} other{c}}"))

    def test_same_key_in_different_blocks(self) -> None:
        """Keys only need to be unique within one block."""
        _validator().validate(parse("{a, select, x{1} other{2}} {b, select, x{3} other{4}}"))

    def test_exact_select_keys_are_not_normalised(self) -> None:
        """In select blocks '=1' and '=1.0' are different strings."""
        _validator().validate(parse("{g, select, =1{a} =1.0{b} other{c}}"))


class TestCategories:
    """Plural keys must be categories of the locale."""

    def test_unknown_cardinal_category(self) -> None:
        """'few' is not an English cardinal category."""
        source = "{n, plural, few{x} other{y}}"

        with pytest.raises(InvalidCaseKeyError) as exc_info:
            _validator().validate(parse(source), source)

        diagnostic = exc_info.value.diagnostic
        assert diagnostic is not None
        assert "'en'" in diagnostic.message
        assert diagnostic.hint == "Valid categories: one, other"

    def test_ordinal_categories_differ(self) -> None:
        """'few' is an English ordinal category."""
        _validator().validate(parse("{n, selectordinal, one{#st} two{#nd} few{#rd} other{#th}}"))

    def test_exact_keys_always_allowed(self) -> None:
        """=N keys bypass the category check."""
        _validator().validate(parse("{n, plural, =7{seven} other{x}}"))

    def test_unknown_rules_skip_check(self) -> None:
        """Without a category set every syntactic category is accepted."""
        validator = MessageValidator(locale_code="xx")

        validator.validate(parse("{n, plural, zero{a} few{b} many{c} other{d}}"))

    def test_select_keys_never_checked(self) -> None:
        """select keys are free-form."""
        _validator().validate(parse("{g, select, few{a} other{b}}"))


class TestDepth:
    """Validation depth is bounded like parser depth."""

    @staticmethod
    def _nested(depth: int) -> str:
        return "{a, select, other{" * depth + "x" + "}}" * depth

    def test_depth_limit(self) -> None:
        """Messages deeper than max_depth raise RecursionLimitError."""
        validator = MessageValidator(max_depth=3)

        with pytest.raises(RecursionLimitError):
            validator.validate(parse(self._nested(5)))

    def test_exactly_max_depth_passes(self) -> None:
        """max_depth nested sub-messages are accepted."""
        MessageValidator(max_depth=3).validate(parse(self._nested(3)))

    def test_one_beyond_max_depth_fails(self) -> None:
        """max_depth + 1 nested sub-messages are rejected."""
        with pytest.raises(RecursionLimitError):
            MessageValidator(max_depth=3).validate(parse(self._nested(4)))

    def test_guard_released_between_siblings(self) -> None:
        """Sibling cases do not accumulate depth."""
        inner = self._nested(2)
        source = f"{{b, select, x{{{inner}}} y{{{inner}}} other{{{inner}}}}}"

        MessageValidator(max_depth=3).validate(parse(source))
