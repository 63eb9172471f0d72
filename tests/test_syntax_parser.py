"""Tests for syntax.parser: message grammar, quoting, selectors and errors.

Validates that MessageParser produces the expected AST for every grammar
construct, applies apostrophe quoting, tracks '#' scope, and reports
malformed patterns with positions.
"""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from mfcompiler.diagnostics import DiagnosticCode, MessageSyntaxError, RecursionLimitError
from mfcompiler.enums import SelectorKind
from mfcompiler.syntax import (
    Argument,
    FormatArg,
    Literal,
    Message,
    MessageParser,
    NumberSign,
    SelectorBlock,
    parse,
)
from tests.strategies import argument_names, plain_text

# ============================================================================
# LITERALS AND ARGUMENTS
# ============================================================================


class TestLiteralsAndArguments:
    """Test plain text and simple placeholders."""

    def test_empty_pattern(self) -> None:
        """Empty pattern parses to an empty message."""
        assert parse("") == Message(())

    def test_plain_text(self) -> None:
        """Plain text is one literal."""
        assert parse("Hello, world!") == Message((Literal("Hello, world!"),))

    def test_argument(self) -> None:
        """{name} is an Argument between literals."""
        message = parse("Hi {name}!")

        assert message.elements[0] == Literal("Hi ")
        assert isinstance(message.elements[1], Argument)
        assert message.elements[1].name == "name"
        assert message.elements[2] == Literal("!")

    def test_argument_span(self) -> None:
        """Argument span covers the braces."""
        arg = parse("Hi {name}!").elements[1]

        assert isinstance(arg, Argument)
        assert arg.span is not None
        assert (arg.span.start, arg.span.end) == (3, 9)

    def test_whitespace_inside_braces(self) -> None:
        """Whitespace around names is ignored."""
        arg = parse("{ \n name\t }").elements[0]

        assert isinstance(arg, Argument)
        assert arg.name == "name"

    def test_numeric_argument_name(self) -> None:
        """Positional names like {0} are accepted."""
        arg = parse("{0}").elements[0]

        assert isinstance(arg, Argument)
        assert arg.name == "0"

    def test_hash_outside_plural_is_text(self) -> None:
        """'#' is literal text outside plural blocks."""
        assert parse("#1 fan") == Message((Literal("#1 fan"),))

    @given(text=plain_text(min_size=1))
    def test_plain_text_round_trips(self, text: str) -> None:
        """Text without syntax characters is a single literal."""
        assert parse(text) == Message((Literal(text),))

    @given(name=argument_names())
    def test_any_valid_name_is_an_argument(self, name: str) -> None:
        """Every generated name parses as an argument."""
        element = parse("{" + name + "}").elements[0]

        assert isinstance(element, Argument)
        assert element.name == name


# ============================================================================
# APOSTROPHE QUOTING
# ============================================================================


class TestQuoting:
    """Test apostrophe escapes and quoted regions."""

    @pytest.mark.parametrize(
        ("source", "text"),
        [
            ("It''s", "It's"),
            ("don't", "don't"),
            ("'{literal}'", "{literal}"),
            ("'{' and '}'", "{ and }"),
            ("a '{b}' c", "a {b} c"),
            ("'{it''s}'", "{it's}"),
            ("'{unterminated", "{unterminated"),
            ("end'", "end'"),
            ("'#'", "'#'"),
        ],
    )
    def test_quoting(self, source: str, text: str) -> None:
        """Quoting follows the optional-apostrophe rules."""
        assert parse(source) == Message((Literal(text),))

    def test_quoted_hash_in_plural(self) -> None:
        """'#' inside a plural case is quotable."""
        block = parse("{n, plural, other{'#' #}}").elements[0]

        assert isinstance(block, SelectorBlock)
        elements = block.cases[0].value.elements
        assert elements[0] == Literal("# ")
        assert isinstance(elements[1], NumberSign)

    def test_quoted_braces_do_not_open_placeholders(self) -> None:
        """Quoted braces stay text even around names."""
        message = parse("'{name}' {name}")

        assert message.elements[0] == Literal("{name} ")
        assert isinstance(message.elements[1], Argument)


# ============================================================================
# FORMATTED ARGUMENTS
# ============================================================================


class TestFormatArgs:
    """Test {name, type[, style]} placeholders."""

    def test_type_without_style(self) -> None:
        """{n, number} has no style."""
        element = parse("{n, number}").elements[0]

        assert isinstance(element, FormatArg)
        assert (element.name, element.format_type, element.style) == ("n", "number", None)

    def test_type_with_style(self) -> None:
        """Style text is trimmed."""
        element = parse("{price, number,  currency:EUR }").elements[0]

        assert isinstance(element, FormatArg)
        assert (element.name, element.format_type, element.style) == (
            "price",
            "number",
            "currency:EUR",
        )

    def test_style_with_nested_braces(self) -> None:
        """Balanced braces inside a style are kept verbatim."""
        element = parse("{d, custom, {a} b {c}}").elements[0]

        assert isinstance(element, FormatArg)
        assert element.style == "{a} b {c}"

    def test_style_with_quoted_brace(self) -> None:
        """Quoted braces in a style do not need to balance."""
        element = parse("{d, custom, x'}'y}").elements[0]

        assert isinstance(element, FormatArg)
        assert element.style == "x'}'y"

    def test_empty_style_is_none(self) -> None:
        """A trailing comma with no style yields no style."""
        element = parse("{d, date, }").elements[0]

        assert isinstance(element, FormatArg)
        assert element.style is None

    def test_unterminated_style(self) -> None:
        """Unclosed style reports end of input."""
        with pytest.raises(MessageSyntaxError) as exc_info:
            parse("{d, date, short")

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.UNEXPECTED_EOF


# ============================================================================
# SELECTORS
# ============================================================================


class TestSelectors:
    """Test plural, selectordinal and select blocks."""

    def test_plural_block(self) -> None:
        """Plural cases keep source order."""
        block = parse("{count, plural, one{# item} other{# items}}").elements[0]

        assert isinstance(block, SelectorBlock)
        assert block.kind is SelectorKind.PLURAL
        assert block.name == "count"
        assert block.keys == ("one", "other")
        assert block.offset is None

    def test_plural_offset_and_exact_keys(self) -> None:
        """offset:N and =N keys are parsed."""
        block = parse(
            "{count, plural, offset:1 =0{no one} one{you and one other} other{you and # others}}"
        ).elements[0]

        assert isinstance(block, SelectorBlock)
        assert block.offset == 1
        assert block.keys == ("=0", "one", "other")
        assert block.cases[0].is_exact

    def test_offset_with_spaces(self) -> None:
        """Whitespace is allowed around the offset colon."""
        block = parse("{n, plural, offset : 2 other{#}}").elements[0]

        assert isinstance(block, SelectorBlock)
        assert block.offset == 2

    def test_selectordinal(self) -> None:
        """selectordinal is a plural kind."""
        block = parse("{n, selectordinal, one{#st} two{#nd} few{#rd} other{#th}}").elements[0]

        assert isinstance(block, SelectorBlock)
        assert block.kind is SelectorKind.SELECTORDINAL
        assert block.kind.is_plural

    def test_select_block(self) -> None:
        """select keys are arbitrary names."""
        block = parse("{g, select, female{her} male{his} other{their}}").elements[0]

        assert isinstance(block, SelectorBlock)
        assert block.kind is SelectorKind.SELECT
        assert block.keys == ("female", "male", "other")

    def test_number_sign_in_plural_case(self) -> None:
        """'#' inside a plural case is a NumberSign."""
        block = parse("{n, plural, other{# items}}").elements[0]

        assert isinstance(block, SelectorBlock)
        assert isinstance(block.cases[0].value.elements[0], NumberSign)

    def test_number_sign_in_select_case_is_text(self) -> None:
        """'#' inside a top-level select is text."""
        block = parse("{g, select, other{#1}}").elements[0]

        assert isinstance(block, SelectorBlock)
        assert block.cases[0].value == Message((Literal("#1"),))

    def test_number_sign_in_select_nested_in_plural(self) -> None:
        """By default '#' reaches through a nested select."""
        outer = parse("{n, plural, other{{g, select, other{#}}}}").elements[0]

        assert isinstance(outer, SelectorBlock)
        inner = outer.cases[0].value.elements[0]
        assert isinstance(inner, SelectorBlock)
        assert isinstance(inner.cases[0].value.elements[0], NumberSign)

    def test_strict_number_sign_in_nested_select(self) -> None:
        """In strict mode '#' inside a nested select is text."""
        parser = MessageParser(strict_number_sign=True)
        outer = parser.parse("{n, plural, other{{g, select, other{#}}}}").elements[0]

        assert isinstance(outer, SelectorBlock)
        inner = outer.cases[0].value.elements[0]
        assert isinstance(inner, SelectorBlock)
        assert inner.cases[0].value == Message((Literal("#"),))

    def test_nested_selectors(self) -> None:
        """Sub-messages recurse into the full grammar."""
        source = (
            "{host, select, female{{guests, plural, =0{{host} stays} other{{host} invites #}}}"
            " other{{guests, plural, other{#}}}}"
        )
        block = parse(source).elements[0]

        assert isinstance(block, SelectorBlock)
        inner = block.cases[0].value.elements[0]
        assert isinstance(inner, SelectorBlock)
        assert inner.keys == ("=0", "other")

    def test_missing_other_is_not_a_syntax_error(self) -> None:
        """The parser accepts blocks without 'other'; validation rejects them."""
        block = parse("{g, select, a{x}}").elements[0]

        assert isinstance(block, SelectorBlock)
        assert not block.has_other

    def test_decimal_exact_key(self) -> None:
        """=N keys may be decimal or negative."""
        block = parse("{n, plural, =1.5{a} =-1{b} other{c}}").elements[0]

        assert isinstance(block, SelectorBlock)
        assert block.keys == ("=1.5", "=-1", "other")


# ============================================================================
# SYNTAX ERRORS
# ============================================================================


class TestSyntaxErrors:
    """Test malformed pattern reporting."""

    @pytest.mark.parametrize(
        ("source", "code"),
        [
            ("{name", DiagnosticCode.UNEXPECTED_EOF),
            ("{", DiagnosticCode.INVALID_ARGUMENT_NAME),
            ("{}", DiagnosticCode.INVALID_ARGUMENT_NAME),
            ("{,}", DiagnosticCode.INVALID_ARGUMENT_NAME),
            ("a } b", DiagnosticCode.UNMATCHED_CLOSING_BRACE),
            ("{n x}", DiagnosticCode.EXPECTED_TOKEN),
            ("{n, }", DiagnosticCode.EXPECTED_TOKEN),
            ("{n, plural, lots{x} other{y}}", DiagnosticCode.INVALID_CASE_KEY_SYNTAX),
            ("{n, plural, =x{x} other{y}}", DiagnosticCode.INVALID_CASE_KEY_SYNTAX),
            ("{n, plural, offset:x other{y}}", DiagnosticCode.INVALID_OFFSET),
            ("{n, plural, offset:-1 other{y}}", DiagnosticCode.INVALID_OFFSET),
            ("{n, select, other{y}", DiagnosticCode.UNEXPECTED_EOF),
            ("{n, select, other{y", DiagnosticCode.UNEXPECTED_EOF),
            ("{n, select, other y}", DiagnosticCode.EXPECTED_TOKEN),
            ("{n, select,}", DiagnosticCode.EXPECTED_TOKEN),
        ],
    )
    def test_error_codes(self, source: str, code: DiagnosticCode) -> None:
        """Each malformation reports its diagnostic code."""
        with pytest.raises(MessageSyntaxError) as exc_info:
            parse(source)

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == code

    def test_error_position(self) -> None:
        """Errors carry offset, line and column."""
        with pytest.raises(MessageSyntaxError) as exc_info:
            parse("line one\nab }")

        error = exc_info.value
        assert error.offset == 12
        assert (error.line, error.column) == (2, 4)
        assert str(error).startswith("2:4: ")

    def test_offset_on_select_is_not_an_offset(self) -> None:
        """select blocks do not take offsets; 'offset:1' is a bad case."""
        with pytest.raises(MessageSyntaxError):
            parse("{g, select, offset:1 other{x}}")


# ============================================================================
# NESTING DEPTH
# ============================================================================


class TestNestingDepth:
    """Test selector nesting limits."""

    @staticmethod
    def _nested(depth: int) -> str:
        return "{a, select, other{" * depth + "x" + "}}" * depth

    def test_within_limit(self) -> None:
        """Nesting up to the limit parses."""
        parser = MessageParser(max_nesting_depth=5)

        assert parser.parse(self._nested(5)).elements

    def test_beyond_limit(self) -> None:
        """Nesting beyond the limit raises RecursionLimitError."""
        parser = MessageParser(max_nesting_depth=5)

        with pytest.raises(RecursionLimitError):
            parser.parse(self._nested(6))

    def test_default_limit_rejects_pathological_input(self) -> None:
        """Adversarial nesting fails cleanly instead of exhausting the stack."""
        with pytest.raises(RecursionLimitError):
            parse(self._nested(5000))

    @given(depth=st.integers(min_value=1, max_value=20))
    def test_nesting_is_preserved(self, depth: int) -> None:
        """Every level of nesting appears in the AST."""
        element = parse(self._nested(depth)).elements[0]
        levels = 0
        while isinstance(element, SelectorBlock):
            levels += 1
            element = element.cases[0].value.elements[0]

        assert levels == depth
        assert element == Literal("x")
