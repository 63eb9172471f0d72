"""Tests for compiler.lowering: AST to template lowering and dependency tracking."""

from __future__ import annotations

import pytest

from mfcompiler.compiler import Compiler, FunctionDef, NestedGroup, Template
from mfcompiler.compiler.nodes import (
    FormatterCall,
    Interpolation,
    NumberSign,
    PluralCall,
    SelectCall,
    Text,
)
from mfcompiler.config import CompileOptions
from mfcompiler.constants import LEFT_TO_RIGHT_MARK, RIGHT_TO_LEFT_MARK
from mfcompiler.diagnostics import (
    DiagnosticCode,
    MessageSyntaxError,
    MissingOtherCaseError,
    RecursionLimitError,
    UnknownFormatterError,
    UnknownLocaleError,
)
from mfcompiler.runtime import BUILTIN_FORMATTERS, PluralRuleRegistry


def _compiler(
    locales: list[str] | None = None, options: CompileOptions | None = None
) -> Compiler:
    codes = locales or ["en"]
    return Compiler(
        PluralRuleRegistry(codes),
        formatters=BUILTIN_FORMATTERS,
        default_locale=codes[0],
        options=options,
    )


def _pattern(source: str, **kwargs: object) -> FunctionDef:
    node = _compiler(**kwargs).compile(source)  # type: ignore[arg-type]
    assert FunctionDef.guard(node)
    return node


# ============================================================================
# PATTERN LOWERING
# ============================================================================


class TestPatternLowering:
    """Element-by-element lowering."""

    def test_static_text(self) -> None:
        """Plain text lowers to one Text part with no dependencies."""
        node = _pattern("Hello")

        assert node.template == Template((Text("Hello"),))
        assert node.template.is_static
        assert node.dependencies.is_empty

    def test_empty_pattern(self) -> None:
        """An empty pattern has no parts."""
        assert _pattern("").template.parts == ()

    def test_interpolation(self) -> None:
        """{name} lowers to an unmarked interpolation."""
        node = _pattern("Hi {name}!")

        assert node.template.parts == (Text("Hi "), Interpolation("name"), Text("!"))
        assert node.dependencies.is_empty

    def test_adjacent_text_merged(self) -> None:
        """Quoted runs merge with surrounding text."""
        assert _pattern("a '{b}' c").template.parts == (Text("a {b} c"),)

    def test_plural(self) -> None:
        """Plural blocks record the helper and the locale."""
        node = _pattern("{n, plural, offset:1 =0{none} one{# one} other{# many}}")
        (call,) = node.template.parts

        assert isinstance(call, PluralCall)
        assert (call.name, call.offset, call.locale, call.ordinal) == ("n", 1, "en", False)
        assert [key for key, _ in call.cases] == ["=0", "one", "other"]
        assert call.cases[1][1].parts == (NumberSign("n", 1), Text(" one"))
        assert node.dependencies.helpers == {"plural", "number"}
        assert node.dependencies.locales == {"en"}

    def test_exact_keys_normalised(self) -> None:
        """'=1.0' is stored as '=1'."""
        (call,) = _pattern("{n, plural, =1.0{a} other{b}}").template.parts

        assert isinstance(call, PluralCall)
        assert call.cases[0][0] == "=1"

    def test_selectordinal(self) -> None:
        """selectordinal sets the ordinal flag."""
        (call,) = _pattern("{n, selectordinal, one{#st} other{#th}}").template.parts

        assert isinstance(call, PluralCall)
        assert call.ordinal

    def test_select(self) -> None:
        """select records only its own helper."""
        node = _pattern("{g, select, a{x} other{y}}")

        assert isinstance(node.template.parts[0], SelectCall)
        assert node.dependencies.helpers == {"select"}
        assert node.dependencies.locales == frozenset()

    def test_number_sign_targets_closest_plural(self) -> None:
        """'#' inside a nested select refers to the enclosing plural."""
        (outer,) = _pattern(
            "{a, plural, offset:2 other{{g, select, other{{b, plural, other{#}} #}}}}"
        ).template.parts

        assert isinstance(outer, PluralCall)
        (select,) = outer.cases[0][1].parts
        assert isinstance(select, SelectCall)
        inner, space, sign = select.cases[0][1].parts
        assert isinstance(inner, PluralCall)
        assert inner.cases[0][1].parts == (NumberSign("b", 0),)
        assert space == Text(" ")
        assert sign == NumberSign("a", 2)

    def test_strict_mode_hash_in_nested_select(self) -> None:
        """Strict mode keeps '#' literal inside a nested select."""
        options = CompileOptions(strict_number_sign=True)
        (outer,) = _pattern("{n, plural, other{{g, select, other{#}}}}", options=options).template.parts

        assert isinstance(outer, PluralCall)
        (select,) = outer.cases[0][1].parts
        assert isinstance(select, SelectCall)
        assert select.cases[0][1].parts == (Text("#"),)

    def test_formatter(self) -> None:
        """Format arguments record the formatter."""
        node = _pattern("{d, date, short}")

        assert node.template.parts == (FormatterCall("d", "date", "short", "en"),)
        assert node.dependencies.formatters == {"date"}
        assert node.dependencies.helpers == frozenset()

    def test_unknown_formatter(self) -> None:
        """Unregistered format types fail with a located diagnostic."""
        with pytest.raises(UnknownFormatterError) as exc_info:
            _pattern("Took {t, duration}")

        diagnostic = exc_info.value.diagnostic
        assert diagnostic is not None
        assert diagnostic.code == DiagnosticCode.UNKNOWN_FORMATTER
        assert diagnostic.span is not None
        assert diagnostic.span.column == 6


# ============================================================================
# BIDI
# ============================================================================


class TestBidi:
    """Directional marks around interpolated values."""

    def test_off_by_default(self) -> None:
        """No marks without bidi support."""
        assert _pattern("{x}").template.parts == (Interpolation("x", ""),)

    def test_ltr(self) -> None:
        """Left-to-right locales use LRM."""
        node = _pattern("{x}", options=CompileOptions(bidi_support=True))

        assert node.template.parts == (Interpolation("x", LEFT_TO_RIGHT_MARK),)

    def test_rtl(self) -> None:
        """Right-to-left locales use RLM, formatters included."""
        node = _pattern(
            "{x} {n, number}", locales=["he"], options=CompileOptions(bidi_support=True)
        )

        assert node.template.parts[0] == Interpolation("x", RIGHT_TO_LEFT_MARK)
        formatter = node.template.parts[2]
        assert isinstance(formatter, FormatterCall)
        assert formatter.mark == RIGHT_TO_LEFT_MARK


# ============================================================================
# TREES
# ============================================================================


class TestTrees:
    """Message tree compilation and locale resolution."""

    def test_structure_mirrors_input(self) -> None:
        """Groups keep keys and order."""
        node = _compiler().compile({"b": "B", "a": {"c": "C"}})

        assert isinstance(node, NestedGroup)
        assert [key for key, _ in node.children] == ["b", "a"]
        assert isinstance(node.children[1][1], NestedGroup)

    def test_locale_keys_select_locale(self) -> None:
        """The first locale key on a path sets the leaf locale."""
        node = _compiler(["en", "fr"]).compile(
            {"fr": {"x": "{n, plural, one{a} other{b}}"}, "misc": "{n, plural, one{a} other{b}}"}
        )

        assert isinstance(node, NestedGroup)
        fr_group = node.children[0][1]
        assert isinstance(fr_group, NestedGroup)
        assert fr_group.children[0][1].locale == "fr"  # type: ignore[union-attr]
        assert node.children[1][1].locale == "en"  # type: ignore[union-attr]
        assert node.dependencies.locales == {"en", "fr"}

    def test_outer_locale_key_wins(self) -> None:
        """A nested locale key does not override an outer one."""
        node = _compiler(["en", "fr"]).compile({"fr": {"en": "x"}})

        assert isinstance(node, NestedGroup)
        inner = node.children[0][1]
        assert isinstance(inner, NestedGroup)
        assert inner.children[0][1].locale == "fr"  # type: ignore[union-attr]

    def test_explicit_locale_overrides_keys(self) -> None:
        """An explicit locale applies to every leaf."""
        node = _compiler(["en", "fr"]).compile({"en": {"x": "y"}}, locale="fr")

        assert isinstance(node, NestedGroup)
        inner = node.children[0][1]
        assert isinstance(inner, NestedGroup)
        assert inner.children[0][1].locale == "fr"  # type: ignore[union-attr]

    def test_group_dependencies_are_union(self) -> None:
        """Groups depend on what any child depends on."""
        node = _compiler().compile({"a": "{g, select, other{x}}", "b": "{d, date}", "c": "text"})

        assert node.dependencies.helpers == {"select"}
        assert node.dependencies.formatters == {"date"}

    def test_error_anywhere_fails_whole_tree(self) -> None:
        """One invalid leaf aborts compilation and names the leaf."""
        tree = {"ok": "fine", "deep": {"bad": "{n, plural, one{x}}"}}

        with pytest.raises(MissingOtherCaseError) as exc_info:
            _compiler().compile(tree)

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.message_path == "deep/bad"

    def test_syntax_error_names_leaf(self) -> None:
        """Syntax errors also carry the message path."""
        with pytest.raises(MessageSyntaxError) as exc_info:
            _compiler().compile({"a": {"b": "{oops"}})

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.message_path == "a/b"

    def test_invalid_leaf_type(self) -> None:
        """Leaves must be strings or mappings."""
        with pytest.raises(TypeError, match="a/n"):
            _compiler().compile({"a": {"n": 42}})  # type: ignore[dict-item]

    def test_tree_depth_limit(self) -> None:
        """Tree nesting is bounded by max_depth."""
        tree: dict[str, object] = {"leaf": "x"}
        for _ in range(10):
            tree = {"k": tree}

        with pytest.raises(RecursionLimitError):
            _compiler(options=CompileOptions(max_depth=5)).compile(tree)  # type: ignore[arg-type]

    def test_unknown_locale(self) -> None:
        """Compiling for an unregistered locale fails."""
        with pytest.raises(UnknownLocaleError):
            _compiler().compile("x", locale="de")

    def test_regional_locale_uses_language(self) -> None:
        """A regional code resolves to its registered language."""
        assert _compiler().compile("x", locale="en-GB").locale == "en"  # type: ignore[union-attr]
