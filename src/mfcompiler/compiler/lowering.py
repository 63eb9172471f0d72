"""Lowering of parsed messages into compiled templates.

The Compiler walks a message tree, resolves each leaf's locale, parses
and validates the pattern, and lowers the AST into a Template. While
lowering it records exactly which helpers, plural functions and
formatters the emitted parts call; that record becomes the leaf's
DependencySet.

Locale resolution for tree input:
    1. An explicit locale applies to every leaf.
    2. Otherwise the first key on the path from the root that names a
       registered locale applies to everything below it.
    3. Otherwise the default locale applies.

Compilation is all-or-nothing: the first error in any leaf propagates out
of compile() and no partial tree is returned.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace

from mfcompiler.config import CompileOptions
from mfcompiler.constants import LEFT_TO_RIGHT_MARK, RIGHT_TO_LEFT_MARK
from mfcompiler.core.depth_guard import DepthGuard
from mfcompiler.diagnostics import (
    ErrorTemplate,
    MessageCompileError,
    MessageSyntaxError,
    UnknownFormatterError,
)
from mfcompiler.enums import SelectorKind, TextDirection
from mfcompiler.locale_utils import text_direction
from mfcompiler.runtime.dependencies import DependencySet
from mfcompiler.runtime.formatters import Formatter
from mfcompiler.runtime.plural_rules import PluralRuleRegistry
from mfcompiler.syntax import ast
from mfcompiler.syntax.cursor import Cursor
from mfcompiler.syntax.parser import MessageParser
from mfcompiler.syntax.validator import MessageValidator

from .nodes import (
    CompiledNode,
    FormatterCall,
    FunctionDef,
    Interpolation,
    NestedGroup,
    NumberSign,
    Part,
    PluralCall,
    SelectCall,
    Template,
    Text,
)

__all__ = ["Compiler", "MessageTree"]

logger = logging.getLogger(__name__)

type MessageTree = Mapping[str, str | MessageTree]


@dataclass(frozen=True, slots=True)
class _PluralScope:
    """Closest enclosing plural block, the target of '#'."""

    name: str
    offset: int


@dataclass(slots=True)
class _Lowering:
    """Per-pattern lowering state."""

    source: str
    locale: str
    mark: str
    helpers: set[str] = field(default_factory=set)
    locales: set[str] = field(default_factory=set)
    formatters: set[str] = field(default_factory=set)

    @property
    def dependencies(self) -> DependencySet:
        return DependencySet(
            helpers=frozenset(self.helpers),
            locales=frozenset(self.locales),
            formatters=frozenset(self.formatters),
        )


class Compiler:
    """Compiles patterns and message trees for a bound registry.

    All state is read-only after construction, so one Compiler can serve
    concurrent compile() calls.

    Example:
        >>> compiler = Compiler(PluralRuleRegistry("en"), formatters={}, default_locale="en")
        >>> node = compiler.compile("{n, plural, one{# day} other{# days}}")
        >>> sorted(node.dependencies.helpers)
        ['number', 'plural']
    """

    __slots__ = ("_default_locale", "_formatters", "_options", "_parser", "_registry")

    def __init__(
        self,
        registry: PluralRuleRegistry,
        *,
        formatters: Mapping[str, Formatter],
        default_locale: str,
        options: CompileOptions | None = None,
    ) -> None:
        self._registry = registry
        self._formatters = formatters
        self._default_locale = default_locale
        self._options = options if options is not None else CompileOptions()
        self._parser = MessageParser(
            max_nesting_depth=self._options.max_depth,
            strict_number_sign=self._options.strict_number_sign,
        )

    @property
    def default_locale(self) -> str:
        """Locale of leaves outside any locale-named key."""
        return self._default_locale

    def compile(self, messages: str | MessageTree, locale: str | None = None) -> CompiledNode:
        """Compile one pattern or a whole message tree.

        Args:
            messages: Pattern text, or a mapping of keys to patterns and
                nested mappings
            locale: Locale for every leaf (default: resolved per leaf)

        Returns:
            FunctionDef for a pattern, NestedGroup mirroring a tree

        Raises:
            MessageSyntaxError: A pattern is malformed
            MessageCompileError: A pattern is invalid, or a locale or
                formatter cannot be resolved
            TypeError: A tree leaf is neither text nor a mapping
        """
        if isinstance(messages, str):
            return self.compile_pattern(messages, locale or self._default_locale)
        guard = DepthGuard(max_depth=self._options.max_depth)
        node = self._compile_tree(messages, locale, locale is not None, guard, ())
        logger.debug(
            "Compiled message tree: helpers=%s locales=%s formatters=%s",
            sorted(node.dependencies.helpers),
            sorted(node.dependencies.locales),
            sorted(node.dependencies.formatters),
        )
        return node

    def _compile_tree(
        self,
        tree: MessageTree,
        locale: str | None,
        explicit: bool,
        guard: DepthGuard,
        path: tuple[str, ...],
    ) -> NestedGroup:
        with guard:
            children: list[tuple[str, CompiledNode]] = []
            for raw_key, value in tree.items():
                key = str(raw_key)
                child_locale = locale
                if not explicit and child_locale is None and key in self._registry:
                    child_locale = key
                child_path = (*path, key)
                if isinstance(value, str):
                    node: CompiledNode = self._compile_leaf(
                        value, child_locale or self._default_locale, child_path
                    )
                elif isinstance(value, Mapping):
                    node = self._compile_tree(value, child_locale, explicit, guard, child_path)
                else:
                    msg = (
                        f"Message '{'/'.join(child_path)}' must be a string or a mapping, "
                        f"got {type(value).__name__}"
                    )
                    raise TypeError(msg)
                children.append((key, node))
        return NestedGroup(
            children=tuple(children),
            dependencies=DependencySet.union(child.dependencies for _, child in children),
        )

    def _compile_leaf(self, source: str, locale: str, path: tuple[str, ...]) -> FunctionDef:
        try:
            return self.compile_pattern(source, locale)
        except (MessageSyntaxError, MessageCompileError) as e:
            if e.diagnostic is not None:
                e.diagnostic = replace(e.diagnostic, message_path="/".join(path))
            raise

    def compile_pattern(self, source: str, locale: str) -> FunctionDef:
        """Parse, validate and lower one pattern.

        Raises:
            MessageSyntaxError: The pattern is malformed
            MessageCompileError: The pattern is invalid for the locale
        """
        code = self._registry.resolve_code(locale)
        message = self._parser.parse(source)

        MessageValidator(
            locale_code=code,
            cardinal=self._registry.categories(code),
            ordinal=self._registry.categories(code, ordinal=True),
            max_depth=self._options.max_depth,
        ).validate(message, source)

        state = _Lowering(source=source, locale=code, mark=self._bidi_mark(code))
        template = self._lower_message(message, state, None)
        return FunctionDef(
            template=template,
            locale=code,
            dependencies=state.dependencies,
            source=source,
        )

    def _bidi_mark(self, locale: str) -> str:
        if not self._options.bidi_support:
            return ""
        if text_direction(locale) is TextDirection.RTL:
            return RIGHT_TO_LEFT_MARK
        return LEFT_TO_RIGHT_MARK

    def _lower_message(
        self, message: ast.Message, state: _Lowering, scope: _PluralScope | None
    ) -> Template:
        parts: list[Part] = []
        for element in message.elements:
            part = self._lower_element(element, state, scope)
            if isinstance(part, Text) and parts and isinstance(parts[-1], Text):
                parts[-1] = Text(parts[-1].text + part.text)
            else:
                parts.append(part)
        return Template(tuple(parts))

    def _lower_element(
        self, element: ast.MessageElement, state: _Lowering, scope: _PluralScope | None
    ) -> Part:
        match element:
            case ast.Literal(text=text):
                return Text(text)
            case ast.Argument(name=name):
                return Interpolation(name, state.mark)
            case ast.NumberSign():
                if scope is None:
                    return Text("#")
                state.helpers.add("number")
                return NumberSign(scope.name, scope.offset)
            case ast.FormatArg():
                return self._lower_format_arg(element, state)
            case ast.SelectorBlock(kind=SelectorKind.SELECT):
                state.helpers.add("select")
                return SelectCall(element.name, self._lower_cases(element, state, scope))
            case ast.SelectorBlock():
                state.helpers.add("plural")
                state.locales.add(state.locale)
                offset = element.offset or 0
                inner = _PluralScope(element.name, offset)
                return PluralCall(
                    name=element.name,
                    offset=offset,
                    locale=state.locale,
                    ordinal=element.kind is SelectorKind.SELECTORDINAL,
                    cases=self._lower_cases(element, state, inner),
                )

    def _lower_cases(
        self, block: ast.SelectorBlock, state: _Lowering, scope: _PluralScope | None
    ) -> tuple[tuple[str, Template], ...]:
        return tuple(
            (block.match_key(case), self._lower_message(case.value, state, scope))
            for case in block.cases
        )

    def _lower_format_arg(self, element: ast.FormatArg, state: _Lowering) -> FormatterCall:
        if element.format_type not in self._formatters:
            span = None
            if element.span is not None:
                span = Cursor(state.source, element.span.start).source_span(element.span.end)
            raise UnknownFormatterError(ErrorTemplate.unknown_formatter(element.format_type, span))
        state.formatters.add(element.format_type)
        return FormatterCall(
            name=element.name,
            format_type=element.format_type,
            style=element.style,
            locale=state.locale,
            mark=state.mark,
        )
