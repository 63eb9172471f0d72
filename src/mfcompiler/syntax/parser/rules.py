"""Grammar rules for the message parser.

This module provides all parsing rules for message grammar constructs:
- Message parsing (literal text, apostrophe quoting, number signs)
- Placeholder parsing ({name}, {name, type}, {name, type, style})
- Selector parsing (plural, selectordinal and select blocks with cases)

All grammar rules are co-located in a single module because messages,
placeholders and selector cases are mutually recursive.

Lookahead Patterns:
    - `{` starts a placeholder
    - `}` ends a selector case (or is an error at top level)
    - `#` is a number sign inside plural cases, literal text elsewhere
    - `'` starts a quoted region only before `{`, `}` or a special `#`;
      `''` is always one literal apostrophe

Security:
    Includes configurable nesting depth limit to prevent stack exhaustion
    from deeply nested selectors.
"""

from dataclasses import dataclass

from mfcompiler.constants import MAX_DEPTH
from mfcompiler.diagnostics import ErrorTemplate, RecursionLimitError
from mfcompiler.enums import SelectorKind
from mfcompiler.syntax.ast import (
    Argument,
    Case,
    FormatArg,
    Literal,
    Message,
    MessageElement,
    NumberSign,
    SelectorBlock,
    Span,
)
from mfcompiler.syntax.cursor import Cursor, ParseResult
from mfcompiler.syntax.parser.primitives import (
    is_valid_plural_key,
    parse_integer,
    parse_name,
    syntax_error,
)

__all__ = ["ParseContext", "parse_message"]

_SELECTOR_KINDS: dict[str, SelectorKind] = {kind.value: kind for kind in SelectorKind}

_OFFSET_KEYWORD: str = "offset"

# Characters that interrupt a literal text run.
_TEXT_STOP_CHARS: str = "{}#'"


@dataclass(frozen=True, slots=True)
class ParseContext:
    """Explicit context for parsing operations.

    Replaces thread-local state with explicit parameter passing, so the
    parser is reentrant and needs no state reset between patterns.

    Attributes:
        max_nesting_depth: Maximum allowed selector nesting depth
        current_depth: Current nesting depth (0 = top level)
        in_plural: Whether '#' is a number sign at this position
        strict: Restrict '#' to the cases directly inside a plural block
    """

    max_nesting_depth: int = MAX_DEPTH
    current_depth: int = 0
    in_plural: bool = False
    strict: bool = False

    def is_depth_exceeded(self) -> bool:
        """Check if maximum nesting depth has been reached."""
        return self.current_depth >= self.max_nesting_depth

    def enter_case(self, kind: SelectorKind) -> "ParseContext":
        """Create context for the sub-message of a selector case.

        Raises:
            RecursionLimitError: If nesting would exceed max_nesting_depth
        """
        if self.is_depth_exceeded():
            raise RecursionLimitError(
                ErrorTemplate.recursion_limit_exceeded(self.max_nesting_depth)
            )
        return ParseContext(
            max_nesting_depth=self.max_nesting_depth,
            current_depth=self.current_depth + 1,
            in_plural=kind.is_plural or (self.in_plural and not self.strict),
            strict=self.strict,
        )


# =============================================================================
# Message Parsing
# =============================================================================


def parse_message(
    cursor: Cursor, context: ParseContext, *, nested: bool = False
) -> ParseResult[Message]:
    """Parse message elements until end of input or a closing brace.

    Args:
        cursor: Current position in source
        context: Parse context (depth, number-sign mode)
        nested: True inside a selector case, where '}' ends the message

    Returns:
        ParseResult with the Message; for nested messages the cursor is
        left on the closing '}' (or at EOF, which the caller reports)

    Raises:
        MessageSyntaxError: On an unmatched '}' at top level or malformed
            placeholders
    """
    elements: list[MessageElement] = []
    text: list[str] = []

    while not cursor.is_eof:
        ch = cursor.current

        if ch == "{":
            if text:
                elements.append(Literal("".join(text)))
                text = []
            placeholder = parse_placeholder(cursor, context)
            elements.append(placeholder.value)
            cursor = placeholder.cursor
        elif ch == "}":
            if nested:
                break
            raise syntax_error(cursor, ErrorTemplate.unmatched_closing_brace(cursor.source_span()))
        elif ch == "#" and context.in_plural:
            if text:
                elements.append(Literal("".join(text)))
                text = []
            elements.append(NumberSign(Span(cursor.pos, cursor.pos + 1)))
            cursor = cursor.advance()
        elif ch == "'":
            quoted = parse_apostrophe(cursor, context)
            text.append(quoted.value)
            cursor = quoted.cursor
        else:
            run = parse_text_run(cursor)
            text.append(run.value)
            cursor = run.cursor

    if text:
        elements.append(Literal("".join(text)))
    return ParseResult(Message(tuple(elements)), cursor)


def parse_text_run(cursor: Cursor) -> ParseResult[str]:
    """Consume plain text up to the next syntax character."""
    start_pos = cursor.pos
    cursor = cursor.advance()
    while not cursor.is_eof and cursor.current not in _TEXT_STOP_CHARS:
        cursor = cursor.advance()
    return ParseResult(Cursor(cursor.source, start_pos).slice_to(cursor.pos), cursor)


def parse_apostrophe(cursor: Cursor, context: ParseContext) -> ParseResult[str]:
    """Parse an apostrophe: escape, quoted region, or literal.

    Examples:
        ''           -> "'"
        '{literal}'  -> "{literal}"
        don't        -> "'" (literal, nothing to quote)
        '#' in plural -> "#"

    An unterminated quoted region extends to the end of the input.
    """
    following = cursor.peek(1)
    if following == "'":
        return ParseResult("'", cursor.advance(2))
    if following is None or not _starts_quote(following, context):
        return ParseResult("'", cursor.advance())

    cursor = cursor.advance()
    chars: list[str] = []
    while not cursor.is_eof:
        ch = cursor.current
        if ch == "'":
            if cursor.peek(1) == "'":
                chars.append("'")
                cursor = cursor.advance(2)
                continue
            return ParseResult("".join(chars), cursor.advance())
        chars.append(ch)
        cursor = cursor.advance()
    return ParseResult("".join(chars), cursor)


def _starts_quote(ch: str, context: ParseContext) -> bool:
    return ch in "{}" or (ch == "#" and context.in_plural)


# =============================================================================
# Placeholder Parsing
# =============================================================================


def parse_placeholder(cursor: Cursor, context: ParseContext) -> ParseResult[MessageElement]:
    """Parse a placeholder starting at '{'.

    Grammar:
        '{' name '}'
        '{' name ',' type '}'
        '{' name ',' type ',' style '}'
        '{' name ',' (plural|selectordinal) ',' [offset:N] (key '{' message '}')+ '}'
        '{' name ',' select ',' (key '{' message '}')+ '}'
    """
    start = cursor
    cursor = cursor.advance().skip_whitespace()

    name_result = parse_name(cursor)
    if name_result is None:
        found = cursor.peek()
        raise syntax_error(
            cursor, ErrorTemplate.invalid_argument_name(found, cursor.source_span())
        )
    name = name_result.value
    cursor = name_result.cursor.skip_whitespace()

    if (after := cursor.expect("}")) is not None:
        return ParseResult(Argument(name, Span(start.pos, after.pos)), after)
    cursor = _expect(cursor, ",", ("}", ",")).skip_whitespace()

    type_result = parse_name(cursor)
    if type_result is None:
        raise syntax_error(
            cursor,
            ErrorTemplate.expected_token(("type",), cursor.peek(), cursor.source_span()),
        )
    format_type = type_result.value
    cursor = type_result.cursor.skip_whitespace()

    kind = _SELECTOR_KINDS.get(format_type)
    if kind is not None:
        cursor = _expect(cursor, ",", (",",))
        return parse_selector(cursor, start, name, kind, context)

    if (after := cursor.expect("}")) is not None:
        return ParseResult(FormatArg(name, format_type, None, Span(start.pos, after.pos)), after)
    cursor = _expect(cursor, ",", ("}", ","))

    style_result = parse_style(cursor)
    after = style_result.cursor.advance()
    style = style_result.value or None
    return ParseResult(FormatArg(name, format_type, style, Span(start.pos, after.pos)), after)


def parse_style(cursor: Cursor) -> ParseResult[str]:
    """Parse a format style up to the placeholder's closing '}'.

    Nested braces must balance; quoted regions are kept verbatim and may
    contain unbalanced braces. Surrounding whitespace is trimmed.

    Returns:
        ParseResult with the style text and the cursor on the closing '}'
    """
    start_pos = cursor.pos
    depth = 0
    while not cursor.is_eof:
        ch = cursor.current
        if ch == "'":
            cursor = _skip_quoted_style(cursor)
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            if depth == 0:
                style = Cursor(cursor.source, start_pos).slice_to(cursor.pos).strip()
                return ParseResult(style, cursor)
            depth -= 1
        cursor = cursor.advance()
    raise syntax_error(cursor, ErrorTemplate.unexpected_eof(cursor.pos, cursor.source_span()))


def _skip_quoted_style(cursor: Cursor) -> Cursor:
    following = cursor.peek(1)
    if following == "'" or following is None or following not in "{}":
        return cursor.advance(2 if following == "'" else 1)
    cursor = cursor.advance()
    while not cursor.is_eof:
        if cursor.current == "'":
            if cursor.peek(1) != "'":
                return cursor.advance()
            cursor = cursor.advance()
        cursor = cursor.advance()
    return cursor


# =============================================================================
# Selector Parsing
# =============================================================================


def parse_selector(
    cursor: Cursor,
    start: Cursor,
    name: str,
    kind: SelectorKind,
    context: ParseContext,
) -> ParseResult[SelectorBlock]:
    """Parse the body of a selector block after '{name, kind,'.

    Only syntax is checked here; the mandatory 'other' case and duplicate
    keys are validated by the compiler.
    """
    cursor = cursor.skip_whitespace()

    offset: int | None = None
    if kind.is_plural and _at_offset(cursor):
        offset_result = parse_offset(cursor)
        offset = offset_result.value
        cursor = offset_result.cursor.skip_whitespace()

    case_context = context.enter_case(kind)
    cases: list[Case] = []
    while True:
        cursor = cursor.skip_whitespace()
        if cases and (after := cursor.expect("}")) is not None:
            block = SelectorBlock(kind, name, tuple(cases), offset, Span(start.pos, after.pos))
            return ParseResult(block, after)
        case_result = parse_case(cursor, kind, case_context)
        cases.append(case_result.value)
        cursor = case_result.cursor


def _at_offset(cursor: Cursor) -> bool:
    if not cursor.source.startswith(_OFFSET_KEYWORD, cursor.pos):
        return False
    return cursor.advance(len(_OFFSET_KEYWORD)).skip_whitespace().peek() == ":"


def parse_offset(cursor: Cursor) -> ParseResult[int]:
    """Parse 'offset' ':' N with N a non-negative integer."""
    cursor = cursor.advance(len(_OFFSET_KEYWORD)).skip_whitespace()
    cursor = cursor.advance().skip_whitespace()  # ':' checked by lookahead
    value = parse_integer(cursor)
    if value is None:
        bad = parse_name(cursor)
        text = bad.value if bad is not None else (cursor.peek() or "")
        raise syntax_error(cursor, ErrorTemplate.invalid_offset(text, cursor.source_span()))
    return value


def parse_case(cursor: Cursor, kind: SelectorKind, context: ParseContext) -> ParseResult[Case]:
    """Parse one case: key '{' message '}'."""
    key_result = parse_name(cursor)
    if key_result is None:
        if cursor.is_eof:
            raise syntax_error(
                cursor, ErrorTemplate.unexpected_eof(cursor.pos, cursor.source_span())
            )
        raise syntax_error(
            cursor,
            ErrorTemplate.expected_token(("case key", "}"), cursor.peek(), cursor.source_span()),
        )
    key = key_result.value
    key_span = Span(cursor.pos, key_result.cursor.pos)
    if kind.is_plural and not is_valid_plural_key(key):
        raise syntax_error(
            cursor,
            ErrorTemplate.invalid_case_key_syntax(
                key, kind.value, cursor.source_span(key_result.cursor.pos)
            ),
        )

    cursor = _expect(key_result.cursor.skip_whitespace(), "{", ("{",))
    body = parse_message(cursor, context, nested=True)
    cursor = body.cursor
    if cursor.is_eof:
        raise syntax_error(cursor, ErrorTemplate.unexpected_eof(cursor.pos, cursor.source_span()))
    return ParseResult(Case(key, body.value, key_span), cursor.advance())


def _expect(cursor: Cursor, char: str, expected: tuple[str, ...]) -> Cursor:
    after = cursor.expect(char)
    if after is None:
        if cursor.is_eof:
            diagnostic = ErrorTemplate.unexpected_eof(cursor.pos, cursor.source_span())
        else:
            diagnostic = ErrorTemplate.expected_token(
                expected, cursor.peek(), cursor.source_span()
            )
        raise syntax_error(cursor, diagnostic)
    return after
