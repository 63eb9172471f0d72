"""Primitive parsing utilities for the message grammar.

This module provides low-level parsers for names, integers and case keys,
plus the helper that turns a cursor position into a MessageSyntaxError.
"""

import re

from mfcompiler.constants import PLURAL_CATEGORIES, SYNTAX_CHARS
from mfcompiler.diagnostics import Diagnostic, MessageSyntaxError
from mfcompiler.syntax.cursor import Cursor, ParseResult

__all__ = [
    "is_name_char",
    "is_valid_plural_key",
    "parse_integer",
    "parse_name",
    "syntax_error",
]

# ASCII digits only - str.isdigit() accepts superscripts that int() rejects.
_ASCII_DIGITS: str = "0123456789"

# Exact-value plural key body: '=0', '=-1', '=1.5'.
_EXACT_KEY_RE = re.compile(r"=-?[0-9]+(?:\.[0-9]+)?")


def is_name_char(ch: str) -> bool:
    """Check if character may appear in an argument name, type or case key."""
    return not ch.isspace() and ch not in SYNTAX_CHARS


def is_valid_plural_key(key: str) -> bool:
    """Check plural/selectordinal case key syntax.

    Example:
        >>> is_valid_plural_key("=0"), is_valid_plural_key("few")
        (True, True)
        >>> is_valid_plural_key("lots")
        False
    """
    if key.startswith("="):
        return _EXACT_KEY_RE.fullmatch(key) is not None
    return key in PLURAL_CATEGORIES


def parse_name(cursor: Cursor) -> ParseResult[str] | None:
    """Parse a run of name characters.

    Examples:
        count -> "count"
        0 -> "0"
        =1 -> "=1"

    Returns:
        ParseResult with the name, or None if no name character is present
    """
    start_pos = cursor.pos
    while not cursor.is_eof and is_name_char(cursor.current):
        cursor = cursor.advance()
    if cursor.pos == start_pos:
        return None
    return ParseResult(Cursor(cursor.source, start_pos).slice_to(cursor.pos), cursor)


def parse_integer(cursor: Cursor) -> ParseResult[int] | None:
    """Parse a non-negative decimal integer: [0-9]+"""
    start_pos = cursor.pos
    while not cursor.is_eof and cursor.current in _ASCII_DIGITS:
        cursor = cursor.advance()
    if cursor.pos == start_pos:
        return None
    return ParseResult(int(Cursor(cursor.source, start_pos).slice_to(cursor.pos)), cursor)


def syntax_error(cursor: Cursor, diagnostic: Diagnostic) -> MessageSyntaxError:
    """Build a MessageSyntaxError located at the cursor position."""
    line, column = cursor.compute_line_col()
    return MessageSyntaxError(
        diagnostic,
        source=cursor.source,
        offset=cursor.pos,
        line=line,
        column=column,
    )
