"""Message syntax package.

Provides the parser, AST definitions and semantic validation. Separate
from the compiler so that tooling can inspect patterns without compiling.

Python 3.13+.
"""

from .ast import (
    ASTNode,
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
from .cursor import Cursor, ParseResult
from .parser import MessageParser
from .validator import MessageValidator

__all__ = [
    "ASTNode",
    "Argument",
    "Case",
    "Cursor",
    "FormatArg",
    "Literal",
    "Message",
    "MessageElement",
    "MessageParser",
    "MessageValidator",
    "NumberSign",
    "ParseResult",
    "SelectorBlock",
    "Span",
    "parse",
]


def parse(source: str, *, strict_number_sign: bool = False) -> Message:
    """Parse a message pattern into an AST.

    Convenience function for MessageParser.parse().

    Example:
        >>> from mfcompiler.syntax import parse
        >>> message = parse("{count, plural, one{# item} other{# items}}")
        >>> message.elements[0].keys
        ('one', 'other')
    """
    parser = MessageParser(strict_number_sign=strict_number_sign)
    return parser.parse(source)
