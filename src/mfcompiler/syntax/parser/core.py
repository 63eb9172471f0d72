"""Core message parser implementation.

This module provides the MessageParser class that turns one pattern
string into a :class:`~mfcompiler.syntax.ast.Message`.

Architecture:
    The parser uses an immutable cursor pattern (:class:`~mfcompiler.syntax.cursor.Cursor`)
    to traverse the pattern. Each grammar rule in :mod:`~mfcompiler.syntax.parser.rules`
    returns a :class:`~mfcompiler.syntax.cursor.ParseResult` containing the parsed
    node and updated cursor position, or raises MessageSyntaxError.

    Unlike a resource parser there is no error recovery: a pattern either
    parses completely or compilation of the whole catalogue is aborted.

Security:
    Includes configurable nesting depth limit to prevent stack exhaustion
    from deeply nested selector sub-messages.
"""

from mfcompiler.constants import MAX_DEPTH
from mfcompiler.core.depth_guard import depth_clamp
from mfcompiler.syntax.ast import Message
from mfcompiler.syntax.cursor import Cursor
from mfcompiler.syntax.parser.rules import ParseContext, parse_message

__all__ = ["MessageParser"]


class MessageParser:
    """Message pattern parser using immutable cursor pattern.

    Design:
    - Immutable cursor prevents infinite loops (no manual guards needed)
    - Reentrant: all state lives in ParseContext, passed explicitly
    - Error messages include line:column of the offending character

    Attributes:
        max_nesting_depth: Maximum selector nesting depth (default: 100)
        strict_number_sign: '#' only directly inside plural cases
    """

    __slots__ = ("_max_nesting_depth", "_strict_number_sign")

    def __init__(
        self,
        *,
        max_nesting_depth: int | None = None,
        strict_number_sign: bool = False,
    ) -> None:
        """Initialize parser.

        Args:
            max_nesting_depth: Maximum selector nesting depth (default: 100).
                              Clamped below the interpreter recursion limit.
            strict_number_sign: When True, '#' inside a select nested in a
                               plural case is literal text.
        """
        self._max_nesting_depth = depth_clamp(
            max_nesting_depth if max_nesting_depth is not None else MAX_DEPTH
        )
        self._strict_number_sign = strict_number_sign

    @property
    def max_nesting_depth(self) -> int:
        """Maximum allowed selector nesting depth."""
        return self._max_nesting_depth

    @property
    def strict_number_sign(self) -> bool:
        """Whether '#' is restricted to the cases directly inside a plural."""
        return self._strict_number_sign

    def parse(self, source: str) -> Message:
        """Parse one pattern into a Message.

        Args:
            source: Pattern text

        Returns:
            Message with the pattern's elements

        Raises:
            MessageSyntaxError: If the pattern is malformed
            RecursionLimitError: If selector nesting exceeds max_nesting_depth

        Example:
            >>> parser = MessageParser()
            >>> parser.parse("Hi {name}!").elements[1].name
            'name'
        """
        context = ParseContext(
            max_nesting_depth=self._max_nesting_depth,
            strict=self._strict_number_sign,
        )
        result = parse_message(Cursor(source, 0), context)
        return result.value
