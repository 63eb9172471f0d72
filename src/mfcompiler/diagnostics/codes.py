"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Syntax errors (parser failures)
        2000-2999: Semantic errors (selector validation)
        3000-3999: Environment errors (locales, formatters, limits)
        4000-4999: Format-time errors (compiled function invocation)
        5000-5999: Rendering errors (textual artifact emission)
    """

    # Syntax errors (1000-1999)
    UNEXPECTED_EOF = 1001
    EXPECTED_TOKEN = 1003
    INVALID_ARGUMENT_NAME = 1004
    INVALID_CASE_KEY_SYNTAX = 1005
    INVALID_OFFSET = 1006
    UNMATCHED_CLOSING_BRACE = 1007

    # Semantic errors (2000-2999)
    MISSING_OTHER_CASE = 2001
    DUPLICATE_CASE = 2002
    INVALID_CASE_KEY = 2003

    # Environment errors (3000-3999)
    UNKNOWN_FORMATTER = 3001
    UNKNOWN_LOCALE = 3002
    RECURSION_LIMIT_EXCEEDED = 3003

    # Format-time errors (4000-4999)
    INVALID_FORMATTER_VALUE = 4001

    # Rendering errors (5000-5999)
    UNRENDERABLE_CALLABLE = 5001
    INVALID_RENDER_TARGET = 5002


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Source code location for error reporting.

    Note:
        Python strings measure positions in characters (Unicode code points),
        not bytes. For multi-byte UTF-8 characters, character offset differs
        from byte offset.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, or line or
                column is less than 1 (both are 1-indexed).
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Source location (None for errors without a pattern position)
        hint: Suggestion for fixing the error
        argument_name: Argument name that caused the error (format errors)
        expected_type: Expected type for the argument (format errors)
        received_type: Actual type received (format errors)
        message_path: Path of the message within the compiled tree
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    argument_name: str | None = None
    expected_type: str | None = None
    received_type: str | None = None
    message_path: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Delegates to DiagnosticFormatter for consistent output.

        Example output:
            error[MISSING_OTHER_CASE]: Selector on 'count' has no 'other' case
              --> line 1, column 1
              = help: Add an 'other{...}' case to the plural block

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
