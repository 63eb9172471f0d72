"""Exception hierarchy with structured diagnostics.

Compile-time errors derive from MessageCompileError (semantic) or
MessageSyntaxError (grammar); format-time errors raised by compiled
functions derive from RuntimeTypeError. All exceptions can carry a
Diagnostic for rich error information.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class MessageFormatError(Exception):
    """Base exception for all mfcompiler errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize MessageFormatError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


class MessageSyntaxError(MessageFormatError):
    """Malformed pattern.

    Attributes:
        source: The pattern being parsed
        offset: Character offset of the offending position (0-indexed)
        line: Line of the offending position (1-indexed)
        column: Column of the offending position (1-indexed)
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        source: str = "",
        offset: int = 0,
        line: int = 1,
        column: int = 1,
    ) -> None:
        super().__init__(message)
        self.source = source
        self.offset = offset
        self.line = line
        self.column = column

    def __str__(self) -> str:
        return f"{self.line}:{self.column}: {self.args[0]}"


class MessageCompileError(MessageFormatError):
    """Semantic or environmental error detected while compiling.

    Any MessageCompileError aborts the whole compilation; no partial
    artifact is produced.
    """


class MissingOtherCaseError(MessageCompileError):
    """Selector block lacks the mandatory 'other' case."""


class DuplicateCaseError(MessageCompileError):
    """Case key repeated within one selector block."""


class InvalidCaseKeyError(MessageCompileError):
    """Plural category key not defined by the active locale's rules."""


class UnknownFormatterError(MessageCompileError):
    """Format type has no built-in or registered formatter."""


class UnknownLocaleError(MessageCompileError):
    """No plural-rule function resolvable after fallback."""


class RecursionLimitError(MessageCompileError):
    """Sub-message or message tree nesting exceeds the configured bound.

    This error indicates either:
    - Adversarial input designed to cause stack overflow
    - Unintended deep nesting in message catalogues
    """


class RuntimeTypeError(MessageFormatError, TypeError):
    """Format-time error: a value violates a runtime helper's contract.

    Raised by compiled functions (number-sign substitution with an offset,
    plural selection, built-in formatters) and propagated to the caller
    unmodified.
    """


class RenderError(MessageFormatError):
    """Artifact cannot be rendered to source text."""
