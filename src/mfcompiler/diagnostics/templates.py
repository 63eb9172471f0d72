"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterable

from .codes import Diagnostic, DiagnosticCode, SourceSpan

__all__ = ["ErrorTemplate"]


def _describe(found: str | None) -> str:
    return "end of input" if found is None else repr(found)


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This provides:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    # =========================================================================
    # SYNTAX ERRORS (1000-1999)
    # =========================================================================

    @staticmethod
    def unexpected_eof(position: int, span: SourceSpan | None = None) -> Diagnostic:
        """Pattern ended inside an unterminated construct."""
        msg = f"Unexpected end of input at position {position}"
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_EOF,
            message=msg,
            span=span,
            hint="Check for unclosed braces",
        )

    @staticmethod
    def expected_token(
        expected: Iterable[str], found: str | None, span: SourceSpan | None = None
    ) -> Diagnostic:
        """A specific token was required but something else was found.

        Args:
            expected: Acceptable tokens
            found: Character found instead (None at end of input)
            span: Location of the offending character
        """
        expected_str = ", ".join(f"'{e}'" for e in expected)
        msg = f"Expected {expected_str} but found {_describe(found)}"
        return Diagnostic(
            code=DiagnosticCode.EXPECTED_TOKEN,
            message=msg,
            span=span,
        )

    @staticmethod
    def invalid_argument_name(found: str | None, span: SourceSpan | None = None) -> Diagnostic:
        """Placeholder does not start with an argument name."""
        msg = f"Expected argument name but found {_describe(found)}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_ARGUMENT_NAME,
            message=msg,
            span=span,
            hint="Argument names may not contain whitespace or any of { } , # '",
        )

    @staticmethod
    def invalid_case_key_syntax(
        key: str, kind: str, span: SourceSpan | None = None
    ) -> Diagnostic:
        """Case key is not valid for the selector kind."""
        msg = f"Invalid {kind} case key '{key}'"
        return Diagnostic(
            code=DiagnosticCode.INVALID_CASE_KEY_SYNTAX,
            message=msg,
            span=span,
            hint="Plural keys are '=N' or one of: zero, one, two, few, many, other",
        )

    @staticmethod
    def invalid_offset(text: str, span: SourceSpan | None = None) -> Diagnostic:
        """Offset value is not a non-negative integer."""
        msg = f"Invalid plural offset '{text}'"
        return Diagnostic(
            code=DiagnosticCode.INVALID_OFFSET,
            message=msg,
            span=span,
            hint="Use offset:N with a non-negative integer N",
        )

    @staticmethod
    def unmatched_closing_brace(span: SourceSpan | None = None) -> Diagnostic:
        """A '}' appeared without a matching '{'."""
        return Diagnostic(
            code=DiagnosticCode.UNMATCHED_CLOSING_BRACE,
            message="Unmatched '}' in message text",
            span=span,
            hint="Quote literal braces as '}'",
        )

    # =========================================================================
    # SEMANTIC ERRORS (2000-2999)
    # =========================================================================

    @staticmethod
    def missing_other_case(
        argument: str, kind: str, span: SourceSpan | None = None
    ) -> Diagnostic:
        """Selector block lacks the mandatory 'other' case."""
        msg = f"{kind.capitalize()} block on '{argument}' has no 'other' case"
        return Diagnostic(
            code=DiagnosticCode.MISSING_OTHER_CASE,
            message=msg,
            span=span,
            argument_name=argument,
            hint=f"Add an 'other{{...}}' case to the {kind} block",
        )

    @staticmethod
    def duplicate_case(
        key: str, argument: str, span: SourceSpan | None = None
    ) -> Diagnostic:
        """Case key repeated within one selector block."""
        msg = f"Duplicate case '{key}' in selector on '{argument}'"
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_CASE,
            message=msg,
            span=span,
            argument_name=argument,
            hint="Each case key may appear only once per selector",
        )

    @staticmethod
    def invalid_case_key(
        key: str,
        kind: str,
        locale_code: str,
        categories: Iterable[str],
        span: SourceSpan | None = None,
    ) -> Diagnostic:
        """Plural category not defined by the locale's rule set."""
        allowed = ", ".join(categories)
        msg = f"The {kind} case '{key}' is not valid in locale '{locale_code}'"
        return Diagnostic(
            code=DiagnosticCode.INVALID_CASE_KEY,
            message=msg,
            span=span,
            hint=f"Valid categories: {allowed}",
        )

    # =========================================================================
    # ENVIRONMENT ERRORS (3000-3999)
    # =========================================================================

    @staticmethod
    def unknown_formatter(name: str, span: SourceSpan | None = None) -> Diagnostic:
        """Format type has neither a built-in nor a custom formatter."""
        msg = f"Formatter '{name}' is not defined"
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_FORMATTER,
            message=msg,
            span=span,
            hint="Pass it in custom_formatters or use number, date or time",
        )

    @staticmethod
    def unknown_locale(locale_code: str) -> Diagnostic:
        """No plural rules resolvable for the locale."""
        msg = f"Locale '{locale_code}' has no plural rules"
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_LOCALE,
            message=msg,
            hint="Request a CLDR locale or supply a plural function for it",
        )

    @staticmethod
    def recursion_limit_exceeded(max_depth: int) -> Diagnostic:
        """Nesting depth exceeded the configured bound."""
        msg = f"Maximum nesting depth ({max_depth}) exceeded"
        return Diagnostic(
            code=DiagnosticCode.RECURSION_LIMIT_EXCEEDED,
            message=msg,
            hint="Reduce selector or message tree nesting, or raise max_depth",
        )

    # =========================================================================
    # FORMAT-TIME ERRORS (4000-4999)
    # =========================================================================

    @staticmethod
    def invalid_formatter_value(formatter: str, expected: str, value: object) -> Diagnostic:
        """Built-in formatter received a value of the wrong type."""
        received = type(value).__name__
        msg = f"Formatter '{formatter}' expects {expected}, got {received} {value!r}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_FORMATTER_VALUE,
            message=msg,
            expected_type=expected,
            received_type=received,
        )

    # =========================================================================
    # RENDERING ERRORS (5000-5999)
    # =========================================================================

    @staticmethod
    def unrenderable_callable(role: str, name: str, func: object) -> Diagnostic:
        """Callable cannot be referenced by import from rendered source."""
        msg = f"Cannot render {role} '{name}': {func!r} is not importable by name"
        return Diagnostic(
            code=DiagnosticCode.UNRENDERABLE_CALLABLE,
            message=msg,
            hint="Define it as a module-level function",
        )

    @staticmethod
    def invalid_render_target(module_format: str, target: str | None) -> Diagnostic:
        """Packaging format received an unusable target name."""
        msg = f"Invalid target {target!r} for {module_format} output"
        return Diagnostic(
            code=DiagnosticCode.INVALID_RENDER_TARGET,
            message=msg,
            hint="variable needs an identifier; namespace needs 'module.attribute'",
        )
