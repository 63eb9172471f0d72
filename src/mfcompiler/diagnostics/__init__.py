"""Diagnostic system for message compilation errors.

Provides structured error diagnostics with codes, spans and hints.
Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import (
    DuplicateCaseError,
    InvalidCaseKeyError,
    MessageCompileError,
    MessageFormatError,
    MessageSyntaxError,
    MissingOtherCaseError,
    RecursionLimitError,
    RenderError,
    RuntimeTypeError,
    UnknownFormatterError,
    UnknownLocaleError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "DuplicateCaseError",
    "ErrorTemplate",
    "InvalidCaseKeyError",
    "MessageCompileError",
    "MessageFormatError",
    "MessageSyntaxError",
    "MissingOtherCaseError",
    "OutputFormat",
    "RecursionLimitError",
    "RenderError",
    "RuntimeTypeError",
    "SourceSpan",
    "UnknownFormatterError",
    "UnknownLocaleError",
]
