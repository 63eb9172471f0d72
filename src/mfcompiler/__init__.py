"""mfcompiler - ICU MessageFormat compiler with CLDR plural rules.

Compiles MessageFormat patterns (literal text, {arguments}, formatted
arguments and plural/selectordinal/select blocks) into callables, once,
so that formatting never re-parses a pattern. Compiled catalogues can
also be rendered to self-contained Python modules.

Public API:
    MessageFormat - Bind locales and options; compile patterns and trees
    CompiledMessage - Callable compiled pattern
    CompiledGroup - Mapping of compiled patterns and groups
    CompileOptions - Immutable compile options
    parse - Parse a pattern to an AST
    load_messages - Build a message tree from JSON/.properties files

Exceptions:
    MessageFormatError - Base exception class
    MessageSyntaxError - Malformed pattern
    MessageCompileError - Invalid pattern, unknown locale or formatter
    RuntimeTypeError - Format-time type error raised by compiled messages

Submodules:
    mfcompiler.syntax - Parser, AST and validation
    mfcompiler.compiler - Lowering, evaluation and source emission
    mfcompiler.runtime - Runtime helpers, plural rules and formatters
    mfcompiler.diagnostics - Error types and diagnostics
"""

from .compiler import CompiledGroup, CompiledMessage
from .config import CompileOptions
from .diagnostics import (
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
from .enums import ModuleFormat
from .loading import load_messages
from .messageformat import MessageFormat
from .syntax import parse

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError  # noqa: E402
from importlib.metadata import version as _get_version  # noqa: E402

try:
    __version__ = _get_version("mfcompiler")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "CompileOptions",
    "CompiledGroup",
    "CompiledMessage",
    "DuplicateCaseError",
    "InvalidCaseKeyError",
    "MessageCompileError",
    "MessageFormat",
    "MessageFormatError",
    "MessageSyntaxError",
    "MissingOtherCaseError",
    "ModuleFormat",
    "RecursionLimitError",
    "RenderError",
    "RuntimeTypeError",
    "UnknownFormatterError",
    "UnknownLocaleError",
    "__version__",
    "load_messages",
    "parse",
]
