"""Shared constants for mfcompiler.

Centralizes limits and fixed tables used by the parser, compiler and
runtime support so that no subsystem carries its own copy.

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # Locales
    "DEFAULT_LOCALE",
    "ALL_LOCALES",
    # Plural categories
    "OTHER_CASE",
    "PLURAL_CATEGORIES",
    # Bidi marks
    "LEFT_TO_RIGHT_MARK",
    "RIGHT_TO_LEFT_MARK",
    # Syntax
    "SYNTAX_CHARS",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Unified maximum nesting depth for sub-messages and message trees.
# Used by: parser (selector nesting), compiler (tree walking).
# Real catalogues nest two or three selectors at most; 100 levels is
# adversarial input. Clamped against sys.getrecursionlimit() at use.
MAX_DEPTH: int = 100

# ============================================================================
# LOCALES
# ============================================================================

# Locale used when none is requested at construction.
DEFAULT_LOCALE: str = "en"

# Wildcard requesting every locale known to the CLDR data.
ALL_LOCALES: str = "*"

# ============================================================================
# PLURAL CATEGORIES
# ============================================================================

# Mandatory fallback case of every selector block.
OTHER_CASE: str = "other"

# CLDR plural category keywords, in canonical order.
PLURAL_CATEGORIES: tuple[str, ...] = ("zero", "one", "two", "few", "many", "other")

# ============================================================================
# BIDI MARKS
# ============================================================================

# Unicode directional marks wrapped around interpolated values when
# bidi support is enabled (Unicode TR9).
LEFT_TO_RIGHT_MARK: str = "\u200e"  # U+200E LEFT-TO-RIGHT MARK
RIGHT_TO_LEFT_MARK: str = "\u200f"  # U+200F RIGHT-TO-LEFT MARK

# ============================================================================
# SYNTAX
# ============================================================================

# Characters that terminate argument names, format types and case keys.
SYNTAX_CHARS: str = "{},#'"
