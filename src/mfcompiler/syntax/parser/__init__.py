"""Message pattern parser module.

Module Organization:
- core.py: Main MessageParser class
- primitives.py: Basic parsers (names, integers, case keys)
- rules.py: All grammar rules (messages, placeholders, selectors)

Public API:
    MessageParser: Main parser class
    ParseContext: Parse context for depth tracking (advanced usage)
"""

from mfcompiler.syntax.parser.core import MessageParser
from mfcompiler.syntax.parser.rules import ParseContext

__all__ = ["MessageParser", "ParseContext"]
