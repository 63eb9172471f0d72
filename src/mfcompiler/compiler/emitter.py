"""Python source emission for compiled messages.

Each FunctionDef becomes a ``lambda d: ...`` expression over the
parameter mapping ``d``; each NestedGroup becomes a dict literal. The
expressions call the helpers (number, plural, select), plural functions
(lc_<locale>) and formatter table (fmt) defined by the runtime bundle.

Example:
    "{n, plural, one{# day} other{# days}}" in 'en' is emitted as

        lambda d: plural(d['n'], 0, lc_en, {
            'one': lambda: str(number(d['n'], 'n', 0)) + ' day',
            'other': lambda: str(number(d['n'], 'n', 0)) + ' days',
        }, False)()
"""

from __future__ import annotations

from mfcompiler.runtime.support import FORMATTER_TABLE, plural_function_name

from .nodes import (
    CompiledNode,
    FormatterCall,
    FunctionDef,
    Interpolation,
    NestedGroup,
    NumberSign,
    Part,
    PluralCall,
    SelectCall,
    Template,
    Text,
)

__all__ = ["Emitter"]

_INDENT: str = "    "

# Name of the parameter mapping in emitted lambdas.
_PARAMS: str = "d"


class Emitter:
    """Emits Python expressions for compiled nodes."""

    __slots__ = ()

    def emit(self, node: CompiledNode, level: int = 0) -> str:
        """Expression for a compiled node, indented for nesting level."""
        match node:
            case FunctionDef():
                return f"lambda {_PARAMS}: {self.emit_template(node.template, level)}"
            case NestedGroup():
                if not node.children:
                    return "{}"
                inner = _INDENT * (level + 1)
                lines = [
                    f"{inner}{key!r}: {self.emit(child, level + 1)},"
                    for key, child in node.children
                ]
                return "{\n" + "\n".join(lines) + "\n" + _INDENT * level + "}"

    def emit_template(self, template: Template, level: int = 0) -> str:
        """Expression concatenating a template's parts."""
        if not template.parts:
            return "''"
        return " + ".join(self._emit_part(part, level) for part in template.parts)

    def _emit_part(self, part: Part, level: int) -> str:
        match part:
            case Text(text=text):
                return repr(text)
            case Interpolation(name=name, mark=mark):
                return _marked(f"str({_param(name)})", mark)
            case NumberSign(name=name, offset=offset):
                return f"str(number({_param(name)}, {name!r}, {offset}))"
            case FormatterCall():
                call = (
                    f"{FORMATTER_TABLE}[{part.format_type!r}]"
                    f"({_param(part.name)}, {part.locale!r}, {part.style!r})"
                )
                return _marked(call, part.mark)
            case PluralCall():
                cases = self._emit_cases(part.cases, level)
                return (
                    f"plural({_param(part.name)}, {part.offset}, "
                    f"{plural_function_name(part.locale)}, {cases}, {part.ordinal})()"
                )
            case SelectCall():
                return f"select({_param(part.name)}, {self._emit_cases(part.cases, level)})()"

    def _emit_cases(self, cases: tuple[tuple[str, Template], ...], level: int) -> str:
        inner = _INDENT * (level + 1)
        lines = [
            f"{inner}{key!r}: lambda: {self.emit_template(template, level + 1)},"
            for key, template in cases
        ]
        return "{\n" + "\n".join(lines) + "\n" + _INDENT * level + "}"


def _param(name: str) -> str:
    return f"{_PARAMS}[{name!r}]"


def _marked(expression: str, mark: str) -> str:
    if not mark:
        return expression
    return f"{mark!r} + {expression} + {mark!r}"
