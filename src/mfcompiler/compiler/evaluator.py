"""Tree-walking evaluation of compiled templates.

Calls the same runtime helpers that rendered modules contain, so an
in-process call and a call through rendered source agree on every
input, including the errors they raise.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from functools import partial

from mfcompiler.runtime.support import RuntimeSupport

from .nodes import (
    FormatterCall,
    Interpolation,
    NumberSign,
    Part,
    PluralCall,
    SelectCall,
    Template,
    Text,
)

__all__ = ["Evaluator"]


class Evaluator:
    """Formats templates against a parameter mapping.

    Missing parameters raise KeyError; type errors from helpers and
    formatters propagate unchanged.
    """

    __slots__ = ("_formatters", "_helpers", "_plural_functions")

    def __init__(
        self,
        support: RuntimeSupport,
        plural_functions: Callable[[str], Callable[..., str]],
        formatters: Mapping[str, Callable[..., str]],
    ) -> None:
        """Initialize evaluator.

        Args:
            support: Helper table for the compilation mode
            plural_functions: Plural function lookup by locale code
            formatters: Formatter by format type name
        """
        self._helpers = support.helpers
        self._plural_functions = plural_functions
        self._formatters = formatters

    def evaluate(self, template: Template, params: Mapping[str, object]) -> str:
        """Concatenate the outputs of a template's parts."""
        return "".join(self._evaluate_part(part, params) for part in template.parts)

    def _evaluate_part(self, part: Part, params: Mapping[str, object]) -> str:
        match part:
            case Text(text=text):
                return text
            case Interpolation(name=name, mark=mark):
                return f"{mark}{params[name]}{mark}"
            case NumberSign(name=name, offset=offset):
                return str(self._helpers["number"](params[name], name, offset))
            case FormatterCall():
                formatter = self._formatters[part.format_type]
                text = formatter(params[part.name], part.locale, part.style)
                return f"{part.mark}{text}{part.mark}"
            case PluralCall():
                chosen = self._helpers["plural"](
                    params[part.name],
                    part.offset,
                    self._plural_functions(part.locale),
                    self._thunks(part.cases, params),
                    part.ordinal,
                )
                return chosen()
            case SelectCall():
                chosen = self._helpers["select"](params[part.name], self._thunks(part.cases, params))
                return chosen()

    def _thunks(
        self, cases: tuple[tuple[str, Template], ...], params: Mapping[str, object]
    ) -> dict[str, Callable[[], str]]:
        return {key: partial(self.evaluate, template, params) for key, template in cases}
