"""Runtime support for compiled messages.

Compiled messages call three helpers:

    number(value, name, offset)              '#' substitution
    plural(value, offset, lc, cases, ordinal) plural/selectordinal dispatch
    select(value, cases)                      select dispatch

The functions below are the only implementation of these helpers. The
evaluator calls them directly; rendered modules contain their source,
copied with inspect.getsource(), so both paths share one definition.
Helper signatures and bodies may therefore only use names that rendered
modules import alongside them: Callable, Mapping, Number and
RuntimeTypeError. Rendered modules import RuntimeTypeError from
mfcompiler.diagnostics and CLDR rules from Babel, so both packages must
be installed wherever a rendered module runs.

Case tables map keys to zero-argument callables; the selected callable
is returned, not called, so that only the chosen sub-message is built.
"""

from __future__ import annotations

import inspect
import re
import sys
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from numbers import Number
from types import MappingProxyType

from mfcompiler.diagnostics import ErrorTemplate, RenderError, RuntimeTypeError
from mfcompiler.runtime.dependencies import DependencySet
from mfcompiler.runtime.plural_rules import BabelPluralFunction

__all__ = [
    "FORMATTER_TABLE",
    "HELPER_NAMES",
    "RuntimeSupport",
    "default_number",
    "formatter_alias",
    "plural",
    "plural_function_name",
    "select",
    "strict_number",
]

# Call names of the helpers, in rendering order.
HELPER_NAMES: tuple[str, ...] = ("number", "plural", "select")

_DEF_NAME_RE = re.compile(r"^def \w+\(", re.MULTILINE)

_NON_IDENTIFIER_RE = re.compile(r"\W")

# Name of the formatter table in rendered modules.
FORMATTER_TABLE: str = "fmt"


def default_number(value: object, name: str, offset: int) -> object:
    """Value for '#': value - offset; unchecked when there is no offset."""
    if not offset:
        return value
    if not isinstance(value, Number) or isinstance(value, bool):
        msg = f"Can't apply offset:{offset} to argument `{name}` with non-numerical value {value!r}."
        raise RuntimeTypeError(msg)
    return value - offset  # type: ignore[operator]


def strict_number(value: object, name: str, offset: int) -> object:
    """Value for '#': value - offset; value must always be numeric."""
    if not isinstance(value, Number) or isinstance(value, bool):
        msg = f"Argument `{name}` has non-numerical value {value!r}."
        raise RuntimeTypeError(msg)
    return value - (offset or 0)  # type: ignore[operator]


def plural(
    value: object,
    offset: int,
    lc: Callable[..., str],
    cases: Mapping[str, Callable[[], str]],
    ordinal: bool = False,
) -> Callable[[], str]:
    """Pick a plural case: '=N' on the raw value first, then the category of value - offset."""
    exact = str(int(value)) if isinstance(value, float) and value.is_integer() else str(value)
    if "=" + exact in cases:
        return cases["=" + exact]
    if not isinstance(value, Number) or isinstance(value, bool):
        msg = f"Plural argument has non-numerical value {value!r}."
        raise RuntimeTypeError(msg)
    if offset:
        value -= offset  # type: ignore[operator]
    key = lc(value, ordinal)
    return cases[key] if key in cases else cases["other"]


def select(value: object, cases: Mapping[str, Callable[[], str]]) -> Callable[[], str]:
    """Pick a select case by exact string match, else 'other'."""
    return cases[value] if isinstance(value, str) and value in cases else cases["other"]


@dataclass(frozen=True, slots=True)
class RuntimeSupport:
    """Helper table bound to one compilation mode.

    Attributes:
        strict_number_sign: Select strict_number as the 'number' helper
    """

    strict_number_sign: bool = False

    @property
    def helpers(self) -> Mapping[str, Callable[..., object]]:
        """Helpers by call name."""
        return MappingProxyType(
            {
                "number": strict_number if self.strict_number_sign else default_number,
                "plural": plural,
                "select": select,
            }
        )

    def render(self, names: Iterable[str]) -> str:
        """Source of the named helpers, each defined under its call name.

        Example:
            >>> print(RuntimeSupport().render(["select"]))
            def select(value, cases):
                ...
        """
        wanted = set(names)
        helpers = self.helpers
        chunks = []
        for name in HELPER_NAMES:
            if name in wanted:
                source = inspect.getsource(helpers[name])
                chunks.append(_DEF_NAME_RE.sub(f"def {name}(", source, count=1).rstrip())
        return "\n\n\n".join(chunks)

    def render_bundle(
        self,
        dependencies: DependencySet,
        plural_functions: Mapping[str, Callable[..., str]],
        formatters: Mapping[str, Callable[..., str]],
    ) -> str:
        """Self-contained source for everything a compiled tree references.

        Contains imports, the referenced helpers, one plural function per
        referenced locale and the formatter table, and nothing else. When
        the imports need Babel or mfcompiler, a "# Requires:" comment
        above them names those packages.

        Args:
            dependencies: Names referenced by the compiled tree
            plural_functions: Plural function by locale code (superset)
            formatters: Formatter by format type name (superset)

        Raises:
            RenderError: If a caller-supplied function cannot be imported
                by name from the rendered module
        """
        imports: list[str] = []
        sections: list[str] = []

        if dependencies.helpers & {"plural", "select"}:
            imports.append("from collections.abc import Callable, Mapping")
        if dependencies.helpers & {"number", "plural"}:
            imports.append("from numbers import Number")
        locales = sorted(dependencies.locales)
        if any(isinstance(plural_functions[code], BabelPluralFunction) for code in locales):
            imports.append("from babel.plural import PluralRule")
        if dependencies.helpers & {"number", "plural"}:
            imports.append("from mfcompiler.diagnostics import RuntimeTypeError")

        if dependencies.helpers:
            sections.append(self.render(dependencies.helpers))

        for code in locales:
            func = plural_functions[code]
            name = plural_function_name(code)
            if isinstance(func, BabelPluralFunction):
                sections.append(_render_babel_plural(name, func))
            else:
                imports.append(_import_line("plural function", code, func, name))

        if dependencies.formatters:
            entries = []
            for type_name in sorted(dependencies.formatters):
                alias = formatter_alias(type_name)
                imports.append(_import_line("formatter", type_name, formatters[type_name], alias))
                entries.append(f"    {type_name!r}: {alias},")
            sections.append("\n".join([f"{FORMATTER_TABLE} = {{", *entries, "}"]))

        header = []
        requirements = _requirements(imports)
        if requirements:
            header.append(f"# Requires: {', '.join(requirements)}")
        header.extend(sorted(set(imports)))
        parts = ["\n".join(header)] if header else []
        parts.extend(sections)
        return "\n\n\n".join(parts)


def plural_function_name(locale_code: str) -> str:
    """Identifier of a locale's plural function in rendered modules.

    Example:
        >>> plural_function_name("pt-BR")
        'lc_pt_BR'
    """
    return "lc_" + _NON_IDENTIFIER_RE.sub("_", locale_code)


def formatter_alias(type_name: str) -> str:
    """Identifier a formatter is imported under in rendered modules."""
    return "fmt_" + _NON_IDENTIFIER_RE.sub("_", type_name)


def _render_babel_plural(name: str, func: BabelPluralFunction) -> str:
    cardinal = dict(sorted(func.rules(ordinal=False).items()))
    ordinal = dict(sorted(func.rules(ordinal=True).items()))
    return (
        f"_{name}_cardinal = PluralRule({cardinal!r})\n"
        f"_{name}_ordinal = PluralRule({ordinal!r})\n"
        f"\n\n"
        f"def {name}(n, ordinal=False):\n"
        f"    return (_{name}_ordinal if ordinal else _{name}_cardinal)(n)"
    )


def _import_line(role: str, name: str, func: Callable[..., object], alias: str) -> str:
    """'from module import func as alias', if func is reachable that way."""
    module = getattr(func, "__module__", None)
    qualname = getattr(func, "__qualname__", None)
    if (
        not module
        or not qualname
        or not qualname.isidentifier()
        or getattr(sys.modules.get(module), qualname, None) is not func
    ):
        raise RenderError(ErrorTemplate.unrenderable_callable(role, name, func))
    if qualname == alias:
        return f"from {module} import {qualname}"
    return f"from {module} import {qualname} as {alias}"


def _requirements(imports: Iterable[str]) -> list[str]:
    """Installed distributions the rendered imports rely on."""
    found: set[str] = set()
    for line in imports:
        if line.startswith("from babel."):
            found.add("Babel")
        elif line.startswith("from mfcompiler."):
            found.add("mfcompiler")
    return sorted(found)
