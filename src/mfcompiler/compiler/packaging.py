"""Host-module packaging of rendered artifacts.

Wraps the runtime bundle and a compiled expression into module source:

    module     bundle, then ``messages = <expr>`` and ``__all__``
    variable   ``<name> = <expr>`` built inside a function, so that
               only the variable is bound at module level
    namespace  ``setattr(importlib.import_module(<module>), <attr>, <expr>)``
               for a dotted target 'package.module.attr'
"""

from __future__ import annotations

import textwrap

from mfcompiler.diagnostics import ErrorTemplate, RenderError
from mfcompiler.enums import ModuleFormat

__all__ = ["DEFAULT_EXPORT_NAME", "package"]

DEFAULT_EXPORT_NAME: str = "messages"

_BUILDER: str = "_build_messages"


def package(
    bundle: str,
    expression: str,
    module_format: ModuleFormat | str = ModuleFormat.MODULE,
    target: str | None = None,
) -> str:
    """Module source for a runtime bundle and a compiled expression.

    Args:
        bundle: Runtime definitions (may be empty)
        expression: Compiled message expression
        module_format: Packaging format
        target: Exported name (module, variable) or 'module.attr'
            (namespace)

    Raises:
        RenderError: If target is unusable for the format
        ValueError: If module_format is not a known format
    """
    module_format = ModuleFormat(module_format)
    match module_format:
        case ModuleFormat.MODULE:
            name = _identifier(module_format, target or DEFAULT_EXPORT_NAME)
            return _join([bundle, f"{name} = {expression}\n\n__all__ = [{name!r}]"])
        case ModuleFormat.VARIABLE:
            name = _identifier(module_format, target or DEFAULT_EXPORT_NAME)
            builder_body = _join([bundle, f"return {expression}"]).rstrip()
            builder = f"def {_BUILDER}():\n" + textwrap.indent(builder_body, "    ")
            return _join([builder, f"{name} = {_BUILDER}()\ndel {_BUILDER}"])
        case ModuleFormat.NAMESPACE:
            module, _, attribute = (target or "").rpartition(".")
            if not module or not attribute.isidentifier() or not all(
                part.isidentifier() for part in module.split(".")
            ):
                raise RenderError(ErrorTemplate.invalid_render_target(module_format, target))
            setter = (
                f"setattr(importlib.import_module({module!r}), {attribute!r}, {expression})"
            )
            return _join(["import importlib", bundle, setter])


def _identifier(module_format: ModuleFormat, name: str) -> str:
    if not name.isidentifier():
        raise RenderError(ErrorTemplate.invalid_render_target(module_format, name))
    return name


def _join(sections: list[str]) -> str:
    return "\n\n\n".join(section for section in sections if section) + "\n"
