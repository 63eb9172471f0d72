"""Compiled artifacts returned by MessageFormat.compile().

CompiledMessage wraps one compiled pattern and is callable with a
parameter mapping. CompiledGroup wraps a compiled tree and is a read-only
Mapping whose values are CompiledMessage or CompiledGroup objects, in
the input's key order. Both render to self-contained Python source that
includes only what their own subtree references.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass

from mfcompiler.enums import ModuleFormat
from mfcompiler.runtime.dependencies import DependencySet
from mfcompiler.runtime.plural_rules import PluralRuleRegistry
from mfcompiler.runtime.support import RuntimeSupport

from .emitter import Emitter
from .evaluator import Evaluator
from .nodes import CompiledNode, FunctionDef, NestedGroup
from .packaging import package

__all__ = ["ArtifactRuntime", "CompiledGroup", "CompiledMessage", "wrap"]


@dataclass(frozen=True, slots=True)
class ArtifactRuntime:
    """Read-only environment shared by the artifacts of one MessageFormat.

    Attributes:
        support: Helper table for the compilation mode
        registry: Plural functions by locale
        formatters: Formatter by format type name
    """

    support: RuntimeSupport
    registry: PluralRuleRegistry
    formatters: Mapping[str, Callable[..., str]]

    @property
    def evaluator(self) -> Evaluator:
        return Evaluator(self.support, self.registry.resolve, self.formatters)

    def render(self, node: CompiledNode, module_format: ModuleFormat | str, name: str | None) -> str:
        """Module source for a compiled node and exactly its dependencies."""
        deps = node.dependencies
        bundle = self.support.render_bundle(
            deps,
            {code: self.registry.resolve(code) for code in deps.locales},
            self.formatters,
        )
        return package(bundle, Emitter().emit(node), module_format, name)


class CompiledMessage:
    """Compiled pattern, callable with a parameter mapping.

    Example:
        >>> greet = MessageFormat("en").compile("Hello, {name}!")
        >>> greet({"name": "Ada"})
        'Hello, Ada!'
    """

    __slots__ = ("_definition", "_evaluator", "_runtime")

    def __init__(self, definition: FunctionDef, runtime: ArtifactRuntime) -> None:
        self._definition = definition
        self._runtime = runtime
        self._evaluator = runtime.evaluator

    def __call__(self, params: Mapping[str, object] | None = None) -> str:
        """Format the message.

        Raises:
            KeyError: A referenced parameter is missing
            RuntimeTypeError: A value violates a helper's or formatter's
                type contract
        """
        return self._evaluator.evaluate(self._definition.template, params or {})

    def __repr__(self) -> str:
        return f"CompiledMessage(locale={self.locale!r}, source={self.source!r})"

    @property
    def definition(self) -> FunctionDef:
        """Compiled representation."""
        return self._definition

    @property
    def locale(self) -> str:
        """Locale the pattern was compiled for."""
        return self._definition.locale

    @property
    def source(self) -> str:
        """Pattern text."""
        return self._definition.source

    @property
    def dependencies(self) -> DependencySet:
        """Runtime names this message references."""
        return self._definition.dependencies

    def render(
        self, module_format: ModuleFormat | str = ModuleFormat.MODULE, name: str | None = None
    ) -> str:
        """Self-contained Python module source for this message.

        Raises:
            RenderError: If a custom function cannot be imported by name or
                the target is invalid for the format
        """
        return self._runtime.render(self._definition, module_format, name)


class CompiledGroup(Mapping[str, "CompiledMessage | CompiledGroup"]):
    """Compiled message tree, a Mapping mirroring the input tree.

    Example:
        >>> mf = MessageFormat(["en", "fr"])
        >>> group = mf.compile({"en": {"hi": "Hi"}, "fr": {"hi": "Salut"}})
        >>> group["fr"]["hi"]()
        'Salut'
    """

    __slots__ = ("_children", "_group", "_runtime")

    def __init__(self, group: NestedGroup, runtime: ArtifactRuntime) -> None:
        self._group = group
        self._runtime = runtime
        self._children = {key: wrap(child, runtime) for key, child in group.children}

    def __getitem__(self, key: str) -> CompiledMessage | CompiledGroup:
        return self._children[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._children)

    def __len__(self) -> int:
        return len(self._children)

    def __repr__(self) -> str:
        return f"CompiledGroup({list(self._children)!r})"

    @property
    def definition(self) -> NestedGroup:
        """Compiled representation."""
        return self._group

    @property
    def dependencies(self) -> DependencySet:
        """Union of the dependencies of every message in the tree."""
        return self._group.dependencies

    def render(
        self, module_format: ModuleFormat | str = ModuleFormat.MODULE, name: str | None = None
    ) -> str:
        """Self-contained Python module source for the whole tree.

        Raises:
            RenderError: If a custom function cannot be imported by name or
                the target is invalid for the format
        """
        return self._runtime.render(self._group, module_format, name)


def wrap(node: CompiledNode, runtime: ArtifactRuntime) -> CompiledMessage | CompiledGroup:
    """Artifact object for a compiled node."""
    match node:
        case FunctionDef():
            return CompiledMessage(node, runtime)
        case NestedGroup():
            return CompiledGroup(node, runtime)
