"""Dependency sets of compiled messages.

A DependencySet names exactly the runtime helpers, locale plural
functions and formatters that a compiled subtree invokes. Sets are
built bottom-up during lowering: each leaf records what its own nodes
reference and every group holds the union of its children. Rendering
reads nothing else, so output can never include an unused definition.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

__all__ = ["DependencySet"]


@dataclass(frozen=True, slots=True)
class DependencySet:
    """Runtime names referenced by a compiled subtree.

    Attributes:
        helpers: Helper call names ('number', 'plural', 'select')
        locales: Locale codes whose plural function is called
        formatters: Format type names looked up in the formatter table

    Example:
        >>> a = DependencySet(helpers=frozenset({"select"}))
        >>> b = DependencySet(locales=frozenset({"en"}))
        >>> sorted((a | b).helpers), sorted((a | b).locales)
        (['select'], ['en'])
    """

    helpers: frozenset[str] = frozenset()
    locales: frozenset[str] = frozenset()
    formatters: frozenset[str] = frozenset()

    def __or__(self, other: DependencySet) -> DependencySet:
        return DependencySet(
            helpers=self.helpers | other.helpers,
            locales=self.locales | other.locales,
            formatters=self.formatters | other.formatters,
        )

    @classmethod
    def union(cls, sets: Iterable[DependencySet]) -> DependencySet:
        """Union of any number of sets (empty for none)."""
        result = cls()
        for deps in sets:
            result = result | deps
        return result

    @property
    def is_empty(self) -> bool:
        """True when nothing from the runtime is referenced."""
        return not (self.helpers or self.locales or self.formatters)
