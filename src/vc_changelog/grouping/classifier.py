"""
Mapping of Conventional Commit types onto changelog categories.

The classifier is a table lookup, nothing more: :class:`CategoryTable`
holds an ordered mapping from type token to human-facing category label
and that order is also the order in which categories are rendered. Adding
a category is a data change (a new table entry), never a code change.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

UNCATEGORIZED = "Uncategorized"

DEFAULT_KINDS: Tuple[Tuple[str, str], ...] = (
    ("feat", "Features"),
    ("fix", "Fixes"),
    ("perf", "Performance improvements"),
    ("refactor", "Refactoring"),
    ("revert", "Reverts"),
    ("docs", "Documentation"),
    ("style", "Style changes"),
    ("test", "Tests"),
    ("build", "Build system"),
    ("ci", "Continuous integration"),
    ("chore", "Chore tasks"),
)


class CategoryTable:
    """Ordered lookup table from commit type to category.

    Parameters
    ----------
    kinds : Iterable[Tuple[str, str]] or Mapping[str, str]
        ``(type, category)`` pairs in render order. Several types may share
        a category; the category takes the position of its first type.
    scope_overrides : Mapping[str, str], optional
        ``"type(scope)"`` keys that classify into a dedicated category,
        e.g. ``{"chore(deps)": "Dependency updates"}``. Their categories
        are placed after the table's own, before ``Uncategorized``.
    """

    def __init__(
        self,
        kinds: Union[Iterable[Tuple[str, str]], Mapping[str, str]] = DEFAULT_KINDS,
        scope_overrides: Optional[Mapping[str, str]] = None,
    ) -> None:
        pairs = kinds.items() if isinstance(kinds, Mapping) else kinds
        self._kinds: Dict[str, str] = {}
        order: List[str] = []
        for type_, category in pairs:
            self._kinds[type_] = category
            if category not in order:
                order.append(category)
        self._overrides: Dict[str, str] = dict(scope_overrides or {})
        for category in self._overrides.values():
            if category not in order:
                order.append(category)
        if UNCATEGORIZED in order:
            order.remove(UNCATEGORIZED)
        order.append(UNCATEGORIZED)
        self._order = order
        self._rank = {category: index for index, category in enumerate(order)}

    @property
    def categories(self) -> List[str]:
        """All categories in render order, ``Uncategorized`` last."""
        return list(self._order)

    def knows(self, type_: str) -> bool:
        return type_ in self._kinds

    def classify(self, type_: str, scope: Optional[str] = None) -> str:
        if scope:
            override = self._overrides.get(f"{type_}({scope})")
            if override is not None:
                return override
        return self._kinds.get(type_, UNCATEGORIZED)

    def rank(self, category: str) -> int:
        """Position of ``category`` in render order."""
        return self._rank.get(category, len(self._order))

    def __repr__(self) -> str:
        return f"CategoryTable({list(self._kinds.items())!r})"


DEFAULT_TABLE = CategoryTable()


def classify(type_: str, table: CategoryTable = DEFAULT_TABLE, scope: Optional[str] = None) -> str:
    """Return the changelog category for a commit type.

    Matching is exact on the (already lowercase) type token. Unknown types
    fall into ``Uncategorized``. ``scope`` only matters when the table
    declares scope overrides.
    """
    return table.classify(type_, scope)
