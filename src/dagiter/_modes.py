"""Traversal mode and sibling ordering selectors."""

from enum import StrEnum
from typing import Self


class StrEnumWithDoc(StrEnum):
    """String enum whose members carry their own docstring.

    Members are declared as ``NAME = "value", "description"``.
    """

    def __new__(cls, value: str, doc: str = "") -> Self:
        """Create a new enum member with a docstring."""
        obj = str.__new__(cls, value)
        obj._value_ = value
        obj.__doc__ = doc
        return obj


class TraversalMode(StrEnumWithDoc):
    """Worklist discipline used by the traversal engine."""

    DFS = "dfs", "Depth-first: the worklist is a stack (last in, first out)"
    BFS = "bfs", "Breadth-first: the worklist is a queue (first in, first out)"


class SiblingOrder(StrEnumWithDoc):
    """How start nodes and newly ready children are ordered before scheduling."""

    CHILD_COUNT = (
        "child-count",
        "Stable sort by number of children: ascending for DFS, descending for BFS",
    )
    DISCOVERY = "discovery", "Keep input and edge declaration order"
