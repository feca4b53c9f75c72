"""Ordered adjacency index over named nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ._algorithms import find_unsorted, topological_sort

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(frozen=True, slots=True)
class AdjacencyIndex:
    """Child, parent and child-count indexes derived from an edge list.

    This is an immutable data structure with query methods. Unlike a plain
    set-based graph, every neighbour collection keeps edge declaration
    order, so traversals driven by it are deterministic.

    - children[a] = ("b", "c") means edges a -> b and a -> c were declared
      in that order
    - parents[c] = ("a", "b") means edges a -> c and b -> c were declared
      in that order

    Attributes:
        _children: Mapping from name to its direct successors.
        _parents: Mapping from name to its direct predecessors.

    """

    _children: dict[str, tuple[str, ...]] = field(default_factory=dict)
    _parents: dict[str, tuple[str, ...]] = field(default_factory=dict)

    @classmethod
    def from_edges(cls, edges: Iterable[tuple[str, str]]) -> AdjacencyIndex:
        """Build the index in a single pass over (source, target) pairs.

        A pair declared more than once is recorded once, at its first
        position.

        Example:
            >>> index = AdjacencyIndex.from_edges([("a", "c"), ("b", "c")])
            >>> index.parents("c")
            ('a', 'b')

        """
        # dict keys double as insertion-ordered sets
        children: dict[str, dict[str, None]] = {}
        parents: dict[str, dict[str, None]] = {}

        for src, dst in edges:
            children.setdefault(src, {})[dst] = None
            parents.setdefault(dst, {})[src] = None

        return cls(
            _children={k: tuple(v) for k, v in children.items()},
            _parents={k: tuple(v) for k, v in parents.items()},
        )

    def children(self, name: str) -> tuple[str, ...]:
        """Direct successors of a node, empty if it has none."""
        return self._children.get(name, ())

    def parents(self, name: str) -> tuple[str, ...]:
        """Direct predecessors of a node, empty if it has none."""
        return self._parents.get(name, ())

    def child_count(self, name: str) -> int:
        """Number of distinct outgoing edges of a node."""
        return len(self._children.get(name, ()))

    def is_source(self, name: str) -> bool:
        """Whether a node has outgoing edges but no incoming edge."""
        return name in self._children and name not in self._parents

    def sources(self, order: Iterable[str]) -> list[str]:
        """Pure sources among ``order``, kept in that order.

        Nodes without any edge are not sources.
        """
        return [name for name in order if self.is_source(name)]

    @property
    def names(self) -> tuple[str, ...]:
        """Every name touched by an edge, in first-seen order."""
        seen: dict[str, None] = {}
        for src, dsts in self._children.items():
            seen[src] = None
            for dst in dsts:
                seen[dst] = None
        return tuple(seen)

    @property
    def edge_count(self) -> int:
        """Number of distinct edges."""
        return sum(len(v) for v in self._children.values())

    def topological_order(self, order: Iterable[str] = ()) -> list[str]:
        """Names in dependency order.

        Args:
            order: Preferred order for ties; names touched by an edge but
                missing here follow in first-seen order.

        Raises:
            CycleError: If the edges contain a cycle.

        """
        return topological_sort(self._children, [*order, *self.names])

    def cycle_members(self) -> list[str]:
        """Names that cannot be ordered because of a cycle, empty for a DAG."""
        return find_unsorted(self._children, self.names)

    def has_cycle(self) -> bool:
        """Check if the edges contain a cycle."""
        return bool(self.cycle_members())

    def __len__(self) -> int:
        """Return the number of names touched by an edge."""
        return len(self.names)

    def __contains__(self, name: object) -> bool:
        """Check if a name is touched by an edge."""
        return name in self._children or name in self._parents
