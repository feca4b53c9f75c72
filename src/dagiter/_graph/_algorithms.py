"""Graph algorithms over ordered successor mappings."""

from collections import deque
from collections.abc import Mapping, Sequence

from dagiter._errors import CycleError


def _kahn(successors: Mapping[str, Sequence[str]], names: Sequence[str]) -> tuple[list[str], list[str]]:
    """Run Kahn's algorithm, returning (ordered, left over)."""
    indegree: dict[str, int] = dict.fromkeys(names, 0)
    for deps in successors.values():
        for dep in deps:
            indegree[dep] = indegree.get(dep, 0) + 1

    # Start with nodes that have no predecessors (in-degree 0), in input order
    queue = deque(name for name, deg in indegree.items() if deg == 0)
    order: list[str] = []

    while queue:
        name = queue.popleft()
        order.append(name)
        for successor in successors.get(name, ()):
            indegree[successor] -= 1
            if indegree[successor] == 0:
                queue.append(successor)

    ordered = set(order)
    return order, [name for name in indegree if name not in ordered]


def topological_sort(successors: Mapping[str, Sequence[str]], names: Sequence[str] = ()) -> list[str]:
    """Sort a graph topologically (dependencies before dependents).

    Ties are resolved by ``names`` order, then by first appearance in
    ``successors``, so the result is deterministic.

    Args:
        successors: Mapping from name to the names that depend on it.
            An edge (a -> b) means "b depends on a".
        names: Optional explicit node order; names only reachable through
            ``successors`` are appended after these.

    Returns:
        List of names in topological order.

    Raises:
        CycleError: If the graph contains a cycle.

    Example:
        >>> topological_sort({"a": ["b"], "b": ["c"]})
        ['a', 'b', 'c']

    """
    order, left_over = _kahn(successors, _all_names(successors, names))
    if left_over:
        raise CycleError(left_over)
    return order


def find_unsorted(successors: Mapping[str, Sequence[str]], names: Sequence[str] = ()) -> list[str]:
    """Names that lie on or behind a cycle, empty if the graph is acyclic."""
    _, left_over = _kahn(successors, _all_names(successors, names))
    return left_over


def _all_names(successors: Mapping[str, Sequence[str]], names: Sequence[str]) -> list[str]:
    seen: dict[str, None] = dict.fromkeys(names)
    for src, dsts in successors.items():
        seen.setdefault(src)
        for dst in dsts:
            seen.setdefault(dst)
    return list(seen)
