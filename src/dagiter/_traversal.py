"""Dependency-ordered traversal of a DAG.

A node is processed only after all of its parents have been processed.
The worklist is a stack in depth-first mode and a queue in breadth-first
mode; start nodes and newly ready siblings are ordered by child count so
that the visit sequence is fully determined by the input order.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from ._errors import CycleError, DuplicateNodeError, UnknownNodeError, UnknownStopNodeError
from ._graph import AdjacencyIndex
from ._models import Edge, Node, Visit, as_edge, as_node
from ._modes import SiblingOrder, TraversalMode

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

type VisitCallback[T] = Callable[[T, list[T], int, int], object]
type NodeLike[T] = Node[T] | Mapping[str, Any]
type EdgeLike = Edge | Mapping[str, str] | tuple[str, str]

logger = logging.getLogger(__name__)


def _validate[T](
    nodes: Iterable[NodeLike[T]],
    edges: Iterable[EdgeLike],
) -> tuple[dict[str, Node[T]], list[Edge]]:
    """Coerce inputs and check names and edge endpoints.

    Returns:
        Mapping from name to node (input order preserved) and the edge list.

    Raises:
        DuplicateNodeError: If two nodes share a name.
        UnknownNodeError: If an edge endpoint is not a declared node.

    """
    node_map: dict[str, Node[T]] = {}
    for value in nodes:
        node = as_node(value)
        if node.name in node_map:
            raise DuplicateNodeError(node.name)
        node_map[node.name] = node

    edge_list = [as_edge(value) for value in edges]
    for edge in edge_list:
        for endpoint in (edge.src, edge.dst):
            if endpoint not in node_map:
                raise UnknownNodeError(endpoint, edge)

    return node_map, edge_list


def build_graph(
    nodes: Iterable[NodeLike[Any]],
    edges: Iterable[EdgeLike],
) -> AdjacencyIndex:
    """Validate nodes and edges and build their adjacency index.

    Raises:
        DuplicateNodeError: If two nodes share a name.
        UnknownNodeError: If an edge endpoint is not a declared node.

    """
    _, edge_list = _validate(nodes, edges)
    return AdjacencyIndex.from_edges((edge.src, edge.dst) for edge in edge_list)


def _prepare[T](
    nodes: Iterable[NodeLike[T]],
    edges: Iterable[EdgeLike],
    until: str | None,
    *,
    check_cycles: bool,
) -> tuple[dict[str, Node[T]], AdjacencyIndex] | None:
    """Validate the inputs and index the edges.

    Returns:
        The node mapping and adjacency index, or None when there is
        nothing to traverse (no nodes or no edges).

    """
    node_list = list(nodes)
    edge_list = list(edges)
    if not node_list or not edge_list:
        logger.debug("Empty node or edge list; nothing to traverse")
        return None

    node_map, checked_edges = _validate(node_list, edge_list)
    if until is not None and until not in node_map:
        raise UnknownStopNodeError(until)

    index = AdjacencyIndex.from_edges((edge.src, edge.dst) for edge in checked_edges)
    logger.debug("Indexed %d nodes and %d edges", len(node_map), index.edge_count)

    if check_cycles and (members := index.cycle_members()):
        raise CycleError(members)

    return node_map, index


def _schedule(
    names: Sequence[str],
    index: AdjacencyIndex,
    mode: TraversalMode,
    sibling_order: SiblingOrder,
) -> list[str]:
    """Order names before they are appended to the worklist.

    Child-count ordering is ascending for DFS (the node with most children
    is pushed last and popped first) and descending for BFS (the node with
    most children is dequeued first). The sort is stable, so ties keep
    their incoming order: node input order for start nodes, edge
    declaration order (the parent's child list) for newly ready children.
    """
    if sibling_order is SiblingOrder.DISCOVERY:
        return list(names)
    return sorted(names, key=index.child_count, reverse=mode is TraversalMode.BFS)


def _run[T](
    node_map: dict[str, Node[T]],
    index: AdjacencyIndex,
    mode: TraversalMode,
    sibling_order: SiblingOrder,
    until: str | None,
    on_visit: Callable[[Node[T], tuple[str, ...], int, int], object],
) -> int:
    """Drive the worklist and report every processed node to ``on_visit``.

    Returns:
        Number of nodes visited.

    """
    starts = _schedule(index.sources(node_map), index, mode, sibling_order)
    if not starts:
        logger.warning("No start nodes among %d nodes; nothing to traverse", len(node_map))
        return 0
    logger.debug("Starting %s traversal from %s", mode.name, starts)

    worklist: deque[str] = deque(starts)
    take = worklist.pop if mode is TraversalMode.DFS else worklist.popleft
    visited: dict[str, int] = {}
    count = 0

    while worklist:
        name = take()
        if name in visited:
            continue

        parents = index.parents(name)
        depth = max((visited[p] for p in parents), default=-1) + 1
        visited[name] = depth

        logger.debug("Visiting %s (index=%d, depth=%d)", name, count, depth)
        on_visit(node_map[name], parents, count, depth)
        count += 1

        if until is not None and name == until:
            logger.debug("Reached stop node %s", name)
            break

        ready = [
            child
            for child in index.children(name)
            if child not in visited and all(p in visited for p in index.parents(child))
        ]
        worklist.extend(_schedule(ready, index, mode, sibling_order))

    return count


def traverse[T](  # noqa: PLR0913
    nodes: Iterable[NodeLike[T]],
    edges: Iterable[EdgeLike],
    mode: TraversalMode | str,
    callback: VisitCallback[T],
    until: str | None = None,
    *,
    sibling_order: SiblingOrder | str = SiblingOrder.CHILD_COUNT,
    check_cycles: bool = False,
) -> None:
    """Visit every node reachable from the start nodes in dependency order.

    Start nodes are the nodes with at least one outgoing edge and no
    incoming edge. A node enters the worklist only once all its parents
    have been visited, and is visited exactly once.

    Args:
        nodes: Nodes (or ``{"name", "data"}`` mappings); their order breaks ties.
        edges: Edges (or ``{"src", "dst"}`` mappings, or pairs).
        mode: ``TraversalMode.DFS`` / ``"dfs"`` or ``TraversalMode.BFS`` / ``"bfs"``.
        callback: Called as ``callback(data, parent_data, index, depth)``.
            ``parent_data`` follows edge declaration order and holds the
            parents' payloads themselves, not copies.
        until: Name of a node after which the traversal stops.
        sibling_order: Ordering applied to start nodes and ready children.
        check_cycles: Reject cyclic input with ``CycleError`` before visiting.

    Raises:
        DuplicateNodeError: If two nodes share a name.
        UnknownNodeError: If an edge endpoint is not a declared node.
        UnknownStopNodeError: If ``until`` is not a declared node.
        CycleError: If ``check_cycles`` is set and the edges contain a cycle.

    Example:
        >>> seen = []
        >>> traverse(
        ...     [Node("a", 1), Node("b", 2)],
        ...     [Edge("a", "b")],
        ...     "dfs",
        ...     lambda data, parents, i, depth: seen.append((data, parents, depth)),
        ... )
        >>> seen
        [(1, [], 0), (2, [1], 1)]

    """
    mode = TraversalMode(mode)
    sibling_order = SiblingOrder(sibling_order)
    prepared = _prepare(nodes, edges, until, check_cycles=check_cycles)
    if prepared is None:
        return
    node_map, index = prepared

    def on_visit(node: Node[T], parents: tuple[str, ...], i: int, depth: int) -> None:
        callback(node.data, [node_map[p].data for p in parents], i, depth)

    _run(node_map, index, mode, sibling_order, until, on_visit)


def walk[T](  # noqa: PLR0913
    nodes: Iterable[NodeLike[T]],
    edges: Iterable[EdgeLike],
    mode: TraversalMode | str = TraversalMode.DFS,
    until: str | None = None,
    *,
    sibling_order: SiblingOrder | str = SiblingOrder.CHILD_COUNT,
    check_cycles: bool = False,
) -> list[Visit[T]]:
    """Traverse like :func:`traverse`, collecting the visits as records.

    Returns:
        One Visit per callback invocation, in visit order.

    """
    mode = TraversalMode(mode)
    sibling_order = SiblingOrder(sibling_order)
    visits: list[Visit[T]] = []
    prepared = _prepare(nodes, edges, until, check_cycles=check_cycles)
    if prepared is None:
        return visits
    node_map, index = prepared

    def record(node: Node[T], parents: tuple[str, ...], i: int, depth: int) -> None:
        visits.append(
            Visit(
                name=node.name,
                data=node.data,
                parents=parents,
                parent_data=tuple(node_map[p].data for p in parents),
                index=i,
                depth=depth,
            ),
        )

    _run(node_map, index, mode, sibling_order, until, record)
    return visits


def iterate_dfs[T](
    nodes: Iterable[NodeLike[T]],
    edges: Iterable[EdgeLike],
    callback: VisitCallback[T],
    until: str | None = None,
) -> None:
    """Depth-first traversal with child-count sibling ordering."""
    traverse(nodes, edges, TraversalMode.DFS, callback, until)


def iterate_bfs[T](
    nodes: Iterable[NodeLike[T]],
    edges: Iterable[EdgeLike],
    callback: VisitCallback[T],
    until: str | None = None,
) -> None:
    """Breadth-first traversal with child-count sibling ordering."""
    traverse(nodes, edges, TraversalMode.BFS, callback, until)


def iterate[T](
    nodes: Iterable[NodeLike[T]],
    edges: Iterable[EdgeLike],
    callback: VisitCallback[T],
    until: str | None = None,
) -> None:
    """Depth-first traversal in plain discovery order.

    Start nodes and ready children are pushed in the order they are
    declared, without child-count re-ordering. Callers relying on the
    ordering of the first releases of this library should use this entry
    point; :func:`iterate_dfs` applies the child-count tie-break.
    """
    traverse(nodes, edges, TraversalMode.DFS, callback, until, sibling_order=SiblingOrder.DISCOVERY)
