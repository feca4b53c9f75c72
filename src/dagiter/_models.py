"""Node, edge and visit records exchanged with the traversal engine."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Node[T]:
    """A named node carrying an opaque payload.

    The payload is handed to callbacks as-is, never copied.

    Attributes:
        name: Unique name of the node within one traversal.
        data: Payload passed to the callback.

    """

    name: str
    data: T


@dataclass(frozen=True, slots=True)
class Edge:
    """A dependency edge: ``src`` is visited before ``dst``."""

    src: str
    dst: str


@dataclass(frozen=True, slots=True)
class Visit[T]:
    """One callback invocation recorded by :func:`dagiter.walk`.

    Attributes:
        name: Name of the visited node.
        data: Payload of the visited node.
        parents: Names of the node's parents in edge declaration order.
        parent_data: Payloads of the parents, same order as ``parents``.
        index: Position of this visit in the traversal (0-based).
        depth: One plus the deepest parent's depth, 0 without parents.

    """

    name: str
    data: T
    parents: tuple[str, ...]
    parent_data: tuple[T, ...]
    index: int
    depth: int


def as_node(value: Node[Any] | Mapping[str, Any]) -> Node[Any]:
    """Coerce a ``{"name": ..., "data": ...}`` mapping to a Node."""
    if isinstance(value, Node):
        return value
    if isinstance(value, Mapping):
        if "name" not in value:
            msg = f"Node mapping is missing 'name': {dict(value)!r}"
            raise TypeError(msg)
        return Node(name=value["name"], data=value.get("data"))
    msg = f"Expected Node or mapping, got {type(value).__name__}"
    raise TypeError(msg)


def as_edge(value: Edge | Mapping[str, str] | tuple[str, str]) -> Edge:
    """Coerce a ``{"src": ..., "dst": ...}`` mapping or a pair to an Edge."""
    if isinstance(value, Edge):
        return value
    if isinstance(value, Mapping):
        try:
            return Edge(src=value["src"], dst=value["dst"])
        except KeyError as e:
            msg = f"Edge mapping is missing {e.args[0]!r}: {dict(value)!r}"
            raise TypeError(msg) from e
    if isinstance(value, tuple) and len(value) == 2:
        src, dst = value
        return Edge(src=src, dst=dst)
    msg = f"Expected Edge, mapping or (src, dst) pair, got {type(value).__name__}"
    raise TypeError(msg)
