"""Exceptions raised by dagiter."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ._models import Edge


class DagIterError(Exception):
    """Base class for all dagiter errors."""


class DuplicateNodeError(DagIterError):
    """Raised when two nodes passed to one traversal share a name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Duplicate node name '{name}'")


class UnknownNodeError(DagIterError):
    """Raised when an edge references a node name that was not declared."""

    def __init__(self, name: str, edge: Edge) -> None:
        self.name = name
        self.edge = edge
        super().__init__(f"Edge {edge.src!r} -> {edge.dst!r} references unknown node '{name}'")


class UnknownStopNodeError(DagIterError):
    """Raised when the stop node is not one of the declared nodes."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Stop node '{name}' is not a declared node")


class CycleError(DagIterError):
    """Raised by the optional cycle check when the edges do not form a DAG."""

    def __init__(self, nodes: Sequence[str]) -> None:
        self.nodes = tuple(nodes)
        super().__init__(f"Cycle detected among nodes: {', '.join(self.nodes)}")


class GraphFileError(DagIterError):
    """Raised when a graph document cannot be read or validated."""


class ConfigError(DagIterError):
    """Error in dagiter configuration."""
