"""Dependency-ordered DAG traversal."""

__all__ = [
    "AdjacencyIndex",
    "ConfigError",
    "CycleError",
    "DagIterError",
    "DuplicateNodeError",
    "Edge",
    "EdgeEntry",
    "GraphDocument",
    "GraphFileError",
    "Node",
    "NodeEntry",
    "SiblingOrder",
    "StrEnumWithDoc",
    "TraversalMode",
    "UnknownNodeError",
    "UnknownStopNodeError",
    "Visit",
    "build_graph",
    "export_visits",
    "iterate",
    "iterate_bfs",
    "iterate_dfs",
    "load_graph",
    "traverse",
    "walk",
]

from ._errors import (
    ConfigError,
    CycleError,
    DagIterError,
    DuplicateNodeError,
    GraphFileError,
    UnknownNodeError,
    UnknownStopNodeError,
)
from ._graph import AdjacencyIndex
from ._io import EdgeEntry, GraphDocument, NodeEntry, export_visits, load_graph
from ._models import Edge, Node, Visit
from ._modes import SiblingOrder, StrEnumWithDoc, TraversalMode
from ._traversal import build_graph, iterate, iterate_bfs, iterate_dfs, traverse, walk
