"""Reading graph documents and writing traversal results."""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, ValidationError

from ._errors import GraphFileError
from ._models import Edge, Node

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ._models import Visit

logger = logging.getLogger(__name__)


class NodeEntry(BaseModel):
    """A ``[[nodes]]`` entry. ``data`` defaults to the node name."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    data: Any = None

    def to_node(self) -> Node[Any]:
        return Node(name=self.name, data=self.name if self.data is None else self.data)


class EdgeEntry(BaseModel):
    """An ``[[edges]]`` entry."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    src: str
    dst: str

    def to_edge(self) -> Edge:
        return Edge(src=self.src, dst=self.dst)


class GraphDocument(BaseModel):
    """A graph as stored in a TOML or JSON file.

    Example (TOML):
        [[nodes]]
        name = "A"

        [[nodes]]
        name = "B"

        [[edges]]
        src = "A"
        dst = "B"

    """

    model_config = ConfigDict(extra="forbid")

    nodes: list[NodeEntry] = []
    edges: list[EdgeEntry] = []

    def to_nodes(self) -> list[Node[Any]]:
        return [entry.to_node() for entry in self.nodes]

    def to_edges(self) -> list[Edge]:
        return [entry.to_edge() for entry in self.edges]


def _read_raw(path: Path) -> dict[str, Any]:
    suffix = path.suffix.lower()
    try:
        if suffix == ".toml":
            with path.open("rb") as f:
                return tomllib.load(f)
        if suffix == ".json":
            with path.open(encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                msg = f"Expected a JSON object at the top level of {path}"
                raise GraphFileError(msg)
            return data
    except OSError as e:
        msg = f"Cannot read graph file {path}: {e}"
        raise GraphFileError(msg) from e
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {path}: {e}"
        raise GraphFileError(msg) from e
    except json.JSONDecodeError as e:
        msg = f"Invalid JSON in {path}: {e}"
        raise GraphFileError(msg) from e
    except UnicodeDecodeError as e:
        msg = f"Graph file {path} is not valid UTF-8: {e}"
        raise GraphFileError(msg) from e

    msg = f"Unsupported graph file type '{path.suffix}' (expected .toml or .json)"
    raise GraphFileError(msg)


def load_graph(path: Path | str) -> GraphDocument:
    """Load and validate a graph document.

    Args:
        path: Path to a ``.toml`` or ``.json`` file.

    Returns:
        The validated GraphDocument.

    Raises:
        GraphFileError: If the file cannot be read, parsed or validated.

    """
    path = Path(path)
    raw = _read_raw(path)
    try:
        document = GraphDocument.model_validate(raw)
    except ValidationError as e:
        msg = f"Invalid graph document {path}:\n{e}"
        raise GraphFileError(msg) from e

    logger.debug("Loaded %d nodes and %d edges from %s", len(document.nodes), len(document.edges), path)
    return document


def _serialize_value(value: Any) -> Any:
    """Convert a payload into something TOML can hold.

    Handles:
    - Pydantic BaseModel: converted via model_dump()
    - dict: values serialized recursively
    - list/tuple: items serialized recursively
    - None: rendered as an empty string (TOML has no null)
    - Anything else TOML does not know: rendered with repr()
    """
    if isinstance(value, BaseModel):
        return _serialize_value(value.model_dump(mode="python"))
    if isinstance(value, dict):
        return {str(k): _serialize_value(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [_serialize_value(v) for v in value]
    if value is None:
        return ""
    if isinstance(value, str | int | float | bool):
        return value
    return repr(value)


def export_visits(visits: Sequence[Visit[Any]], path: Path | str) -> None:
    """Write a traversal to a TOML file as a ``[[visits]]`` array.

    Args:
        visits: Visits as returned by :func:`dagiter.walk`.
        path: Output TOML file.

    """
    path = Path(path)
    payload = {
        "visits": [
            {
                "index": visit.index,
                "name": visit.name,
                "depth": visit.depth,
                "parents": list(visit.parents),
                "data": _serialize_value(visit.data),
            }
            for visit in visits
        ],
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as f:
        tomli_w.dump(payload, f)
    logger.debug("Exported %d visits to %s", len(visits), path)
