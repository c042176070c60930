"""Caller-supplied node and edge records.

The resolver hands the engine plain records: an opaque id plus an arbitrary
payload for nodes, and ``source``/``target`` ownership pairs for edges. These
dataclasses are the typed form; ``coerce_nodes``/``coerce_edges`` also accept
the wire mappings the front-end sends.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from ownertree.errors import RecordError

DEFAULT_NODE_TYPE = "resourceNode"

# Fields the engine owns; anything else a caller sends is carried through untouched.
_NODE_FIELDS: frozenset[str] = frozenset({"id", "data", "type", "position"})
_EDGE_FIELDS: frozenset[str] = frozenset({"id", "source", "target", "label", "style"})


@dataclass
class NodeRecord:
    id: str
    data: dict[str, Any] = field(default_factory=dict)
    type: str = DEFAULT_NODE_TYPE
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class EdgeRecord:
    """``source`` owns ``target``."""

    source: str
    target: str
    id: str | None = None
    label: str | None = None
    style: dict[str, Any] | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def edge_id(self) -> str:
        return self.id if self.id is not None else f"{self.source}-{self.target}"


def coerce_node(raw: NodeRecord | Mapping[str, Any]) -> NodeRecord:
    if isinstance(raw, NodeRecord):
        return raw
    if not isinstance(raw, Mapping) or "id" not in raw:
        raise RecordError(f"node record needs an 'id': {raw!r}")
    data = raw.get("data")
    return NodeRecord(
        id=str(raw["id"]),
        data=dict(data) if isinstance(data, Mapping) else {},
        type=raw.get("type") or DEFAULT_NODE_TYPE,
        extra={k: v for k, v in raw.items() if k not in _NODE_FIELDS},
    )


def coerce_edge(raw: EdgeRecord | Mapping[str, Any]) -> EdgeRecord:
    if isinstance(raw, EdgeRecord):
        return raw
    if not isinstance(raw, Mapping) or "source" not in raw or "target" not in raw:
        raise RecordError(f"edge record needs 'source' and 'target': {raw!r}")
    style = raw.get("style")
    edge_id = raw.get("id")
    label = raw.get("label")
    return EdgeRecord(
        source=str(raw["source"]),
        target=str(raw["target"]),
        id=str(edge_id) if edge_id is not None else None,
        label=str(label) if label is not None else None,
        style=dict(style) if isinstance(style, Mapping) else None,
        extra={k: v for k, v in raw.items() if k not in _EDGE_FIELDS},
    )


def coerce_nodes(raw_nodes: Iterable[NodeRecord | Mapping[str, Any]] | None) -> list[NodeRecord]:
    return [coerce_node(n) for n in raw_nodes or []]


def coerce_edges(raw_edges: Iterable[EdgeRecord | Mapping[str, Any]] | None) -> list[EdgeRecord]:
    return [coerce_edge(e) for e in raw_edges or []]
