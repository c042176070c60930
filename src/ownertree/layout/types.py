"""Layout types shared across layout strategies and the facade."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ownertree.types import Direction

EDGE_TYPE = "smoothstep"
DEFAULT_EDGE_STYLE: dict[str, Any] = {"stroke": "#bbb", "strokeWidth": 2}
LABEL_STYLE: dict[str, Any] = {"fontSize": "11px", "fill": "#666"}
LABEL_BG_STYLE: dict[str, Any] = {"fill": "white", "fillOpacity": 0.8}


@dataclass
class Point:
    """A 2D point in pixel coordinates."""

    x: float
    y: float


@dataclass
class PositionedNode:
    """A node with its final position, carrying the caller's payload."""

    id: str
    type: str
    position: Point
    level: int
    is_root: bool
    data: dict[str, Any] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def x(self) -> float:
        return self.position.x

    @property
    def y(self) -> float:
        return self.position.y

    def to_dict(self, direction: Direction) -> dict[str, Any]:
        return {
            **self.extra,
            "id": self.id,
            "type": self.type,
            "position": {"x": self.position.x, "y": self.position.y},
            "data": {
                **self.data,
                "level": self.level,
                "isRoot": self.is_root,
                "layoutDirection": direction.value,
            },
        }


@dataclass
class StyledEdge:
    """An edge with presentational styling; renderers need no further geometry."""

    id: str
    source: str
    target: str
    label: str = ""
    type: str = EDGE_TYPE
    animated: bool = False
    style: dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_EDGE_STYLE))
    label_style: dict[str, Any] = field(default_factory=lambda: dict(LABEL_STYLE))
    label_bg_style: dict[str, Any] = field(default_factory=lambda: dict(LABEL_BG_STYLE))
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.extra,
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "type": self.type,
            "animated": self.animated,
            "label": self.label,
            "style": dict(self.style),
            "labelStyle": dict(self.label_style),
            "labelBgStyle": dict(self.label_bg_style),
        }


@dataclass
class LayoutResult:
    """Self-contained layout output: everything the rendering layer needs."""

    nodes: list[PositionedNode] = field(default_factory=list)
    edges: list[StyledEdge] = field(default_factory=list)
    direction: Direction = Direction.TB

    def node(self, node_id: str) -> PositionedNode:
        for node in self.nodes:
            if node.id == node_id:
                return node
        raise KeyError(node_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [n.to_dict(self.direction) for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }
