"""Base strategy protocol and the result conversion every strategy shares."""

from __future__ import annotations

from collections.abc import Collection, Sequence
from typing import Protocol

from ownertree.config import LayoutConfig
from ownertree.ir.records import EdgeRecord, NodeRecord
from ownertree.ir.tree import AssembledTree
from ownertree.layout.types import DEFAULT_EDGE_STYLE, LayoutResult, Point, PositionedNode, StyledEdge


class LayoutStrategy(Protocol):
    """Protocol that all layout strategies must implement.

    Implementations keep no per-call state on the instance: every scratch
    structure lives in the ``layout`` call, so a shared instance is safe to
    call reentrantly.
    """

    config: LayoutConfig

    def layout(self, nodes: Sequence[NodeRecord], edges: Sequence[EdgeRecord]) -> LayoutResult:
        """Position ``nodes`` and style ``edges``."""
        ...


def style_edges(edges: Sequence[EdgeRecord], known_ids: Collection[str] | None = None) -> list[StyledEdge]:
    """Attach presentational styling to each edge, in input order.

    When ``known_ids`` is given, edges naming any other id are dropped.
    """
    return [
        StyledEdge(
            id=edge.edge_id,
            source=edge.source,
            target=edge.target,
            label=edge.label or "",
            style=dict(edge.style) if edge.style else dict(DEFAULT_EDGE_STYLE),
            extra=dict(edge.extra),
        )
        for edge in edges
        if known_ids is None or (edge.source in known_ids and edge.target in known_ids)
    ]


def build_result(
    tree: AssembledTree,
    nodes: Sequence[NodeRecord],
    edges: Sequence[EdgeRecord],
    config: LayoutConfig,
) -> LayoutResult:
    """Merge positions from ``tree`` into one output entry per input node."""
    root_id = tree.root.id if tree.root is not None else None
    positioned: list[PositionedNode] = []
    for record in nodes:
        tree_node = tree.nodes_by_id[record.id]
        positioned.append(
            PositionedNode(
                id=record.id,
                type=record.type,
                position=Point(x=tree_node.x, y=tree_node.y),
                level=tree_node.level,
                is_root=record.id == root_id,
                data=dict(record.data),
                extra=dict(record.extra),
            )
        )
    return LayoutResult(nodes=positioned, edges=style_edges(edges, tree.nodes_by_id.keys()), direction=config.direction)
