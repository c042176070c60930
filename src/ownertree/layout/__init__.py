"""Layout strategy registry and public API."""

from __future__ import annotations

from ownertree.layout.base import LayoutStrategy, build_result, style_edges
from ownertree.layout.engine import LayoutEngine, create_layout_engine, layout, resolve_strategy
from ownertree.layout.enhanced import EnhancedTreeLayout
from ownertree.layout.hierarchical import HierarchicalLayout
from ownertree.layout.reingold_tilford import ReingoldTilfordLayout
from ownertree.layout.types import (
    DEFAULT_EDGE_STYLE,
    EDGE_TYPE,
    LABEL_BG_STYLE,
    LABEL_STYLE,
    LayoutResult,
    Point,
    PositionedNode,
    StyledEdge,
)

__all__ = [
    "DEFAULT_EDGE_STYLE",
    "EDGE_TYPE",
    "LABEL_BG_STYLE",
    "LABEL_STYLE",
    "EnhancedTreeLayout",
    "HierarchicalLayout",
    "LayoutEngine",
    "LayoutResult",
    "LayoutStrategy",
    "Point",
    "PositionedNode",
    "ReingoldTilfordLayout",
    "StyledEdge",
    "build_result",
    "create_layout_engine",
    "layout",
    "resolve_strategy",
    "style_edges",
]
