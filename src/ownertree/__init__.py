"""ownertree: deterministic tree layouts for ownership hierarchies."""

from loguru import logger

from ownertree.config import LayoutConfig
from ownertree.errors import LayoutConfigError, RecordError
from ownertree.ir import EdgeRecord, NodeRecord, flatten_resource_tree
from ownertree.layout import (
    LayoutEngine,
    LayoutResult,
    PositionedNode,
    StyledEdge,
    create_layout_engine,
    layout,
)
from ownertree.types import Direction, StrategyName

# Library logging stays quiet unless the application opts in.
logger.disable("ownertree")

__all__ = [
    "Direction",
    "EdgeRecord",
    "LayoutConfig",
    "LayoutConfigError",
    "LayoutEngine",
    "LayoutResult",
    "NodeRecord",
    "PositionedNode",
    "RecordError",
    "StrategyName",
    "StyledEdge",
    "create_layout_engine",
    "flatten_resource_tree",
    "layout",
]
