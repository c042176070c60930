"""Layout engine facade: strategy selection behind a single ``layout`` call."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from loguru import logger

from ownertree.config import LayoutConfig
from ownertree.ir.records import EdgeRecord, NodeRecord, coerce_edges, coerce_nodes
from ownertree.layout.base import LayoutStrategy
from ownertree.layout.enhanced import EnhancedTreeLayout
from ownertree.layout.hierarchical import HierarchicalLayout
from ownertree.layout.reingold_tilford import ReingoldTilfordLayout
from ownertree.layout.types import LayoutResult
from ownertree.types import StrategyName

_STRATEGIES: dict[StrategyName, type[LayoutStrategy]] = {
    StrategyName.Hierarchical: HierarchicalLayout,
    StrategyName.ReingoldTilford: ReingoldTilfordLayout,
    StrategyName.EnhancedTree: EnhancedTreeLayout,
}


class LayoutEngine:
    """A configured strategy. Accepts typed records or wire mappings."""

    def __init__(self, strategy: StrategyName, config: LayoutConfig) -> None:
        self.strategy = strategy
        self.config = config.validate()

    def layout(
        self,
        nodes: Iterable[NodeRecord | Mapping[str, Any]] | None,
        edges: Iterable[EdgeRecord | Mapping[str, Any]] | None,
    ) -> LayoutResult:
        node_records = coerce_nodes(nodes)
        edge_records = coerce_edges(edges)
        # One strategy instance per call keeps working fields call-scoped.
        impl = _STRATEGIES[self.strategy](self.config)
        return impl.layout(node_records, edge_records)


def resolve_strategy(name: str | StrategyName | None) -> StrategyName:
    """Map a strategy name to a StrategyName; unknown names fall back to hierarchical."""
    strategy = StrategyName.lookup(name)
    if strategy is None:
        logger.debug("unknown layout strategy {!r}; falling back to hierarchical", name)
        return StrategyName.default()
    return strategy


def create_layout_engine(
    strategy_name: str | StrategyName | None,
    config: LayoutConfig | Mapping[str, Any] | None = None,
) -> LayoutEngine:
    """Build a layout engine for ``strategy_name`` with ``config``.

    Args:
        strategy_name: 'hierarchical', 'reingold-tilford' or 'enhanced-tree'.
            Anything else selects 'hierarchical'.
        config: A LayoutConfig, a wire mapping (camelCase keys), or None for defaults.

    Raises:
        LayoutConfigError: If the configuration has negative sizes or an unknown direction.
    """
    if not isinstance(config, LayoutConfig):
        config = LayoutConfig.from_mapping(config)
    return LayoutEngine(resolve_strategy(strategy_name), config)


def layout(
    nodes: Iterable[NodeRecord | Mapping[str, Any]] | None,
    edges: Iterable[EdgeRecord | Mapping[str, Any]] | None,
    config: LayoutConfig | Mapping[str, Any] | None = None,
    strategy: str | StrategyName | None = StrategyName.Hierarchical,
) -> LayoutResult:
    """Lay out ``nodes``/``edges`` in one call."""
    return create_layout_engine(strategy, config).layout(nodes, edges)
