"""Level-based hierarchical layout, the fast fallback strategy.

Each level is centred on the primary axis independently, with one
separation between neighbours. Only nodes of the same level are spaced;
unrelated branches of a skewed tree may still cross.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence

from loguru import logger

from ownertree.config import LayoutConfig
from ownertree.ir.records import EdgeRecord, NodeRecord
from ownertree.ir.tree import AssembledTree, TreeNode, assemble
from ownertree.layout.base import build_result
from ownertree.layout.types import LayoutResult


def count_level_widths(tree: AssembledTree) -> dict[int, int]:
    """First BFS pass: number of nodes on each level."""
    widths: dict[int, int] = {}
    for _, level in _bfs(tree):
        widths[level] = widths.get(level, 0) + 1
    return widths


def assign_level_positions(tree: AssembledTree, widths: dict[int, int], config: LayoutConfig) -> None:
    """Second BFS pass: index each node within its level and place it."""
    next_index: dict[int, int] = {}
    for node, level in _bfs(tree):
        index = next_index.get(level, 0)
        next_index[level] = index + 1
        primary = (index - (widths[level] - 1) / 2) * config.separation
        node.level = level
        node.x, node.y = config.place(primary, level)


def _bfs(tree: AssembledTree):
    if tree.root is None:
        return
    visited: set[str] = set()
    queue: deque[tuple[TreeNode, int]] = deque([(tree.root, 0)])
    while queue:
        node, level = queue.popleft()
        if node.id in visited:
            continue
        visited.add(node.id)
        yield node, level
        for child in node.children:
            if child.id not in visited:
                queue.append((child, level + 1))


class HierarchicalLayout:
    """Level-order layout engine."""

    def __init__(self, config: LayoutConfig) -> None:
        self.config = config

    def layout(self, nodes: Sequence[NodeRecord], edges: Sequence[EdgeRecord]) -> LayoutResult:
        if not nodes:
            return LayoutResult(direction=self.config.direction)
        tree = assemble(nodes, edges)
        widths = count_level_widths(tree)
        assign_level_positions(tree, widths, self.config)
        logger.debug("hierarchical: {} node(s) over {} level(s)", len(tree), len(widths))
        return build_result(tree, nodes, edges, self.config)
