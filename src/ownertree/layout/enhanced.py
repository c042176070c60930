"""Enhanced tree layout: subtree-size ordering plus per-level conflict resolution.

Passes:
  1. Provisional x: leaves take consecutive slots left to right, parents sit
     midway between their first and last child
  2. Conflict resolution: sweep each level and push crowded subtrees right
  3. Centre the tree on x = 0
  4. Map (level, x) onto the configured direction

Children are sorted by descending subtree width before pass 1, which puts
the widest subtree leftmost.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from loguru import logger

from ownertree.config import LayoutConfig
from ownertree.ir.records import EdgeRecord, NodeRecord
from ownertree.ir.tree import AssembledTree, TreeNode, assemble
from ownertree.layout.base import build_result
from ownertree.layout.types import LayoutResult


@dataclass(eq=False)
class EnhancedNode(TreeNode):
    subtree_width: int = 0


# ─── Ordering ────────────────────────────────────────────────────────────────


def compute_subtree_widths(tree: AssembledTree) -> None:
    """Leaves count 1; a parent counts the sum of its children (at least 1)."""
    for node in tree.postorder():
        if node.is_leaf():
            node.subtree_width = 1
        else:
            node.subtree_width = max(sum(c.subtree_width for c in node.children), 1)


def sort_children_by_width(tree: AssembledTree) -> None:
    """Order every child list by descending subtree width; ties keep input order."""
    for node in tree.preorder():
        node.children.sort(key=lambda c: -c.subtree_width)
        tree.reindex_children(node)


# ─── Pass 1: Provisional positions ───────────────────────────────────────────


def assign_provisional_x(tree: AssembledTree, separation: float, start_x: float = 0.0) -> float:
    """Place the tree left to right from ``start_x``; returns the next free x."""
    cursor = start_x
    for node in tree.postorder():
        if node.is_leaf():
            node.x = cursor
            cursor += separation
        else:
            node.x = (node.children[0].x + node.children[-1].x) / 2
    return cursor


# ─── Pass 2: Conflict resolution ─────────────────────────────────────────────


def shift_subtree(node: TreeNode, shift: float) -> None:
    stack = [node]
    while stack:
        current = stack.pop()
        current.x += shift
        stack.extend(current.children)


def resolve_conflicts(tree: AssembledTree, separation: float) -> int:
    """Sweep each level left to right, pushing any node closer than ``separation``
    to its left neighbour (and its whole subtree) rightwards. Returns the number
    of shifts applied."""
    shifts = 0
    for level in sorted(tree.levels):
        nodes_at_level = sorted(tree.levels[level], key=lambda n: n.x)
        for prev, current in zip(nodes_at_level, nodes_at_level[1:]):
            required = prev.x + separation
            if current.x < required:
                shift_subtree(current, required - current.x)
                shifts += 1
    return shifts


# ─── Pass 3/4: Centre and orient ─────────────────────────────────────────────


def center_tree(tree: AssembledTree) -> None:
    xs = [n.x for n in tree.reachable_nodes()]
    if not xs:
        return
    offset = -(min(xs) + max(xs)) / 2
    for node in tree.reachable_nodes():
        node.x += offset


def orient(tree: AssembledTree, config: LayoutConfig) -> None:
    for node in tree.reachable_nodes():
        node.x, node.y = config.place(node.x, node.level)


# ─── EnhancedTreeLayout Engine ───────────────────────────────────────────────


class EnhancedTreeLayout:
    """Subtree-size-aware layout engine with explicit conflict resolution."""

    def __init__(self, config: LayoutConfig) -> None:
        self.config = config

    def layout(self, nodes: Sequence[NodeRecord], edges: Sequence[EdgeRecord]) -> LayoutResult:
        if not nodes:
            return LayoutResult(direction=self.config.direction)
        tree = assemble(nodes, edges, node_cls=EnhancedNode)
        compute_subtree_widths(tree)
        sort_children_by_width(tree)
        assign_provisional_x(tree, self.config.separation)
        shifts = resolve_conflicts(tree, self.config.separation)
        center_tree(tree)
        orient(tree, self.config)
        logger.debug("enhanced-tree: {} node(s), {} conflict shift(s)", len(tree), shifts)
        return build_result(tree, nodes, edges, self.config)
