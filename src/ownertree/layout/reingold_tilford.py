"""Reingold–Tilford tree layout in linear time.

Phases:
  1. Initialise working fields (preorder numbers, ancestor = self)
  2. First walk (post-order): preliminary x, modifiers, apportion
  3. Second walk (pre-order): final x = prelim + sum of ancestor modifiers

Apportion follows Walker's contour comparison with Buchheim, Jünger and
Leipert's threads and ``change``/``shift`` accumulators, so the whole walk
stays linear even for unbalanced trees. Threads and ancestors are node ids
resolved through the tree's node map; no working state outlives a call.
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
class RTNode(TreeNode):
    """Tree node with the per-node state of the Walker/Buchheim walks.

    ``thread`` and ``ancestor`` hold node ids, not references. ``preorder_number``
    is set by :func:`initialize` and only records visit order; ``move_subtree``
    spreads shifts by ``sibling_index`` instead, which is what keeps siblings
    evenly spaced.
    """

    prelim: float = 0.0
    mod: float = 0.0
    thread: str | None = None
    ancestor: str = ""
    change: float = 0.0
    shift: float = 0.0
    preorder_number: int = 0


# ─── Contour helpers ─────────────────────────────────────────────────────────


def next_left(tree: AssembledTree, node: RTNode) -> RTNode | None:
    """Next node on the left contour: first child, else the thread."""
    if node.children:
        return node.children[0]
    if node.thread is None:
        return None
    return tree.nodes_by_id[node.thread]


def next_right(tree: AssembledTree, node: RTNode) -> RTNode | None:
    """Next node on the right contour: last child, else the thread."""
    if node.children:
        return node.children[-1]
    if node.thread is None:
        return None
    return tree.nodes_by_id[node.thread]


# ─── Phase 1: Initialise ─────────────────────────────────────────────────────


def initialize(tree: AssembledTree) -> None:
    for number, node in enumerate(tree.preorder()):
        node.preorder_number = number
        node.ancestor = node.id
        node.thread = None
        node.prelim = node.mod = node.change = node.shift = 0.0


# ─── Phase 2: First walk ─────────────────────────────────────────────────────


def first_walk(tree: AssembledTree, distance: float) -> None:
    """Compute ``prelim`` and ``mod`` bottom-up.

    A node is positioned once its whole subtree is done, then apportioned
    against its left siblings before the next sibling's subtree is walked.
    """
    default_ancestors: dict[str, RTNode] = {}
    for node in tree.postorder():
        left = tree.left_sibling(node)

        if node.is_leaf():
            node.prelim = left.prelim + distance if left is not None else 0.0
        else:
            execute_shifts(node)
            first: RTNode = node.children[0]
            last: RTNode = node.children[-1]
            midpoint = (first.prelim + last.prelim) / 2
            if left is not None:
                node.prelim = left.prelim + distance
                node.mod = node.prelim - midpoint
            else:
                node.prelim = midpoint

        if node.parent_id is None:
            continue
        parent = tree.nodes_by_id[node.parent_id]
        default = default_ancestors.setdefault(parent.id, parent.children[0])
        default_ancestors[parent.id] = apportion(tree, node, default, distance)


def apportion(tree: AssembledTree, node: RTNode, default_ancestor: RTNode, distance: float) -> RTNode:
    """Push ``node``'s subtree clear of the subtrees to its left.

    Walks the inside contour of ``node`` against the inside contour of its
    left neighbours, one depth at a time, and threads the shorter outside
    contour onto the longer one when either side runs out.
    """
    left = tree.left_sibling(node)
    if left is None:
        return default_ancestor
    parent = tree.nodes_by_id[node.parent_id]

    v_in_right: RTNode = node
    v_out_right: RTNode = node
    v_in_left: RTNode = left
    v_out_left: RTNode = parent.children[0]
    s_in_right = v_in_right.mod
    s_out_right = v_out_right.mod
    s_in_left = v_in_left.mod
    s_out_left = v_out_left.mod

    nr = next_right(tree, v_in_left)
    nl = next_left(tree, v_in_right)
    while nr is not None and nl is not None:
        v_in_left = nr
        v_in_right = nl
        v_out_left = next_left(tree, v_out_left)
        v_out_right = next_right(tree, v_out_right)
        v_out_right.ancestor = node.id

        shift = (v_in_left.prelim + s_in_left) - (v_in_right.prelim + s_in_right) + distance
        if shift > 0:
            move_subtree(_ancestor(tree, v_in_left, node, default_ancestor), node, shift)
            s_in_right += shift
            s_out_right += shift

        s_in_left += v_in_left.mod
        s_in_right += v_in_right.mod
        s_out_left += v_out_left.mod
        s_out_right += v_out_right.mod

        nr = next_right(tree, v_in_left)
        nl = next_left(tree, v_in_right)

    if nr is not None and next_right(tree, v_out_right) is None:
        v_out_right.thread = nr.id
        v_out_right.mod += s_in_left - s_out_right

    if nl is not None and next_left(tree, v_out_left) is None:
        v_out_left.thread = nl.id
        v_out_left.mod += s_in_right - s_out_left
        default_ancestor = node

    return default_ancestor


def _ancestor(tree: AssembledTree, v_in_left: RTNode, node: RTNode, default_ancestor: RTNode) -> RTNode:
    candidate: RTNode = tree.nodes_by_id[v_in_left.ancestor]
    if candidate.parent_id == node.parent_id:
        return candidate
    return default_ancestor


def move_subtree(wl: RTNode, wr: RTNode, shift: float) -> None:
    """Shift ``wr`` right by ``shift`` and spread it over the siblings between ``wl`` and ``wr``."""
    subtrees = wr.sibling_index - wl.sibling_index
    wr.change -= shift / subtrees
    wr.shift += shift
    wl.change += shift / subtrees
    wr.prelim += shift
    wr.mod += shift


def execute_shifts(node: TreeNode) -> None:
    """Apply the shifts recorded by ``move_subtree`` to ``node``'s children, right to left."""
    shift = 0.0
    change = 0.0
    for child in reversed(node.children):
        child.prelim += shift
        child.mod += shift
        change += child.change
        shift += child.shift + change


# ─── Phase 3: Second walk ────────────────────────────────────────────────────


def second_walk(tree: AssembledTree, config: LayoutConfig) -> None:
    mod_sums: dict[str, float] = {}
    for node in tree.preorder():
        mod_sum = mod_sums.get(node.id, 0.0)
        node.x, node.y = config.place(node.prelim + mod_sum, node.level)
        for child in node.children:
            mod_sums[child.id] = mod_sum + node.mod


# ─── ReingoldTilfordLayout Engine ────────────────────────────────────────────


class ReingoldTilfordLayout:
    """Reingold–Tilford tidy tree layout engine."""

    def __init__(self, config: LayoutConfig) -> None:
        self.config = config

    def layout(self, nodes: Sequence[NodeRecord], edges: Sequence[EdgeRecord]) -> LayoutResult:
        if not nodes:
            return LayoutResult(direction=self.config.direction)
        tree = assemble(nodes, edges, node_cls=RTNode)
        initialize(tree)
        first_walk(tree, self.config.separation)
        second_walk(tree, self.config)
        logger.debug("reingold-tilford: {} node(s), depth {}", len(tree), tree.max_level())
        return build_result(tree, nodes, edges, self.config)
