"""Tree assembly: flat node/edge records into a rooted tree.

This module owns the per-call tree structure used by every layout strategy.
Ownership flows parent → children only; the parent link is an id resolved
through ``AssembledTree.nodes_by_id``. The accepted edges are also kept in a
networkx DiGraph for degree queries.

Root selection depends on input order: the first node with no incoming edge
wins, and the first node overall is used when none qualifies. Callers that
want a stable root must supply nodes in a stable order.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import TypeVar

import networkx as nx
from loguru import logger

from ownertree.ir.records import EdgeRecord, NodeRecord


@dataclass(eq=False)
class TreeNode:
    """A node of the assembled tree. Strategies subclass it to add working fields."""

    id: str
    record: NodeRecord
    children: list[TreeNode] = field(default_factory=list)
    parent_id: str | None = None
    level: int = 0
    reachable: bool = False
    sibling_index: int = 0
    x: float = 0.0
    y: float = 0.0

    def is_leaf(self) -> bool:
        return not self.children


N = TypeVar("N", bound=TreeNode)


@dataclass
class AssembledTree:
    """The rooted tree for one layout call. Discarded when the call returns."""

    root: TreeNode | None
    nodes_by_id: dict[str, TreeNode]
    digraph: nx.DiGraph
    levels: dict[int, list[TreeNode]] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.nodes_by_id)

    def is_empty(self) -> bool:
        return self.root is None

    def node(self, node_id: str) -> TreeNode:
        return self.nodes_by_id[node_id]

    def parent(self, node: TreeNode) -> TreeNode | None:
        if node.parent_id is None:
            return None
        return self.nodes_by_id[node.parent_id]

    def left_sibling(self, node: TreeNode) -> TreeNode | None:
        parent = self.parent(node)
        if parent is None or node.sibling_index == 0:
            return None
        return parent.children[node.sibling_index - 1]

    def max_level(self) -> int:
        return max(self.levels, default=0)

    def reachable_nodes(self) -> Iterator[TreeNode]:
        for level in sorted(self.levels):
            yield from self.levels[level]

    def preorder(self) -> list[TreeNode]:
        """Reachable nodes in pre-order (parent before children, children left to right)."""
        if self.root is None:
            return []
        order: list[TreeNode] = []
        stack = [self.root]
        while stack:
            node = stack.pop()
            order.append(node)
            stack.extend(reversed(node.children))
        return order

    def postorder(self) -> list[TreeNode]:
        """Reachable nodes in post-order (children left to right, then parent)."""
        if self.root is None:
            return []
        order: list[TreeNode] = []
        stack: list[tuple[TreeNode, bool]] = [(self.root, False)]
        while stack:
            node, expanded = stack.pop()
            if expanded:
                order.append(node)
                continue
            stack.append((node, True))
            for child in reversed(node.children):
                stack.append((child, False))
        return order

    def reindex_children(self, node: TreeNode) -> None:
        for i, child in enumerate(node.children):
            child.sibling_index = i


def assemble(
    nodes: Sequence[NodeRecord],
    edges: Sequence[EdgeRecord],
    node_cls: type[N] = TreeNode,  # type: ignore[assignment]
) -> AssembledTree:
    """Build the rooted tree for ``nodes`` and ``edges``.

    Edges naming unknown ids and self-loops are dropped. A node that already
    has a parent keeps it; later edges into it stay in the DiGraph but not in
    the tree. Nodes the root cannot reach keep level 0 and ``reachable=False``.
    """
    digraph: nx.DiGraph = nx.DiGraph()
    nodes_by_id: dict[str, TreeNode] = {}
    for record in nodes:
        if record.id in nodes_by_id:
            logger.debug("duplicate node id {!r}; keeping the first occurrence", record.id)
            continue
        nodes_by_id[record.id] = node_cls(id=record.id, record=record)
        digraph.add_node(record.id)

    if not nodes_by_id:
        return AssembledTree(root=None, nodes_by_id={}, digraph=digraph)

    for edge in edges:
        parent = nodes_by_id.get(edge.source)
        child = nodes_by_id.get(edge.target)
        if parent is None or child is None:
            logger.debug("dropping dangling edge {} -> {}", edge.source, edge.target)
            continue
        if parent is child:
            logger.debug("dropping self-loop on {!r}", edge.source)
            continue
        digraph.add_edge(edge.source, edge.target)
        if child.parent_id is not None:
            logger.debug("{!r} already owned by {!r}; ignoring {!r}", child.id, child.parent_id, parent.id)
            continue
        child.parent_id = parent.id
        parent.children.append(child)

    root = _select_root(nodes_by_id, digraph)
    tree = AssembledTree(root=root, nodes_by_id=nodes_by_id, digraph=digraph)
    _detach_root(tree, root)
    for node in nodes_by_id.values():
        tree.reindex_children(node)
    _assign_levels(tree, root)
    return tree


def _select_root(nodes_by_id: dict[str, TreeNode], digraph: nx.DiGraph) -> TreeNode:
    for node_id, node in nodes_by_id.items():
        if digraph.in_degree(node_id) == 0:
            return node
    first = next(iter(nodes_by_id.values()))
    logger.debug("no node without incoming edges; using first node {!r} as root", first.id)
    return first


def _detach_root(tree: AssembledTree, root: TreeNode) -> None:
    # Only happens when the fallback root sits on a cycle.
    parent = tree.parent(root)
    if parent is None:
        return
    parent.children.remove(root)
    root.parent_id = None


def _assign_levels(tree: AssembledTree, root: TreeNode) -> None:
    root.level = 0
    root.reachable = True
    queue: deque[TreeNode] = deque([root])
    while queue:
        node = queue.popleft()
        tree.levels.setdefault(node.level, []).append(node)
        for child in node.children:
            if child.reachable:
                continue
            child.reachable = True
            child.level = node.level + 1
            queue.append(child)

    unreachable = len(tree.nodes_by_id) - sum(len(level) for level in tree.levels.values())
    if unreachable:
        logger.debug("{} node(s) unreachable from root {!r}", unreachable, root.id)
