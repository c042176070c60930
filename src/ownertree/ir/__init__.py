"""Intermediate representation: input records and the assembled tree."""

from ownertree.ir.records import (
    DEFAULT_NODE_TYPE,
    EdgeRecord,
    NodeRecord,
    coerce_edge,
    coerce_edges,
    coerce_node,
    coerce_nodes,
)
from ownertree.ir.resource_tree import flatten_resource_tree
from ownertree.ir.tree import AssembledTree, TreeNode, assemble

__all__ = [
    "DEFAULT_NODE_TYPE",
    "AssembledTree",
    "EdgeRecord",
    "NodeRecord",
    "TreeNode",
    "assemble",
    "coerce_edge",
    "coerce_edges",
    "coerce_node",
    "coerce_nodes",
    "flatten_resource_tree",
]
