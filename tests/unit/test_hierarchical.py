"""Tests for ownertree.layout.hierarchical — level counting and per-level centring."""

from __future__ import annotations

from conftest import make_tree

from ownertree.config import LayoutConfig
from ownertree.ir.tree import assemble
from ownertree.layout.hierarchical import HierarchicalLayout, assign_level_positions, count_level_widths
from ownertree.types import Direction


def run(config: LayoutConfig, *edges: tuple[str, str], extra: tuple[str, ...] = ()):
    nodes, edge_records = make_tree(*edges, extra=extra)
    return HierarchicalLayout(config).layout(nodes, edge_records)


class TestLevelWidths:
    def test_counts_per_level(self):
        nodes, edges = make_tree(("A", "B"), ("A", "C"), ("B", "D"), ("C", "E"), ("C", "F"))
        tree = assemble(nodes, edges)
        assert count_level_widths(tree) == {0: 1, 1: 2, 2: 3}

    def test_empty_tree(self):
        assert count_level_widths(assemble([], [])) == {}

    def test_positions_use_level_index(self, small_config):
        nodes, edges = make_tree(("A", "B"), ("A", "C"), ("A", "D"))
        tree = assemble(nodes, edges)
        assign_level_positions(tree, count_level_widths(tree), small_config)
        assert [tree.node(i).x for i in "BCD"] == [-10, 0, 10]


class TestHierarchicalLayout:
    def test_single_node_at_origin(self, small_config):
        result = run(small_config, extra=("A",))
        node = result.node("A")
        assert (node.x, node.y, node.level, node.is_root) == (0, 0, 0, True)

    def test_levels_centred_independently(self):
        result = run(LayoutConfig(), ("A", "B"), ("A", "C"))
        assert (result.node("B").x, result.node("C").x) == (-180, 180)
        assert result.node("B").y == 320
        assert result.node("A").x == 0

    def test_left_to_right(self):
        result = run(LayoutConfig(direction=Direction.LR), ("A", "B"), ("A", "C"))
        assert (result.node("B").x, result.node("B").y) == (320, -180)

    def test_chain_shares_cross_axis(self, small_config):
        result = run(small_config, ("A", "B"), ("B", "C"))
        assert [result.node(i).x for i in "ABC"] == [0, 0, 0]
        assert [result.node(i).y for i in "ABC"] == [0, 20, 40]

    def test_unreachable_node_stays_at_origin(self, small_config):
        result = run(small_config, ("A", "B"), ("A", "C"), ("Z", "Z"))
        z = result.node("Z")
        assert (z.x, z.y, z.level, z.is_root) == (0, 0, 0, False)

    def test_empty(self, small_config):
        result = run(small_config)
        assert result.nodes == [] and result.edges == []
