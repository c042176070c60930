"""Tests for ownertree.layout.reingold_tilford — walks, apportion, and final positions."""

from __future__ import annotations

from conftest import chain, make_tree

from ownertree.config import LayoutConfig
from ownertree.ir.tree import assemble
from ownertree.layout.reingold_tilford import (
    ReingoldTilfordLayout,
    RTNode,
    execute_shifts,
    first_walk,
    initialize,
    move_subtree,
    next_left,
    next_right,
    second_walk,
)
from ownertree.types import Direction

# ─── Helpers ──────────────────────────────────────────────────────────────────


def run(config: LayoutConfig, *edges: tuple[str, str]) -> dict[str, tuple[float, float]]:
    nodes, edge_records = make_tree(*edges)
    result = ReingoldTilfordLayout(config).layout(nodes, edge_records)
    return {n.id: (n.x, n.y) for n in result.nodes}


def walked(*edges: tuple[str, str], distance: float = 10):
    nodes, edge_records = make_tree(*edges)
    tree = assemble(nodes, edge_records, node_cls=RTNode)
    initialize(tree)
    first_walk(tree, distance)
    return tree


# ─── Initialise ───────────────────────────────────────────────────────────────


class TestInitialize:
    def test_preorder_numbers(self):
        nodes, edges = make_tree(("A", "B"), ("A", "C"), ("B", "D"))
        tree = assemble(nodes, edges, node_cls=RTNode)
        initialize(tree)
        assert {n.id: n.preorder_number for n in tree.nodes_by_id.values()} == {"A": 0, "B": 1, "D": 2, "C": 3}

    def test_ancestor_starts_as_self(self):
        nodes, edges = make_tree(("A", "B"), ("A", "C"))
        tree = assemble(nodes, edges, node_cls=RTNode)
        initialize(tree)
        assert all(n.ancestor == n.id for n in tree.nodes_by_id.values())
        assert all(n.thread is None for n in tree.nodes_by_id.values())


# ─── First walk ───────────────────────────────────────────────────────────────


class TestFirstWalk:
    def test_leaves_spaced_by_distance(self):
        tree = walked(("A", "B"), ("A", "C"), ("A", "D"))
        assert [c.prelim for c in tree.node("A").children] == [0, 10, 20]

    def test_parent_centred_over_children(self):
        tree = walked(("A", "B"), ("A", "C"), ("A", "D"))
        assert tree.node("A").prelim == 10

    def test_internal_node_with_left_sibling_gets_mod(self):
        """C sits one distance right of B; its children are pushed by mod."""
        tree = walked(("A", "B"), ("A", "C"), ("C", "D"), ("C", "E"))
        c = tree.node("C")
        assert c.prelim == 10
        assert c.mod == 5  # midpoint of D (0) and E (10) is 5

    def test_apportion_separates_conflicting_subtrees(self):
        tree = walked(("A", "B"), ("A", "C"), ("B", "D"), ("B", "E"), ("C", "F"), ("C", "G"))
        c = tree.node("C")
        assert c.prelim == 25
        assert c.mod == 20

    def test_leaf_threads_to_deeper_left_contour(self):
        """A leaf next to a deeper sibling threads onto that sibling's right contour."""
        tree = walked(("A", "B"), ("A", "C"), ("B", "D"), ("B", "E"))
        assert tree.node("C").thread == "E"


class TestContourHelpers:
    def test_next_left_and_right_prefer_children(self):
        tree = walked(("A", "B"), ("A", "C"))
        a = tree.node("A")
        assert next_left(tree, a) is tree.node("B")
        assert next_right(tree, a) is tree.node("C")

    def test_leaf_without_thread(self):
        tree = walked(("A", "B"))
        assert next_left(tree, tree.node("B")) is None
        assert next_right(tree, tree.node("B")) is None


class TestMoveSubtree:
    def test_shift_is_spread_over_intermediate_siblings(self):
        nodes, edges = make_tree(("A", "B"), ("A", "C"), ("A", "D"))
        tree = assemble(nodes, edges, node_cls=RTNode)
        initialize(tree)
        b, c, d = (tree.node(i) for i in "BCD")
        move_subtree(b, d, 10)
        assert (d.prelim, d.mod, d.shift, d.change) == (10, 10, 10, -5)
        assert b.change == 5
        execute_shifts(tree.node("A"))
        assert c.prelim == 5
        assert c.mod == 5
        assert b.prelim == 0


# ─── Final positions ──────────────────────────────────────────────────────────


class TestPositions:
    def test_two_children_example(self):
        """A → B, A → C with width 280 and spacing 80: children 360 apart, A centred."""
        positions = run(LayoutConfig(node_width=280, horizontal_spacing=80), ("A", "B"), ("A", "C"))
        bx, cx, ax = positions["B"][0], positions["C"][0], positions["A"][0]
        assert abs(bx - cx) == 360
        assert ax == (bx + cx) / 2

    def test_chain_shares_cross_axis(self, small_config):
        positions = run(small_config, ("A", "B"), ("B", "C"))
        assert {p[0] for p in positions.values()} == {0}
        assert [positions[i][1] for i in "ABC"] == [0, 20, 40]

    def test_small_subtree_centred_between_wide_neighbours(self, small_config):
        """The leaf C between two wide subtrees is moved to the midpoint of B and D."""
        positions = run(
            small_config,
            ("A", "B"), ("A", "C"), ("A", "D"),
            ("B", "E"), ("B", "F"), ("B", "G"),
            ("D", "H"), ("D", "I"), ("D", "J"),
        )
        xs = {nid: p[0] for nid, p in positions.items()}
        assert (xs["B"], xs["C"], xs["D"]) == (10, 25, 40)
        assert xs["A"] == 25
        assert [xs[i] for i in "EFGHIJ"] == [0, 10, 20, 30, 40, 50]

    def test_second_walk_adds_ancestor_mods(self, small_config):
        tree = walked(("A", "B"), ("A", "C"), ("B", "D"), ("B", "E"), ("C", "F"), ("C", "G"))
        second_walk(tree, small_config)
        assert [tree.node(i).x for i in "DEFG"] == [0, 10, 20, 30]
        assert tree.node("A").x == 15

    def test_left_to_right_swaps_axes(self, small_config):
        lr = LayoutConfig(node_width=6, node_height=10, horizontal_spacing=4, vertical_spacing=10,
                          direction=Direction.LR)
        tb_positions = run(small_config, ("A", "B"), ("A", "C"))
        lr_positions = run(lr, ("A", "B"), ("A", "C"))
        for nid, (x, y) in tb_positions.items():
            assert lr_positions[nid] == (y, x)

    def test_deep_chain(self, small_config):
        nodes, edges = chain(3000)
        result = ReingoldTilfordLayout(small_config).layout(nodes, edges)
        assert result.node("n2999").level == 2999
        assert result.node("n2999").x == 0

    def test_empty(self, small_config):
        result = ReingoldTilfordLayout(small_config).layout([], [])
        assert result.nodes == []
        assert result.edges == []
