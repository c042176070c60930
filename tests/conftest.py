"""Shared tree fixtures for layout tests."""

from __future__ import annotations

import random

import pytest

from ownertree.config import LayoutConfig
from ownertree.ir.records import EdgeRecord, NodeRecord


def make_tree(*edges: tuple[str, str], extra: tuple[str, ...] = ()) -> tuple[list[NodeRecord], list[EdgeRecord]]:
    """Build records from (source, target) pairs; node order follows first mention."""
    order: dict[str, None] = {}
    for src, tgt in edges:
        order.setdefault(src)
        order.setdefault(tgt)
    for nid in extra:
        order.setdefault(nid)
    nodes = [NodeRecord(id=nid, data={"name": nid}) for nid in order]
    return nodes, [EdgeRecord(source=s, target=t) for s, t in edges]


def chain(length: int) -> tuple[list[NodeRecord], list[EdgeRecord]]:
    ids = [f"n{i}" for i in range(length)]
    return make_tree(*zip(ids, ids[1:]), extra=tuple(ids[:1]))


def random_tree(size: int, seed: int) -> tuple[list[NodeRecord], list[EdgeRecord]]:
    """A random recursive tree: node i picks a parent among nodes < i."""
    rng = random.Random(seed)
    edges = [(f"r{rng.randrange(i)}", f"r{i}") for i in range(1, size)]
    return make_tree(*edges, extra=("r0",))


TREES: dict[str, tuple[list[NodeRecord], list[EdgeRecord]]] = {
    "single": make_tree(extra=("A",)),
    "pair": make_tree(("A", "B"), ("A", "C")),
    "balanced": make_tree(
        ("A", "B"), ("A", "C"),
        ("B", "D"), ("B", "E"), ("C", "F"), ("C", "G"),
        ("D", "H"), ("D", "I"), ("E", "J"), ("E", "K"),
        ("F", "L"), ("F", "M"), ("G", "N"), ("G", "O"),
    ),
    "skewed": make_tree(
        ("A", "B"), ("A", "C"), ("A", "D"),
        ("B", "E"), ("E", "F"), ("F", "G"), ("F", "H"), ("F", "I"),
        ("D", "J"), ("D", "K"), ("K", "L"), ("K", "M"), ("K", "N"), ("K", "O"),
    ),
    "wide": make_tree(*[("root", f"leaf{i}") for i in range(8)], ("leaf3", "x1"), ("leaf3", "x2"), ("leaf3", "x3")),
    "chain": chain(12),
    "random": random_tree(120, seed=7),
}


@pytest.fixture
def small_config() -> LayoutConfig:
    """Separation 10, level step 20."""
    return LayoutConfig(node_width=6, node_height=10, horizontal_spacing=4, vertical_spacing=10)
