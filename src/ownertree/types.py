"""Shared type definitions for ownertree.

Enums used across the tree IR, the layout strategies and the CLI.
"""

from __future__ import annotations

from enum import Enum


class Direction(Enum):
    TB = "TB"  # top-to-bottom: depth grows along y
    LR = "LR"  # left-to-right: depth grows along x

    @classmethod
    def default(cls) -> Direction:
        return cls.TB

    @classmethod
    def parse(cls, name: str | Direction) -> Direction:
        """Resolve a direction name ('TB', 'TD', 'LR'), case-insensitive."""
        if isinstance(name, Direction):
            return name
        key = str(name).upper()
        if key == "TD":
            key = "TB"
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown direction '{name}'; use TB or LR") from None

    @property
    def is_horizontal(self) -> bool:
        return self is Direction.LR


class StrategyName(Enum):
    Hierarchical = "hierarchical"
    ReingoldTilford = "reingold-tilford"
    EnhancedTree = "enhanced-tree"

    @classmethod
    def default(cls) -> StrategyName:
        return cls.Hierarchical

    @classmethod
    def lookup(cls, name: str | StrategyName | None) -> StrategyName | None:
        """Return the strategy for a wire name, or None if it is not known."""
        if isinstance(name, StrategyName):
            return name
        try:
            return cls(name)
        except ValueError:
            return None
