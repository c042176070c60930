"""Centralized configuration for ownertree layouts."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

from ownertree.errors import LayoutConfigError
from ownertree.types import Direction

# ─── Defaults ────────────────────────────────────────────────────────────────

NODE_WIDTH: float = 280.0
NODE_HEIGHT: float = 140.0
HORIZONTAL_SPACING: float = 80.0
VERTICAL_SPACING: float = 180.0

_WIRE_KEYS: dict[str, str] = {
    "nodeWidth": "node_width",
    "nodeHeight": "node_height",
    "horizontalSpacing": "horizontal_spacing",
    "verticalSpacing": "vertical_spacing",
}


@dataclass(frozen=True)
class LayoutConfig:
    """Geometry shared by every layout strategy."""

    node_width: float = NODE_WIDTH
    node_height: float = NODE_HEIGHT
    horizontal_spacing: float = HORIZONTAL_SPACING
    vertical_spacing: float = VERTICAL_SPACING
    direction: Direction = Direction.TB

    @property
    def separation(self) -> float:
        """Minimum distance between adjacent nodes on the primary axis."""
        return self.node_width + self.horizontal_spacing

    @property
    def level_step(self) -> float:
        """Distance between consecutive levels on the depth axis."""
        return self.node_height + self.vertical_spacing

    def validate(self) -> LayoutConfig:
        for f in fields(self):
            if f.name == "direction":
                continue
            value = getattr(self, f.name)
            if not math.isfinite(value):
                raise LayoutConfigError(f"{f.name} must be a finite number, got {value}")
            if value < 0:
                raise LayoutConfigError(f"{f.name} must not be negative, got {value}")
        if not isinstance(self.direction, Direction):
            raise LayoutConfigError(f"direction must be a Direction, got {self.direction!r}")
        return self

    def place(self, primary: float, level: int) -> tuple[float, float]:
        """Map a primary-axis coordinate and a level to (x, y)."""
        depth = level * self.level_step
        if self.direction.is_horizontal:
            return depth, primary
        return primary, depth

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None) -> LayoutConfig:
        """Build a config from wire (camelCase) or snake_case keys."""
        if not mapping:
            return cls()
        kwargs: dict[str, Any] = {}
        for key, value in mapping.items():
            name = _WIRE_KEYS.get(key, key)
            if name == "direction":
                try:
                    kwargs[name] = Direction.parse(value)
                except ValueError as e:
                    raise LayoutConfigError(str(e)) from None
            elif name in _WIRE_KEYS.values():
                try:
                    kwargs[name] = float(value)
                except (TypeError, ValueError):
                    raise LayoutConfigError(f"{key} must be a number, got {value!r}") from None
        return cls(**kwargs).validate()

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodeWidth": self.node_width,
            "nodeHeight": self.node_height,
            "horizontalSpacing": self.horizontal_spacing,
            "verticalSpacing": self.vertical_spacing,
            "direction": self.direction.value,
        }
