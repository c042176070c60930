"""Exceptions raised at the ownertree input boundary."""

from __future__ import annotations


class RecordError(ValueError):
    """A node or edge record is missing a required field."""


class LayoutConfigError(ValueError):
    """A layout configuration value is out of range."""
