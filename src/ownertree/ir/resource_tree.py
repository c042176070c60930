"""Flatten the resolver's nested resource tree into node and edge records.

The resolver emits ``[{"resource": {...}, "children": [...]}, ...]`` where each
resource is an unstructured Kubernetes-style object. The engine works on flat
records, so this walks the nesting once and picks an edge style from the
parent and child kinds.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from ownertree.errors import RecordError
from ownertree.ir.records import DEFAULT_NODE_TYPE, EdgeRecord, NodeRecord
from ownertree.types import Direction

# ─── Edge styles by relationship ─────────────────────────────────────────────

OWNERSHIP_STYLE: dict[str, Any] = {"stroke": "#999", "strokeWidth": 3}
SERVICE_STYLE: dict[str, Any] = {"stroke": "#aaa", "strokeWidth": 2, "strokeDasharray": "5,5"}
CONFIG_STYLE: dict[str, Any] = {"stroke": "#ccc", "strokeWidth": 2, "strokeDasharray": "3,3"}
DEFAULT_STYLE: dict[str, Any] = {"stroke": "#bbb", "strokeWidth": 2}

_STRONG_OWNERSHIP: frozenset[tuple[str, str]] = frozenset(
    {
        ("cluster", "component"),
        ("component", "instance"),
        ("deployment", "replicaset"),
        ("replicaset", "pod"),
    }
)
_CONFIG_KINDS: frozenset[str] = frozenset({"configmap", "secret"})


def edge_style_for(parent_kind: str, child_kind: str) -> dict[str, Any]:
    """Pick the edge style for a parent → child relationship."""
    parent_type = parent_kind.lower()
    child_type = child_kind.lower()
    if (parent_type, child_type) in _STRONG_OWNERSHIP:
        return dict(OWNERSHIP_STYLE)
    if "service" in (parent_type, child_type):
        return dict(SERVICE_STYLE)
    if parent_type in _CONFIG_KINDS or child_type in _CONFIG_KINDS:
        return dict(CONFIG_STYLE)
    return dict(DEFAULT_STYLE)


def summarize_resource(resource: Mapping[str, Any]) -> dict[str, Any]:
    metadata = resource.get("metadata") or {}
    return {
        "name": metadata.get("name", ""),
        "kind": resource.get("kind", ""),
        "apiVersion": resource.get("apiVersion", ""),
        "namespace": metadata.get("namespace"),
        "uid": metadata.get("uid", ""),
        "labels": metadata.get("labels"),
        "annotations": metadata.get("annotations"),
        "creationTime": metadata.get("creationTimestamp", ""),
        "status": "Running" if resource.get("status") else "Unknown",
    }


def flatten_resource_tree(
    tree_nodes: Sequence[Mapping[str, Any]],
    direction: Direction = Direction.TB,
) -> tuple[list[NodeRecord], list[EdgeRecord]]:
    """Walk nested resource-tree nodes depth-first into flat records.

    Raises:
        RecordError: If a resource has no ``metadata.uid``.
    """
    nodes: list[NodeRecord] = []
    edges: list[EdgeRecord] = []

    # Explicit stack keeps deep ownership chains off the interpreter stack.
    stack: list[tuple[Mapping[str, Any], int, bool]] = [(tn, 0, True) for tn in reversed(tree_nodes)]
    while stack:
        tree_node, level, is_root = stack.pop()
        resource = tree_node.get("resource") or {}
        summary = summarize_resource(resource)
        uid = summary["uid"]
        if not uid:
            raise RecordError(f"resource has no metadata.uid: {resource!r}")

        nodes.append(
            NodeRecord(
                id=uid,
                type=DEFAULT_NODE_TYPE,
                data={
                    "resource": summary,
                    "isParent": is_root,
                    "level": level,
                    "isRoot": is_root,
                    "layoutDirection": direction.value,
                },
            )
        )

        children = tree_node.get("children") or []
        for index, child in enumerate(children):
            child_resource = child.get("resource") or {}
            child_uid = (child_resource.get("metadata") or {}).get("uid", "")
            edges.append(
                EdgeRecord(
                    source=uid,
                    target=child_uid,
                    id=f"{uid}-{child_uid}",
                    label=str(len(children)) if index == 0 else None,
                    style=edge_style_for(summary["kind"], child_resource.get("kind", "")),
                )
            )
        for child in reversed(children):
            stack.append((child, level + 1, False))

    return nodes, edges
