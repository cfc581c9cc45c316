"""Shared constants and the implicit-root sentinel for compound graphs."""

from __future__ import annotations

from enum import Enum


class Root(Enum):
    """Marker for the top of the containment hierarchy.

    ``ROOT`` is never a node of the graph; it stands in for "no parent" so
    that code walking the hierarchy must handle the root case explicitly.
    """

    ROOT = "root"

    def __repr__(self) -> str:
        return "ROOT"


ROOT = Root.ROOT

# Attribute names written on node and edge payloads.
MIN_LEN = "minLen"
NESTING_EDGE = "nestingEdge"
TREE_DEPTH = "treeDepth"
BORDER_TOP = "borderNodeTop"
BORDER_BOTTOM = "borderNodeBottom"
RANK = "rank"

DEFAULT_MIN_LEN: int = 1

# Prefixes for auto-generated identifiers.
NODE_PREFIX = "__node_"
EDGE_PREFIX = "__edge_"
