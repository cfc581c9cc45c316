"""Nesting-graph preprocessing for layered layout of compound graphs."""

from __future__ import annotations

from compound_layout.graph import (
    CompoundGraph,
    ContainmentCycleError,
    DuplicateEdgeError,
    DuplicateNodeError,
    EdgeNotFoundError,
    GraphError,
    NodeNotFoundError,
)
from compound_layout.nesting import augment, minlen_multiplier, remove, tree_height
from compound_layout.rank import RankAssignment, rank_compound
from compound_layout.types import (
    BORDER_BOTTOM,
    BORDER_TOP,
    MIN_LEN,
    NESTING_EDGE,
    RANK,
    ROOT,
    TREE_DEPTH,
    Root,
)

__all__ = [
    "BORDER_BOTTOM",
    "BORDER_TOP",
    "MIN_LEN",
    "NESTING_EDGE",
    "RANK",
    "ROOT",
    "TREE_DEPTH",
    "CompoundGraph",
    "ContainmentCycleError",
    "DuplicateEdgeError",
    "DuplicateNodeError",
    "EdgeNotFoundError",
    "GraphError",
    "NodeNotFoundError",
    "RankAssignment",
    "Root",
    "augment",
    "minlen_multiplier",
    "rank_compound",
    "remove",
    "tree_height",
]
