"""Nesting graph — containment scaffolding for layered layout of clusters.

A nesting graph (Sander, "Layout of Compound Directed Graphs") adds a top and
a bottom *border node* for every cluster, plus *nesting edges* from the top
border to each direct child and from each child to the bottom border. A
standard layering algorithm run on the augmented graph then places every
cluster member strictly between its cluster's borders.

Base nodes must never share a level with border nodes, so every original
edge is lengthened by ``2 * height + 1``, where ``height`` is the nesting
height of the containment tree. Base nodes then land on levels in a fixed
residue class and border nodes use the levels in between.

Cluster-to-cluster edges are not supported.

Pipeline:
  1. ``augment``  — tree height analysis, minLen scaling, border insertion
  2. (layering runs on the augmented graph)
  3. ``remove``   — drop the nesting edges again

``remove`` does not undo the minLen scaling, and border nodes stay in the
graph as edgeless leaves under ``ROOT``.
"""

from __future__ import annotations

import logging

from compound_layout.graph import CompoundGraph, Parent
from compound_layout.types import (
    BORDER_BOTTOM,
    BORDER_TOP,
    DEFAULT_MIN_LEN,
    MIN_LEN,
    NESTING_EDGE,
    ROOT,
    TREE_DEPTH,
)

logger = logging.getLogger(__name__)


# ─── Tree Height Analysis ─────────────────────────────────────────────────────


def tree_height(g: CompoundGraph) -> int:
    """Return the height of the containment tree, annotating clusters with depth.

    The implicit root sits at depth 0 and each containment edge adds one, so a
    cluster directly under ``ROOT`` gets ``treeDepth == 1``. The height is the
    largest depth reached by a leaf: 0 for an empty graph, 1 for a graph with
    no clusters.

    Walks the tree with an explicit stack; the containment hierarchy must be
    a finite tree (``CompoundGraph.set_parent`` refuses cycles).
    """
    height = 0
    stack: list[tuple[Parent, int]] = [(ROOT, 0)]
    while stack:
        u, depth = stack.pop()
        children = g.children(u)
        if not children:
            height = max(height, depth)
            continue
        if u is not ROOT:
            g.node(u)[TREE_DEPTH] = depth
        stack.extend((v, depth + 1) for v in children)
    return height


def minlen_multiplier(height: int) -> int:
    """Factor applied to every original edge's minLen: ``2 * height + 1``.

    Clamped to 1 so a degenerate (empty) hierarchy never yields zero or
    negative lengths.
    """
    return max(1, 2 * height + 1)


# ─── Augment ──────────────────────────────────────────────────────────────────


def augment(g: CompoundGraph) -> None:
    """Add border nodes and nesting edges for every cluster, in place.

    Every existing edge's ``minLen`` is multiplied by
    ``minlen_multiplier(height)``; an edge without ``minLen`` counts as 1.
    Calling this twice compounds the scaling.

    Border nodes are created bottom-up (a cluster's descendants get theirs
    first) and are added under ``ROOT`` so they never become clusters
    themselves. For each direct child ``v`` of cluster ``u`` the edges
    ``top → v`` and ``v → bottom`` get ``minLen`` 1 when ``v`` is a cluster,
    otherwise ``height - treeDepth(u) + 1``.
    """
    height = tree_height(g) - 1
    multiplier = minlen_multiplier(height)

    for _edge_id, _src, _tgt, attrs in g.edges():
        attrs[MIN_LEN] = attrs.get(MIN_LEN, DEFAULT_MIN_LEN) * multiplier

    # Post-order walk. Children are captured when a node is first visited,
    # before any border node is added under ROOT.
    borders = 0
    stack: list[tuple[Parent, list[str] | None]] = [(ROOT, None)]
    while stack:
        u, children = stack.pop()
        if children is None:
            children = g.children(u)
            if children:
                stack.append((u, children))
                stack.extend((v, None) for v in reversed(children))
            continue
        if u is ROOT:
            continue

        top = g.add_node(None, {})
        bottom = g.add_node(None, {})
        value = g.node(u)
        depth = value[TREE_DEPTH]
        value[BORDER_TOP] = top
        value[BORDER_BOTTOM] = bottom
        borders += 1

        for v in children:
            min_len = 1 if g.children(v) else height - depth + 1
            g.add_edge(None, top, v, {MIN_LEN: min_len, NESTING_EDGE: True})
            g.add_edge(None, v, bottom, {MIN_LEN: min_len, NESTING_EDGE: True})

    logger.debug(
        "nesting graph augmented: height=%d multiplier=%d clusters=%d",
        height,
        multiplier,
        borders,
    )


# ─── Remove ───────────────────────────────────────────────────────────────────


def remove(g: CompoundGraph) -> None:
    """Delete every edge flagged ``nestingEdge``; everything else is untouched."""
    removed = 0
    for edge_id, _src, _tgt, attrs in g.edges():
        if attrs.get(NESTING_EDGE):
            g.del_edge(edge_id)
            removed += 1
    logger.debug("nesting graph removed: %d nesting edges", removed)
