"""Layer assignment for compound graphs.

Longest-path ranking that honours each edge's ``minLen``, run on the nesting
graph so cluster members stay between their cluster's border nodes.
"""

from __future__ import annotations

import logging

import networkx as nx

from compound_layout import nesting
from compound_layout.graph import CompoundGraph
from compound_layout.types import DEFAULT_MIN_LEN, MIN_LEN, RANK

logger = logging.getLogger(__name__)


class RankAssignment:
    """Result of layer assignment: each node is assigned a rank (level).

    Rank 0 is the first level. Ranks are normalized so the smallest is 0.

    Attributes:
        ranks: Maps node id → rank.
        rank_count: Number of levels spanned (``max rank + 1``; 0 when empty).
    """

    def __init__(self, ranks: dict[str, int], rank_count: int) -> None:
        self.ranks = ranks
        self.rank_count = rank_count

    def __repr__(self) -> str:
        return f"RankAssignment(rank_count={self.rank_count}, ranks={self.ranks!r})"

    @classmethod
    def assign(cls, g: CompoundGraph) -> RankAssignment:
        """Assign ranks on the current edge set.

        For every edge u → v, rank[v] >= rank[u] + minLen. Nodes are visited in
        topological order, so one pass suffices. The edge set must be acyclic;
        otherwise networkx raises ``NetworkXUnfeasible``.
        """
        ranks: dict[str, int] = {node_id: 0 for node_id in g.digraph.nodes}

        for u in nx.topological_sort(g.digraph):
            for _, v, attrs in g.digraph.out_edges(u, data=True):
                min_len = attrs.get(MIN_LEN, DEFAULT_MIN_LEN)
                if ranks[v] < ranks[u] + min_len:
                    ranks[v] = ranks[u] + min_len

        if ranks:
            lowest = min(ranks.values())
            ranks = {node_id: r - lowest for node_id, r in ranks.items()}
        rank_count = (max(ranks.values()) + 1) if ranks else 0

        return cls(ranks=ranks, rank_count=rank_count)


def rank_compound(g: CompoundGraph) -> RankAssignment:
    """Rank a compound graph: augment, assign ranks, remove nesting edges.

    Each node's computed rank is also written to its ``rank`` attribute,
    border nodes included. Original edges keep their scaled ``minLen``.
    """
    nesting.augment(g)
    result = RankAssignment.assign(g)
    nesting.remove(g)

    for node_id, r in result.ranks.items():
        g.node(node_id)[RANK] = r

    logger.debug("ranked %d nodes over %d levels", len(result.ranks), result.rank_count)
    return result
