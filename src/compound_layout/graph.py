"""CompoundGraph — a directed multigraph with a containment hierarchy.

Edges live in a ``networkx.MultiDiGraph`` keyed by a globally unique edge id,
so the same id identifies an edge regardless of its endpoints. The containment
hierarchy is kept alongside as parent/children maps; children are stored in
insertion order, which the nesting transform relies on.

Node and edge attribute payloads are the networkx attribute dicts themselves:
mutating the dict returned by ``node()`` or ``edge()`` mutates the graph.
"""

from __future__ import annotations

from typing import Any, Union

import networkx as nx

from compound_layout.types import EDGE_PREFIX, NODE_PREFIX, ROOT, Root

Parent = Union[str, Root]


# ─── Errors ───────────────────────────────────────────────────────────────────


class GraphError(Exception):
    """Base class for errors raised by CompoundGraph."""


class NodeNotFoundError(GraphError, KeyError):
    def __init__(self, node_id: object) -> None:
        super().__init__(f"node not found: {node_id!r}")
        self.node_id = node_id


class EdgeNotFoundError(GraphError, KeyError):
    def __init__(self, edge_id: object) -> None:
        super().__init__(f"edge not found: {edge_id!r}")
        self.edge_id = edge_id


class DuplicateNodeError(GraphError):
    def __init__(self, node_id: str) -> None:
        super().__init__(f"node already exists: {node_id!r}")
        self.node_id = node_id


class DuplicateEdgeError(GraphError):
    def __init__(self, edge_id: str) -> None:
        super().__init__(f"edge already exists: {edge_id!r}")
        self.edge_id = edge_id


class ContainmentCycleError(GraphError):
    """Raised when a parent assignment would make a node its own ancestor."""

    def __init__(self, node_id: str, parent: str) -> None:
        super().__init__(f"cannot place {node_id!r} under {parent!r}: containment cycle")
        self.node_id = node_id
        self.parent = parent


# ─── CompoundGraph ────────────────────────────────────────────────────────────


class CompoundGraph:
    """Directed multigraph whose nodes form a containment tree under ``ROOT``.

    Attributes:
        digraph: The underlying ``nx.MultiDiGraph``. Edge keys are edge ids.
    """

    def __init__(self) -> None:
        self.digraph: nx.MultiDiGraph = nx.MultiDiGraph()
        self._parent: dict[str, Parent] = {}
        self._children: dict[Parent, dict[str, None]] = {ROOT: {}}
        self._edge_ends: dict[str, tuple[str, str]] = {}
        self._next_node = 0
        self._next_edge = 0

    def __repr__(self) -> str:
        return f"CompoundGraph(nodes={self.number_of_nodes()}, edges={self.number_of_edges()})"

    # ── Nodes ──

    @property
    def nodes(self) -> list[str]:
        """All node ids in insertion order."""
        return list(self.digraph.nodes)

    def number_of_nodes(self) -> int:
        return self.digraph.number_of_nodes()

    def has_node(self, node_id: object) -> bool:
        return node_id in self._parent

    def add_node(
        self,
        node_id: str | None = None,
        attrs: dict[str, Any] | None = None,
        parent: Parent = ROOT,
    ) -> str:
        """Add a node and return its id (auto-generated when ``node_id`` is None)."""
        if node_id is None:
            node_id = self._fresh_id(NODE_PREFIX, "_next_node", self._parent)
        elif node_id in self._parent:
            raise DuplicateNodeError(node_id)
        if parent is not ROOT and parent not in self._parent:
            raise NodeNotFoundError(parent)

        self.digraph.add_node(node_id, **(attrs or {}))
        self._parent[node_id] = parent
        self._children[node_id] = {}
        self._children[parent][node_id] = None
        return node_id

    def node(self, node_id: str) -> dict[str, Any]:
        """Mutable attribute payload of a node."""
        if node_id not in self._parent:
            raise NodeNotFoundError(node_id)
        return self.digraph.nodes[node_id]

    # ── Containment ──

    def parent(self, node_id: str) -> Parent:
        if node_id not in self._parent:
            raise NodeNotFoundError(node_id)
        return self._parent[node_id]

    def set_parent(self, node_id: str, parent: Parent = ROOT) -> None:
        """Move ``node_id`` under ``parent``; the node keeps its own subtree."""
        if node_id not in self._parent:
            raise NodeNotFoundError(node_id)
        if parent is not ROOT:
            if parent not in self._parent:
                raise NodeNotFoundError(parent)
            ancestor: Parent = parent
            while ancestor is not ROOT:
                if ancestor == node_id:
                    raise ContainmentCycleError(node_id, parent)
                ancestor = self._parent[ancestor]

        del self._children[self._parent[node_id]][node_id]
        self._parent[node_id] = parent
        self._children[parent][node_id] = None

    def children(self, node_id: Parent = ROOT) -> list[str]:
        """Direct children of a node (or of ``ROOT``), in insertion order."""
        if node_id not in self._children:
            raise NodeNotFoundError(node_id)
        return list(self._children[node_id])

    # ── Edges ──

    def number_of_edges(self) -> int:
        return len(self._edge_ends)

    def has_edge(self, edge_id: object) -> bool:
        return edge_id in self._edge_ends

    def add_edge(
        self,
        edge_id: str | None,
        source: str,
        target: str,
        attrs: dict[str, Any] | None = None,
    ) -> str:
        """Add an edge ``source → target`` and return its id."""
        for end in (source, target):
            if end not in self._parent:
                raise NodeNotFoundError(end)
        if edge_id is None:
            edge_id = self._fresh_id(EDGE_PREFIX, "_next_edge", self._edge_ends)
        elif edge_id in self._edge_ends:
            raise DuplicateEdgeError(edge_id)

        self.digraph.add_edge(source, target, key=edge_id, **(attrs or {}))
        self._edge_ends[edge_id] = (source, target)
        return edge_id

    def edge(self, edge_id: str) -> dict[str, Any]:
        """Mutable attribute payload of an edge."""
        if edge_id not in self._edge_ends:
            raise EdgeNotFoundError(edge_id)
        source, target = self._edge_ends[edge_id]
        return self.digraph.edges[source, target, edge_id]

    def endpoints(self, edge_id: str) -> tuple[str, str]:
        if edge_id not in self._edge_ends:
            raise EdgeNotFoundError(edge_id)
        return self._edge_ends[edge_id]

    def edges(self) -> list[tuple[str, str, str, dict[str, Any]]]:
        """Snapshot of ``(edge_id, source, target, attrs)`` for every edge.

        The list is detached from the graph, so edges may be added or deleted
        while iterating it; the attrs dicts are still the live payloads.
        """
        return [(key, src, tgt, attrs) for src, tgt, key, attrs in self.digraph.edges(keys=True, data=True)]

    def del_edge(self, edge_id: str) -> None:
        if edge_id not in self._edge_ends:
            raise EdgeNotFoundError(edge_id)
        source, target = self._edge_ends.pop(edge_id)
        self.digraph.remove_edge(source, target, key=edge_id)

    # ── Helpers ──

    def _fresh_id(self, prefix: str, counter: str, taken: dict) -> str:
        n = getattr(self, counter)
        while f"{prefix}{n}" in taken:
            n += 1
        setattr(self, counter, n + 1)
        return f"{prefix}{n}"
