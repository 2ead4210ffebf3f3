"""
Minimal graph structure consumed by the layout engine.

The engine only needs ordered node and edge lists plus a directed edge
lookup; any object satisfying GraphLike works.
"""

from __future__ import annotations

from typing import Any, Hashable, Optional, Protocol, Sequence


class Node:
    """
    Graph vertex.

    Attributes:
        id: Stable identity
        data: Arbitrary attributes; 'mass' is read by the layout
    """

    def __init__(self, id: Hashable, data: Optional[dict[str, Any]] = None):
        self.id = id
        self.data = data if data is not None else {}

    def __repr__(self) -> str:
        return f"Node({self.id!r})"


class Edge:
    """
    Directed connection between two nodes.

    Attributes:
        id: Stable identity
        source: Source node
        target: Target node
        data: Arbitrary attributes; 'length' is read by the layout
    """

    def __init__(
        self,
        id: Hashable,
        source: Node,
        target: Node,
        data: Optional[dict[str, Any]] = None
    ):
        self.id = id
        self.source = source
        self.target = target
        self.data = data if data is not None else {}

    def __repr__(self) -> str:
        return f"Edge({self.id!r}, {self.source.id!r} -> {self.target.id!r})"


class GraphLike(Protocol):
    """What the layout engine reads from a graph."""

    nodes: Sequence[Node]
    edges: Sequence[Edge]

    def get_edges(self, node1: Node, node2: Node) -> Sequence[Edge]:
        ...


class Graph:
    """Ordered nodes and edges with a directed adjacency index."""

    def __init__(self):
        self.node_set: dict[Hashable, Node] = {}
        self.nodes: list[Node] = []
        self.edges: list[Edge] = []
        self.adjacency: dict[Hashable, dict[Hashable, list[Edge]]] = {}
        self._next_node_id = 0
        self._next_edge_id = 0

    def add_node(self, node: Node) -> Node:
        """Add a node; a node with an existing id replaces the lookup entry only."""
        if node.id not in self.node_set:
            self.nodes.append(node)
        self.node_set[node.id] = node
        return node

    def add_edge(self, edge: Edge) -> Edge:
        """Add an edge and index it by (source, target); repeated ids are ignored."""
        if not any(e.id == edge.id for e in self.edges):
            self.edges.append(edge)

        bucket = self.adjacency.setdefault(edge.source.id, {}).setdefault(edge.target.id, [])
        if not any(e.id == edge.id for e in bucket):
            bucket.append(edge)

        return edge

    def new_node(self, data: Optional[dict[str, Any]] = None) -> Node:
        """Create and add a node with the next integer id."""
        node = Node(self._next_node_id, data)
        self._next_node_id += 1
        return self.add_node(node)

    def new_edge(
        self,
        source: Node,
        target: Node,
        data: Optional[dict[str, Any]] = None
    ) -> Edge:
        """Create and add an edge with the next integer id."""
        edge = Edge(self._next_edge_id, source, target, data)
        self._next_edge_id += 1
        return self.add_edge(edge)

    def get_edges(self, node1: Node, node2: Node) -> list[Edge]:
        """
        Find the edges directed from node1 to node2.

        Returns:
            List of edges, empty if none
        """
        return self.adjacency.get(node1.id, {}).get(node2.id, [])
