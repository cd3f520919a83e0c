"""
Bounded undirected graph with dense integer vertex ids.

Each vertex id maps to an adjacency entry: a list of (neighbor, edge)
destinations. An undirected edge is stored twice, once in the entry of each
endpoint. Mutating operations never raise on structural problems; they
return False and leave the graph unchanged.

Example:
    >>> g = BoundedGraph()
    >>> a, b = Vertex(0), Vertex(1)
    >>> g.add_vertex(a), g.add_vertex(b)
    (True, True)
    >>> g.add_edge(Edge(0), a, b)
    True
    >>> g.degree(a)
    1
"""

from dataclasses import dataclass
from typing import Iterator, NamedTuple, Optional

# Assigned to a vertex when every palette color is taken by a neighbor.
CONFLICT_COLOR = -1

# Maximum number of vertex ids a graph accepts unless told otherwise.
DEFAULT_CAPACITY = 200


@dataclass(eq=False)
class Vertex:
    """A graph vertex: the algorithmic record the coloring engine mutates.

    Equality and hashing use only the id, so two records with the same id
    are interchangeable as keys (the priority queue relies on this).
    """

    id: int
    cost: int = 0
    active: bool = False
    color: Optional[int] = None  # palette index, CONFLICT_COLOR, or unset

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Vertex):
            return self.id == other.id
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("vertex", self.id))


@dataclass(frozen=True)
class Edge:
    """An undirected edge, identified by its id."""

    id: int


class _Destination(NamedTuple):
    node: Vertex
    edge: Edge


class BoundedGraph:
    """Undirected graph stored as an id-indexed adjacency mapping.

    Self-loops and parallel edges are not supported and are refused by
    `add_edge`.
    """

    def __init__(self, capacity: Optional[int] = DEFAULT_CAPACITY):
        """
        Initialize an empty graph.

        Args:
            capacity: Vertex ids must be below this value. None removes the bound.
        """
        if capacity is not None and capacity < 0:
            raise ValueError(f"capacity must be non-negative, got {capacity}")
        self.capacity = capacity
        self._vertices: dict[int, Vertex] = {}
        self._adjacency: dict[int, list[_Destination]] = {}

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_vertex(self, vertex: Vertex) -> bool:
        """
        Add a vertex with an empty adjacency entry.

        Returns:
            False if the id is already present or outside the capacity
        """
        if vertex.id < 0 or (self.capacity is not None and vertex.id >= self.capacity):
            return False
        if vertex.id in self._adjacency:
            return False

        self._adjacency[vertex.id] = []
        self._vertices[vertex.id] = vertex
        return True

    def add_edge(self, edge: Edge, v1: Vertex, v2: Vertex) -> bool:
        """
        Connect v1 and v2 with edge.

        Fails if either endpoint is missing, if the edge is already incident
        to either endpoint, or if it would create a self-loop or a parallel
        edge.

        Returns:
            True if the edge was added
        """
        if v1.id not in self._adjacency or v2.id not in self._adjacency:
            return False
        if v1.id == v2.id:
            return False

        for dest in self._adjacency[v1.id]:
            if dest.edge == edge or dest.node.id == v2.id:
                return False
        for dest in self._adjacency[v2.id]:
            if dest.edge == edge:
                return False

        self._adjacency[v1.id].append(_Destination(self._vertices[v2.id], edge))
        self._adjacency[v2.id].append(_Destination(self._vertices[v1.id], edge))
        return True

    def remove_vertex(self, vertex: Vertex) -> bool:
        """
        Remove a vertex together with every edge incident to it.

        Returns:
            False if the vertex is not in the graph
        """
        entry = self._adjacency.get(vertex.id)
        if entry is None:
            return False

        for dest in entry:
            neighbor_entry = self._adjacency[dest.node.id]
            neighbor_entry[:] = [d for d in neighbor_entry if not (d.edge == dest.edge and d.node.id == vertex.id)]

        del self._adjacency[vertex.id]
        del self._vertices[vertex.id]
        return True

    def remove_edge(self, edge: Edge) -> bool:
        """
        Remove an edge from both endpoint entries.

        The edge must be referenced by exactly two adjacency entries. Any other
        count means the graph is inconsistent and nothing is removed.

        Returns:
            True if both entries were found and removed
        """
        found = [
            (vertex_id, dest)
            for vertex_id, entry in self._adjacency.items()
            for dest in entry
            if dest.edge == edge
        ]
        if len(found) != 2:
            return False

        for vertex_id, dest in found:
            self._adjacency[vertex_id].remove(dest)
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_vertex(self, vertex_id: int) -> Optional[Vertex]:
        return self._vertices.get(vertex_id)

    def get_vertices(self) -> list[Vertex]:
        """All vertices, in insertion order."""
        return list(self._vertices.values())

    def get_edges(self) -> list[Edge]:
        """All edges, each listed once, in order of first appearance."""
        seen: dict[Edge, None] = {}
        for entry in self._adjacency.values():
            for dest in entry:
                seen.setdefault(dest.edge, None)
        return list(seen)

    def edge_endpoints(self) -> list[tuple[Vertex, Vertex, Edge]]:
        """
        Every edge with its endpoints, in one pass over the adjacency.

        Returns:
            (u, v, edge) triples with u.id < v.id, each edge listed once
        """
        return [
            (self._vertices[vertex_id], dest.node, dest.edge)
            for vertex_id, entry in self._adjacency.items()
            for dest in entry
            if vertex_id < dest.node.id
        ]

    def vertex_count(self) -> int:
        return len(self._vertices)

    def edge_count(self) -> int:
        return sum(len(entry) for entry in self._adjacency.values()) // 2

    def contains_vertex(self, vertex: Vertex) -> bool:
        return vertex.id in self._adjacency

    def contains_edge(self, edge: Edge) -> bool:
        return self.get_endpoints(edge) is not None

    def get_neighbors(self, vertex: Vertex) -> Optional[list[Vertex]]:
        """Snapshot of the vertex's neighbors, or None if the vertex is absent."""
        entry = self._adjacency.get(vertex.id)
        if entry is None:
            return None
        return [dest.node for dest in entry]

    def get_incident_edges(self, vertex: Vertex) -> Optional[list[Edge]]:
        """Snapshot of the edges touching the vertex, or None if the vertex is absent."""
        entry = self._adjacency.get(vertex.id)
        if entry is None:
            return None
        return [dest.edge for dest in entry]

    def neighbor_count(self, vertex: Vertex) -> int:
        entry = self._adjacency.get(vertex.id)
        return len(entry) if entry is not None else 0

    def degree(self, vertex: Vertex) -> int:
        # No self-loops or parallel edges, so neighbors == incident edges.
        return self.neighbor_count(vertex)

    def get_endpoints(self, edge: Edge) -> Optional[tuple[Vertex, Vertex]]:
        """
        Find both endpoints of an edge.

        Returns:
            (v1, v2) in adjacency order, or None if the edge is not in the graph
        """
        for vertex_id, entry in self._adjacency.items():
            for dest in entry:
                if dest.edge == edge:
                    return self._vertices[vertex_id], dest.node
        return None

    def get_opposite(self, vertex: Vertex, edge: Edge) -> Optional[Vertex]:
        """The endpoint of edge that is not vertex."""
        entry = self._adjacency.get(vertex.id)
        if entry is None:
            return None
        for dest in entry:
            if dest.edge == edge:
                return dest.node
        return None

    def find_edge(self, v1: Vertex, v2: Vertex) -> Optional[Edge]:
        """The edge connecting v1 and v2, or None."""
        entry = self._adjacency.get(v1.id)
        if not entry or not self._adjacency.get(v2.id):
            return None
        for dest in entry:
            if dest.node.id == v2.id:
                return dest.edge
        return None

    def find_edge_set(self, v1: Vertex, v2: Vertex) -> Optional[list[Edge]]:
        edge = self.find_edge(v1, v2)
        if edge is None:
            return None
        return [edge]

    def is_neighbor(self, v1: Vertex, v2: Vertex) -> bool:
        return self.find_edge(v1, v2) is not None

    def is_incident(self, vertex: Vertex, edge: Edge) -> bool:
        edges = self.get_incident_edges(vertex)
        return edges is not None and edge in edges

    def incident_count(self, edge: Edge) -> int:
        return 2

    def __len__(self) -> int:
        return len(self._vertices)

    def __contains__(self, vertex: object) -> bool:
        return isinstance(vertex, Vertex) and self.contains_vertex(vertex)

    def __iter__(self) -> Iterator[Vertex]:
        return iter(self.get_vertices())

    def __repr__(self) -> str:
        return f"BoundedGraph(vertices={self.vertex_count()}, edges={self.edge_count()}, capacity={self.capacity})"
