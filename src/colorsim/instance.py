"""
Graph instance data structure and parser.

Instance file format:
- Line 1: n (number of vertices, numbered 0 to n-1)
- Line 2: m (number of edges)
- Next m lines: edges as "u v" pairs
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .graph import BoundedGraph, Edge, Vertex


@dataclass
class GraphInstance:
    """An undirected graph to be colored, as read from disk."""

    name: str
    num_vertices: int
    num_edges: int
    edges: list[tuple[int, int]]

    # Derived data, computed after loading
    adjacency: dict[int, set[int]] = field(default_factory=dict, repr=False)

    def __post_init__(self):
        """Compute derived data structures."""
        self.adjacency = {v: set() for v in range(self.num_vertices)}
        for u, v in self.edges:
            self.adjacency[u].add(v)
            self.adjacency[v].add(u)

    @classmethod
    def from_edges(cls, name: str, num_vertices: int, edges: list[tuple[int, int]]) -> "GraphInstance":
        """
        Build an instance from an edge list.

        Raises:
            ValueError: If an edge is invalid (see `from_file`)
        """
        edges = [(int(u), int(v)) for u, v in edges]
        cls._validate(num_vertices, len(edges), edges, name)
        return cls(name=name, num_vertices=num_vertices, num_edges=len(edges), edges=edges)

    @classmethod
    def from_file(cls, filepath: str | Path) -> "GraphInstance":
        """
        Parse a graph instance from a file.

        Args:
            filepath: Path to the instance file

        Returns:
            GraphInstance object

        Raises:
            ValueError: If the file format is invalid
        """
        filepath = Path(filepath)

        with open(filepath, "r") as f:
            lines = [line.strip() for line in f.readlines()]

        # Remove empty lines at the end
        while lines and not lines[-1]:
            lines.pop()

        if len(lines) < 2:
            raise ValueError(f"Invalid instance file: {filepath} - too few lines")

        try:
            n = int(lines[0])  # vertices
            m = int(lines[1])  # edges
        except ValueError as e:
            raise ValueError(f"Invalid header in {filepath}: {e}")

        if n < 0 or m < 0:
            raise ValueError(f"Invalid header in {filepath}: counts must be non-negative")

        edges = []
        edge_start = 2
        for i in range(edge_start, edge_start + m):
            if i >= len(lines):
                raise ValueError(f"Missing edge on line {i + 1} in {filepath}")
            parts = lines[i].split()
            if len(parts) < 2:
                raise ValueError(f"Invalid edge format on line {i + 1} in {filepath}")
            try:
                u, v = int(parts[0]), int(parts[1])
            except ValueError:
                raise ValueError(f"Invalid edge format on line {i + 1} in {filepath}")
            edges.append((u, v))

        cls._validate(n, m, edges, filepath)

        return cls(name=filepath.stem, num_vertices=n, num_edges=m, edges=edges)

    @staticmethod
    def _validate(n: int, m: int, edges: list, source):
        """Validate instance consistency."""
        if len(edges) != m:
            raise ValueError(f"Edge count mismatch in {source}: expected {m}, got {len(edges)}")

        seen = set()
        for u, v in edges:
            if not (0 <= u < n and 0 <= v < n):
                raise ValueError(f"Invalid vertex in edge ({u}, {v}) in {source}")
            if u == v:
                raise ValueError(f"Self-loop on vertex {u} in {source}")
            pair = (min(u, v), max(u, v))
            if pair in seen:
                raise ValueError(f"Duplicate edge ({u}, {v}) in {source}")
            seen.add(pair)

    def to_graph(self, capacity: Optional[int] = None) -> BoundedGraph:
        """
        Build a populated BoundedGraph.

        Edge ids follow the order of the edge list.

        Args:
            capacity: Vertex id bound for the graph (default: exactly n)

        Raises:
            ValueError: If the graph refuses a vertex or edge
        """
        graph = BoundedGraph(capacity=self.num_vertices if capacity is None else capacity)
        vertices = [Vertex(i) for i in range(self.num_vertices)]
        for vertex in vertices:
            if not graph.add_vertex(vertex):
                raise ValueError(f"Graph rejected vertex {vertex.id} of {self.name} (capacity {graph.capacity})")
        for edge_id, (u, v) in enumerate(self.edges):
            if not graph.add_edge(Edge(edge_id), vertices[u], vertices[v]):
                raise ValueError(f"Graph rejected edge ({u}, {v}) of {self.name}")
        return graph

    def max_degree(self) -> int:
        return max((len(nbrs) for nbrs in self.adjacency.values()), default=0)

    def __str__(self) -> str:
        return f"GraphInstance({self.name}: n={self.num_vertices}, m={self.num_edges})"
