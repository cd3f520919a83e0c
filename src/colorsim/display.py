"""
Display attributes for the coloring simulation.

Display colors are opaque strings as far as the algorithm is concerned. They
live in a `DisplayOverlay` keyed by vertex and edge id, separate from the
`Vertex`/`Edge` records, so a renderer can read them after every step without
the engine depending on any drawing library.
"""

from typing import Optional

from .graph import Edge, Vertex

COLOR_NONE_NODE = "white"
COLOR_NONE_EDGE = "black"
COLOR_INACTIVE_NODE = "lightgray"
COLOR_INACTIVE_EDGE = "lightgray"
COLOR_HIGHLIGHT = "#ffcc33"
COLOR_WARNING = "#ff3333"

# Display states a palette color may not reuse.
RESERVED_COLORS = frozenset(
    {
        COLOR_NONE_NODE,
        COLOR_NONE_EDGE,
        COLOR_INACTIVE_NODE,
        COLOR_INACTIVE_EDGE,
        COLOR_HIGHLIGHT,
        COLOR_WARNING,
    }
)

# Colors handed out to vertices, in order of preference.
PALETTE: tuple[str, ...] = (
    "pink",
    "green",
    "cyan",
    "orange",
    "magenta",
    "yellow",
    "darkgray",
    "blue",
)


class DisplayOverlay:
    """Id-keyed display colors for the vertices and edges of one run."""

    def __init__(self):
        self._vertices: dict[int, str] = {}
        self._edges: dict[int, str] = {}

    def vertex(self, vertex: Vertex) -> str:
        return self._vertices.get(vertex.id, COLOR_NONE_NODE)

    def edge(self, edge: Edge) -> str:
        return self._edges.get(edge.id, COLOR_NONE_EDGE)

    def set_vertex(self, vertex: Vertex, color: str) -> None:
        self._vertices[vertex.id] = color

    def set_edge(self, edge: Edge, color: str) -> None:
        self._edges[edge.id] = color

    def clear(self) -> None:
        self._vertices.clear()
        self._edges.clear()

    def snapshot(self) -> dict[str, dict[int, str]]:
        """Copy of every explicitly set color, for tracing."""
        return {"vertices": dict(self._vertices), "edges": dict(self._edges)}

    def render(self, vertices: list[Vertex], edges: Optional[list[Edge]] = None) -> str:
        """One-line text rendering: `v0=pink v1=white | e0=black`."""
        parts = [f"v{v.id}={self.vertex(v)}" for v in vertices]
        text = " ".join(parts)
        if edges:
            text += " | " + " ".join(f"e{e.id}={self.edge(e)}" for e in edges)
        return text
