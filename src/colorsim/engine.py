"""
Step-wise greedy graph coloring.

The engine runs in two phases, one vertex per `step()` call:

## Ordering
1. Every vertex starts with cost = degree and is queued by descending cost
2. Each step removes the max-cost vertex, pushes it on a stack and marks it
   inactive
3. Every still-active neighbor gets cost = its number of still-active
   neighbors and is re-sorted in the queue

## Coloring
1. Each step pops the stack (reverse of removal order)
2. The vertex gets the lowest palette index not held by any neighbor, or
   CONFLICT_COLOR if the palette is used up

Ties in the ordering phase go to the lowest vertex id, so the removal order
is a pure function of the graph. Stepping one call at a time or calling
`run()` gives the same result.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence

from .display import (
    COLOR_HIGHLIGHT,
    COLOR_INACTIVE_EDGE,
    COLOR_INACTIVE_NODE,
    COLOR_NONE_EDGE,
    COLOR_WARNING,
    PALETTE,
    RESERVED_COLORS,
    DisplayOverlay,
)
from .errors import EmptyCollectionError, EngineStateError
from .graph import CONFLICT_COLOR, BoundedGraph, Edge, Vertex
from .priority_queue import IndexedPriorityQueue
from .verify import count_colors, count_conflicts

LOG = logging.getLogger(__name__)


class Phase(Enum):
    """Where the engine is in a run."""

    NOT_STARTED = "not_started"
    ORDERING = "ordering"
    COLORING = "coloring"
    DONE = "done"


def max_cost_first(vertex: Vertex) -> tuple[int, int]:
    """Queue key: highest cost first, then lowest id.

    The queue is a min-heap, so negating the cost turns it into a
    max-priority queue.
    """
    return (-vertex.cost, vertex.id)


@dataclass
class ColoringResult:
    """Outcome of one complete run of the engine."""

    instance_name: str
    num_vertices: int
    num_edges: int
    palette_size: int
    num_colors: int  # distinct palette colors used
    num_conflicts: int  # vertices left with CONFLICT_COLOR
    steps: int
    runtime_seconds: float
    removal_order: list[int] = field(default_factory=list)
    vertex_colors: dict[int, int] = field(default_factory=dict)
    chromatic_number: Optional[int] = None  # filled in by the exact solver, if run
    exact_status: Optional[str] = None

    def to_csv_row(self) -> str:
        """Format as CSV row."""
        return ",".join(
            [
                self.instance_name,
                str(self.num_vertices),
                str(self.num_edges),
                str(self.palette_size),
                str(self.num_colors),
                str(self.num_conflicts),
                str(self.steps),
                f"{self.runtime_seconds:.3f}",
                str(self.chromatic_number) if self.chromatic_number is not None else "",
                self.exact_status or "",
            ]
        )

    @staticmethod
    def csv_header() -> str:
        """Return CSV header."""
        return "instance,vertices,edges,palette,colors,conflicts,steps,runtime_s,chromatic,exact_status"


class ColoringEngine:
    """
    Drives the two-phase coloring over a populated graph.

    The engine never adds or removes vertices or edges. It only writes the
    cost, active flag and color of each vertex, plus the display overlay.
    """

    def __init__(self, graph: BoundedGraph, palette: Sequence[str] = PALETTE, name: str = "graph"):
        """
        Initialize the engine.

        Args:
            graph: Fully populated graph to color
            palette: Ordered display colors; index i is color i
            name: Label used in results and log messages

        Raises:
            ValueError: If the palette is empty, repeats a color, or uses a
                reserved display color
        """
        if not palette:
            raise ValueError("palette must contain at least one color")
        if len(set(palette)) != len(palette):
            raise ValueError(f"palette colors must be distinct: {list(palette)}")
        reserved = sorted(RESERVED_COLORS.intersection(palette))
        if reserved:
            raise ValueError(f"palette may not use reserved display colors: {reserved}")

        self.graph = graph
        self.palette = tuple(palette)
        self.name = name
        self.display = DisplayOverlay()
        self.steps_taken = 0

        self._phase = Phase.NOT_STARTED
        self._queue: Optional[IndexedPriorityQueue[Vertex]] = None
        self._stack: list[Vertex] = []
        self._removal_order: list[int] = []

    # ------------------------------------------------------------------
    # Run control
    # ------------------------------------------------------------------

    def reset(self, graph: BoundedGraph) -> None:
        """Attach a new graph and go back to NOT_STARTED."""
        self.graph = graph
        self._phase = Phase.NOT_STARTED
        self._queue = None
        self._stack = []
        self._removal_order = []
        self.steps_taken = 0
        self.display.clear()

    def is_started(self) -> bool:
        return self._phase is not Phase.NOT_STARTED

    def current_phase(self) -> Phase:
        return self._phase

    def has_more_steps(self) -> bool:
        """True while a started run is ordering or coloring.

        False before `start()` as well as after DONE; drivers call `start()`
        first and then step until this turns False.
        """
        return self._phase in (Phase.ORDERING, Phase.COLORING)

    def start(self) -> None:
        """Queue every vertex by degree and enter the ordering phase."""
        self.display.clear()
        self._queue = IndexedPriorityQueue(key=max_cost_first)
        self._stack = []
        self._removal_order = []
        self.steps_taken = 0

        for vertex in self.graph.get_vertices():
            vertex.cost = self.graph.degree(vertex)
            vertex.active = True
            vertex.color = None
            self._queue.add(vertex)

        LOG.info(
            "%s: starting run on %d vertices, %d edges, palette of %d",
            self.name,
            self.graph.vertex_count(),
            self.graph.edge_count(),
            len(self.palette),
        )

        if not self._queue:
            self._finish()
            return

        self._phase = Phase.ORDERING
        self._highlight_next_max()

    def step(self) -> Vertex:
        """
        Process one vertex.

        Returns:
            The vertex removed (ordering phase) or colored (coloring phase)

        Raises:
            EngineStateError: If the run has not started or is already done
        """
        if not self.has_more_steps():
            raise EngineStateError(f"cannot step in phase {self._phase.value}")

        self.steps_taken += 1
        if self._phase is Phase.ORDERING:
            return self._ordering_step()
        return self._coloring_step()

    def run(self) -> ColoringResult:
        """Start if needed, step until done, and summarize."""
        start_time = time.time()
        if not self.is_started():
            self.start()
        while self.has_more_steps():
            self.step()
        return self.result(runtime_seconds=time.time() - start_time)

    def result(self, runtime_seconds: float = 0.0) -> ColoringResult:
        coloring = self.coloring()
        return ColoringResult(
            instance_name=self.name,
            num_vertices=self.graph.vertex_count(),
            num_edges=self.graph.edge_count(),
            palette_size=len(self.palette),
            num_colors=count_colors(coloring),
            num_conflicts=count_conflicts(coloring),
            steps=self.steps_taken,
            runtime_seconds=runtime_seconds,
            removal_order=self.removal_order(),
            vertex_colors={vid: c for vid, c in coloring.items() if c is not None},
        )

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------

    def _ordering_step(self) -> Vertex:
        vertex = self._queue.remove_min()
        self._stack.append(vertex)
        self._removal_order.append(vertex.id)

        vertex.active = False
        self.display.set_vertex(vertex, COLOR_INACTIVE_NODE)
        for edge in self.graph.get_incident_edges(vertex):
            self.display.set_edge(edge, COLOR_INACTIVE_EDGE)

        self._update_neighbor_costs(vertex)
        LOG.debug("%s: removed vertex %d (%d left in queue)", self.name, vertex.id, len(self._queue))

        if len(self._stack) == self.graph.vertex_count():
            self._phase = Phase.COLORING
            self._queue = None
            LOG.info("%s: ordering done, removal order %s", self.name, self._removal_order)
        else:
            self._highlight_next_max()
        return vertex

    def _update_neighbor_costs(self, removed: Vertex) -> None:
        """Set each active neighbor's cost to its count of active neighbors."""
        for neighbor in self.graph.get_neighbors(removed):
            if not neighbor.active:
                continue
            neighbor.cost = sum(1 for n in self.graph.get_neighbors(neighbor) if n.active)
            self._queue.update(neighbor)

    def _highlight_next_max(self) -> None:
        self.display.set_vertex(self._queue.peek_min(), COLOR_HIGHLIGHT)

    def _pop_stack(self) -> Vertex:
        if not self._stack:
            raise EmptyCollectionError("pop from an empty vertex stack")
        return self._stack.pop()

    def _coloring_step(self) -> Vertex:
        vertex = self._pop_stack()
        color = self.choose_color(vertex)
        vertex.color = color

        shown = COLOR_WARNING if color == CONFLICT_COLOR else self.palette[color]
        self.display.set_vertex(vertex, shown)
        for edge in self.graph.get_incident_edges(vertex):
            if self.display.edge(edge) in (COLOR_NONE_EDGE, COLOR_INACTIVE_EDGE):
                self.display.set_edge(edge, shown)

        if color == CONFLICT_COLOR:
            LOG.warning("%s: palette exhausted at vertex %d", self.name, vertex.id)
        else:
            LOG.debug("%s: vertex %d gets color %d (%s)", self.name, vertex.id, color, shown)

        if not self._stack:
            self._finish()
        return vertex

    def choose_color(self, vertex: Vertex) -> int:
        """
        Pick the lowest palette index not held by a neighbor.

        Returns:
            A palette index, or CONFLICT_COLOR when every index is taken
        """
        taken = {n.color for n in self.graph.get_neighbors(vertex) or []}
        for index in range(len(self.palette)):
            if index not in taken:
                return index
        return CONFLICT_COLOR

    def _finish(self) -> None:
        self._phase = Phase.DONE
        self._queue = None
        for edge in self.graph.get_edges():
            if self.display.edge(edge) == COLOR_INACTIVE_EDGE:
                self.display.set_edge(edge, COLOR_NONE_EDGE)
        LOG.info("%s: coloring done after %d steps", self.name, self.steps_taken)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------

    def _record(self, vertex: Vertex) -> Vertex:
        record = self.graph.get_vertex(vertex.id)
        if record is None:
            raise KeyError(f"vertex {vertex.id} is not in the graph")
        return record

    def cost(self, vertex: Vertex) -> int:
        return self._record(vertex).cost

    def is_active(self, vertex: Vertex) -> bool:
        return self._record(vertex).active

    def assigned_color(self, vertex: Vertex) -> Optional[int]:
        return self._record(vertex).color

    def vertex_display(self, vertex: Vertex) -> str:
        return self.display.vertex(vertex)

    def edge_display(self, edge: Edge) -> str:
        return self.display.edge(edge)

    def removal_order(self) -> list[int]:
        """Vertex ids in the order the ordering phase removed them."""
        return list(self._removal_order)

    def coloring(self) -> dict[int, Optional[int]]:
        return {v.id: v.color for v in self.graph.get_vertices()}
