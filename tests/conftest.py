from __future__ import annotations

import random
from pathlib import Path
from typing import Optional

import pytest

from colorsim import BoundedGraph, Edge, IndexedPriorityQueue, Vertex

INSTANCES_DIR = Path(__file__).resolve().parent.parent / "instances"


def build_graph(num_vertices: int, edges: list[tuple[int, int]], capacity: Optional[int] = None) -> BoundedGraph:
    """Graph on ids 0..n-1 with edge ids in list order."""
    graph = BoundedGraph(capacity=capacity)
    vertices = [Vertex(i) for i in range(num_vertices)]
    for v in vertices:
        assert graph.add_vertex(v)
    for edge_id, (u, v) in enumerate(edges):
        assert graph.add_edge(Edge(edge_id), vertices[u], vertices[v])
    return graph


def random_edges(num_vertices: int, density: float, seed: int) -> list[tuple[int, int]]:
    rng = random.Random(seed)
    return [
        (u, v)
        for u in range(num_vertices)
        for v in range(u + 1, num_vertices)
        if rng.random() < density
    ]


def complete_edges(num_vertices: int) -> list[tuple[int, int]]:
    return [(u, v) for u in range(num_vertices) for v in range(u + 1, num_vertices)]


PETERSEN_EDGES = [
    (0, 1), (1, 2), (2, 3), (3, 4), (4, 0),
    (0, 5), (1, 6), (2, 7), (3, 8), (4, 9),
    (5, 7), (7, 9), (9, 6), (6, 8), (8, 5),
]


@pytest.fixture
def path_graph() -> BoundedGraph:
    """A - B - C as ids 0 - 1 - 2, edges 0 and 1."""
    return build_graph(3, [(0, 1), (1, 2)])


@pytest.fixture
def petersen_graph() -> BoundedGraph:
    return build_graph(10, PETERSEN_EDGES)


@pytest.fixture
def write_instance(tmp_path: Path):
    """Write an instance file and return its path."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.write_text(text)
        return path

    return _write


def assert_heap_invariants(queue: IndexedPriorityQueue) -> None:
    """Heap order holds and the position index mirrors the heap array."""
    items = list(queue)
    for pos in range(2, len(items) + 1):
        child, parent = items[pos - 1], items[pos // 2 - 1]
        assert not queue._less(child, parent), f"heap order broken at {pos}"
    assert len(queue._index) == len(items), "index map size differs from heap size"
    for pos, item in enumerate(items, start=1):
        assert queue.get_index(item) == pos, f"index map wrong for slot {pos}"
