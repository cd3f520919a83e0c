import time

from colorsim import (
    CONFLICT_COLOR,
    DEFAULT_CAPACITY,
    PALETTE,
    ColoringEngine,
    count_colors,
    count_conflicts,
    find_conflicts,
    verify_coloring,
)

from conftest import build_graph, complete_edges


def test_count_colors_ignores_unset_and_conflict():
    assert count_colors({}) == 0
    assert count_colors({0: 0, 1: 1, 2: 0, 3: None, 4: CONFLICT_COLOR}) == 2
    assert count_conflicts({0: 0, 1: CONFLICT_COLOR, 2: CONFLICT_COLOR}) == 2


def test_find_conflicts_reports_equal_neighbors(path_graph):
    assert find_conflicts(path_graph, {0: 0, 1: 1, 2: 0}) == []
    assert find_conflicts(path_graph, {0: 1, 1: 1, 2: 0}) == [(0, 1)]


def test_conflict_sentinel_never_invalidates_an_edge():
    graph = build_graph(2, [(0, 1)])
    assert verify_coloring(graph, {0: CONFLICT_COLOR, 1: CONFLICT_COLOR})


def test_uncolored_vertex_fails_verification(path_graph):
    assert not verify_coloring(path_graph, {0: 0, 1: 1})
    assert not verify_coloring(path_graph, {0: 0, 1: 1, 2: None})
    assert verify_coloring(path_graph, {0: 0, 1: 1, 2: 0})


def test_verify_scales_to_full_capacity_complete_graph():
    graph = build_graph(DEFAULT_CAPACITY, complete_edges(DEFAULT_CAPACITY), capacity=DEFAULT_CAPACITY)
    engine = ColoringEngine(graph)
    result = engine.run()
    coloring = engine.coloring()

    started = time.perf_counter()
    assert verify_coloring(graph, coloring)
    assert find_conflicts(graph, coloring) == []
    assert time.perf_counter() - started < 5.0

    assert result.num_colors == len(PALETTE)
    assert result.num_conflicts == DEFAULT_CAPACITY - len(PALETTE)


def test_find_conflicts_checks_each_edge_once():
    graph = build_graph(4, complete_edges(4))
    assert find_conflicts(graph, {0: 0, 1: 0, 2: 0, 3: 1}) == [(0, 1), (0, 2), (1, 2)]
