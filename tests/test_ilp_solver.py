"""Tests for the exact ILP coloring used as a reference."""

import pytest

from colorsim import ColoringEngine, GraphInstance, ILPSolver, SolverStatus

from conftest import PETERSEN_EDGES, complete_edges


@pytest.fixture
def solver():
    return ILPSolver(time_limit_seconds=30.0)


@pytest.mark.parametrize(
    "num_vertices, edges, chromatic",
    [
        (3, [(0, 1), (1, 2)], 2),
        (4, complete_edges(4), 4),
        (5, [(0, 1), (1, 2), (2, 3), (3, 4), (4, 0)], 3),
        (10, PETERSEN_EDGES, 3),
        (3, [], 1),
    ],
)
def test_finds_chromatic_number(solver, num_vertices, edges, chromatic):
    instance = GraphInstance.from_edges("g", num_vertices, edges)
    result = solver.solve(instance)
    assert result.status is SolverStatus.OPTIMAL
    assert result.num_colors == chromatic
    assert solver.verify_solution(instance, result)


def test_empty_instance_needs_no_colors(solver):
    result = solver.solve(GraphInstance.from_edges("empty", 0, []))
    assert result.status is SolverStatus.OPTIMAL
    assert result.num_colors == 0


def test_greedy_never_beats_optimum(solver):
    instance = GraphInstance.from_edges("petersen", 10, PETERSEN_EDGES)
    greedy = ColoringEngine(instance.to_graph()).run()
    exact = solver.solve(instance)
    assert greedy.num_colors >= exact.num_colors


def test_verify_solution_rejects_bad_assignment(solver):
    instance = GraphInstance.from_edges("path", 3, [(0, 1), (1, 2)])
    result = solver.solve(instance)
    result.vertex_colors = {0: 0, 1: 0, 2: 1}
    assert not solver.verify_solution(instance, result)
    result.vertex_colors = None
    assert not solver.verify_solution(instance, result)


def test_result_csv_row(solver):
    result = solver.solve(GraphInstance.from_edges("path", 3, [(0, 1), (1, 2)]))
    row = result.to_csv_row().split(",")
    assert row[:5] == ["path", "3", "2", "optimal", "2"]
    assert len(row) == len(result.csv_header().split(","))
