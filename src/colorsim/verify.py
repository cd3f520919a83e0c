"""
Checks for vertex colorings produced by the engine or the exact solver.

A coloring maps vertex id to a palette index. `CONFLICT_COLOR` marks a vertex
the greedy pass could not color from its palette; such vertices are counted
separately and never make an edge invalid.
"""

from typing import Optional

from .graph import CONFLICT_COLOR, BoundedGraph


def count_colors(coloring: dict[int, Optional[int]]) -> int:
    """
    Count the number of distinct real colors used in a coloring.

    Args:
        coloring: Dictionary mapping vertices to colors

    Returns:
        Number of distinct palette indices (unset and conflict entries ignored)
    """
    return len({c for c in coloring.values() if c is not None and c != CONFLICT_COLOR})


def count_conflicts(coloring: dict[int, Optional[int]]) -> int:
    """Number of vertices holding the conflict sentinel."""
    return sum(1 for c in coloring.values() if c == CONFLICT_COLOR)


def find_conflicts(graph: BoundedGraph, coloring: dict[int, Optional[int]]) -> list[tuple[int, int]]:
    """
    List edges whose endpoints hold the same real color.

    Returns:
        (u, v) id pairs with u < v, one per offending edge
    """
    bad = []
    for u, v, _ in graph.edge_endpoints():
        cu = coloring.get(u.id)
        cv = coloring.get(v.id)
        if cu is None or cv is None or CONFLICT_COLOR in (cu, cv):
            continue
        if cu == cv:
            bad.append((u.id, v.id))
    return bad


def verify_coloring(graph: BoundedGraph, coloring: dict[int, Optional[int]]) -> bool:
    """
    Verify that a coloring is valid.

    Every vertex must have an entry that is not None, and no edge may join two
    vertices with the same real color.

    Args:
        graph: The colored graph
        coloring: Color assignment to verify

    Returns:
        True if coloring is valid, False otherwise
    """
    for vertex in graph.get_vertices():
        if coloring.get(vertex.id) is None:
            return False  # vertex not colored

    return not find_conflicts(graph, coloring)
