"""
Step-wise greedy graph coloring

This package simulates a two-phase greedy coloring one step at a time so a
driver can display the state between steps.
"""

from .display import COLOR_HIGHLIGHT, COLOR_WARNING, PALETTE, DisplayOverlay
from .engine import ColoringEngine, ColoringResult, Phase, max_cost_first
from .errors import EmptyCollectionError, EngineStateError
from .graph import CONFLICT_COLOR, DEFAULT_CAPACITY, BoundedGraph, Edge, Vertex
from .ilp_solver import ILPSolver, SolverResult, SolverStatus
from .instance import GraphInstance
from .priority_queue import NOT_FOUND, IndexedPriorityQueue
from .verify import count_colors, count_conflicts, find_conflicts, verify_coloring

__all__ = [
    # Graph
    "BoundedGraph",
    "Vertex",
    "Edge",
    "CONFLICT_COLOR",
    "DEFAULT_CAPACITY",
    # Priority queue
    "IndexedPriorityQueue",
    "NOT_FOUND",
    # Engine
    "ColoringEngine",
    "ColoringResult",
    "Phase",
    "max_cost_first",
    # Display
    "DisplayOverlay",
    "PALETTE",
    "COLOR_HIGHLIGHT",
    "COLOR_WARNING",
    # Errors
    "EmptyCollectionError",
    "EngineStateError",
    # Instances and exact solver
    "GraphInstance",
    "ILPSolver",
    "SolverResult",
    "SolverStatus",
    # Verification utilities
    "count_colors",
    "count_conflicts",
    "find_conflicts",
    "verify_coloring",
]
