"""
Exact vertex coloring by integer linear programming.

Used as a reference point for the greedy engine: the optimum is the
chromatic number, so a greedy run can be judged by how many colors it uses
above it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ortools.linear_solver import pywraplp

from .instance import GraphInstance


class SolverStatus(Enum):
    """Status of the solver after optimization."""

    OPTIMAL = "optimal"
    FEASIBLE = "feasible"
    INFEASIBLE = "infeasible"
    TIMEOUT = "timeout"
    ERROR = "error"


@dataclass
class SolverResult:
    """Result of solving a coloring instance exactly."""

    instance_name: str
    num_vertices: int
    num_edges: int
    status: SolverStatus
    num_colors: Optional[int]  # chromatic number, or best found
    runtime_seconds: float
    vertex_colors: Optional[dict[int, int]]
    gap: Optional[float]  # MIP gap if not optimal

    def to_csv_row(self) -> str:
        """Format as CSV row."""
        return ",".join(
            [
                self.instance_name,
                str(self.num_vertices),
                str(self.num_edges),
                self.status.value,
                str(self.num_colors) if self.num_colors is not None else "",
                f"{self.runtime_seconds:.3f}",
                f"{self.gap:.4f}" if self.gap is not None else "",
            ]
        )

    @staticmethod
    def csv_header() -> str:
        """Return CSV header."""
        return "instance,vertices,edges,status,colors,runtime_s,gap"


class ILPSolver:
    """
    ILP-based solver for the minimum vertex coloring problem.

    Uses OR-Tools with SCIP backend by default.
    """

    def __init__(
        self,
        time_limit_seconds: float = 60.0,
        solver_name: str = "SCIP",
        verbose: bool = False,
    ):
        """
        Initialize the solver.

        Args:
            time_limit_seconds: Maximum solving time
            solver_name: Backend solver ("SCIP", "CBC")
            verbose: Whether to print solver output
        """
        self.time_limit_seconds = time_limit_seconds
        self.solver_name = solver_name
        self.verbose = verbose

    def solve(self, instance: GraphInstance, max_colors: Optional[int] = None) -> SolverResult:
        """
        Find a minimum coloring of an instance.

        Args:
            instance: The graph to color
            max_colors: Upper bound on colors (default: max degree + 1, which
                        always suffices)

        Returns:
            SolverResult with solution details
        """
        if instance.num_vertices == 0:
            return SolverResult(
                instance_name=instance.name,
                num_vertices=0,
                num_edges=0,
                status=SolverStatus.OPTIMAL,
                num_colors=0,
                runtime_seconds=0.0,
                vertex_colors={},
                gap=0.0,
            )

        solver = pywraplp.Solver.CreateSolver(self.solver_name)
        if solver is None:
            return self._error_result(instance)
        solver.SetTimeLimit(int(self.time_limit_seconds * 1000))

        if max_colors is None:
            max_colors = instance.max_degree() + 1
        max_colors = min(max_colors, instance.num_vertices)

        # Decision variables
        # x[v,c] = 1 if vertex v is assigned color c
        x = {}
        for v in range(instance.num_vertices):
            for c in range(max_colors):
                x[v, c] = solver.BoolVar(f"x_{v}_{c}")

        # w[c] = 1 if color c is used
        w = {}
        for c in range(max_colors):
            w[c] = solver.BoolVar(f"w_{c}")

        # Constraint 1: every vertex gets exactly one color
        for v in range(instance.num_vertices):
            solver.Add(sum(x[v, c] for c in range(max_colors)) == 1, f"assign_{v}")

        # Constraint 2: adjacent vertices cannot share a color
        for u, v in instance.edges:
            for c in range(max_colors):
                solver.Add(x[u, c] + x[v, c] <= 1, f"conflict_{u}_{v}_{c}")

        # Constraint 3: color usage tracking
        for v in range(instance.num_vertices):
            for c in range(max_colors):
                solver.Add(x[v, c] <= w[c], f"color_used_{v}_{c}")

        # Symmetry breaking: use colors in order
        # If color c+1 is used, then color c must be used
        for c in range(max_colors - 1):
            solver.Add(w[c] >= w[c + 1], f"symmetry_{c}")

        # Objective: minimize number of colors used
        solver.Minimize(sum(w[c] for c in range(max_colors)))

        if self.verbose:
            print(f"Solving {instance.name}...")
            print(f"  Variables: {solver.NumVariables()}")
            print(f"  Constraints: {solver.NumConstraints()}")

        status = solver.Solve()

        runtime = solver.WallTime() / 1000.0  # convert ms to seconds

        if status == pywraplp.Solver.OPTIMAL:
            result_status = SolverStatus.OPTIMAL
            gap = 0.0
        elif status == pywraplp.Solver.FEASIBLE:
            result_status = SolverStatus.FEASIBLE
            if solver.Objective().Value() > 0:
                gap = abs(solver.Objective().Value() - solver.Objective().BestBound()) / solver.Objective().Value()
            else:
                gap = None
        elif status == pywraplp.Solver.INFEASIBLE:
            result_status = SolverStatus.INFEASIBLE
            gap = None
        else:
            result_status = SolverStatus.TIMEOUT
            gap = None

        num_colors = None
        vertex_colors = None

        if result_status in (SolverStatus.OPTIMAL, SolverStatus.FEASIBLE):
            num_colors = int(round(solver.Objective().Value()))

            vertex_colors = {}
            for v in range(instance.num_vertices):
                for c in range(max_colors):
                    if x[v, c].solution_value() > 0.5:
                        vertex_colors[v] = c
                        break

            if self.verbose:
                print(f"  Solution found: {num_colors} colors")
                print(f"  Colors: {vertex_colors}")

        return SolverResult(
            instance_name=instance.name,
            num_vertices=instance.num_vertices,
            num_edges=instance.num_edges,
            status=result_status,
            num_colors=num_colors,
            runtime_seconds=runtime,
            vertex_colors=vertex_colors,
            gap=gap,
        )

    def _error_result(self, instance: GraphInstance) -> SolverResult:
        return SolverResult(
            instance_name=instance.name,
            num_vertices=instance.num_vertices,
            num_edges=instance.num_edges,
            status=SolverStatus.ERROR,
            num_colors=None,
            runtime_seconds=0.0,
            vertex_colors=None,
            gap=None,
        )

    def verify_solution(self, instance: GraphInstance, result: SolverResult) -> bool:
        """
        Verify that a solution is valid.

        Args:
            instance: The graph instance
            result: The solver result to verify

        Returns:
            True if every vertex is colored and no edge joins equal colors
        """
        if result.vertex_colors is None:
            return False

        if len(result.vertex_colors) != instance.num_vertices:
            return False

        for u, v in instance.edges:
            if result.vertex_colors.get(u) == result.vertex_colors.get(v):
                return False

        return True
