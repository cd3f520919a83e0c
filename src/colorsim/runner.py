"""
Simulation runner for graph instances.

Runs the coloring engine over one file or a directory of files, optionally
compares each result with the exact ILP optimum, and reports tables, CSV and
JSON parameter files.
"""

import csv
import json
import logging
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from .display import PALETTE
from .engine import ColoringEngine, ColoringResult
from .ilp_solver import ILPSolver, SolverStatus
from .instance import GraphInstance
from .verify import verify_coloring

LOG = logging.getLogger(__name__)


class SimulationRunner:
    """Runs the engine on graph instances and collects results."""

    def __init__(
        self,
        palette: Sequence[str] = PALETTE,
        exact_solver: Optional[ILPSolver] = None,
        output_dir: Path | None = None,
        trace: bool = False,
    ):
        """
        Initialize the runner.

        Args:
            palette: Colors handed to every engine
            exact_solver: If given, each instance is also solved exactly
            output_dir: Directory for output files (default: current directory)
            trace: Print the display state after every engine step
        """
        self.palette = tuple(palette)
        self.exact_solver = exact_solver
        self.output_dir = Path(output_dir) if output_dir else Path.cwd()
        self.trace = trace
        self.results: list[ColoringResult] = []

    def simulate(self, instance: GraphInstance) -> ColoringResult:
        """Color one instance, stepping the engine to completion."""
        graph = instance.to_graph()
        engine = ColoringEngine(graph, palette=self.palette, name=instance.name)

        start_time = time.time()
        engine.start()
        if self.trace:
            self._print_trace(engine, "start")
        while engine.has_more_steps():
            phase = engine.current_phase()
            vertex = engine.step()
            if self.trace:
                self._print_trace(engine, f"{phase.value} v{vertex.id}")
        result = engine.result(runtime_seconds=time.time() - start_time)

        if not verify_coloring(graph, engine.coloring()):
            LOG.error("%s: engine produced an invalid coloring", instance.name)

        if self.exact_solver is not None:
            exact = self.exact_solver.solve(instance)
            result.exact_status = exact.status.value
            if exact.status is SolverStatus.OPTIMAL:
                result.chromatic_number = exact.num_colors
        return result

    def _print_trace(self, engine: ColoringEngine, label: str) -> None:
        graph = engine.graph
        print(f"  [{engine.steps_taken:>3}] {label:<16} {engine.display.render(graph.get_vertices(), graph.get_edges())}")

    def run_instance(self, filepath: Path) -> ColoringResult:
        """Run the engine on a single instance file."""
        instance = GraphInstance.from_file(filepath)
        result = self.simulate(instance)
        self.results.append(result)
        return result

    def run_directory(
        self,
        directory: Path,
        pattern: str = "*.txt",
        max_instances: int | None = None,
    ) -> list[ColoringResult]:
        """
        Run the engine on all instances in a directory.

        Args:
            directory: Directory containing instance files
            pattern: Glob pattern for instance files
            max_instances: Maximum number of instances to run

        Returns:
            List of results
        """
        directory = Path(directory)
        files = sorted(directory.glob(pattern))

        if max_instances:
            files = files[:max_instances]

        results = []
        for i, filepath in enumerate(files):
            print(f"[{i + 1}/{len(files)}] Processing {filepath.name}...", end=" ")
            sys.stdout.flush()

            try:
                result = self.run_instance(filepath)
            except (OSError, ValueError) as e:
                print("ERROR")
                LOG.error("%s: %s", filepath.name, e)
                continue

            self._print_result_line(result)
            results.append(result)

        return results

    def _print_result_line(self, result: ColoringResult) -> None:
        line = f"{result.num_colors} colors, {result.num_conflicts} conflicts in {result.runtime_seconds:.3f}s"
        if result.chromatic_number is not None:
            line += f" (optimum {result.chromatic_number})"
        print(line)

    def save_results_csv(self, filename: str | None = None) -> Path:
        """
        Save all results to a CSV file.

        Args:
            filename: Output filename (default: results_TIMESTAMP.csv)

        Returns:
            Path to the saved file
        """
        if filename is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            filename = f"results_{timestamp}.csv"

        filepath = self.output_dir / filename
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(ColoringResult.csv_header().split(","))
            for result in self.results:
                writer.writerow(
                    [
                        result.instance_name,
                        result.num_vertices,
                        result.num_edges,
                        result.palette_size,
                        result.num_colors,
                        result.num_conflicts,
                        result.steps,
                        f"{result.runtime_seconds:.3f}",
                        result.chromatic_number if result.chromatic_number is not None else "",
                        result.exact_status or "",
                    ]
                )

        print(f"\nResults saved to: {filepath}")
        return filepath

    def save_params_json(self, csv_filepath: Path) -> Path:
        """
        Save run parameters to a JSON file alongside the CSV.

        Args:
            csv_filepath: Path to the CSV file (JSON will be saved with same name)

        Returns:
            Path to the saved JSON file
        """
        json_filepath = csv_filepath.with_suffix(".json")

        params = {
            "palette": list(self.palette),
            "palette_size": len(self.palette),
            "exact": self.exact_solver is not None,
        }
        if self.exact_solver is not None:
            params["exact_backend"] = self.exact_solver.solver_name
            params["exact_time_limit_seconds"] = self.exact_solver.time_limit_seconds

        params["timestamp"] = datetime.now().isoformat()
        params["num_instances"] = len(self.results)

        with open(json_filepath, "w") as f:
            json.dump(params, f, indent=2)

        print(f"Parameters saved to: {json_filepath}")
        return json_filepath

    def print_summary(self):
        """Print a summary of results."""
        if not self.results:
            print("No results to summarize.")
            return

        print(f"\n{'=' * 60}")
        print("SUMMARY")
        print(f"{'=' * 60}")

        total = len(self.results)
        with_conflicts = sum(1 for r in self.results if r.num_conflicts)
        avg_colors = sum(r.num_colors for r in self.results) / total
        avg_time = sum(r.runtime_seconds for r in self.results) / total

        print(f"Total instances: {total}")
        print(f"  Palette size:     {self.results[0].palette_size}")
        print(f"  Avg colors:       {avg_colors:.2f}")
        print(f"  With conflicts:   {with_conflicts} ({100 * with_conflicts / total:.1f}%)")
        print(f"  Avg time:         {avg_time:.4f}s")

        exact = [r for r in self.results if r.chromatic_number is not None]
        if exact:
            matched = sum(1 for r in exact if r.num_conflicts == 0 and r.num_colors == r.chromatic_number)
            excess = sum(r.num_colors - r.chromatic_number for r in exact if r.num_conflicts == 0)
            print(f"\nSolved exactly: {len(exact)}")
            print(f"  Greedy optimal:   {matched} ({100 * matched / len(exact):.1f}%)")
            print(f"  Excess colors:    {excess}")

    def print_table(self):
        """Print results as a formatted table."""
        if not self.results:
            print("No results to display.")
            return

        print(
            f"\n{'Instance':<25} {'V':>5} {'E':>6} {'K':>3} "
            f"{'Colors':>7} {'Confl':>6} {'Opt':>4} {'Steps':>6} {'Time':>9}"
        )
        print("-" * 80)

        for r in self.results:
            opt = str(r.chromatic_number) if r.chromatic_number is not None else "-"
            print(
                f"{r.instance_name:<25} {r.num_vertices:>5} {r.num_edges:>6} {r.palette_size:>3} "
                f"{r.num_colors:>7} {r.num_conflicts:>6} {opt:>4} {r.steps:>6} {r.runtime_seconds:>8.4f}s"
            )
