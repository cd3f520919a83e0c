#!/usr/bin/env python3
"""
Main script to run the step-wise coloring simulation.

Usage:
    # Color a single instance
    python run_simulation.py --instance instances/path3.txt

    # Watch every step of the run
    python run_simulation.py --instance instances/k4.txt --palette-size 3 --trace

    # Run on every instance in a directory
    python run_simulation.py --directory instances

    # Compare each greedy result with the exact chromatic number (ILP)
    python run_simulation.py --directory instances --exact --time-limit 30
"""

import argparse
import logging
from pathlib import Path

from colorsim import PALETTE, GraphInstance, ILPSolver
from colorsim.runner import SimulationRunner


def main():
    parser = argparse.ArgumentParser(description="Run the step-wise greedy coloring simulation")

    # Instance selection
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--instance", type=Path, help="Path to a single instance file")
    group.add_argument("--directory", type=Path, help="Directory of instance files")

    # Engine parameters
    parser.add_argument(
        "--palette-size",
        type=int,
        default=len(PALETTE),
        help=f"Number of palette colors to use, 1-{len(PALETTE)} (default: {len(PALETTE)})",
    )
    parser.add_argument("--trace", action="store_true", help="Print the display state after every step")

    # Exact solver parameters
    parser.add_argument("--exact", action="store_true", help="Also compute the chromatic number with the ILP")
    parser.add_argument(
        "--ilp-backend",
        type=str,
        default="SCIP",
        choices=["SCIP", "CBC"],
        help="ILP solver backend (default: SCIP)",
    )
    parser.add_argument(
        "--time-limit",
        type=float,
        default=60.0,
        help="Time limit per instance in seconds for the ILP (default: 60)",
    )

    # Common parameters
    parser.add_argument("-v", "--verbose", action="store_true", help="Log phase transitions")
    parser.add_argument("-d", "--debug", action="store_true", help="Log every engine step")

    # Experiment parameters
    parser.add_argument("--max-instances", type=int, help="Maximum instances to run")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("results"),
        help="Directory for output files",
    )
    parser.add_argument("--output-file", type=str, help="Output CSV filename (default: auto-generated)")

    args = parser.parse_args()

    level = logging.DEBUG if args.debug else logging.INFO if args.verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    if not 1 <= args.palette_size <= len(PALETTE):
        parser.error(f"--palette-size must be between 1 and {len(PALETTE)}")

    exact_solver = None
    if args.exact:
        exact_solver = ILPSolver(
            time_limit_seconds=args.time_limit,
            solver_name=args.ilp_backend,
            verbose=args.debug,
        )

    runner = SimulationRunner(
        palette=PALETTE[: args.palette_size],
        exact_solver=exact_solver,
        output_dir=args.output_dir,
        trace=args.trace,
    )

    if args.instance:
        print(f"Running on instance: {args.instance}")
        instance = GraphInstance.from_file(args.instance)
        print(f"  {instance}")

        result = runner.simulate(instance)
        runner.results.append(result)

        print(f"\nResult after {result.steps} steps:")
        print(f"  Removal order: {result.removal_order}")
        print(f"  Colors used: {result.num_colors}")
        print(f"  Conflicts: {result.num_conflicts}")
        print(f"  Color assignment: {result.vertex_colors}")
        if result.exact_status is not None:
            print(f"  Exact solver: {result.exact_status}, chromatic number {result.chromatic_number}")
        print(f"  Runtime: {result.runtime_seconds:.4f}s")
    else:
        runner.run_directory(args.directory, max_instances=args.max_instances)
        runner.print_table()
        runner.print_summary()

    csv_path = runner.save_results_csv(args.output_file)
    runner.save_params_json(csv_path)


if __name__ == "__main__":
    main()
