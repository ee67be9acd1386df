"""Deterministic micro-benchmarks for the water sort solver.

Deals a fixed set of seeded puzzles (no puzzle files required), solves each
one and reports timing, solution length and search effort. Useful for quick
regressions and CI smoke tests.

Usage:
    python scripts/benchmark_solver.py [--thorough] [--output FILE.json]
"""

from __future__ import annotations

import time
import argparse
import json
import sys
from typing import Any, Dict

import numpy as np

from water_sort.cli.commands import WaterSortSolver
from water_sort.core.construction import make_puzzle
from water_sort.integration.generator import generate_puzzle_specs


def run(quick: bool = True) -> Dict[str, Any]:
    """Run the benchmark and return structured results.

    Args:
        quick: Whether to use quick settings (fewer colors, tight node limit)

    Returns:
        Dictionary with benchmark results
    """
    if quick:
        sizes = [3, 4, 5]
        seeds = range(3)
        overrides = ["search.astar.max_nodes_expanded=20000", "solver.timeout_seconds=5"]
    else:
        sizes = [4, 6, 8]
        seeds = range(5)
        overrides = ["search.astar.max_nodes_expanded=500000", "solver.timeout_seconds=30"]

    solver = WaterSortSolver(overrides)

    results = []
    t0 = time.perf_counter()
    for num_colors in sizes:
        for seed in seeds:
            puzzle = make_puzzle(generate_puzzle_specs(num_colors, num_empty=2, seed=seed))
            result = solver.solve(puzzle)
            results.append({
                "puzzle": f"c{num_colors}-s{seed}",
                "success": result.success,
                "termination_reason": result.termination_reason,
                "solution_length": result.solution_length,
                "solve_time": result.computation_time,
                "nodes_expanded": result.nodes_expanded,
            })

    total_time = time.perf_counter() - t0

    solve_times = np.array([r["solve_time"] for r in results])
    nodes_expanded = np.array([r["nodes_expanded"] for r in results])
    answered = [r for r in results if r["termination_reason"] in ("goal_reached", "initial_match",
                                                                  "search_exhausted")]

    return {
        "total_puzzles": len(results),
        "answered_puzzles": len(answered),
        "solved_puzzles": sum(1 for r in results if r["success"]),
        "answer_rate": len(answered) / len(results),
        "median_solve_time": float(np.median(solve_times)),
        "mean_solve_time": float(solve_times.mean()),
        "median_nodes_expanded": float(np.median(nodes_expanded)),
        "total_time": total_time,
        "timestamp": time.time(),
        "config": "quick" if quick else "thorough",
        "results": results,
    }


def print_summary(results: Dict[str, Any]) -> None:
    """Print human-readable summary to stdout."""
    print("Water Sort Benchmarks")
    print("=" * 40)

    for result in results["results"]:
        if result["success"]:
            status = f"{result['solution_length']:3d} moves"
        else:
            status = result["termination_reason"]
        print(f"{result['puzzle']:8s} {status:18s} time={result['solve_time']*1000:.1f}ms "
              f"nodes={result['nodes_expanded']}")

    print("-" * 40)
    print(f"Answered: {results['answered_puzzles']}/{results['total_puzzles']} "
          f"(solved {results['solved_puzzles']})")
    print(f"Median solve time: {results['median_solve_time']:.3f}s")
    print(f"Median nodes expanded: {results['median_nodes_expanded']:.0f}")
    print(f"Total time: {results['total_time']:.3f}s")


def main():
    """Main entry point with command-line argument parsing."""
    parser = argparse.ArgumentParser(description="Run deterministic water sort benchmarks")
    parser.add_argument("--thorough", action="store_true",
                        help="Use larger puzzles and looser limits")
    parser.add_argument("--output", "-o", type=str,
                        help="Output JSON file path (if not specified, prints to stdout only)")

    args = parser.parse_args()

    try:
        results = run(quick=not args.thorough)
        print_summary(results)

        if args.output:
            with open(args.output, 'w') as f:
                json.dump(results, f, indent=2)
            print(f"\nResults written to {args.output}")

        # Limits hit without a definitive answer count as regressions
        sys.exit(0 if results["answered_puzzles"] == results["total_puzzles"] else 1)

    except Exception as e:
        print(f"Benchmark failed: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
