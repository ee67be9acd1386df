"""Run-count heuristic and solved-state predicates for A* search.

The heuristic counts, for every beaker, how many color runs sit on top of
its bottom run. Each of those runs has to be poured off in a separate move,
so the sum over all beakers never exceeds the true number of remaining
pours (the heuristic is admissible).
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict

from water_sort.core.data_models import CAPACITY, Beaker, Puzzle

logger = logging.getLogger(__name__)


def count_runs(beaker: Beaker) -> int:
    """Number of maximal contiguous same-color groups, scanned top to bottom."""
    runs = 0
    previous = None
    for color in beaker:
        if color != previous:
            runs += 1
            previous = color
    return runs


def beaker_cost(beaker: Beaker) -> int:
    """Lower bound on pours needed to clear the runs above the bottom run."""
    if not beaker:
        return 0
    return count_runs(beaker) - 1


def puzzle_cost(puzzle: Puzzle) -> int:
    """Admissible estimate of the remaining pours to a solved puzzle."""
    return sum(beaker_cost(beaker) * count for beaker, count in puzzle.items())


def beaker_solved(beaker: Beaker) -> bool:
    """A beaker is solved when empty, or full with a single color."""
    if not beaker:
        return True
    return len(beaker) == CAPACITY and count_runs(beaker) == 1


def puzzle_solved(puzzle: Puzzle) -> bool:
    """A puzzle is solved when every beaker in it is solved.

    Separated colors alone are not enough: a beaker holding three units of
    one color is not solved.
    """
    return all(beaker_solved(beaker) for beaker in puzzle.beakers())


def is_solved(puzzle: Puzzle) -> bool:
    """Public query used by callers re-checking state after each move."""
    return puzzle_solved(puzzle)


@dataclass
class HeuristicResult:
    """Result from heuristic computation."""
    value: int
    computation_time: float


class RunCountHeuristic:
    """Callable wrapper around ``puzzle_cost`` that keeps usage statistics."""

    name = "run_count"

    def __init__(self):
        self.computation_count = 0
        self.total_computation_time = 0.0

    def compute(self, puzzle: Puzzle) -> HeuristicResult:
        """Compute the heuristic value for a puzzle.

        Args:
            puzzle: State to estimate

        Returns:
            HeuristicResult with the estimate and its computation time
        """
        start_time = time.perf_counter()
        value = puzzle_cost(puzzle)
        elapsed = time.perf_counter() - start_time

        self.computation_count += 1
        self.total_computation_time += elapsed
        return HeuristicResult(value=value, computation_time=elapsed)

    def __call__(self, puzzle: Puzzle) -> int:
        return self.compute(puzzle).value

    def reset_stats(self) -> None:
        self.computation_count = 0
        self.total_computation_time = 0.0

    def get_stats(self) -> Dict[str, Any]:
        """Get heuristic usage statistics."""
        average_time = (
            self.total_computation_time / self.computation_count
            if self.computation_count > 0 else 0.0
        )
        return {
            'name': self.name,
            'computation_count': self.computation_count,
            'total_computation_time': self.total_computation_time,
            'average_computation_time': average_time,
        }
