"""Tests for the run-count heuristic and solved predicates."""

import pytest

from water_sort.core.data_models import Puzzle
from water_sort.search.heuristics import (
    HeuristicResult, RunCountHeuristic, beaker_cost, beaker_solved, count_runs,
    is_solved, puzzle_cost, puzzle_solved
)

R, B, G = 0, 1, 2


class TestRunCounting:
    """Test run counting and per-beaker cost."""

    @pytest.mark.parametrize("beaker,runs", [
        ((), 0),
        ((R,), 1),
        ((R, R, R, R), 1),
        ((R, B), 2),
        ((R, R, B, B), 2),
        ((R, B, R, B), 4),
        ((R, B, B, G), 3),
    ])
    def test_count_runs(self, beaker, runs):
        assert count_runs(beaker) == runs

    def test_beaker_cost(self):
        """Test cost is runs minus one, and zero when empty."""
        assert beaker_cost(()) == 0
        assert beaker_cost((R,)) == 0
        assert beaker_cost((R, B)) == 1
        assert beaker_cost((R, B, R, B)) == 3

    def test_puzzle_cost_counts_duplicates(self):
        """Test that identical beakers each contribute their cost."""
        puzzle = Puzzle.from_beakers([(R, B), (R, B), (G, G), ()])

        assert puzzle_cost(puzzle) == 2

    def test_puzzle_cost_of_solved_puzzle_is_zero(self):
        puzzle = Puzzle.from_beakers([(R,) * 4, (B,) * 4, ()])

        assert puzzle_cost(puzzle) == 0


class TestSolvedPredicates:
    """Test terminal-state detection."""

    def test_beaker_solved(self):
        assert beaker_solved(())
        assert beaker_solved((R, R, R, R))
        assert not beaker_solved((R, R, R))
        assert not beaker_solved((R, R, R, B))

    def test_under_filled_single_color_is_not_solved(self):
        """Test that separated but under-filled colors do not win."""
        puzzle = Puzzle.from_beakers([(R, R, R), (B, B, B, B), ()])

        assert not puzzle_solved(puzzle)
        assert puzzle_cost(puzzle) == 0

    def test_solved_puzzle(self):
        puzzle = Puzzle.from_beakers([(R,) * 4, (B,) * 4, (), ()])

        assert puzzle_solved(puzzle)
        assert is_solved(puzzle)

    def test_empty_puzzle_is_solved(self):
        assert is_solved(Puzzle())

    def test_solved_depends_only_on_content(self):
        """Test that beaker order never affects the predicate."""
        first = Puzzle.from_beakers([(R, B), (B, R)])
        second = Puzzle.from_beakers([(B, R), (R, B)])

        assert is_solved(first) == is_solved(second)


class TestRunCountHeuristic:
    """Test the stateful heuristic wrapper."""

    @pytest.fixture
    def heuristic(self):
        return RunCountHeuristic()

    def test_compute(self, heuristic):
        """Test computation returns a HeuristicResult."""
        puzzle = Puzzle.from_beakers([(R, B, R), ()])

        result = heuristic.compute(puzzle)

        assert isinstance(result, HeuristicResult)
        assert result.value == 2
        assert result.computation_time >= 0.0

    def test_call_matches_puzzle_cost(self, heuristic):
        puzzle = Puzzle.from_beakers([(R, B), (B, G, G)])

        assert heuristic(puzzle) == puzzle_cost(puzzle)

    def test_stats(self, heuristic):
        """Test usage statistics and reset."""
        puzzle = Puzzle.from_beakers([(R,)])
        heuristic(puzzle)
        heuristic(puzzle)

        stats = heuristic.get_stats()
        assert stats['name'] == "run_count"
        assert stats['computation_count'] == 2

        heuristic.reset_stats()
        assert heuristic.get_stats()['computation_count'] == 0
        assert heuristic.get_stats()['average_computation_time'] == 0.0
