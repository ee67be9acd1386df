"""Tests for A* search algorithm."""

from collections import deque

import pytest

from water_sort.core.construction import make_puzzle
from water_sort.core.data_models import Move, Puzzle
from water_sort.integration.generator import generate_puzzle_specs
from water_sort.search.astar import (
    AStarSearcher, SearchConfig, SearchInvariantError, SearchResult, SearchStatistics,
    _SearchState, create_astar_searcher, find_solution
)
from water_sort.search.heuristics import is_solved, puzzle_cost
from water_sort.search.moves import apply_move, possible_pours
from water_sort.search.priority_queue import PriorityQueue

R, B, G = 0, 1, 2


def brute_force_distance(puzzle: Puzzle):
    """Exact number of pours to a solved state by breadth-first search."""
    if is_solved(puzzle):
        return 0
    seen = {puzzle}
    queue = deque([(puzzle, 0)])
    while queue:
        state, depth = queue.popleft()
        for _, neighbor in possible_pours(state):
            if neighbor in seen:
                continue
            if is_solved(neighbor):
                return depth + 1
            seen.add(neighbor)
            queue.append((neighbor, depth + 1))
    return None


def reachable_states(puzzle: Puzzle):
    seen = {puzzle}
    queue = deque([puzzle])
    while queue:
        state = queue.popleft()
        for _, neighbor in possible_pours(state):
            if neighbor not in seen:
                seen.add(neighbor)
                queue.append(neighbor)
    return seen


def assert_valid_solution(puzzle, moves, final):
    """Replay moves and check they reach the reported solved state."""
    state = puzzle
    for move in moves:
        state = apply_move(state, move)
        assert state is not None
    assert state == final
    assert is_solved(final)


class TestPriorityQueue:
    """Test the frontier priority queue."""

    def test_pops_lowest_priority_first(self):
        queue = PriorityQueue()
        queue.push("c", 3)
        queue.push("a", 1)
        queue.push("b", 2)

        assert [queue.pop()[1] for _ in range(3)] == ["a", "b", "c"]

    def test_ties_pop_in_insertion_order(self):
        queue = PriorityQueue()
        for item in ["first", "second", "third"]:
            queue.push(item, 5)

        assert [queue.pop()[1] for _ in range(3)] == ["first", "second", "third"]

    def test_duplicate_items_allowed(self):
        """Test that an item can be queued at several priorities."""
        queue = PriorityQueue()
        queue.push("x", 4)
        queue.push("x", 2)

        assert len(queue) == 2
        assert queue.pop() == (2, "x")
        assert queue.peek_priority() == 4

    def test_empty_queue(self):
        queue = PriorityQueue()

        assert not queue
        with pytest.raises(IndexError):
            queue.pop()
        with pytest.raises(IndexError):
            queue.peek_priority()

    def test_unorderable_items(self):
        """Test that items never need to be compared with each other."""
        queue = PriorityQueue()
        queue.push({"a": 1}, 1)
        queue.push({"b": 2}, 1)

        assert queue.pop() == (1, {"a": 1})


class TestSearchConfig:
    """Test SearchConfig functionality."""

    def test_default_config(self):
        """Test default configuration values."""
        config = SearchConfig()

        assert config.max_nodes_expanded is None
        assert config.max_computation_time is None
        assert config.progress_interval == 10000

    def test_factory(self):
        searcher = create_astar_searcher(max_nodes_expanded=10, max_computation_time=2.0)

        assert isinstance(searcher, AStarSearcher)
        assert searcher.config.max_nodes_expanded == 10
        assert searcher.config.max_computation_time == 2.0

    def test_from_config_without_loaded_config(self, monkeypatch):
        """Test fallback to defaults when no configuration is loaded."""
        import water_sort.config.config_manager as config_manager
        monkeypatch.setattr(config_manager, "_global_config", None)

        searcher = AStarSearcher.from_config()

        assert searcher.config == SearchConfig()

    def test_from_config(self):
        from omegaconf import OmegaConf

        cfg = OmegaConf.create({
            'search': {'astar': {'max_nodes_expanded': 50, 'max_computation_time': None}}
        })

        searcher = AStarSearcher.from_config(cfg)

        assert searcher.config.max_nodes_expanded == 50
        assert searcher.config.max_computation_time is None
        assert searcher.config.progress_interval == 10000


class TestFindSolution:
    """Test the find_solution contract."""

    def test_empty_puzzle(self):
        """Test that zero beakers is already solved."""
        assert find_solution(Puzzle()) == ([], Puzzle())

    def test_already_solved(self):
        puzzle = make_puzzle([["red"] * 4, ["blue"] * 4, []])

        assert find_solution(puzzle) == ([], puzzle)

    def test_single_move(self):
        """Test four units split over two beakers solve in one pour."""
        puzzle = make_puzzle([["red"], ["red", "red", "red"], [], []])

        moves, final = find_solution(puzzle)

        assert len(moves) == 1
        assert moves[0] in (Move((0,), (0, 0, 0)), Move((0, 0, 0), (0,)))
        assert final == Puzzle.from_beakers([(0, 0, 0, 0), (), (), ()])
        assert_valid_solution(puzzle, moves, final)

    def test_four_units_in_three_beakers(self):
        """Test a solve that needs a pour between identical beakers."""
        puzzle = make_puzzle([["red"], ["red", "red"], ["red"]])

        moves, final = find_solution(puzzle)

        assert len(moves) == 2
        assert_valid_solution(puzzle, moves, final)

    def test_unsatisfiable_distribution(self):
        """Test that three units of one color can never be solved."""
        puzzle = make_puzzle([["red"], ["red", "red"]])

        assert find_solution(puzzle) is None

    def test_blocked_puzzle(self):
        puzzle = make_puzzle([["red", "blue"], ["blue", "red"]])

        assert find_solution(puzzle) is None

    def test_two_color_swap(self):
        """Test a puzzle needing several pours through empty beakers."""
        puzzle = Puzzle.from_beakers([(B, R, R, R), (R, B, B, B), ()])

        moves, final = find_solution(puzzle)

        assert len(moves) == brute_force_distance(puzzle)
        assert_valid_solution(puzzle, moves, final)

    def test_input_puzzle_is_not_modified(self):
        puzzle = Puzzle.from_beakers([(B, R, R, R), (R, B, B, B), ()])
        snapshot = puzzle.entries

        find_solution(puzzle)

        assert puzzle.entries == snapshot


class TestOptimality:
    """Compare A* against exhaustive breadth-first search on small puzzles."""

    @pytest.mark.parametrize("seed", [0, 1, 2, 3])
    def test_matches_brute_force(self, seed):
        puzzle = make_puzzle(generate_puzzle_specs(3, num_empty=2, seed=seed))

        expected = brute_force_distance(puzzle)
        solution = find_solution(puzzle)

        if expected is None:
            assert solution is None
        else:
            moves, final = solution
            assert len(moves) == expected
            assert_valid_solution(puzzle, moves, final)

    def test_heuristic_is_admissible(self):
        """Test h(state) never exceeds the true distance for every reachable state."""
        puzzle = Puzzle.from_beakers([(R, B, R, B), (B, R, B, R), (), ()])

        for state in reachable_states(puzzle):
            distance = brute_force_distance(state)
            if distance is not None:
                assert puzzle_cost(state) <= distance


class TestAStarSearcher:
    """Test the searcher and its result reporting."""

    @pytest.fixture
    def puzzle(self):
        return Puzzle.from_beakers([(B, R, R, R), (R, B, B, B), ()])

    def test_success_result(self, puzzle):
        result = AStarSearcher().search(puzzle)

        assert isinstance(result, SearchResult)
        assert result.success is True
        assert result.termination_reason == "goal_reached"
        assert result.solution_length == len(result.moves)
        assert result.nodes_expanded > 0
        assert result.nodes_generated > 0
        assert result.heuristic_stats['computation_count'] > 0
        assert result.statistics['nodes_expanded'] == result.nodes_expanded

    def test_initial_match(self):
        puzzle = Puzzle.from_beakers([(R,) * 4, ()])

        result = AStarSearcher().search(puzzle)

        assert result.success is True
        assert result.termination_reason == "initial_match"
        assert result.moves == []
        assert result.nodes_expanded == 0

    def test_exhausted_search(self):
        result = AStarSearcher().search(make_puzzle([["red"], ["red", "red"]]))

        assert result.success is False
        assert result.termination_reason == "search_exhausted"
        assert result.proven_unsolvable
        assert result.solution_length is None
        assert result.final_puzzle is None

    def test_node_limit(self, puzzle):
        """Test that hitting the node limit is not reported as unsolvable."""
        searcher = AStarSearcher(SearchConfig(max_nodes_expanded=1))

        result = searcher.search(puzzle)

        assert result.success is False
        assert result.termination_reason == "max_nodes_reached"
        assert result.nodes_expanded == 1
        assert not result.proven_unsolvable

    def test_node_limit_still_accepts_solved_start(self):
        searcher = AStarSearcher(SearchConfig(max_nodes_expanded=0))

        result = searcher.search(Puzzle())

        assert result.success is True

    def test_timeout(self, puzzle):
        searcher = AStarSearcher(SearchConfig(max_computation_time=1e-9))

        result = searcher.search(puzzle)

        assert result.success is False
        assert result.termination_reason == "timeout"

    def test_searcher_is_reusable(self, puzzle):
        """Test that bookkeeping does not leak between searches."""
        searcher = AStarSearcher()

        first = searcher.search(puzzle)
        second = searcher.search(puzzle)

        assert first.moves == second.moves
        assert first.nodes_expanded == second.nodes_expanded

    def test_get_search_stats(self, puzzle):
        searcher = AStarSearcher(SearchConfig(max_nodes_expanded=100))
        searcher.search(puzzle)

        stats = searcher.get_search_stats()

        assert stats['config']['max_nodes_expanded'] == 100
        assert 'heuristic_stats' in stats
        assert stats['nodes_expanded'] > 0


class TestBookkeeping:
    """Test path reconstruction and invariant checks."""

    @pytest.fixture
    def chain(self):
        start = Puzzle.from_beakers([(R, B), (B,), ()])
        middle = Puzzle.from_beakers([(B,), (B,), (R,)])
        goal = Puzzle.from_beakers([(), (B, B), (R,)])
        return start, middle, goal

    def test_reconstruct_moves(self, chain):
        start, middle, goal = chain
        state = _SearchState(start)
        first, second = Move((R, B), ()), Move((B,), (B,))
        state.record_path(middle, start, first, 1)
        state.record_path(goal, middle, second, 2)

        assert state.reconstruct_moves(goal) == [first, second]
        assert state.reconstruct_moves(start) == []

    def test_missing_move_link_is_fatal(self, chain):
        start, middle, _ = chain
        state = _SearchState(start)
        state.predecessor[middle] = start
        state.cost_to_reach[middle] = 1

        with pytest.raises(SearchInvariantError):
            state.reconstruct_moves(middle)

    def test_missing_predecessor_link_is_fatal(self, chain):
        start, middle, _ = chain
        state = _SearchState(start)
        state.move_from_predecessor[middle] = Move((R, B), ())

        with pytest.raises(SearchInvariantError):
            state.reconstruct_moves(middle)

    def test_chain_not_ending_at_start_is_fatal(self, chain):
        start, middle, goal = chain
        state = _SearchState(start)
        state.record_path(goal, middle, Move((B,), (B,)), 1)

        with pytest.raises(SearchInvariantError):
            state.reconstruct_moves(goal)

    def test_invariant_error_is_runtime_error(self):
        assert issubclass(SearchInvariantError, RuntimeError)


class TestSearchStatistics:
    """Test SearchStatistics helpers."""

    def test_branching_factor(self):
        stats = SearchStatistics()
        stats.nodes_expanded = 1
        stats.update_branching_factor(4)
        stats.nodes_expanded = 2
        stats.update_branching_factor(2)

        assert stats.average_branching_factor == 3.0

    def test_to_dict(self):
        stats = SearchStatistics(nodes_expanded=3)

        assert stats.to_dict()['nodes_expanded'] == 3
