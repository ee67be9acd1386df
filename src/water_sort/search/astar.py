"""A* search for water sort puzzles.

This module implements the best-first search that finds a shortest
sequence of pours turning a puzzle into a solved one. The frontier is
ordered by ``g + h`` where ``g`` is the number of pours taken so far and
``h`` is the admissible run-count heuristic, so the first solved state
popped from the frontier is reached by a minimal move sequence.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple

from omegaconf import DictConfig, OmegaConf

from water_sort.core.data_models import Move, Puzzle
from water_sort.search.heuristics import RunCountHeuristic, puzzle_solved
from water_sort.search.moves import possible_pours
from water_sort.search.priority_queue import PriorityQueue

logger = logging.getLogger(__name__)


class SearchInvariantError(RuntimeError):
    """Raised when the search bookkeeping is found to be inconsistent."""
    pass


@dataclass
class SearchResult:
    """Result from A* search."""
    success: bool
    moves: List[Move] = field(default_factory=list)
    final_puzzle: Optional[Puzzle] = None
    nodes_expanded: int = 0
    nodes_generated: int = 0
    computation_time: float = 0.0
    termination_reason: str = "unknown"
    heuristic_stats: Optional[Dict[str, Any]] = None
    statistics: Optional[Dict[str, Any]] = None

    @property
    def solution_length(self) -> Optional[int]:
        return len(self.moves) if self.success else None

    @property
    def proven_unsolvable(self) -> bool:
        """True only when the whole reachable state space was explored."""
        return not self.success and self.termination_reason == "search_exhausted"


@dataclass
class SearchStatistics:
    """Detailed search statistics."""
    nodes_expanded: int = 0
    nodes_generated: int = 0
    duplicate_states: int = 0  # stale frontier entries discarded at pop time
    improved_paths: int = 0  # cheaper paths found to already-discovered states
    max_frontier_size: int = 0
    max_depth_reached: int = 0
    average_branching_factor: float = 0.0

    def update_branching_factor(self, total_successors: int) -> None:
        """Update average branching factor."""
        if self.nodes_expanded > 0:
            self.average_branching_factor = (
                (self.average_branching_factor * (self.nodes_expanded - 1) + total_successors)
                / self.nodes_expanded
            )
        else:
            self.average_branching_factor = total_successors

    def to_dict(self) -> Dict[str, Any]:
        """Convert statistics to dictionary."""
        return {
            'nodes_expanded': self.nodes_expanded,
            'nodes_generated': self.nodes_generated,
            'duplicate_states': self.duplicate_states,
            'improved_paths': self.improved_paths,
            'max_frontier_size': self.max_frontier_size,
            'max_depth_reached': self.max_depth_reached,
            'average_branching_factor': self.average_branching_factor,
        }


@dataclass
class SearchConfig:
    """Configuration for A* search."""
    max_nodes_expanded: Optional[int] = None  # None = explore until solved or exhausted
    max_computation_time: Optional[float] = None  # seconds, None = no deadline
    progress_interval: int = 10000  # log progress every N expansions


class _SearchState:
    """Mutable bookkeeping owned by a single search run."""

    def __init__(self, start: Puzzle):
        self.start = start
        self.frontier: PriorityQueue[Puzzle] = PriorityQueue()
        self.cost_to_reach: Dict[Puzzle, int] = {start: 0}
        self.visited: Set[Puzzle] = set()
        self.predecessor: Dict[Puzzle, Puzzle] = {}
        self.move_from_predecessor: Dict[Puzzle, Move] = {}

    def record_path(self, state: Puzzle, parent: Puzzle, move: Move, cost: int) -> None:
        """Record ``parent --move--> state`` as the best known path to ``state``."""
        self.cost_to_reach[state] = cost
        self.predecessor[state] = parent
        self.move_from_predecessor[state] = move

    def reconstruct_moves(self, goal: Puzzle) -> List[Move]:
        """Follow breadcrumbs from ``goal`` back to the start.

        Raises:
            SearchInvariantError: If the predecessor and move maps disagree or
                the chain does not lead back to the start state
        """
        moves = []
        state = goal
        limit = self.cost_to_reach.get(goal, 0)

        while True:
            has_parent = state in self.predecessor
            has_move = state in self.move_from_predecessor
            if has_parent != has_move:
                raise SearchInvariantError(
                    f"Breadcrumbs out of sync: predecessor={has_parent}, move={has_move}"
                )
            if not has_parent:
                break
            moves.append(self.move_from_predecessor[state])
            state = self.predecessor[state]
            if len(moves) > limit:
                raise SearchInvariantError("Breadcrumb chain is longer than the path cost")

        if state != self.start:
            raise SearchInvariantError("Breadcrumb chain does not end at the start state")

        moves.reverse()
        return moves


class AStarSearcher:
    """A* search over puzzle states with unit move cost."""

    def __init__(self, config: Optional[SearchConfig] = None):
        """Initialize A* searcher.

        Args:
            config: Search configuration parameters
        """
        self.config = config or SearchConfig()
        self.heuristic = RunCountHeuristic()
        self.statistics = SearchStatistics()

        logger.debug(f"A* searcher initialized with max_nodes={self.config.max_nodes_expanded}, "
                     f"max_time={self.config.max_computation_time}")

    @classmethod
    def from_config(cls, cfg: Optional[DictConfig] = None) -> 'AStarSearcher':
        """Create a searcher from the ``search.astar`` configuration section.

        Args:
            cfg: Loaded configuration; the global configuration is used if None

        Returns:
            Configured AStarSearcher (defaults when no configuration is loaded)
        """
        if cfg is None:
            from water_sort.config import get_config
            cfg = get_config()
        if cfg is None:
            return cls()

        defaults = SearchConfig()
        config = SearchConfig(
            max_nodes_expanded=OmegaConf.select(
                cfg, 'search.astar.max_nodes_expanded', default=defaults.max_nodes_expanded),
            max_computation_time=OmegaConf.select(
                cfg, 'search.astar.max_computation_time', default=defaults.max_computation_time),
            progress_interval=OmegaConf.select(
                cfg, 'search.astar.progress_interval', default=defaults.progress_interval),
        )
        return cls(config)

    def search(self, puzzle: Puzzle) -> SearchResult:
        """Search for a shortest pour sequence that solves ``puzzle``.

        Args:
            puzzle: Starting state

        Returns:
            SearchResult with the move list and statistics
        """
        start_time = time.perf_counter()
        deadline = (
            start_time + self.config.max_computation_time
            if self.config.max_computation_time is not None else None
        )

        self.statistics = SearchStatistics()
        self.heuristic.reset_stats()
        stats = self.statistics

        logger.info(f"Starting A* search: {puzzle.total_beakers} beakers, "
                    f"{len(puzzle)} distinct contents")

        state = _SearchState(puzzle)
        state.frontier.push(puzzle, self.heuristic(puzzle))
        termination_reason = "search_exhausted"

        while state.frontier:
            _, current = state.frontier.pop()

            if puzzle_solved(current):
                moves = state.reconstruct_moves(current)
                reason = "initial_match" if not moves else "goal_reached"
                return self._create_result(True, moves, current, start_time, reason)

            if current in state.visited:
                stats.duplicate_states += 1
                continue

            if (self.config.max_nodes_expanded is not None and
                    stats.nodes_expanded >= self.config.max_nodes_expanded):
                termination_reason = "max_nodes_reached"
                break
            if deadline is not None and time.perf_counter() > deadline:
                termination_reason = "timeout"
                break

            state.visited.add(current)

            current_cost = state.cost_to_reach[current]
            stats.nodes_expanded += 1
            stats.max_depth_reached = max(stats.max_depth_reached, current_cost)

            successors = possible_pours(current)
            stats.update_branching_factor(len(successors))

            for move, neighbor in successors:
                candidate_cost = current_cost + 1
                known_cost = state.cost_to_reach.get(neighbor)
                if known_cost is not None and candidate_cost >= known_cost:
                    continue
                if known_cost is not None:
                    stats.improved_paths += 1
                state.record_path(neighbor, current, move, candidate_cost)
                state.frontier.push(neighbor, candidate_cost + self.heuristic(neighbor))
                stats.nodes_generated += 1

            stats.max_frontier_size = max(stats.max_frontier_size, len(state.frontier))

            if self.config.progress_interval > 0 and stats.nodes_expanded % self.config.progress_interval == 0:
                best_f = state.frontier.peek_priority() if state.frontier else None
                logger.debug(f"Expanded {stats.nodes_expanded} states, frontier={len(state.frontier)}, "
                             f"best f={best_f}, depth={stats.max_depth_reached}")

        return self._create_result(False, [], None, start_time, termination_reason)

    def _create_result(self, success: bool, moves: List[Move], final_puzzle: Optional[Puzzle],
                       start_time: float, termination_reason: str) -> SearchResult:
        """Package the outcome of a search run."""
        computation_time = time.perf_counter() - start_time

        if success:
            logger.info(f"Solved in {len(moves)} moves after expanding "
                        f"{self.statistics.nodes_expanded} states ({computation_time:.3f}s)")
        else:
            logger.info(f"No solution found ({termination_reason}) after expanding "
                        f"{self.statistics.nodes_expanded} states ({computation_time:.3f}s)")

        return SearchResult(
            success=success,
            moves=moves,
            final_puzzle=final_puzzle,
            nodes_expanded=self.statistics.nodes_expanded,
            nodes_generated=self.statistics.nodes_generated,
            computation_time=computation_time,
            termination_reason=termination_reason,
            heuristic_stats=self.heuristic.get_stats(),
            statistics=self.statistics.to_dict(),
        )

    def get_search_stats(self) -> Dict[str, Any]:
        """Get statistics of the most recent search."""
        return {
            **self.statistics.to_dict(),
            'heuristic_stats': self.heuristic.get_stats(),
            'config': {
                'max_nodes_expanded': self.config.max_nodes_expanded,
                'max_computation_time': self.config.max_computation_time,
            }
        }


def find_solution(puzzle: Puzzle,
                  config: Optional[SearchConfig] = None) -> Optional[Tuple[List[Move], Puzzle]]:
    """Find a shortest solution for a puzzle.

    Args:
        puzzle: Starting state
        config: Optional search limits (unlimited by default)

    Returns:
        (moves, solved puzzle), or None if no solution was found
    """
    result = AStarSearcher(config).search(puzzle)
    if not result.success:
        return None
    return result.moves, result.final_puzzle


def create_astar_searcher(max_nodes_expanded: Optional[int] = None,
                          max_computation_time: Optional[float] = None,
                          progress_interval: int = 10000) -> AStarSearcher:
    """Factory function to create A* searcher with custom configuration.

    Args:
        max_nodes_expanded: Maximum states to expand (None for no limit)
        max_computation_time: Time budget in seconds (None for no limit)
        progress_interval: Log progress every N expansions (0 disables)

    Returns:
        Configured AStarSearcher instance
    """
    config = SearchConfig(
        max_nodes_expanded=max_nodes_expanded,
        max_computation_time=max_computation_time,
        progress_interval=progress_interval
    )

    return AStarSearcher(config)
