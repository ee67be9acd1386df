"""Search algorithms for the water sort solver.

This module implements A* search over puzzle states guided by the
admissible run-count heuristic.
"""

from .heuristics import (
    RunCountHeuristic, beaker_cost, beaker_solved, count_runs, is_solved,
    puzzle_cost, puzzle_solved
)
from .moves import apply_move, possible_pours, replay_moves
from .priority_queue import PriorityQueue
from .astar import (
    AStarSearcher, SearchConfig, SearchInvariantError, SearchResult,
    create_astar_searcher, find_solution
)

__all__ = [
    'RunCountHeuristic',
    'beaker_cost',
    'beaker_solved',
    'count_runs',
    'is_solved',
    'puzzle_cost',
    'puzzle_solved',
    'apply_move',
    'possible_pours',
    'replay_moves',
    'PriorityQueue',
    'AStarSearcher',
    'SearchConfig',
    'SearchInvariantError',
    'SearchResult',
    'create_astar_searcher',
    'find_solution'
]
