"""Water sort puzzle solver.

Finds shortest pour sequences for water sort puzzles with A* search over
immutable puzzle states.
"""

from water_sort.core.construction import PuzzleConstructionError, build_puzzle, make_puzzle
from water_sort.core.data_models import CAPACITY, Move, Palette, Puzzle
from water_sort.search.astar import find_solution
from water_sort.search.heuristics import is_solved
from water_sort.search.moves import apply_move

__version__ = "0.1.0"

__all__ = [
    'CAPACITY',
    'Move',
    'Palette',
    'Puzzle',
    'PuzzleConstructionError',
    'apply_move',
    'build_puzzle',
    'find_solution',
    'is_solved',
    'make_puzzle',
]
