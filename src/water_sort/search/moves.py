"""Move generation and move application."""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from water_sort.core.data_models import Move, Puzzle
from water_sort.core.rules import replace_beaker, try_pour
from water_sort.search.heuristics import beaker_solved

logger = logging.getLogger(__name__)


def _pour_between(puzzle: Puzzle, source, destination) -> Optional[Puzzle]:
    """Apply a pour between two contents already known to be present."""
    poured = try_pour(source, destination)
    if poured is None:
        return None
    new_source, new_destination = poured

    after_source = replace_beaker(puzzle, source, new_source)
    if after_source is None:
        return None
    return replace_beaker(after_source, destination, new_destination)


def possible_pours(puzzle: Puzzle) -> List[Tuple[Move, Puzzle]]:
    """Enumerate every (move, successor) reachable in exactly one pour.

    Sources skip solved beakers, which can never help. A content may pour
    into the same content only when at least two physical beakers hold it.
    Moves are keyed by content, so interchangeable beakers yield one entry.

    Args:
        puzzle: Current state

    Returns:
        List of (move, resulting puzzle) pairs in deterministic order
    """
    successors: Dict[Move, Puzzle] = {}
    contents = puzzle.beakers()

    for source in contents:
        if beaker_solved(source):
            continue
        for destination in contents:
            if source == destination and puzzle.count(source) < 2:
                continue
            move = Move(source, destination)
            neighbor = _pour_between(puzzle, source, destination)
            if neighbor is not None:
                successors[move] = neighbor

    return list(successors.items())


def apply_move(puzzle: Puzzle, move: Move) -> Optional[Puzzle]:
    """Apply a move to a puzzle.

    Args:
        puzzle: State to apply the move to
        move: Pour identified by source and destination contents

    Returns:
        Resulting puzzle, or None if either content is absent, the pour
        would use a single beaker as both ends, or the pour is illegal
    """
    needed = 2 if move.source == move.destination else 1
    if puzzle.count(move.source) < needed or move.destination not in puzzle:
        return None
    return _pour_between(puzzle, move.source, move.destination)


def replay_moves(puzzle: Puzzle, moves: Iterable[Move]) -> Optional[List[Puzzle]]:
    """Apply moves in order, returning every state including the start.

    Returns None as soon as a move cannot be applied.
    """
    states = [puzzle]
    for step, move in enumerate(moves):
        next_state = apply_move(states[-1], move)
        if next_state is None:
            logger.debug(f"Move {step} cannot be applied: {move}")
            return None
        states.append(next_state)
    return states
