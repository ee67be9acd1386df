"""Pour rules and puzzle update primitives.

Puzzles are immutable: every function here returns a new ``Puzzle`` and
leaves its argument untouched, so states held by the search frontier and
its breadcrumb maps can never be changed through a derived state.
"""

from typing import Optional, Tuple

from water_sort.core.data_models import CAPACITY, Beaker, Puzzle


def add_beaker(puzzle: Puzzle, beaker: Beaker) -> Puzzle:
    """Add one physical beaker with the given content.

    Args:
        puzzle: Puzzle to derive from
        beaker: Content of the beaker to add

    Returns:
        New puzzle with the content's count incremented
    """
    counts = puzzle.counts()
    counts[beaker] = counts.get(beaker, 0) + 1
    return Puzzle.from_counts(counts)


def remove_beaker(puzzle: Puzzle, beaker: Beaker) -> Optional[Puzzle]:
    """Remove one physical beaker with the given content.

    Args:
        puzzle: Puzzle to derive from
        beaker: Content of the beaker to remove

    Returns:
        New puzzle with the count decremented (the entry disappears when it
        reaches zero), or None if no beaker holds this content
    """
    counts = puzzle.counts()
    current = counts.get(beaker, 0)
    if current == 0:
        return None
    if current == 1:
        del counts[beaker]
    else:
        counts[beaker] = current - 1
    return Puzzle.from_counts(counts)


def replace_beaker(puzzle: Puzzle, old: Beaker, new: Beaker) -> Optional[Puzzle]:
    """Swap one beaker holding ``old`` for one holding ``new``.

    Returns None iff no beaker holds ``old``.
    """
    removed = remove_beaker(puzzle, old)
    if removed is None:
        return None
    return add_beaker(removed, new)


def try_pour(source: Beaker, destination: Beaker) -> Optional[Tuple[Beaker, Beaker]]:
    """Pour the top run of ``source`` into ``destination``.

    Units of the source's top color move one at a time until the source's
    next unit has a different color, the source is empty, or the
    destination is full. A legal pour always runs to that maximal extent.

    Args:
        source: Beaker poured from
        destination: Beaker poured into

    Returns:
        (new_source, new_destination), or None if the pour is illegal
    """
    if not source:
        return None
    color = source[0]
    if destination and (destination[0] != color or len(destination) >= CAPACITY):
        return None

    moved = 0
    while moved < len(source) and source[moved] == color and len(destination) + moved < CAPACITY:
        moved += 1

    return source[moved:], (color,) * moved + destination
