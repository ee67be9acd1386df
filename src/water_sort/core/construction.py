"""Puzzle construction from named color specifications."""

import logging
from collections import Counter
from typing import Optional, Sequence, Tuple

from water_sort.core.data_models import CAPACITY, Palette, Puzzle

logger = logging.getLogger(__name__)

# A beaker spec lists color names from top to bottom; None or [] is an empty beaker
BeakerSpec = Optional[Sequence[str]]


class PuzzleConstructionError(ValueError):
    """Exception raised when a beaker specification is invalid."""
    pass


def build_puzzle(specs: Sequence[BeakerSpec],
                 palette: Optional[Palette] = None) -> Tuple[Puzzle, Palette]:
    """Build a puzzle and its color palette from beaker specifications.

    Color names are assigned identifiers in first-use order, scanning the
    beakers in the given order and each beaker from top to bottom.

    Args:
        specs: One entry per physical beaker
        palette: Existing palette to extend (a new one is created if None)

    Returns:
        Tuple of (puzzle, palette)

    Raises:
        PuzzleConstructionError: If a beaker holds more than CAPACITY units
            a color name is not a non-empty string, or a beaker is not a list
    """
    palette = palette if palette is not None else Palette()
    beakers = []

    for index, spec in enumerate(specs):
        if spec is None:
            beakers.append(())
            continue
        if not isinstance(spec, (list, tuple)):
            raise PuzzleConstructionError(
                f"Beaker {index}: expected a list of color names, got {type(spec).__name__} {spec!r}"
            )
        if len(spec) > CAPACITY:
            raise PuzzleConstructionError(
                f"Beaker {index} holds {len(spec)} units, capacity is {CAPACITY}"
            )
        colors = []
        for name in spec:
            if not isinstance(name, str) or not name:
                raise PuzzleConstructionError(
                    f"Beaker {index}: color names must be non-empty strings, got {name!r}"
                )
            colors.append(palette.color_of(name))
        beakers.append(tuple(colors))

    puzzle = Puzzle.from_beakers(beakers)

    for color, units in sorted(color_distribution(puzzle).items()):
        if units % CAPACITY != 0:
            logger.warning(
                f"Color '{palette.name_of(color)}' has {units} units, not a multiple of "
                f"{CAPACITY}; the puzzle cannot be solved"
            )

    return puzzle, palette


def make_puzzle(specs: Sequence[BeakerSpec]) -> Puzzle:
    """Build a puzzle from beaker specifications, discarding the palette."""
    puzzle, _ = build_puzzle(specs)
    return puzzle


def color_distribution(puzzle: Puzzle) -> Counter:
    """Count liquid units per color across all physical beakers."""
    units: Counter = Counter()
    for beaker, count in puzzle.items():
        for color in beaker:
            units[color] += count
    return units
