"""Random puzzle generation."""

import logging
from typing import List, Optional

import numpy as np

from water_sort.core.data_models import CAPACITY

logger = logging.getLogger(__name__)

DEFAULT_COLOR_NAMES = [
    "red", "blue", "green", "yellow", "purple", "orange", "pink", "cyan",
    "brown", "gray", "lime", "navy", "olive", "teal",
]


def color_names(num_colors: int) -> List[str]:
    """Return ``num_colors`` distinct color names."""
    if num_colors <= len(DEFAULT_COLOR_NAMES):
        return DEFAULT_COLOR_NAMES[:num_colors]
    extra = [f"color{i}" for i in range(len(DEFAULT_COLOR_NAMES), num_colors)]
    return DEFAULT_COLOR_NAMES + extra


def generate_puzzle_specs(num_colors: int,
                          num_empty: int = 2,
                          seed: Optional[int] = None) -> List[List[str]]:
    """Deal shuffled color units into full beakers followed by empty ones.

    Each color contributes exactly ``CAPACITY`` units, so the color
    distribution is always consistent; whether a deal is solvable depends
    on the number of empty beakers.

    Args:
        num_colors: Number of distinct colors (and of filled beakers)
        num_empty: Number of empty beakers appended
        seed: Seed for reproducible deals

    Returns:
        Beaker specifications, color names listed top first
    """
    if num_colors < 1:
        raise ValueError(f"num_colors must be positive, got {num_colors}")
    if num_empty < 0:
        raise ValueError(f"num_empty must be non-negative, got {num_empty}")

    rng = np.random.default_rng(seed)
    names = color_names(num_colors)

    units = np.repeat(np.arange(num_colors), CAPACITY)
    rng.shuffle(units)
    filled = units.reshape(num_colors, CAPACITY)

    specs = [[names[int(color)] for color in row] for row in filled]
    specs.extend([] for _ in range(num_empty))

    logger.debug(f"Generated puzzle with {num_colors} colors, {num_empty} empty beakers, seed={seed}")
    return specs
