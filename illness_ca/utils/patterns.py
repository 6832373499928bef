"""Predefined seed layouts for the illness automaton."""
from typing import Optional, Tuple

import numpy as np


# Single sources
SINGLE_INFECTED = np.array([
    [10]
], dtype=np.uint8)

SINGLE_ILLED = np.array([
    [255]
], dtype=np.uint8)

CORNER_ILLED = np.array([
    [255, 0, 0],
    [0, 0, 0],
    [0, 0, 0]
], dtype=np.uint8)


# Clusters
INFECTED_PAIR = np.array([
    [40, 40]
], dtype=np.uint8)

INFECTED_BLOCK = np.array([
    [60, 60, 60],
    [60, 60, 60],
    [60, 60, 60]
], dtype=np.uint8)

ILLED_CROSS = np.array([
    [0, 255, 0],
    [255, 255, 255],
    [0, 255, 0]
], dtype=np.uint8)


# Mixed fronts
OUTBREAK = np.array([
    [0, 20, 0, 20, 0],
    [20, 120, 200, 120, 20],
    [0, 200, 255, 200, 0],
    [20, 120, 200, 120, 20],
    [0, 20, 0, 20, 0]
], dtype=np.uint8)


PATTERN_CATEGORIES = {
    'sources': {
        'single_infected': SINGLE_INFECTED,
        'single_illed': SINGLE_ILLED,
        'corner_illed': CORNER_ILLED
    },
    'clusters': {
        'infected_pair': INFECTED_PAIR,
        'infected_block': INFECTED_BLOCK,
        'illed_cross': ILLED_CROSS
    },
    'fronts': {
        'outbreak': OUTBREAK
    }
}


def get_pattern(name: str) -> np.ndarray:
    """Return a copy of the requested pattern array by name."""
    for category in PATTERN_CATEGORIES.values():
        if name in category:
            return category[name].copy()

    available = [pattern for cat in PATTERN_CATEGORIES.values() for pattern in cat.keys()]
    raise ValueError(f"Pattern '{name}' not found. Available patterns: {available}")


def get_all_patterns():
    """Return all available patterns organized by category."""
    return PATTERN_CATEGORIES


def place_pattern(grid_size: Tuple[int, int],
                  pattern: np.ndarray,
                  position: Optional[Tuple[int, int]] = None) -> np.ndarray:
    """Place a pattern on an all-healthy grid, centered by default or at a given corner.

    Args:
        grid_size: Grid dimensions as (height, width)
        pattern: Pattern array (h, w)
        position: Optional (row, col) of the pattern's top-left cell

    Returns:
        uint8 state array of shape ``grid_size``; parts of the pattern that
        fall outside the grid are cropped
    """
    grid = np.zeros(grid_size, dtype=np.uint8)
    ph, pw = pattern.shape
    h, w = grid_size
    if position is None:
        start_h = (h - ph) // 2
        start_w = (w - pw) // 2
    else:
        start_h, start_w = position

    top = max(start_h, 0)
    left = max(start_w, 0)
    end_h = min(start_h + ph, h)
    end_w = min(start_w + pw, w)

    if end_h > top and end_w > left:
        grid[top:end_h, left:end_w] = pattern[top - start_h:end_h - start_h,
                                              left - start_w:end_w - start_w]

    return grid
