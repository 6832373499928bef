"""
Simulation driver: seed a board, then alternate rendering and stepping.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import numpy as np
from tqdm import tqdm

from .evaluation.metrics import HISTORY_KEYS, population_counts
from .utils.board import Board
from .utils.config import SimulationConfig
from .utils.visualization import frame_path, save_frame

logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    """Outcome of a run: the final board, written frames and optional statistics."""
    board: Board
    frames: List[Path] = field(default_factory=list)
    history: Optional[dict] = None


def create_board(config: SimulationConfig,
                 rng: Optional[np.random.Generator] = None) -> Board:
    """Allocate a board of the configured size and seed it from ``rng``."""
    if rng is None:
        rng = np.random.default_rng(config.seed)
    board = Board(config.width, config.height)
    board.seed(rng)
    return board


def run_simulation(config: SimulationConfig,
                   board: Optional[Board] = None,
                   rng: Optional[np.random.Generator] = None,
                   collect_stats: bool = False,
                   progress: bool = True) -> SimulationResult:
    """
    Run ``config.iterations`` generations, writing one frame before each step.

    Frame ``i`` shows the state before the i-th transition.

    Args:
        config: Simulation configuration
        board: Optional pre-seeded board; a random one is created otherwise
        rng: Random generator used to seed a new board, defaults to
            ``numpy.random.default_rng(config.seed)``
        collect_stats: Record population counts for every written frame
        progress: Show a tqdm progress bar

    Returns:
        SimulationResult with the board after the last step

    Raises:
        OSError: If a frame cannot be written
    """
    if board is None:
        board = create_board(config, rng)
    elif board.shape != config.grid_size:
        raise ValueError(
            f"Board is {board.width}x{board.height}, config expects {config.width}x{config.height}")

    params = config.params
    result = SimulationResult(board=board)
    if collect_stats:
        result.history = {key: [] for key in HISTORY_KEYS}

    logger.info("Simulating %d generations on a %dx%d board (k1=%s, k2=%s, g=%d)",
                config.iterations, config.width, config.height, params.k1, params.k2, params.g)

    for i in tqdm(range(config.iterations), desc="Simulating", disable=not progress):
        path = frame_path(config.output_dir, config.prefix, i)
        try:
            save_frame(board, path)
        except OSError as e:
            logger.error("Failed to write frame %d to %s: %s", i, path, e)
            raise
        result.frames.append(path)

        if collect_stats:
            counts = population_counts(board.state)
            for key in HISTORY_KEYS:
                result.history[key].append(counts[key])

        board.step(params)

    if collect_stats:
        result.history = {key: np.asarray(values) for key, values in result.history.items()}

    logger.info("Wrote %d frames to %s", len(result.frames), config.output_dir)
    return result
