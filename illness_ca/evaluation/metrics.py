"""Population statistics for illness automaton states."""
import csv
from pathlib import Path

import numpy as np

from ..utils.board import HEALTHY, ILLED

HISTORY_KEYS = ('healthy', 'infected', 'illed', 'mean_intensity')


def healthy_count(state: np.ndarray) -> int:
    return int(np.sum(state == HEALTHY))


def infected_count(state: np.ndarray) -> int:
    return int(np.sum((state > HEALTHY) & (state < ILLED)))


def illed_count(state: np.ndarray) -> int:
    return int(np.sum(state == ILLED))


def mean_intensity(state: np.ndarray) -> float:
    """Return the mean cell value, 0.0 for an empty grid."""
    if state.size == 0:
        return 0.0
    return float(np.mean(state, dtype=np.float64))


def population_counts(state: np.ndarray) -> dict:
    """Return healthy / infected / illed counts and the mean intensity of one state."""
    return {
        'healthy': healthy_count(state),
        'infected': infected_count(state),
        'illed': illed_count(state),
        'mean_intensity': mean_intensity(state),
    }


def population_history(trajectory: np.ndarray) -> dict:
    """Return per-generation population counts for a (T, H, W) trajectory."""
    num_steps = len(trajectory)
    history = {
        'healthy': np.zeros(num_steps, dtype=np.int64),
        'infected': np.zeros(num_steps, dtype=np.int64),
        'illed': np.zeros(num_steps, dtype=np.int64),
        'mean_intensity': np.zeros(num_steps, dtype=np.float64),
    }

    for t in range(num_steps):
        counts = population_counts(trajectory[t])
        for key in HISTORY_KEYS:
            history[key][t] = counts[key]

    return history


def first_extinction_step(history: dict) -> int:
    """Return the first generation with no infected or illed cell, or -1."""
    sick = history['infected'] + history['illed']
    extinct = np.where(sick == 0)[0]

    if len(extinct) > 0:
        return int(extinct[0])
    return -1


def save_population_csv(history: dict, path) -> Path:
    """Write the history as CSV with one row per generation."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow(('generation',) + HISTORY_KEYS)
        for t in range(len(history['healthy'])):
            writer.writerow([t, int(history['healthy'][t]), int(history['infected'][t]),
                             int(history['illed'][t]), f"{history['mean_intensity'][t]:.4f}"])
    return path
