"""Population statistics and analysis tools."""

from .metrics import (
    population_counts,
    population_history,
    first_extinction_step,
    save_population_csv
)

__all__ = [
    'population_counts',
    'population_history',
    'first_extinction_step',
    'save_population_csv'
]
