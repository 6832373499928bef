import csv

import numpy as np

from illness_ca.evaluation.metrics import (
    first_extinction_step,
    population_counts,
    population_history,
    save_population_csv,
)


def test_population_counts():
    state = np.array([[0, 1, 254], [255, 255, 0]], dtype=np.uint8)
    counts = population_counts(state)
    assert counts['healthy'] == 2
    assert counts['infected'] == 2
    assert counts['illed'] == 2
    assert counts['mean_intensity'] == np.mean(state)


def test_population_history_and_extinction():
    trajectory = np.zeros((4, 2, 2), dtype=np.uint8)
    trajectory[0, 0, 0] = 255
    trajectory[1, 1, 1] = 30
    history = population_history(trajectory)

    assert list(history['illed']) == [1, 0, 0, 0]
    assert list(history['infected']) == [0, 1, 0, 0]
    assert list(history['healthy']) == [3, 3, 4, 4]
    assert first_extinction_step(history) == 2


def test_no_extinction():
    trajectory = np.full((3, 2, 2), 9, dtype=np.uint8)
    assert first_extinction_step(population_history(trajectory)) == -1


def test_save_population_csv(tmp_path):
    trajectory = np.zeros((2, 3, 3), dtype=np.uint8)
    trajectory[1] = 255
    path = save_population_csv(population_history(trajectory), tmp_path / 'stats' / 'pop.csv')

    with open(path, newline='') as f:
        rows = list(csv.reader(f))

    assert rows[0] == ['generation', 'healthy', 'infected', 'illed', 'mean_intensity']
    assert rows[1][:4] == ['0', '9', '0', '0']
    assert rows[2][:4] == ['1', '0', '0', '9']
    assert float(rows[2][4]) == 255.0
