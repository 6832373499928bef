import importlib.util
import logging
from pathlib import Path

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest
from PIL import Image

from illness_ca.simulation import create_board, run_simulation
from illness_ca.utils.board import Board, simulate
from illness_ca.utils.config import SimulationConfig
from illness_ca.utils.patterns import get_pattern, place_pattern


def _config(tmp_path, **kwargs):
    defaults = dict(width=12, height=10, iterations=5, seed=123,
                    output_dir=str(tmp_path / 'png'))
    defaults.update(kwargs)
    return SimulationConfig(**defaults)


def test_create_board_uses_seed(tmp_path):
    config = _config(tmp_path)
    a = create_board(config)
    b = create_board(config)
    assert a.shape == (10, 12)
    assert np.array_equal(a.state, b.state)


def test_frames_written_before_each_step(tmp_path):
    config = _config(tmp_path)
    trajectory = simulate(create_board(config), config.params, config.iterations)

    result = run_simulation(config, progress=False)

    names = [p.name for p in result.frames]
    assert names == [f"foo-{i:04d}.png" for i in range(5)]
    for i, path in enumerate(result.frames):
        with Image.open(path) as image:
            assert np.array_equal(np.asarray(image), trajectory[i])
    assert np.array_equal(result.board.state, trajectory[5])
    assert result.board.generation == 5
    assert result.history is None


def test_zero_iterations_writes_nothing(tmp_path):
    config = _config(tmp_path, iterations=0)
    result = run_simulation(config, progress=False)
    assert result.frames == []
    assert not (tmp_path / 'png').exists()


def test_collect_stats(tmp_path):
    config = _config(tmp_path, iterations=3)
    result = run_simulation(config, collect_stats=True, progress=False)
    assert len(result.history['healthy']) == 3
    total = result.history['healthy'] + result.history['infected'] + result.history['illed']
    assert np.all(total == 12 * 10)


def test_run_with_pattern_board(tmp_path):
    config = _config(tmp_path, width=9, height=9, iterations=2, prefix='corner')
    board = Board.from_array(place_pattern(config.grid_size, get_pattern('corner_illed'), (0, 0)))

    result = run_simulation(config, board=board, progress=False)

    assert [p.name for p in result.frames] == ['corner-0000.png', 'corner-0001.png']
    assert not result.board.state.any()


def test_board_shape_must_match_config(tmp_path):
    config = _config(tmp_path)
    with pytest.raises(ValueError):
        run_simulation(config, board=Board(3, 3), progress=False)


def test_write_failure_is_logged_and_raised(tmp_path, caplog):
    blocker = tmp_path / 'not_a_dir'
    blocker.write_text('')
    config = _config(tmp_path, output_dir=str(blocker))

    with caplog.at_level(logging.ERROR, logger='illness_ca.simulation'):
        with pytest.raises(OSError):
            run_simulation(config, progress=False)

    assert 'Failed to write frame 0' in caplog.text


def _load_script(name):
    path = Path(__file__).resolve().parents[1] / 'scripts' / f'{name}.py'
    spec = importlib.util.spec_from_file_location(name, path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_run_simulation_script(tmp_path):
    script = _load_script('run_simulation')
    out = tmp_path / 'frames'

    status = script.main(['--width', '8', '--height', '6', '--iterations', '3', '--seed', '1',
                          '--output-dir', str(out), '--stats', '--quiet'])

    assert status == 0
    assert sorted(p.name for p in out.glob('foo-*.png')) == ['foo-0000.png', 'foo-0001.png', 'foo-0002.png']
    assert (out / 'population.csv').exists()
    assert (out / 'population.png').exists()


def test_run_simulation_script_write_failure(tmp_path):
    script = _load_script('run_simulation')
    blocker = tmp_path / 'file'
    blocker.write_text('')

    status = script.main(['--width', '4', '--height', '4', '--iterations', '1',
                          '--output-dir', str(blocker), '--quiet'])

    assert status == 1
