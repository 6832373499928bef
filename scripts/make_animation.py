"""
Simulate a seed pattern or a random board and export a GIF, a frame strip
and a population plot
"""
import sys
from pathlib import Path

import numpy as np

sys.path.append(str(Path(__file__).parent.parent))

from illness_ca.evaluation.metrics import population_history
from illness_ca.utils.board import Board, simulate
from illness_ca.utils.config import SimulationConfig
from illness_ca.utils.patterns import get_pattern, place_pattern
from illness_ca.utils.visualization import (
    create_animation,
    plot_population_history,
    visualize_state,
    visualize_trajectory
)


def main():
    """Generate figures for one run."""
    import argparse

    parser = argparse.ArgumentParser(description='Animate the illness automaton')
    parser.add_argument('--pattern', type=str, default=None,
                        help='Seed pattern name (random board when omitted)')
    parser.add_argument('--width', type=int, default=80, help='Board width')
    parser.add_argument('--height', type=int, default=64, help='Board height')
    parser.add_argument('--steps', type=int, default=120, help='Number of generations')
    parser.add_argument('--seed', type=int, default=0, help='Random seed')
    parser.add_argument('--fps', type=int, default=12, help='GIF frames per second')
    parser.add_argument('--output-dir', type=str, default='figures',
                        help='Directory for the generated figures')

    args = parser.parse_args()

    config = SimulationConfig(width=args.width, height=args.height,
                              iterations=args.steps, seed=args.seed)
    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    if args.pattern:
        name = args.pattern
        board = Board.from_array(place_pattern(config.grid_size, get_pattern(name)))
    else:
        name = 'random'
        board = Board(config.width, config.height)
        board.seed(np.random.default_rng(config.seed))

    print(f"Simulating '{name}' for {config.iterations} generations...")
    trajectory = simulate(board, config.params, config.iterations)
    history = population_history(trajectory)

    visualize_state(trajectory[0], title=f"{name} (t=0)",
                    save_path=output_dir / f"{name}_initial.png")
    visualize_trajectory(trajectory, title=name,
                         save_path=output_dir / f"{name}_trajectory.png")
    create_animation(trajectory, title=name,
                     save_path=output_dir / f"{name}.gif", fps=args.fps)
    plot_population_history(history, save_path=output_dir / f"{name}_population.png")

    print(f"Done. Figures saved to {output_dir}/")


if __name__ == "__main__":
    main()
