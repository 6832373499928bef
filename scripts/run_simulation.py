"""
Run the illness automaton and write one grayscale PNG per generation
"""
import sys
import json
import logging
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from illness_ca.evaluation.metrics import first_extinction_step, save_population_csv
from illness_ca.simulation import run_simulation
from illness_ca.utils.config import SimulationConfig
from illness_ca.utils.visualization import plot_population_history


def main(argv=None):
    """Parse arguments, run the simulation and report."""
    import argparse

    parser = argparse.ArgumentParser(description='Run the illness cellular automaton')
    parser.add_argument('--config', type=str, default=None,
                        help='YAML file with simulation settings')
    parser.add_argument('--width', type=int, default=None, help='Board width')
    parser.add_argument('--height', type=int, default=None, help='Board height')
    parser.add_argument('--k1', type=float, default=None, help='Infection divisor')
    parser.add_argument('--k2', type=float, default=None, help='Illness divisor')
    parser.add_argument('--g', type=int, default=None, help='Growth increment')
    parser.add_argument('--iterations', type=int, default=None,
                        help='Number of generations (frames)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for the initial board')
    parser.add_argument('--output-dir', type=str, default=None,
                        help='Directory for the PNG frames')
    parser.add_argument('--prefix', type=str, default=None, help='Frame file name prefix')
    parser.add_argument('--stats', action='store_true',
                        help='Also write population.csv and population.png')
    parser.add_argument('--quiet', action='store_true', help='Hide the progress bar')

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    try:
        config = SimulationConfig.from_yaml(args.config) if args.config else SimulationConfig()
        config = config.with_overrides(
            width=args.width,
            height=args.height,
            k1=args.k1,
            k2=args.k2,
            g=args.g,
            iterations=args.iterations,
            seed=args.seed,
            output_dir=args.output_dir,
            prefix=args.prefix
        )
    except ValueError as e:
        parser.error(str(e))

    print("=" * 60)
    print("ILLNESS AUTOMATON")
    print("=" * 60)
    print(json.dumps(config.to_dict(), indent=2))

    try:
        result = run_simulation(config, collect_stats=args.stats, progress=not args.quiet)
    except OSError as e:
        print(f"Error: could not write frames: {e}")
        return 1

    print(f"\nWrote {len(result.frames)} frames to {config.output_dir}/")

    if args.stats and result.history is not None:
        output_dir = Path(config.output_dir)
        csv_path = save_population_csv(result.history, output_dir / 'population.csv')
        plot_population_history(result.history, save_path=output_dir / 'population.png')
        print(f"Saved statistics to {csv_path}")

        extinction = first_extinction_step(result.history)
        if extinction >= 0:
            print(f"Illness died out at generation {extinction}")
        else:
            print("Illness persisted through the last frame")

    return 0


if __name__ == "__main__":
    sys.exit(main())
