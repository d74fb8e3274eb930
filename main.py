#!/usr/bin/env python3
"""
GA Core - Cosine Maximisation Driver

Main entry point for the genetic algorithm example. Evolves a population
of single-gene chromosomes towards the maximum of -cos(x) and prints the
best individual found.

The three positional arguments are the population size, the number of
generations and the number of elite members. The population has to be at
least twice the elite count, and there can be zero elites.
"""

import sys
import argparse
import logging
import time
from pathlib import Path

# Add current directory to path for imports
sys.path.append(str(Path(__file__).parent))

from ga_core.data_models import ConfigurationError
from ga_core.io_utils import save_generation_to_csv, save_history_log
from ga_core.orchestration import build_engine, resolve_seed


def positive_int(value: str) -> int:
    """argparse type for strictly positive integers"""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got: {number}")
    return number


def non_negative_int(value: str) -> int:
    """argparse type for integers >= 0"""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got: {number}")
    return number


def run_basic(population, generations, elite, seed=None, mutation_rate=None,
              parent_rate=None, output_name=None, plot=False):
    """Run one simulation and print the best individual"""
    seed = resolve_seed(seed)

    overrides = {}
    if mutation_rate is not None:
        overrides['mutation_rate'] = mutation_rate
    if parent_rate is not None:
        overrides['parent_rate'] = parent_rate

    engine = build_engine(population, elite=elite, seed=seed, shared_overrides=overrides)

    start_time = time.time()
    engine.simulate(generations)
    elapsed_time = time.time() - start_time

    best = engine.current_generation().best()
    print(f"Maximum: {best.local_data.x:f}, Fitness: {best.fitness_value:f}")

    if output_name:
        csv_path = save_generation_to_csv(
            engine.current_generation(), f"output/{output_name}.csv", overwrite=True
        )
        history_path = save_history_log(
            engine.history, f"output/{output_name}_history.csv", overwrite=True
        )
        print(f"  Seed: {seed}, elapsed: {elapsed_time:.3f} seconds")
        print(f"  CSV: {csv_path}")
        print(f"  History: {history_path}")

        if plot and engine.history:
            from ga_core.visualization_utils import plot_fitness_history
            plot_fitness_history(engine.history, f"output/{output_name}_plot.png")

    return engine


def run_multiple_random_trials(num_trials, population, generations, elite):
    """Run multiple trials with different random seeds for comparison"""
    print("=" * 60)
    print(f"RUNNING {num_trials} RANDOM TRIALS")
    print("=" * 60)

    results = []

    for trial in range(num_trials):
        seed = resolve_seed(None)
        print(f"\n--- Trial {trial + 1}/{num_trials} (seed {seed}) ---")

        engine = run_basic(population, generations, elite, seed=seed)
        best = engine.current_generation().best()
        results.append({
            'trial': trial + 1,
            'seed': seed,
            'x': best.local_data.x,
            'fitness': best.fitness_value,
        })

    print("\n" + "=" * 60)
    print("TRIAL SUMMARY")
    print("=" * 60)
    print("Trial | Seed       | Maximum  | Fitness")
    print("------|------------|----------|---------")

    for r in results:
        print(f"{r['trial']:5} | {r['seed']:10} | {r['x']:8.4f} | {r['fitness']:7.4f}")

    fitness_values = [r['fitness'] for r in results]
    mean_fitness = sum(fitness_values) / len(fitness_values)
    print(f"\nFitness Statistics:")
    print(f"  Average: {mean_fitness:.4f}")
    print(f"  Range: {min(fitness_values):.4f} - {max(fitness_values):.4f}")

    return results


def main(argv=None):
    """Main entry point with command-line argument parsing"""
    parser = argparse.ArgumentParser(
        description="GA Core - maximise -cos(x) with a generational genetic algorithm",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 main.py 100 200 4                     # 100 individuals, 200 generations, 4 elites
  python3 main.py 50 100 0 --seed 7             # Reproducible run without elites
  python3 main.py 100 200 4 -n run_v1 --plot    # Save output/run_v1.csv, history and plot
  python3 main.py 100 200 4 --trials 5          # Compare 5 random seeds
        """
    )

    parser.add_argument('population', type=positive_int, help='Population size')
    parser.add_argument('generations', type=positive_int, help='Number of generations')
    parser.add_argument('elite', type=non_negative_int, help='Number of elite members (even)')

    parser.add_argument('--seed', '-s', type=non_negative_int, help='Random seed')
    parser.add_argument('--mutation-rate', '-m', type=float, help='Mutation probability (default: 0.001)')
    parser.add_argument('--parent-rate', '-p', type=float, help='Crossover pairing probability (default: 0.5)')
    parser.add_argument('--trials', '-t', type=positive_int, metavar='N',
                        help='Run N random trials for comparison')
    parser.add_argument('--output-name', '-n', type=str, metavar='NAME',
                        help='Save final generation and history as output/NAME*.csv')
    parser.add_argument('--plot', action='store_true', help='Save fitness plot (requires --output-name)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Log every breeding cycle')

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s - %(levelname)s - %(message)s'
        )

    try:
        if args.trials:
            run_multiple_random_trials(args.trials, args.population, args.generations, args.elite)
        else:
            run_basic(
                args.population, args.generations, args.elite,
                seed=args.seed,
                mutation_rate=args.mutation_rate,
                parent_rate=args.parent_rate,
                output_name=args.output_name,
                plot=args.plot,
            )
    except ConfigurationError as e:
        parser.error(str(e))
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        sys.exit(1)


if __name__ == "__main__":
    main()
