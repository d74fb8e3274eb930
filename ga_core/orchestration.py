"""
Orchestration module for the GA core.

Builds a configured engine, runs the simulation and writes its outputs.
"""

from pathlib import Path
from typing import Dict, Optional, Tuple

import numpy as np

from chromosomes import CHROMOSOME_TYPES, DEFAULT_INITIAL_RANGE, uniform_initializer

from .data_models import ConfigurationError
from .engine import GeneticAlgorithm
from .io_utils import (
    create_run_folder,
    save_generation_to_csv,
    save_history_log,
    save_metadata,
)


def resolve_seed(seed: Optional[int]) -> int:
    """
    Pick a random seed when none is configured.

    Args:
        seed: Configured seed or None

    Returns:
        Seed to use for the run
    """
    if seed is None:
        seed = int(np.random.randint(0, 2**31))
    return seed


def build_engine(
    population: int,
    elite: int = 0,
    chromosome: str = "cosine",
    stored_generations: int = 2,
    seed: Optional[int] = None,
    shared_overrides: Optional[Dict] = None,
    initial_range: Tuple[float, float] = DEFAULT_INITIAL_RANGE
) -> GeneticAlgorithm:
    """
    Create and initialize an engine for one of the example chromosomes.

    The engine's random generator is handed to the shared data, so a
    seeded engine gives the same run every time.

    Args:
        population: Individuals per generation
        elite: Elite count
        chromosome: Key of CHROMOSOME_TYPES
        stored_generations: Generation windows to keep
        seed: Random seed
        shared_overrides: Extra shared data values (mutation_rate, parent_rate, ...)
        initial_range: (low, high) range of the initial genes

    Returns:
        Initialized GeneticAlgorithm

    Raises:
        ConfigurationError: If the parameters are invalid
    """
    chromosome_type = CHROMOSOME_TYPES[chromosome]

    engine = GeneticAlgorithm(
        chromosome_type,
        population,
        stored_generations=stored_generations,
        seed=seed,
    )

    shared = engine.get_shared_data()
    shared.elite = elite
    for key, value in (shared_overrides or {}).items():
        if key == 'rng' or not hasattr(shared, key):
            raise ConfigurationError(f"Unknown shared parameter: '{key}'")
        setattr(shared, key, value)
    shared.rng = engine.rng
    shared.validate(population)

    low, high = initial_range
    engine.initialize(uniform_initializer(engine.rng, low, high))

    return engine


def run_simulation(run_config: Dict) -> GeneticAlgorithm:
    """
    Run a full simulation from a validated run configuration.

    Args:
        run_config: Run configuration dict from YAML

    Algorithm:
        1. Setup seed (run_config['random_seed'] or a random one)
        2. Build engine, configure shared data, draw the initial population
        3. Simulate run_config['generations'] breeding cycles
        4. Print the best individual
        5. If 'output' is configured: save final generation CSV, history
           log, run metadata and (optionally) the fitness plot

    Returns:
        The engine, holding the final sorted generation
    """
    print("=" * 70)
    print("SIMULATION")
    print("=" * 70)

    seed = resolve_seed(run_config.get('random_seed'))
    print(f"Random seed: {seed}")

    shared_config = dict(run_config.get('shared', {}))
    elite = shared_config.pop('elite', 0)

    initial_config = run_config.get('initial', {})
    initial_range = (
        initial_config.get('low', DEFAULT_INITIAL_RANGE[0]),
        initial_config.get('high', DEFAULT_INITIAL_RANGE[1]),
    )

    population = run_config['population']
    generations = run_config['generations']
    chromosome = run_config.get('chromosome', 'cosine')

    engine = build_engine(
        population,
        elite=elite,
        chromosome=chromosome,
        stored_generations=run_config.get('stored_generations', 2),
        seed=seed,
        shared_overrides=shared_config,
        initial_range=initial_range,
    )

    shared = engine.get_shared_data()
    print(f"Population: {population}, generations: {generations}, elite: {shared.elite}")
    print(f"Mutation rate: {shared.mutation_rate}, parent rate: {shared.parent_rate}")
    print()

    report_every = max(generations // 10, 1)

    def print_progress(generation: int, record) -> None:
        if record is not None and (generation % report_every == 0 or generation == generations):
            print(f"  Gen {generation:4d}: best={record.best_fitness:.4f}, "
                  f"mean={record.mean_fitness:.4f}, worst={record.worst_fitness:.4f}")

    engine.simulate(generations, callback=print_progress)

    best = engine.current_generation().best()
    print()
    print(f"Maximum: {best.local_data.x:f}, Fitness: {best.fitness_value:f}")

    if 'output' in run_config:
        _write_outputs(engine, run_config, seed)

    return engine


def _write_outputs(engine: GeneticAlgorithm, run_config: Dict, seed: int) -> None:
    output_config = run_config['output']
    overwrite = output_config.get('overwrite', False)
    output_root = create_run_folder(output_config['root'], overwrite=overwrite)
    print(f"\nOutput directory: {output_root}")

    generation_path = save_generation_to_csv(
        engine.current_generation(),
        output_root / 'final_generation.csv',
        overwrite=overwrite
    )
    print(f"  Final generation: {generation_path}")

    history_path = save_history_log(
        engine.history,
        output_root / 'history.csv',
        overwrite=overwrite
    )
    print(f"  History log: {history_path}")

    best = engine.current_generation().best()
    metadata = {
        'random_seed': seed,
        'population': engine.population,
        'generations': engine.generation,
        'chromosome': run_config.get('chromosome', 'cosine'),
        'best': {
            'genotype': {k: float(v) for k, v in best.local_data.genotype().items()},
            'fitness': float(best.fitness_value),
        },
    }
    metadata_path = save_metadata(metadata, output_root / 'run_metadata.yaml', overwrite=overwrite)
    print(f"  Metadata: {metadata_path}")

    if output_config.get('plot', False) and engine.history:
        from .visualization_utils import plot_fitness_history
        plot_fitness_history(engine.history, Path(output_root) / 'fitness_history.png')
