"""
CLI module for the GA core.

Handles run configuration loading, validation, and dispatch to the run
workflow.
"""

from numbers import Real
from pathlib import Path
from typing import Any, Dict

import yaml

from chromosomes import CHROMOSOME_TYPES


class ConfigValidationError(Exception):
    """Raised when run configuration is invalid."""
    pass


def load_run_config(config_path: str) -> Dict[str, Any]:
    """
    Load run configuration from YAML file.

    Args:
        config_path: Path to run configuration YAML file

    Returns:
        Dictionary containing run configuration

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_file, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in configuration file: {e}")

    if config is None:
        raise ConfigValidationError("Configuration file is empty")

    if not isinstance(config, dict):
        raise ConfigValidationError("Configuration file must contain a mapping")

    return config


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def validate_run_config(config: Dict[str, Any]) -> None:
    """
    Validate run configuration structure.

    Args:
        config: Run configuration dictionary

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    for field in ['population', 'generations']:
        if field not in config:
            raise ConfigValidationError(f"Missing required field: '{field}'")

    population = config['population']
    if not _is_int(population) or population <= 0:
        raise ConfigValidationError(
            f"'population' must be a positive integer, got: {population}"
        )

    generations = config['generations']
    if not _is_int(generations) or generations < 0:
        raise ConfigValidationError(
            f"'generations' must be a non-negative integer, got: {generations}"
        )

    stored = config.get('stored_generations', 2)
    if not _is_int(stored) or stored < 2:
        raise ConfigValidationError(
            f"'stored_generations' must be an integer of at least 2, got: {stored}"
        )

    seed = config.get('random_seed')
    if seed is not None and (not _is_int(seed) or seed < 0):
        raise ConfigValidationError(
            f"'random_seed' must be a non-negative integer, got: {seed}"
        )

    chromosome = config.get('chromosome', 'cosine')
    if chromosome not in CHROMOSOME_TYPES:
        raise ConfigValidationError(
            f"Unknown chromosome: '{chromosome}'. Must be one of: {', '.join(sorted(CHROMOSOME_TYPES))}"
        )

    _validate_shared_config(config.get('shared', {}), population)
    _validate_initial_config(config.get('initial', {}))

    if 'output' in config:
        _validate_output_config(config['output'])


def _validate_shared_config(shared: Dict[str, Any], population: int) -> None:
    """
    Validate the shared data section.

    Args:
        shared: 'shared' section of the run configuration
        population: Population size

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    if not isinstance(shared, dict):
        raise ConfigValidationError("'shared' must be a dictionary")

    elite = shared.get('elite', 0)
    if not _is_int(elite) or elite < 0:
        raise ConfigValidationError(
            f"'shared.elite' must be a non-negative integer, got: {elite}"
        )
    if elite % 2:
        raise ConfigValidationError(f"'shared.elite' must be even, got: {elite}")
    if 2 * elite > population:
        raise ConfigValidationError(
            f"'population' ({population}) must be at least twice 'shared.elite' ({elite})"
        )

    for rate in ['mutation_rate', 'parent_rate']:
        if rate in shared:
            value = shared[rate]
            if not _is_number(value) or not 0.0 <= value <= 1.0:
                raise ConfigValidationError(
                    f"'shared.{rate}' must be a number within [0, 1], got: {value}"
                )

    if 'mutation_spread' in shared:
        spread = shared['mutation_spread']
        if not _is_number(spread) or spread < 0:
            raise ConfigValidationError(
                f"'shared.mutation_spread' must be a non-negative number, got: {spread}"
            )


def _validate_initial_config(initial: Dict[str, Any]) -> None:
    """
    Validate the initial gene range.

    Args:
        initial: 'initial' section of the run configuration

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    if not isinstance(initial, dict):
        raise ConfigValidationError("'initial' must be a dictionary")

    for bound in ['low', 'high']:
        if bound in initial and not _is_number(initial[bound]):
            raise ConfigValidationError(
                f"'initial.{bound}' must be a number, got: {initial[bound]}"
            )

    if 'low' in initial and 'high' in initial and initial['low'] > initial['high']:
        raise ConfigValidationError(
            f"'initial.low' ({initial['low']}) must not exceed 'initial.high' ({initial['high']})"
        )


def _validate_output_config(output: Dict[str, Any]) -> None:
    """
    Validate the output section.

    Args:
        output: 'output' section of the run configuration

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    if not isinstance(output, dict):
        raise ConfigValidationError("'output' must be a dictionary")

    if 'root' not in output:
        raise ConfigValidationError("Missing required field: 'output.root'")

    for flag in ['overwrite', 'plot']:
        if flag in output and not isinstance(output[flag], bool):
            raise ConfigValidationError(
                f"'output.{flag}' must be true or false, got: {output[flag]}"
            )


def run_from_config(config_path: str) -> None:
    """
    Load run configuration and execute the run.

    This is the main entry point called by ga_cli.py.

    Args:
        config_path: Path to run configuration YAML file

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
        FileExistsError: If the output directory exists and overwrite is off
    """
    print(f"Loading configuration from: {config_path}")
    config = load_run_config(config_path)

    print("Validating configuration...")
    validate_run_config(config)

    print(f"Chromosome: {config.get('chromosome', 'cosine')}\n")

    from .orchestration import run_simulation
    run_simulation(config)

    print("\nRun completed successfully!")
