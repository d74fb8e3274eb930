"""
Tests for run configuration handling and the command-line drivers.
"""

import ast
import io
import unittest
import tempfile
import shutil
from contextlib import redirect_stdout
from unittest import mock
from pathlib import Path

import yaml

import ga_core

from ga_core.cli import (
    ConfigValidationError,
    load_run_config,
    run_from_config,
    validate_run_config,
)
from ga_core.io_utils import load_history_log
from ga_core.orchestration import build_engine, resolve_seed, run_simulation
from ga_core.data_models import ConfigurationError
import main as cosine_main


def base_config(**overrides):
    config = {
        'population': 20,
        'generations': 5,
        'random_seed': 11,
        'shared': {'elite': 2, 'mutation_rate': 0.05, 'parent_rate': 0.5},
    }
    config.update(overrides)
    return config


class TestLoadRunConfig(unittest.TestCase):
    """Test load_run_config()."""

    def setUp(self):
        self.temp_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_run_config(self.temp_dir / 'missing.yaml')

    def test_empty_file(self):
        path = self.temp_dir / 'empty.yaml'
        path.write_text("")
        with self.assertRaises(ConfigValidationError):
            load_run_config(path)

    def test_invalid_yaml(self):
        path = self.temp_dir / 'bad.yaml'
        path.write_text("population: [1, 2\n")
        with self.assertRaises(ConfigValidationError):
            load_run_config(path)

    def test_not_a_mapping(self):
        path = self.temp_dir / 'list.yaml'
        path.write_text("- 1\n- 2\n")
        with self.assertRaises(ConfigValidationError):
            load_run_config(path)

    def test_bundled_config_is_valid(self):
        config = load_run_config(Path(__file__).parents[2] / 'config.yaml')
        validate_run_config(config)
        self.assertEqual(config['chromosome'], 'cosine')


class TestValidateRunConfig(unittest.TestCase):
    """Test validate_run_config()."""

    def assertInvalid(self, config):
        with self.assertRaises(ConfigValidationError):
            validate_run_config(config)

    def test_valid_config(self):
        validate_run_config(base_config())
        validate_run_config({'population': 1, 'generations': 0})

    def test_missing_required_fields(self):
        self.assertInvalid({'generations': 5})
        self.assertInvalid({'population': 5})

    def test_population_and_generations(self):
        self.assertInvalid(base_config(population=0))
        self.assertInvalid(base_config(population=True))
        self.assertInvalid(base_config(generations=-1))
        self.assertInvalid(base_config(generations=2.5))

    def test_stored_generations_and_seed(self):
        self.assertInvalid(base_config(stored_generations=1))
        self.assertInvalid(base_config(random_seed=-3))
        validate_run_config(base_config(stored_generations=4, random_seed=None))

    def test_unknown_chromosome(self):
        self.assertInvalid(base_config(chromosome='tsp'))
        validate_run_config(base_config(chromosome='scalar'))

    def test_shared_section(self):
        self.assertInvalid(base_config(shared={'elite': 3}))
        self.assertInvalid(base_config(shared={'elite': 12}))
        self.assertInvalid(base_config(shared={'mutation_rate': 1.2}))
        self.assertInvalid(base_config(shared={'parent_rate': 'high'}))
        self.assertInvalid(base_config(shared={'mutation_spread': -0.1}))
        self.assertInvalid(base_config(shared=[1, 2]))

    def test_initial_section(self):
        self.assertInvalid(base_config(initial={'low': 'a'}))
        self.assertInvalid(base_config(initial={'low': 2.0, 'high': 1.0}))
        validate_run_config(base_config(initial={'low': -1, 'high': 1.5}))

    def test_output_section(self):
        self.assertInvalid(base_config(output={'overwrite': True}))
        self.assertInvalid(base_config(output={'root': 'out', 'plot': 'yes'}))
        self.assertInvalid(base_config(output='out'))
        validate_run_config(base_config(output={'root': 'out', 'plot': False}))


class TestOrchestration(unittest.TestCase):
    """Test engine construction and the run workflow."""

    def setUp(self):
        self.temp_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def test_resolve_seed(self):
        self.assertEqual(resolve_seed(5), 5)
        self.assertIsInstance(resolve_seed(None), int)

    def test_build_engine_applies_overrides(self):
        engine = build_engine(10, elite=2, seed=1, shared_overrides={'parent_rate': 0.9})
        shared = engine.get_shared_data()

        self.assertEqual(shared.elite, 2)
        self.assertEqual(shared.parent_rate, 0.9)
        self.assertIs(shared.rng, engine.rng)
        for chromosome in engine.current_generation():
            self.assertGreaterEqual(chromosome.local_data.x, 0.0)
            self.assertLessEqual(chromosome.local_data.x, 3.5)

    def test_build_engine_rejects_bad_parameters(self):
        with self.assertRaises(ConfigurationError):
            build_engine(10, elite=3)
        with self.assertRaises(ConfigurationError):
            build_engine(10, shared_overrides={'unknown': 1})
        with self.assertRaises(ConfigurationError):
            build_engine(10, shared_overrides={'rng': None})

    def test_run_simulation_without_output(self):
        with redirect_stdout(io.StringIO()) as out:
            engine = run_simulation(base_config())

        self.assertEqual(engine.generation, 5)
        self.assertEqual(len(engine.history), 5)
        self.assertIn("Maximum:", out.getvalue())

    def test_run_from_config_writes_outputs(self):
        root = self.temp_dir / 'run'
        config = base_config(output={'root': str(root), 'overwrite': False, 'plot': True})
        config_path = self.temp_dir / 'run.yaml'
        config_path.write_text(yaml.safe_dump(config))

        with redirect_stdout(io.StringIO()):
            run_from_config(str(config_path))

        self.assertTrue((root / 'final_generation.csv').exists())
        self.assertTrue((root / 'fitness_history.png').exists())
        self.assertEqual(len(load_history_log(root / 'history.csv')), 5)

        with open(root / 'run_metadata.yaml') as f:
            metadata = yaml.safe_load(f)
        self.assertEqual(metadata['random_seed'], 11)
        self.assertEqual(metadata['generations'], 5)
        self.assertIn('x', metadata['best']['genotype'])

        # Second run refuses to reuse the folder
        with redirect_stdout(io.StringIO()):
            with self.assertRaises(FileExistsError):
                run_from_config(str(config_path))

    def test_same_seed_same_result(self):
        with redirect_stdout(io.StringIO()):
            first = run_simulation(base_config())
            second = run_simulation(base_config())

        self.assertEqual(
            first.current_generation().fitness_values(),
            second.current_generation().fitness_values()
        )


class TestCosineDriver(unittest.TestCase):
    """Test the main.py command-line driver."""

    def test_prints_best_individual(self):
        with redirect_stdout(io.StringIO()) as out:
            cosine_main.main(['30', '20', '2', '--seed', '4'])

        self.assertRegex(out.getvalue(), r"Maximum: -?\d+\.\d{6}, Fitness: -?\d+\.\d{6}")

    def test_odd_elite_is_usage_error(self):
        with redirect_stdout(io.StringIO()), self.assertRaises(SystemExit) as ctx:
            with mock.patch('sys.stderr', io.StringIO()):
                cosine_main.main(['10', '5', '3'])
        self.assertEqual(ctx.exception.code, 2)

    def test_invalid_population_is_usage_error(self):
        with self.assertRaises(SystemExit) as ctx:
            with mock.patch('sys.stderr', io.StringIO()):
                cosine_main.main(['0', '5', '0'])
        self.assertEqual(ctx.exception.code, 2)


class TestPackageBoundaries(unittest.TestCase):
    """Only the run workflow modules import the example chromosomes."""

    RUN_LAYER = {'cli.py', 'orchestration.py'}

    def imported_modules(self, path):
        tree = ast.parse(path.read_text())
        names = set()
        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                names.update(alias.name.split('.')[0] for alias in node.names)
            elif isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
                names.add(node.module.split('.')[0])
        return names

    def test_engine_modules_do_not_import_chromosomes(self):
        package_dir = Path(ga_core.__file__).parent
        checked = 0
        for path in sorted(package_dir.glob('*.py')):
            if path.name in self.RUN_LAYER:
                continue
            self.assertNotIn('chromosomes', self.imported_modules(path), path.name)
            checked += 1
        self.assertGreaterEqual(checked, 8)


if __name__ == '__main__':
    unittest.main()
