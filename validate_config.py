#!/usr/bin/env python3
"""
Run Configuration Validation Tool

Validates YAML run configuration files for the genetic algorithm and
provides feedback about parameter values and potential issues, without
running a simulation.
"""

import sys
import argparse
from pathlib import Path
from typing import Dict, Any

# Add current directory to path for imports
sys.path.append(str(Path(__file__).parent))

from ga_core.cli import load_run_config, validate_run_config, ConfigValidationError


class ConfigValidator:
    """Run configuration validator with detailed feedback"""

    def __init__(self):
        self.warnings = []
        self.errors = []
        self.recommendations = []

    def validate_comprehensive(self, config_path: str) -> Dict[str, Any]:
        """Perform comprehensive validation with detailed feedback"""
        self.warnings = []
        self.errors = []
        self.recommendations = []

        try:
            config = load_run_config(config_path)
        except (FileNotFoundError, ConfigValidationError) as e:
            return {
                'valid': False,
                'errors': [f"Failed to load configuration: {e}"],
                'warnings': [],
                'recommendations': [],
                'summary': {}
            }

        # Structural validation stops at the first error
        try:
            validate_run_config(config)
        except ConfigValidationError as e:
            self.errors.append(str(e))

        if not self.errors:
            self._validate_population(config)
            self._validate_rates(config.get('shared', {}))
            self._validate_output(config.get('output'))

        return {
            'valid': len(self.errors) == 0,
            'errors': self.errors,
            'warnings': self.warnings,
            'recommendations': self.recommendations,
            'summary': self._generate_summary(config) if not self.errors else {}
        }

    def _validate_population(self, config: Dict[str, Any]):
        """Check population size against elitism and run length"""
        population = config['population']
        generations = config['generations']
        elite = config.get('shared', {}).get('elite', 0)

        if population < 10:
            self.warnings.append(f"Small population ({population}) converges prematurely")

        if generations == 0:
            self.warnings.append("'generations' is 0: the initial population is only evaluated and sorted")

        # Each elite pair occupies four slots (pair + its crossover children)
        if population and 2 * elite / population > 0.5:
            self.warnings.append(
                f"Elitism reserves {2 * elite} of {population} slots; selection pressure will be low"
            )

        if elite == 0:
            self.recommendations.append("Consider a small even elite count to keep the best individuals")

        stored = config.get('stored_generations', 2)
        if stored > 2:
            self.recommendations.append(
                f"{stored} stored generations keep older windows readable but use {stored}x the memory"
            )

    def _validate_rates(self, shared: Dict[str, Any]):
        """Check mutation and crossover probabilities"""
        mutation_rate = shared.get('mutation_rate')
        parent_rate = shared.get('parent_rate')

        if mutation_rate is not None:
            if mutation_rate > 0.5:
                self.warnings.append(f"High mutation rate ({mutation_rate}) turns the search into a random walk")
            elif mutation_rate == 0:
                self.recommendations.append("Mutation rate 0: no new genes are introduced after initialization")

        if parent_rate == 0:
            self.recommendations.append("Parent rate 0: no crossover outside elite pairs")

        spread = shared.get('mutation_spread')
        if spread == 0:
            self.warnings.append("'mutation_spread' is 0: mutations leave genes unchanged")

    def _validate_output(self, output):
        """Check output settings"""
        if output is None:
            self.recommendations.append("No 'output' section: results are only printed")
            return

        root = Path(output['root'])
        if root.exists() and not output.get('overwrite', False):
            self.errors.append(f"Output directory already exists: {root} (set 'output.overwrite: true')")

    def _generate_summary(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Generate configuration summary"""
        shared = config.get('shared', {})
        initial = config.get('initial', {})
        output = config.get('output') or {}

        return {
            'population': {
                'size': config['population'],
                'generations': config['generations'],
                'stored_generations': config.get('stored_generations', 2),
                'chromosome': config.get('chromosome', 'cosine'),
            },
            'shared': {
                'elite': shared.get('elite', 0),
                'mutation_rate': shared.get('mutation_rate', 'default'),
                'parent_rate': shared.get('parent_rate', 'default'),
            },
            'initial': {
                'range': f"[{initial.get('low', 'default')}, {initial.get('high', 'default')}]",
            },
            'output': {
                'root': output.get('root', 'none'),
                'plot': output.get('plot', False),
            },
        }


def main():
    """Main validation entry point"""
    parser = argparse.ArgumentParser(
        description="Validate genetic algorithm run configuration files",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        'config_file',
        nargs='?',
        default='config.yaml',
        help='Run configuration file to validate (default: config.yaml)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Show detailed validation information'
    )

    parser.add_argument(
        '--warnings-only', '-w',
        action='store_true',
        help='Show only warnings and errors (no recommendations)'
    )

    args = parser.parse_args()

    validator = ConfigValidator()
    result = validator.validate_comprehensive(args.config_file)

    print("=" * 60)
    print("RUN CONFIGURATION VALIDATION REPORT")
    print("=" * 60)
    print(f"File: {args.config_file}")
    print(f"Status: {'VALID' if result['valid'] else 'INVALID'}")
    print()

    if result['errors']:
        print("ERRORS:")
        for error in result['errors']:
            print(f"  - {error}")
        print()

    if result['warnings']:
        print("WARNINGS:")
        for warning in result['warnings']:
            print(f"  - {warning}")
        print()

    if result['recommendations'] and not args.warnings_only:
        print("RECOMMENDATIONS:")
        for rec in result['recommendations']:
            print(f"  - {rec}")
        print()

    if result['summary'] and args.verbose:
        print("SUMMARY:")
        for section, data in result['summary'].items():
            print(f"  {section.title()}:")
            for key, value in data.items():
                print(f"    {key}: {value}")
        print()

    if not args.verbose and result['summary']:
        population = result['summary']['population']
        print(f"Population: {population['size']}, Generations: {population['generations']}, "
              f"Elite: {result['summary']['shared']['elite']}")

    print("=" * 60)

    sys.exit(0 if result['valid'] else 1)


if __name__ == "__main__":
    main()
