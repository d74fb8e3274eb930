#!/usr/bin/env python3
"""
GA Run CLI - Minimal entry point.

Runs a genetic algorithm simulation described by a YAML run configuration.

Usage:
    python3 ga_cli.py run_config.yaml
    python3 ga_cli.py --config run_config.yaml
    python3 ga_cli.py --help

Examples:
    # Cosine maximisation with the bundled configuration
    python3 ga_cli.py config.yaml

    # Same, logging every breeding cycle
    python3 ga_cli.py --verbose config.yaml

Run configuration keys: population, generations, stored_generations,
random_seed, chromosome, shared (elite, mutation_rate, parent_rate,
mutation_spread), initial (low, high), output (root, overwrite, plot).
"""

import logging
import sys
from pathlib import Path

# Add project root to path if needed
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


def main():
    """Main entry point for GA CLI."""
    args = sys.argv[1:]

    if '--verbose' in args:
        args.remove('--verbose')
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s - %(levelname)s - %(message)s'
        )

    # Handle help
    if not args or args[0] in ['-h', '--help', 'help']:
        print(__doc__)
        sys.exit(0 if args else 1)

    # Parse config path
    config_path = args[0]

    if config_path.startswith('--config='):
        config_path = config_path.split('=', 1)[1]
    elif config_path == '--config':
        if len(args) < 2:
            print("Error: --config requires an argument")
            print(__doc__)
            sys.exit(1)
        config_path = args[1]

    # Import and run
    try:
        from ga_core.cli import run_from_config
        run_from_config(config_path)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(1)
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
