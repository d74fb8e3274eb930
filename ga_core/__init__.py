"""
GA Core - generational genetic algorithm engine

Evolves a population of chromosomes through fitness-proportional
(roulette) selection, elitism and deferred crossover/mutation, keeping
a ring of generation buffers.

Key Features:
- Generic over the chromosome type (mutate/crossover/fitness contract)
- Double-buffered (or deeper) generation storage
- Crossover always applied before mutations of its children
- Seedable numpy random generator for reproducible runs

Modules:
- data_models: Chromosome contract, shared/local data, GenerationRecord
- wrapper: Ownership slot holding one chromosome
- population: Generation ring buffer and read-only generation view
- operations: Deferred mutation/crossover operations and their queue
- selection: Roulette selection
- engine: GeneticAlgorithm breeding engine
- io_utils: CSV export of generations and history, run folders
- visualization_utils: Fitness history plot
- cli: YAML run configuration loading and validation
- orchestration: Run workflow used by the command-line drivers
"""

__version__ = "0.1.0"

from .data_models import (
    BasicSharedData,
    BasicLocalData,
    Chromosome,
    ConfigurationError,
    GenerationRecord,
)
from .wrapper import ChromosomeSlot
from .population import GenerationBuffer, GenerationView
from .operations import MutateOp, CrossoverOp, OperationQueue
from .selection import weighted_selection, selection_probabilities
from .engine import GeneticAlgorithm

__all__ = [
    "BasicSharedData",
    "BasicLocalData",
    "Chromosome",
    "ConfigurationError",
    "GenerationRecord",
    "ChromosomeSlot",
    "GenerationBuffer",
    "GenerationView",
    "MutateOp",
    "CrossoverOp",
    "OperationQueue",
    "weighted_selection",
    "selection_probabilities",
    "GeneticAlgorithm",
]
