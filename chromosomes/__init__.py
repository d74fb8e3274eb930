"""
Example chromosomes for the GA core.

Modules:
- real_valued: one real gene, uniform mutation, blend crossover
- cosine: -cos(x) maximisation used by the command-line drivers
"""

from .real_valued import (
    RealSharedData,
    RealLocalData,
    RealValuedChromosome,
    ScalarChromosome,
    uniform_initializer,
)
from .cosine import CosineSharedData, CosineChromosome, DEFAULT_INITIAL_RANGE

# Name used in run configurations -> chromosome type
CHROMOSOME_TYPES = {
    "cosine": CosineChromosome,
    "scalar": ScalarChromosome,
}

__all__ = [
    "CHROMOSOME_TYPES",
    "RealSharedData",
    "RealLocalData",
    "RealValuedChromosome",
    "ScalarChromosome",
    "uniform_initializer",
    "CosineSharedData",
    "CosineChromosome",
    "DEFAULT_INITIAL_RANGE",
]
