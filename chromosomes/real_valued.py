"""
Single real-valued gene chromosomes.

Mutation adds uniform noise to the gene; crossover blends the two parents
with a random weight.
"""

from dataclasses import dataclass, field
from typing import Callable

import numpy as np

from ga_core.data_models import BasicLocalData, BasicSharedData, Chromosome


@dataclass
class RealSharedData(BasicSharedData):
    """
    Shared data for real-valued chromosomes.

    Attributes:
        mutation_spread: Half-width of the uniform mutation noise
        rng: Random number generator used by mutation and crossover
    """
    mutation_spread: float = 0.1
    rng: np.random.Generator = field(default_factory=np.random.default_rng, compare=False, repr=False)


@dataclass
class RealLocalData(BasicLocalData):
    """Local data holding one real gene."""
    x: float = 0.0


class RealValuedChromosome(Chromosome):
    """Chromosome with one real gene; subclasses define fitness()."""
    local_type = RealLocalData
    shared_type = RealSharedData

    def mutate(self) -> None:
        spread = self.shared_data.mutation_spread
        self.local_data.x += self.shared_data.rng.uniform(-spread, spread)

    def crossover(self, other, child_a, child_b) -> None:
        weight = self.shared_data.rng.random()
        x, y = self.local_data.x, other.local_data.x
        child_a.local_data.x = weight * x + (1.0 - weight) * y
        child_b.local_data.x = (1.0 - weight) * x + weight * y


class ScalarChromosome(RealValuedChromosome):
    """Fitness is the gene itself."""

    def fitness(self) -> None:
        self.fitness_value = float(self.local_data.x)


def uniform_initializer(
    rng: np.random.Generator,
    low: float,
    high: float
) -> Callable[[], RealLocalData]:
    """
    Build a factory of random initial genes.

    Args:
        rng: Random number generator
        low: Lower bound of the initial gene
        high: Upper bound of the initial gene

    Returns:
        Zero-argument callable returning a new RealLocalData per call
    """
    def factory() -> RealLocalData:
        return RealLocalData(float(rng.uniform(low, high)))

    return factory
