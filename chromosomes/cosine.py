"""
Cosine maximisation example.

Looks for the maximum of -cos(x); starting from genes drawn in [0, 3.5]
the population should converge towards x = pi.
"""

import math
from dataclasses import dataclass

from .real_valued import RealSharedData, RealValuedChromosome

DEFAULT_INITIAL_RANGE = (0.0, 3.5)


@dataclass
class CosineSharedData(RealSharedData):
    mutation_rate: float = 0.001
    parent_rate: float = 0.5


class CosineChromosome(RealValuedChromosome):
    shared_type = CosineSharedData

    def fitness(self) -> None:
        self.fitness_value = -math.cos(self.local_data.x)
