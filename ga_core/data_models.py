"""
Data models for the GA core.

Core data structures: the chromosome contract every candidate solution
implements, the shared/local data records the engine relies on, and the
per-generation record kept in the breeding history.
"""

import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Optional


class ConfigurationError(Exception):
    """Raised when population parameters are invalid."""
    pass


@dataclass
class BasicSharedData:
    """
    Population-wide parameters, one instance per engine.

    Every chromosome holds a reference to this object and reads it during
    mutation and crossover. Only the caller changes it, before or between
    simulations.

    Attributes:
        elite: Number of top individuals promoted unmutated each generation
        mutation_rate: Probability of scheduling a mutation for a bred slot
        parent_rate: Probability of pairing a selected individual for crossover
    """
    elite: int = 0
    mutation_rate: float = 0.0
    parent_rate: float = 0.0

    def validate(self, population: int) -> None:
        """
        Check the parameters against a population size.

        Args:
            population: Number of individuals per generation

        Raises:
            ConfigurationError: If any parameter is out of range
        """
        if isinstance(self.elite, bool) or not isinstance(self.elite, int) or self.elite < 0:
            raise ConfigurationError(
                f"Elite count must be a non-negative integer, got: {self.elite!r}"
            )

        # Elites are promoted in pairs
        if self.elite % 2:
            raise ConfigurationError(f"Elite count must be even, got: {self.elite}")

        if 2 * self.elite > population:
            raise ConfigurationError(
                f"Population ({population}) must be at least twice the elite count ({self.elite})"
            )

        for name in ('mutation_rate', 'parent_rate'):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"'{name}' must be within [0, 1], got: {value}")


@dataclass
class BasicLocalData:
    """
    Base record for genotype-specific state.

    Subclasses add their genotype fields. The two flags are managed by the
    engine and reset at the start of every breeding cycle; they take no part
    in genotype equality.

    Attributes:
        chosen: Already picked by selection in the current cycle
        elite: Promoted unmutated as an elite survivor
    """
    chosen: bool = field(default=False, compare=False, kw_only=True)
    elite: bool = field(default=False, compare=False, kw_only=True)

    def reset_flags(self) -> None:
        self.chosen = False
        self.elite = False

    def genotype(self) -> dict[str, Any]:
        """
        Genotype fields of this record, without the engine flags.

        Returns:
            Dictionary mapping field name to value
        """
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name not in ('chosen', 'elite')
        }


class Chromosome(ABC):
    """
    Abstract candidate solution.

    Subclasses implement mutate() and fitness(). crossover() is a no-op by
    default and should be overridden to produce meaningful offspring.

    Ranking compares fitness values; equality compares local data.

    ``local_type`` and ``shared_type`` name the data classes the engine
    instantiates for this chromosome by default.

    Attributes:
        shared_data: Engine-owned shared parameters (read-only reference)
        local_data: Genotype-specific state owned by this chromosome
        fitness_value: Value stored by the last fitness() call
    """
    local_type: ClassVar[type] = BasicLocalData
    shared_type: ClassVar[type] = BasicSharedData

    def __init__(self):
        self.shared_data: Optional[BasicSharedData] = None
        self.local_data = self.local_type()
        self.fitness_value = 0.0

    def initialize(self, shared_data: BasicSharedData, local_data: BasicLocalData) -> None:
        """
        Bind the shared data and take a copy of the initial local state.

        Args:
            shared_data: Shared parameters of the owning engine
            local_data: Initial genotype, copied so callers can reuse it
        """
        self.shared_data = shared_data
        self.local_data = copy.deepcopy(local_data)
        self.fitness_value = 0.0

    @abstractmethod
    def mutate(self) -> None:
        """Perturb local data in place."""

    def crossover(self, other: "Chromosome", child_a: "Chromosome", child_b: "Chromosome") -> None:
        """
        Recombine self with other, overwriting the genotype of both children.

        Args:
            other: Second parent
            child_a: First child, fully overwritten
            child_b: Second child, fully overwritten
        """

    @abstractmethod
    def fitness(self) -> None:
        """Recompute fitness_value from local data."""

    def copy(self) -> "Chromosome":
        """
        Clone this chromosome.

        Returns:
            New chromosome with independent local data and the same shared data
        """
        clone = copy.copy(self)
        clone.local_data = copy.deepcopy(self.local_data)
        return clone

    def release(self) -> None:
        """Called once by the owning slot when this instance is released."""
        self.shared_data = None

    def __lt__(self, other: "Chromosome") -> bool:
        return self.fitness_value < other.fitness_value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Chromosome):
            return NotImplemented
        return self.local_data == other.local_data

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, Chromosome):
            return NotImplemented
        return self.local_data != other.local_data

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.local_data!r}, fitness={self.fitness_value:.4f})"


@dataclass
class GenerationRecord:
    """
    Summary of one breeding cycle.

    Fitness statistics describe the evaluated parent generation; counts
    describe what was scheduled for the generation bred from it.

    Attributes:
        generation: Index of the parent generation
        best_fitness: Highest fitness in the parent generation
        mean_fitness: Mean fitness
        worst_fitness: Lowest fitness
        std_fitness: Standard deviation of fitness
        elites: Number of elite slots promoted
        selections: Number of successful roulette selections
        skipped: Number of selections that yielded no individual
        mutations: Number of mutations scheduled
        crossovers: Number of crossovers scheduled
    """
    generation: int
    best_fitness: float
    mean_fitness: float
    worst_fitness: float
    std_fitness: float
    elites: int = 0
    selections: int = 0
    skipped: int = 0
    mutations: int = 0
    crossovers: int = 0

    def to_dict(self) -> dict[str, Any]:
        """
        Convert record to dictionary for CSV export.

        Returns:
            Dictionary keyed by field name
        """
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GenerationRecord":
        """
        Create record from dictionary (e.g., from CSV).

        Args:
            data: Dictionary with string or numeric values

        Returns:
            GenerationRecord instance
        """
        return cls(
            generation=int(data['generation']),
            best_fitness=float(data['best_fitness']),
            mean_fitness=float(data['mean_fitness']),
            worst_fitness=float(data['worst_fitness']),
            std_fitness=float(data['std_fitness']),
            elites=int(data.get('elites', 0)),
            selections=int(data.get('selections', 0)),
            skipped=int(data.get('skipped', 0)),
            mutations=int(data.get('mutations', 0)),
            crossovers=int(data.get('crossovers', 0)),
        )
