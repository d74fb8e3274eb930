"""
Breeding engine for the GA core.

GeneticAlgorithm owns the generation ring buffer and the shared data, and
produces each generation from the previous one through fitness refresh,
elitism, roulette selection and deferred mutation/crossover.
"""

import logging
from typing import Any, Callable, List, Optional, Type, Union

import numpy as np

from .data_models import (
    BasicLocalData,
    BasicSharedData,
    Chromosome,
    ConfigurationError,
    GenerationRecord,
)
from .operations import CrossoverOp, MutateOp, OperationQueue
from .population import GenerationBuffer, GenerationView
from .selection import weighted_selection

logger = logging.getLogger(__name__)

LocalSource = Union[None, BasicLocalData, Callable[[], BasicLocalData]]


class GeneticAlgorithm:
    """
    Generational genetic algorithm over an abstract chromosome type.

    By default two generations are stored, so the next one is written while
    the current one is still readable. More can be stored to keep older
    generations around (see previous_generation()).

    Attributes:
        chromosome_type: Chromosome subclass instantiated for every slot
        population: Individuals per generation
        stored_generations: Generation windows kept in the ring buffer
        generation: Index of the current generation
        shared_data: Shared parameters read by every chromosome
        rng: Random number generator for selection and operator scheduling
        history: One GenerationRecord per breeding cycle
    """

    def __init__(
        self,
        chromosome_type: Type[Chromosome],
        population: int,
        stored_generations: int = 2,
        shared_type: Optional[Type[BasicSharedData]] = None,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
        record_history: bool = True
    ):
        """
        Allocate the population buffer and shared data.

        Args:
            chromosome_type: Chromosome subclass to instantiate
            population: Individuals per generation
            stored_generations: Generation windows to keep (at least 2 to breed)
            shared_type: Shared data class, instantiated once (defaults to
                the chromosome type's shared_type)
            rng: Random number generator (takes precedence over seed)
            seed: Seed for a new generator when rng is not given
            record_history: Keep a GenerationRecord per breeding cycle

        Raises:
            ConfigurationError: If population or stored_generations is not positive
        """
        self.chromosome_type = chromosome_type
        self.buffer = GenerationBuffer(population, stored_generations)
        self.population = population
        self.stored_generations = stored_generations
        self.generation = 0
        if shared_type is None:
            shared_type = chromosome_type.shared_type
        self.shared_data = shared_type()
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.operations = OperationQueue()
        self.record_history = record_history
        self.history: List[GenerationRecord] = []

    def initialize(self, local: LocalSource = None) -> None:
        """
        Fill every stored generation with fresh chromosomes.

        Args:
            local: Initial local data. None uses the chromosome's default
                local type, a record is copied into every individual, and a
                zero-argument callable is invoked once per individual.
        """
        self.generation = 0
        self.history = []
        self.operations.clear()

        for slot in self.buffer:
            chromosome = self.chromosome_type()
            chromosome.initialize(self.shared_data, self._resolve_local(local))
            slot.assign(chromosome)

    def initialize_one(self, index: int, local: BasicLocalData) -> None:
        """
        Reinitialize one individual of the current generation.

        Out-of-range indices are ignored.

        Args:
            index: Position within the current generation
            local: Local data to copy into the individual
        """
        if not 0 <= index < self.population:
            return

        slot = self.buffer[self.buffer.origin(self.generation) + index]
        if slot.is_empty:
            slot.assign(self.chromosome_type())
        slot.initialize(self.shared_data, local)

    def _resolve_local(self, local: LocalSource) -> BasicLocalData:
        if local is None:
            return self.chromosome_type.local_type()
        if isinstance(local, BasicLocalData):
            return local
        return local()

    def get_shared_data(self) -> BasicSharedData:
        return self.shared_data

    def current_generation(self) -> GenerationView:
        """
        Read-only view of the current generation.

        Returns:
            GenerationView over the current window
        """
        return GenerationView(self.buffer.window(self.generation), self.generation)

    def previous_generation(self, age: int) -> GenerationView:
        """
        Read-only view of an older stored generation.

        Args:
            age: How many generations back (0 is the current one)

        Returns:
            GenerationView over that generation's window

        Raises:
            ValueError: If the generation is not stored
        """
        if not 0 <= age < self.stored_generations or age > self.generation:
            raise ValueError(
                f"Generation {self.generation - age} is not stored "
                f"(current: {self.generation}, stored: {self.stored_generations})"
            )
        generation = self.generation - age
        return GenerationView(self.buffer.window(generation), generation)

    def weighted_selection(self) -> Optional[int]:
        """
        Roulette selection over the current generation.

        Returns:
            Position of the winner within the current generation, or None
        """
        return weighted_selection(self.buffer.window(self.generation), self.rng)

    def _check_initialized(self) -> None:
        empty = sum(1 for slot in self.buffer if slot.is_empty)
        if empty:
            raise ConfigurationError(
                f"Population not initialized: {empty} of {len(self.buffer)} slots are empty "
                f"(call initialize() first)"
            )

    def _refresh_fitness(self, generation: int) -> None:
        for slot in self.buffer.window(generation):
            slot.fitness()

    def _make_record(self, elites: int) -> GenerationRecord:
        values = np.array(self.current_generation().fitness_values(), dtype=float)
        return GenerationRecord(
            generation=self.generation,
            best_fitness=float(values.max()),
            mean_fitness=float(values.mean()),
            worst_fitness=float(values.min()),
            std_fitness=float(values.std()),
            elites=elites,
        )

    def breed_population(self) -> Optional[GenerationRecord]:
        """
        Produce the next generation from the current one.

        Fitness is refreshed and the current generation sorted. The top
        ``elite`` individuals are copied unmutated, in pairs, into the next
        generation; each pair also seeds one crossover whose children take the
        two slots right after it. The remaining slots are filled by roulette
        selection, with mutations and crossovers scheduled at the configured
        rates. Scheduled operations run once every slot has been assigned.

        Returns:
            Record of this cycle (None if history recording is off)

        Raises:
            ConfigurationError: If shared data is invalid or fewer than two
                generations are stored, or if any slot is still empty
        """
        if self.stored_generations < 2:
            raise ConfigurationError("Breeding requires at least two stored generations")
        self._check_initialized()
        self.shared_data.validate(self.population)

        shared = self.shared_data
        buffer = self.buffer
        origin = buffer.origin(self.generation)
        final = origin + self.population
        next_origin = buffer.origin(self.generation + 1)

        for slot in buffer.window(self.generation):
            slot.fitness()
            slot.local_data.reset_flags()
        buffer.sort_window(self.generation)

        # Skipped slots and crossover children keep their previous occupant
        for slot in buffer.window(self.generation + 1):
            slot.local_data.reset_flags()

        record = self._make_record(elites=shared.elite)

        for i in range(0, shared.elite, 2):
            for k in (0, 1):
                source = buffer.chromosome(final - shared.elite + i + k)
                source.local_data.elite = True
                buffer[next_origin + 2 * i + k].assign(source.copy())

            record.crossovers += 1
            self.operations.push(CrossoverOp(
                next_origin + 2 * i,
                next_origin + 2 * i + 1,
                next_origin + 2 * i + 2,
                next_origin + 2 * i + 3,
            ))

        cursor = next_origin + 2 * shared.elite
        remaining = self.population - 2 * shared.elite
        parent = None

        i = 0
        while i < remaining:
            picked = self.weighted_selection()
            if picked is None:
                record.skipped += 1
                i += 1
                continue

            chosen = origin + picked
            record.selections += 1
            buffer[cursor].assign(buffer.chromosome(chosen).copy())
            if self.rng.random() < shared.mutation_rate:
                record.mutations += 1
                self.operations.push(MutateOp(cursor))

            if self.rng.random() < shared.parent_rate and i + 2 < remaining:
                if parent is not None:
                    record.crossovers += 1
                    self.operations.push(CrossoverOp(parent, chosen, cursor + 1, cursor + 2))

                    for child in (cursor + 1, cursor + 2):
                        if self.rng.random() < shared.mutation_rate:
                            record.mutations += 1
                            self.operations.push(MutateOp(child))

                    parent = None
                    cursor += 2
                    i += 2
                else:
                    parent = chosen

            cursor += 1
            i += 1

        self.operations.drain(buffer)

        logger.debug(
            "Generation %d: best=%.4f mean=%.4f selected=%d skipped=%d mutations=%d crossovers=%d",
            record.generation, record.best_fitness, record.mean_fitness,
            record.selections, record.skipped, record.mutations, record.crossovers
        )

        self.generation += 1

        if not self.record_history:
            return None
        self.history.append(record)
        return record

    def simulate(
        self,
        cycles: int,
        callback: Optional[Callable[[int, Optional[GenerationRecord]], Any]] = None
    ) -> None:
        """
        Run breed_population() ``cycles`` times, then sort the result.

        Fitness of the final generation is re-evaluated before sorting, so
        the last individual of current_generation() is the best one.

        Args:
            cycles: Number of breeding cycles
            callback: Called with (generation, record) after each cycle

        Raises:
            ValueError: If cycles is negative
            ConfigurationError: If any slot of the population is still empty
        """
        if cycles < 0:
            raise ValueError(f"Cycle count must be non-negative, got: {cycles}")
        self._check_initialized()

        for _ in range(cycles):
            record = self.breed_population()
            if callback:
                callback(self.generation, record)

        self._refresh_fitness(self.generation)
        self.buffer.sort_window(self.generation)

    def close(self) -> None:
        """Release every chromosome held by the buffer."""
        self.operations.clear()
        self.buffer.release_all()

    def __enter__(self) -> "GeneticAlgorithm":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
