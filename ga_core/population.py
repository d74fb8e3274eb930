"""
Generation storage for the GA core.

The population buffer is a ring of ``stored_generations`` contiguous windows
of ``population`` slots. Generation ``g`` lives in window
``g % stored_generations``; with two or more stored generations the current
and next windows never overlap.
"""

from collections.abc import Sequence
from typing import Iterator, List

from .data_models import Chromosome, ConfigurationError
from .wrapper import ChromosomeSlot


class GenerationBuffer:
    """
    Ring buffer of generation windows.

    Attributes:
        population: Slots per generation window
        stored_generations: Number of windows in the ring
    """

    def __init__(self, population: int, stored_generations: int = 2):
        if population < 1:
            raise ConfigurationError(f"Population must be positive, got: {population}")
        if stored_generations < 1:
            raise ConfigurationError(
                f"Stored generations must be positive, got: {stored_generations}"
            )

        self.population = population
        self.stored_generations = stored_generations
        self._slots = [ChromosomeSlot() for _ in range(population * stored_generations)]

    def origin(self, generation: int) -> int:
        """
        Absolute index of the first slot of a generation's window.

        Args:
            generation: Generation index

        Returns:
            Index into the buffer
        """
        return generation % self.stored_generations * self.population

    def window(self, generation: int) -> List[ChromosomeSlot]:
        """
        Slots of a generation's window, in buffer order.

        Args:
            generation: Generation index

        Returns:
            New list holding the window's slots
        """
        start = self.origin(generation)
        return self._slots[start:start + self.population]

    def sort_window(self, generation: int) -> None:
        """Sort a generation's window ascending by fitness."""
        start = self.origin(generation)
        end = start + self.population
        self._slots[start:end] = sorted(self._slots[start:end])

    def chromosome(self, index: int) -> Chromosome:
        return self._slots[index].obj

    def release_all(self) -> None:
        for slot in self._slots:
            slot.release()

    def __getitem__(self, index: int) -> ChromosomeSlot:
        return self._slots[index]

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[ChromosomeSlot]:
        return iter(self._slots)


class GenerationView(Sequence):
    """
    Read-only view over one generation window.

    Indexing yields the chromosomes themselves, so callers can read
    ``fitness_value`` and ``local_data`` of each individual.
    """

    def __init__(self, slots: List[ChromosomeSlot], generation: int):
        self._slots = slots
        self.generation = generation

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [slot.obj for slot in self._slots[index]]
        return self._slots[index].obj

    def __len__(self) -> int:
        return len(self._slots)

    def best(self) -> Chromosome:
        """
        Highest-fitness individual of a sorted window.

        Returns:
            Last chromosome of the window
        """
        return self._slots[-1].obj

    def fitness_values(self) -> List[float]:
        return [slot.fitness_value for slot in self._slots]

    def __repr__(self) -> str:
        return f"GenerationView(generation={self.generation}, size={len(self)})"
