"""
Ownership slot for chromosomes.

A slot owns at most one chromosome. Sorting a list of slots moves the slots
around instead of copying the chromosomes they hold.
"""

from typing import Optional

from .data_models import Chromosome


class ChromosomeSlot:
    """
    Exclusive owner of a single chromosome instance.

    Attribute access is delegated to the owned chromosome, so
    ``slot.fitness_value`` or ``slot.mutate()`` reach it directly.
    Comparisons delegate too; on an empty slot less-than and equality are
    False and inequality is True.
    """

    __slots__ = ('obj',)

    def __init__(self, obj: Optional[Chromosome] = None):
        self.obj = obj

    @property
    def is_empty(self) -> bool:
        return self.obj is None

    def assign(self, chromosome: Optional[Chromosome]) -> "ChromosomeSlot":
        """
        Take ownership of a chromosome, releasing the current occupant first.

        Args:
            chromosome: New occupant (None empties the slot)

        Returns:
            This slot
        """
        if chromosome is self.obj:
            return self
        self.release()
        self.obj = chromosome
        return self

    def release(self) -> None:
        """Release the owned chromosome, if any, and leave the slot empty."""
        if self.obj is not None:
            obj, self.obj = self.obj, None
            obj.release()

    def __getattr__(self, name):
        # Only reached for names the slot itself does not define
        if name == 'obj':
            raise AttributeError(name)
        if self.obj is None:
            raise AttributeError(f"Empty slot has no attribute '{name}'")
        return getattr(self.obj, name)

    def __lt__(self, other: "ChromosomeSlot") -> bool:
        if self.obj is None or other.obj is None:
            return False
        return self.obj < other.obj

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChromosomeSlot):
            return NotImplemented
        if self.obj is None or other.obj is None:
            return False
        return self.obj == other.obj

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, ChromosomeSlot):
            return NotImplemented
        if self.obj is None or other.obj is None:
            return True
        return self.obj != other.obj

    __hash__ = None

    def __repr__(self) -> str:
        return f"ChromosomeSlot({self.obj!r})"
