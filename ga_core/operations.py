"""
Deferred operations for the GA core.

Mutations and crossovers are scheduled while the next generation is being
populated and applied only once every slot has been assigned. Draining in
enqueue order applies a crossover before any mutation scheduled on its
children.
"""

from collections import deque
from dataclasses import dataclass
from typing import Iterator, Union

from .population import GenerationBuffer


@dataclass(frozen=True)
class MutateOp:
    """Mutate the chromosome held by one buffer slot."""
    slot: int

    def apply(self, buffer: GenerationBuffer) -> None:
        buffer.chromosome(self.slot).mutate()


@dataclass(frozen=True)
class CrossoverOp:
    """
    Recombine two parents into two children.

    Attributes:
        parent_a: Buffer index of the first parent
        parent_b: Buffer index of the second parent
        child_a: Buffer index of the first child
        child_b: Buffer index of the second child
    """
    parent_a: int
    parent_b: int
    child_a: int
    child_b: int

    def apply(self, buffer: GenerationBuffer) -> None:
        buffer.chromosome(self.parent_a).crossover(
            buffer.chromosome(self.parent_b),
            buffer.chromosome(self.child_a),
            buffer.chromosome(self.child_b),
        )


Operation = Union[MutateOp, CrossoverOp]


class OperationQueue:
    """FIFO of deferred operations."""

    def __init__(self):
        self._operations: deque = deque()

    def push(self, operation: Operation) -> None:
        self._operations.append(operation)

    def drain(self, buffer: GenerationBuffer) -> int:
        """
        Apply every queued operation in enqueue order, emptying the queue.

        Args:
            buffer: Buffer the operations' slot indices refer to

        Returns:
            Number of operations applied
        """
        applied = 0
        while self._operations:
            self._operations.popleft().apply(buffer)
            applied += 1
        return applied

    def clear(self) -> None:
        self._operations.clear()

    def __len__(self) -> int:
        return len(self._operations)

    def __iter__(self) -> Iterator[Operation]:
        return iter(self._operations)
