"""
Fitness-proportional (roulette) selection.

An individual's weight is its fitness value. Individuals already chosen in
the current cycle, elite survivors, empty slots and non-positive fitness
values carry no weight and can never be picked.
"""

from typing import List, Optional, Sequence

import numpy as np

from .wrapper import ChromosomeSlot


def selection_weight(slot: ChromosomeSlot) -> float:
    """
    Roulette weight of one slot.

    Args:
        slot: Slot of the current generation

    Returns:
        Fitness value, or 0.0 if the individual cannot be picked
    """
    if slot.is_empty:
        return 0.0

    local_data = slot.local_data
    if local_data.chosen or local_data.elite:
        return 0.0

    value = float(slot.fitness_value)
    # Also catches NaN
    if not value > 0.0:
        return 0.0
    return value


def selection_probabilities(slots: Sequence[ChromosomeSlot]) -> List[float]:
    """
    Probability of each slot being picked by the next draw.

    Args:
        slots: Slots of the current generation

    Returns:
        List of probabilities (all zero for a degenerate window)
    """
    weights = np.array([selection_weight(slot) for slot in slots], dtype=float)
    total = weights.sum()
    if total <= 0.0:
        return [0.0] * len(slots)
    return (weights / total).tolist()


def weighted_selection(
    slots: Sequence[ChromosomeSlot],
    rng: np.random.Generator
) -> Optional[int]:
    """
    Pick one individual with probability proportional to its fitness.

    Builds the prefix sum of weights, draws a uniform value scaled by the
    total and returns the first individual whose cumulative weight exceeds
    the draw. The winner is marked as chosen.

    Args:
        slots: Slots of the current generation
        rng: Random number generator

    Returns:
        Index of the winner within ``slots``, or None if the weights sum to
        zero or no individual exceeds the draw
    """
    if not slots:
        return None

    cumulative = np.cumsum([selection_weight(slot) for slot in slots], dtype=float)
    total = cumulative[-1]
    if total <= 0.0:
        return None

    draw = rng.random() * total
    index = int(np.searchsorted(cumulative, draw, side='right'))
    if index >= len(slots):
        return None

    slots[index].local_data.chosen = True
    return index
