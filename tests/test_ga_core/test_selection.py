"""
Tests for roulette selection.
"""

import unittest
import numpy as np

from ga_core.selection import selection_probabilities, selection_weight, weighted_selection
from ga_core.wrapper import ChromosomeSlot
from chromosomes import RealLocalData, RealSharedData, ScalarChromosome


def make_slots(values):
    shared = RealSharedData()
    slots = []
    for value in values:
        chromosome = ScalarChromosome()
        chromosome.initialize(shared, RealLocalData(value))
        chromosome.fitness()
        slots.append(ChromosomeSlot(chromosome))
    return slots


def reset(slots):
    for slot in slots:
        slot.local_data.reset_flags()


class TestSelectionWeight(unittest.TestCase):
    """Test individual weights."""

    def test_positive_fitness_is_weight(self):
        self.assertEqual(selection_weight(make_slots([2.5])[0]), 2.5)

    def test_zero_weight_cases(self):
        slots = make_slots([0.0, -1.0, float('nan'), 3.0, 3.0])
        slots[3].local_data.chosen = True
        slots[4].local_data.elite = True

        for slot in slots:
            self.assertEqual(selection_weight(slot), 0.0)
        self.assertEqual(selection_weight(ChromosomeSlot()), 0.0)

    def test_probabilities(self):
        slots = make_slots([1.0, 3.0])
        self.assertEqual(selection_probabilities(slots), [0.25, 0.75])

        slots[1].local_data.chosen = True
        self.assertEqual(selection_probabilities(slots), [1.0, 0.0])

    def test_probabilities_degenerate_window(self):
        self.assertEqual(selection_probabilities(make_slots([0.0, -2.0])), [0.0, 0.0])


class TestWeightedSelection(unittest.TestCase):
    """Test weighted_selection()."""

    def setUp(self):
        self.rng = np.random.default_rng(0)

    def test_zero_total_returns_none(self):
        self.assertIsNone(weighted_selection(make_slots([0.0, 0.0, 0.0]), self.rng))
        self.assertIsNone(weighted_selection(make_slots([-1.0, -3.0]), self.rng))

    def test_empty_window_returns_none(self):
        self.assertIsNone(weighted_selection([], self.rng))

    def test_winner_marked_chosen(self):
        slots = make_slots([1.0, 2.0, 3.0])
        index = weighted_selection(slots, self.rng)

        self.assertIn(index, (0, 1, 2))
        self.assertTrue(slots[index].local_data.chosen)
        self.assertEqual(sum(s.local_data.chosen for s in slots), 1)

    def test_flagged_individuals_never_picked(self):
        slots = make_slots([5.0, 1.0, 5.0])
        for _ in range(50):
            reset(slots)
            slots[0].local_data.chosen = True
            slots[2].local_data.elite = True
            self.assertEqual(weighted_selection(slots, self.rng), 1)

    def test_each_individual_picked_once_per_cycle(self):
        slots = make_slots([1.0, 4.0, 2.0])
        picks = [weighted_selection(slots, self.rng) for _ in range(3)]

        self.assertEqual(sorted(picks), [0, 1, 2])
        self.assertIsNone(weighted_selection(slots, self.rng))

    def test_non_positive_fitness_never_picked(self):
        slots = make_slots([-4.0, 0.0, 2.0])
        for _ in range(20):
            reset(slots)
            self.assertEqual(weighted_selection(slots, self.rng), 2)

    def test_equal_weights_roughly_uniform(self):
        slots = make_slots([1.0, 1.0, 1.0, 1.0])
        counts = [0, 0, 0, 0]
        trials = 4000

        for _ in range(trials):
            reset(slots)
            counts[weighted_selection(slots, self.rng)] += 1

        for count in counts:
            self.assertGreater(count, 850)
            self.assertLess(count, 1150)

    def test_proportional_to_fitness(self):
        slots = make_slots([1.0, 3.0])
        counts = [0, 0]

        for _ in range(4000):
            reset(slots)
            counts[weighted_selection(slots, self.rng)] += 1

        self.assertAlmostEqual(counts[1] / 4000, 0.75, delta=0.04)


if __name__ == '__main__':
    unittest.main()
