"""
Tests for the chromosome ownership slot.
"""

import unittest

from ga_core.wrapper import ChromosomeSlot
from chromosomes import RealLocalData, RealSharedData, ScalarChromosome


class CountingChromosome(ScalarChromosome):
    """Scalar chromosome that counts how often it is released."""

    def __init__(self):
        super().__init__()
        self.releases = 0

    def release(self):
        self.releases += 1
        super().release()


def make_counting(x):
    chromosome = CountingChromosome()
    chromosome.initialize(RealSharedData(), RealLocalData(x))
    chromosome.fitness()
    return chromosome


class TestOwnership(unittest.TestCase):
    """Test assign/release semantics."""

    def test_new_slot_is_empty(self):
        self.assertTrue(ChromosomeSlot().is_empty)

    def test_reassign_releases_previous_once(self):
        first = make_counting(1.0)
        second = make_counting(2.0)
        slot = ChromosomeSlot()

        slot.assign(first)
        slot.assign(second)

        self.assertEqual(first.releases, 1)
        self.assertEqual(second.releases, 0)
        self.assertIs(slot.obj, second)

    def test_assign_same_object_does_not_release(self):
        chromosome = make_counting(1.0)
        slot = ChromosomeSlot(chromosome)

        slot.assign(chromosome)

        self.assertEqual(chromosome.releases, 0)
        self.assertIs(slot.obj, chromosome)

    def test_assign_none_empties_slot(self):
        chromosome = make_counting(1.0)
        slot = ChromosomeSlot(chromosome)

        slot.assign(None)

        self.assertTrue(slot.is_empty)
        self.assertEqual(chromosome.releases, 1)

    def test_release_is_idempotent(self):
        chromosome = make_counting(1.0)
        slot = ChromosomeSlot(chromosome)

        slot.release()
        slot.release()

        self.assertTrue(slot.is_empty)
        self.assertEqual(chromosome.releases, 1)
        self.assertIsNone(chromosome.shared_data)


class TestDelegation(unittest.TestCase):
    """Test attribute and method delegation."""

    def test_attribute_access(self):
        slot = ChromosomeSlot(make_counting(3.0))
        self.assertEqual(slot.local_data.x, 3.0)
        self.assertEqual(slot.fitness_value, 3.0)

    def test_method_call_reaches_chromosome(self):
        chromosome = make_counting(3.0)
        slot = ChromosomeSlot(chromosome)

        chromosome.local_data.x = 5.0
        slot.fitness()

        self.assertEqual(chromosome.fitness_value, 5.0)

    def test_empty_slot_attribute_error(self):
        with self.assertRaises(AttributeError):
            ChromosomeSlot().fitness_value


class TestComparisons(unittest.TestCase):
    """Test slot comparisons."""

    def test_ordering_delegates_to_fitness(self):
        low = ChromosomeSlot(make_counting(1.0))
        high = ChromosomeSlot(make_counting(2.0))

        self.assertTrue(low < high)
        self.assertFalse(high < low)

    def test_sorting_moves_slots(self):
        slots = [ChromosomeSlot(make_counting(x)) for x in (3.0, 1.0, 2.0)]
        ordered = sorted(slots)
        self.assertEqual([s.local_data.x for s in ordered], [1.0, 2.0, 3.0])

    def test_equality_delegates_to_local_data(self):
        a = ChromosomeSlot(make_counting(1.0))
        b = ChromosomeSlot(make_counting(1.0))
        c = ChromosomeSlot(make_counting(2.0))

        self.assertTrue(a == b)
        self.assertFalse(a != b)
        self.assertFalse(a == c)
        self.assertTrue(a != c)

    def test_empty_side_comparisons(self):
        empty = ChromosomeSlot()
        full = ChromosomeSlot(make_counting(1.0))

        for left, right in ((empty, full), (full, empty), (empty, ChromosomeSlot())):
            self.assertFalse(left < right)
            self.assertFalse(left == right)
            self.assertTrue(left != right)

    def test_unhashable(self):
        with self.assertRaises(TypeError):
            hash(ChromosomeSlot())


if __name__ == '__main__':
    unittest.main()
