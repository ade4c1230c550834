"""Tests for split, join and concat."""

import random
import unittest

from tqdm import tqdm

from avl_sets.base import MISSING, compare
from avl_sets.bulk_create import of_iterable
from avl_sets.navigation import iter_ascending
from avl_sets.split_join import concat, join, split, split_found, split_le, split_lt, split_opt
from tests.test_base import BaseTestCase


def elems(t):
    return list(iter_ascending(t))


class TestSplit(BaseTestCase):

    def setUp(self):
        self.xs = list(range(0, 40, 2))
        self.t = of_iterable(compare, self.xs)

    def test_split_present(self):
        l, present, r = split(compare, 10, self.t)
        self.assertTrue(present)
        self.validate_tree(l, exp_elements=[x for x in self.xs if x < 10])
        self.validate_tree(r, exp_elements=[x for x in self.xs if x > 10])

    def test_split_absent(self):
        l, present, r = split(compare, 11, self.t)
        self.assertFalse(present)
        self.validate_tree(l, exp_elements=[x for x in self.xs if x < 11])
        self.validate_tree(r, exp_elements=[x for x in self.xs if x > 11])

    def test_split_empty(self):
        self.assertEqual(split(compare, 1, None), (None, False, None))
        self.assertEqual(split_found(compare, 1, None), (None, MISSING, None))

    def test_split_beyond_bounds(self):
        l, present, r = split(compare, -5, self.t)
        self.assertIsNone(l)
        self.assertFalse(present)
        self.assertEqual(elems(r), self.xs)
        l, present, r = split(compare, 100, self.t)
        self.assertEqual(elems(l), self.xs)
        self.assertIsNone(r)

    def test_split_opt_returns_stored_element(self):
        t = of_iterable(lambda a, b: compare(a[0], b[0]), [(1, "x"), (2, "y")])
        _, found, _ = split_opt(lambda a, b: compare(a[0], b[0]), (2, None), t)
        self.assertEqual(found, (2, "y"))
        _, found, _ = split_opt(compare, 3, self.t)
        self.assertIsNone(found)

    def test_split_lt_and_le(self):
        l, r = split_lt(compare, 10, self.t)
        self.validate_tree(l, exp_elements=[x for x in self.xs if x < 10])
        self.validate_tree(r, exp_elements=[x for x in self.xs if x >= 10])
        l, r = split_le(compare, 10, self.t)
        self.validate_tree(l, exp_elements=[x for x in self.xs if x <= 10])
        self.validate_tree(r, exp_elements=[x for x in self.xs if x > 10])


class TestJoin(BaseTestCase):

    def test_join_balanced_inputs(self):
        l = of_iterable(compare, [1, 2, 3])
        r = of_iterable(compare, [5, 6, 7])
        self.validate_tree(join(l, 4, r), exp_elements=[1, 2, 3, 4, 5, 6, 7])

    def test_join_very_different_heights(self):
        l = of_iterable(compare, range(1000))
        r = of_iterable(compare, [2000])
        t = join(l, 1500, r)
        self.validate_tree(t, exp_elements=list(range(1000)) + [1500, 2000])
        t = join(None, -1, l)
        self.validate_tree(t, exp_elements=[-1] + list(range(1000)))
        t = join(of_iterable(compare, [-10, -5]), -1, l)
        self.validate_tree(t, exp_elements=[-10, -5, -1] + list(range(1000)))

    def test_join_with_empty_sides(self):
        self.validate_tree(join(None, 1, None), exp_elements=[1])

    def test_concat(self):
        l = of_iterable(compare, range(10))
        r = of_iterable(compare, range(10, 300))
        self.validate_tree(concat(l, r), exp_elements=list(range(300)))
        self.assertIs(concat(l, None), l)
        self.assertIs(concat(None, r), r)
        self.assertIsNone(concat(None, None))


class TestSplitJoinRoundTrip(BaseTestCase):

    def test_split_then_join_restores_elements(self):
        rng = random.Random(7)
        for run_idx in tqdm(range(150), desc="Split/join round trips", unit="trial"):
            with self.subTest(run=run_idx):
                xs = sorted(set(rng.randint(0, 300) for _ in range(rng.randint(0, 120))))
                t = of_iterable(compare, xs)
                key = rng.randint(-5, 305)
                l, found, r = split_found(compare, key, t)
                self.validate_tree(l, exp_elements=[x for x in xs if x < key])
                self.validate_tree(r, exp_elements=[x for x in xs if x > key])
                rebuilt = concat(l, r) if found is MISSING else join(l, found, r)
                self.validate_tree(rebuilt, exp_elements=xs)


if __name__ == "__main__":
    unittest.main()
