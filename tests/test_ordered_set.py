"""Tests for the class-level comparator strategy (OrderedSet and the factory)."""

import io
import math
import unittest

import numpy as np
from tqdm import tqdm

from avl_sets import (
    BytesSet,
    FloatSet,
    IntSet,
    InvalidArgument,
    IStrSet,
    NotFound,
    NumStrSet,
    OrderedSet,
    StrSet,
    SubsetRelation,
    make_product_class,
    make_set_class,
)
from avl_sets.factory import compare_int, compare_numstr
from avl_sets.set_base import OrderedSetBase
from tests.test_base import RandomizedTestCase, SetTestCase


class TestConstruction(SetTestCase):

    def test_empty(self):
        self.assertTrue(self.set.is_empty())
        self.assertEqual(len(self.set), 0)
        self.assertFalse(self.set)
        self.assertEqual(self.set.elements(), [])

    def test_singleton(self):
        s = self.track(IntSet.singleton(4))
        self.assertElements(s, [4])

    def test_of_list_sorts_and_deduplicates(self):
        s = self.make([5, 1, 3, 1, 5])
        self.assertElements(s, [1, 3, 5])

    def test_of_array_from_numpy(self):
        s = self.track(IntSet.of_array(np.array([3, 1, 2, 3])))
        self.assertElements(s, [1, 2, 3])
        self.assertIs(type(s.min_elt()), int)

    def test_of_seq_and_of_enum(self):
        s = self.track(IntSet.of_seq(x * x for x in range(4)))
        self.assertElements(s, [0, 1, 4, 9])
        self.assertTrue(IntSet.of_enum(s.to_seq()).equal(s))

    def test_abstract_base_cannot_be_instantiated(self):
        with self.assertRaises(TypeError):
            OrderedSet()

    def test_set_base_requires_strategy_hooks(self):
        with self.assertRaises(TypeError):
            OrderedSetBase()

        class NoHooks(OrderedSetBase):
            __slots__ = ()

            def _cmp(self):
                return compare_int

        with self.assertRaises(TypeError):
            NoHooks()


class TestMembershipAndUpdates(SetTestCase):

    def setUp(self):
        super().setUp()
        self.set = IntSet.of_list([10, 20, 30])

    def test_mem_and_contains(self):
        self.assertTrue(self.set.mem(20))
        self.assertIn(30, self.set)
        self.assertNotIn(25, self.set)

    def test_add_and_remove(self):
        s = self.track(self.set.add(25))
        self.assertElements(s, [10, 20, 25, 30])
        self.assertElements(self.track(s.remove(10)), [20, 25, 30])
        # persistence
        self.assertElements(self.set, [10, 20, 30])

    def test_noop_updates_return_self(self):
        self.assertIs(self.set.add(20), self.set)
        self.assertIs(self.set.remove(99), self.set)

    def test_remove_exn(self):
        self.assertElements(self.track(self.set.remove_exn(10)), [20, 30])
        with self.assertRaises(NotFound):
            self.set.remove_exn(99)

    def test_update(self):
        self.assertElements(self.track(self.set.update(20, 21)), [10, 21, 30])
        with self.assertRaises(NotFound):
            self.set.update(99, 100)

    def test_add_seq(self):
        self.assertElements(self.track(self.set.add_seq([5, 20, 35])), [5, 10, 20, 30, 35])

    def test_find(self):
        self.assertEqual(self.set.find(20), 20)
        with self.assertRaises(NotFound):
            self.set.find(21)
        self.assertIsNone(self.set.find_opt(21))

    def test_find_first_and_last(self):
        self.assertEqual(self.set.find_first(lambda x: x > 15), 20)
        self.assertIsNone(self.set.find_first_opt(lambda x: x > 30))
        self.assertEqual(self.set.find_last(lambda x: x < 25), 20)
        self.assertIsNone(self.set.find_last_opt(lambda x: x < 10))


class TestSetAlgebra(SetTestCase):
    """s = {1, 3, 5}, t = {3, 4, 5}"""

    def setUp(self):
        super().setUp()
        self.s = self.make([1, 3, 5])
        self.t = self.make([3, 4, 5])

    def test_methods(self):
        self.assertElements(self.track(self.s.union(self.t)), [1, 3, 4, 5])
        self.assertElements(self.track(self.s.inter(self.t)), [3, 5])
        self.assertElements(self.track(self.s.intersect(self.t)), [3, 5])
        self.assertElements(self.track(self.s.diff(self.t)), [1])
        self.assertElements(self.track(self.s.sym_diff(self.t)), [1, 4])

    def test_operators(self):
        self.assertElements(self.s | self.t, [1, 3, 4, 5])
        self.assertElements(self.s & self.t, [3, 5])
        self.assertElements(self.s - self.t, [1])
        self.assertElements(self.s ^ self.t, [1, 4])

    def test_predicates(self):
        self.assertFalse(self.s.subset(self.t))
        self.assertFalse(self.s.disjoint(self.t))
        self.assertEqual(self.s.compare_subset(self.t), SubsetRelation.INCOMPARABLE)
        self.assertEqual((self.s & self.t).compare_subset(self.s), SubsetRelation.PROPER_SUBSET)
        self.assertEqual(self.s.compare(self.t), -1)
        self.assertFalse(self.s.equal(self.t))

    def test_equality_and_hash(self):
        other = self.make([5, 3, 1])
        self.assertEqual(self.s, other)
        self.assertEqual(hash(self.s), hash(other))
        self.assertNotEqual(self.s, self.t)
        self.assertNotEqual(self.s, StrSet.of_list(["a"]))
        self.assertNotEqual(self.s, {1, 3, 5})

    def test_incompatible_classes_raise(self):
        strings = StrSet.of_list(["a", "b"])
        with self.assertRaises(TypeError):
            self.s.union(strings)
        with self.assertRaises(TypeError):
            self.s.subset(strings)
        with self.assertRaises(TypeError):
            self.s.union([1, 2])

    def test_union_shares_unchanged_operand(self):
        big = self.make(range(100))
        self.assertIs(big.union(IntSet.singleton(7)), big)
        self.assertIs(big.inter(big), big)

    def test_sets_of_sets(self):
        SetOfIntSets = make_set_class(lambda a, b: a.compare(b), "SetOfIntSets")
        family = self.track(SetOfIntSets.of_list([self.t, self.s, self.make([3, 5, 1])]))
        self.assertEqual(family.cardinal(), 2)
        self.assertEqual(family.min_elt(), self.s)


class TestOrderStatistics(SetTestCase):

    def setUp(self):
        super().setUp()
        self.set = IntSet.of_list([7, 3, 9, 1])

    def test_extrema(self):
        self.assertEqual(self.set.min_elt(), 1)
        self.assertEqual(self.set.max_elt(), 9)
        self.assertIn(self.set.any(), [1, 3, 7, 9])

    def test_empty_extrema(self):
        e = IntSet.empty()
        for name in ("min_elt", "max_elt", "choose", "any", "pop", "pop_min", "pop_max"):
            with self.subTest(op=name):
                with self.assertRaises(NotFound):
                    getattr(e, name)()
        self.assertIsNone(e.min_elt_opt())
        self.assertIsNone(e.max_elt_opt())
        self.assertIsNone(e.choose_opt())

    def test_choose_is_deterministic_for_equal_sets(self):
        a = IntSet.of_list(range(20))
        b = IntSet.empty()
        for x in reversed(range(20)):
            b = b.add(x)
        self.track(b)
        self.assertEqual(a, b)
        self.assertEqual(a.choose(), b.choose())

    def test_pop(self):
        x, rest = self.set.pop()
        self.assertEqual(x, self.set.choose())
        self.assertElements(self.track(rest), [3, 7, 9])
        m, rest = self.set.pop_max()
        self.assertEqual(m, 9)
        self.assertElements(self.track(rest), [1, 3, 7])

    def test_at_rank(self):
        self.assertEqual([self.set.at_rank_exn(i) for i in range(4)], [1, 3, 7, 9])
        with self.assertRaises(InvalidArgument):
            self.set.at_rank_exn(4)
        with self.assertRaises(NotFound):
            IntSet.empty().at_rank_exn(0)


class TestSplitAndJoin(SetTestCase):

    def setUp(self):
        super().setUp()
        self.set = IntSet.of_list(range(10))

    def test_split(self):
        l, present, r = self.set.split(4)
        self.assertTrue(present)
        self.assertElements(self.track(l), [0, 1, 2, 3])
        self.assertElements(self.track(r), [5, 6, 7, 8, 9])
        self.assertIsInstance(l, IntSet)

    def test_split_opt(self):
        _, found, _ = self.set.split_opt(4)
        self.assertEqual(found, 4)
        _, found, _ = self.set.split_opt(40)
        self.assertIsNone(found)

    def test_split_lt_le(self):
        l, r = self.set.split_lt(4)
        self.assertElements(l, [0, 1, 2, 3])
        self.assertEqual(r.min_elt(), 4)
        l, r = self.set.split_le(4)
        self.assertEqual(l.max_elt(), 4)
        self.assertEqual(r.min_elt(), 5)

    def test_join_is_inverse_of_split(self):
        l, present, r = self.set.split(4)
        self.assertEqual(self.track(l.join(r, 4)), self.set)
        self.assertElements(self.track(l.join(r)), [0, 1, 2, 3, 5, 6, 7, 8, 9])


class TestTraversalAndExport(SetTestCase):

    def setUp(self):
        super().setUp()
        self.set = IntSet.of_list([4, 2, 8, 6])

    def test_iteration(self):
        self.assertEqual(list(self.set), [2, 4, 6, 8])
        self.assertEqual(list(reversed(self.set)), [8, 6, 4, 2])
        seen = []
        self.set.iter(seen.append)
        self.assertEqual(seen, [2, 4, 6, 8])

    def test_sequences(self):
        seq = self.set.to_seq()
        self.assertEqual(list(seq), [2, 4, 6, 8])
        self.assertEqual(list(seq), [2, 4, 6, 8])
        self.assertEqual(list(self.set.enum()), [2, 4, 6, 8])
        self.assertEqual(list(self.set.backwards()), [8, 6, 4, 2])
        self.assertEqual(list(self.set.to_seq_from(5)), [6, 8])

    def test_sequence_is_a_snapshot(self):
        seq = self.set.to_seq()
        self.set.add(5)
        self.assertEqual(list(seq), [2, 4, 6, 8])

    def test_higher_order(self):
        self.assertEqual(self.set.fold(lambda x, acc: acc + x, 0), 20)
        self.assertTrue(self.set.for_all(lambda x: x % 2 == 0))
        self.assertTrue(self.set.exists(lambda x: x > 7))
        self.assertElements(self.track(self.set.filter(lambda x: x > 4)), [6, 8])
        small, large = self.set.partition(lambda x: x < 5)
        self.assertElements(small, [2, 4])
        self.assertElements(large, [6, 8])

    def test_to_list_and_array(self):
        self.assertEqual(self.set.to_list(), [2, 4, 6, 8])
        arr = self.set.to_array(dtype=np.int64)
        self.assertEqual(arr.dtype, np.int64)
        np.testing.assert_array_equal(arr, np.array([2, 4, 6, 8]))
        obj = self.set.to_array()
        self.assertEqual(obj.dtype, object)
        self.assertEqual(obj.shape, (4,))
        self.assertEqual(IntSet.empty().to_array().shape, (0,))

    def test_print_and_repr(self):
        out = io.StringIO()
        self.set.print(out)
        self.assertEqual(out.getvalue(), "{2,4,6,8}")
        out = io.StringIO()
        self.set.print(out, fmt=lambda x: f"<{x}>", first="[", last="]", sep="; ")
        self.assertEqual(out.getvalue(), "[<2>; <4>; <6>; <8>]")
        self.assertEqual(repr(self.set), "IntSet({2, 4, 6, 8})")

    def test_diagnostics(self):
        self.set.check_invariants()
        stats = self.set.stats()
        self.assertEqual(stats.item_count, 4)
        self.assertEqual(stats.least_item, 2)
        self.assertIn("AVL tree", self.set.print_structure())


class TestMapping(SetTestCase):

    def setUp(self):
        super().setUp()
        self.set = IntSet.of_list(range(6))

    def test_map_stays_in_class(self):
        m = self.track(self.set.map(lambda x: x // 2))
        self.assertIsInstance(m, IntSet)
        self.assertElements(m, [0, 1, 2])
        self.assertIs(self.set.map(lambda x: x), self.set)

    def test_map_into_other_class(self):
        m = self.track(self.set.map(lambda x: f"v{x}", into=NumStrSet))
        self.assertIsInstance(m, NumStrSet)
        self.assertElements(m, ["v0", "v1", "v2", "v3", "v4", "v5"])

    def test_filter_map(self):
        m = self.track(self.set.filter_map(lambda x: -x if x % 2 else None))
        self.assertElements(m, [-5, -3, -1])
        m = self.track(self.set.filter_map(lambda x: str(x) if x > 3 else None, into=StrSet))
        self.assertElements(m, ["4", "5"])

    def test_op_map(self):
        m = self.track(self.set.op_map(lambda x: 10 * x))
        self.assertElements(m, [0, 10, 20, 30, 40, 50])
        self.assertEqual(m.root.height, self.set.root.height)


class TestFactory(SetTestCase):

    def test_factory_caches_per_comparator(self):
        self.assertIs(make_set_class(compare_int), IntSet)
        self.assertEqual(IntSet.__name__, "IntSet")

    def test_custom_comparator(self):
        def by_length(a, b):
            return (len(a) > len(b)) - (len(a) < len(b))

        ByLength = make_set_class(by_length, "ByLength")
        s = self.track(ByLength.of_list(["ccc", "a", "bb", "dd"]))
        self.assertElements(s, ["a", "bb", "ccc"])
        self.assertEqual(s.find("zz"), "bb")

    def test_float_set_orders_nan_first(self):
        s = self.track(FloatSet.of_list([2.5, float("nan"), -1.0, float("nan")]))
        xs = s.elements()
        self.assertEqual(len(xs), 3)
        self.assertTrue(math.isnan(xs[0]))
        self.assertEqual(xs[1:], [-1.0, 2.5])
        self.assertIn(float("nan"), s)

    def test_case_insensitive_strings(self):
        s = self.track(IStrSet.of_list(["Banana", "apple", "APPLE"]))
        self.assertElements(s, ["apple", "Banana"])
        self.assertTrue(s.mem("BANANA"))

    def test_numeric_strings(self):
        s = self.track(NumStrSet.of_list(["file10", "file2", "file1", "file01", "x"]))
        self.assertElements(s, ["file1", "file2", "file10", "x"])
        self.assertTrue(s.mem("file001"))
        self.assertEqual(s.find("file01"), "file1")
        self.assertLess(compare_numstr("a23", "a123"), 0)
        self.assertEqual(compare_numstr("a01", "a1"), 0)

    def test_bytes_set(self):
        s = self.track(BytesSet.of_list([b"b", b"a", b"b"]))
        self.assertElements(s, [b"a", b"b"])

    def test_product_class(self):
        Pairs = make_product_class(IntSet, StrSet)
        self.assertIs(make_product_class(IntSet, StrSet), Pairs)
        p = self.track(Pairs.cartesian_product(IntSet.of_list([2, 1]), StrSet.of_list(["y", "x"])))
        self.assertElements(p, [(1, "x"), (1, "y"), (2, "x"), (2, "y")])
        self.assertIn((2, "y"), p)
        with self.assertRaises(TypeError):
            Pairs.cartesian_product(StrSet.of_list(["a"]), IntSet.of_list([1]))


class TestRandomizedHandles(RandomizedTestCase):

    def test_against_builtin_set(self):
        for run_idx in tqdm(range(self.REPETITIONS), desc="IntSet vs set", unit="trial"):
            xs, ys = self.random_list(), self.random_list()
            a, b = set(xs), set(ys)
            s, t = IntSet.of_list(xs), IntSet.of_list(ys)
            with self.subTest(run=run_idx):
                self.assertElements(self.track(s | t), sorted(a | b))
                self.assertElements(self.track(s & t), sorted(a & b))
                self.assertElements(self.track(s - t), sorted(a - b))
                self.assertElements(self.track(s ^ t), sorted(a ^ b))
                if a:
                    ranks = [s.at_rank_exn(i) for i in range(len(s))]
                    self.assertEqual(ranks, sorted(a))
                self.assertEqual(IntSet.of_list(s.to_list()), s)
                self.assertEqual(
                    (s | t).cardinal() + (s & t).cardinal(),
                    s.cardinal() + t.cardinal(),
                )


if __name__ == "__main__":
    unittest.main()
