"""Ordered sets that carry their comparator as a value.

A :class:`PSet` pairs a tree with the comparator it is ordered by, so sets of
different orderings can live side by side without defining classes. The
canonical empty set (:meth:`PSet.empty`) has no comparator of its own and
orders by :func:`avl_sets.base.compare` until an element is added.

Result comparators of binary operations:

=================================  =====================================
Operation                          Comparator of the result
=================================  =====================================
``s.union(t)``                     ``t``'s
``s.inter(t)`` / ``diff`` /        ``s``'s
``sym_diff`` / ``join``
``subset``, ``disjoint``,          ``s``'s is used for comparing
``compare``, ``equal``,
``compare_subset``
=================================  =====================================

If the chosen operand is an empty set without a comparator of its own, the
other operand's comparator is adopted instead. Combining sets whose
comparators disagree on the ordering is a caller error and is not detected.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional

import numpy as np

from avl_sets import algebra
from avl_sets.base import Comparator, Node, compare, singleton
from avl_sets.bulk_create import of_iterable
from avl_sets.set_base import OrderedSetBase


class PSet(OrderedSetBase):
    __slots__ = ("cmp",)

    def __init__(self, root: Optional[Node] = None, cmp: Optional[Comparator] = None) -> None:
        super().__init__(root)
        self.cmp = cmp

    def get_cmp(self) -> Comparator:
        """The comparator ordering this set."""
        return self.cmp if self.cmp is not None else compare

    def _cmp(self) -> Comparator:
        return self.cmp if self.cmp is not None else compare

    def _with_root(self, root: Optional[Node]) -> PSet:
        if root is self.root:
            return self
        if root is None and self.cmp is None:
            return _PSET_EMPTY
        return PSet(root, self.cmp)

    def _compatible(self, other: Any) -> bool:
        return isinstance(other, PSet)

    def _adopted(self, other: PSet, prefer_other: bool) -> Optional[Comparator]:
        chosen, fallback = (other, self) if prefer_other else (self, other)
        if chosen.root is None and chosen.cmp is None:
            return fallback.cmp
        return chosen.cmp

    def _binary_cmp(self, other: OrderedSetBase, prefer_other: bool) -> Comparator:
        cmp = self._adopted(other, prefer_other)
        return cmp if cmp is not None else compare

    def _combine(self, other: OrderedSetBase, root: Optional[Node], prefer_other: bool) -> PSet:
        cmp = self._adopted(other, prefer_other)
        if root is self.root and cmp is self.cmp:
            return self
        if root is other.root and cmp is other.cmp:
            return other
        if root is None and cmp is None:
            return _PSET_EMPTY
        return PSet(root, cmp)

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------
    @staticmethod
    def create(cmp: Comparator) -> PSet:
        """An empty set ordered by ``cmp``."""
        return PSet(None, cmp)

    @staticmethod
    def empty() -> PSet:
        """The canonical empty set; it adopts the comparator of whatever it meets."""
        return _PSET_EMPTY

    @staticmethod
    def singleton(x: Any, cmp: Optional[Comparator] = None) -> PSet:
        return PSet(singleton(x), cmp)

    @staticmethod
    def of_list(xs: Iterable[Any], cmp: Optional[Comparator] = None) -> PSet:
        """Build from any iterable; of equal elements the first one is kept."""
        root = of_iterable(cmp if cmp is not None else compare, xs)
        if root is None and cmp is None:
            return _PSET_EMPTY
        return PSet(root, cmp)

    @staticmethod
    def of_array(arr: Any, cmp: Optional[Comparator] = None) -> PSet:
        if isinstance(arr, np.ndarray):
            arr = arr.tolist()
        return PSet.of_list(arr, cmp)

    @staticmethod
    def of_seq(seq: Iterable[Any], cmp: Optional[Comparator] = None) -> PSet:
        return PSet.of_list(seq, cmp)

    of_enum = of_seq

    @staticmethod
    def cartesian_product(s1: PSet, s2: PSet) -> PSet:
        """Pairs ordered lexicographically by ``s1``'s then ``s2``'s comparator."""
        cmp = algebra.pair_compare(s1.get_cmp(), s2.get_cmp())
        return PSet(algebra.cartesian_product(s1.root, s2.root), cmp)

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------
    def map(self, f: Callable[[Any], Any], cmp: Optional[Comparator] = None) -> PSet:
        """
        Apply ``f`` to every element and order the images by ``cmp``, or by
        the default :func:`~avl_sets.base.compare` when ``cmp`` is omitted.
        See :meth:`map_stdlib` for a map that keeps this set's comparator.
        """
        new_cmp = cmp if cmp is not None else compare
        return PSet(algebra.map_into(new_cmp, f, self.root), cmp)

    def map_stdlib(self, f: Callable[[Any], Any]) -> PSet:
        """Apply ``f`` keeping this set's comparator; ``self`` if ``f`` changes nothing."""
        return self._with_root(algebra.map_tree(self._cmp(), f, self.root))

    def filter_map(self, f: Callable[[Any], Any], cmp: Optional[Comparator] = None) -> PSet:
        """Like :meth:`map`, dropping the elements for which ``f`` returns ``None``."""
        new_cmp = cmp if cmp is not None else compare
        return PSet(algebra.filter_map_into(new_cmp, f, self.root), cmp)

    def filter_map_stdlib(self, f: Callable[[Any], Any]) -> PSet:
        return self._with_root(algebra.filter_map_tree(self._cmp(), f, self.root))

    def op_map(self, f: Callable[[Any], Any], cmp: Optional[Comparator] = None) -> PSet:
        """
        Map with a strictly increasing ``f`` in O(n), keeping the tree shape.

        The result is ordered by ``cmp`` if given, else by this set's
        comparator. The monotonicity of ``f`` is not checked.
        """
        return PSet(algebra.op_map(f, self.root), cmp if cmp is not None else self.cmp)


_PSET_EMPTY = PSet(None, None)
