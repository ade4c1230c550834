"""Common set handle shared by the static and the dynamic ordering strategies.

:class:`OrderedSetBase` wraps an immutable AVL tree (``root``) and exposes the
whole set surface as methods and Python protocols. Subclasses only decide
where the comparator comes from and which comparator the result of a binary
operation carries:

* :class:`avl_sets.ordered_set.OrderedSet` – comparator fixed per class
  (``CMP``), built by :func:`avl_sets.factory.make_set_class`.
* :class:`avl_sets.pset.PSet` – comparator carried by every set value.

Handles are immutable. Every "modifying" method returns a new handle, and
returns ``self`` when the operation changes nothing.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Iterator, List, Optional, TextIO, Tuple

import numpy as np

from avl_sets import algebra, insert, navigation, split_join
from avl_sets.algebra import SubsetRelation
from avl_sets.base import MISSING, Comparator, Node, size
from avl_sets.bulk_create import add_seq
from avl_sets.display import format_set, print_pretty, print_set
from avl_sets.exceptions import none_if_not_found
from avl_sets.invariants import assert_tree_invariants_raise
from avl_sets.navigation import OrderedSeq
from avl_sets.tree_stats import Stats, tree_stats_


class OrderedSetBase(ABC):
    """Abstract immutable ordered set; see the module docstring."""
    __slots__ = ("root",)

    def __init__(self, root: Optional[Node] = None) -> None:
        self.root = root

    # ------------------------------------------------------------------
    # Strategy hooks
    # ------------------------------------------------------------------
    @abstractmethod
    def _cmp(self) -> Comparator:
        pass

    @abstractmethod
    def _with_root(self, root: Optional[Node]) -> OrderedSetBase:
        """A handle of the same strategy and comparator holding ``root``."""
        pass

    @abstractmethod
    def _compatible(self, other: Any) -> bool:
        pass

    @abstractmethod
    def _binary_cmp(self, other: OrderedSetBase, prefer_other: bool) -> Comparator:
        """Comparator used to combine ``self`` with ``other``."""
        pass

    @abstractmethod
    def _combine(self, other: OrderedSetBase, root: Optional[Node], prefer_other: bool) -> OrderedSetBase:
        """Wrap the result of a binary operation with the adopted comparator."""
        pass

    def _check_operand(self, other: Any) -> None:
        if not self._compatible(other):
            raise TypeError(
                f"cannot combine {type(self).__name__} with {type(other).__name__}: "
                "operands must share the same ordering strategy"
            )

    # ------------------------------------------------------------------
    # Size and membership
    # ------------------------------------------------------------------
    def is_empty(self) -> bool:
        return self.root is None

    def cardinal(self) -> int:
        """Number of elements, O(1)."""
        return size(self.root)

    def __len__(self) -> int:
        return size(self.root)

    def mem(self, x: Any) -> bool:
        return navigation.mem(self._cmp(), x, self.root)

    def __contains__(self, x: Any) -> bool:
        return navigation.mem(self._cmp(), x, self.root)

    def find(self, x: Any) -> Any:
        """Return the stored element equal to ``x``; raise ``NotFound`` if absent."""
        return navigation.find(self._cmp(), x, self.root)

    find_opt = none_if_not_found(find)

    def find_first(self, f: Callable[[Any], bool]) -> Any:
        """
        Smallest element satisfying ``f``.

        ``f`` must be monotonically increasing: false for a prefix of the
        ascending elements and true afterwards. This is not checked.
        """
        return navigation.find_first(f, self.root)

    find_first_opt = none_if_not_found(find_first)

    def find_last(self, f: Callable[[Any], bool]) -> Any:
        """
        Greatest element satisfying ``f``.

        ``f`` must be monotonically decreasing: true for a prefix of the
        ascending elements and false afterwards. This is not checked.
        """
        return navigation.find_last(f, self.root)

    find_last_opt = none_if_not_found(find_last)

    # ------------------------------------------------------------------
    # Persistent updates
    # ------------------------------------------------------------------
    def add(self, x: Any) -> OrderedSetBase:
        """Return a set that also contains ``x``; ``self`` if already present."""
        return self._with_root(insert.add(self._cmp(), x, self.root))

    def remove(self, x: Any) -> OrderedSetBase:
        """Return the set without ``x``; ``self`` if ``x`` is absent."""
        return self._with_root(insert.remove(self._cmp(), x, self.root))

    def remove_exn(self, x: Any) -> OrderedSetBase:
        """Like :meth:`remove` but raise ``NotFound`` if ``x`` is absent."""
        return self._with_root(insert.remove_exn(self._cmp(), x, self.root))

    def update(self, old: Any, new: Any) -> OrderedSetBase:
        """
        Replace ``old`` by ``new``; raise ``NotFound`` if ``old`` is absent.

        Cheaper when ``old`` and ``new`` compare equal: the tree keeps its shape.
        """
        return self._with_root(insert.update(self._cmp(), old, new, self.root))

    def add_seq(self, xs) -> OrderedSetBase:
        """Add the elements of ``xs`` in order."""
        return self._with_root(add_seq(self._cmp(), xs, self.root))

    # ------------------------------------------------------------------
    # Set algebra
    # ------------------------------------------------------------------
    def union(self, other: OrderedSetBase) -> OrderedSetBase:
        self._check_operand(other)
        root = algebra.union(self._binary_cmp(other, True), self.root, other.root)
        return self._combine(other, root, True)

    def inter(self, other: OrderedSetBase) -> OrderedSetBase:
        self._check_operand(other)
        root = algebra.inter(self._binary_cmp(other, False), self.root, other.root)
        return self._combine(other, root, False)

    intersect = inter

    def diff(self, other: OrderedSetBase) -> OrderedSetBase:
        self._check_operand(other)
        root = algebra.diff(self._binary_cmp(other, False), self.root, other.root)
        return self._combine(other, root, False)

    def sym_diff(self, other: OrderedSetBase) -> OrderedSetBase:
        self._check_operand(other)
        root = algebra.sym_diff(self._binary_cmp(other, False), self.root, other.root)
        return self._combine(other, root, False)

    __or__ = union
    __and__ = inter
    __sub__ = diff
    __xor__ = sym_diff

    def compare(self, other: OrderedSetBase) -> int:
        """Total order between sets (-1, 0, 1); usable as a comparator for sets of sets."""
        self._check_operand(other)
        return algebra.compare(self._cmp(), self.root, other.root)

    def equal(self, other: OrderedSetBase) -> bool:
        self._check_operand(other)
        return algebra.equal(self._cmp(), self.root, other.root)

    def subset(self, other: OrderedSetBase) -> bool:
        self._check_operand(other)
        return algebra.subset(self._cmp(), self.root, other.root)

    def disjoint(self, other: OrderedSetBase) -> bool:
        self._check_operand(other)
        return algebra.disjoint(self._cmp(), self.root, other.root)

    def compare_subset(self, other: OrderedSetBase) -> SubsetRelation:
        self._check_operand(other)
        return algebra.compare_subset(self._cmp(), self.root, other.root)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, OrderedSetBase) or not self._compatible(other):
            return NotImplemented
        return algebra.equal(self._cmp(), self.root, other.root)

    def __hash__(self) -> int:
        # elements equal under the comparator may hash differently, so only the
        # cardinality takes part
        return hash((OrderedSetBase.__name__, size(self.root)))

    # ------------------------------------------------------------------
    # Split / join
    # ------------------------------------------------------------------
    def split(self, x: Any) -> Tuple[OrderedSetBase, bool, OrderedSetBase]:
        """Return ``(below, present, above)`` relative to ``x``."""
        l, present, r = split_join.split(self._cmp(), x, self.root)
        return self._with_root(l), present, self._with_root(r)

    def split_opt(self, x: Any) -> Tuple[OrderedSetBase, Any, OrderedSetBase]:
        """Like :meth:`split` but with the stored element (or ``None``) in the middle."""
        l, found, r = split_join.split_opt(self._cmp(), x, self.root)
        return self._with_root(l), found, self._with_root(r)

    def split_lt(self, x: Any) -> Tuple[OrderedSetBase, OrderedSetBase]:
        """Return ``(l, r)`` with every element of ``l`` < ``x`` <= every element of ``r``."""
        l, r = split_join.split_lt(self._cmp(), x, self.root)
        return self._with_root(l), self._with_root(r)

    def split_le(self, x: Any) -> Tuple[OrderedSetBase, OrderedSetBase]:
        """Return ``(l, r)`` with every element of ``l`` <= ``x`` < every element of ``r``."""
        l, r = split_join.split_le(self._cmp(), x, self.root)
        return self._with_root(l), self._with_root(r)

    def join(self, other: OrderedSetBase, pivot: Any = MISSING) -> OrderedSetBase:
        """
        Inverse of :meth:`split`: concatenate ``self``, the optional ``pivot``
        and ``other``.

        Every element of ``self`` must be smaller than ``pivot`` (if given)
        and than every element of ``other``; this is not checked.
        """
        self._check_operand(other)
        if pivot is MISSING:
            root = split_join.concat(self.root, other.root)
        else:
            root = split_join.join(self.root, pivot, other.root)
        return self._combine(other, root, False)

    # ------------------------------------------------------------------
    # Order statistics and extrema
    # ------------------------------------------------------------------
    def at_rank_exn(self, i: int) -> Any:
        """
        The ``i``-th smallest element (0-indexed).

        Raises ``NotFound`` on an empty set and ``InvalidArgument`` when
        ``i`` is outside ``[0, cardinal())``.
        """
        return navigation.at_rank(i, self.root)

    def min_elt(self) -> Any:
        return navigation.min_elt(self.root)

    min_elt_opt = none_if_not_found(min_elt)

    def max_elt(self) -> Any:
        return navigation.max_elt(self.root)

    max_elt_opt = none_if_not_found(max_elt)

    def choose(self) -> Any:
        """A deterministic element: equal sets always choose equal elements (the minimum)."""
        return navigation.min_elt(self.root)

    choose_opt = none_if_not_found(choose)

    def any(self) -> Any:
        """The cheapest element to reach (O(1)); may differ between equal sets."""
        return navigation.any_element(self.root)

    any_opt = none_if_not_found(any)

    def pop_min(self) -> Tuple[Any, OrderedSetBase]:
        m, rest = insert.pop_min(self.root)
        return m, self._with_root(rest)

    def pop_max(self) -> Tuple[Any, OrderedSetBase]:
        m, rest = insert.pop_max(self.root)
        return m, self._with_root(rest)

    def pop(self) -> Tuple[Any, OrderedSetBase]:
        """Return :meth:`choose` and the set without it, in one traversal."""
        return self.pop_min()

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------
    def __iter__(self) -> Iterator[Any]:
        return navigation.iter_ascending(self.root)

    def __reversed__(self) -> Iterator[Any]:
        return navigation.iter_descending(self.root)

    def iter(self, f: Callable[[Any], Any]) -> None:
        """Call ``f`` on every element in ascending order."""
        for x in navigation.iter_ascending(self.root):
            f(x)

    def fold(self, f: Callable[[Any, Any], Any], init: Any) -> Any:
        return navigation.fold(f, self.root, init)

    def for_all(self, p: Callable[[Any], bool]) -> bool:
        return navigation.for_all(p, self.root)

    def exists(self, p: Callable[[Any], bool]) -> bool:
        return navigation.exists(p, self.root)

    def filter(self, p: Callable[[Any], bool]) -> OrderedSetBase:
        return self._with_root(algebra.filter(p, self.root))

    def partition(self, p: Callable[[Any], bool]) -> Tuple[OrderedSetBase, OrderedSetBase]:
        yes, no = algebra.partition(p, self.root)
        return self._with_root(yes), self._with_root(no)

    def to_seq(self) -> OrderedSeq:
        """Restartable ascending view of this snapshot."""
        return OrderedSeq(self.root)

    enum = to_seq

    def backwards(self) -> OrderedSeq:
        """Restartable descending view of this snapshot."""
        return OrderedSeq(self.root, descending=True)

    def to_seq_from(self, x: Any) -> OrderedSeq:
        """Restartable ascending view of the elements >= ``x``."""
        return OrderedSeq(self.root, cmp=self._cmp(), lower=x)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------
    def elements(self) -> List[Any]:
        return list(navigation.iter_ascending(self.root))

    to_list = elements

    def to_array(self, dtype: Any = object) -> np.ndarray:
        """Ascending elements as a one-dimensional numpy array."""
        n = size(self.root)
        if np.dtype(dtype) != np.dtype(object):
            return np.fromiter(navigation.iter_ascending(self.root), dtype=dtype, count=n)
        arr = np.empty(n, dtype=object)
        for i, x in enumerate(navigation.iter_ascending(self.root)):
            arr[i] = x
        return arr

    def print(self, out: Optional[TextIO] = None, fmt: Callable[[Any], str] = str,
              first: str = "{", last: str = "}", sep: str = ",") -> None:
        print_set(self, out, fmt, first, last, sep)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({format_set(self, repr, sep=', ')})"

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------
    def stats(self) -> Stats:
        return tree_stats_(self.root, self._cmp())

    def check_invariants(self) -> None:
        """Raise ``InvariantError`` if the underlying tree is malformed."""
        assert_tree_invariants_raise(self.root, self.stats())

    def print_structure(self, max_depth: int = 6) -> str:
        return print_pretty(self.root, max_depth)
