"""Set algebra over AVL trees, expressed with ``split`` and ``join``.

All binary operations follow the same template: take the root of one
operand as pivot, split the other operand at it, recurse on the two pairs of
halves and join the results. For operand sizes m <= n this costs
O(m · log(n/m + 1)) comparisons.

Whenever a recursive call hands back its input unchanged the original
subtree is reused, so e.g. ``union(s, t)`` is ``s`` itself when ``t`` adds
nothing new and ``s`` is the taller operand.

Binary operations assume both trees are ordered by the same ``cmp``;
combining trees built with different orderings gives undefined results.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Callable, Optional, Tuple

from avl_sets.base import MISSING, Comparator, Node, size
from avl_sets.bulk_create import bulk_create_tree, of_iterable
from avl_sets.insert import add
from avl_sets.navigation import iter_ascending, max_elt, min_elt
from avl_sets.split_join import concat, join, split, split_found


class SubsetRelation(IntEnum):
    """Result of :func:`compare_subset`; ``INCOMPARABLE`` is the sentinel."""

    PROPER_SUBSET = -1
    EQUAL = 0
    PROPER_SUPERSET = 1
    INCOMPARABLE = 2


def union(cmp: Comparator, s1: Optional[Node], s2: Optional[Node]) -> Optional[Node]:
    if s1 is None:
        return s2
    if s2 is None or s1 is s2:
        return s1
    if s1.height >= s2.height:
        if s2.height == 1:
            return add(cmp, s2.value, s1)
        l2, _, r2 = split(cmp, s1.value, s2)
        l = union(cmp, s1.left, l2)
        r = union(cmp, s1.right, r2)
        if l is s1.left and r is s1.right:
            return s1
        return join(l, s1.value, r)
    if s1.height == 1:
        return add(cmp, s1.value, s2)
    l1, _, r1 = split(cmp, s2.value, s1)
    l = union(cmp, l1, s2.left)
    r = union(cmp, r1, s2.right)
    if l is s2.left and r is s2.right:
        return s2
    return join(l, s2.value, r)


def inter(cmp: Comparator, s1: Optional[Node], s2: Optional[Node]) -> Optional[Node]:
    """Elements of ``s1`` also present in ``s2``; kept elements come from ``s1``."""
    if s1 is None or s2 is None:
        return None
    if s1 is s2:
        return s1
    l1, v1, r1 = s1.left, s1.value, s1.right
    l2, found, r2 = split_found(cmp, v1, s2)
    l = inter(cmp, l1, l2)
    r = inter(cmp, r1, r2)
    if found is MISSING:
        return concat(l, r)
    if l is l1 and r is r1:
        return s1
    return join(l, v1, r)


def diff(cmp: Comparator, s1: Optional[Node], s2: Optional[Node]) -> Optional[Node]:
    """Elements of ``s1`` absent from ``s2``, pivoting on the roots of ``s2``."""
    if s1 is None or s1 is s2:
        return None
    if s2 is None:
        return s1
    l1, _, r1 = split(cmp, s2.value, s1)
    l = diff(cmp, l1, s2.left)
    r = diff(cmp, r1, s2.right)
    return concat(l, r)


def sym_diff(cmp: Comparator, s1: Optional[Node], s2: Optional[Node]) -> Optional[Node]:
    """
    Elements in exactly one of ``s1`` and ``s2``.

    Same result as ``diff(union(s1, s2), inter(s1, s2))`` in a single pass:
    the pivot survives only if the other operand does not contain it.
    """
    if s1 is None:
        return s2
    if s2 is None:
        return s1
    if s1 is s2:
        return None
    l1, v1, r1 = s1.left, s1.value, s1.right
    l2, present, r2 = split(cmp, v1, s2)
    l = sym_diff(cmp, l1, l2)
    r = sym_diff(cmp, r1, r2)
    if present:
        return concat(l, r)
    return join(l, v1, r)


# ---------------------------------------------------------------------------
# Comparisons and predicates
# ---------------------------------------------------------------------------

def compare(cmp: Comparator, s1: Optional[Node], s2: Optional[Node]) -> int:
    """
    Lexicographic order over the ascending element sequences.

    The first differing pair decides; if one sequence is a prefix of the
    other the shorter one is smaller. Returns -1, 0 or 1.
    """
    if s1 is s2:
        return 0
    it2 = iter_ascending(s2)
    for a in iter_ascending(s1):
        b = next(it2, MISSING)
        if b is MISSING:
            return 1
        c = cmp(a, b)
        if c != 0:
            return -1 if c < 0 else 1
    return 0 if next(it2, MISSING) is MISSING else -1


def equal(cmp: Comparator, s1: Optional[Node], s2: Optional[Node]) -> bool:
    if s1 is s2:
        return True
    if size(s1) != size(s2):
        return False
    return compare(cmp, s1, s2) == 0


def subset(cmp: Comparator, s1: Optional[Node], s2: Optional[Node]) -> bool:
    """
    True if every element of ``s1`` is in ``s2``.

    The root of ``s1`` must be present in ``s2`` and each half of ``s1`` must
    be a subset of the matching half of ``s2`` split at that root.
    """
    if s1 is None or s1 is s2:
        return True
    if s2 is None or s1.size > s2.size:
        return False
    l2, present, r2 = split(cmp, s1.value, s2)
    return present and subset(cmp, s1.left, l2) and subset(cmp, s1.right, r2)


def disjoint(cmp: Comparator, s1: Optional[Node], s2: Optional[Node]) -> bool:
    if s1 is None or s2 is None:
        return True
    if s1 is s2:
        return False
    l2, present, r2 = split(cmp, s1.value, s2)
    if present:
        return False
    return disjoint(cmp, s1.left, l2) and disjoint(cmp, s1.right, r2)


def compare_subset(cmp: Comparator, s1: Optional[Node], s2: Optional[Node]) -> SubsetRelation:
    """Partial order generated by :func:`subset`."""
    n1 = size(s1)
    n2 = size(s2)
    if n1 == n2:
        return SubsetRelation.EQUAL if equal(cmp, s1, s2) else SubsetRelation.INCOMPARABLE
    if n1 < n2:
        return SubsetRelation.PROPER_SUBSET if subset(cmp, s1, s2) else SubsetRelation.INCOMPARABLE
    return SubsetRelation.PROPER_SUPERSET if subset(cmp, s2, s1) else SubsetRelation.INCOMPARABLE


# ---------------------------------------------------------------------------
# Filtering and mapping
# ---------------------------------------------------------------------------

def filter(p: Callable[[Any], bool], t: Optional[Node]) -> Optional[Node]:
    """Keep the elements satisfying ``p``; returns ``t`` itself if all do."""
    if t is None:
        return None
    l = filter(p, t.left)
    keep = p(t.value)
    r = filter(p, t.right)
    if not keep:
        return concat(l, r)
    if l is t.left and r is t.right:
        return t
    return join(l, t.value, r)


def partition(p: Callable[[Any], bool], t: Optional[Node]) -> Tuple[Optional[Node], Optional[Node]]:
    """Return ``(satisfying, failing)``."""
    if t is None:
        return None, None
    v = t.value
    lt, lf = partition(p, t.left)
    keep = p(v)
    rt, rf = partition(p, t.right)
    if keep:
        yes = t if lt is t.left and rt is t.right else join(lt, v, rt)
        return yes, concat(lf, rf)
    no = t if lf is t.left and rf is t.right else join(lf, v, rf)
    return concat(lt, rt), no


def _try_join(cmp: Comparator, l: Optional[Node], v: Any, r: Optional[Node]) -> Node:
    if (l is None or cmp(max_elt(l), v) < 0) and (r is None or cmp(v, min_elt(r)) < 0):
        return join(l, v, r)
    return union(cmp, l, add(cmp, v, r))


def _try_concat(cmp: Comparator, l: Optional[Node], r: Optional[Node]) -> Optional[Node]:
    if l is not None and r is not None and cmp(max_elt(l), min_elt(r)) >= 0:
        return union(cmp, l, r)
    return concat(l, r)


def map_tree(cmp: Comparator, f: Callable[[Any], Any], t: Optional[Node]) -> Optional[Node]:
    """
    Apply ``f`` to every element, keeping the ordering ``cmp``.

    ``f`` may be non-injective (equal images collapse, so the result can be
    smaller) and need not preserve order. Where ``f`` returns its argument
    itself the corresponding subtrees are reused; if it does so everywhere
    the result is ``t``.
    """
    if t is None:
        return None
    l = map_tree(cmp, f, t.left)
    v = f(t.value)
    r = map_tree(cmp, f, t.right)
    if l is t.left and v is t.value and r is t.right:
        return t
    return _try_join(cmp, l, v, r)


def filter_map_tree(cmp: Comparator, f: Callable[[Any], Any], t: Optional[Node]) -> Optional[Node]:
    """
    Like :func:`map_tree` but elements for which ``f`` returns ``None`` are
    dropped. Returns ``t`` itself if ``f`` returns every element unchanged.
    """
    if t is None:
        return None
    l = filter_map_tree(cmp, f, t.left)
    v = f(t.value)
    r = filter_map_tree(cmp, f, t.right)
    if v is None:
        return _try_concat(cmp, l, r)
    if l is t.left and v is t.value and r is t.right:
        return t
    return _try_join(cmp, l, v, r)


def map_into(cmp: Comparator, f: Callable[[Any], Any], t: Optional[Node]) -> Optional[Node]:
    """Map into a tree ordered by a (possibly different) comparator ``cmp``."""
    return of_iterable(cmp, (f(x) for x in iter_ascending(t)))


def filter_map_into(cmp: Comparator, f: Callable[[Any], Any], t: Optional[Node]) -> Optional[Node]:
    images = (f(x) for x in iter_ascending(t))
    return of_iterable(cmp, (y for y in images if y is not None))


def op_map(f: Callable[[Any], Any], t: Optional[Node]) -> Optional[Node]:
    """
    Order-preserving map: ``a < b`` must imply ``f(a) < f(b)``.

    The tree shape is kept, so this is O(n) with no comparisons. The
    precondition is not checked.
    """
    if t is None:
        return None
    return Node(op_map(f, t.left), f(t.value), op_map(f, t.right), t.height, t.size)


def pair_compare(cmp1: Comparator, cmp2: Comparator) -> Comparator:
    """Lexicographic comparator on pairs built from two element comparators."""
    def cmp(p: Tuple[Any, Any], q: Tuple[Any, Any]) -> int:
        c = cmp1(p[0], q[0])
        if c != 0:
            return c
        return cmp2(p[1], q[1])

    return cmp


def cartesian_product(s1: Optional[Node], s2: Optional[Node]) -> Optional[Node]:
    """
    All pairs ``(a, b)`` with ``a`` in ``s1`` and ``b`` in ``s2``, ordered by
    :func:`pair_compare`. Pairs are generated in ascending order, so the tree
    is bulk built in O(|s1| · |s2|).
    """
    if s1 is None or s2 is None:
        return None
    seconds = list(iter_ascending(s2))
    return bulk_create_tree([(a, b) for a in iter_ascending(s1) for b in seconds])
