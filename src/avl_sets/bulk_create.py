"""Bulk creation of AVL trees from element sequences.

Provides:
- ``bulk_create_tree`` – O(n) build from a strictly ascending sequence.
- ``of_iterable`` – sort, deduplicate and bulk build an arbitrary iterable.
- ``add_seq`` – add the elements of an iterable to an existing tree, in order.

Complexity summary (n = input elements, m = size of the existing tree):

+-------------------------------+------------------------------------------+
| Operation                     | Time                                     |
+===============================+==========================================+
| ``bulk_create_tree``          | O(n)                                     |
| ``of_iterable``               | O(n log n) comparisons                   |
| ``add_seq``                   | O(n log(n + m))                          |
+-------------------------------+------------------------------------------+
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import Any, Iterable, List, Optional, Sequence

from avl_sets.base import Comparator, Node, create, debug_log
from avl_sets.insert import add


def bulk_create_tree(elements: Sequence[Any]) -> Optional[Node]:
    """
    Build a tree from a strictly ascending sequence.

    The middle element becomes the root, recursively, so sibling heights
    differ by at most one. The ordering of ``elements`` is trusted.
    """
    items = elements if isinstance(elements, list) else list(elements)

    def build(lo: int, hi: int) -> Optional[Node]:
        if lo >= hi:
            return None
        mid = (lo + hi) // 2
        return create(build(lo, mid), items[mid], build(mid + 1, hi))

    return build(0, len(items))


def sort_unique(cmp: Comparator, xs: Iterable[Any]) -> List[Any]:
    """
    Sort ``xs`` by ``cmp`` and drop elements comparing equal to an earlier one.

    The sort is stable, so the first occurrence of each equivalence class is
    kept, which is what successive ``add`` calls would keep as well.
    """
    ordered = sorted(xs, key=cmp_to_key(cmp))
    unique: List[Any] = []
    for x in ordered:
        if not unique or cmp(unique[-1], x) != 0:
            unique.append(x)
    return unique


def of_iterable(cmp: Comparator, xs: Iterable[Any]) -> Optional[Node]:
    unique = sort_unique(cmp, xs)
    debug_log("of_iterable: bulk building tree with %d unique elements", len(unique))
    return bulk_create_tree(unique)


def add_seq(cmp: Comparator, xs: Iterable[Any], t: Optional[Node]) -> Optional[Node]:
    for x in xs:
        t = add(cmp, x, t)
    return t
