"""Split and join: the decomposition primitive and its inverse.

``split`` cuts a tree at a key into the elements below and above it; ``join``
glues two ordered trees back together around an optional pivot. Every set
algebra operation is expressed with these two functions.

Complexity summary (h = height ≈ 1.44 · log2 n):

+-------------------------------+------------------------------------------+
| Operation                     | Time                                     |
+===============================+==========================================+
| ``split`` and variants        | O(h)                                     |
| ``join(l, v, r)``             | O(|height(l) - height(r)| + 1)           |
| ``concat(l, r)``              | O(h(r)) + ``join``                       |
+-------------------------------+------------------------------------------+

Subtrees that lie entirely on one side of the split key are returned as-is,
so split results share structure with their input.
"""

from __future__ import annotations

from typing import Any, Optional, Tuple

from avl_sets.base import BALANCE_BOUND, MISSING, Comparator, Node, bal, create
from avl_sets.insert import add_max, add_min, pop_min


def join(l: Optional[Node], v: Any, r: Optional[Node]) -> Node:
    """
    Build a balanced tree holding ``l``, then ``v``, then ``r``.

    Every element of ``l`` must be smaller than ``v`` and every element of
    ``r`` greater. Heights of ``l`` and ``r`` may differ arbitrarily; the
    shorter tree is grafted onto the spine of the taller one.
    """
    if l is None:
        return add_min(v, r)
    if r is None:
        return add_max(v, l)
    lh = l.height
    rh = r.height
    if lh > rh + BALANCE_BOUND:
        return bal(l.left, l.value, join(l.right, v, r))
    if rh > lh + BALANCE_BOUND:
        return bal(join(l, v, r.left), r.value, r.right)
    return create(l, v, r)


def concat(t1: Optional[Node], t2: Optional[Node]) -> Optional[Node]:
    """Join two ordered trees without a pivot."""
    if t1 is None:
        return t2
    if t2 is None:
        return t1
    m, rest = pop_min(t2)
    return join(t1, m, rest)


def split_found(cmp: Comparator, x: Any, t: Optional[Node]) -> Tuple[Optional[Node], Any, Optional[Node]]:
    """
    Split ``t`` at ``x``.

    Returns:
        ``(l, found, r)`` where ``l`` holds the elements < ``x``, ``r`` the
        elements > ``x`` and ``found`` is the stored element comparing equal
        to ``x`` or :data:`MISSING`.
    """
    if t is None:
        return None, MISSING, None
    v = t.value
    c = cmp(x, v)
    if c == 0:
        return t.left, v, t.right
    if c < 0:
        ll, found, rl = split_found(cmp, x, t.left)
        return ll, found, join(rl, v, t.right)
    lr, found, rr = split_found(cmp, x, t.right)
    return join(t.left, v, lr), found, rr


def split(cmp: Comparator, x: Any, t: Optional[Node]) -> Tuple[Optional[Node], bool, Optional[Node]]:
    l, found, r = split_found(cmp, x, t)
    return l, found is not MISSING, r


def split_opt(cmp: Comparator, x: Any, t: Optional[Node]) -> Tuple[Optional[Node], Any, Optional[Node]]:
    l, found, r = split_found(cmp, x, t)
    return l, (None if found is MISSING else found), r


def split_lt(cmp: Comparator, x: Any, t: Optional[Node]) -> Tuple[Optional[Node], Optional[Node]]:
    """Return ``(l, r)`` with ``l`` < ``x`` <= ``r``."""
    l, found, r = split_found(cmp, x, t)
    if found is not MISSING:
        r = add_min(found, r)
    return l, r


def split_le(cmp: Comparator, x: Any, t: Optional[Node]) -> Tuple[Optional[Node], Optional[Node]]:
    """Return ``(l, r)`` with ``l`` <= ``x`` < ``r``."""
    l, found, r = split_found(cmp, x, t)
    if found is not MISSING:
        l = add_max(found, l)
    return l, r
