"""Insertion and removal for AVL trees.

Every function returns a new tree and leaves its input untouched. Only the
nodes along the search path are rebuilt; when nothing changes the input tree
itself is returned, so callers can detect no-ops with ``is``.

Complexity summary (n = elements, h = height ≈ 1.44 · log2 n):

+-------------------------+--------------------------------------------+
| Operation               | Time                                       |
+=========================+============================================+
| ``add``                 | O(h)                                       |
| ``remove`` / ``_exn``   | O(h)                                       |
| ``update``              | O(h); no rebalancing when old == new       |
| ``pop_min``/``pop_max`` | O(h), single traversal                     |
| ``merge``               | O(h) for height-compatible inputs          |
+-------------------------+--------------------------------------------+
"""

from __future__ import annotations

from typing import Any, Optional, Tuple

from avl_sets.base import Comparator, Node, bal, singleton
from avl_sets.exceptions import NotFound


def add(cmp: Comparator, x: Any, t: Optional[Node]) -> Node:
    """
    Insert ``x`` into ``t``.

    If an element comparing equal to ``x`` is already present the very same
    tree object is returned.
    """
    if t is None:
        return singleton(x)
    v = t.value
    c = cmp(x, v)
    if c == 0:
        return t
    if c < 0:
        l = t.left
        ll = add(cmp, x, l)
        return t if ll is l else bal(ll, v, t.right)
    r = t.right
    rr = add(cmp, x, r)
    return t if rr is r else bal(t.left, v, rr)


def add_min(x: Any, t: Optional[Node]) -> Node:
    """Insert ``x`` which is known to be smaller than every element of ``t``."""
    if t is None:
        return singleton(x)
    return bal(add_min(x, t.left), t.value, t.right)


def add_max(x: Any, t: Optional[Node]) -> Node:
    """Insert ``x`` which is known to be greater than every element of ``t``."""
    if t is None:
        return singleton(x)
    return bal(t.left, t.value, add_max(x, t.right))


def pop_min(t: Optional[Node]) -> Tuple[Any, Optional[Node]]:
    """Return the smallest element and the tree without it."""
    if t is None:
        raise NotFound("pop_min: empty set")
    l = t.left
    if l is None:
        return t.value, t.right
    m, rest = pop_min(l)
    return m, bal(rest, t.value, t.right)


def pop_max(t: Optional[Node]) -> Tuple[Any, Optional[Node]]:
    """Return the largest element and the tree without it."""
    if t is None:
        raise NotFound("pop_max: empty set")
    r = t.right
    if r is None:
        return t.value, t.left
    m, rest = pop_max(r)
    return m, bal(t.left, t.value, rest)


def merge(t1: Optional[Node], t2: Optional[Node]) -> Optional[Node]:
    """
    Merge two trees whose heights differ by at most ``BALANCE_BOUND`` and
    where every element of ``t1`` is smaller than every element of ``t2``.

    The in-order successor (minimum of ``t2``) becomes the new root value.
    """
    if t1 is None:
        return t2
    if t2 is None:
        return t1
    m, rest = pop_min(t2)
    return bal(t1, m, rest)


def remove_exn(cmp: Comparator, x: Any, t: Optional[Node]) -> Optional[Node]:
    """Remove the element comparing equal to ``x``; raise :class:`NotFound` if absent."""
    if t is None:
        raise NotFound(f"remove_exn: element {x!r} not in set")
    v = t.value
    c = cmp(x, v)
    if c == 0:
        return merge(t.left, t.right)
    if c < 0:
        return bal(remove_exn(cmp, x, t.left), v, t.right)
    return bal(t.left, v, remove_exn(cmp, x, t.right))


def remove(cmp: Comparator, x: Any, t: Optional[Node]) -> Optional[Node]:
    """Remove the element comparing equal to ``x``; return ``t`` itself if absent."""
    try:
        return remove_exn(cmp, x, t)
    except NotFound:
        return t


def _replace_equal(cmp: Comparator, x: Any, y: Any, t: Optional[Node]) -> Node:
    if t is None:
        raise NotFound(f"update: element {x!r} not in set")
    v = t.value
    c = cmp(x, v)
    if c == 0:
        if v is y:
            return t
        return Node(t.left, y, t.right, t.height, t.size)
    if c < 0:
        l = _replace_equal(cmp, x, y, t.left)
        return t if l is t.left else Node(l, v, t.right, t.height, t.size)
    r = _replace_equal(cmp, x, y, t.right)
    return t if r is t.right else Node(t.left, v, r, t.height, t.size)


def update(cmp: Comparator, x: Any, y: Any, t: Optional[Node]) -> Node:
    """
    Replace the element comparing equal to ``x`` by ``y``.

    When ``x`` and ``y`` compare equal the value is swapped along the search
    path and the shape of the tree is kept. Otherwise this is a removal of
    ``x`` followed by an insertion of ``y``.

    Raises:
        NotFound: If no element compares equal to ``x``.
    """
    if cmp(x, y) == 0:
        return _replace_equal(cmp, x, y, t)
    return add(cmp, y, remove_exn(cmp, x, t))
