"""Lookup and traversal helpers for AVL trees.

Complexity summary (n = elements, h = height ≈ 1.44 · log2 n):

+----------------------------------+------------------------------------+
| Operation                        | Time                               |
+==================================+====================================+
| ``mem`` / ``find``               | O(h)                               |
| ``find_first`` / ``find_last``   | O(h) predicate calls               |
| ``min_elt`` / ``max_elt``        | O(h)                               |
| ``any_element``                  | O(1)                               |
| ``at_rank``                      | O(h), uses per-node subtree sizes  |
| ``iter_ascending`` & co.         | O(1) amortised per element,        |
|                                  | O(h) extra memory per cursor       |
+----------------------------------+------------------------------------+

Traversals never recurse and keep their cursor state in a private stack, so
several traversals of the same tree can be interleaved freely.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Callable, List, Optional

from avl_sets.base import MISSING, Comparator, Node, size
from avl_sets.exceptions import InvalidArgument, NotFound


def mem(cmp: Comparator, x: Any, t: Optional[Node]) -> bool:
    node = t
    while node is not None:
        c = cmp(x, node.value)
        if c == 0:
            return True
        node = node.left if c < 0 else node.right
    return False


def find(cmp: Comparator, x: Any, t: Optional[Node]) -> Any:
    """Return the stored element comparing equal to ``x``."""
    node = t
    while node is not None:
        v = node.value
        c = cmp(x, v)
        if c == 0:
            return v
        node = node.left if c < 0 else node.right
    raise NotFound(f"find: element {x!r} not in set")


def find_first(f: Callable[[Any], bool], t: Optional[Node]) -> Any:
    """
    Return the smallest element ``e`` with ``f(e)`` true.

    Precondition: ``f`` is monotonically increasing with respect to the set
    order (once true, it stays true for every greater element). The result
    is unspecified otherwise; the precondition is not checked.
    """
    found = MISSING
    node = t
    while node is not None:
        if f(node.value):
            found = node.value
            node = node.left
        else:
            node = node.right
    if found is MISSING:
        raise NotFound("find_first: no element satisfies the predicate")
    return found


def find_last(f: Callable[[Any], bool], t: Optional[Node]) -> Any:
    """
    Return the greatest element ``e`` with ``f(e)`` true.

    Precondition: ``f`` is monotonically decreasing with respect to the set
    order (true for a prefix of the elements, false afterwards). Not checked.
    """
    found = MISSING
    node = t
    while node is not None:
        if f(node.value):
            found = node.value
            node = node.right
        else:
            node = node.left
    if found is MISSING:
        raise NotFound("find_last: no element satisfies the predicate")
    return found


def min_elt(t: Optional[Node]) -> Any:
    if t is None:
        raise NotFound("min_elt: empty set")
    node = t
    while node.left is not None:
        node = node.left
    return node.value


def max_elt(t: Optional[Node]) -> Any:
    if t is None:
        raise NotFound("max_elt: empty set")
    node = t
    while node.right is not None:
        node = node.right
    return node.value


def any_element(t: Optional[Node]) -> Any:
    """The root element: cheapest to reach, but shape dependent."""
    if t is None:
        raise NotFound("any: empty set")
    return t.value


def at_rank(i: int, t: Optional[Node]) -> Any:
    """
    Return the ``i``-th smallest element (0-indexed).

    Raises:
        NotFound: If ``t`` is empty.
        InvalidArgument: If ``i`` is outside ``[0, size(t))``.
    """
    if t is None:
        raise NotFound("at_rank_exn: empty set")
    if i < 0 or i >= t.size:
        raise InvalidArgument(f"at_rank_exn: rank {i} out of range [0, {t.size})")
    node = t
    while True:
        ls = size(node.left)
        if i < ls:
            node = node.left
        elif i == ls:
            return node.value
        else:
            i -= ls + 1
            node = node.right


# ---------------------------------------------------------------------------
# Ordered traversal
# ---------------------------------------------------------------------------

def _push_left_spine(stack: List[Node], node: Optional[Node]) -> None:
    while node is not None:
        stack.append(node)
        node = node.left


def _push_right_spine(stack: List[Node], node: Optional[Node]) -> None:
    while node is not None:
        stack.append(node)
        node = node.right


def iter_ascending(t: Optional[Node]) -> Iterator[Any]:
    stack: List[Node] = []
    _push_left_spine(stack, t)
    while stack:
        node = stack.pop()
        yield node.value
        _push_left_spine(stack, node.right)


def iter_descending(t: Optional[Node]) -> Iterator[Any]:
    stack: List[Node] = []
    _push_right_spine(stack, t)
    while stack:
        node = stack.pop()
        yield node.value
        _push_right_spine(stack, node.left)


def iter_from(cmp: Comparator, x: Any, t: Optional[Node]) -> Iterator[Any]:
    """Ascending traversal of the elements greater than or equal to ``x``."""
    stack: List[Node] = []
    node = t
    while node is not None:
        c = cmp(x, node.value)
        if c == 0:
            stack.append(node)
            break
        if c < 0:
            stack.append(node)
            node = node.left
        else:
            node = node.right
    while stack:
        node = stack.pop()
        yield node.value
        _push_left_spine(stack, node.right)


class OrderedSeq:
    """
    A restartable, lazily evaluated view over a tree snapshot.

    Every call to ``iter()`` starts a fresh cursor at the beginning of the
    sequence; cursors share nothing but the immutable tree.
    """
    __slots__ = ("_root", "_descending", "_cmp", "_lower")

    def __init__(self, root: Optional[Node], descending: bool = False,
                 cmp: Optional[Comparator] = None, lower: Any = MISSING) -> None:
        if lower is not MISSING and cmp is None:
            raise TypeError("OrderedSeq: a lower bound requires a comparator")
        if lower is not MISSING and descending:
            raise ValueError("OrderedSeq: a lower bound is only supported in ascending order")
        self._root = root
        self._descending = descending
        self._cmp = cmp
        self._lower = lower

    def __iter__(self) -> Iterator[Any]:
        if self._lower is not MISSING:
            return iter_from(self._cmp, self._lower, self._root)
        if self._descending:
            return iter_descending(self._root)
        return iter_ascending(self._root)

    def __repr__(self) -> str:
        order = "descending" if self._descending else "ascending"
        return f"OrderedSeq({order}, size={size(self._root)})"


def fold(f: Callable[[Any, Any], Any], t: Optional[Node], acc: Any) -> Any:
    """Compute ``f(xN, ... f(x1, f(x0, acc)))`` over the ascending elements."""
    for x in iter_ascending(t):
        acc = f(x, acc)
    return acc


def for_all(p: Callable[[Any], bool], t: Optional[Node]) -> bool:
    return all(p(x) for x in iter_ascending(t))


def exists(p: Callable[[Any], bool], t: Optional[Node]) -> bool:
    return any(p(x) for x in iter_ascending(t))
