"""Tree core: node shape, height/size bookkeeping and rotations.

The empty tree is ``None``. A non-empty tree is a :class:`Node` that is
never mutated after construction, so any number of set versions can share
subtrees.

Invariants maintained by every constructor in this package:

1. order:   every element of ``left`` < ``value`` < every element of ``right``
2. balance: ``|height(left) - height(right)| <= BALANCE_BOUND``
3. unique:  no two elements compare equal

+---------------------+----------------------------------------------+
| Function            | Time                                         |
+=====================+==============================================+
| ``create``          | O(1), children must already be balanced      |
| ``bal``             | O(1), at most one single or double rotation  |
+---------------------+----------------------------------------------+
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from avl_sets.logging_config import get_logger

logger = get_logger("base")

# Maximum height difference tolerated between the two children of a node.
BALANCE_BOUND = 2

# Sentinel for "no element" where None is itself a legal element.
MISSING = object()

Comparator = Callable[[Any, Any], int]


def compare(a: Any, b: Any) -> int:
    """Default total order: Python's ``<``/``>`` mapped to -1, 0, 1."""
    return (a > b) - (a < b)


class Node:
    """An immutable AVL node.

    ``height`` is the length of the longest path to an empty subtree and
    ``size`` is the number of elements in the subtree rooted here.
    """
    __slots__ = ("left", "value", "right", "height", "size")

    def __init__(self, left: Optional[Node], value: Any, right: Optional[Node],
                 height: int, size: int) -> None:
        self.left = left
        self.value = value
        self.right = right
        self.height = height
        self.size = size

    def __repr__(self) -> str:
        return f"Node(value={self.value!r}, height={self.height}, size={self.size})"


def height(t: Optional[Node]) -> int:
    return 0 if t is None else t.height


def size(t: Optional[Node]) -> int:
    return 0 if t is None else t.size


def singleton(x: Any) -> Node:
    return Node(None, x, None, 1, 1)


def create(l: Optional[Node], v: Any, r: Optional[Node]) -> Node:
    """Build a node whose children are balanced w.r.t. each other."""
    hl = 0 if l is None else l.height
    hr = 0 if r is None else r.height
    sl = 0 if l is None else l.size
    sr = 0 if r is None else r.size
    return Node(l, v, r, (hl if hl >= hr else hr) + 1, sl + sr + 1)


def bal(l: Optional[Node], v: Any, r: Optional[Node]) -> Node:
    """
    Build a node from subtrees whose heights differ by at most
    ``BALANCE_BOUND + 1`` and restore the balance invariant.

    A single rotation is used when the outer grandchild of the heavy side is
    at least as high as the inner one, a double rotation otherwise. The
    in-order sequence ``l, v, r`` is preserved exactly.
    """
    hl = 0 if l is None else l.height
    hr = 0 if r is None else r.height
    if hl > hr + BALANCE_BOUND:
        ll, lv, lr = l.left, l.value, l.right
        if height(ll) >= height(lr):
            return create(ll, lv, create(lr, v, r))
        # lr is higher than ll, so it is not empty
        return create(create(ll, lv, lr.left), lr.value, create(lr.right, v, r))
    if hr > hl + BALANCE_BOUND:
        rl, rv, rr = r.left, r.value, r.right
        if height(rr) >= height(rl):
            return create(create(l, v, rl), rv, rr)
        return create(create(l, v, rl.left), rl.value, create(rl.right, rv, rr))
    return create(l, v, r)


def debug_log(message, *args, **kwargs):
    """Log a debug message only if debug logging is enabled"""
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(message, *args, **kwargs)
