"""Shared invariant-checking utilities.

This module provides tree invariant validation that can be used by both
the stats scripts and the test suite.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional, Tuple

from avl_sets.logging_config import get_logger
from avl_sets.navigation import iter_ascending

logger = get_logger("invariants")

if TYPE_CHECKING:
    from avl_sets.base import Comparator, Node
    from avl_sets.tree_stats import Stats

TREE_FLAGS = (
    "is_search_tree",
    "is_balanced",
    "heights_consistent",
    "sizes_consistent",
)


class InvariantError(Exception):
    """Raised when an AVL tree invariant is violated."""


def assert_tree_invariants_raise(t: Optional[Node], stats: Stats) -> None:
    """Check all invariants, raising :class:`InvariantError` on the first failure."""
    for flag in TREE_FLAGS:
        if not getattr(stats, flag):
            logger.error(f"Invariant failed: {flag} is False")
            raise InvariantError(f"Invariant failed: {flag} is False")

    if t is not None:
        if stats.item_count <= 0:
            raise InvariantError(f"Invariant failed: item_count={stats.item_count} ≤ 0 for non-empty tree")
        if stats.height <= 0:
            raise InvariantError(f"Invariant failed: height={stats.height} ≤ 0 for non-empty tree")
        if t.size != stats.item_count:
            raise InvariantError(
                f"Invariant failed: root size={t.size} ≠ stats.item_count={stats.item_count}"
            )


def check_elements_in_order(
    t: Optional[Node],
    cmp: Comparator,
    expected: Optional[List[Any]] = None,
) -> Tuple[List[Any], bool, bool]:
    """Traverse the tree in order and validate the element sequence.

    Returns
    -------
    (elements, presence_ok, order_ok)
        ``presence_ok`` is only meaningful when ``expected`` is given; it
        compares against ``expected`` element by element with ``cmp``.
    """
    elements: List[Any] = []
    order_ok = True
    prev = None
    for x in iter_ascending(t):
        if elements and cmp(prev, x) >= 0:
            order_ok = False
        elements.append(x)
        prev = x

    presence_ok = True
    if expected is not None:
        if len(elements) != len(expected):
            presence_ok = False
        else:
            presence_ok = all(cmp(a, b) == 0 for a, b in zip(elements, expected))

    return elements, presence_ok, order_ok
