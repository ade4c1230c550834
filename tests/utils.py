"""Utility functions for testing AVL tree invariants."""

from typing import Optional

from avl_sets.base import Node
from avl_sets.invariants import TREE_FLAGS
from avl_sets.tree_stats import Stats


def assert_tree_invariants_tc(tc, t: Optional[Node], stats: Stats, err_msg: Optional[str] = "") -> None:
    """TestCase version: use inside unittest.TestCase methods."""
    for flag in TREE_FLAGS:
        tc.assertTrue(
            getattr(stats, flag),
            f"Invariant failed: {flag} is False \n\n{err_msg}"
        )

    if t is not None:
        tc.assertGreater(
            stats.item_count, 0,
            f"Invariant failed: item_count={stats.item_count} ≤ 0 for non-empty tree\n\n{err_msg}"
        )
        tc.assertGreater(
            stats.height, 0,
            f"Invariant failed: height={stats.height} ≤ 0 for non-empty tree\n\n{err_msg}"
        )
        tc.assertEqual(
            t.size, stats.item_count,
            f"Invariant failed: root size={t.size} ≠ item_count={stats.item_count}\n\n{err_msg}"
        )
        tc.assertIsNotNone(
            stats.least_item,
            f"Invariant failed: least_item is None for non-empty tree\n\n{err_msg}"
        )
        tc.assertIsNotNone(
            stats.greatest_item,
            f"Invariant failed: greatest_item is None for non-empty tree\n\n{err_msg}"
        )
    else:
        tc.assertEqual(
            stats.item_count, 0,
            f"Invariant failed: item_count={stats.item_count} for empty tree\n\n{err_msg}"
        )
