"""Structural statistics and invariant flags for AVL trees."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from avl_sets.base import BALANCE_BOUND, Comparator, Node
from avl_sets.logging_config import get_logger

logger = get_logger("tree_stats")


@dataclass
class Stats:
    height: int
    node_count: int
    leaf_count: int
    item_count: int
    least_item: Optional[Any]
    greatest_item: Optional[Any]
    is_search_tree: bool
    is_balanced: bool
    heights_consistent: bool
    sizes_consistent: bool


def tree_stats_(t: Optional[Node], cmp: Comparator) -> Stats:
    """
    Returns aggregated statistics for an AVL tree in **O(n)** time.

    ``height`` and ``item_count`` are recomputed from the structure, so they
    can be compared against the bookkeeping stored in the nodes.
    """
    # ---------- empty tree return ---------------------------------
    if t is None:
        return Stats(height             = 0,
                     node_count         = 0,
                     leaf_count         = 0,
                     item_count         = 0,
                     least_item         = None,
                     greatest_item      = None,
                     is_search_tree     = True,
                     is_balanced        = True,
                     heights_consistent = True,
                     sizes_consistent   = True)

    # ---------- recurse on children -------------------------------
    ls = tree_stats_(t.left, cmp)
    rs = tree_stats_(t.right, cmp)
    v = t.value

    stats = Stats(
        height=1 + max(ls.height, rs.height),
        node_count=1 + ls.node_count + rs.node_count,
        leaf_count=(1 if t.left is None and t.right is None else 0) + ls.leaf_count + rs.leaf_count,
        item_count=1 + ls.item_count + rs.item_count,
        least_item=v if t.left is None else ls.least_item,
        greatest_item=v if t.right is None else rs.greatest_item,
        is_search_tree=ls.is_search_tree and rs.is_search_tree,
        is_balanced=ls.is_balanced and rs.is_balanced,
        heights_consistent=ls.heights_consistent and rs.heights_consistent,
        sizes_consistent=ls.sizes_consistent and rs.sizes_consistent,
    )

    # ---------- checks for this node ------------------------------
    if stats.is_search_tree:
        if t.left is not None and cmp(ls.greatest_item, v) >= 0:
            stats.is_search_tree = False
        elif t.right is not None and cmp(v, rs.least_item) >= 0:
            stats.is_search_tree = False
        if not stats.is_search_tree:
            logger.warning(f"  Order violation at node {v!r}")

    if abs(ls.height - rs.height) > BALANCE_BOUND:
        stats.is_balanced = False
        logger.warning(f"  Balance violation at node {v!r}: left height={ls.height}, right height={rs.height}")

    if t.height != stats.height:
        stats.heights_consistent = False
        logger.warning(f"  Stored height {t.height} != actual height {stats.height} at node {v!r}")

    if t.size != stats.item_count:
        stats.sizes_consistent = False
        logger.warning(f"  Stored size {t.size} != actual size {stats.item_count} at node {v!r}")

    return stats
