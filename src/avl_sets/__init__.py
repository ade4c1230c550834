"""
avl_sets: Persistent ordered sets on height-balanced binary search trees.

Quick-start imports::

    from avl_sets import IntSet, PSet, make_set_class

See the module docstrings for complexity tables and invariants.
"""

from avl_sets.algebra import SubsetRelation
from avl_sets.base import BALANCE_BOUND, compare
from avl_sets.exceptions import InvalidArgument, NotFound
from avl_sets.factory import (
    BytesSet,
    FloatSet,
    IntSet,
    IStrSet,
    NumStrSet,
    ProductSet,
    StrSet,
    make_product_class,
    make_set_class,
)
from avl_sets.invariants import InvariantError
from avl_sets.logging_config import get_logger, setup_logging
from avl_sets.navigation import OrderedSeq
from avl_sets.ordered_set import OrderedSet
from avl_sets.pset import PSet
from avl_sets.set_base import OrderedSetBase

# Stats & invariants
from avl_sets.tree_stats import Stats, tree_stats_

__all__ = [
    "BALANCE_BOUND",
    "BytesSet",
    "FloatSet",
    "IStrSet",
    "IntSet",
    "InvalidArgument",
    "InvariantError",
    "NotFound",
    "NumStrSet",
    "OrderedSeq",
    "OrderedSet",
    "OrderedSetBase",
    "PSet",
    "ProductSet",
    "Stats",
    "StrSet",
    "SubsetRelation",
    "compare",
    "get_logger",
    "make_product_class",
    "make_set_class",
    "setup_logging",
    "tree_stats_",
]
