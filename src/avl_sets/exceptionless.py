"""Option-returning façade: lookups give ``None`` instead of raising ``NotFound``.

    from avl_sets import exceptionless as ex
    ex.min_elt(s)      # None on an empty set
"""

from typing import Any

from avl_sets.set_base import OrderedSetBase


def min_elt(s: OrderedSetBase) -> Any:
    return s.min_elt_opt()


def max_elt(s: OrderedSetBase) -> Any:
    return s.max_elt_opt()


def choose(s: OrderedSetBase) -> Any:
    return s.choose_opt()


def any(s: OrderedSetBase) -> Any:
    return s.any_opt()


def find(s: OrderedSetBase, x: Any) -> Any:
    return s.find_opt(x)
