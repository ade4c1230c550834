"""Factory for comparator-specialised ordered set classes."""

from __future__ import annotations

import re
from typing import Dict, Optional, Tuple, Type

from avl_sets.algebra import cartesian_product, pair_compare
from avl_sets.base import Comparator, debug_log
from avl_sets.ordered_set import OrderedSet

# Cache of created set classes, one per comparator object
_SET_CLASS_CACHE: Dict[Comparator, Type[OrderedSet]] = {}
_PRODUCT_CLASS_CACHE: Dict[Tuple[type, type], Type["ProductSet"]] = {}


def make_set_class(cmp: Comparator, name: Optional[str] = None) -> Type[OrderedSet]:
    """
    Factory function to generate an :class:`OrderedSet` subclass ordered by ``cmp``.

    Args:
        cmp: Total-order comparator returning a negative number, zero or a
             positive number.
        name: Optional class name; only used when the class is first created.

    Returns:
        The cached class for ``cmp``. Calling the factory again with the same
        comparator object returns the same class, so its sets interoperate.
    """
    cls = _SET_CLASS_CACHE.get(cmp)
    if cls is not None:
        return cls

    if name is None:
        name = f"OrderedSet_{getattr(cmp, '__name__', 'cmp')}"
    cls = type(
        name,
        (OrderedSet,),
        {
            "CMP": staticmethod(cmp),
            "__slots__": (),
        },
    )
    _SET_CLASS_CACHE[cmp] = cls
    debug_log("Created set class %s", name)
    return cls


# ---------------------------------------------------------------------------
# Predefined comparators
# ---------------------------------------------------------------------------

def compare_int(a: int, b: int) -> int:
    return (a > b) - (a < b)


def compare_float(a: float, b: float) -> int:
    """Total order on floats: NaN equals NaN and sorts below every number."""
    if a != a:
        return 0 if b != b else -1
    if b != b:
        return 1
    return (a > b) - (a < b)


def compare_str(a: str, b: str) -> int:
    return (a > b) - (a < b)


def compare_bytes(a: bytes, b: bytes) -> int:
    return (a > b) - (a < b)


def compare_istr(a: str, b: str) -> int:
    """Case-insensitive string order (Unicode case folding)."""
    a = a.casefold()
    b = b.casefold()
    return (a > b) - (a < b)


_DIGIT_RUN = re.compile(r"([0-9]+)")


def _natural_key(s: str) -> list:
    # re.split with a group alternates text and digit runs, so positions line up
    return [int(chunk) if i % 2 else chunk for i, chunk in enumerate(_DIGIT_RUN.split(s))]


def compare_numstr(a: str, b: str) -> int:
    """
    Natural string order: runs of digits compare by numeric value, so
    "file2" < "file10" and "file01" equals "file1".
    """
    ka = _natural_key(a)
    kb = _natural_key(b)
    return (ka > kb) - (ka < kb)


IntSet = make_set_class(compare_int, "IntSet")
FloatSet = make_set_class(compare_float, "FloatSet")
StrSet = make_set_class(compare_str, "StrSet")
BytesSet = make_set_class(compare_bytes, "BytesSet")
IStrSet = make_set_class(compare_istr, "IStrSet")
NumStrSet = make_set_class(compare_numstr, "NumStrSet")


# ---------------------------------------------------------------------------
# Product sets
# ---------------------------------------------------------------------------

class ProductSet(OrderedSet):
    """Sets of pairs ordered lexicographically by ``FST.CMP`` then ``SND.CMP``."""
    __slots__ = ()

    FST: Optional[Type[OrderedSet]] = None
    SND: Optional[Type[OrderedSet]] = None

    @classmethod
    def cartesian_product(cls, s1: OrderedSet, s2: OrderedSet) -> ProductSet:
        if not isinstance(s1, cls.FST) or not isinstance(s2, cls.SND):
            raise TypeError(
                f"cartesian_product() expects ({cls.FST.__name__}, {cls.SND.__name__}), "
                f"got ({type(s1).__name__}, {type(s2).__name__})"
            )
        return cls(cartesian_product(s1.root, s2.root))


def make_product_class(cls1: Type[OrderedSet], cls2: Type[OrderedSet]) -> Type[ProductSet]:
    """Class of pairs ``(a, b)`` with ``a`` ordered by ``cls1`` and ``b`` by ``cls2``."""
    key = (cls1, cls2)
    cls = _PRODUCT_CLASS_CACHE.get(key)
    if cls is not None:
        return cls

    name = f"{cls1.__name__}x{cls2.__name__}"
    cls = type(
        name,
        (ProductSet,),
        {
            "CMP": staticmethod(pair_compare(cls1.CMP, cls2.CMP)),
            "FST": cls1,
            "SND": cls2,
            "__slots__": (),
        },
    )
    _PRODUCT_CLASS_CACHE[key] = cls
    debug_log("Created product set class %s", name)
    return cls
