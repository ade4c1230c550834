"""Ordered sets whose comparator is fixed per class.

Concrete classes are produced by :func:`avl_sets.factory.make_set_class`,
which stores the comparator in the ``CMP`` class attribute. Two sets can be
combined only when their classes carry the very same ``CMP``.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional, Type

import numpy as np

from avl_sets import algebra
from avl_sets.base import Comparator, Node, singleton
from avl_sets.bulk_create import of_iterable
from avl_sets.set_base import OrderedSetBase


class OrderedSet(OrderedSetBase):
    """Base class for sets ordered by the class-level comparator ``CMP``."""
    __slots__ = ()

    # Assigned by the factory
    CMP: Optional[Comparator] = None

    def __init__(self, root: Optional[Node] = None) -> None:
        if type(self).CMP is None:
            raise TypeError(
                f"{type(self).__name__} has no comparator; "
                "build a concrete class with make_set_class()"
            )
        super().__init__(root)

    def _cmp(self) -> Comparator:
        return type(self).CMP

    def _with_root(self, root: Optional[Node]) -> OrderedSet:
        if root is self.root:
            return self
        return type(self)(root)

    def _compatible(self, other: Any) -> bool:
        return isinstance(other, OrderedSet) and type(other).CMP is type(self).CMP

    def _binary_cmp(self, other: OrderedSetBase, prefer_other: bool) -> Comparator:
        return type(self).CMP

    def _combine(self, other: OrderedSetBase, root: Optional[Node], prefer_other: bool) -> OrderedSet:
        if root is self.root:
            return self
        if root is other.root:
            return other
        return type(self)(root)

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------
    @classmethod
    def empty(cls) -> OrderedSet:
        return cls(None)

    @classmethod
    def singleton(cls, x: Any) -> OrderedSet:
        return cls(singleton(x))

    @classmethod
    def of_list(cls, xs: Iterable[Any]) -> OrderedSet:
        """Build from any iterable; of equal elements the first one is kept."""
        return cls(of_iterable(cls.CMP, xs))

    @classmethod
    def of_array(cls, arr: Any) -> OrderedSet:
        """Build from a numpy array (elements become plain Python scalars) or a sequence."""
        if isinstance(arr, np.ndarray):
            arr = arr.tolist()
        return cls(of_iterable(cls.CMP, arr))

    @classmethod
    def of_seq(cls, seq: Iterable[Any]) -> OrderedSet:
        return cls(of_iterable(cls.CMP, seq))

    of_enum = of_seq

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------
    def map(self, f: Callable[[Any], Any], into: Optional[Type[OrderedSet]] = None) -> OrderedSet:
        """
        Apply ``f`` to every element.

        Without ``into`` the result has this class; elements that ``f``
        returns unchanged keep their subtrees, and the result is ``self``
        when nothing changes. With ``into`` the images are ordered by that
        class's comparator.
        """
        if into is None or into.CMP is type(self).CMP:
            return self._with_root(algebra.map_tree(type(self).CMP, f, self.root))
        return into(algebra.map_into(into.CMP, f, self.root))

    def filter_map(self, f: Callable[[Any], Any], into: Optional[Type[OrderedSet]] = None) -> OrderedSet:
        """Like :meth:`map`, dropping the elements for which ``f`` returns ``None``."""
        if into is None or into.CMP is type(self).CMP:
            return self._with_root(algebra.filter_map_tree(type(self).CMP, f, self.root))
        return into(algebra.filter_map_into(into.CMP, f, self.root))

    def op_map(self, f: Callable[[Any], Any]) -> OrderedSet:
        """
        Map with a strictly increasing ``f`` in O(n), keeping the tree shape.

        The monotonicity of ``f`` is not checked.
        """
        return self._with_root(algebra.op_map(f, self.root))
