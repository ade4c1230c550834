"""Keyword-only façade over the higher-order set operations.

Every callable argument is passed by name, e.g.
``labels.fold(s, f=lambda x, acc: acc + x, init=0)``.
"""

from typing import Any, Callable, Tuple

from avl_sets.set_base import OrderedSetBase


def iter(s: OrderedSetBase, *, f: Callable[[Any], Any]) -> None:
    s.iter(f)


def fold(s: OrderedSetBase, *, f: Callable[[Any, Any], Any], init: Any) -> Any:
    return s.fold(f, init)


def for_all(s: OrderedSetBase, *, f: Callable[[Any], bool]) -> bool:
    return s.for_all(f)


def exists(s: OrderedSetBase, *, f: Callable[[Any], bool]) -> bool:
    return s.exists(f)


def map(s: OrderedSetBase, *, f: Callable[[Any], Any], **kwargs) -> OrderedSetBase:
    """``kwargs`` are forwarded (``into=`` for static sets, ``cmp=`` for :class:`PSet`)."""
    return s.map(f, **kwargs)


def filter(s: OrderedSetBase, *, f: Callable[[Any], bool]) -> OrderedSetBase:
    return s.filter(f)


def filter_map(s: OrderedSetBase, *, f: Callable[[Any], Any], **kwargs) -> OrderedSetBase:
    return s.filter_map(f, **kwargs)


def partition(s: OrderedSetBase, *, f: Callable[[Any], bool]) -> Tuple[OrderedSetBase, OrderedSetBase]:
    return s.partition(f)
