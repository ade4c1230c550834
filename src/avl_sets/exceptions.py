"""
Custom exceptions for the set engine.
"""

import functools


class NotFound(LookupError):
    """
    Raised when an operation requires an element that the set does not hold.

    Raised by ``find``, ``remove_exn``, ``update``, ``at_rank_exn`` on an
    empty set, and by ``min_elt``/``max_elt``/``choose``/``any``/``pop``
    on an empty set.
    """


class InvalidArgument(ValueError):
    """Raised by ``at_rank_exn`` when the rank lies outside ``[0, cardinal)``."""


def none_if_not_found(fn):
    """
    Derive the option-returning sibling of a raising operation.

    The wrapped callable returns ``None`` where ``fn`` raises
    :class:`NotFound`. Any other exception propagates unchanged.
    """
    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except NotFound:
            return None

    wrapper.__name__ = f"{fn.__name__}_opt"
    wrapper.__qualname__ = f"{fn.__qualname__}_opt"
    return wrapper
