"""Utility functions and classes not found in the standard libraries.

Integer helpers:
 - divide_integers_and_round_up: ceiling division for positive integers
 - divide_integers_truncating: division that rounds toward zero

Extra collection types:
 - OrderedSet: complements Python's OrderedDict
 - FrozenDict: a hashable immutable dictionary
"""

from functools import total_ordering

# 3rd party
from ordered_set import OrderedSet
from dictionaries import FrozenDict as _FrozenDict

__all__ = [
    "OrderedSet", "FrozenDict",
    "divide_integers_and_round_up", "divide_integers_truncating",
    "check_integer"]

@total_ordering
class FrozenDict(_FrozenDict):
    """
    Immutable dictionary that is hashable (suitable for use in sets/maps)
    and orderable (supports <, >, etc).
    """

    def __lt__(self, other):
        return tuple(sorted(self.items())) < tuple(sorted(other.items()))

    def __repr__(self):
        return "FrozenDict({!r})".format(list(self.items()))

def check_integer(value, value_name="value"):
    """Raise TypeError unless `value` is an int (bools are rejected too)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError("{} must be an integer, not {}".format(value_name, type(value).__name__))

def divide_integers_and_round_up(x, y):
    assert x > 0
    assert y > 0
    return ((x - 1) // y) + 1

def divide_integers_truncating(x, y):
    """
    Integer division that rounds toward zero, e.g. -7 / 2 gives -3.

    Python's `//` rounds toward negative infinity instead (-7 // 2 == -4).
    Raises ZeroDivisionError if y is zero.
    """
    q = abs(x) // abs(y)
    return -q if (x < 0) != (y < 0) else q
