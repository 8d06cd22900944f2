import itertools
import unittest

from sparsepoly.common import (
    divide_integers_and_round_up, divide_integers_truncating,
    check_integer, FrozenDict, OrderedSet)

class TestCommonUtils(unittest.TestCase):

    def test_frozendict_unordered(self):
        d1 = FrozenDict([(2, 1), (0, 5)])
        d2 = FrozenDict([(0, 5), (2, 1)])
        assert hash(d1) == hash(d2)
        assert d1 == d2

    def test_frozendict_sortable(self):
        d1 = FrozenDict([(0, 1)])
        d2 = FrozenDict([(1, 1)])
        assert (d1 < d2) != (d1 > d2)
        assert d1 <= d1

    def test_frozendict_repr(self):
        for items in itertools.permutations([(2, 1), (0, 5)]):
            d = FrozenDict(items)
            assert eval(repr(d)) == d

    def test_ordered_set_keeps_order(self):
        self.assertEqual(list(OrderedSet([5, 3, 5, 1])), [5, 3, 1])

    def test_divide_and_round_up(self):
        self.assertEqual(divide_integers_and_round_up(1, 2), 1)
        self.assertEqual(divide_integers_and_round_up(2, 2), 1)
        self.assertEqual(divide_integers_and_round_up(3, 2), 2)

    def test_divide_truncating(self):
        self.assertEqual(divide_integers_truncating(7, 2), 3)
        self.assertEqual(divide_integers_truncating(-7, 2), -3)
        self.assertEqual(divide_integers_truncating(7, -2), -3)
        self.assertEqual(divide_integers_truncating(-7, -2), 3)
        self.assertEqual(divide_integers_truncating(1, 2), 0)
        self.assertEqual(divide_integers_truncating(-1, 2), 0)
        self.assertEqual(divide_integers_truncating(6, 3), 2)

    def test_divide_truncating_by_zero(self):
        with self.assertRaises(ZeroDivisionError):
            divide_integers_truncating(1, 0)

    def test_check_integer(self):
        check_integer(3)
        check_integer(-2 ** 80)
        for bad in (1.0, "1", None, True):
            with self.assertRaises(TypeError):
                check_integer(bad)
