import unittest
from decimal import Decimal

from apps.common.money import money_str, to_money, within_tolerance
from apps.common.pagination import resolve_ordering


class MoneyTests(unittest.TestCase):
    def test_rounds_half_up_to_cents(self):
        self.assertEqual(to_money("2.345"), Decimal("2.35"))
        self.assertEqual(to_money(1), Decimal("1.00"))
        self.assertEqual(money_str(Decimal("18")), "18.00")

    def test_tolerance_is_one_cent(self):
        self.assertTrue(within_tolerance("10.00", "10.01"))
        self.assertFalse(within_tolerance("10.00", "10.02"))


class OrderingTests(unittest.TestCase):
    FIELDS = {"price": "price", "productName": "name"}

    def test_known_field_and_direction(self):
        self.assertEqual(resolve_ordering("price", "desc", self.FIELDS, "id"), "-price")
        self.assertEqual(resolve_ordering("productName", "asc", self.FIELDS, "id"), "name")

    def test_unknown_field_falls_back(self):
        self.assertEqual(resolve_ordering("rating", None, self.FIELDS, "id"), "id")
