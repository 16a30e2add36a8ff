import unittest
from decimal import Decimal
from unittest.mock import patch

from apps.carts.exceptions import (
    DuplicateItem,
    InvalidQuantity,
    ItemNotInCart,
    NoActiveCart,
)
from apps.carts.services import CartService
from apps.catalog.exceptions import ProductNotFound
from apps.inventory.exceptions import InsufficientStock, OutOfStock
from .fakes import (
    DummyAtomic,
    FakeCartItemRepository,
    FakeCartMapper,
    FakeCartRepository,
    FakeProductRepository,
    FakeStock,
    make_product,
)

USER_ID = 7


class CartServiceTestCase(unittest.TestCase):
    def setUp(self):
        patcher = patch("apps.carts.services.transaction.atomic", new=DummyAtomic())
        patcher.start()
        self.addCleanup(patcher.stop)
        self.products = FakeProductRepository(
            make_product(1, "Desk Lamp", "10.00", discount="5", quantity=5),
            make_product(2, "Notebook", "2.50", quantity=0),
            make_product(3, "Pen", "1.25", quantity=100),
        )
        self.carts = FakeCartRepository()
        self.items = FakeCartItemRepository()
        self.service = CartService(
            carts=self.carts,
            items=self.items,
            products=self.products,
            inventory=FakeStock(self.products),
            cart_mapper=FakeCartMapper(self.items),
        )

    def cart(self):
        return self.carts.get(user_id=USER_ID)


class AddLineTests(CartServiceTestCase):
    def test_first_add_creates_cart_and_prices_line(self):
        dto = self.service.add_line(USER_ID, 1, 2)
        self.assertEqual(dto["total_price"], "20.00")
        self.assertEqual(dto["items"], [(1, 2, "10.00")])
        item = self.items.items[0]
        self.assertEqual(item.discount, Decimal("5.00"))

    def test_second_product_accumulates_total(self):
        self.service.add_line(USER_ID, 1, 1)
        dto = self.service.add_line(USER_ID, 3, 4)
        self.assertEqual(dto["total_price"], "15.00")
        self.assertEqual(len(self.carts.carts), 1)

    def test_duplicate_product_is_refused(self):
        self.service.add_line(USER_ID, 1, 1)
        with self.assertRaises(DuplicateItem) as ctx:
            self.service.add_line(USER_ID, 1, 1)
        self.assertEqual(ctx.exception.status_code, 409)
        self.assertEqual(self.cart().total_price, Decimal("10.00"))

    def test_out_of_stock_product(self):
        with self.assertRaises(OutOfStock):
            self.service.add_line(USER_ID, 2, 1)
        self.assertEqual(self.items.items, [])

    def test_quantity_beyond_stock(self):
        with self.assertRaises(InsufficientStock) as ctx:
            self.service.add_line(USER_ID, 1, 6)
        self.assertEqual(ctx.exception.details["available"], 5)

    def test_unknown_product_does_not_create_cart(self):
        with self.assertRaises(ProductNotFound):
            self.service.add_line(USER_ID, 99, 1)
        self.assertIsNone(self.cart())

    def test_non_positive_quantity(self):
        with self.assertRaises(InvalidQuantity):
            self.service.add_line(USER_ID, 1, 0)


class AdjustLineQuantityTests(CartServiceTestCase):
    def setUp(self):
        super().setUp()
        self.service.add_line(USER_ID, 1, 2)

    def test_increment_reprices_line_to_current_special_price(self):
        self.products.products[1].special_price = Decimal("12.00")
        dto = self.service.adjust_line_quantity(USER_ID, 1, 1)
        self.assertEqual(dto["items"], [(1, 3, "12.00")])
        self.assertEqual(dto["total_price"], "36.00")
        self.assertEqual(self.items.items[0].discount, Decimal("15.00"))

    def test_decrement_to_zero_removes_line(self):
        self.service.adjust_line_quantity(USER_ID, 1, -1)
        dto = self.service.adjust_line_quantity(USER_ID, 1, -1)
        self.assertEqual(dto["items"], [])
        self.assertEqual(dto["total_price"], "0.00")

    def test_decrement_refused_when_sold_out(self):
        self.products.products[1].quantity = 0
        with self.assertRaises(OutOfStock):
            self.service.adjust_line_quantity(USER_ID, 1, -1)
        self.assertEqual(self.items.items[0].quantity, 2)

    def test_increment_refused_when_sold_out(self):
        self.products.products[1].quantity = 0
        with self.assertRaises(OutOfStock):
            self.service.adjust_line_quantity(USER_ID, 1, 1)

    def test_increment_past_shelf_quantity_is_allowed(self):
        self.products.products[1].quantity = 2
        dto = self.service.adjust_line_quantity(USER_ID, 1, 1)
        self.assertEqual(dto["items"], [(1, 3, "10.00")])
        self.assertEqual(dto["total_price"], "30.00")

    def test_only_single_unit_steps(self):
        for delta in (0, 2, -3):
            with self.assertRaises(InvalidQuantity):
                self.service.adjust_line_quantity(USER_ID, 1, delta)

    def test_product_not_in_cart(self):
        with self.assertRaises(ItemNotInCart):
            self.service.adjust_line_quantity(USER_ID, 3, 1)

    def test_user_without_cart(self):
        with self.assertRaises(NoActiveCart):
            self.service.adjust_line_quantity(USER_ID + 1, 1, 1)


class RemoveAndClearTests(CartServiceTestCase):
    def test_remove_line_subtracts_its_total(self):
        self.service.add_line(USER_ID, 1, 2)
        self.service.add_line(USER_ID, 3, 2)
        dto = self.service.remove_line(USER_ID, 1)
        self.assertEqual(dto["total_price"], "2.50")
        self.assertEqual(dto["items"], [(3, 2, "1.25")])

    def test_remove_missing_line(self):
        self.service.add_line(USER_ID, 1, 1)
        with self.assertRaises(ItemNotInCart):
            self.service.remove_line(USER_ID, 3)

    def test_clear_is_idempotent(self):
        self.assertEqual(self.service.clear_cart(USER_ID), 0)
        self.service.add_line(USER_ID, 1, 1)
        self.service.add_line(USER_ID, 3, 1)
        self.assertEqual(self.service.clear_cart(USER_ID), 2)
        self.assertEqual(self.service.clear_cart(USER_ID), 0)
        self.assertEqual(self.cart().total_price, Decimal("0.00"))

    def test_get_cart_without_one(self):
        with self.assertRaises(NoActiveCart):
            self.service.get_cart_for_user(USER_ID)


class CatalogSyncTests(CartServiceTestCase):
    def setUp(self):
        super().setUp()
        self.service.add_line(USER_ID, 1, 2)
        self.service.add_line(USER_ID, 3, 4)
        self.service.add_line(USER_ID + 1, 1, 1)

    def test_price_change_reprices_every_cart(self):
        self.products.products[1].special_price = Decimal("8.00")
        self.assertEqual(self.service.refresh_product_price(1), 2)
        self.assertEqual(self.cart().total_price, Decimal("21.00"))
        self.assertEqual(self.carts.get(user_id=USER_ID + 1).total_price, Decimal("8.00"))

    def test_product_removal_shrinks_totals(self):
        self.assertEqual(self.service.remove_product_from_all_carts(1), 2)
        self.assertEqual(self.cart().total_price, Decimal("5.00"))
        self.assertEqual(self.carts.get(user_id=USER_ID + 1).total_price, Decimal("0.00"))
        self.assertEqual(self.items.list_for_product(1), [])

    def test_drifted_total_is_reset_to_line_sum(self):
        self.cart().total_price = Decimal("999.00")
        self.service.remove_line(USER_ID, 3)
        self.assertEqual(self.cart().total_price, Decimal("20.00"))


class TotalTracksLinesTests(CartServiceTestCase):
    def assert_total_matches_lines(self):
        cart = self.cart()
        line_sum = sum(
            (i.product_price * i.quantity for i in self.items.list_for_cart(cart.id)),
            Decimal("0.00"),
        )
        self.assertEqual(cart.total_price, line_sum)

    def reprice(self, product_id, special_price):
        self.products.products[product_id].special_price = Decimal(special_price)

    def test_mixed_sequence_with_repricing(self):
        steps = [
            lambda: self.service.add_line(USER_ID, 1, 2),
            lambda: self.service.add_line(USER_ID, 3, 4),
            lambda: self.reprice(1, "12.00"),
            lambda: self.service.adjust_line_quantity(USER_ID, 1, 1),
            lambda: self.reprice(3, "1.10"),
            lambda: self.service.refresh_product_price(3),
            lambda: self.service.adjust_line_quantity(USER_ID, 3, -1),
            lambda: self.reprice(1, "9.99"),
            lambda: self.service.refresh_product_price(1),
            lambda: self.service.remove_line(USER_ID, 3),
            lambda: self.service.adjust_line_quantity(USER_ID, 1, -1),
        ]
        with patch.object(self.service, "logger") as log:
            for step in steps:
                step()
                self.assert_total_matches_lines()
        # Totals never had to be reset from a drifted value
        log.error.assert_not_called()
        self.assertEqual(self.cart().total_price, Decimal("19.98"))


class GetOrCreateCartTests(CartServiceTestCase):
    def test_creates_once_then_returns_existing(self):
        first, created = self.service.get_or_create_cart(USER_ID)
        self.assertTrue(created)
        self.assertEqual(first["total_price"], "0.00")
        again, created_again = self.service.get_or_create_cart(USER_ID)
        self.assertFalse(created_again)
        self.assertEqual(again["id"], first["id"])
