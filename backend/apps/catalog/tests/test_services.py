import unittest
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import patch

from apps.carts.tests.fakes import DummyAtomic
from apps.catalog.exceptions import ProductNotFound
from apps.catalog.models import Product
from apps.catalog.services import CategoryService, ProductService


class FakeCache:
    def __init__(self):
        self.store = {}

    def get(self, key, default=None):
        return self.store.get(key, default)

    def set(self, key, value, timeout=None):
        self.store[key] = value


class StubCategoryManager:
    def __init__(self):
        self._categories = []

    def all(self):
        return list(self._categories)


class FakeProductRepository:
    def __init__(self):
        self.products = {}
        self.deleted = []

    def _priced(self, product):
        product.special_price = Product.compute_special_price(product.price, product.discount)
        return product

    def get(self, **filters):
        return self.products.get(filters.get("id"))

    def create(self, **data):
        product = SimpleNamespace(id=len(self.products) + 1, categories=StubCategoryManager(), **data)
        self.products[product.id] = self._priced(product)
        return product

    def update(self, product, **data):
        for key, value in data.items():
            setattr(product, key, value)
        return self._priced(product)

    def delete(self, product):
        self.deleted.append(product.id)
        self.products.pop(product.id)

    def set_categories(self, product, category_ids):
        product.categories._categories = [SimpleNamespace(id=i, name=f"cat{i}") for i in category_ids]


class FakeCategoryRepository:
    def __init__(self):
        self.categories = []

    def get(self, **filters):
        return next((c for c in self.categories if c.id == filters.get("id")), None)

    def list(self, **filters):
        return list(self.categories)

    def create(self, **data):
        category = SimpleNamespace(id=len(self.categories) + 1, **data)
        self.categories.append(category)
        return category


class RecordingCartSync:
    def __init__(self):
        self.repriced = []
        self.removed = []

    def refresh_product_price(self, product_id):
        self.repriced.append(product_id)
        return 1

    def remove_product_from_all_carts(self, product_id):
        self.removed.append(product_id)
        return 1


class ProductServiceTests(unittest.TestCase):
    def setUp(self):
        patcher = patch("apps.catalog.services.transaction.atomic", new=DummyAtomic())
        patcher.start()
        self.addCleanup(patcher.stop)
        self.products = FakeProductRepository()
        self.cart_sync = RecordingCartSync()
        self.service = ProductService(
            products=self.products,
            categories=FakeCategoryRepository(),
            cart_sync=self.cart_sync,
        )
        self.lamp = self.service.create_product(
            {"name": "Desk Lamp", "description": "Warm light", "price": "20.00", "discount": "10", "quantity": 5}
        )

    def test_create_derives_special_price(self):
        self.assertEqual(self.lamp.special_price, "18.00")
        self.assertEqual(self.lamp.quantity, 5)

    def test_price_change_reprices_carts(self):
        dto = self.service.update_product(self.lamp.id, {"price": Decimal("30.00")}, partial=True)
        self.assertEqual(dto.special_price, "27.00")
        self.assertEqual(self.cart_sync.repriced, [self.lamp.id])

    def test_stock_change_leaves_carts_alone(self):
        self.service.update_product(self.lamp.id, {"quantity": 9}, partial=True)
        self.assertEqual(self.cart_sync.repriced, [])

    def test_delete_clears_carts_first(self):
        self.service.delete_product(self.lamp.id)
        self.assertEqual(self.cart_sync.removed, [self.lamp.id])
        self.assertEqual(self.products.deleted, [self.lamp.id])

    def test_missing_product(self):
        with self.assertRaises(ProductNotFound):
            self.service.get_product(404)
        with self.assertRaises(ProductNotFound):
            self.service.delete_product(404)
        self.assertEqual(self.cart_sync.removed, [])


class CategoryServiceTests(unittest.TestCase):
    def setUp(self):
        self.cache = FakeCache()
        self.repo = FakeCategoryRepository()
        self.service = CategoryService(categories=self.repo, cache_backend=self.cache)

    def test_list_is_cached_until_a_category_is_created(self):
        self.service.create_category({"name": "Books"})
        self.assertEqual([c.name for c in self.service.list_categories()], ["Books"])
        self.repo.categories.append(SimpleNamespace(id=99, name="Sneaky"))
        self.assertEqual([c.name for c in self.service.list_categories()], ["Books"])

        self.service.create_category({"name": "Outdoors"})
        names = [c.name for c in self.service.list_categories()]
        self.assertEqual(names, ["Books", "Sneaky", "Outdoors"])

    def test_cache_can_be_disabled(self):
        service = CategoryService(categories=self.repo, cache_backend=self.cache, disable_cache=True)
        self.repo.categories.append(SimpleNamespace(id=1, name="Books"))
        self.assertEqual(len(service.list_categories()), 1)
        self.assertEqual(self.cache.store, {})
