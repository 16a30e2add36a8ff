from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.carts.models import Cart
from apps.catalog.models import Category, Product
from apps.users.models import User


class CatalogApiTests(APITestCase):
    def setUp(self):
        self.customer = User.objects.create_user(
            username="buyer1", email="buyer1@example.com", password="Secret#123"
        )
        self.staff = User.objects.create_user(
            username="staff1", email="staff1@example.com", password="Secret#123", is_staff=True
        )
        self.books = Category.objects.create(name="Books")
        self.lamp = Product.objects.create(
            name="Desk Lamp", description="Warm light", quantity=5, price=Decimal("20.00")
        )
        self.novel = Product.objects.create(
            name="Novel", description="A long story", quantity=8, price=Decimal("12.00")
        )
        self.novel.categories.add(self.books)

    def _login(self, username):
        res = self.client.post(
            reverse("auth-login"), {"username": username, "password": "Secret#123"}, format="json"
        )
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {res.data['access']}")

    def test_listing_is_public_paginated_and_filterable(self):
        res = self.client.get("/api/products/", {"sortBy": "price", "sortOrder": "desc"})
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["count"], 2)
        self.assertEqual([p["name"] for p in res.data["results"]], ["Desk Lamp", "Novel"])

        filtered = self.client.get("/api/products/", {"categoryId": self.books.id})
        self.assertEqual([p["id"] for p in filtered.data["results"]], [self.novel.id])

        bad = self.client.get("/api/products/", {"categoryId": "abc"})
        self.assertEqual(bad.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unknown_product(self):
        res = self.client.get("/api/products/987654/")
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(res.data["error"]["code"], "PRODUCT_NOT_FOUND")

    def test_writes_are_staff_only(self):
        payload = {"name": "Kettle", "description": "Boils water", "price": "30.00", "quantity": 3}
        self._login("buyer1")
        self.assertEqual(self.client.post("/api/products/", payload, format="json").status_code, 403)
        self._login("staff1")
        res = self.client.post("/api/products/", {**payload, "discount": "50"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["specialPrice"], "15.00")

    def test_price_update_reaches_open_carts(self):
        self._login("buyer1")
        self.client.post(f"/api/carts/products/{self.lamp.id}/quantity/2/")

        self._login("staff1")
        res = self.client.patch(f"/api/products/{self.lamp.id}/", {"discount": "25"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["specialPrice"], "15.00")

        cart = Cart.objects.get(user=self.customer)
        self.assertEqual(cart.total_price, Decimal("30.00"))
        self.assertEqual(cart.items.get().product_price, Decimal("15.00"))

    def test_delete_removes_product_from_carts(self):
        self._login("buyer1")
        self.client.post(f"/api/carts/products/{self.lamp.id}/quantity/1/")
        self.client.post(f"/api/carts/products/{self.novel.id}/quantity/1/")

        self._login("staff1")
        self.assertEqual(self.client.delete(f"/api/products/{self.lamp.id}/").status_code, 204)
        cart = Cart.objects.get(user=self.customer)
        self.assertEqual(cart.total_price, Decimal("12.00"))
        self.assertEqual(list(cart.items.values_list("product_id", flat=True)), [self.novel.id])

    def test_categories(self):
        self.assertEqual([c["name"] for c in self.client.get("/api/categories/").data], ["Books"])
        self._login("staff1")
        res = self.client.post("/api/categories/", {"name": "Books"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        created = self.client.post("/api/categories/", {"name": "Garden"}, format="json")
        self.assertEqual(created.status_code, status.HTTP_201_CREATED)
