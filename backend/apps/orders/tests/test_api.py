from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.catalog.models import Product
from apps.orders.models import Payment
from apps.users.models import Address, User


class OrderApiTests(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            username="buyer1", email="buyer1@example.com", password="Secret#123"
        )
        self.other = User.objects.create_user(
            username="buyer2", email="buyer2@example.com", password="Secret#123"
        )
        self.staff = User.objects.create_user(
            username="staff1", email="staff1@example.com", password="Secret#123", is_staff=True
        )
        self.address = Address.objects.create(
            user=self.user,
            street="Main Street",
            building_name="Tower Block",
            city="Springfield",
            state="IL",
            country="US",
            zipcode="62701",
        )
        self.lamp = Product.objects.create(
            name="Desk Lamp", description="Warm light", quantity=5, price=Decimal("10.00")
        )
        self.payload = {
            "addressId": self.address.id,
            "paymentMethod": "card",
            "pgName": "stripe",
            "pgPaymentId": "pi_123",
            "pgStatus": "succeeded",
            "pgResponseMessage": "Payment captured",
        }

    def _login(self, username):
        res = self.client.post(
            reverse("auth-login"), {"username": username, "password": "Secret#123"}, format="json"
        )
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {res.data['access']}")

    def _place(self):
        self.client.post(f"/api/carts/products/{self.lamp.id}/quantity/2/")
        return self.client.post("/api/orders/", self.payload, format="json")

    def test_checkout_requires_authentication(self):
        res = self.client.post("/api/orders/", self.payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_place_and_read_order(self):
        self._login("buyer1")
        res = self._place()
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["totalAmount"], "20.00")
        self.assertEqual(res.data["orderStatus"], "Accepted")
        self.assertEqual(res.data["email"], "buyer1@example.com")
        self.assertEqual(res.data["address"]["city"], "Springfield")
        self.assertEqual(res.data["payment"]["pgPaymentId"], "pi_123")
        self.assertEqual(res.data["items"][0]["productName"], "Desk Lamp")
        self.assertEqual(res.data["items"][0]["orderedProductPrice"], "10.00")

        listed = self.client.get("/api/orders/")
        self.assertEqual([o["id"] for o in listed.data], [res.data["id"]])
        detail = self.client.get(f"/api/orders/{res.data['id']}/")
        self.assertEqual(detail.status_code, status.HTTP_200_OK)

        cart = self.client.get("/api/carts/users/cart/")
        self.assertEqual(cart.data["items"], [])

    def test_checkout_failures_map_to_codes(self):
        self._login("buyer1")
        res = self.client.post("/api/orders/", self.payload, format="json")
        self.assertEqual(res.data["error"]["code"], "NO_ACTIVE_CART")

        self.client.post(f"/api/carts/products/{self.lamp.id}/quantity/1/")
        self.client.delete("/api/carts/users/cart/")
        res = self.client.post("/api/orders/", self.payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["error"]["code"], "EMPTY_CART")

        self.client.post(f"/api/carts/products/{self.lamp.id}/quantity/1/")
        res = self.client.post("/api/orders/", {**self.payload, "addressId": 987654}, format="json")
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(res.data["error"]["code"], "ADDRESS_NOT_FOUND")

    def test_missing_gateway_fields(self):
        self._login("buyer1")
        payload = dict(self.payload)
        payload.pop("pgPaymentId")
        res = self.client.post("/api/orders/", payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("pgPaymentId", res.data["error"]["details"])

    def test_gateway_fields_are_stored_as_sent(self):
        self._login("buyer1")
        self.payload.update(
            {
                "paymentMethod": "upi",
                "pgName": " stripe ",
                "pgStatus": " succeeded\n",
                "pgResponseMessage": "  captured  ",
            }
        )
        res = self._place()
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        payment = Payment.objects.get(id=res.data["payment"]["id"])
        self.assertEqual(payment.payment_method, "upi")
        self.assertEqual(payment.pg_name, " stripe ")
        self.assertEqual(payment.pg_status, " succeeded\n")
        self.assertEqual(payment.pg_response_message, "  captured  ")

    def test_other_users_cannot_read_order(self):
        self._login("buyer1")
        order_id = self._place().data["id"]

        self._login("buyer2")
        res = self.client.get(f"/api/orders/{order_id}/")
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(res.data["error"]["code"], "ORDER_NOT_FOUND")

        self._login("staff1")
        self.assertEqual(self.client.get(f"/api/orders/{order_id}/").status_code, status.HTTP_200_OK)
