from django.conf import settings
from django.db import models

from apps.catalog.models import Product
from apps.users.models import Address


class WriteOnceModel(models.Model):
    """Rows are inserted once and never saved again."""

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError(f"{type(self).__name__} records cannot be modified once placed")
        return super().save(*args, **kwargs)


class Payment(WriteOnceModel):
    payment_method = models.CharField(max_length=50)
    # Gateway fields are stored as received
    pg_name = models.CharField(max_length=100)
    pg_payment_id = models.CharField(max_length=255)
    pg_status = models.CharField(max_length=100)
    pg_response_message = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "payments"

    def __str__(self):
        return f"Payment {self.id} via {self.pg_name}"


class Order(WriteOnceModel):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="orders")
    email = models.EmailField()
    order_date = models.DateTimeField(auto_now_add=True)
    # Copied from the cart total at checkout
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    order_status = models.CharField(max_length=50)
    payment = models.OneToOneField(Payment, on_delete=models.PROTECT, related_name="order")
    address = models.ForeignKey(
        Address, on_delete=models.SET_NULL, null=True, blank=True, related_name="orders"
    )
    shipping_street = models.CharField(max_length=150)
    shipping_building_name = models.CharField(max_length=150)
    shipping_city = models.CharField(max_length=100)
    shipping_state = models.CharField(max_length=100)
    shipping_country = models.CharField(max_length=100)
    shipping_zipcode = models.CharField(max_length=20)

    class Meta:
        db_table = "orders"
        ordering = ["-order_date", "-id"]

    def __str__(self):
        return f"Order {self.id} for {self.user_id}"


class OrderItem(WriteOnceModel):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    product = models.ForeignKey(
        Product, on_delete=models.SET_NULL, null=True, blank=True, related_name="order_items"
    )
    product_name = models.CharField(max_length=255)
    quantity = models.PositiveIntegerField()
    discount = models.DecimalField(max_digits=10, decimal_places=2)
    ordered_product_price = models.DecimalField(max_digits=10, decimal_places=2)

    class Meta:
        db_table = "order_items"
        ordering = ["id"]
