from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from apps.common.money import to_money


class Category(models.Model):
    name = models.CharField(max_length=100, unique=True)

    class Meta:
        db_table = "categories"
        ordering = ["name"]

    def __str__(self):
        return self.name


class Product(models.Model):
    name = models.CharField(max_length=255)
    description = models.TextField()
    image = models.CharField(max_length=255, default="default.png")
    # Available stock; only checkout decrements it
    quantity = models.PositiveIntegerField(default=0)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    # Percentage off the list price
    discount = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal("0"),
        validators=[MinValueValidator(0), MaxValueValidator(100)],
    )
    special_price = models.DecimalField(max_digits=10, decimal_places=2, editable=False)
    categories = models.ManyToManyField(Category, related_name="products", blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "products"
        ordering = ["id"]
        indexes = [
            models.Index(fields=["name"], name="product_name_idx"),
        ]

    def __str__(self):
        return self.name

    @staticmethod
    def compute_special_price(price, discount) -> Decimal:
        price = to_money(price)
        return to_money(price - price * Decimal(str(discount)) / Decimal("100"))

    def save(self, *args, **kwargs):
        self.special_price = self.compute_special_price(self.price, self.discount)
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and {"price", "discount"} & set(update_fields):
            kwargs["update_fields"] = list(set(update_fields) | {"special_price"})
        super().save(*args, **kwargs)
