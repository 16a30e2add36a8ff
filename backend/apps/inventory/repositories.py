from typing import Optional

from django.db.models import F

from apps.catalog.models import Product


class ProductStockRepository:
    """Stock column access for products; never touches prices."""

    def __init__(self):
        self.model = Product

    def current_quantity(self, product_id: int, *, lock: bool = False) -> Optional[int]:
        qs = self.model.objects.filter(id=product_id)
        if lock:
            qs = qs.select_for_update()
        return qs.values_list("quantity", flat=True).first()

    def decrement_if_available(self, product_id: int, quantity: int) -> bool:
        # Single conditional UPDATE: the row only changes while stock still covers it
        updated = self.model.objects.filter(
            id=product_id, quantity__gte=quantity
        ).update(quantity=F("quantity") - quantity)
        return updated == 1
