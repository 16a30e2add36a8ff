from typing import Any, Dict, List

from apps.common.repository import GenericRepository
from .models import Order, OrderItem, Payment


class PaymentRepository(GenericRepository[Payment]):
    def __init__(self):
        super().__init__(Payment)


class OrderRepository(GenericRepository[Order]):
    """Write-once order storage; an order and its items are inserted together."""

    def __init__(self):
        super().__init__(Order)

    def _base_queryset(self):
        return self.model.objects.select_related("payment").prefetch_related("items")

    def save(self, order_data: Dict[str, Any], items: List[Dict[str, Any]]) -> Order:
        order = self.model.objects.create(**order_data)
        OrderItem.objects.bulk_create([OrderItem(order=order, **item) for item in items])
        return self.find_by_id(order.id)

    def find_by_id(self, order_id: int):
        return self._base_queryset().filter(id=order_id).first()

    def list_for_user(self, user_id: int):
        return self._base_queryset().filter(user_id=user_id).order_by("-order_date", "-id")
