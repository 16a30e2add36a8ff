from apps.common.repository import GenericRepository
from .models import Cart, CartItem


class CartRepository(GenericRepository[Cart]):
    def __init__(self):
        super().__init__(Cart)

    def _base_queryset(self):
        return self.model.objects.prefetch_related("items__product__categories")

    def get(self, **filters):
        return self._base_queryset().filter(**filters).first()

    def list(self, **filters):  # type: ignore[override]
        return self._base_queryset().filter(**filters).order_by("id")


class CartItemRepository(GenericRepository[CartItem]):
    def __init__(self):
        super().__init__(CartItem)

    def list_for_cart(self, cart_id: int):
        return (
            self.model.objects.filter(cart_id=cart_id)
            .select_related("product")
            .order_by("id")
        )

    def list_for_product(self, product_id: int):
        return self.model.objects.filter(product_id=product_id).order_by("cart_id")

    def get_for_cart_product(self, cart_id: int, product_id: int):
        return self.model.objects.filter(cart_id=cart_id, product_id=product_id).first()

    def delete_for_cart(self, cart_id: int) -> int:
        deleted, _ = self.model.objects.filter(cart_id=cart_id).delete()
        return deleted
