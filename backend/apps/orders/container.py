from __future__ import annotations

from django.conf import settings

from apps.carts.container import build_cart_service
from apps.carts.repositories import CartItemRepository, CartRepository
from apps.inventory.container import build_inventory_ledger
from apps.users.repositories import AddressRepository, UserRepository

from .mappers import OrderMapper
from .repositories import OrderRepository, PaymentRepository
from .services import CheckoutService, OrderService


def build_checkout_service() -> CheckoutService:
    return CheckoutService(
        carts=CartRepository(),
        cart_items=CartItemRepository(),
        cart_service=build_cart_service(),
        addresses=AddressRepository(),
        users=UserRepository(),
        payments=PaymentRepository(),
        orders=OrderRepository(),
        inventory=build_inventory_ledger(),
        order_mapper=OrderMapper(),
        initial_status=settings.ORDER_INITIAL_STATUS,
    )


def build_order_service() -> OrderService:
    return OrderService(orders=OrderRepository(), order_mapper=OrderMapper())
