from __future__ import annotations

from typing import Any, Dict, List, Union

from django.db import transaction

from apps.api.exceptions import logged_rejection
from apps.carts.exceptions import EmptyCart, NoActiveCart
from apps.common import get_logger
from apps.common.money import to_money
from apps.inventory.exceptions import InsufficientStock
from apps.users.exceptions import AddressNotFound
from .commands import PlaceOrderCommand
from .dtos import OrderDTO
from .exceptions import OrderNotFound
from .protocols import (
    AddressLookupProtocol,
    CartClearerProtocol,
    CartLineReaderProtocol,
    CartReaderProtocol,
    InventoryProtocol,
    OrderMapperProtocol,
    OrderRepositoryProtocol,
    PaymentRepositoryProtocol,
    UserLookupProtocol,
)

logger = get_logger(__name__).bind(component="orders", layer="service")


class CheckoutService:
    """
    Turns the caller's cart into an order in a single transaction.

    Any failure after the first write rolls back the payment, the order, its
    items, the stock decrements and the cart clearing together.
    """

    def __init__(
        self,
        carts: CartReaderProtocol,
        cart_items: CartLineReaderProtocol,
        cart_service: CartClearerProtocol,
        addresses: AddressLookupProtocol,
        users: UserLookupProtocol,
        payments: PaymentRepositoryProtocol,
        orders: OrderRepositoryProtocol,
        inventory: InventoryProtocol,
        order_mapper: OrderMapperProtocol,
        initial_status: str = "Accepted",
    ):
        self.carts = carts
        self.cart_items = cart_items
        self.cart_service = cart_service
        self.addresses = addresses
        self.users = users
        self.payments = payments
        self.orders = orders
        self.inventory = inventory
        self.order_mapper = order_mapper
        self.initial_status = initial_status
        self.logger = logger.bind(service="CheckoutService")

    def place_order(
        self, user_id: int, data: Union[Dict[str, Any], PlaceOrderCommand]
    ) -> OrderDTO:
        cmd = data if isinstance(data, PlaceOrderCommand) else PlaceOrderCommand.from_raw(data)
        rejected = logged_rejection(
            self.logger, "Checkout", user_id=user_id, address_id=cmd.address_id
        )
        with rejected, transaction.atomic():
            cart = self.carts.get_for_update(user_id=user_id)
            if cart is None:
                raise NoActiveCart(details={"userId": str(user_id)})
            lines = list(self.cart_items.list_for_cart(cart.id))
            if not lines:
                raise EmptyCart(details={"cartId": str(cart.id)})

            address = self.addresses.get(id=cmd.address_id, user_id=user_id)
            if address is None:
                raise AddressNotFound(details={"addressId": str(cmd.address_id)})
            user = self.users.get(id=user_id)

            payment = self.payments.create(**cmd.payment_fields())
            order_data = {
                "user_id": user_id,
                "email": getattr(user, "email", "") or "",
                "total_amount": to_money(cart.total_price),
                "order_status": self.initial_status,
                "payment": payment,
                "address": address,
                "shipping_street": address.street,
                "shipping_building_name": address.building_name,
                "shipping_city": address.city,
                "shipping_state": address.state,
                "shipping_country": address.country,
                "shipping_zipcode": address.zipcode,
            }

            for line in lines:
                if not self.inventory.check_available(line.product_id, line.quantity):
                    raise InsufficientStock(
                        line.product_id,
                        line.quantity,
                        available=self.inventory.current_quantity(line.product_id),
                        product_name=line.product.name,
                    )

            items = self._freeze_lines(lines)
            order = self.orders.save(order_data, items)
            for line in lines:
                self.inventory.decrement(line.product_id, line.quantity)
            self.cart_service.clear_cart(user_id)

        self.logger.info(
            "Order placed",
            user_id=user_id,
            order_id=order.id,
            total=str(order_data["total_amount"]),
            lines=len(items),
            payment_id=payment.id,
        )
        return self.order_mapper.to_dto(order)

    @staticmethod
    def _freeze_lines(lines) -> List[Dict[str, Any]]:
        # Snapshot prices come from the cart, not the live catalog
        return [
            {
                "product_id": line.product_id,
                "product_name": line.product.name,
                "quantity": line.quantity,
                "discount": to_money(line.discount),
                "ordered_product_price": to_money(line.product_price),
            }
            for line in lines
        ]


class OrderService:
    def __init__(self, orders: OrderRepositoryProtocol, order_mapper: OrderMapperProtocol):
        self.orders = orders
        self.order_mapper = order_mapper
        self.logger = logger.bind(service="OrderService")

    def list_orders_for_user(self, user_id: int) -> List[OrderDTO]:
        self.logger.debug("Listing orders", user_id=user_id)
        return self.order_mapper.many_to_dto(self.orders.list_for_user(user_id))

    def get_order(self, user_id: int, order_id: int, *, is_privileged: bool = False) -> OrderDTO:
        """Owners see their own orders; staff may read any order."""
        order = self.orders.find_by_id(order_id)
        if order is None or (not is_privileged and order.user_id != user_id):
            self.logger.info("Order not visible", user_id=user_id, order_id=order_id)
            raise OrderNotFound(details={"orderId": str(order_id)})
        return self.order_mapper.to_dto(order)
