from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from apps.carts.models import Cart, CartItem
    from apps.orders.dtos import OrderDTO
    from apps.orders.models import Order, Payment
    from apps.users.models import Address, User


class OrderRepositoryProtocol(Protocol):
    def save(self, order_data: Dict[str, Any], items: List[Dict[str, Any]]) -> "Order": ...

    def find_by_id(self, order_id: int) -> Optional["Order"]: ...

    def list_for_user(self, user_id: int) -> Iterable["Order"]: ...


class PaymentRepositoryProtocol(Protocol):
    def create(self, **data) -> "Payment": ...


class CartReaderProtocol(Protocol):
    def get_for_update(self, **filters) -> Optional["Cart"]: ...


class CartLineReaderProtocol(Protocol):
    def list_for_cart(self, cart_id: int) -> Iterable["CartItem"]: ...


class CartClearerProtocol(Protocol):
    def clear_cart(self, user_id: int) -> int: ...


class AddressLookupProtocol(Protocol):
    def get(self, **filters) -> Optional["Address"]: ...


class UserLookupProtocol(Protocol):
    def get(self, **filters) -> Optional["User"]: ...


class InventoryProtocol(Protocol):
    def current_quantity(self, product_id: int) -> int: ...

    def check_available(self, product_id: int, quantity: int) -> bool: ...

    def decrement(self, product_id: int, quantity: int) -> None: ...


class OrderMapperProtocol(Protocol):
    def to_dto(self, order: "Order") -> "OrderDTO": ...

    def many_to_dto(self, orders: Iterable["Order"]) -> List["OrderDTO"]: ...
