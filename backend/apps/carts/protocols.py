from __future__ import annotations

from typing import Iterable, List, Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from apps.carts.dtos import CartDTO
    from apps.carts.models import Cart, CartItem
    from apps.catalog.models import Product


class CartRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional["Cart"]: ...

    def get_for_update(self, **filters) -> Optional["Cart"]: ...

    def list(self, **filters) -> Iterable["Cart"]: ...

    def create(self, **data) -> "Cart": ...

    def update(self, cart: "Cart", **data) -> "Cart": ...


class CartItemRepositoryProtocol(Protocol):
    def list_for_cart(self, cart_id: int) -> Iterable["CartItem"]: ...

    def list_for_product(self, product_id: int) -> Iterable["CartItem"]: ...

    def get_for_cart_product(self, cart_id: int, product_id: int) -> Optional["CartItem"]: ...

    def create(self, **data) -> "CartItem": ...

    def update(self, item: "CartItem", **data) -> "CartItem": ...

    def delete(self, item: "CartItem") -> None: ...

    def delete_for_cart(self, cart_id: int) -> int: ...


class ProductLookupProtocol(Protocol):
    def get(self, **filters) -> Optional["Product"]: ...


class StockReaderProtocol(Protocol):
    def current_quantity(self, product_id: int) -> int: ...


class CartMapperProtocol(Protocol):
    def to_dto(self, cart: "Cart") -> "CartDTO": ...

    def many_to_dto(self, carts: Iterable["Cart"]) -> List["CartDTO"]: ...
