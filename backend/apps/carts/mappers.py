from typing import Iterable, List, Optional

from apps.catalog.mappers import ProductMapper
from apps.common.money import money_str, to_money

from .dtos import CartDTO, CartItemDTO
from .models import Cart, CartItem


class CartItemMapper:
    def __init__(self, product_mapper: Optional[ProductMapper] = None) -> None:
        self.product_mapper = product_mapper or ProductMapper()

    def to_dto(self, item: CartItem) -> CartItemDTO:
        return CartItemDTO(
            product=self.product_mapper.to_dto(item.product),
            quantity=item.quantity,
            unit_price=money_str(item.product_price),
            discount=money_str(item.discount),
            line_total=money_str(to_money(item.product_price) * item.quantity),
        )

    def many_to_dto(self, items: Iterable[CartItem]) -> List[CartItemDTO]:
        return [self.to_dto(i) for i in items]


class CartMapper:
    def __init__(self, item_mapper: Optional[CartItemMapper] = None) -> None:
        self.item_mapper = item_mapper or CartItemMapper()

    def to_dto(self, cart: Cart) -> CartDTO:
        return CartDTO(
            id=cart.id,
            user_id=cart.user_id,
            total_price=money_str(cart.total_price),
            items=self.item_mapper.many_to_dto(cart.items.all()),
        )

    def many_to_dto(self, carts: Iterable[Cart]) -> List[CartDTO]:
        return [self.to_dto(c) for c in carts]
