from __future__ import annotations

from decimal import Decimal
from typing import List, Tuple

from django.db import IntegrityError, transaction

from apps.api.exceptions import logged_rejection
from apps.catalog.exceptions import ProductNotFound
from apps.common import get_logger
from apps.common.money import to_money, within_tolerance
from apps.inventory.exceptions import InsufficientStock, OutOfStock
from .dtos import CartDTO
from .exceptions import (
    AlreadyZero,
    DuplicateItem,
    InvalidQuantity,
    ItemNotInCart,
    NoActiveCart,
)
from .protocols import (
    CartItemRepositoryProtocol,
    CartMapperProtocol,
    CartRepositoryProtocol,
    ProductLookupProtocol,
    StockReaderProtocol,
)

logger = get_logger(__name__).bind(component="carts", layer="service")

ALLOWED_DELTAS = (1, -1)
ZERO = Decimal("0.00")


class CartService:
    """
    One cart per user, holding at most one line per product.

    Every mutation locks the cart row and leaves ``total_price`` equal to the
    sum of ``product_price * quantity`` over the cart's lines.
    """

    def __init__(
        self,
        carts: CartRepositoryProtocol,
        items: CartItemRepositoryProtocol,
        products: ProductLookupProtocol,
        inventory: StockReaderProtocol,
        cart_mapper: CartMapperProtocol,
    ):
        self.carts = carts
        self.items = items
        self.products = products
        self.inventory = inventory
        self.cart_mapper = cart_mapper
        self.logger = logger.bind(service="CartService")

    # Reads

    def list_carts(self) -> List[CartDTO]:
        self.logger.debug("Listing all carts")
        return self.cart_mapper.many_to_dto(self.carts.list())

    def get_cart_for_user(self, user_id: int) -> CartDTO:
        cart = self.carts.get(user_id=user_id)
        if cart is None:
            self.logger.info("No cart for user", user_id=user_id)
            raise NoActiveCart(details={"userId": str(user_id)})
        return self.cart_mapper.to_dto(cart)

    # Mutations

    def get_or_create_cart(self, user_id: int) -> Tuple[CartDTO, bool]:
        with transaction.atomic():
            cart, created = self._ensure_cart(user_id)
        if created:
            self.logger.info("Cart created", user_id=user_id, cart_id=cart.id)
        return self._reload(cart.id), created

    def add_line(self, user_id: int, product_id: int, quantity: int) -> CartDTO:
        """Add a new product line, creating the user's cart on first use."""
        if quantity <= 0:
            raise InvalidQuantity(
                "Quantity must be a positive integer", details={"quantity": str(quantity)}
            )
        rejected = logged_rejection(self.logger, "Add to cart", user_id=user_id, product_id=product_id)
        with rejected, transaction.atomic():
            product = self._get_product(product_id)
            cart, created = self._ensure_cart(user_id)
            if self.items.get_for_cart_product(cart.id, product_id) is not None:
                raise DuplicateItem(
                    f"Product {product.name} already exists in the cart",
                    details={"productId": str(product_id)},
                )
            stock = self.inventory.current_quantity(product_id)
            if stock == 0:
                raise OutOfStock(
                    f"{product.name} is not available", details={"productId": str(product_id)}
                )
            if stock < quantity:
                raise InsufficientStock(
                    product_id, quantity, available=stock, product_name=product.name
                )
            unit_price = to_money(product.special_price)
            self.items.create(
                cart_id=cart.id,
                product_id=product_id,
                quantity=quantity,
                discount=to_money(product.discount),
                product_price=unit_price,
            )
            self._commit_total(cart, to_money(cart.total_price) + unit_price * quantity)
        self.logger.info(
            "Cart line added",
            user_id=user_id,
            cart_id=cart.id,
            product_id=product_id,
            quantity=quantity,
            cart_created=created,
        )
        return self._reload(cart.id)

    def adjust_line_quantity(self, user_id: int, product_id: int, delta: int) -> CartDTO:
        """
        Move a line's quantity one unit up or down.

        The line is repriced to the product's current special price; a line
        reaching zero is removed.
        """
        if delta not in ALLOWED_DELTAS:
            raise InvalidQuantity(details={"delta": delta})
        rejected = logged_rejection(self.logger, "Quantity change", user_id=user_id, product_id=product_id)
        with rejected, transaction.atomic():
            cart = self.carts.get_for_update(user_id=user_id)
            if cart is None:
                raise NoActiveCart(details={"userId": str(user_id)})
            product = self._get_product(product_id)
            stock = self.inventory.current_quantity(product_id)
            if stock == 0:
                raise OutOfStock(
                    f"{product.name} is not available", details={"productId": str(product_id)}
                )
            item = self.items.get_for_cart_product(cart.id, product_id)
            if item is None:
                raise ItemNotInCart(
                    f"Product {product.name} is not in the cart",
                    details={"productId": str(product_id)},
                )
            if item.quantity == 0 and delta < 0:
                raise AlreadyZero(details={"productId": str(product_id)})
            new_quantity = item.quantity + delta

            old_line = to_money(item.product_price) * item.quantity
            unit_price = to_money(product.special_price)
            proposed = to_money(cart.total_price) - old_line + unit_price * new_quantity
            if new_quantity == 0:
                self.items.delete(item)
            else:
                self.items.update(
                    item,
                    quantity=new_quantity,
                    product_price=unit_price,
                    discount=to_money(product.discount * new_quantity),
                )
            self._commit_total(cart, proposed)
        self.logger.info(
            "Cart line quantity changed",
            user_id=user_id,
            cart_id=cart.id,
            product_id=product_id,
            delta=delta,
            quantity=new_quantity,
        )
        return self._reload(cart.id)

    def remove_line(self, user_id: int, product_id: int) -> CartDTO:
        rejected = logged_rejection(self.logger, "Line removal", user_id=user_id, product_id=product_id)
        with rejected, transaction.atomic():
            cart = self.carts.get_for_update(user_id=user_id)
            if cart is None:
                raise NoActiveCart(details={"userId": str(user_id)})
            item = self.items.get_for_cart_product(cart.id, product_id)
            if item is None:
                raise ItemNotInCart(details={"productId": str(product_id)})
            line_total = to_money(item.product_price) * item.quantity
            self.items.delete(item)
            self._commit_total(cart, to_money(cart.total_price) - line_total)
        self.logger.info(
            "Cart line removed", user_id=user_id, cart_id=cart.id, product_id=product_id
        )
        return self._reload(cart.id)

    def clear_cart(self, user_id: int) -> int:
        """Drop every line and zero the total. A user without a cart is a no-op."""
        with transaction.atomic():
            cart = self.carts.get_for_update(user_id=user_id)
            if cart is None:
                self.logger.debug("Clear requested without a cart", user_id=user_id)
                return 0
            removed = self.items.delete_for_cart(cart.id)
            self.carts.update(cart, total_price=ZERO)
        self.logger.info("Cart cleared", user_id=user_id, cart_id=cart.id, lines_removed=removed)
        return removed

    # Catalog synchronisation

    def refresh_product_price(self, product_id: int) -> int:
        """Reprice every cart line holding the product; returns the number of carts touched."""
        product = self.products.get(id=product_id)
        if product is None:
            return 0
        unit_price = to_money(product.special_price)
        touched = 0
        with transaction.atomic():
            for item in list(self.items.list_for_product(product_id)):
                cart = self.carts.get_for_update(id=item.cart_id)
                old_line = to_money(item.product_price) * item.quantity
                self.items.update(item, product_price=unit_price)
                self._commit_total(
                    cart, to_money(cart.total_price) - old_line + unit_price * item.quantity
                )
                touched += 1
        self.logger.info(
            "Product repriced in carts",
            product_id=product_id,
            unit_price=str(unit_price),
            carts=touched,
        )
        return touched

    def remove_product_from_all_carts(self, product_id: int) -> int:
        touched = 0
        with transaction.atomic():
            for item in list(self.items.list_for_product(product_id)):
                cart = self.carts.get_for_update(id=item.cart_id)
                line_total = to_money(item.product_price) * item.quantity
                self.items.delete(item)
                self._commit_total(cart, to_money(cart.total_price) - line_total)
                touched += 1
        self.logger.info("Product removed from carts", product_id=product_id, carts=touched)
        return touched

    # Helpers

    def _get_product(self, product_id: int):
        product = self.products.get(id=product_id)
        if product is None:
            raise ProductNotFound(details={"productId": str(product_id)})
        return product

    def _ensure_cart(self, user_id: int) -> Tuple[object, bool]:
        """Return the user's cart locked for update, creating it when missing."""
        cart = self.carts.get_for_update(user_id=user_id)
        if cart is not None:
            return cart, False
        try:
            with transaction.atomic():
                self.carts.create(user_id=user_id, total_price=ZERO)
            created = True
        except IntegrityError:
            # A concurrent request created it first
            created = False
        return self.carts.get_for_update(user_id=user_id), created

    def _commit_total(self, cart, proposed):
        expected = sum(
            (to_money(i.product_price) * i.quantity for i in self.items.list_for_cart(cart.id)),
            ZERO,
        )
        total = to_money(proposed)
        if not within_tolerance(total, expected):
            self.logger.error(
                "Cart total drifted from its lines",
                cart_id=cart.id,
                proposed=str(total),
                expected=str(to_money(expected)),
            )
            total = to_money(expected)
        return self.carts.update(cart, total_price=total)

    def _reload(self, cart_id: int) -> CartDTO:
        return self.cart_mapper.to_dto(self.carts.get(id=cart_id))
