from __future__ import annotations

from apps.catalog.exceptions import ProductNotFound
from apps.common import get_logger
from .exceptions import InsufficientStock
from .protocols import StockRepositoryProtocol

logger = get_logger(__name__).bind(component="inventory", layer="service")


class InventoryLedger:
    """
    Read and decrement product stock.

    Stock is only ever reduced at checkout; cart operations read it to refuse
    quantities the shelf cannot cover.
    """

    def __init__(self, stock: StockRepositoryProtocol):
        self.stock = stock
        self.logger = logger.bind(service="InventoryLedger")

    def current_quantity(self, product_id: int) -> int:
        quantity = self.stock.current_quantity(product_id)
        if quantity is None:
            self.logger.info("Stock lookup for missing product", product_id=product_id)
            raise ProductNotFound(details={"productId": str(product_id)})
        return quantity

    def check_available(self, product_id: int, quantity: int) -> bool:
        stock = self.current_quantity(product_id)
        available = stock > 0 and stock >= quantity
        self.logger.debug(
            "Checked availability",
            product_id=product_id,
            requested=quantity,
            stock=stock,
            available=available,
        )
        return available

    def decrement(self, product_id: int, quantity: int) -> None:
        if quantity <= 0:
            raise ValueError("quantity to decrement must be positive")
        if not self.stock.decrement_if_available(product_id, quantity):
            remaining = self.stock.current_quantity(product_id)
            if remaining is None:
                raise ProductNotFound(details={"productId": str(product_id)})
            self.logger.warning(
                "Stock decrement refused",
                product_id=product_id,
                requested=quantity,
                stock=remaining,
                code=InsufficientStock.code,
            )
            raise InsufficientStock(product_id, quantity, available=remaining)
        self.logger.info("Stock decremented", product_id=product_id, quantity=quantity)
