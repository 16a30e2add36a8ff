from __future__ import annotations

from typing import Optional, Protocol


class StockRepositoryProtocol(Protocol):
    def current_quantity(self, product_id: int, *, lock: bool = False) -> Optional[int]: ...

    def decrement_if_available(self, product_id: int, quantity: int) -> bool: ...


class InventoryLedgerProtocol(Protocol):
    def current_quantity(self, product_id: int) -> int: ...

    def check_available(self, product_id: int, quantity: int) -> bool: ...

    def decrement(self, product_id: int, quantity: int) -> None: ...
