from __future__ import annotations

from .repositories import ProductStockRepository
from .services import InventoryLedger


def build_inventory_ledger() -> InventoryLedger:
    return InventoryLedger(stock=ProductStockRepository())
