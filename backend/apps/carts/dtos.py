from dataclasses import dataclass, field
from typing import List

from apps.catalog.dtos import ProductDTO


@dataclass
class CartItemDTO:
    product: ProductDTO
    quantity: int
    unit_price: str
    discount: str
    line_total: str


@dataclass
class CartDTO:
    id: int
    user_id: int
    total_price: str
    items: List[CartItemDTO] = field(default_factory=list)
