from dataclasses import dataclass, field
from typing import List


@dataclass
class CategoryDTO:
    id: int
    name: str


@dataclass
class ProductDTO:
    id: int
    name: str
    description: str
    image: str
    quantity: int
    price: str
    discount: str
    special_price: str
    categories: List[CategoryDTO] = field(default_factory=list)
