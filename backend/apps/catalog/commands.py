from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional


def _parse_category_ids(raw) -> List[int]:
    out = []
    for value in raw or []:
        try:
            out.append(int(value))
        except (TypeError, ValueError):
            continue
    return out


@dataclass
class ProductCreateCommand:
    name: str
    description: str
    price: Decimal
    quantity: int = 0
    discount: Decimal = Decimal("0")
    image: str = "default.png"
    categories: List[int] = field(default_factory=list)

    @staticmethod
    def from_raw(payload: Dict[str, Any]) -> "ProductCreateCommand":
        data = dict(payload or {})
        data.pop("id", None)
        return ProductCreateCommand(
            name=str(data.get("name", "")).strip(),
            description=str(data.get("description", "")).strip(),
            price=Decimal(str(data.get("price", "0"))),
            quantity=int(data.get("quantity") or 0),
            discount=Decimal(str(data.get("discount") or "0")),
            image=str(data.get("image") or "default.png").strip(),
            categories=_parse_category_ids(data.get("categories")),
        )


@dataclass
class ProductUpdateCommand:
    product_id: int
    partial: bool
    name: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    quantity: Optional[int] = None
    price: Optional[Decimal] = None
    discount: Optional[Decimal] = None
    categories: Optional[List[int]] = None

    @staticmethod
    def from_raw(product_id: int, payload: Dict[str, Any], partial: bool) -> "ProductUpdateCommand":
        data = dict(payload or {})
        data.pop("id", None)
        return ProductUpdateCommand(
            product_id=product_id,
            partial=partial,
            name=data.get("name"),
            description=data.get("description"),
            image=data.get("image"),
            quantity=int(data["quantity"]) if data.get("quantity") is not None else None,
            price=Decimal(str(data["price"])) if data.get("price") is not None else None,
            discount=Decimal(str(data["discount"])) if data.get("discount") is not None else None,
            categories=_parse_category_ids(data["categories"]) if "categories" in data else None,
        )

    def scalar_changes(self) -> Dict[str, Any]:
        fields = ("name", "description", "image", "quantity", "price", "discount")
        return {f: getattr(self, f) for f in fields if getattr(self, f) is not None}