from __future__ import annotations

from typing import Any, Iterable, Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from apps.catalog.models import Category, Product


class ProductRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional["Product"]: ...

    def list(self, **filters) -> Iterable["Product"]: ...

    def list_ordered(self, ordering: str, *, category=None) -> Iterable["Product"]: ...

    def create(self, **data) -> "Product": ...

    def update(self, instance: "Product", **data) -> "Product": ...

    def delete(self, instance: "Product") -> None: ...

    def set_categories(self, product: "Product", category_ids) -> None: ...


class CategoryRepositoryProtocol(Protocol):
    def list(self, **filters) -> Iterable["Category"]: ...

    def get(self, **filters) -> Optional["Category"]: ...

    def create(self, **data) -> "Category": ...


class CacheBackendProtocol(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any, timeout: Optional[int] = None) -> Any: ...


class CartSyncProtocol(Protocol):
    """Keeps open carts in step with catalog price changes and deletions."""

    def refresh_product_price(self, product_id: int) -> int: ...

    def remove_product_from_all_carts(self, product_id: int) -> int: ...
