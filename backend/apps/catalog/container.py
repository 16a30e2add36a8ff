from __future__ import annotations

from django.core.cache import cache

from apps.carts.container import build_cart_service
from .repositories import ProductRepository, CategoryRepository
from .services import ProductService, CategoryService


def build_product_service() -> ProductService:
    return ProductService(
        products=ProductRepository(),
        categories=CategoryRepository(),
        cart_sync=build_cart_service(),
    )


def build_category_service(*, disable_cache: bool = False) -> CategoryService:
    return CategoryService(
        categories=CategoryRepository(),
        cache_backend=cache,
        disable_cache=disable_cache,
    )
