from __future__ import annotations

from typing import Any, Dict, List, Optional, Type, Union

from django.db import transaction
from rest_framework.response import Response

from apps.common import get_logger
from apps.common.pagination import StandardPagination, resolve_ordering
from .commands import ProductCreateCommand, ProductUpdateCommand
from .dtos import CategoryDTO, ProductDTO
from .exceptions import CategoryNotFound, ProductNotFound
from .mappers import CategoryMapper, ProductMapper
from .protocols import (
    CacheBackendProtocol,
    CartSyncProtocol,
    CategoryRepositoryProtocol,
    ProductRepositoryProtocol,
)

logger = get_logger(__name__).bind(component="catalog", layer="service")

PRODUCT_SORT_FIELDS = {
    "productId": "id",
    "productName": "name",
    "price": "price",
    "specialPrice": "special_price",
    "quantity": "quantity",
}


class ProductService:
    def __init__(
        self,
        products: ProductRepositoryProtocol,
        categories: CategoryRepositoryProtocol,
        cart_sync: CartSyncProtocol,
    ):
        self.products = products
        self.categories = categories
        self.cart_sync = cart_sync
        self.logger = logger.bind(service="ProductService")

    def _get_or_raise(self, product_id: int):
        product = self.products.get(id=product_id)
        if product is None:
            self.logger.info("Product not found", product_id=product_id)
            raise ProductNotFound(details={"productId": str(product_id)})
        return product

    def _resolve_category(self, category_id: Optional[int]):
        if category_id is None:
            return None
        category = self.categories.get(id=category_id)
        if category is None:
            raise CategoryNotFound(details={"categoryId": str(category_id)})
        return category

    def list_products_paginated(
        self,
        request,
        *,
        category_id: Optional[int] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
        paginator_class: Type[StandardPagination] = StandardPagination,
        serializer_class=None,
        view=None,
    ) -> Response:
        category = self._resolve_category(category_id)
        ordering = resolve_ordering(sort_by, sort_order, PRODUCT_SORT_FIELDS, "id")
        self.logger.debug("Listing products", category_id=category_id, ordering=ordering)
        queryset = self.products.list_ordered(ordering, category=category)
        paginator = paginator_class()
        page = paginator.paginate_queryset(queryset, request, view=view)
        if serializer_class is None:
            from .serializers import ProductReadSerializer  # Avoid circular import

            serializer_class = ProductReadSerializer
        serializer = serializer_class(ProductMapper.many_to_dto(page), many=True)
        return paginator.get_paginated_response(serializer.data)

    def get_product(self, product_id: int) -> ProductDTO:
        self.logger.debug("Fetching product", product_id=product_id)
        return ProductMapper.to_dto(self._get_or_raise(product_id))

    def create_product(self, data: Union[Dict[str, Any], ProductCreateCommand]) -> ProductDTO:
        cmd = data if isinstance(data, ProductCreateCommand) else ProductCreateCommand.from_raw(data)
        with transaction.atomic():
            product = self.products.create(
                name=cmd.name,
                description=cmd.description,
                image=cmd.image,
                quantity=cmd.quantity,
                price=cmd.price,
                discount=cmd.discount,
            )
            if cmd.categories:
                self.products.set_categories(product, cmd.categories)
        self.logger.info("Product created", product_id=product.id, name=cmd.name)
        return ProductMapper.to_dto(product)

    def update_product(
        self,
        product_id: int,
        data: Union[Dict[str, Any], ProductUpdateCommand],
        partial: bool = False,
    ) -> ProductDTO:
        """
        Apply catalog changes to a product.

        A change of effective unit price is pushed to every cart holding the
        product in the same transaction; placed orders keep their frozen prices.
        """
        cmd = (
            data
            if isinstance(data, ProductUpdateCommand)
            else ProductUpdateCommand.from_raw(product_id, data, partial)
        )
        with transaction.atomic():
            product = self._get_or_raise(product_id)
            previous_price = product.special_price
            changes = cmd.scalar_changes()
            if changes:
                product = self.products.update(product, **changes)
            if cmd.categories is not None:
                self.products.set_categories(product, cmd.categories)
            repriced = 0
            if product.special_price != previous_price:
                repriced = self.cart_sync.refresh_product_price(product.id)
        self.logger.info(
            "Product updated",
            product_id=product_id,
            fields=sorted(changes),
            carts_repriced=repriced,
        )
        return ProductMapper.to_dto(product)

    def delete_product(self, product_id: int) -> None:
        with transaction.atomic():
            product = self._get_or_raise(product_id)
            affected = self.cart_sync.remove_product_from_all_carts(product_id)
            self.products.delete(product)
        self.logger.info("Product deleted", product_id=product_id, carts_affected=affected)


class CategoryService:
    def __init__(
        self,
        categories: CategoryRepositoryProtocol,
        cache_backend: CacheBackendProtocol,
        disable_cache: bool = False,
    ):
        self.categories = categories
        self.cache = cache_backend
        self.disable_cache = disable_cache
        self.logger = logger.bind(service="CategoryService")
        self._cache_prefix = "categories:list"
        self._cache_version_key = f"{self._cache_prefix}:version"
        self._default_version = 1

    def _get_cache_version(self) -> int:
        return self.cache.get(self._cache_version_key) or self._default_version

    def _bump_cache_version(self) -> None:
        version = self._get_cache_version() + 1
        # Version key never expires
        self.cache.set(self._cache_version_key, version, timeout=None)
        self.logger.debug("Bumped category cache version", new_version=version)

    def _cache_key(self) -> str:
        return f"{self._cache_prefix}:v{self._get_cache_version()}"

    def list_categories(self) -> List[CategoryDTO]:
        if self.disable_cache:
            return CategoryMapper.many_to_dto(self.categories.list())
        key = self._cache_key()
        cached = self.cache.get(key)
        if cached is not None:
            self.logger.debug("Category list cache hit", cache_key=key)
            return cached
        self.logger.debug("Category list cache miss", cache_key=key)
        data = CategoryMapper.many_to_dto(self.categories.list())
        self.cache.set(key, data)
        return data

    def create_category(self, data: Dict[str, Any]) -> CategoryDTO:
        name = str(data.get("name", "")).strip()
        category = self.categories.create(name=name)
        self._bump_cache_version()
        self.logger.info("Category created", category_id=category.id, name=name)
        return CategoryMapper.to_dto(category)
