from typing import Iterable, List

from apps.common.money import money_str

from .dtos import ProductDTO, CategoryDTO
from .models import Product, Category


class CategoryMapper:
    @staticmethod
    def to_dto(cat: Category) -> CategoryDTO:
        return CategoryDTO(id=cat.id, name=cat.name)

    @staticmethod
    def many_to_dto(categories: Iterable[Category]) -> List[CategoryDTO]:
        return [CategoryMapper.to_dto(c) for c in categories]


class ProductMapper:
    @staticmethod
    def to_dto(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            description=product.description,
            image=product.image,
            quantity=product.quantity,
            price=money_str(product.price),
            discount=money_str(product.discount),
            special_price=money_str(product.special_price),
            categories=CategoryMapper.many_to_dto(product.categories.all()),
        )

    @staticmethod
    def many_to_dto(products: Iterable[Product]) -> List[ProductDTO]:
        return [ProductMapper.to_dto(p) for p in products]
