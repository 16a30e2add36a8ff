from apps.common.repository import GenericRepository
from .models import Category, Product


class CategoryRepository(GenericRepository[Category]):
    def __init__(self):
        super().__init__(Category)


class ProductRepository(GenericRepository[Product]):
    def __init__(self):
        super().__init__(Product)

    def get(self, **filters):
        return self.model.objects.prefetch_related("categories").filter(**filters).first()

    def list(self, **filters):  # type: ignore[override]
        """Products with categories prefetched for DTO mapping."""
        return self.model.objects.filter(**filters).prefetch_related("categories")

    def list_ordered(self, ordering: str, *, category=None):
        qs = self.model.objects.all()
        if category is not None:
            qs = qs.filter(categories=category)
        return qs.order_by(ordering, "id").prefetch_related("categories").distinct()

    def set_categories(self, product: Product, category_ids):
        product.categories.set(Category.objects.filter(id__in=category_ids))
