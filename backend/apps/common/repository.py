from typing import Generic, Iterable, Optional, Type, TypeVar
from django.db import models

T = TypeVar('T', bound=models.Model)


class GenericRepository(Generic[T]):
    """Minimal ORM-backed repository shared by every app."""

    def __init__(self, model: Type[T]):
        self.model = model

    def get(self, **filters) -> Optional[T]:
        return self.model.objects.filter(**filters).first()

    def get_for_update(self, **filters) -> Optional[T]:
        # Only meaningful inside transaction.atomic(); SQLite ignores the lock
        return self.model.objects.select_for_update().filter(**filters).first()

    def list(self, **filters) -> Iterable[T]:
        return self.model.objects.filter(**filters)

    def exists(self, **filters) -> bool:
        return self.model.objects.filter(**filters).exists()

    def create(self, **data) -> T:
        return self.model.objects.create(**data)

    def update(self, obj: T, **data) -> T:
        for k, v in data.items():
            setattr(obj, k, v)
        fields = list(data)
        if fields:
            # auto_now columns are only refreshed when named in update_fields
            fields += [
                f.name
                for f in self.model._meta.concrete_fields
                if getattr(f, "auto_now", False) and f.name not in fields
            ]
        obj.save(update_fields=fields or None)
        return obj

    def delete(self, obj: T) -> None:
        obj.delete()
