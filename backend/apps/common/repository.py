from typing import Any, Dict, Optional, Tuple, Type, TypeVar, Generic

from django.db import models

T = TypeVar("T", bound=models.Model)


class GenericRepository(Generic[T]):
    """Thin ORM accessor shared by the app-level repositories."""

    def __init__(self, model: Type[T]):
        self.model = model

    def get(self, **filters) -> Optional[T]:
        return self.model.objects.filter(**filters).first()

    def exists(self, **filters) -> bool:
        return self.model.objects.filter(**filters).exists()

    def create(self, **data) -> T:
        return self.model.objects.create(**data)

    def get_or_create(
        self, defaults: Optional[Dict[str, Any]] = None, **lookup
    ) -> Tuple[T, bool]:
        return self.model.objects.get_or_create(defaults=defaults, **lookup)
