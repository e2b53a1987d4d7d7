from __future__ import annotations

from typing import Any, Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from django.db.models import QuerySet
    from apps.catalog.models import Product


class ProductRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional["Product"]:
        ...

    def exists(self, **filters) -> bool:
        ...

    def search(self, query: str = "") -> "QuerySet[Product]":
        ...


class CacheBackendProtocol(Protocol):
    def get(self, key: str, default: Any = None) -> Any:
        ...

    def set(self, key: str, value: Any, timeout: Optional[int] = ...) -> None:
        ...
