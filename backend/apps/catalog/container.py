from __future__ import annotations

from django.conf import settings
from django.core.cache import cache

from .repositories import ProductRepository
from .services import ProductService


def build_product_service(*, disable_cache: bool = False) -> ProductService:
    return ProductService(
        products=ProductRepository(),
        cache_backend=cache,
        page_size=getattr(settings, "PRODUCTS_PAGE_SIZE", 8),
        disable_cache=disable_cache,
    )
