from __future__ import annotations

import hashlib
from typing import Optional, Union

from django.core.paginator import EmptyPage, PageNotAnInteger, Paginator

from apps.common import get_logger
from .commands import ProductListQuery
from .dtos import ProductDTO, ProductPageDTO
from .mappers import ProductMapper
from .protocols import CacheBackendProtocol, ProductRepositoryProtocol

logger = get_logger(__name__).bind(component="catalog", layer="service")


class ProductPageNotFoundError(Exception):
    """Raised when the requested listing page lies outside the result set."""

    def __init__(self, page: int, total_pages: int):
        super().__init__(f"Page {page} does not exist")
        self.page = page
        self.total_pages = total_pages


class ProductService:
    def __init__(
        self,
        products: ProductRepositoryProtocol,
        cache_backend: CacheBackendProtocol,
        page_size: int = 8,
        disable_cache: bool = False,
    ):
        self.products = products
        self.cache = cache_backend
        self.page_size = page_size
        self.disable_cache = disable_cache
        self.logger = logger.bind(service="ProductService")
        self._cache_prefix = "products:list"
        self._cache_version_key = f"{self._cache_prefix}:version"
        self._default_version = 1

    def _get_cache_version(self) -> int:
        v = self.cache.get(self._cache_version_key)
        return v or self._default_version

    def invalidate_cache(self) -> int:
        """Bump the listing cache version so previously cached pages are never read again."""
        v = self._get_cache_version() + 1
        # Version key should not expire
        self.cache.set(self._cache_version_key, v, timeout=None)
        self.logger.info("Bumped product cache version", new_version=v)
        return v

    def _cache_key(self, query: ProductListQuery) -> str:
        version = self._get_cache_version()
        digest = hashlib.md5(query.query.encode("utf-8")).hexdigest()
        return f"{self._cache_prefix}:v{version}:q-{digest}:p{query.page}:s{self.page_size}"

    def list_products(
        self, query: Optional[Union[ProductListQuery, dict]] = None
    ) -> ProductPageDTO:
        if query is None:
            query = ProductListQuery()
        elif not isinstance(query, ProductListQuery):
            query = ProductListQuery.from_validated(query)
        self.logger.debug(
            "Listing products",
            query=query.query,
            page=query.page,
            cache_enabled=not self.disable_cache,
        )
        if self.disable_cache:
            return self._build_page(query)
        key = self._cache_key(query)
        cached = self.cache.get(key)
        if cached is not None:
            self.logger.debug("Product list cache hit", cache_key=key)
            return cached
        self.logger.debug("Product list cache miss", cache_key=key)
        page_dto = self._build_page(query)
        self.cache.set(key, page_dto)
        return page_dto

    def _build_page(self, query: ProductListQuery) -> ProductPageDTO:
        paginator = Paginator(self.products.search(query.query), self.page_size)
        try:
            page = paginator.page(query.page)
        except (EmptyPage, PageNotAnInteger):
            self.logger.info(
                "Product page out of range",
                page=query.page,
                total_pages=paginator.num_pages,
            )
            raise ProductPageNotFoundError(query.page, paginator.num_pages)
        return ProductPageDTO(
            page=page.number,
            total_pages=paginator.num_pages if paginator.count else 0,
            count=paginator.count,
            query=query.query,
            has_next=page.has_next(),
            has_previous=page.has_previous(),
            items=ProductMapper.many_to_dto(page.object_list),
        )

    def get_product(self, product_id: str) -> Optional[ProductDTO]:
        self.logger.debug("Fetching product", product_id=product_id)
        p = self.products.get(id=product_id)
        if not p:
            self.logger.info("Product not found", product_id=product_id)
        return ProductMapper.to_dto(p) if p else None
