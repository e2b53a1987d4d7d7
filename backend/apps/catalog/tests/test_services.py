import unittest
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

from apps.catalog.commands import ProductListQuery
from apps.catalog.services import ProductPageNotFoundError, ProductService


class FakeCache:
    def __init__(self):
        self.store = {}

    def get(self, key, default=None):
        return self.store.get(key, default)

    def set(self, key, value, timeout=None):
        self.store[key] = value


def make_product(index, name=None, description=""):
    created = datetime(2025, 1, 1, tzinfo=timezone.utc) + timedelta(days=index)
    return SimpleNamespace(
        id=f"p{index}",
        name=name or f"Product {index}",
        description=description,
        price="10.00",
        image_url="",
        created_at=created,
        updated_at=created,
    )


class FakeProductRepository:
    def __init__(self, products):
        self._products = list(products)
        self.search_calls = 0

    def get(self, **filters):
        for p in self._products:
            if p.id == filters.get("id"):
                return p
        return None

    def exists(self, **filters):
        return self.get(**filters) is not None

    def search(self, query=""):
        self.search_calls += 1
        q = (query or "").lower()
        rows = [
            p
            for p in self._products
            if not q or q in p.name.lower() or q in p.description.lower()
        ]
        return sorted(rows, key=lambda p: p.created_at, reverse=True)


class ProductServiceUnitTests(unittest.TestCase):
    def setUp(self):
        products = [make_product(i) for i in range(1, 11)]
        products.append(make_product(11, "Mechanical Keyboard", "RGB backlit"))
        products.append(make_product(12, "Desk Lamp", "Keyboard friendly lighting"))
        self.repo = FakeProductRepository(products)
        self.cache = FakeCache()
        self.service = ProductService(self.repo, self.cache, page_size=8)

    def test_first_page_is_newest_first(self):
        page = self.service.list_products(ProductListQuery())
        self.assertEqual(page.count, 12)
        self.assertEqual(page.total_pages, 2)
        self.assertEqual(len(page.items), 8)
        self.assertEqual(page.items[0].id, "p12")
        self.assertTrue(page.has_next)
        self.assertFalse(page.has_previous)

    def test_last_page_holds_remainder(self):
        page = self.service.list_products({"page": 2})
        self.assertEqual([p.id for p in page.items], ["p4", "p3", "p2", "p1"])
        self.assertFalse(page.has_next)
        self.assertTrue(page.has_previous)

    def test_query_matches_name_or_description(self):
        page = self.service.list_products(ProductListQuery(query="keyboard"))
        self.assertEqual({p.id for p in page.items}, {"p11", "p12"})
        self.assertEqual(page.query, "keyboard")
        self.assertEqual(page.total_pages, 1)

    def test_page_out_of_range_raises(self):
        with self.assertRaises(ProductPageNotFoundError) as ctx:
            self.service.list_products(ProductListQuery(page=3))
        self.assertEqual(ctx.exception.total_pages, 2)

    def test_empty_result_reports_zero_pages(self):
        page = self.service.list_products(ProductListQuery(query="nothing-matches"))
        self.assertEqual(page.count, 0)
        self.assertEqual(page.total_pages, 0)
        self.assertEqual(page.items, [])

    def test_results_are_cached_until_version_bump(self):
        self.service.list_products(ProductListQuery())
        self.service.list_products(ProductListQuery())
        self.assertEqual(self.repo.search_calls, 1)
        self.assertEqual(self.service.invalidate_cache(), 2)
        self.service.list_products(ProductListQuery())
        self.assertEqual(self.repo.search_calls, 2)

    def test_cache_keys_differ_by_query_and_page(self):
        self.service.list_products(ProductListQuery(page=1))
        self.service.list_products(ProductListQuery(page=2))
        self.service.list_products(ProductListQuery(query="desk"))
        self.assertEqual(self.repo.search_calls, 3)

    def test_disable_cache_always_hits_repository(self):
        service = ProductService(self.repo, self.cache, disable_cache=True)
        service.list_products()
        service.list_products()
        self.assertEqual(self.repo.search_calls, 2)
        self.assertEqual(self.cache.store, {})

    def test_get_product(self):
        dto = self.service.get_product("p11")
        self.assertEqual(dto.name, "Mechanical Keyboard")
        self.assertEqual(dto.price, 10.0)
        self.assertIsNone(self.service.get_product("missing"))
