import unittest
from unittest.mock import Mock, patch
from rest_framework.test import APIRequestFactory
from apps.catalog.views import ProductListView, ProductDetailView
from apps.catalog.commands import ProductListQuery
from apps.catalog.dtos import ProductDTO, ProductPageDTO
from apps.catalog.services import ProductPageNotFoundError


def make_product_dto(product_id="p1", name="Widget"):
    return ProductDTO(
        id=product_id,
        name=name,
        description="A product",
        price=10.0,
        image_url="https://img.example.com/w.png",
        created_at="2025-01-01T00:00:00+00:00",
        updated_at="2025-01-01T00:00:00+00:00",
    )


def make_page(page=1, total_pages=3, query=""):
    return ProductPageDTO(
        page=page,
        total_pages=total_pages,
        count=20,
        query=query,
        has_next=page < total_pages,
        has_previous=page > 1,
        items=[make_product_dto()],
    )


class CatalogViewsUnitTests(unittest.TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()

    def test_product_list_paginates_and_filters(self):
        request = self.factory.get("/api/products/", {"q": "widget", "page": 2})
        with patch.object(ProductListView, "service", Mock()) as svc:
            svc.list_products.return_value = make_page(page=2, query="widget")
            response = ProductListView.as_view()(request)
        self.assertEqual(response.status_code, 200)
        svc.list_products.assert_called_once_with(ProductListQuery(query="widget", page=2))
        self.assertEqual(response.data["currentPage"], 2)
        self.assertEqual(response.data["totalPages"], 3)
        self.assertEqual(response.data["searchQuery"], "widget")
        self.assertEqual(response.data["count"], 20)
        self.assertIn("page=3", response.data["next"])
        self.assertNotIn("page=", response.data["previous"])
        self.assertEqual(response.data["results"][0]["imageUrl"], "https://img.example.com/w.png")

    def test_product_list_first_page_has_no_previous(self):
        request = self.factory.get("/api/products/")
        with patch.object(ProductListView, "service", Mock()) as svc:
            svc.list_products.return_value = make_page(page=1, total_pages=1)
            response = ProductListView.as_view()(request)
        self.assertIsNone(response.data["previous"])
        self.assertIsNone(response.data["next"])

    def test_product_list_out_of_range_page_returns_404(self):
        request = self.factory.get("/api/products/", {"page": 9})
        with patch.object(ProductListView, "service", Mock()) as svc:
            svc.list_products.side_effect = ProductPageNotFoundError(9, 3)
            response = ProductListView.as_view()(request)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["code"], "NOT_FOUND")
        self.assertEqual(response.data["details"], {"page": 9, "totalPages": 3})

    def test_product_list_invalid_page_returns_400(self):
        request = self.factory.get("/api/products/", {"page": "abc"})
        with patch.object(ProductListView, "service", Mock()) as svc:
            response = ProductListView.as_view()(request)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["details"][0]["field"], "page")
        svc.list_products.assert_not_called()

    def test_product_detail_get_not_found(self):
        request = self.factory.get("/api/products/missing/")
        with patch.object(ProductDetailView, "service", Mock()) as svc:
            svc.get_product.return_value = None
            response = ProductDetailView.as_view()(request, product_id="missing")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["error"], "Product not found")

    def test_product_detail_get_success(self):
        request = self.factory.get("/api/products/p1/")
        with patch.object(ProductDetailView, "service", Mock()) as svc:
            svc.get_product.return_value = make_product_dto()
            response = ProductDetailView.as_view()(request, product_id="p1")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["id"], "p1")
        svc.get_product.assert_called_once_with("p1")
