import unittest
from apps.catalog.commands import ProductListQuery
from apps.catalog.serializers import ProductListQuerySerializer


class ProductListQueryTests(unittest.TestCase):
    def test_from_validated_trims_query(self):
        query = ProductListQuery.from_validated({"q": "  lamp ", "page": 3})
        self.assertEqual(query, ProductListQuery(query="lamp", page=3))

    def test_defaults(self):
        self.assertEqual(ProductListQuery.from_validated({}), ProductListQuery("", 1))

    def test_serializer_rejects_invalid_page(self):
        for bad in ("0", "-1", "abc"):
            with self.subTest(page=bad):
                serializer = ProductListQuerySerializer(data={"page": bad})
                self.assertFalse(serializer.is_valid())
                self.assertIn("page", serializer.errors)

    def test_serializer_accepts_blank_query(self):
        serializer = ProductListQuerySerializer(data={"q": "", "page": "2"})
        self.assertTrue(serializer.is_valid(), serializer.errors)
        self.assertEqual(serializer.validated_data["page"], 2)
