from datetime import timedelta
from decimal import Decimal

from django.core.cache import cache
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.catalog.models import Product


class TestCatalogApi(APITestCase):
    def setUp(self):
        cache.clear()
        now = timezone.now()
        for i in range(10):
            Product.objects.create(
                id=f'item-{i}',
                name=f'Item {i}',
                description='plain',
                price=Decimal('9.99'),
                created_at=now - timedelta(minutes=i),
            )
        Product.objects.create(
            id='kb', name='Mechanical Keyboard', description='Tactile switches',
            price=Decimal('149.99'), created_at=now - timedelta(days=1),
        )
        Product.objects.create(
            id='lamp', name='Desk Lamp', description='Pairs with any KEYBOARD',
            price=Decimal('39.99'), created_at=now - timedelta(days=2),
        )
        self.list_url = reverse('api-products-list')

    def tearDown(self):
        cache.clear()

    def test_list_is_public_and_paginated(self):
        res = self.client.get(self.list_url)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data['count'], 12)
        self.assertEqual(res.data['totalPages'], 2)
        self.assertEqual(res.data['currentPage'], 1)
        self.assertEqual(len(res.data['results']), 8)
        self.assertEqual(res.data['results'][0]['id'], 'item-0')
        self.assertIsNotNone(res.data['next'])

    def test_second_page(self):
        res = self.client.get(self.list_url, {'page': 2})
        self.assertEqual([p['id'] for p in res.data['results']], ['item-8', 'item-9', 'kb', 'lamp'])
        self.assertIsNone(res.data['next'])

    def test_search_is_case_insensitive_on_name_or_description(self):
        res = self.client.get(self.list_url, {'q': 'keyboard'})
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual([p['id'] for p in res.data['results']], ['kb', 'lamp'])
        self.assertEqual(res.data['searchQuery'], 'keyboard')

    def test_page_out_of_range_returns_404(self):
        res = self.client.get(self.list_url, {'page': 5})
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(res.json()['code'], 'NOT_FOUND')

    def test_detail(self):
        res = self.client.get(reverse('api-products-detail', args=['kb']))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data['name'], 'Mechanical Keyboard')
        self.assertEqual(res.data['price'], 149.99)

    def test_detail_missing_returns_404(self):
        res = self.client.get(reverse('api-products-detail', args=['nope']))
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(res.json()['error'], 'Product not found')

    def test_generated_ids_are_hex_strings(self):
        product = Product.objects.create(name='Webcam', price=Decimal('89.99'))
        self.assertEqual(len(product.id), 32)
        int(product.id, 16)
