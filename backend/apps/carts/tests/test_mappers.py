import unittest
from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace

from apps.carts.mappers import CartMapper, CartItemMapper
from apps.carts.serializers import CartReadSerializer


class StubItemsManager:
    def __init__(self, items):
        self._items = list(items)

    def all(self):
        return list(self._items)


def make_product(product_id, price):
    return SimpleNamespace(
        id=product_id,
        name=f"Product {product_id}",
        description="d",
        price=price,
        image_url="https://img.example.com/p.png",
        created_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
        updated_at=None,
    )


def make_item(item_id, product, quantity, cart_id=3):
    return SimpleNamespace(
        id=item_id, cart_id=cart_id, product_id=product.id, product=product, quantity=quantity
    )


class CartMapperTests(unittest.TestCase):
    def setUp(self):
        first = make_item(2, make_product("b", Decimal("5.50")), 1)
        second = make_item(1, make_product("a", Decimal("199.99")), 2)
        self.cart = SimpleNamespace(
            id=3,
            user_id=9,
            created_at=datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
            updated_at=datetime(2025, 1, 2, 3, 4, 6, tzinfo=timezone.utc),
            items=StubItemsManager([first, second]),
        )

    def test_cart_mapper_orders_items_by_line_id(self):
        dto = CartMapper(CartItemMapper()).to_dto(self.cart)
        self.assertEqual([i.id for i in dto.items], [1, 2])
        self.assertEqual(dto.user_id, 9)
        self.assertEqual(dto.created_at, "2025-01-02T03:04:05+00:00")

    def test_price_is_rendered_as_number(self):
        dto = CartMapper().to_dto(self.cart)
        self.assertIsInstance(dto.items[0].product.price, float)
        self.assertEqual(dto.items[0].product.price, 199.99)

    def test_read_serializer_uses_camel_case_snapshot(self):
        data = CartReadSerializer(CartMapper().to_dto(self.cart)).data
        self.assertEqual(set(data), {"id", "userId", "createdAt", "updatedAt", "items"})
        item = data["items"][0]
        self.assertEqual(
            set(item), {"id", "cartId", "productId", "quantity", "product"}
        )
        self.assertEqual(item["productId"], "a")
        self.assertEqual(item["cartId"], 3)
        self.assertEqual(
            set(item["product"]),
            {"id", "name", "description", "price", "imageUrl", "createdAt", "updatedAt"},
        )
        self.assertEqual(item["product"]["imageUrl"], "https://img.example.com/p.png")
