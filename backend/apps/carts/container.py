from __future__ import annotations

from apps.catalog.mappers import ProductMapper
from apps.catalog.repositories import ProductRepository

from .mappers import CartMapper, CartItemMapper
from .repositories import CartItemRepository, CartRepository
from .services import CartService


def build_cart_service() -> CartService:
    product_mapper = ProductMapper()
    cart_mapper = CartMapper(CartItemMapper(product_mapper))
    return CartService(
        carts=CartRepository(),
        items=CartItemRepository(),
        products=ProductRepository(),
        cart_mapper=cart_mapper,
    )
