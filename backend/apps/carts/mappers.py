from typing import Iterable, List, Optional
from .models import Cart, CartItem
from .dtos import CartDTO, CartItemDTO
from apps.catalog.mappers import ProductMapper, isoformat


class CartItemMapper:
    def __init__(self, product_mapper: Optional[ProductMapper] = None) -> None:
        self.product_mapper = product_mapper or ProductMapper()

    def to_dto(self, item: CartItem) -> CartItemDTO:
        return CartItemDTO(
            id=item.id,
            cart_id=item.cart_id,
            product_id=str(item.product_id),
            quantity=item.quantity,
            product=self.product_mapper.to_dto(item.product),
        )

    def many_to_dto(self, items: Iterable[CartItem]) -> List[CartItemDTO]:
        return [self.to_dto(i) for i in sorted(items, key=lambda i: i.id)]


class CartMapper:
    def __init__(self, item_mapper: Optional[CartItemMapper] = None) -> None:
        self.item_mapper = item_mapper or CartItemMapper()

    def to_dto(self, cart: Cart) -> CartDTO:
        return CartDTO(
            id=cart.id,
            user_id=cart.user_id,
            created_at=isoformat(cart.created_at),
            updated_at=isoformat(cart.updated_at),
            items=self.item_mapper.many_to_dto(cart.items.all()),
        )
