from __future__ import annotations

from typing import Optional, Protocol, Tuple, TYPE_CHECKING

from .models import Cart, CartItem

if TYPE_CHECKING:
    from apps.carts.dtos import CartDTO


class CartRepositoryProtocol(Protocol):
    def get_for_user(self, user_id: int) -> Optional[Cart]:
        ...

    def ensure_for_user(self, user_id: int) -> Tuple[Cart, bool]:
        ...

    def touch(self, cart_id: int) -> None:
        ...


class CartItemRepositoryProtocol(Protocol):
    def create(self, **data) -> CartItem:
        ...

    def line_quantity(self, cart_id: int, product_id: str) -> Optional[int]:
        ...

    def increment_quantity(
        self, cart_id: int, product_id: str, delta: int, max_quantity: int
    ) -> int:
        ...

    def set_quantity(self, cart_id: int, product_id: str, quantity: int) -> int:
        ...

    def delete_product(self, cart_id: int, product_id: str) -> int:
        ...


class ProductLookupProtocol(Protocol):
    def exists(self, **filters) -> bool:
        ...


class CartMapperProtocol(Protocol):
    def to_dto(self, cart: Cart) -> "CartDTO":
        ...
