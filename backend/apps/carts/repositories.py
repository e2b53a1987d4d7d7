from typing import Optional

from django.db.models import F, Prefetch
from django.utils import timezone

from apps.common.repository import GenericRepository
from .models import Cart, CartItem


class CartRepository(GenericRepository[Cart]):
    def __init__(self):
        super().__init__(Cart)

    def _base_queryset(self):
        return self.model.objects.prefetch_related(
            Prefetch(
                "items",
                queryset=CartItem.objects.select_related("product").order_by("id"),
            )
        )

    def get(self, **filters):
        return self._base_queryset().filter(**filters).first()

    def get_for_user(self, user_id: int):
        return self.get(user_id=user_id)

    def ensure_for_user(self, user_id: int):
        """Return ``(cart, created)``; the unique user constraint settles concurrent creates."""
        return self.get_or_create(user_id=user_id)

    def touch(self, cart_id: int) -> None:
        self.model.objects.filter(pk=cart_id).update(updated_at=timezone.now())


class CartItemRepository(GenericRepository[CartItem]):
    def __init__(self):
        super().__init__(CartItem)

    def line_quantity(self, cart_id: int, product_id: str) -> Optional[int]:
        return (
            self.model.objects.filter(cart_id=cart_id, product_id=product_id)
            .values_list("quantity", flat=True)
            .first()
        )

    def increment_quantity(
        self, cart_id: int, product_id: str, delta: int, max_quantity: int
    ) -> int:
        """
        Single-statement ``quantity = quantity + delta``; returns the number of rows updated.

        A line that would end above ``max_quantity`` is left untouched.
        """
        return self.model.objects.filter(
            cart_id=cart_id, product_id=product_id, quantity__lte=max_quantity - delta
        ).update(
            quantity=F("quantity") + delta, updated_at=timezone.now()
        )

    def set_quantity(self, cart_id: int, product_id: str, quantity: int) -> int:
        return self.model.objects.filter(cart_id=cart_id, product_id=product_id).update(
            quantity=quantity, updated_at=timezone.now()
        )

    def delete_product(self, cart_id: int, product_id: str) -> int:
        deleted, _ = self.model.objects.filter(
            cart_id=cart_id, product_id=product_id
        ).delete()
        return deleted
