from __future__ import annotations

from django.db import transaction, IntegrityError

from apps.api.principal import Principal
from apps.common import get_logger
from .commands import (
    MAX_CART_QUANTITY,
    AddCartItemCommand,
    RemoveCartItemCommand,
    SetCartItemQuantityCommand,
)
from .dtos import CartDTO
from .protocols import (
    CartItemRepositoryProtocol,
    CartMapperProtocol,
    CartRepositoryProtocol,
    ProductLookupProtocol,
)

logger = get_logger(__name__).bind(component="carts", layer="service")


class ProductNotFoundError(Exception):
    """Raised when a cart mutation references a product that does not exist."""

    def __init__(self, product_id: str):
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id


class CartNotFoundError(Exception):
    """Raised when a removal targets a user who has no cart yet."""

    def __init__(self, user_id: int):
        super().__init__(f"Cart for user {user_id} not found")
        self.user_id = user_id


class CartQuantityLimitError(Exception):
    """Raised when an add would push a line above the per-line quantity cap."""

    def __init__(self, product_id: str, max_quantity: int):
        super().__init__(
            f"Quantity for product {product_id} would exceed {max_quantity}"
        )
        self.product_id = product_id
        self.max_quantity = max_quantity


class CartService:
    """
    Per-user cart operations.

    The principal's user id is the only key used to locate a cart. Every
    mutation validates its product first, runs inside ``transaction.atomic``
    and returns a freshly read snapshot of the whole cart.
    """

    def __init__(
        self,
        carts: CartRepositoryProtocol,
        items: CartItemRepositoryProtocol,
        products: ProductLookupProtocol,
        cart_mapper: CartMapperProtocol,
        max_quantity: int = MAX_CART_QUANTITY,
    ):
        self.carts = carts
        self.items = items
        self.products = products
        self.cart_mapper = cart_mapper
        self.max_quantity = max_quantity
        self.logger = logger.bind(service="CartService")

    def _ensure_cart_row(self, user_id: int):
        """Bare cart row for mutations; items are only loaded by ``_snapshot``."""
        cart, created = self.carts.ensure_for_user(user_id)
        if created:
            self.logger.info("Cart created", user_id=user_id, cart_id=cart.id)
        return cart

    def _snapshot(self, user_id: int) -> CartDTO:
        cart = self.carts.get_for_user(user_id)
        if cart is None:
            raise CartNotFoundError(user_id)
        return self.cart_mapper.to_dto(cart)

    def _require_product(self, product_id: str) -> None:
        if not self.products.exists(id=product_id):
            self.logger.info("Product not found for cart mutation", product_id=product_id)
            raise ProductNotFoundError(product_id)

    def ensure_cart(self, principal: Principal) -> CartDTO:
        """Return the caller's cart, creating an empty one on first access."""
        self.logger.debug("Ensuring cart exists", user_id=principal.user_id)
        cart = self.carts.get_for_user(principal.user_id)
        if cart is not None:
            return self.cart_mapper.to_dto(cart)
        self._ensure_cart_row(principal.user_id)
        return self._snapshot(principal.user_id)

    def get_cart(self, principal: Principal) -> CartDTO:
        return self.ensure_cart(principal)

    def add_item(self, principal: Principal, command: AddCartItemCommand) -> CartDTO:
        user_id = principal.user_id
        self.logger.debug(
            "Adding cart item",
            user_id=user_id,
            product_id=command.product_id,
            quantity=command.quantity,
        )
        self._require_product(command.product_id)
        with transaction.atomic():
            cart = self._ensure_cart_row(user_id)
            updated = self._increment(cart.id, command)
            if not updated:
                self._insert_or_increment(cart.id, command)
            self.carts.touch(cart.id)
        self.logger.info(
            "Cart item added",
            user_id=user_id,
            cart_id=cart.id,
            product_id=command.product_id,
            quantity=command.quantity,
            merged=bool(updated),
        )
        return self._snapshot(user_id)

    def _increment(self, cart_id: int, command: AddCartItemCommand) -> int:
        """Atomic increment; 0 means there is no line yet for the product."""
        updated = self.items.increment_quantity(
            cart_id, command.product_id, command.quantity, self.max_quantity
        )
        if updated:
            return updated
        current = self.items.line_quantity(cart_id, command.product_id)
        if current is None:
            return 0
        if current + command.quantity > self.max_quantity:
            self.logger.info(
                "Cart line quantity cap reached",
                cart_id=cart_id,
                product_id=command.product_id,
                max_quantity=self.max_quantity,
            )
            raise CartQuantityLimitError(command.product_id, self.max_quantity)
        # The line was inserted after the update ran; fold into it.
        return self.items.increment_quantity(
            cart_id, command.product_id, command.quantity, self.max_quantity
        )

    def _insert_or_increment(self, cart_id: int, command: AddCartItemCommand) -> None:
        try:
            with transaction.atomic():
                self.items.create(
                    cart_id=cart_id,
                    product_id=command.product_id,
                    quantity=command.quantity,
                )
        except IntegrityError:
            # Another request inserted the same line first; fold into it.
            self.logger.debug(
                "Concurrent insert detected; incrementing instead",
                cart_id=cart_id,
                product_id=command.product_id,
            )
            if not self._increment(cart_id, command):
                raise ProductNotFoundError(command.product_id)

    def remove_item(self, principal: Principal, command: RemoveCartItemCommand) -> CartDTO:
        user_id = principal.user_id
        self.logger.debug(
            "Removing cart item", user_id=user_id, product_id=command.product_id
        )
        cart = self.carts.get_for_user(user_id)
        if cart is None:
            self.logger.info("Cart not found for removal", user_id=user_id)
            raise CartNotFoundError(user_id)
        with transaction.atomic():
            deleted = self.items.delete_product(cart.id, command.product_id)
            if deleted:
                self.carts.touch(cart.id)
        self.logger.info(
            "Cart item removed",
            user_id=user_id,
            cart_id=cart.id,
            product_id=command.product_id,
            deleted=deleted,
        )
        return self._snapshot(user_id)

    def set_item_quantity(
        self, principal: Principal, command: SetCartItemQuantityCommand
    ) -> CartDTO:
        user_id = principal.user_id
        self.logger.debug(
            "Setting cart item quantity",
            user_id=user_id,
            product_id=command.product_id,
            quantity=command.quantity,
        )
        self._require_product(command.product_id)
        with transaction.atomic():
            cart = self._ensure_cart_row(user_id)
            if command.removes_item:
                self.items.delete_product(cart.id, command.product_id)
            elif not self.items.set_quantity(
                cart.id, command.product_id, command.quantity
            ):
                try:
                    with transaction.atomic():
                        self.items.create(
                            cart_id=cart.id,
                            product_id=command.product_id,
                            quantity=command.quantity,
                        )
                except IntegrityError:
                    if not self.items.set_quantity(
                        cart.id, command.product_id, command.quantity
                    ):
                        raise ProductNotFoundError(command.product_id)
            self.carts.touch(cart.id)
        self.logger.info(
            "Cart item quantity set",
            user_id=user_id,
            cart_id=cart.id,
            product_id=command.product_id,
            quantity=command.quantity,
        )
        return self._snapshot(user_id)
