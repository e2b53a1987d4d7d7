from dataclasses import dataclass
from typing import Any, Mapping

# Largest quantity a single cart line may hold.
MAX_CART_QUANTITY = 10_000


def _product_id(data: Mapping[str, Any]) -> str:
    return str(data.get("productId") or data.get("product_id") or "").strip()


@dataclass(frozen=True)
class AddCartItemCommand:
    product_id: str
    quantity: int = 1

    def __post_init__(self):
        if not self.product_id:
            raise ValueError("product_id is required")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValueError("quantity must be an integer")
        if self.quantity < 1:
            raise ValueError("quantity must be positive")
        if self.quantity > MAX_CART_QUANTITY:
            raise ValueError(f"quantity must not exceed {MAX_CART_QUANTITY}")

    @staticmethod
    def from_validated(data: Mapping[str, Any]) -> "AddCartItemCommand":
        return AddCartItemCommand(
            product_id=_product_id(data), quantity=data.get("quantity", 1)
        )


@dataclass(frozen=True)
class RemoveCartItemCommand:
    product_id: str

    def __post_init__(self):
        if not self.product_id:
            raise ValueError("product_id is required")

    @staticmethod
    def from_validated(data: Mapping[str, Any]) -> "RemoveCartItemCommand":
        return RemoveCartItemCommand(product_id=_product_id(data))


@dataclass(frozen=True)
class SetCartItemQuantityCommand:
    product_id: str
    quantity: int

    def __post_init__(self):
        if not self.product_id:
            raise ValueError("product_id is required")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValueError("quantity must be an integer")
        if self.quantity < 0:
            raise ValueError("quantity must not be negative")
        if self.quantity > MAX_CART_QUANTITY:
            raise ValueError(f"quantity must not exceed {MAX_CART_QUANTITY}")

    @property
    def removes_item(self) -> bool:
        return self.quantity == 0

    @staticmethod
    def from_validated(product_id: str, data: Mapping[str, Any]) -> "SetCartItemQuantityCommand":
        return SetCartItemQuantityCommand(
            product_id=str(product_id or "").strip(), quantity=data.get("quantity")
        )
