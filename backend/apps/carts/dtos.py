from dataclasses import dataclass, field
from typing import List, Optional
from apps.catalog.dtos import ProductDTO


@dataclass
class CartItemDTO:
    id: int
    cart_id: int
    product_id: str
    quantity: int
    product: ProductDTO


@dataclass
class CartDTO:
    id: int
    user_id: int
    created_at: Optional[str]
    updated_at: Optional[str]
    items: List[CartItemDTO] = field(default_factory=list)

    def quantity_of(self, product_id: str) -> int:
        for item in self.items:
            if item.product_id == product_id:
                return item.quantity
        return 0
