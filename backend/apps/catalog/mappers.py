from typing import Any, Iterable, List, Optional

from .dtos import ProductDTO
from .models import Product


def isoformat(value: Any) -> Optional[str]:
    if value is None:
        return None
    try:
        return value.isoformat()
    except AttributeError:
        return str(value)


class ProductMapper:
    @staticmethod
    def to_dto(product: Product) -> ProductDTO:
        return ProductDTO(
            id=str(product.id),
            name=product.name,
            description=product.description or "",
            price=float(product.price),
            image_url=product.image_url or "",
            created_at=isoformat(getattr(product, "created_at", None)),
            updated_at=isoformat(getattr(product, "updated_at", None)),
        )

    @staticmethod
    def many_to_dto(products: Iterable[Product]) -> List[ProductDTO]:
        return [ProductMapper.to_dto(p) for p in products]
