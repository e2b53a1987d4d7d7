from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class ProductDTO:
    id: str
    name: str
    description: str
    price: float
    image_url: str
    created_at: Optional[str]
    updated_at: Optional[str]


@dataclass
class ProductPageDTO:
    page: int
    total_pages: int
    count: int
    query: str
    has_next: bool
    has_previous: bool
    items: List[ProductDTO] = field(default_factory=list)
