from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class ProductListQuery:
    query: str = ""
    page: int = 1

    @staticmethod
    def from_validated(data: Mapping[str, Any]) -> "ProductListQuery":
        return ProductListQuery(
            query=(data.get("q") or "").strip(),
            page=int(data.get("page") or 1),
        )
