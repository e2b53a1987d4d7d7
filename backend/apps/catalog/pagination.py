from typing import Any, Dict, List, Optional

from rest_framework.utils.urls import remove_query_param, replace_query_param

from .dtos import ProductPageDTO

PAGE_QUERY_PARAM = "page"


def _page_link(request, page_number: int) -> str:
    url = request.build_absolute_uri()
    if page_number == 1:
        return remove_query_param(url, PAGE_QUERY_PARAM)
    return replace_query_param(url, PAGE_QUERY_PARAM, page_number)


def next_link(request, page: ProductPageDTO) -> Optional[str]:
    if not page.has_next:
        return None
    return _page_link(request, page.page + 1)


def previous_link(request, page: ProductPageDTO) -> Optional[str]:
    if not page.has_previous:
        return None
    return _page_link(request, page.page - 1)


def paginated_payload(request, page: ProductPageDTO, results: List[Any]) -> Dict[str, Any]:
    """Standard count/next/previous/results shape plus storefront paging fields."""
    return {
        "count": page.count,
        "next": next_link(request, page),
        "previous": previous_link(request, page),
        "currentPage": page.page,
        "totalPages": page.total_pages,
        "searchQuery": page.query,
        "results": results,
    }
