from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import AllowAny
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse

from apps.api.schemas import paginated_response, ErrorResponseSerializer
from apps.api.utils import error_response
from apps.common import get_logger
from .commands import ProductListQuery
from .container import build_product_service
from .pagination import paginated_payload
from .serializers import ProductReadSerializer, ProductListQuerySerializer
from .services import ProductPageNotFoundError

logger = get_logger(__name__).bind(component="catalog", layer="view")


@extend_schema(tags=["Catalog"])
class ProductListView(APIView):
    permission_classes = [AllowAny]
    service = build_product_service()
    log = logger.bind(view="ProductListView")

    @extend_schema(
        operation_id="products_list",
        summary="List products",
        description=(
            "Newest products first, eight per page. `q` matches name or description "
            "case-insensitively. Cached results may be served."
        ),
        parameters=[
            OpenApiParameter(
                name="q", description="Search text", required=False, type=str
            ),
            OpenApiParameter(
                name="page", description="1-based page number", required=False, type=int
            ),
        ],
        responses={
            200: paginated_response(ProductReadSerializer),
            400: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request):
        params = ProductListQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        query = ProductListQuery.from_validated(params.validated_data)
        self.log.debug("Handling product list request", query=query.query, page=query.page)
        try:
            page = self.service.list_products(query)
        except ProductPageNotFoundError as exc:
            return error_response(
                "NOT_FOUND",
                "Invalid page.",
                {"page": exc.page, "totalPages": exc.total_pages},
            )
        results = ProductReadSerializer(page.items, many=True).data
        return Response(paginated_payload(request, page, results))


@extend_schema(tags=["Catalog"])
class ProductDetailView(APIView):
    permission_classes = [AllowAny]
    service = build_product_service()
    log = logger.bind(view="ProductDetailView")

    @extend_schema(
        operation_id="products_retrieve",
        summary="Get product",
        parameters=[OpenApiParameter("product_id", str, OpenApiParameter.PATH)],
        responses={
            200: ProductReadSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request, product_id: str):
        self.log.debug("Fetching product detail", product_id=product_id)
        dto = self.service.get_product(product_id)
        if not dto:
            self.log.info("Product not found", product_id=product_id)
            return error_response(
                "NOT_FOUND", "Product not found", {"id": str(product_id)}
            )
        return Response(ProductReadSerializer(dto).data)
