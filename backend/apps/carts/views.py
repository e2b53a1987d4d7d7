from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse

from apps.api.principal import principal_from_request
from apps.api.schemas import ErrorResponseSerializer, ValidationErrorResponseSerializer
from apps.api.utils import error_response
from apps.common import get_logger
from .commands import (
    AddCartItemCommand,
    RemoveCartItemCommand,
    SetCartItemQuantityCommand,
)
from .container import build_cart_service
from .serializers import (
    AddCartItemSerializer,
    CartReadSerializer,
    RemoveCartItemSerializer,
    SetCartItemQuantitySerializer,
)
from .services import CartNotFoundError, CartQuantityLimitError, ProductNotFoundError

logger = get_logger(__name__).bind(component="carts", layer="view")

CART_ERROR_RESPONSES = {
    400: OpenApiResponse(response=ValidationErrorResponseSerializer),
    401: OpenApiResponse(response=ErrorResponseSerializer),
    404: OpenApiResponse(response=ErrorResponseSerializer),
}


def _unauthorized():
    return error_response("UNAUTHORIZED", "Unauthorized")


def _product_not_found(exc: ProductNotFoundError):
    return error_response(
        "NOT_FOUND", "Product not found", {"productId": exc.product_id}
    )


def _cart_not_found():
    return error_response("NOT_FOUND", "Cart not found")


def _quantity_limit(exc: CartQuantityLimitError):
    return error_response(
        "VALIDATION_ERROR",
        "Invalid request body",
        [
            {
                "field": "quantity",
                "message": f"Cart line quantity cannot exceed {exc.max_quantity}.",
            }
        ],
    )


@extend_schema(tags=["Cart"])
class CartView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_cart_service()
    log = logger.bind(view="CartView")

    @extend_schema(
        operation_id="cart_retrieve",
        summary="Get the current user's cart",
        description="Returns the caller's cart, creating an empty one on first access.",
        responses={200: CartReadSerializer, 401: OpenApiResponse(response=ErrorResponseSerializer)},
    )
    def get(self, request):
        principal = principal_from_request(request)
        if principal is None:
            return _unauthorized()
        dto = self.service.get_cart(principal)
        return Response(CartReadSerializer(dto).data)

    @extend_schema(
        operation_id="cart_add_item",
        summary="Add a product to the cart",
        description=(
            "Adds `quantity` (default 1) of the product. Repeated adds of the same "
            "product accumulate on a single line."
        ),
        request=AddCartItemSerializer,
        responses={200: CartReadSerializer, **CART_ERROR_RESPONSES},
    )
    def post(self, request):
        principal = principal_from_request(request)
        if principal is None:
            return _unauthorized()
        serializer = AddCartItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        command = AddCartItemCommand.from_validated(serializer.validated_data)
        try:
            dto = self.service.add_item(principal, command)
        except ProductNotFoundError as exc:
            return _product_not_found(exc)
        except CartQuantityLimitError as exc:
            return _quantity_limit(exc)
        except CartNotFoundError:
            return _cart_not_found()
        self.log.info(
            "Cart item added via API",
            user_id=principal.user_id,
            product_id=command.product_id,
            quantity=command.quantity,
        )
        return Response(CartReadSerializer(dto).data)

    @extend_schema(
        operation_id="cart_remove_item",
        summary="Remove a product from the cart",
        description="Deletes every line for the product. Removing an absent product is a no-op.",
        request=RemoveCartItemSerializer,
        responses={200: CartReadSerializer, **CART_ERROR_RESPONSES},
    )
    def delete(self, request):
        principal = principal_from_request(request)
        if principal is None:
            return _unauthorized()
        serializer = RemoveCartItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        command = RemoveCartItemCommand.from_validated(serializer.validated_data)
        try:
            dto = self.service.remove_item(principal, command)
        except CartNotFoundError:
            return _cart_not_found()
        self.log.info(
            "Cart item removed via API",
            user_id=principal.user_id,
            product_id=command.product_id,
        )
        return Response(CartReadSerializer(dto).data)


@extend_schema(tags=["Cart"])
class CartItemView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_cart_service()
    log = logger.bind(view="CartItemView")

    @extend_schema(
        operation_id="cart_set_item_quantity",
        summary="Set the quantity of a cart line",
        description="Sets an absolute quantity for the product; 0 removes the line.",
        parameters=[OpenApiParameter("product_id", str, OpenApiParameter.PATH)],
        request=SetCartItemQuantitySerializer,
        responses={200: CartReadSerializer, **CART_ERROR_RESPONSES},
    )
    def put(self, request, product_id: str):
        principal = principal_from_request(request)
        if principal is None:
            return _unauthorized()
        if not product_id.strip():
            return error_response(
                "VALIDATION_ERROR",
                "Invalid request body",
                [{"field": "productId", "message": "This field may not be blank."}],
            )
        serializer = SetCartItemQuantitySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        command = SetCartItemQuantityCommand.from_validated(
            product_id, serializer.validated_data
        )
        try:
            dto = self.service.set_item_quantity(principal, command)
        except ProductNotFoundError as exc:
            return _product_not_found(exc)
        except CartNotFoundError:
            return _cart_not_found()
        self.log.info(
            "Cart item quantity set via API",
            user_id=principal.user_id,
            product_id=command.product_id,
            quantity=command.quantity,
        )
        return Response(CartReadSerializer(dto).data)
