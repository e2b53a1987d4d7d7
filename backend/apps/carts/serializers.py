from rest_framework import serializers
from apps.catalog.serializers import ProductReadSerializer
from .commands import MAX_CART_QUANTITY


class StrictIntegerField(serializers.IntegerField):
    """Integer field that rejects strings, floats and booleans instead of coercing them."""

    def to_internal_value(self, data):
        if isinstance(data, bool) or not isinstance(data, int):
            self.fail("invalid")
        return super().to_internal_value(data)


class ProductIdField(serializers.CharField):
    def __init__(self, **kwargs):
        kwargs.setdefault("max_length", 64)
        kwargs.setdefault("trim_whitespace", True)
        kwargs.setdefault("allow_blank", False)
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        if not isinstance(data, str):
            self.fail("invalid")
        return super().to_internal_value(data)


class AddCartItemSerializer(serializers.Serializer):
    productId = ProductIdField()
    quantity = StrictIntegerField(
        required=False, default=1, min_value=1, max_value=MAX_CART_QUANTITY
    )


class RemoveCartItemSerializer(serializers.Serializer):
    productId = ProductIdField()


class SetCartItemQuantitySerializer(serializers.Serializer):
    quantity = StrictIntegerField(min_value=0, max_value=MAX_CART_QUANTITY)


class CartItemReadSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    cartId = serializers.IntegerField(source="cart_id")
    productId = serializers.CharField(source="product_id")
    quantity = serializers.IntegerField()
    product = ProductReadSerializer()


class CartReadSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    userId = serializers.IntegerField(source="user_id")
    createdAt = serializers.CharField(source="created_at", allow_null=True)
    updatedAt = serializers.CharField(source="updated_at", allow_null=True)
    items = CartItemReadSerializer(many=True)
