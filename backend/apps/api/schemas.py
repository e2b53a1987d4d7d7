from drf_spectacular.utils import inline_serializer
from rest_framework import serializers


class FieldErrorSerializer(serializers.Serializer):
    field = serializers.CharField()
    message = serializers.CharField()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()
    code = serializers.CharField()
    status = serializers.IntegerField()
    details = serializers.JSONField(required=False)
    hint = serializers.CharField(required=False, allow_blank=True)


class ValidationErrorResponseSerializer(ErrorResponseSerializer):
    details = FieldErrorSerializer(many=True)


def paginated_response(
    item_serializer_class: type[serializers.Serializer],
) -> type[serializers.Serializer]:
    """Create an inline paginated response serializer for listing endpoints.

    Returns a serializer with fields: count, next, previous, currentPage,
    totalPages, searchQuery, results[item_serializer].
    """
    name = getattr(item_serializer_class, "__name__", "Items")
    return inline_serializer(
        name=f"Paginated{name}",
        fields={
            "count": serializers.IntegerField(),
            "next": serializers.CharField(allow_null=True),
            "previous": serializers.CharField(allow_null=True),
            "currentPage": serializers.IntegerField(),
            "totalPages": serializers.IntegerField(),
            "searchQuery": serializers.CharField(allow_blank=True),
            "results": item_serializer_class(many=True),
        },
    )
