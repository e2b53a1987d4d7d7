from rest_framework import serializers


class ProductReadSerializer(serializers.Serializer):
    # Matches ProductDTO shapes used for responses
    id = serializers.CharField()
    name = serializers.CharField()
    description = serializers.CharField(allow_blank=True)
    price = serializers.FloatField()
    imageUrl = serializers.CharField(source="image_url", allow_blank=True)
    createdAt = serializers.CharField(source="created_at", allow_null=True)
    updatedAt = serializers.CharField(source="updated_at", allow_null=True)

    def to_representation(self, instance):
        if instance is None:
            return None
        # If it's already a dataclass DTO, extract attributes directly for speed
        if hasattr(instance, "__dataclass_fields__"):
            return {
                "id": instance.id,
                "name": instance.name,
                "description": instance.description,
                "price": instance.price,
                "imageUrl": instance.image_url,
                "createdAt": instance.created_at,
                "updatedAt": instance.updated_at,
            }
        return super().to_representation(instance)


class ProductListQuerySerializer(serializers.Serializer):
    q = serializers.CharField(required=False, allow_blank=True, max_length=200)
    page = serializers.IntegerField(required=False, min_value=1, default=1)
