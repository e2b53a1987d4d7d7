import uuid

from django.db import models
from django.utils import timezone


def generate_product_id() -> str:
    return uuid.uuid4().hex


class Product(models.Model):
    # String identifiers so catalog imports can keep their upstream ids
    id = models.CharField(
        primary_key=True, max_length=64, default=generate_product_id, editable=False
    )
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(max_digits=10, decimal_places=2)
    image_url = models.URLField(max_length=500, blank=True, default="")
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    class Meta:
        db_table = "products"
        indexes = [
            models.Index(fields=["name"], name="product_name_idx"),
            models.Index(fields=["-created_at"], name="product_created_idx"),
        ]
