from django.db.models import Q

from apps.common.repository import GenericRepository
from .models import Product


class ProductRepository(GenericRepository[Product]):
    def __init__(self):
        super().__init__(Product)

    def search(self, query: str = ""):
        """Newest first; a non-empty query matches name or description case-insensitively."""
        qs = self.model.objects.all()
        if query:
            qs = qs.filter(Q(name__icontains=query) | Q(description__icontains=query))
        return qs.order_by("-created_at", "id")
