from django.urls import path
from .views import CartView, CartItemView

urlpatterns = [
    path("", CartView.as_view(), name="api-cart"),
    path("items/<str:product_id>/", CartItemView.as_view(), name="api-cart-item"),
]
