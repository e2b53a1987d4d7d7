import types
from unittest.mock import patch

from rest_framework.test import APIRequestFactory

from apps.api.middleware import RequestValidationMiddleware
from apps.api.principal import Principal, principal_from_request
from apps.api.validation import (
    validate_request_context,
    _extract_request_data,
    resolve_principal,
)
from apps.auth.views import AuthRegisterView, AuthSessionView
from apps.carts.views import CartView, CartItemView
from apps.catalog.views import ProductListView


factory = APIRequestFactory()


def _user(user_id):
    return types.SimpleNamespace(id=user_id, username=f"user{user_id}", is_authenticated=True)


def test_cart_view_without_session_is_rejected():
    request = factory.get("/api/cart/")
    response = validate_request_context(request, CartView, {})
    assert response.status_code == 401
    assert response.data["code"] == "UNAUTHORIZED"
    assert request.principal is None


def test_cart_view_with_invalid_bearer_token_is_rejected():
    request = factory.post(
        "/api/cart/", {"productId": "p1"}, format="json", HTTP_AUTHORIZATION="Bearer not-a-jwt"
    )
    response = validate_request_context(request, CartView, {})
    assert response.status_code == 401


def test_cart_view_attaches_principal_for_authenticated_user():
    request = factory.post("/api/cart/", {"productId": "p1"}, format="json")
    request.user = _user(42)
    response = validate_request_context(request, CartView, {})
    assert response is None
    assert request.principal == Principal(user_id=42, username="user42")


def test_cart_item_view_gates_every_method():
    request = factory.put("/api/cart/items/p1/", {"quantity": 2}, format="json")
    response = validate_request_context(request, CartItemView, {"product_id": "p1"})
    assert response.status_code == 401


def test_session_view_requires_principal():
    request = factory.get("/api/auth/session/")
    assert validate_request_context(request, AuthSessionView, {}).status_code == 401


def test_public_views_pass_through():
    request = factory.get("/api/products/")
    assert validate_request_context(request, ProductListView, {}) is None


def test_resolve_principal_uses_bearer_token_authenticator():
    request = factory.get("/api/cart/", HTTP_AUTHORIZATION="Bearer token")
    with patch(
        "apps.api.validation._jwt_authenticator.authenticate",
        return_value=(_user(7), "token"),
    ) as authenticate:
        principal = resolve_principal(request)
    authenticate.assert_called_once_with(request)
    assert principal.user_id == 7
    assert request.user.id == 7


@patch("apps.api.validation.User.objects")
def test_register_rejects_duplicate_username(mock_user_manager):
    mock_user_manager.filter.return_value.exists.return_value = True
    request = factory.post("/api/auth/register/", {"username": "dup"}, format="json")
    request.data = {"username": "dup"}
    response = validate_request_context(request, AuthRegisterView, {})
    assert response.status_code == 400
    assert response.data["code"] == "VALIDATION_ERROR"
    assert response.data["details"][0]["field"] == "username"
    mock_user_manager.filter.assert_called_once_with(username__iexact="dup")


@patch("apps.api.validation.User.objects")
def test_register_passes_when_unique(mock_user_manager):
    mock_user_manager.filter.return_value.exists.return_value = False
    request = factory.post(
        "/api/auth/register/", {"username": "fresh", "email": "f@example.com"}, format="json"
    )
    request.data = {"username": "fresh", "email": "f@example.com"}
    assert validate_request_context(request, AuthRegisterView, {}) is None


def test_extract_request_data_reads_json_body():
    request = factory.post("/api/cart/", {"productId": "p1"}, format="json")
    assert _extract_request_data(request) == {"productId": "p1"}


def test_extract_request_data_ignores_non_object_json():
    request = factory.generic("POST", "/api/cart/", "[1, 2]", content_type="application/json")
    assert _extract_request_data(request) == {}


def test_principal_from_request_falls_back_to_user():
    request = types.SimpleNamespace(user=_user(3))
    assert principal_from_request(request) == Principal(user_id=3, username="user3")
    assert principal_from_request(types.SimpleNamespace(user=None)) is None


def test_middleware_no_view_class_returns_none():
    middleware = RequestValidationMiddleware(lambda req: None)
    request = factory.get("/health/live")
    response = middleware.process_view(request, lambda req: req, [], {})
    assert response is None


def test_middleware_returns_renderable_rejection():
    middleware = RequestValidationMiddleware(lambda req: None)
    request = factory.delete("/api/cart/", {"productId": "p1"}, format="json")
    view_func = CartView.as_view()
    response = middleware.process_view(request, view_func, [], {})
    assert response.status_code == 401
    response.render()
    assert b'"code":"UNAUTHORIZED"' in response.content
