import json
from typing import Any, Dict, Optional

from django.http import HttpRequest
from rest_framework.exceptions import AuthenticationFailed as DRFAuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken

from apps.api.principal import Principal
from apps.api.utils import error_response
from apps.users.models import User
from apps.common import get_logger

logger = get_logger(__name__).bind(component="api", layer="validation")

_jwt_authenticator = JWTAuthentication()

# Views that never run without a session; every method is gated.
SESSION_REQUIRED_VIEWS = frozenset(
    {"CartView", "CartItemView", "AuthSessionView", "LogoutView"}
)


def _is_authenticated_user(request: HttpRequest) -> bool:
    user = getattr(request, "user", None)
    if user and getattr(user, "is_authenticated", False) and getattr(user, "id", None):
        return True

    # Middleware runs before DRF authenticates, so bearer tokens are checked here.
    meta = getattr(request, "META", {}) or {}
    auth_header = meta.get("HTTP_AUTHORIZATION") if hasattr(meta, "get") else None
    if not auth_header:
        return False

    try:
        authenticated = _jwt_authenticator.authenticate(request)
    except (InvalidToken, DRFAuthenticationFailed) as exc:
        logger.warning("JWT authentication failed", detail=str(exc))
        return False

    if not authenticated:
        return False

    user, token = authenticated
    if not getattr(user, "is_authenticated", False) or not getattr(user, "id", None):
        return False

    request.user = user
    request.auth = token
    logger.debug("Authenticated user from bearer token", user_id=user.id)
    return True


def resolve_principal(request: HttpRequest) -> Optional[Principal]:
    """Authenticate the request and attach a ``Principal``; None when there is no valid session."""
    if not _is_authenticated_user(request):
        request.principal = None
        return None
    principal = Principal.from_user(request.user)
    request.principal = principal
    return principal


def _extract_request_data(request: HttpRequest) -> Dict[str, Any]:
    data = getattr(request, "data", None)
    if data not in (None, {}):
        return data
    if request.content_type == "application/json":
        try:
            body = request.body.decode("utf-8") if hasattr(request, "body") else None
            parsed = json.loads(body) if body else {}
        except (ValueError, AttributeError, UnicodeDecodeError):
            return {}
        return parsed if isinstance(parsed, dict) else {}
    if hasattr(request, "POST"):
        post = request.POST
        if hasattr(post, "dict"):
            return post.dict()
        return dict(post)
    return {}


def _validate_user_uniqueness(request: HttpRequest) -> Any:
    data = _extract_request_data(request) or {}
    username = data.get("username")
    email = data.get("email")

    if isinstance(username, str) and username and User.objects.filter(
        username__iexact=username.strip()
    ).exists():
        logger.info("Username uniqueness validation failed", username=username)
        return error_response(
            "VALIDATION_ERROR",
            "Username already exists",
            [{"field": "username", "message": "A user with that username already exists."}],
        )
    if isinstance(email, str) and email and User.objects.filter(
        email__iexact=email.strip()
    ).exists():
        logger.info("Email uniqueness validation failed", email=email)
        return error_response(
            "VALIDATION_ERROR",
            "Email already exists",
            [{"field": "email", "message": "A user with that email already exists."}],
        )
    return None


def validate_request_context(request: HttpRequest, view_class, view_kwargs) -> Any:
    """
    Performs request level validation for specific API views.
    Returns a DRF Response when validation fails; otherwise None and
    attaches the resolved principal to the request instance.
    """
    view_name = getattr(view_class, "__name__", "")

    logger.debug(
        "Running request context validation",
        view=view_name,
        method=getattr(request, "method", None),
    )

    if view_name in SESSION_REQUIRED_VIEWS:
        principal = resolve_principal(request)
        if principal is None:
            logger.warning(
                "Session required", view=view_name, method=request.method
            )
            return error_response("UNAUTHORIZED", "Unauthorized")
        logger.debug(
            "Validated session principal",
            view=view_name,
            method=request.method,
            user_id=principal.user_id,
            product_id=view_kwargs.get("product_id"),
        )
    elif view_name == "AuthRegisterView":
        if request.method in ("POST",):
            result = _validate_user_uniqueness(request)
            if result:
                logger.info("AuthRegisterView uniqueness check failed")
                return result

    return None
