from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.serializers import as_serializer_error

DEFAULT_ERROR_STATUS = status.HTTP_400_BAD_REQUEST

ERROR_STATUS_MAP = {
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "SERVER_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "METHOD_NOT_ALLOWED": status.HTTP_405_METHOD_NOT_ALLOWED,
    "UNSUPPORTED_MEDIA_TYPE": status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
    "SERVICE_UNAVAILABLE": status.HTTP_503_SERVICE_UNAVAILABLE,
}

NON_FIELD_KEYS = ("non_field_errors", "detail")


def field_errors(errors: Any, prefix: str = "") -> List[Dict[str, str]]:
    """
    Flatten serializer errors into ``[{"field": ..., "message": ...}]``.

    Nested fields are joined with dots; errors not tied to a field use ``"body"``.
    """
    if isinstance(errors, ValidationError):
        errors = as_serializer_error(errors)
    entries: List[Dict[str, str]] = []
    if isinstance(errors, Mapping):
        for key, value in errors.items():
            if key in NON_FIELD_KEYS:
                field = prefix or "body"
            else:
                field = f"{prefix}.{key}" if prefix else str(key)
            entries.extend(field_errors(value, field))
    elif isinstance(errors, (list, tuple)):
        for value in errors:
            if isinstance(value, (Mapping, list, tuple)):
                entries.extend(field_errors(value, prefix))
            else:
                entries.append({"field": prefix or "body", "message": str(value)})
    elif errors is not None:
        entries.append({"field": prefix or "body", "message": str(errors)})
    return entries


def _normalize_details(details: Any) -> Any:
    if isinstance(details, ValidationError):
        return field_errors(details)
    if isinstance(details, Mapping):
        return dict(details)
    if isinstance(details, Exception):
        return {"type": details.__class__.__name__}
    return details


def error_response(
    code: str,
    message: str,
    details: Optional[Any] = None,
    http_status: Optional[int] = None,
    *,
    hint: Optional[str] = None,
    headers: Optional[Mapping[str, str]] = None,
) -> Response:
    """
    Return a consistently structured error response for API endpoints.

    The body is ``{"error": message, "code": code, "status": status}`` with
    optional ``details`` and ``hint`` keys.

    Args:
        code: Machine-readable error identifier.
        message: Human-readable explanation of the error.
        details: Optional context, e.g. validation errors or lookup keys.
        http_status: Explicit HTTP status code to override the default mapping.
        hint: Optional actionable message for clients on how to resolve the error.
        headers: Optional response headers to include alongside the payload.
    """

    if not isinstance(code, str):
        raise TypeError("error_response requires code to be a string")
    if not isinstance(message, str):
        raise TypeError("error_response requires message to be a string")

    code = code.strip()
    message = message.strip()

    if not code:
        raise ValueError("error_response requires a non-empty code")
    if not message:
        raise ValueError("error_response requires a non-empty message")

    normalized_code = code.upper()

    status_code = (
        int(http_status)
        if http_status is not None
        else ERROR_STATUS_MAP.get(normalized_code, DEFAULT_ERROR_STATUS)
    )

    if headers is not None and not isinstance(headers, Mapping):
        raise TypeError("error_response headers must be a mapping if provided")
    if hint is not None and not isinstance(hint, str):
        raise TypeError("error_response hint must be a string if provided")

    if not 100 <= status_code <= 599:
        raise ValueError("error_response status must be a valid HTTP status code")

    payload: Dict[str, Any] = {
        "error": message,
        "code": normalized_code,
        "status": status_code,
    }
    if details is not None:
        payload["details"] = _normalize_details(details)
    if hint is not None:
        payload["hint"] = hint

    headers_dict = (
        {str(key): str(value) for key, value in headers.items()} if headers else None
    )

    return Response(payload, status=status_code, headers=headers_dict)
