from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple

from django.core.exceptions import (
    PermissionDenied as DjangoPermissionDenied,
    ValidationError as DjangoValidationError,
)
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import (
    AuthenticationFailed,
    MethodNotAllowed,
    NotAuthenticated,
    NotFound,
    ParseError,
    PermissionDenied,
    UnsupportedMediaType,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from apps.api.utils import ERROR_STATUS_MAP, error_response, field_errors
from apps.common import get_logger

logger = get_logger(__name__).bind(component="api", layer="exception")

SERVER_ERROR_MESSAGE = "Internal server error"

# (exception types, code, fallback message, hint); first match wins.
_DRF_ERROR_TABLE = (
    ((ParseError,), "VALIDATION_ERROR", "Malformed request", "Send a JSON object body."),
    ((NotAuthenticated, AuthenticationFailed), "UNAUTHORIZED", "Unauthorized", None),
    (
        (PermissionDenied, DjangoPermissionDenied),
        "FORBIDDEN",
        "You do not have permission to perform this action",
        None,
    ),
    ((NotFound, Http404), "NOT_FOUND", "Resource not found", None),
    ((MethodNotAllowed,), "METHOD_NOT_ALLOWED", "Method not allowed", None),
    (
        (UnsupportedMediaType,),
        "UNSUPPORTED_MEDIA_TYPE",
        "Unsupported media type",
        "Use Content-Type: application/json.",
    ),
)

_CODE_BY_STATUS = {http_status: code for code, http_status in ERROR_STATUS_MAP.items()}


class ApplicationError(Exception):
    """
    Error raised from services or views that already knows its client-facing shape.

    ``status_code`` overrides the status derived from ``code``.
    """

    def __init__(
        self,
        code: str,
        message: str,
        *,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
        hint: Optional[str] = None,
        headers: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        self.hint = hint
        self.headers = headers

    def to_response(self) -> Response:
        return error_response(
            self.code,
            self.message,
            self.details,
            http_status=self.status_code,
            hint=self.hint,
            headers=self.headers,
        )


def global_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """
    DRF ``EXCEPTION_HANDLER``: every failure leaves as ``{error, code, status, ...}``.

    Unknown exceptions become a 500 with the detail withheld and the
    traceback logged.
    """
    view = context.get("view")
    log = logger.bind_request(context.get("request")).bind(
        view=type(view).__name__ if view is not None else None
    )

    if isinstance(exc, ApplicationError):
        log.info("Handled application error", code=exc.code, status=exc.status_code)
        return exc.to_response()

    if isinstance(exc, DjangoValidationError):
        exc = ValidationError(
            exc.message_dict if hasattr(exc, "message_dict") else list(exc.messages)
        )

    response = drf_exception_handler(exc, context)
    if response is None:
        log.exception(
            "Unhandled exception bubbled to global handler",
            exception=exc.__class__.__name__,
        )
        return error_response(
            "SERVER_ERROR",
            SERVER_ERROR_MESSAGE,
            http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    code, message, details, hint = _describe(exc, response.data, response.status_code)
    if response.status_code >= 500:
        log.error("Converted server error", code=code, status=response.status_code)
    else:
        log.info("Converted API exception", code=code, status=response.status_code)
    return error_response(
        code,
        message,
        details,
        http_status=response.status_code,
        hint=hint,
        headers=dict(response.headers) or None,
    )


def _describe(
    exc: Exception, payload: Any, status_code: int
) -> Tuple[str, str, Optional[Any], Optional[str]]:
    if isinstance(exc, ValidationError):
        return "VALIDATION_ERROR", "Invalid request body", field_errors(payload), None
    if status_code >= 500:
        return "SERVER_ERROR", SERVER_ERROR_MESSAGE, None, None
    for types, code, fallback, hint in _DRF_ERROR_TABLE:
        if isinstance(exc, types):
            message = "Unauthorized" if code == "UNAUTHORIZED" else _message(payload, fallback)
            return code, message, None, hint
    code = _CODE_BY_STATUS.get(status_code, "REQUEST_FAILED")
    details = payload if isinstance(payload, (dict, list)) and payload else None
    return code, _message(payload, "Request failed"), details, None


def _message(payload: Any, fallback: str) -> str:
    if isinstance(payload, str):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("detail"), str):
        return payload["detail"]
    if isinstance(payload, list) and payload and isinstance(payload[0], str):
        return payload[0]
    return fallback


__all__ = ["ApplicationError", "global_exception_handler"]
