from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Mapping, Optional, Tuple

from django.core.exceptions import (
    PermissionDenied as DjangoPermissionDenied,
    ValidationError as DjangoValidationError,
)
from django.db import DatabaseError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import (
    AuthenticationFailed,
    MethodNotAllowed,
    NotAuthenticated,
    NotFound,
    ParseError,
    PermissionDenied,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from apps.api.utils import error_response, status_for_code
from apps.common import get_logger

logger = get_logger(__name__).bind(component="api", layer="exception")

FALLBACKS: Dict[int, Tuple[str, str]] = {
    status.HTTP_400_BAD_REQUEST: ("VALIDATION_ERROR", "Validation failed"),
    status.HTTP_401_UNAUTHORIZED: ("UNAUTHORIZED", "Authentication required"),
    status.HTTP_403_FORBIDDEN: ("FORBIDDEN", "You do not have permission to perform this action"),
    status.HTTP_404_NOT_FOUND: ("NOT_FOUND", "Resource not found"),
    status.HTTP_405_METHOD_NOT_ALLOWED: ("METHOD_NOT_ALLOWED", "Method not allowed"),
    status.HTTP_409_CONFLICT: ("CONFLICT", "Resource conflict"),
    status.HTTP_415_UNSUPPORTED_MEDIA_TYPE: ("UNSUPPORTED_MEDIA_TYPE", "Unsupported media type"),
    status.HTTP_429_TOO_MANY_REQUESTS: ("TOO_MANY_REQUESTS", "Request was throttled"),
}


class ApplicationError(Exception):
    """
    Error raised by services or views that already knows how it should look on the wire.

    Args:
        code: Machine readable error code.
        message: Human readable explanation.
        status_code: Explicit HTTP status; derived from ``code`` when omitted.
        details: Structured details for clients.
        hint: Remediation hint.
        extra: Additional machine readable fields.
        headers: Response headers.
    """

    def __init__(
        self,
        code: str,
        message: str,
        *,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
        hint: Optional[str] = None,
        extra: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code if status_code is not None else status_for_code(code)
        self.details = details
        self.hint = hint
        self.extra = extra
        self.headers = headers

    def to_response(self) -> Response:
        return error_response(
            self.code,
            self.message,
            self.details,
            http_status=self.status_code,
            hint=self.hint,
            extra=self.extra,
            headers=self.headers,
        )


class BusinessRuleError(ApplicationError):
    """
    A cart, inventory or checkout rule refused the operation.

    Subclasses pin ``code`` and ``default_message`` so call sites only pass
    the identifiers involved.
    """

    code = "CONFLICT"
    default_message = "Request violates a business rule"

    def __init__(self, message: Optional[str] = None, *, details: Optional[Any] = None, **kwargs):
        super().__init__(
            type(self).code,
            message or type(self).default_message,
            details=details,
            **kwargs,
        )


@contextmanager
def logged_rejection(log, action: str, **context):
    """Log a business rule refusal raised inside the block at warning level and re-raise it."""
    try:
        yield
    except BusinessRuleError as exc:
        log.warning(f"{action} rejected", code=exc.code, **context)
        raise


def global_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Render every exception leaving a DRF view as the shared error envelope."""
    bound_logger = _bind_logger(context)

    if isinstance(exc, ApplicationError):
        bound_logger.info("Handled application error", code=exc.code, status=exc.status_code)
        return exc.to_response()

    if isinstance(exc, DatabaseError):
        bound_logger.exception("Database failure reached the API boundary")
        return error_response(
            "INFRASTRUCTURE_ERROR",
            "A storage dependency is unavailable, try again later",
            http_status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    if isinstance(exc, DjangoValidationError):
        exc = ValidationError(_django_validation_payload(exc))

    response = drf_exception_handler(exc, context)
    if response is not None:
        return _from_drf_exception(exc, response, bound_logger)

    bound_logger.exception("Unhandled exception bubbled to global handler")
    return error_response(
        "SERVER_ERROR",
        "Something went wrong",
        http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def _bind_logger(context: Dict[str, Any]):
    log = logger
    view = context.get("view")
    request = context.get("request")
    if view is not None:
        log = log.bind(view=type(view).__name__)
    if request is not None:
        log = log.bind(method=getattr(request, "method", None), path=getattr(request, "path", None))
    return log


def _from_drf_exception(exc: Exception, response: Response, bound_logger) -> Response:
    status_code = response.status_code
    code, message, details = _classify(exc, response.data, status_code)
    headers = dict(response.headers) if getattr(response, "headers", None) else None

    if status_code >= 500:
        bound_logger.error("Converted server error", code=code, status=status_code)
    else:
        bound_logger.info("Converted API exception", code=code, status=status_code)

    return error_response(code, message, details, http_status=status_code, headers=headers)


def _django_validation_payload(exc: DjangoValidationError):
    if hasattr(exc, "message_dict"):
        return exc.message_dict
    return list(exc.messages)


def _classify(exc: Exception, payload: Any, status_code: int) -> Tuple[str, str, Optional[Any]]:
    if isinstance(exc, ValidationError):
        return "VALIDATION_ERROR", _message(payload, "Validation failed", status_code), payload
    if isinstance(exc, ParseError):
        return "VALIDATION_ERROR", _message(payload, "Malformed request", status_code), None
    if isinstance(exc, (NotAuthenticated, AuthenticationFailed)):
        return "UNAUTHORIZED", _message(payload, "Authentication required", status_code), None
    if isinstance(exc, (PermissionDenied, DjangoPermissionDenied)):
        return (
            "FORBIDDEN",
            _message(payload, "You do not have permission to perform this action", status_code),
            None,
        )
    if isinstance(exc, (NotFound, Http404)):
        return "NOT_FOUND", _message(payload, "Resource not found", status_code), None
    if isinstance(exc, MethodNotAllowed):
        return "METHOD_NOT_ALLOWED", _message(payload, "Method not allowed", status_code), None

    if status_code >= 500:
        return "SERVER_ERROR", "Something went wrong", None
    code, fallback = FALLBACKS.get(status_code, ("UNKNOWN_ERROR", "Request failed"))
    details = payload if isinstance(payload, (dict, list)) and payload else None
    return code, _message(payload, fallback, status_code), details


def _message(payload: Any, fallback: str, status_code: int) -> str:
    if status_code >= 500:
        return "Something went wrong"
    if isinstance(payload, str):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("detail"), str):
        return payload["detail"]
    if isinstance(payload, list) and payload and isinstance(payload[0], str):
        return payload[0]
    return fallback


__all__ = [
    "ApplicationError",
    "BusinessRuleError",
    "global_exception_handler",
    "logged_rejection",
]
