# hc_core/common/api/exceptions.py
"""
Every API error leaves as one envelope:

    {"error": {"code": ..., "message": ..., "details": ..., "request_id": ...}}

`code` is a stable machine string; `message` is for humans; `details` carries
field errors when there are any.
"""
from __future__ import annotations

import logging
import uuid
from typing import Any

from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, NotAuthenticated, PermissionDenied, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)

GENERIC_MESSAGE = "Request failed."

# First match wins; other APIExceptions fall back to their default_code.
ERROR_CODES: tuple[tuple[type[Exception], str], ...] = (
    (ValidationError, "validation_error"),
    (NotAuthenticated, "not_authenticated"),
    (PermissionDenied, "permission_denied"),
    (Http404, "not_found"),
)


def ensure_request_id(request) -> str:
    """
    The request's id, minting one on first use. Works on a Django HttpRequest
    and on a DRF Request (which proxies attributes to it).
    """
    if request is None:
        return uuid.uuid4().hex
    rid = getattr(request, "request_id", None)
    if not rid:
        rid = uuid.uuid4().hex
        request.request_id = rid
    return rid


def build_error_envelope(*, request=None, code: str, message: str, details: Any = None) -> dict[str, Any]:
    return {
        "error": {
            "code": code,
            "message": message,
            "details": details,
            "request_id": ensure_request_id(request),
        }
    }


class ConflictError(APIException):
    """
    409: the request is well-formed but the resource's state forbids it
    (e.g. changing the status of a completed appointment).
    """
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict."
    default_code = "conflict"


class TransactionFailed(APIException):
    """
    503: the atomic write batch could not be committed and nothing was
    persisted. The whole operation may be retried.
    """
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "The change could not be saved. Nothing was modified; please retry."
    default_code = "transaction_failed"
    retry_after = 1


def error_code(exc: Exception) -> str:
    for exc_type, code in ERROR_CODES:
        if isinstance(exc, exc_type):
            return code
    if isinstance(exc, APIException):
        return exc.default_code or "api_error"
    return "error"


def split_detail(data: Any) -> tuple[str, Any]:
    """
    DRF error data -> (message, details).
    {"detail": msg} gives (msg, None); any other keys stay in details.
    Field-error dicts and lists keep the generic message.
    """
    if isinstance(data, dict) and "detail" in data:
        rest = {k: v for k, v in data.items() if k != "detail"}
        return str(data["detail"]), rest or None
    return GENERIC_MESSAGE, data


def api_exception_handler(exc: Exception, context: dict[str, Any]):
    request = context.get("request")

    if isinstance(exc, DjangoValidationError):
        # raised by selectors for bad query params
        messages = exc.messages
        exc = ValidationError({"detail": messages[0] if len(messages) == 1 else messages})

    response = drf_exception_handler(exc, context)

    if response is None:
        logger.exception("unhandled API error (request_id=%s)", ensure_request_id(request), exc_info=exc)
        return Response(
            build_error_envelope(request=request, code="server_error", message="Unexpected server error."),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    message, details = split_detail(response.data)

    headers = {k: v for k, v in response.headers.items() if k.lower() != "content-type"}
    if isinstance(exc, TransactionFailed):
        headers["Retry-After"] = str(exc.retry_after)

    return Response(
        build_error_envelope(request=request, code=error_code(exc), message=message, details=details),
        status=response.status_code,
        headers=headers,
    )
