import pytest
from django.core.exceptions import ValidationError as DjangoValidationError
from django.test import RequestFactory
from rest_framework.exceptions import NotFound

from hc_core.common.api.exceptions import (
    ConflictError,
    TransactionFailed,
    api_exception_handler,
    build_error_envelope,
)


def _handle(exc, request=None):
    return api_exception_handler(exc, {"request": request, "view": None})


def test_envelope_shape():
    req = RequestFactory().get("/api/v1/medicines/")
    req.request_id = "rid-1"

    body = build_error_envelope(request=req, code="conflict", message="nope", details={"a": 1})
    assert body == {"error": {"code": "conflict", "message": "nope", "details": {"a": 1}, "request_id": "rid-1"}}


@pytest.mark.parametrize(
    "exc, status_code, code",
    [
        (NotFound("Appointment not found."), 404, "not_found"),
        (ConflictError("Appointment is completed."), 409, "conflict"),
        (TransactionFailed(), 503, "transaction_failed"),
        (DjangoValidationError("ordering is invalid."), 400, "validation_error"),
    ],
)
def test_handler_maps_exceptions(exc, status_code, code):
    resp = _handle(exc, RequestFactory().get("/"))

    assert resp.status_code == status_code
    assert resp.data["error"]["code"] == code
    assert resp.data["error"]["request_id"]


def test_unhandled_error_is_a_500_envelope():
    resp = _handle(RuntimeError("boom"), RequestFactory().get("/"))

    assert resp.status_code == 500
    assert resp.data["error"]["code"] == "server_error"
    assert "boom" not in resp.data["error"]["message"]


@pytest.mark.django_db
def test_anonymous_request_gets_envelope(client):
    resp = client.get("/api/v1/medicines/")

    assert resp.status_code == 401
    assert resp.json()["error"]["code"] == "not_authenticated"


def test_transaction_failure_asks_client_to_retry():
    resp = _handle(TransactionFailed(), RequestFactory().get("/"))

    assert resp["Retry-After"] == "1"
    assert "Nothing was modified" in resp.data["error"]["message"]


def test_field_errors_go_to_details():
    from rest_framework.exceptions import ValidationError

    resp = _handle(ValidationError({"stock": ["Ensure this value is greater than or equal to 0."]}))

    assert resp.data["error"]["message"] == "Request failed."
    assert resp.data["error"]["details"] == {"stock": ["Ensure this value is greater than or equal to 0."]}
