import pytest
from django.contrib.auth.models import AnonymousUser
from django.test import RequestFactory
from rest_framework.exceptions import NotAuthenticated, PermissionDenied

from hc_core.common.scope import require_doctor_scope

pytestmark = pytest.mark.django_db


def _request(user):
    req = RequestFactory().get("/api/v1/patients/")
    req.user = user
    return req


def test_doctor_scope_is_the_doctor_user(doctor):
    req = _request(doctor)
    scope = require_doctor_scope(req)

    assert scope.doctor_id == doctor.id
    assert req.doctor_id == doctor.id


def test_anonymous_is_rejected():
    with pytest.raises(NotAuthenticated):
        require_doctor_scope(_request(AnonymousUser()))


def test_patient_login_is_not_a_doctor(patient_user):
    with pytest.raises(PermissionDenied):
        require_doctor_scope(_request(patient_user))


def test_patient_login_cannot_use_doctor_endpoints(patient_user):
    from rest_framework.test import APIClient

    client = APIClient()
    client.force_authenticate(user=patient_user)

    resp = client.get("/api/v1/medicines/")
    assert resp.status_code == 403
    assert resp.data["error"]["code"] == "permission_denied"
