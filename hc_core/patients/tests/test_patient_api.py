import pytest

from hc_core.patients.models import PatientStatus

pytestmark = pytest.mark.django_db


def test_create_links_patient_login_by_email(api_client, patient_user):
    r = api_client.post(
        "/api/v1/patients/",
        {"name": "Pat One", "age": 41, "sex": "male", "email": "PAT@example.com"},
        format="json",
    )
    assert r.status_code == 201, r.data
    assert r.data["auth_user_id"] == patient_user.id
    assert r.data["status"] == PatientStatus.ACTIVE


def test_patch_and_search(api_client, patient):
    r = api_client.patch(f"/api/v1/patients/{patient.id}/", {"complications": "Asthma"}, format="json")
    assert r.status_code == 200, r.data
    assert r.data["complications"] == "Asthma"

    r = api_client.get("/api/v1/patients/?q=test")
    assert [p["id"] for p in r.data] == [str(patient.id)]


def test_empty_patch_is_rejected(api_client, patient):
    r = api_client.patch(f"/api/v1/patients/{patient.id}/", {}, format="json")
    assert r.status_code == 400
    assert r.data["error"]["code"] == "validation_error"


def test_delete_archives(api_client, patient):
    assert api_client.delete(f"/api/v1/patients/{patient.id}/").status_code == 204

    patient.refresh_from_db()
    assert patient.status == PatientStatus.ARCHIVED
    assert api_client.get("/api/v1/patients/").data == []
    assert len(api_client.get("/api/v1/patients/?include_archived=true").data) == 1


def test_other_doctor_cannot_see_patient(other_client, patient):
    r = other_client.get(f"/api/v1/patients/{patient.id}/")
    assert r.status_code == 404
    assert r.data["error"]["code"] == "not_found"
