import pytest

from hc_core.medicines.models import Medicine
from hc_core.medicines.services import clamp_decrement

pytestmark = pytest.mark.django_db


@pytest.mark.parametrize("stock, qty, expected", [(8, 3, 5), (2, 5, 0), (0, 1, 0), (4, -2, 4)])
def test_clamp_decrement_never_goes_negative(stock, qty, expected):
    assert clamp_decrement(stock, qty) == expected


def test_create_retrieve_update(api_client, doctor):
    r = api_client.post(
        "/api/v1/medicines/",
        {"name": "Rhus Tox 30C", "description": "pillules", "stock": 12},
        format="json",
    )
    assert r.status_code == 201, r.data
    mid = r.data["id"]
    assert r.data["doctor_id"] == doctor.id

    r = api_client.patch(f"/api/v1/medicines/{mid}/", {"stock": 30}, format="json")
    assert r.status_code == 200, r.data
    assert r.data["stock"] == 30

    r = api_client.get(f"/api/v1/medicines/{mid}/")
    assert r.status_code == 200
    assert r.data["name"] == "Rhus Tox 30C"


def test_negative_stock_is_rejected(api_client, arnica):
    r = api_client.post("/api/v1/medicines/", {"name": "Bad", "stock": -1}, format="json")
    assert r.status_code == 400
    assert r.data["error"]["code"] == "validation_error"

    r = api_client.patch(f"/api/v1/medicines/{arnica.id}/", {"stock": -4}, format="json")
    assert r.status_code == 400

    arnica.refresh_from_db()
    assert arnica.stock == 8


def test_list_filters(api_client, arnica, belladonna):
    Medicine.objects.filter(id=arnica.id).update(stock=3)

    r = api_client.get("/api/v1/medicines/?low_stock=true")
    assert r.status_code == 200, r.data
    assert [m["name"] for m in r.data["results"]] == ["Arnica 30C"]

    r = api_client.get("/api/v1/medicines/?q=bella")
    assert [m["name"] for m in r.data["results"]] == ["Belladonna 200C"]


def test_catalogue_is_doctor_scoped(api_client, other_client, arnica, foreign_medicine):
    names = [m["name"] for m in api_client.get("/api/v1/medicines/").data["results"]]
    assert names == ["Arnica 30C"]

    assert other_client.get(f"/api/v1/medicines/{arnica.id}/").status_code == 404
    assert other_client.delete(f"/api/v1/medicines/{arnica.id}/").status_code == 404
    assert Medicine.objects.filter(id=arnica.id).exists()


def test_delete(api_client, arnica):
    assert api_client.delete(f"/api/v1/medicines/{arnica.id}/").status_code == 204
    assert not Medicine.objects.filter(id=arnica.id).exists()
