import pytest

from hc_core.alerts.low_stock import LowStockSignal
from hc_core.alerts.models import Alert, AlertStatus
from hc_core.alerts.services import deliver_low_stock_alerts
from hc_core.common.events import subscribe, unsubscribe

pytestmark = pytest.mark.django_db


def _signal(medicine, stock):
    return LowStockSignal(medicine_id=str(medicine.id), medicine_name=medicine.name, stock=stock, threshold=5)


def test_delivery_creates_alert_and_publishes_event(doctor, arnica):
    seen = []

    @subscribe("medicine.low_stock")
    def _collect(payload):
        seen.append(payload)

    try:
        alerts = deliver_low_stock_alerts(doctor_id=doctor.id, appointment_id=None, signals=[_signal(arnica, 2)])
    finally:
        unsubscribe("medicine.low_stock", _collect)

    assert len(alerts) == 1
    assert alerts[0].status == AlertStatus.OPEN
    assert alerts[0].meta["stock"] == 2
    assert seen == [
        {
            "doctor_id": doctor.id,
            "alert_id": str(alerts[0].id),
            "medicine_id": str(arnica.id),
            "medicine_name": "Arnica 30C",
            "stock": 2,
        }
    ]


def test_list_and_ack(api_client, doctor, arnica):
    (alert,) = deliver_low_stock_alerts(doctor_id=doctor.id, appointment_id=None, signals=[_signal(arnica, 1)])

    r = api_client.get("/api/v1/alerts/?status=OPEN")
    assert r.status_code == 200, r.data
    assert [a["id"] for a in r.data["results"]] == [str(alert.id)]

    r = api_client.post(f"/api/v1/alerts/{alert.id}/ack/")
    assert r.status_code == 200, r.data
    assert r.data["status"] == "ACKED"
    assert r.data["acked_at"] is not None

    assert api_client.get("/api/v1/alerts/?status=OPEN").data["results"] == []


def test_other_doctor_cannot_ack(other_client, doctor, arnica):
    (alert,) = deliver_low_stock_alerts(doctor_id=doctor.id, appointment_id=None, signals=[_signal(arnica, 1)])

    r = other_client.post(f"/api/v1/alerts/{alert.id}/ack/")
    assert r.status_code == 404

    alert.refresh_from_db()
    assert alert.status == AlertStatus.OPEN
    assert Alert.objects.count() == 1
