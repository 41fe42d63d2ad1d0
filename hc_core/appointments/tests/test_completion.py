import uuid

import pytest
from django.db import DatabaseError
from django.utils.timezone import now
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError

from hc_core.alerts.low_stock import LowStockConfig
from hc_core.alerts.models import Alert, AlertSeverity
from hc_core.appointments.completion import AppointmentCompletionService, should_decrement
from hc_core.appointments.constants import AppointmentStatus
from hc_core.appointments.models import Appointment
from hc_core.appointments.services import AppointmentService
from hc_core.audit.models import AuditEvent
from hc_core.common.api.exceptions import ConflictError, TransactionFailed
from hc_core.medicines.models import Medicine
from hc_core.tests.helpers import rx

pytestmark = pytest.mark.django_db

ALERTS_ON = LowStockConfig(threshold=5, enabled=True)


def submit(doctor, appointment, config=ALERTS_ON, **data):
    return AppointmentCompletionService.submit(
        doctor_id=doctor.id,
        appointment_id=appointment.id,
        data=data,
        actor_user_id=doctor.id,
        alert_config=config,
    )


def test_should_decrement_only_on_transition_into_completed():
    assert should_decrement("scheduled", "completed")
    assert not should_decrement("completed", "completed")
    assert not should_decrement("scheduled", "cancelled")
    assert not should_decrement("scheduled", "scheduled")


def test_completion_decrements_stock_and_resubmission_does_not(doctor, appointment, arnica):
    result = submit(doctor, appointment, status="completed", prescriptions=[rx(arnica, "3")])

    arnica.refresh_from_db()
    appointment.refresh_from_db()
    assert arnica.stock == 5
    assert appointment.status == AppointmentStatus.COMPLETED
    assert appointment.completed_at is not None
    assert result.decremented is True
    assert [(c.previous_stock, c.new_stock) for c in result.stock_changes] == [(8, 5)]

    again = submit(doctor, appointment, status="completed", prescriptions=[rx(arnica, "3")])

    arnica.refresh_from_db()
    assert arnica.stock == 5
    assert again.decremented is False
    assert again.stock_changes == []


def test_low_stock_signal_at_threshold_is_delivered_after_commit(
    doctor, appointment, arnica, django_capture_on_commit_callbacks
):
    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        result = submit(doctor, appointment, status="completed", prescriptions=[rx(arnica, "3")])

    assert len(callbacks) == 1
    assert [s.stock for s in result.low_stock] == [5]

    alert = Alert.objects.get(doctor_id=doctor.id, medicine_id=arnica.id)
    assert alert.code == "low-stock"
    assert alert.severity == AlertSeverity.WARNING
    assert alert.appointment_id == appointment.id


def test_no_signal_above_threshold(doctor, appointment, arnica, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        result = submit(doctor, appointment, status="completed", prescriptions=[rx(arnica, "2")])

    arnica.refresh_from_db()
    assert arnica.stock == 6
    assert result.low_stock == []
    assert callbacks == []
    assert not Alert.objects.exists()


def test_disabled_alerts_never_fire(doctor, appointment, arnica, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=True):
        result = submit(
            doctor,
            appointment,
            config=LowStockConfig(threshold=5, enabled=False),
            status="completed",
            prescriptions=[rx(arnica, "8")],
        )

    arnica.refresh_from_db()
    assert arnica.stock == 0
    assert result.low_stock == []
    assert not Alert.objects.exists()


def test_stock_is_clamped_at_zero(doctor, appointment, belladonna, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=True):
        result = submit(doctor, appointment, status="completed", prescriptions=[rx(belladonna, "25")])

    belladonna.refresh_from_db()
    assert belladonna.stock == 0
    assert result.stock_changes[0].clamped is True
    assert Alert.objects.get(medicine_id=belladonna.id).severity == AlertSeverity.CRITICAL


def test_completions_of_different_appointments_draw_on_the_same_stock(
    doctor, patient, appointment, arnica, django_capture_on_commit_callbacks
):
    follow_up = AppointmentService.schedule(
        doctor_id=doctor.id,
        actor_user_id=doctor.id,
        patient_id=patient.id,
        appointment_at=now(),
    )

    with django_capture_on_commit_callbacks(execute=True):
        first = submit(doctor, appointment, status="completed", prescriptions=[rx(arnica, "5")])
        second = submit(doctor, follow_up, status="completed", prescriptions=[rx(arnica, "4")])

    arnica.refresh_from_db()
    assert arnica.stock == 0
    assert [(c.previous_stock, c.new_stock, c.clamped) for c in first.stock_changes] == [(8, 3, False)]
    assert [(c.previous_stock, c.new_stock, c.clamped) for c in second.stock_changes] == [(3, 0, True)]
    assert Alert.objects.get(appointment_id=appointment.id).severity == AlertSeverity.WARNING
    assert Alert.objects.get(appointment_id=follow_up.id).severity == AlertSeverity.CRITICAL


def test_bad_quantities_are_skipped_without_blocking_other_lines(doctor, appointment, arnica, belladonna):
    submit(
        doctor,
        appointment,
        status="completed",
        prescriptions=[rx(arnica, "abc"), rx(arnica, "-5"), rx(belladonna, "4")],
    )

    arnica.refresh_from_db()
    belladonna.refresh_from_db()
    assert arnica.stock == 8
    assert belladonna.stock == 16


def test_duplicate_lines_are_summed_into_one_decrement_and_one_alert(
    doctor, appointment, arnica, django_capture_on_commit_callbacks
):
    with django_capture_on_commit_callbacks(execute=True):
        result = submit(
            doctor,
            appointment,
            status="completed",
            prescriptions=[rx(arnica, "2"), rx(arnica, "2", evening=True)],
        )

    arnica.refresh_from_db()
    assert arnica.stock == 4
    assert len(result.stock_changes) == 1
    assert result.stock_changes[0].requested == 4
    assert Alert.objects.filter(medicine_id=arnica.id).count() == 1
    assert AuditEvent.objects.filter(event_code="medicine.stock_decremented", entity_id=arnica.id).count() == 1


def test_failed_batch_changes_nothing(doctor, appointment, arnica, monkeypatch):
    def broken_save(self, *args, **kwargs):
        raise DatabaseError("write rejected")

    monkeypatch.setattr(Appointment, "save", broken_save)

    with pytest.raises(TransactionFailed):
        submit(doctor, appointment, status="completed", prescriptions=[rx(arnica, "3")])

    monkeypatch.undo()
    arnica.refresh_from_db()
    appointment.refresh_from_db()
    assert arnica.stock == 8
    assert appointment.status == AppointmentStatus.SCHEDULED
    assert appointment.completed_at is None
    assert not AuditEvent.objects.filter(event_code="medicine.stock_decremented").exists()


def test_cancel_has_no_stock_side_effects(doctor, appointment, arnica):
    result = submit(doctor, appointment, status="cancelled", prescriptions=[rx(arnica, "3")])

    arnica.refresh_from_db()
    assert arnica.stock == 8
    assert result.appointment.status == AppointmentStatus.CANCELLED
    assert AuditEvent.objects.filter(event_code="appointment.cancelled", entity_id=appointment.id).exists()


@pytest.mark.parametrize(
    "first, second",
    [
        ("completed", "scheduled"),
        ("completed", "cancelled"),
        ("cancelled", "completed"),
        ("cancelled", "scheduled"),
    ],
)
def test_terminal_statuses_cannot_change(doctor, appointment, arnica, first, second):
    submit(doctor, appointment, status=first, prescriptions=[rx(arnica, "1")])

    with pytest.raises(ConflictError):
        submit(doctor, appointment, status=second)

    arnica.refresh_from_db()
    appointment.refresh_from_db()
    assert appointment.status == first
    assert arnica.stock == (7 if first == "completed" else 8)


def test_completed_appointment_can_still_be_edited(doctor, appointment, arnica):
    submit(doctor, appointment, status="completed", prescriptions=[rx(arnica, "3")])

    result = submit(doctor, appointment, status="completed", doctor_notes="Review in two weeks")

    arnica.refresh_from_db()
    assert result.appointment.doctor_notes == "Review in two weeks"
    assert result.appointment.prescriptions[0]["quantity"] == "3"
    assert arnica.stock == 5


def test_other_doctors_appointment_is_not_found(other_doctor, appointment):
    with pytest.raises(NotFound):
        submit(other_doctor, appointment, status="completed")


def test_other_doctors_medicine_is_rejected(doctor, appointment, arnica, foreign_medicine):
    with pytest.raises(PermissionDenied):
        submit(
            doctor,
            appointment,
            status="completed",
            prescriptions=[rx(arnica, "1"), rx(foreign_medicine, "1")],
        )

    arnica.refresh_from_db()
    foreign_medicine.refresh_from_db()
    assert arnica.stock == 8
    assert foreign_medicine.stock == 10


def test_other_doctors_patient_is_rejected(doctor, appointment, other_patient):
    with pytest.raises(PermissionDenied):
        submit(doctor, appointment, status="scheduled", patient_id=other_patient.id)


def test_unknown_medicine_is_a_validation_error(doctor, appointment):
    with pytest.raises(ValidationError):
        submit(doctor, appointment, status="completed", prescriptions=[rx(uuid.uuid4(), "1")])


def test_medicine_name_is_a_snapshot(doctor, appointment, arnica):
    row = rx(arnica, "1")
    row["medicine_name"] = ""
    submit(doctor, appointment, status="scheduled", prescriptions=[row])

    Medicine.objects.filter(id=arnica.id).update(name="Arnica montana 30C")
    result = submit(doctor, appointment, status="completed")

    assert result.appointment.prescriptions[0]["medicine_name"] == "Arnica 30C"


def test_orphaned_line_is_kept_and_skipped(doctor, appointment, arnica, belladonna):
    lines = [rx(arnica, "2"), rx(belladonna, "2")]
    submit(doctor, appointment, status="scheduled", prescriptions=lines)
    arnica.delete()

    result = submit(doctor, appointment, status="completed", prescriptions=lines)

    belladonna.refresh_from_db()
    assert belladonna.stock == 18
    assert [c.medicine_id for c in result.stock_changes] == [str(belladonna.id)]
    assert result.appointment.prescriptions[0]["medicine_name"] == "Arnica 30C"


def test_incomplete_rows_are_rejected(doctor, appointment, arnica):
    row = rx(arnica, "")
    row["repetition"] = {}

    with pytest.raises(ValidationError):
        submit(doctor, appointment, status="completed", prescriptions=[row])

    arnica.refresh_from_db()
    assert arnica.stock == 8
