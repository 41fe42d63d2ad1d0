# hc_core/appointments/services.py
from __future__ import annotations

import dataclasses
import logging
from typing import Iterable
from uuid import UUID

from django.db import transaction
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError

from hc_core.appointments.constants import AppointmentStatus
from hc_core.appointments.models import Appointment
from hc_core.appointments.prescriptions import (
    PrescriptionLine,
    lines_from_json,
    lines_to_json,
    submission_errors,
)
from hc_core.audit.services import AuditService
from hc_core.medicines.models import Medicine
from hc_core.medicines.selectors import foreign_medicine_ids
from hc_core.patients.models import Patient

logger = logging.getLogger(__name__)

FOREIGN_MEDICINE_MSG = "One or more prescribed medicines do not belong to this doctor."
FOREIGN_PATIENT_MSG = "Patient does not belong to this doctor."


def ensure_valid_lines(lines: Iterable[PrescriptionLine]) -> None:
    errors = submission_errors(lines)
    if errors:
        raise ValidationError({"prescriptions": {str(i): row for i, row in errors.items()}})


def ensure_patient_in_scope(*, doctor_id: int, patient_id: UUID) -> None:
    if Patient.objects.filter(id=patient_id, doctor_id=doctor_id).exists():
        return
    if Patient.objects.filter(id=patient_id).exists():
        raise PermissionDenied(FOREIGN_PATIENT_MSG)
    raise ValidationError({"patient_id": "Patient not found."})


def resolve_prescription_lines(
    *,
    doctor_id: int,
    lines: list[PrescriptionLine],
    previous_lines: Iterable[PrescriptionLine] = (),
) -> list[PrescriptionLine]:
    """
    Tenant-check the medicines referenced by `lines` and fill in blank
    medicine names from the catalogue.

    - A medicine owned by another doctor -> 403.
    - A medicine that no longer exists is accepted only if the appointment
      already carried it (a historical, orphaned line); otherwise -> 400.
    - Names are snapshots: a non-blank medicine_name is kept as written.
    """
    ids = {line.medicine_id for line in lines if line.medicine_id}
    if not ids:
        return list(lines)

    if foreign_medicine_ids(doctor_id=doctor_id, medicine_ids=ids):
        raise PermissionDenied(FOREIGN_MEDICINE_MSG)

    names = {
        str(mid): name
        for mid, name in Medicine.objects.filter(doctor_id=doctor_id, id__in=ids).values_list("id", "name")
    }
    known_orphans = {line.medicine_id for line in previous_lines if line.medicine_id}
    unknown = sorted(ids - set(names) - known_orphans)
    if unknown:
        raise ValidationError({"prescriptions": f"Unknown medicine(s): {', '.join(unknown)}"})

    resolved: list[PrescriptionLine] = []
    for line in lines:
        if line.medicine_id and not line.medicine_name and line.medicine_id in names:
            line = dataclasses.replace(line, medicine_name=names[line.medicine_id])
        resolved.append(line)
    return resolved


class AppointmentService:
    """
    Appointment write-model operations other than the edit submission
    (see hc_core.appointments.completion).
    """

    @staticmethod
    @transaction.atomic
    def schedule(
        *,
        doctor_id: int,
        actor_user_id: int | None,
        patient_id: UUID,
        appointment_at,
        patient_remarks: str = "",
        doctor_notes: str = "",
        pain_severity: str = "",
        symptoms: list[str] | None = None,
        prescriptions: list[dict] | None = None,
        next_appointment_date=None,
    ) -> Appointment:
        """
        New appointments always start as scheduled, whatever the caller sends.
        Prescriptions may be recorded up front; stock is untouched until completion.
        """
        ensure_patient_in_scope(doctor_id=doctor_id, patient_id=patient_id)

        lines = lines_from_json(prescriptions)
        ensure_valid_lines(lines)
        lines = resolve_prescription_lines(doctor_id=doctor_id, lines=lines)

        appt = Appointment.objects.create(
            doctor_id=doctor_id,
            patient_id=patient_id,
            appointment_at=appointment_at,
            status=AppointmentStatus.SCHEDULED,
            patient_remarks=patient_remarks or "",
            doctor_notes=doctor_notes or "",
            pain_severity=pain_severity or "",
            symptoms=list(symptoms or []),
            prescriptions=lines_to_json(lines),
            next_appointment_date=next_appointment_date,
        )

        AuditService.log(
            event_code="appointment.scheduled",
            entity_type="Appointment",
            entity_id=appt.id,
            doctor_id=doctor_id,
            actor_user_id=actor_user_id,
            metadata={"patient_id": str(patient_id), "appointment_at": appt.appointment_at.isoformat()},
        )
        logger.info("appointment scheduled id=%s doctor_id=%s", appt.id, doctor_id)
        return appt

    @staticmethod
    @transaction.atomic
    def delete_appointment(*, doctor_id: int, actor_user_id: int | None, appointment_id: UUID) -> None:
        """
        Explicit removal by the doctor. Stock already decremented is not restored.
        """
        try:
            appt = Appointment.objects.select_for_update().get(id=appointment_id, doctor_id=doctor_id)
        except Appointment.DoesNotExist:
            raise NotFound("Appointment not found.")

        AuditService.log(
            event_code="appointment.deleted",
            entity_type="Appointment",
            entity_id=appt.id,
            doctor_id=doctor_id,
            actor_user_id=actor_user_id,
            metadata={"status": appt.status},
        )
        appt.delete()
