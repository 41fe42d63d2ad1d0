# hc_core/patients/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import Q, QuerySet

from hc_core.patients.models import Patient, PatientStatus


def get_patient(*, doctor_id: int, patient_id: UUID) -> Patient:
    return Patient.objects.get(id=patient_id, doctor_id=doctor_id)


def search_patients(
    *,
    doctor_id: int,
    q: str | None = None,
    include_archived: bool = False,
) -> QuerySet[Patient]:
    qs = Patient.objects.filter(doctor_id=doctor_id)

    if not include_archived:
        qs = qs.filter(status=PatientStatus.ACTIVE)

    qv = (q or "").strip()
    if qv:
        qs = qs.filter(Q(name__icontains=qv) | Q(email__icontains=qv))

    return qs.order_by("name")

