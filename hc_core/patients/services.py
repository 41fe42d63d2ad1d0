# hc_core/patients/services.py
from __future__ import annotations

import logging
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db import transaction

from hc_core.common.permissions import ROLE_PATIENT
from hc_core.patients.models import Patient, PatientStatus

logger = logging.getLogger(__name__)


def _find_patient_login(email: str) -> int | None:
    """
    Link a record to an existing patient account with the same email.
    """
    if not email:
        return None
    User = get_user_model()
    user = (
        User.objects.filter(email__iexact=email, groups__name=ROLE_PATIENT)
        .order_by("id")
        .first()
    )
    return user.id if user else None


class PatientService:
    @staticmethod
    @transaction.atomic
    def create_patient(
        *,
        doctor_id: int,
        name: str,
        age: int,
        sex: str,
        email: str = "",
        complications: str = "",
    ) -> Patient:
        patient = Patient.objects.create(
            doctor_id=doctor_id,
            name=name,
            age=age,
            sex=sex,
            email=email or "",
            complications=complications or "",
            auth_user_id=_find_patient_login(email),
        )
        logger.info("patient created id=%s doctor_id=%s linked=%s", patient.id, doctor_id, bool(patient.auth_user_id))
        return patient

    @staticmethod
    @transaction.atomic
    def update_patient(*, doctor_id: int, patient_id: UUID, data: dict) -> Patient:
        patient = Patient.objects.select_for_update().get(id=patient_id, doctor_id=doctor_id)

        allowed = {"name", "age", "sex", "email", "complications", "status"}
        updates = {k: v for k, v in (data or {}).items() if k in allowed}

        for k, v in updates.items():
            setattr(patient, k, v)

        if "email" in updates:
            patient.auth_user_id = _find_patient_login(updates["email"])

        patient.save()
        return patient

    @staticmethod
    @transaction.atomic
    def archive_patient(*, doctor_id: int, patient_id: UUID) -> Patient:
        patient = Patient.objects.select_for_update().get(id=patient_id, doctor_id=doctor_id)
        if patient.status != PatientStatus.ARCHIVED:
            patient.status = PatientStatus.ARCHIVED
            patient.save(update_fields=["status", "updated_at"])
        return patient
