# hc_core/appointments/selectors.py
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db.models import QuerySet
from django.utils import timezone
from django.utils.dateparse import parse_datetime

from hc_core.appointments.constants import AppointmentStatus
from hc_core.appointments.models import Appointment
from hc_core.medicines.selectors import medicines_qs
from hc_core.patients.models import Patient

RECENT_PATIENTS = 3


class AppointmentSelector:
    class NotFound(Exception):
        pass

    @staticmethod
    def get_appointment(*, doctor_id: int, appointment_id: UUID) -> Appointment:
        try:
            return Appointment.objects.select_related("patient").get(id=appointment_id, doctor_id=doctor_id)
        except (Appointment.DoesNotExist, ValidationError, ValueError):
            raise AppointmentSelector.NotFound()

    @staticmethod
    def list_appointments(*, doctor_id: int, params: Any) -> QuerySet[Appointment]:
        """
        Query params supported:
          - status
          - patient_id
          - date_from / date_to = ISO datetime (on appointment_at)
          - ordering in {appointment_at, -appointment_at, created_at, -created_at}
        """
        qs = Appointment.objects.select_related("patient").filter(doctor_id=doctor_id)

        status_param = params.get("status")
        if status_param:
            if status_param not in AppointmentStatus.values:
                raise ValidationError(f"status is invalid. Allowed: {sorted(AppointmentStatus.values)}")
            qs = qs.filter(status=status_param)

        patient_id = params.get("patient_id")
        if patient_id:
            try:
                qs = qs.filter(patient_id=UUID(str(patient_id)))
            except ValueError:
                raise ValidationError("patient_id is invalid. Use a UUID.")

        for key, lookup in (("date_from", "appointment_at__gte"), ("date_to", "appointment_at__lte")):
            raw = params.get(key)
            if raw:
                dt = parse_datetime(raw)
                if not dt:
                    raise ValidationError(f"{key} is invalid. Use ISO datetime.")
                qs = qs.filter(**{lookup: dt})

        allowed = {"appointment_at", "-appointment_at", "created_at", "-created_at"}
        ordering = params.get("ordering")
        if ordering:
            if ordering not in allowed:
                raise ValidationError(f"ordering is invalid. Allowed: {sorted(allowed)}")
            qs = qs.order_by(ordering)
        else:
            qs = qs.order_by("-appointment_at")

        return qs

    @staticmethod
    def for_patient_user(*, user_id: int) -> QuerySet[Appointment]:
        """
        Appointments of every patient record linked to a patient login.
        """
        return (
            Appointment.objects.select_related("patient")
            .filter(patient__auth_user_id=user_id)
            .order_by("-appointment_at")
        )

    @staticmethod
    def dashboard_summary(*, doctor_id: int, at: datetime | None = None) -> dict[str, Any]:
        """
        Headline numbers for the doctor's home page. "Today" is the calendar
        day of `at` (default: now) in the project time zone; upcoming means
        still scheduled and on or after the start of today.
        """
        start_of_today = timezone.localtime(at or timezone.now()).replace(hour=0, minute=0, second=0, microsecond=0)
        start_of_tomorrow = start_of_today + timedelta(days=1)

        upcoming = Appointment.objects.filter(
            doctor_id=doctor_id,
            status=AppointmentStatus.SCHEDULED,
            appointment_at__gte=start_of_today,
        )
        patients = Patient.objects.filter(doctor_id=doctor_id)

        return {
            "total_patients": patients.count(),
            "upcoming_appointments": upcoming.count(),
            "appointments_today": upcoming.filter(appointment_at__lt=start_of_tomorrow).count(),
            "total_medicines": medicines_qs(doctor_id=doctor_id).count(),
            "recent_patients": list(patients.order_by("-created_at")[:RECENT_PATIENTS]),
        }
