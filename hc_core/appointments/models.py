# hc_core/appointments/models.py
from django.db import models

from hc_core.appointments.constants import AppointmentStatus, PainSeverity
from hc_core.common.models import DoctorScopedModel
from hc_core.patients.models import Patient


class Appointment(DoctorScopedModel):
    """
    One visit of a patient to the owning doctor.

    prescriptions is an ordered list of embedded prescription lines
    (see hc_core.appointments.prescriptions); medicine names inside it are
    snapshots taken at prescribing time.
    """
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name="appointments")

    appointment_at = models.DateTimeField(db_index=True)

    status = models.CharField(
        max_length=16,
        choices=AppointmentStatus.choices,
        default=AppointmentStatus.SCHEDULED,
        db_index=True,
    )

    patient_remarks = models.TextField(blank=True, default="")
    doctor_notes = models.TextField(blank=True, default="")
    pain_severity = models.CharField(max_length=16, choices=PainSeverity.choices, blank=True, default="")
    symptoms = models.JSONField(default=list, blank=True)

    prescriptions = models.JSONField(default=list, blank=True)

    next_appointment_date = models.DateField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "appointments_appointment"
        indexes = [
            models.Index(fields=["doctor_id", "appointment_at"], name="appt_doctor_at_idx"),
            models.Index(fields=["doctor_id", "status"], name="appt_doctor_status_idx"),
            models.Index(fields=["doctor_id", "patient"], name="appt_doctor_patient_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.patient_id} @ {self.appointment_at:%Y-%m-%d %H:%M} ({self.status})"
