# hc_core/appointments/constants.py
from django.db import models


class AppointmentStatus(models.TextChoices):
    SCHEDULED = "scheduled", "Scheduled"
    COMPLETED = "completed", "Completed"
    CANCELLED = "cancelled", "Cancelled"


class PainSeverity(models.TextChoices):
    NONE = "none", "None"
    MILD = "mild", "Mild"
    MODERATE = "moderate", "Moderate"
    SEVERE = "severe", "Severe"
    EXCRUCIATING = "excruciating", "Excruciating"


TERMINAL_STATUSES = frozenset({AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED})

# Suggested tags for the symptom picker; stored symptoms are free strings.
COMMON_SYMPTOMS = (
    ("fever", "Fever"),
    ("cough", "Cough"),
    ("headache", "Headache"),
    ("fatigue", "Fatigue"),
    ("nausea", "Nausea"),
    ("dizziness", "Dizziness"),
    ("body_ache", "Body Ache"),
    ("sore_throat", "Sore Throat"),
    ("loss_of_appetite", "Loss of Appetite"),
)
