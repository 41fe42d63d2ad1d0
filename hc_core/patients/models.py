# hc_core/patients/models.py
from django.db import models
from hc_core.common.models import DoctorScopedModel


class PatientSex(models.TextChoices):
    MALE = "male", "Male"
    FEMALE = "female", "Female"
    OTHER = "other", "Other"


class PatientStatus(models.TextChoices):
    ACTIVE = "active", "Active"
    ARCHIVED = "archived", "Archived"


class Patient(DoctorScopedModel):
    """
    Patient record owned by one doctor.
    auth_user_id links the record to the patient's own login, when one exists.
    """
    name = models.CharField(max_length=255)
    age = models.PositiveSmallIntegerField()
    sex = models.CharField(max_length=16, choices=PatientSex.choices)
    email = models.EmailField(blank=True)
    complications = models.TextField(blank=True, default="")

    auth_user_id = models.BigIntegerField(null=True, blank=True, db_index=True)

    status = models.CharField(
        max_length=16,
        choices=PatientStatus.choices,
        default=PatientStatus.ACTIVE,
        db_index=True,
    )

    class Meta:
        db_table = "patients_patient"
        indexes = [
            models.Index(fields=["doctor_id", "name"], name="patient_doctor_name_idx"),
            models.Index(fields=["doctor_id", "email"], name="patient_doctor_email_idx"),
        ]

    def __str__(self) -> str:
        return self.name
