import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("patients", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Appointment",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("doctor_id", models.BigIntegerField(db_index=True)),
                ("appointment_at", models.DateTimeField(db_index=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("scheduled", "Scheduled"),
                            ("completed", "Completed"),
                            ("cancelled", "Cancelled"),
                        ],
                        db_index=True,
                        default="scheduled",
                        max_length=16,
                    ),
                ),
                ("patient_remarks", models.TextField(blank=True, default="")),
                ("doctor_notes", models.TextField(blank=True, default="")),
                (
                    "pain_severity",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("none", "None"),
                            ("mild", "Mild"),
                            ("moderate", "Moderate"),
                            ("severe", "Severe"),
                            ("excruciating", "Excruciating"),
                        ],
                        default="",
                        max_length=16,
                    ),
                ),
                ("symptoms", models.JSONField(blank=True, default=list)),
                ("prescriptions", models.JSONField(blank=True, default=list)),
                ("next_appointment_date", models.DateField(blank=True, null=True)),
                ("completed_at", models.DateTimeField(blank=True, null=True)),
                (
                    "patient",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="appointments",
                        to="patients.patient",
                    ),
                ),
            ],
            options={
                "db_table": "appointments_appointment",
                "indexes": [
                    models.Index(fields=["doctor_id", "appointment_at"], name="appt_doctor_at_idx"),
                    models.Index(fields=["doctor_id", "status"], name="appt_doctor_status_idx"),
                    models.Index(fields=["doctor_id", "patient"], name="appt_doctor_patient_idx"),
                ],
            },
        ),
    ]
