# hc_core/alerts/models.py
from __future__ import annotations

from django.db import models
from django.utils import timezone

from hc_core.common.models import DoctorScopedModel


class AlertSeverity(models.TextChoices):
    INFO = "INFO", "Info"
    WARNING = "WARNING", "Warning"
    CRITICAL = "CRITICAL", "Critical"


class AlertStatus(models.TextChoices):
    OPEN = "OPEN", "Open"
    ACKED = "ACKED", "Acknowledged"


class Alert(DoctorScopedModel):
    """
    In-app alert shown to the owning doctor.
    Links are loose UUIDs so a deleted medicine does not take its alerts with it.
    """
    code = models.SlugField(max_length=64, db_index=True)  # e.g. "low-stock"
    title = models.CharField(max_length=255)
    message = models.TextField(blank=True, default="")

    severity = models.CharField(
        max_length=16,
        choices=AlertSeverity.choices,
        default=AlertSeverity.INFO,
        db_index=True,
    )
    status = models.CharField(
        max_length=16,
        choices=AlertStatus.choices,
        default=AlertStatus.OPEN,
        db_index=True,
    )

    medicine_id = models.UUIDField(null=True, blank=True, db_index=True)
    appointment_id = models.UUIDField(null=True, blank=True, db_index=True)

    acked_at = models.DateTimeField(null=True, blank=True)

    meta = models.JSONField(default=dict, blank=True)

    class Meta:
        db_table = "alerts_alert"
        indexes = [
            models.Index(fields=["doctor_id", "status", "severity"], name="alert_doctor_status_idx"),
        ]

    def ack(self) -> None:
        if self.status != AlertStatus.ACKED:
            self.status = AlertStatus.ACKED
            self.acked_at = timezone.now()
