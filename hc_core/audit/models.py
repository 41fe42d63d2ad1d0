# hc_core/audit/models.py
from django.db import models

from hc_core.common.models import DoctorScopedModel


class AuditEvent(DoctorScopedModel):
    """
    Append-only audit record.
    Written inside the same transaction as the change it describes, so a
    stock decrement and its audit row commit or roll back together.
    """
    event_code = models.CharField(max_length=128, db_index=True)  # e.g. "medicine.stock_decremented"
    entity_type = models.CharField(max_length=128, db_index=True)  # e.g. "Medicine"
    entity_id = models.UUIDField(db_index=True)

    actor_user_id = models.BigIntegerField(null=True, blank=True)

    occurred_at = models.DateTimeField(auto_now_add=True, db_index=True)
    metadata = models.JSONField(default=dict)

    class Meta:
        db_table = "audit_audit_event"
        indexes = [
            models.Index(fields=["doctor_id", "occurred_at"], name="audit_doctor_occurred_idx"),
            models.Index(fields=["entity_type", "entity_id"], name="audit_entity_idx"),
        ]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError("Audit events are append-only.")
        super().save(*args, **kwargs)
