# hc_core/common/models.py
from __future__ import annotations

import uuid
from django.db import models


class TimeStampedModel(models.Model):
    """
    Standard timestamps for all entities.
    """
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class DoctorScopedModel(TimeStampedModel):
    """
    Enforces the doctor tenant boundary at the data layer.
    Every row belongs to exactly one doctor (auth user id) and is never
    shared across doctors. Kept as a plain id, not a FK, so apps stay decoupled.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    doctor_id = models.BigIntegerField(db_index=True)

    class Meta:
        abstract = True
