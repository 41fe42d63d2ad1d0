# hc_core/audit/selectors.py
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from django.db.models import QuerySet

from hc_core.audit.models import AuditEvent


def list_audit_events(
    *,
    doctor_id: int,
    entity_type: str | None = None,
    entity_id: UUID | None = None,
    event_code: str | None = None,
    since: datetime | None = None,
) -> QuerySet[AuditEvent]:
    """
    Newest first. `event_code` ending in "." matches a prefix
    ("appointment." -> every appointment transition).
    """
    filters = {"doctor_id": doctor_id}
    if entity_type:
        filters["entity_type"] = entity_type
    if entity_id:
        filters["entity_id"] = entity_id
    if event_code:
        filters["event_code__startswith" if event_code.endswith(".") else "event_code"] = event_code
    if since:
        filters["occurred_at__gte"] = since

    return AuditEvent.objects.filter(**filters).order_by("-occurred_at", "-created_at")
