# hc_core/audit/services.py
from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from hc_core.audit.models import AuditEvent

logger = logging.getLogger(__name__)


class AuditService:
    """
    Writes the audit trail. No transaction of its own: rows join whatever
    transaction the caller is in and vanish with it on rollback.
    """

    @staticmethod
    def log(
        *,
        event_code: str,
        entity_type: str,
        entity_id: UUID,
        doctor_id: int,
        actor_user_id: int | None,
        metadata: dict[str, Any] | None = None,
    ) -> AuditEvent:
        event = AuditEvent.objects.create(
            doctor_id=doctor_id,
            event_code=event_code,
            entity_type=entity_type,
            entity_id=entity_id,
            actor_user_id=actor_user_id,
            metadata=metadata or {},
        )
        logger.debug("audit %s %s:%s doctor_id=%s", event_code, entity_type, entity_id, doctor_id)
        return event
