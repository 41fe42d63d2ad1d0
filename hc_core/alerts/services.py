# hc_core/alerts/services.py
from __future__ import annotations

import logging
from typing import Iterable
from uuid import UUID

from django.db import transaction

from hc_core.alerts.low_stock import LOW_STOCK_ALERT_CODE, LowStockSignal
from hc_core.alerts.models import Alert, AlertSeverity, AlertStatus
from hc_core.common.events import publish

logger = logging.getLogger(__name__)


class AlertService:
    @staticmethod
    @transaction.atomic
    def create_alert(
        *,
        doctor_id: int,
        code: str,
        title: str,
        message: str = "",
        severity: str = AlertSeverity.INFO,
        medicine_id: UUID | str | None = None,
        appointment_id: UUID | str | None = None,
        meta: dict | None = None,
    ) -> Alert:
        return Alert.objects.create(
            doctor_id=doctor_id,
            code=code,
            title=title,
            message=message,
            severity=severity,
            status=AlertStatus.OPEN,
            medicine_id=medicine_id,
            appointment_id=appointment_id,
            meta=meta or {},
        )

    @staticmethod
    @transaction.atomic
    def ack_alert(*, doctor_id: int, alert_id: UUID) -> Alert:
        alert = Alert.objects.select_for_update().get(id=alert_id, doctor_id=doctor_id)
        if alert.status != AlertStatus.ACKED:
            alert.ack()
            alert.save(update_fields=["status", "acked_at", "updated_at"])
        return alert


def deliver_low_stock_alerts(
    *,
    doctor_id: int,
    appointment_id: UUID | str | None,
    signals: Iterable[LowStockSignal],
) -> list[Alert]:
    """
    Fire-and-forget delivery of low-stock signals: one in-app alert each, plus
    a "medicine.low_stock" event for in-process subscribers.
    Called after the completion batch commits; never part of it.
    """
    delivered: list[Alert] = []
    for signal in signals:
        alert = AlertService.create_alert(
            doctor_id=doctor_id,
            code=LOW_STOCK_ALERT_CODE,
            title=signal.title,
            message=signal.message,
            severity=signal.severity,
            medicine_id=signal.medicine_id,
            appointment_id=appointment_id,
            meta={"stock": signal.stock, "threshold": signal.threshold, "medicine_name": signal.medicine_name},
        )
        delivered.append(alert)
        logger.info("low-stock alert medicine=%s stock=%s", signal.medicine_id, signal.stock)

        publish(
            "medicine.low_stock",
            {
                "doctor_id": doctor_id,
                "alert_id": str(alert.id),
                "medicine_id": signal.medicine_id,
                "medicine_name": signal.medicine_name,
                "stock": signal.stock,
            },
        )
    return delivered
