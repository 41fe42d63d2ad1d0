# hc_core/appointments/completion.py
"""
Edit submission for an appointment, including the transition into
"completed" that consumes medicine stock.

Everything below happens in one transaction.atomic() block:
  1. re-read the appointment under select_for_update (fresh previous status)
  2. enforce the status state machine and the doctor tenant boundary
  3. if previous != completed and new == completed: decrement every
     prescribed medicine once by its summed quantity, clamped at zero
  4. write the appointment
Low-stock alerts are evaluated once per decremented medicine and delivered
on commit; they never take part in the batch.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import partial
from typing import Any
from uuid import UUID

from django.db import DatabaseError, transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound

from hc_core.alerts.low_stock import LowStockConfig, LowStockSignal, evaluate_low_stock
from hc_core.alerts.services import deliver_low_stock_alerts
from hc_core.appointments.constants import AppointmentStatus, TERMINAL_STATUSES
from hc_core.appointments.models import Appointment
from hc_core.appointments.prescriptions import decrement_totals, lines_from_json, lines_to_json
from hc_core.appointments.services import (
    ensure_patient_in_scope,
    ensure_valid_lines,
    resolve_prescription_lines,
)
from hc_core.audit.services import AuditService
from hc_core.common.api.exceptions import ConflictError, TransactionFailed
from hc_core.medicines.services import MedicineService, StockChange

logger = logging.getLogger(__name__)

# Plain fields copied from the edit payload onto the appointment.
EDITABLE_FIELDS = (
    "appointment_at",
    "patient_remarks",
    "doctor_notes",
    "pain_severity",
    "symptoms",
    "next_appointment_date",
)


@dataclass
class CompletionResult:
    appointment: Appointment
    previous_status: str
    decremented: bool
    stock_changes: list[StockChange] = field(default_factory=list)
    low_stock: list[LowStockSignal] = field(default_factory=list)


def should_decrement(previous_status: str, new_status: str) -> bool:
    return previous_status != AppointmentStatus.COMPLETED and new_status == AppointmentStatus.COMPLETED


def check_transition(previous_status: str, new_status: str) -> None:
    """
    scheduled -> completed | cancelled; completed and cancelled are terminal
    (a terminal appointment can be re-saved, but only with its own status).
    """
    if new_status == previous_status:
        return
    if previous_status in TERMINAL_STATUSES:
        raise ConflictError(f"Appointment is {previous_status}; its status can no longer change.")
    if new_status not in AppointmentStatus.values:
        raise ConflictError(f"Unknown appointment status: {new_status}.")


class AppointmentCompletionService:
    @staticmethod
    def submit(
        *,
        doctor_id: int,
        appointment_id: UUID,
        data: dict[str, Any],
        actor_user_id: int | None,
        alert_config: LowStockConfig,
    ) -> CompletionResult:
        """
        Apply an edit-form submission. `data` holds only the submitted fields
        (status, prescriptions, patient_id and EDITABLE_FIELDS).

        Raises NotFound / PermissionDenied / ValidationError / ConflictError
        before any write is visible, or TransactionFailed if the batch could
        not be committed. Safe to retry: a second submission of a completed
        appointment never decrements stock again.
        """
        try:
            with transaction.atomic():
                result = AppointmentCompletionService._apply(
                    doctor_id=doctor_id,
                    appointment_id=appointment_id,
                    data=data,
                    actor_user_id=actor_user_id,
                    alert_config=alert_config,
                )
                if result.low_stock:
                    transaction.on_commit(
                        partial(
                            deliver_low_stock_alerts,
                            doctor_id=doctor_id,
                            appointment_id=result.appointment.id,
                            signals=list(result.low_stock),
                        ),
                        robust=True,
                    )
        except DatabaseError as exc:
            logger.warning("appointment %s submission rolled back: %s", appointment_id, exc)
            raise TransactionFailed() from exc

        return result

    @staticmethod
    def _apply(
        *,
        doctor_id: int,
        appointment_id: UUID,
        data: dict[str, Any],
        actor_user_id: int | None,
        alert_config: LowStockConfig,
    ) -> CompletionResult:
        try:
            appt = Appointment.objects.select_for_update().get(id=appointment_id, doctor_id=doctor_id)
        except Appointment.DoesNotExist:
            raise NotFound("Appointment not found.")

        previous_status = appt.status
        new_status = data.get("status") or previous_status
        check_transition(previous_status, new_status)

        patient_id = data.get("patient_id")
        if patient_id and str(patient_id) != str(appt.patient_id):
            ensure_patient_in_scope(doctor_id=doctor_id, patient_id=patient_id)
            appt.patient_id = patient_id

        previous_lines = lines_from_json(appt.prescriptions)
        if "prescriptions" in data:
            lines = lines_from_json(data.get("prescriptions"))
            ensure_valid_lines(lines)
            lines = resolve_prescription_lines(doctor_id=doctor_id, lines=lines, previous_lines=previous_lines)
        else:
            lines = previous_lines

        decrement = should_decrement(previous_status, new_status)
        logger.debug(
            "appointment %s submit: %s -> %s, decrement=%s",
            appt.id, previous_status, new_status, decrement,
        )

        changes: list[StockChange] = []
        if decrement:
            changes = MedicineService.decrement_locked(
                doctor_id=doctor_id,
                totals=decrement_totals(lines),
                actor_user_id=actor_user_id,
                appointment_id=appt.id,
            )

        for name in EDITABLE_FIELDS:
            if name in data:
                value = data[name]
                if name in {"patient_remarks", "doctor_notes", "pain_severity"} and value is None:
                    value = ""
                if name == "symptoms":
                    value = list(value or [])
                setattr(appt, name, value)

        appt.prescriptions = lines_to_json(lines)
        appt.status = new_status
        if decrement:
            appt.completed_at = timezone.now()
        appt.save()

        if new_status != previous_status:
            AuditService.log(
                event_code=f"appointment.{new_status}",
                entity_type="Appointment",
                entity_id=appt.id,
                doctor_id=doctor_id,
                actor_user_id=actor_user_id,
                metadata={
                    "previous_status": previous_status,
                    "stock_changes": [
                        {"medicine_id": c.medicine_id, "previous_stock": c.previous_stock, "new_stock": c.new_stock}
                        for c in changes
                    ],
                },
            )

        signals: list[LowStockSignal] = []
        for change in changes:
            signal = evaluate_low_stock(
                medicine_id=change.medicine_id,
                medicine_name=change.medicine_name,
                stock=change.new_stock,
                config=alert_config,
            )
            if signal is not None:
                signals.append(signal)

        if decrement:
            logger.info(
                "appointment %s completed: %d medicine(s) decremented, %d low-stock",
                appt.id, len(changes), len(signals),
            )

        return CompletionResult(
            appointment=appt,
            previous_status=previous_status,
            decremented=decrement,
            stock_changes=changes,
            low_stock=signals,
        )
