# hc_core/medicines/services.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping
from uuid import UUID

from django.db import transaction
from rest_framework.exceptions import ValidationError

from hc_core.audit.services import AuditService
from hc_core.medicines.models import Medicine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StockChange:
    medicine_id: str
    medicine_name: str
    previous_stock: int
    requested: int
    new_stock: int

    @property
    def clamped(self) -> bool:
        return self.previous_stock - self.requested < 0


def clamp_decrement(stock: int, quantity: int) -> int:
    """
    Stock after removing quantity, never below zero.
    """
    return max(0, int(stock) - max(0, int(quantity)))


class MedicineService:
    @staticmethod
    def _validate_stock(stock) -> int:
        if stock is None:
            return 0
        if int(stock) < 0:
            raise ValidationError({"stock": "Stock must be >= 0."})
        return int(stock)

    @staticmethod
    @transaction.atomic
    def create_medicine(*, doctor_id: int, name: str, description: str = "", stock: int = 0) -> Medicine:
        med = Medicine.objects.create(
            doctor_id=doctor_id,
            name=name,
            description=description or "",
            stock=MedicineService._validate_stock(stock),
        )
        logger.info("medicine created id=%s doctor_id=%s stock=%s", med.id, doctor_id, med.stock)
        return med

    @staticmethod
    @transaction.atomic
    def update_medicine(*, doctor_id: int, medicine_id: UUID, data: dict) -> Medicine:
        med = Medicine.objects.select_for_update().get(id=medicine_id, doctor_id=doctor_id)

        allowed = {"name", "description", "stock"}
        updates = {k: v for k, v in (data or {}).items() if k in allowed}
        if "stock" in updates:
            updates["stock"] = MedicineService._validate_stock(updates["stock"])

        for k, v in updates.items():
            setattr(med, k, v)

        med.save()
        return med

    @staticmethod
    @transaction.atomic
    def delete_medicine(*, doctor_id: int, medicine_id: UUID) -> None:
        """
        Hard delete. Prescription lines keep their denormalized name and
        now-orphaned medicine_id; nothing else is rewritten.
        """
        med = Medicine.objects.get(id=medicine_id, doctor_id=doctor_id)
        med.delete()
        logger.info("medicine deleted id=%s doctor_id=%s", medicine_id, doctor_id)

    @staticmethod
    def decrement_locked(
        *,
        doctor_id: int,
        totals: Mapping[str, int],
        actor_user_id: int | None,
        appointment_id: UUID,
    ) -> list[StockChange]:
        """
        Decrement each medicine once by its summed quantity, clamped at zero.

        Must run inside the caller's transaction.atomic() block: rows are
        re-read under select_for_update so concurrent completions serialize on
        the medicine row instead of overwriting each other's arithmetic.
        Medicines that no longer exist are skipped.
        """
        ids = [mid for mid, qty in totals.items() if qty > 0]
        if not ids:
            return []

        locked = (
            Medicine.objects.select_for_update()
            .filter(doctor_id=doctor_id, id__in=ids)
            .order_by("id")
        )

        changes: list[StockChange] = []
        for med in locked:
            requested = totals[str(med.id)]
            previous = med.stock
            med.stock = clamp_decrement(previous, requested)
            med.save(update_fields=["stock", "updated_at"])

            change = StockChange(
                medicine_id=str(med.id),
                medicine_name=med.name,
                previous_stock=previous,
                requested=requested,
                new_stock=med.stock,
            )
            changes.append(change)

            AuditService.log(
                event_code="medicine.stock_decremented",
                entity_type="Medicine",
                entity_id=med.id,
                doctor_id=doctor_id,
                actor_user_id=actor_user_id,
                metadata={
                    "appointment_id": str(appointment_id),
                    "previous_stock": previous,
                    "requested": requested,
                    "new_stock": med.stock,
                    "clamped": change.clamped,
                },
            )
            logger.info(
                "stock decremented medicine=%s %s -> %s (requested %s)",
                med.id, previous, med.stock, requested,
            )

        return changes
