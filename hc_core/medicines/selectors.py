# hc_core/medicines/selectors.py
from __future__ import annotations

from typing import Iterable
from uuid import UUID

from django.db.models import QuerySet

from hc_core.medicines.models import Medicine


def get_medicine(*, doctor_id: int, medicine_id: UUID) -> Medicine:
    return Medicine.objects.get(id=medicine_id, doctor_id=doctor_id)


def medicines_qs(*, doctor_id: int) -> QuerySet[Medicine]:
    return Medicine.objects.filter(doctor_id=doctor_id).order_by("name")


def foreign_medicine_ids(*, doctor_id: int, medicine_ids: Iterable[str]) -> set[str]:
    """
    Ids among medicine_ids that exist but belong to another doctor.
    """
    ids = {str(m) for m in medicine_ids if m}
    if not ids:
        return set()
    rows = Medicine.objects.filter(id__in=ids).exclude(doctor_id=doctor_id).values_list("id", flat=True)
    return {str(r) for r in rows}
