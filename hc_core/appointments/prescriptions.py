# hc_core/appointments/prescriptions.py
"""
Prescription lines embedded in Appointment.prescriptions.

Stored shape (JSON):
    {"medicine_id": "<uuid>", "medicine_name": "...", "quantity": "3",
     "repetition": {"morning": true, "afternoon": false, "evening": false},
     "instructions": "after food"}
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

_LEADING_INT = re.compile(r"^\s*(\d+)")


def parse_quantity(value: Any) -> int:
    """
    Stock value of a free-text quantity: its leading run of digits.

    "3" -> 3, " 10 pills" -> 10, "" / "abc" / "-5" -> 0.
    Never raises; anything unreadable simply reserves and decrements nothing.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(0, value)
    m = _LEADING_INT.match(str(value))
    return int(m.group(1)) if m else 0


@dataclass(frozen=True)
class Repetition:
    morning: bool = False
    afternoon: bool = False
    evening: bool = False

    def any(self) -> bool:
        return self.morning or self.afternoon or self.evening

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "Repetition":
        data = data or {}
        return cls(
            morning=bool(data.get("morning", False)),
            afternoon=bool(data.get("afternoon", False)),
            evening=bool(data.get("evening", False)),
        )

    def to_dict(self) -> dict[str, bool]:
        return {"morning": self.morning, "afternoon": self.afternoon, "evening": self.evening}


@dataclass(frozen=True)
class PrescriptionLine:
    medicine_id: str = ""
    medicine_name: str = ""
    quantity: str = ""
    repetition: Repetition = field(default_factory=Repetition)
    instructions: str = ""

    @property
    def units(self) -> int:
        return parse_quantity(self.quantity)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PrescriptionLine":
        """
        Tolerant: form rows may be half filled in.
        """
        mid = data.get("medicine_id")
        qty = data.get("quantity")
        return cls(
            medicine_id=str(mid) if mid else "",
            medicine_name=str(data.get("medicine_name") or ""),
            quantity="" if qty is None else str(qty),
            repetition=Repetition.from_dict(data.get("repetition")),
            instructions=str(data.get("instructions") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "medicine_id": self.medicine_id,
            "medicine_name": self.medicine_name,
            "quantity": self.quantity,
            "repetition": self.repetition.to_dict(),
            "instructions": self.instructions,
        }


def lines_from_json(rows: Iterable[Mapping[str, Any]] | None) -> list[PrescriptionLine]:
    return [PrescriptionLine.from_dict(r) for r in (rows or []) if isinstance(r, Mapping)]


def lines_to_json(lines: Iterable[PrescriptionLine]) -> list[dict[str, Any]]:
    return [line.to_dict() for line in lines]


def decrement_totals(lines: Iterable[PrescriptionLine]) -> dict[str, int]:
    """
    Positive quantities summed per medicine: one decrement per medicine,
    not one per line. Lines with no medicine or a non-positive quantity
    are skipped.
    """
    totals: dict[str, int] = {}
    for line in lines:
        units = line.units
        if not line.medicine_id or units <= 0:
            continue
        totals[line.medicine_id] = totals.get(line.medicine_id, 0) + units
    return totals


def submission_errors(lines: Iterable[PrescriptionLine]) -> dict[int, dict[str, str]]:
    """
    Per-row errors that block submitting the form (empty when valid):
    a medicine must be chosen, the quantity must be filled in, and at least
    one repetition time must be selected.
    """
    errors: dict[int, dict[str, str]] = {}
    for i, line in enumerate(lines):
        row: dict[str, str] = {}
        if not line.medicine_id:
            row["medicine_id"] = "Medicine is required."
        if not line.quantity.strip():
            row["quantity"] = "Quantity is required."
        if not line.repetition.any():
            row["repetition"] = "At least one repetition time must be selected."
        if row:
            errors[i] = row
    return errors
