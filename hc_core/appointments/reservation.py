# hc_core/appointments/reservation.py
"""
Stock reservation for the prescription rows of an appointment being edited.

Every row reserves its quantity of a medicine. The stock shown for a row is
what would remain after every *other* row's reservation:

    display = stock - reserved_total(medicine) + own_quantity

Pure functions; nothing here touches the database.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

from hc_core.appointments.prescriptions import PrescriptionLine


@dataclass(frozen=True)
class MedicineOption:
    medicine_id: str
    name: str
    display_stock: int
    disabled: bool


@dataclass(frozen=True)
class LineStock:
    index: int
    medicine_id: str
    reserved: int
    display_stock: int | None
    exceeds_stock: bool


def reserved_by_medicine(lines: Sequence[PrescriptionLine]) -> dict[str, int]:
    reserved: dict[str, int] = {}
    for line in lines:
        if not line.medicine_id:
            continue
        reserved[line.medicine_id] = reserved.get(line.medicine_id, 0) + line.units
    return reserved


def display_stock(
    lines: Sequence[PrescriptionLine],
    index: int,
    stock_by_id: Mapping[str, int],
    reserved: Mapping[str, int] | None = None,
) -> int | None:
    """
    Stock to show for row `index`, or None when the row has no (known) medicine.
    `reserved` may be passed in when computing many rows of the same form.
    """
    line = lines[index]
    if not line.medicine_id or line.medicine_id not in stock_by_id:
        return None
    if reserved is None:
        reserved = reserved_by_medicine(lines)
    return stock_by_id[line.medicine_id] - reserved.get(line.medicine_id, 0) + line.units


def display_stocks(
    lines: Sequence[PrescriptionLine],
    stock_by_id: Mapping[str, int],
) -> list[LineStock]:
    reserved = reserved_by_medicine(lines)
    out: list[LineStock] = []
    for i, line in enumerate(lines):
        shown = display_stock(lines, i, stock_by_id, reserved)
        out.append(
            LineStock(
                index=i,
                medicine_id=line.medicine_id,
                reserved=line.units,
                display_stock=shown,
                exceeds_stock=shown is not None and line.units > shown,
            )
        )
    return out


def medicine_options(
    lines: Sequence[PrescriptionLine],
    index: int,
    medicines: Sequence[tuple[str, str, int]],
) -> list[MedicineOption]:
    """
    Selectable medicines for row `index`, given (id, name, stock) per medicine.

    A medicine whose displayed stock is <= 0 is disabled, except on the row
    that already references it: that row must stay editable so its quantity
    can be lowered or the row removed.
    """
    reserved = reserved_by_medicine(lines)
    current = lines[index]
    options: list[MedicineOption] = []
    for mid, name, stock in medicines:
        shown = stock - reserved.get(mid, 0)
        if mid == current.medicine_id:
            shown += current.units
        options.append(
            MedicineOption(
                medicine_id=mid,
                name=name,
                display_stock=shown,
                disabled=shown <= 0 and mid != current.medicine_id,
            )
        )
    return options
