from hc_core.appointments.prescriptions import PrescriptionLine
from hc_core.appointments.reservation import (
    display_stock,
    display_stocks,
    medicine_options,
    reserved_by_medicine,
)


def _lines(*rows):
    return [PrescriptionLine(medicine_id=mid, quantity=qty) for mid, qty in rows]


def test_each_row_ignores_its_own_reservation():
    lines = _lines(("a", "4"), ("a", "3"))
    stock = {"a": 10}

    assert reserved_by_medicine(lines) == {"a": 7}
    assert display_stock(lines, 0, stock) == 7  # 10 - 7 + 4
    assert display_stock(lines, 1, stock) == 6  # 10 - 7 + 3


def test_all_rows_match_single_row_lookup():
    lines = _lines(("a", "4"), ("b", "2"), ("a", "1"), ("", "9"))
    stock = {"a": 6, "b": 1}

    rows = display_stocks(lines, stock)

    assert [r.display_stock for r in rows] == [display_stock(lines, i, stock) for i in range(len(lines))]
    assert [r.display_stock for r in rows] == [5, 1, 2, None]


def test_blank_and_non_numeric_quantities_reserve_nothing():
    lines = _lines(("a", ""), ("a", "abc"), ("a", "2"))
    rows = display_stocks(lines, {"a": 5})

    assert [r.display_stock for r in rows] == [3, 3, 5]
    assert not any(r.exceeds_stock for r in rows)


def test_row_without_medicine_has_no_display_stock():
    lines = _lines(("", "3"), ("missing", "1"))
    rows = display_stocks(lines, {"a": 5})

    assert rows[0].display_stock is None
    assert rows[1].display_stock is None
    assert not rows[0].exceeds_stock


def test_exceeds_stock_when_own_quantity_is_more_than_what_is_left():
    lines = _lines(("a", "4"), ("a", "3"))
    rows = display_stocks(lines, {"a": 5})

    # row 0: 5 - 7 + 4 = 2 < 4; row 1: 5 - 7 + 3 = 1 < 3
    assert [r.display_stock for r in rows] == [2, 1]
    assert all(r.exceeds_stock for r in rows)


def test_depleted_medicine_is_disabled_only_for_other_rows():
    lines = _lines(("a", "5"), ("", ""))
    catalogue = [("a", "Arnica", 5), ("b", "Belladonna", 2)]

    own_row = {o.medicine_id: o for o in medicine_options(lines, 0, catalogue)}
    new_row = {o.medicine_id: o for o in medicine_options(lines, 1, catalogue)}

    assert own_row["a"].display_stock == 5
    assert own_row["a"].disabled is False

    assert new_row["a"].display_stock == 0
    assert new_row["a"].disabled is True
    assert new_row["b"].disabled is False


def test_row_referencing_an_exhausted_medicine_stays_editable():
    lines = _lines(("a", "3"), ("a", "4"))
    options = {o.medicine_id: o for o in medicine_options(lines, 1, [("a", "Arnica", 2)])}

    assert options["a"].display_stock == -1
    assert options["a"].disabled is False
