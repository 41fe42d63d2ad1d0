import pytest

from hc_core.appointments.prescriptions import (
    PrescriptionLine,
    Repetition,
    decrement_totals,
    lines_from_json,
    parse_quantity,
    submission_errors,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("3", 3),
        (" 10 pills", 10),
        ("", 0),
        ("abc", 0),
        ("-5", 0),
        (None, 0),
        (7, 7),
    ],
)
def test_parse_quantity(raw, expected):
    assert parse_quantity(raw) == expected


def test_lines_from_json_tolerates_half_filled_rows():
    lines = lines_from_json([
        {"medicine_id": None, "quantity": None},
        {"medicine_id": "m1", "quantity": 4, "repetition": {"evening": True}},
        "not-a-row",
    ])

    assert len(lines) == 2
    assert lines[0].medicine_id == ""
    assert lines[0].quantity == ""
    assert lines[1].quantity == "4"
    assert lines[1].repetition == Repetition(evening=True)


def test_decrement_totals_sums_per_medicine_and_skips_bad_quantities():
    lines = [
        PrescriptionLine(medicine_id="a", quantity="2"),
        PrescriptionLine(medicine_id="a", quantity="3"),
        PrescriptionLine(medicine_id="b", quantity="abc"),
        PrescriptionLine(medicine_id="c", quantity="-5"),
        PrescriptionLine(medicine_id="", quantity="9"),
    ]
    assert decrement_totals(lines) == {"a": 5}


def test_submission_errors_flag_each_incomplete_row():
    lines = [
        PrescriptionLine(medicine_id="a", quantity="1", repetition=Repetition(morning=True)),
        PrescriptionLine(medicine_id="", quantity=" ", repetition=Repetition()),
    ]
    errors = submission_errors(lines)

    assert list(errors) == [1]
    assert set(errors[1]) == {"medicine_id", "quantity", "repetition"}
