from datetime import datetime, timezone

import pytest

from modelsplus.engine.coercion import (
    parse_bool,
    parse_date,
    parse_int,
    parse_number,
    split_list,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("true", True),
        ("TRUE", True),
        (" False ", False),
        (True, True),
        (False, False),
        ("yes", None),
        ("1", None),
        ("", None),
        (1, None),
        (None, None),
    ],
)
def test_parse_bool(raw, expected) -> None:
    assert parse_bool(raw) is expected


def test_parse_number_accepts_text_and_numbers() -> None:
    assert parse_number("0") == 0.0
    assert parse_number("1e-3") == 0.001
    assert parse_number(" 2.5 ") == 2.5
    assert parse_number(7) == 7.0


def test_parse_number_rejects_garbage() -> None:
    assert parse_number("abc") is None
    assert parse_number("") is None
    assert parse_number("nan") is None
    assert parse_number(True) is None
    assert parse_number(None) is None


def test_parse_int_truncates_and_rejects_infinity() -> None:
    assert parse_int("3") == 3
    assert parse_int("3.9") == 3
    assert parse_int("inf") is None
    assert parse_int("x") is None


def test_parse_date_partial_and_full_forms() -> None:
    assert parse_date("2024") == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert parse_date("2024-05") == datetime(2024, 5, 1, tzinfo=timezone.utc)
    assert parse_date("2024-05-13") == datetime(2024, 5, 13, tzinfo=timezone.utc)
    assert parse_date("2024-05-13T10:00:00Z") == datetime(
        2024, 5, 13, 10, tzinfo=timezone.utc
    )


def test_parse_date_normalizes_offsets_to_utc() -> None:
    assert parse_date("2024-05-13T02:00:00+02:00") == datetime(
        2024, 5, 13, 0, tzinfo=timezone.utc
    )


def test_parse_date_invalid_text() -> None:
    assert parse_date("2024-13-45") is None
    assert parse_date("yesterday") is None
    assert parse_date("") is None
    assert parse_date(20240101) is None


def test_parse_date_out_of_range_after_utc_conversion() -> None:
    assert parse_date("0001-01-01T00:00:00+01:00") is None
    assert parse_date("9999-12-31T23:00:00-05:00") is None
    assert parse_date("9999-12-31T23:00:00") == datetime(
        9999, 12, 31, 23, tzinfo=timezone.utc
    )


def test_split_list_drops_blanks() -> None:
    assert split_list("image, text,,") == ("image", "text")
    assert split_list(["a", " b "]) == ("a", "b")
    assert split_list(" , ") == ()
    assert split_list(None) == ()
