from datetime import date, datetime

import pytest

from app.domain.parsing import coef_or_one, days_since, elapsed_days, js_round, parse_date, safe_num, to_float, to_int


@pytest.mark.parametrize(
    "raw,expected",
    [
        (None, 0.0),
        (True, 0.0),
        ("", 0.0),
        ("   ", 0.0),
        ("abc", 0.0),
        (float("nan"), 0.0),
        (float("inf"), 0.0),
        ("-inf", 0.0),
        ("68.32", 68.32),
        (12, 12.0),
        (-3.5, -3.5),
        ([1], 0.0),
    ],
)
def test_safe_num_coerces_to_finite_or_default(raw, expected):
    assert safe_num(raw) == expected


def test_safe_num_custom_default():
    assert safe_num(None, 1.0) == 1.0
    assert safe_num(float("nan"), 1.0) == 1.0


def test_coef_or_one_treats_zero_as_unset():
    assert coef_or_one(0) == 1.0
    assert coef_or_one(None) == 1.0
    assert coef_or_one(float("nan")) == 1.0
    assert coef_or_one(1.05) == 1.05


def test_js_round_is_half_up():
    assert js_round(2.5) == 3
    assert js_round(3.5) == 4
    assert js_round(-2.5) == -2
    assert js_round(-2.6) == -3
    assert js_round(289812.64637) == 289813


def test_to_int_and_to_float():
    assert to_int("3") == 3
    assert to_int("3.9") == 3
    assert to_int("") is None
    assert to_int("x") is None
    assert to_int(float("nan")) is None
    assert to_float("1.05") == 1.05
    assert to_float(None) is None
    assert to_float("inf") is None


def test_parse_date_variants():
    assert parse_date("2024-03-01") == date(2024, 3, 1)
    assert parse_date("2024-03-01T09:30:00+09:00") == date(2024, 3, 1)
    assert parse_date("2024-03-01 10:00:00") == date(2024, 3, 1)
    assert parse_date(datetime(2024, 3, 1, 12)) == date(2024, 3, 1)
    assert parse_date(date(2024, 3, 1)) == date(2024, 3, 1)
    assert parse_date("not a date") is None
    assert parse_date("") is None
    assert parse_date(123) is None


def test_elapsed_days_between_registration_and_contract():
    assert elapsed_days("2024-03-01", "2024-03-21") == 20
    # order does not matter
    assert elapsed_days("2024-03-21", "2024-03-01") == 20


def test_elapsed_days_without_contract_counts_to_today():
    assert elapsed_days("2024-03-01", None, today=date(2024, 3, 11)) == 10


def test_elapsed_days_bad_input_is_zero():
    assert elapsed_days(None, "2024-03-21") == 0
    assert elapsed_days("garbage", "2024-03-21") == 0
    assert elapsed_days("2024-03-01", "garbage") == 0


def test_elapsed_days_accepts_space_separated_timestamps():
    assert elapsed_days("2024-03-01 10:00:00", "2024-03-21 09:00:00") == 20


def test_days_since_never_negative():
    today = date(2024, 7, 1)
    assert days_since("2024-06-01", today=today) == 30
    assert days_since(date(2024, 8, 1), today=today) == 0
    assert days_since(None, today=today) == 0
    assert days_since("garbage", today=today) == 0
