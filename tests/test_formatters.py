import math

import pytest

from aduana_rd.utils.formatters import (
    format_usd,
    format_dop,
    format_percentage,
    parse_number,
    validate_amount,
    is_number,
)


def test_format_usd_uses_thousands_separator():
    assert format_usd(1234.5) == "$1,234.50"
    assert format_usd(0) == "$0.00"
    assert format_usd(-50) == "-$50.00"


def test_format_dop_uses_peso_symbol():
    assert format_dop(449471.876) == "RD$449,471.88"


def test_format_percentage():
    assert format_percentage(0.2985) == "29.85%"
    assert format_percentage(0.18) == "18.00%"


@pytest.mark.parametrize("raw, expected", [
    ("800", 800.0),
    ("$1,250.75", 1250.75),
    ("RD$ 58.50", 58.5),
    ("1.2.3", 1.23),
    ("-15", -15.0),
    ("abc", 0),
    ("", 0),
])
def test_parse_number_strings(raw, expected):
    assert parse_number(raw) == pytest.approx(expected)


def test_parse_number_passes_numbers_through():
    assert parse_number(42) == 42
    assert parse_number(3.5) == 3.5
    assert math.isnan(parse_number(float("nan")))


def test_parse_number_other_types_give_zero():
    assert parse_number(None) == 0
    assert parse_number([1, 2]) == 0
    assert parse_number(True) == 0


@pytest.mark.parametrize("amount", [0.0, 12.34, 999.99, 1000.0, 21200.0, 7683.28, 1234567.89])
def test_formatted_amounts_parse_back(amount):
    assert parse_number(format_usd(amount)) == pytest.approx(amount)
    assert parse_number(format_dop(amount)) == pytest.approx(amount)


def test_validate_amount():
    assert validate_amount("800")
    assert validate_amount(0)
    assert validate_amount("$1,000")
    assert not validate_amount("-1")
    assert not validate_amount("abc")
    assert not validate_amount(None)


def test_is_number():
    assert is_number(1)
    assert is_number(1.5)
    assert not is_number(float("nan"))
    assert not is_number("1")
    assert not is_number(False)
