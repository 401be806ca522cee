from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from clubfund.services.formatting import format_amount
from clubfund.utils.parse import coerce_amount, coerce_count, parse_contribution_date

TZ = ZoneInfo("Asia/Ho_Chi_Minh")


def test_coerce_amount():
    assert coerce_amount(None) == 0
    assert coerce_amount("") == 0
    assert coerce_amount("abc") == 0
    assert coerce_amount(True) == 0
    assert coerce_amount(float("nan")) == 0
    assert coerce_amount("125000") == 125000
    assert coerce_amount("125.000đ") == 125000
    assert coerce_amount("1 250 000 VND") == 1250000
    assert coerce_amount("12.5") == 12.5
    assert coerce_amount(7) == 7.0


def test_coerce_count():
    assert coerce_count("4") == 4
    assert coerce_count(-2) == 0
    assert coerce_count(None) == 0


def test_parse_contribution_date():
    assert parse_contribution_date("2024-05-01", TZ) == date(2024, 5, 1)
    assert parse_contribution_date("01/05/2024", TZ) == date(2024, 5, 1)
    assert parse_contribution_date(date(2024, 5, 1), TZ) == date(2024, 5, 1)
    late_utc = datetime(2024, 4, 30, 20, 0, tzinfo=timezone.utc)
    assert parse_contribution_date(late_utc, TZ) == date(2024, 5, 1)


def test_parse_contribution_date_rejects_garbage():
    with pytest.raises(ValueError):
        parse_contribution_date("yesterday", TZ)
    with pytest.raises(ValueError):
        parse_contribution_date(None, TZ)


def test_coerce_amount_decimal_comma():
    assert coerce_amount("12,5") == 12.5
    assert coerce_amount("1.234,5đ") == 1234.5
    assert coerce_amount("1.234.567,25 VND") == 1234567.25
    assert coerce_amount("1,234.5") == 1234.5
    assert coerce_amount("125,000") == 125000
    assert coerce_amount("1.234,567") == 1234.567


def test_coerce_amount_reads_formatted_amounts():
    for value in (1234.5, 125000, -50000, 0.5, 1234567.25):
        assert coerce_amount(format_amount(value, symbol="đ")) == value
