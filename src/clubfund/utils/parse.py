from __future__ import annotations

import math
import re
from datetime import date, datetime
from zoneinfo import ZoneInfo


# 1.234.567 / 1,234,567 / 1 234 567, with an optional trailing "đ" or "vnd"
_GROUPED_AMOUNT = re.compile(r"^-?\d{1,3}((\.\d{3})+|(,\d{3})+|(\s\d{3})+)$")
# 1.234,5 / 12,5 (vi-VN decimal comma)
_COMMA_DECIMAL = re.compile(r"^-?\d{1,3}([.\s]\d{3})*,\d+$|^-?\d+,\d+$")
# 1,234.5 / 1 234.5
_POINT_DECIMAL = re.compile(r"^-?\d{1,3}([,\s]\d{3})+\.\d+$")
_CURRENCY_SUFFIX = re.compile(r"\s*(đ|vnđ|vnd)$", re.IGNORECASE)


def coerce_amount(value: object) -> float:
    """
    Coerce a raw amount to float. Missing and non-numeric values become 0.

    Accepted string forms (vi-VN uses "." for thousands):
    - 125000
    - 125000.5
    - 125.000đ / 125,000 / 125 000 VND
    - 1.234,5đ / 12,5 / 1,234.5

    A single comma followed by exactly three digits (125,000) is a
    thousands separator, otherwise a comma is the decimal separator.
    """
    if value is None or isinstance(value, bool):
        return 0.0

    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else 0.0

    if not isinstance(value, str):
        return 0.0

    text = _CURRENCY_SUFFIX.sub("", value.strip())
    if not text:
        return 0.0

    if _GROUPED_AMOUNT.match(text):
        text = re.sub(r"[.,\s]", "", text)
    elif _COMMA_DECIMAL.match(text):
        text = re.sub(r"[.\s]", "", text).replace(",", ".")
    elif _POINT_DECIMAL.match(text):
        text = re.sub(r"[,\s]", "", text)

    try:
        number = float(text)
    except ValueError:
        return 0.0
    return number if math.isfinite(number) else 0.0


def coerce_count(value: object) -> int:
    if isinstance(value, bool):
        return 0
    try:
        count = int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return 0
    return max(count, 0)


def parse_contribution_date(value: object, tz: ZoneInfo) -> date:
    """Accepts date, datetime (aware values are moved to the club timezone) or YYYY-MM-DD / DD/MM/YYYY."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(tz).date()
        return value.date()

    if isinstance(value, date):
        return value

    if not isinstance(value, str):
        raise ValueError("contribution date expected")

    text = value.strip()
    match = re.match(r"^(\d{4})-(\d{1,2})-(\d{1,2})", text)
    if match:
        return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))

    match = re.match(r"^(\d{1,2})[\.\-/](\d{1,2})[\.\-/](\d{4})$", text)
    if match:
        return date(int(match.group(3)), int(match.group(2)), int(match.group(1)))

    raise ValueError(f"unrecognised contribution date: {value!r}")
