"""Parse-or-default helpers for receipt fields. Malformed input yields a zero value, never an error."""

import calendar
import re
from datetime import time

ZERO_AMOUNT = 0.0
ZERO_DAY = 1  # day-of-month of the zero date, January 1 of year 1
ZERO_TIME = time(0, 0)

_DATE_RE = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")
_TIME_RE = re.compile(r"([0-9]{1,2}):([0-9]{2})")


def parse_amount(text) -> float:
    """
    Parse a decimal amount string like "35.35".
    Whitespace padding, digit-group underscores and non-ASCII digits are failures
    and return 0.0. "inf", "nan" and out-of-range values such as "1e400" parse to
    non-finite floats, which callers must tolerate.
    """
    if not isinstance(text, str) or not text or not text.isascii():
        return ZERO_AMOUNT
    if text != text.strip() or "_" in text:
        return ZERO_AMOUNT
    try:
        return float(text)
    except ValueError:
        return ZERO_AMOUNT


def parse_purchase_day(text) -> int:
    """
    Day-of-month of a strict YYYY-MM-DD date, years 0000-9999.
    Returns ZERO_DAY when the text is not a real calendar date.
    """
    if not isinstance(text, str):
        return ZERO_DAY
    m = _DATE_RE.fullmatch(text)
    if not m:
        return ZERO_DAY
    year, month, day = (int(g) for g in m.groups())
    if not 1 <= month <= 12:
        return ZERO_DAY
    # calendar.monthrange rejects year 0; 400 shares its leap-year status.
    _, days_in_month = calendar.monthrange(year or 400, month)
    if not 1 <= day <= days_in_month:
        return ZERO_DAY
    return day


def parse_purchase_time(text) -> time:
    """24-hour H:MM or HH:MM. Returns midnight on failure."""
    if not isinstance(text, str):
        return ZERO_TIME
    m = _TIME_RE.fullmatch(text)
    if not m:
        return ZERO_TIME
    hour, minute = int(m.group(1)), int(m.group(2))
    if hour > 23 or minute > 59:
        return ZERO_TIME
    return time(hour, minute)
