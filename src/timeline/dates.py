"""
Date parsers for asset export formats.

Two formats appear in the wild:
1. Contract dates: "July 23, 2026" / "February 04, 2026"
2. Install base age: "4yr, 3mo, 1d" (relative to a reference date)
"""

import re
from datetime import date, timedelta
from typing import Optional

MONTHS = {
    "january": 1,
    "february": 2,
    "march": 3,
    "april": 4,
    "may": 5,
    "june": 6,
    "july": 7,
    "august": 8,
    "september": 9,
    "october": 10,
    "november": 11,
    "december": 12,
}

_CONTRACT_DATE_RE = re.compile(r"^(\w+)\s+([0-9]{1,2}),\s*([0-9]{4})$")
_YEARS_RE = re.compile(r"([0-9]+)\s*yr")
_MONTHS_RE = re.compile(r"([0-9]+)\s*mo")
_DAYS_RE = re.compile(r"([0-9]+)\s*d")


def _calendar_date(year: int, month: int, day: int) -> date:
    """
    Build a date, letting out-of-range months and days roll over.

    Month 0 is December of the previous year, day 31 of a 30-day month is
    the 1st of the next month, and so on.
    """
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    return date(year, month, 1) + timedelta(days=day - 1)


def shift_date(value: date, years: int = 0, months: int = 0, days: int = 0) -> date:
    """
    Move a date by years, then months, then days.

    Each step keeps the day of month and rolls over when the target month
    is too short, so 2024-02-29 plus one year is 2025-03-01 and 2025-03-31
    minus one month is 2025-03-03.
    """
    result = _calendar_date(value.year + years, value.month, value.day)
    result = _calendar_date(result.year, result.month + months, result.day)
    return result + timedelta(days=days)


def parse_contract_date(raw: str) -> Optional[date]:
    """
    Parse a date string like "July 23, 2026" or "February 04, 2026".

    Only English month names are recognised.

    Parameters
    ----------
    raw : str
        Cell text

    Returns
    -------
    Optional[date]
        Parsed date, or None for empty, "Unavailable" or unrecognised text
    """
    trimmed = (raw or "").strip()
    if not trimmed or trimmed.lower() == "unavailable":
        return None

    match = _CONTRACT_DATE_RE.match(trimmed)
    if not match:
        return None

    month = MONTHS.get(match.group(1).lower())
    if month is None:
        return None

    try:
        return _calendar_date(int(match.group(3)), month, int(match.group(2)))
    except (ValueError, OverflowError):
        # Year 0000 and similar fall outside the supported calendar
        return None


def parse_install_base_age(raw: str, reference: Optional[date] = None) -> Optional[date]:
    """
    Turn an age string like "4yr, 3mo, 1d" into an estimated install date.

    Each unit is optional and the units may appear in any order. The age
    is subtracted from the reference date years first, then months, then
    days.

    Parameters
    ----------
    raw : str
        Cell text
    reference : Optional[date]
        Date the age is measured from (default today)

    Returns
    -------
    Optional[date]
        Install date, or None for empty, unrecognised or all-zero ages
    """
    trimmed = (raw or "").strip()
    if not trimmed:
        return None

    counts = []
    for pattern in (_YEARS_RE, _MONTHS_RE, _DAYS_RE):
        match = pattern.search(trimmed)
        counts.append(int(match.group(1)) if match else 0)
    years, months, days = counts

    if years == 0 and months == 0 and days == 0:
        return None

    if reference is None:
        reference = date.today()
    try:
        return shift_date(reference, years=-years, months=-months, days=-days)
    except (ValueError, OverflowError):
        return None
