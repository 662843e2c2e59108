from __future__ import annotations

import re
from datetime import date

_YYYYMMDD = re.compile(r"[0-9]{8}")


def is_yyyymmdd(raw: object) -> bool:
    """Return True for an exact 8-digit date key such as `20230115`."""

    return isinstance(raw, str) and _YYYYMMDD.fullmatch(raw) is not None


def format_yyyymmdd(value: date) -> str:
    return value.strftime("%Y%m%d")


def year_bounds(today: date) -> tuple[str, str]:
    """Return the first and last day of `today`'s year as YYYYMMDD."""

    first = date(today.year, 1, 1)
    last = date(today.year, 12, 31)
    return format_yyyymmdd(first), format_yyyymmdd(last)


def month_of(key: str) -> int:
    """Return the calendar month encoded in a YYYYMMDD key."""

    return int(key[4:6])
