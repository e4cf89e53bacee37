# profile_processor/normalizers/dates.py
import math
from datetime import datetime, timedelta, tzinfo
from typing import Any, Mapping, Optional

# Year-only records land mid-year.
DEFAULT_MONTH = 7
DEFAULT_DAY = 1

MONTH = timedelta(days=30)
YEAR = timedelta(days=365.25)

MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
              "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def reconstruct_date(partial: Optional[Mapping[str, Any]], tz: Optional[tzinfo] = None) -> Optional[datetime]:
    """
    Build a datetime from a partial {year, month?, day?} date.

    Returns None when the year is missing/falsy or the parts don't form a
    real calendar date. Missing or zero month -> July, missing or zero day -> 1st.
    """
    if not isinstance(partial, Mapping) or not partial.get("year"):
        return None
    month = partial.get("month") or DEFAULT_MONTH
    day = partial.get("day") or DEFAULT_DAY
    try:
        return datetime(int(partial["year"]), int(month), int(day), tzinfo=tz)
    except (TypeError, ValueError, OverflowError):
        return None


def month_year(d: datetime) -> str:
    """'Mar 2021' style label, independent of the process locale."""
    return f"{MONTH_ABBR[d.month - 1]} {d.year}"


def months_between(start: datetime, end: datetime) -> float:
    """Elapsed 30-day months, never negative."""
    return max(0.0, (end - start) / MONTH)


def years_since(start: datetime, now: datetime) -> float:
    return (now - start) / YEAR


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))
