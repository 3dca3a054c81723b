"""Helper functions for expiry window calculations."""

import re
from datetime import date, datetime
from typing import Optional, Union

from dateutil.relativedelta import relativedelta

DateLike = Union[str, date, None]

# Days before expiry at which a credential counts as "expiring soon".
EXPIRING_SOON_DAYS = 90

_ISO_DATE = re.compile(r"^\s*(\d{4})-(\d{2})-(\d{2})(?:[T ][0-9:.+\-Z]*)?\s*$")


def is_missing(value: DateLike) -> bool:
    """True when no date was recorded (None or blank string)."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def parse_date(value: DateLike) -> Optional[date]:
    """
    Parse a calendar date from its year/month/day components.

    No timezone conversion is applied: a trailing time part on an ISO
    timestamp is ignored. Returns None for missing or invalid input.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    match = _ISO_DATE.match(value)
    if not match:
        return None
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def reference_date(today: Optional[date] = None) -> date:
    """Start of the reference day; samples the clock only when not given."""
    if today is None:
        return date.today()
    if isinstance(today, datetime):
        return today.date()
    return today


def add_months(start: date, months: int) -> date:
    """Calendar month arithmetic, clamped to the end of shorter months."""
    return start + relativedelta(months=months)


def diff_days(later: date, earlier: date) -> int:
    """Whole calendar days from earlier to later (negative if reversed)."""
    return (later - earlier).days


def diff_months(later: date, earlier: date) -> int:
    """Whole months from earlier to later, truncated toward zero."""
    delta = relativedelta(later, earlier)
    return delta.years * 12 + delta.months


def diff_years(later: date, earlier: date) -> int:
    """Whole years from earlier to later, truncated toward zero."""
    return relativedelta(later, earlier).years


def pluralize(count: int, singular: str, plural: str) -> str:
    """'1 mês', '3 meses', '0 dias'."""
    return f"{count} {singular if count == 1 else plural}"


def describe_span(days: int, months: int, years: int = 0) -> str:
    """
    Describe a span using its coarsest non-zero unit (years, months, days).

    Signs are ignored; callers pass years=0 to disable year granularity.
    """
    days, months, years = abs(days), abs(months), abs(years)
    if years > 0:
        return pluralize(years, "ano", "anos")
    if months > 0:
        return pluralize(months, "mês", "meses")
    return pluralize(days, "dia", "dias")
