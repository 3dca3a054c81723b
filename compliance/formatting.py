"""Display formatting for dates and times (pt-BR conventions)."""

import re
from datetime import date, datetime, time
from typing import Optional, Union

from dateutil.parser import isoparse

from .calculations import is_missing

PLACEHOLDER = "-"
INVALID_DATE = "Data Inválida"
INVALID_TIME = "Hora Inválida"

# Fixed date paired with bare "HH:mm" strings so they can be parsed.
_TIME_ANCHOR = "2000-01-01"
_BARE_TIME = re.compile(r"^\d{2}:\d{2}$")

MONTH_NAMES = (
    "janeiro",
    "fevereiro",
    "março",
    "abril",
    "maio",
    "junho",
    "julho",
    "agosto",
    "setembro",
    "outubro",
    "novembro",
    "dezembro",
)


def _to_date(value: Union[str, date]) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return isoparse(value.strip()).date()
    except (ValueError, OverflowError, AttributeError):
        return None


def format_date(value: Union[str, date, None]) -> str:
    """'DD/MM/YYYY', '-' when missing, 'Data Inválida' when unparseable."""
    if is_missing(value):
        return PLACEHOLDER
    parsed = _to_date(value)
    if parsed is None:
        return INVALID_DATE
    return f"{parsed.day:02d}/{parsed.month:02d}/{parsed.year:04d}"


def format_long_date(value: Union[str, date, None]) -> str:
    """'15 de outubro de 2023'; same sentinels as format_date."""
    if is_missing(value):
        return PLACEHOLDER
    parsed = _to_date(value)
    if parsed is None:
        return INVALID_DATE
    return f"{parsed.day} de {MONTH_NAMES[parsed.month - 1]} de {parsed.year}"


def format_time(value: Union[str, datetime, time, None]) -> str:
    """
    'HH:mm' for a time of day.

    Accepts bare 'HH:mm' strings, full ISO timestamps, datetime and time
    values. Returns '-' when missing and 'Hora Inválida' when unparseable.
    """
    if is_missing(value):
        return PLACEHOLDER
    if isinstance(value, (datetime, time)):
        return value.strftime("%H:%M")
    if not isinstance(value, str):
        return INVALID_TIME
    text = value.strip()
    if _BARE_TIME.match(text):
        text = f"{_TIME_ANCHOR}T{text}"
    try:
        parsed = isoparse(text)
    except (ValueError, OverflowError):
        return INVALID_TIME
    return parsed.strftime("%H:%M")
