"""Omnilink Score registration status.

An Omnilink Score registration is valid for a fixed number of calendar
months; every function here derives the expiry from the registration date
and never reads a stored expiry.
"""

from datetime import date, datetime, time
from typing import Any, Dict, Mapping, Optional

from .calculations import (
    EXPIRING_SOON_DAYS,
    DateLike,
    add_months,
    describe_span,
    diff_days,
    diff_months,
    diff_years,
    is_missing,
    parse_date,
    reference_date,
)
from .status import Direction, OmnilinkStatus, OmnilinkStorageStatus
from .status_descriptor import StatusDescriptor

OMNILINK_VALIDITY_MONTHS = 6

MISSING_MESSAGE = "Data de cadastro Omnilink não informada."
INVALID_MESSAGE = "Data de cadastro Omnilink inválida."


def omnilink_expiry(registration_date: DateLike) -> Optional[date]:
    """Registration date + validity months, or None if unparseable."""
    registered = parse_date(registration_date)
    if registered is None:
        return None
    try:
        return add_months(registered, OMNILINK_VALIDITY_MONTHS)
    except (ValueError, OverflowError):
        # Expiry past year 9999.
        return None


def calculate_omnilink_score_expiry(registration_date: DateLike) -> Optional[str]:
    """Expiry date as 'YYYY-MM-DD', or None for missing/invalid input."""
    expiry = omnilink_expiry(registration_date)
    return expiry.isoformat() if expiry else None


def calculate_omnilink_score_status(
    registration_date: DateLike, now: Optional[datetime] = None
) -> Optional[str]:
    """
    Two-value status stored on the driver record.

    'em_dia' while the expiry (start of that day) is strictly after ``now``,
    'inapto' otherwise. There is no "expiring soon" bucket here. An aware
    ``now`` is compared by its wall-clock time.
    """
    expiry = omnilink_expiry(registration_date)
    if expiry is None:
        return None
    if now is None:
        now = datetime.now()
    elif not isinstance(now, datetime):
        now = datetime.combine(now, time.min)
    elif now.tzinfo is not None:
        # Compare wall-clock time; stored dates carry no zone.
        now = now.replace(tzinfo=None)
    if datetime.combine(expiry, time.min) > now:
        return OmnilinkStorageStatus.EM_DIA.value
    return OmnilinkStorageStatus.INAPTO.value


def get_detailed_omnilink_status(
    registration_date: DateLike, today: Optional[date] = None
) -> StatusDescriptor:
    """
    Three-state status for display.

    Differences are ``expiry - today``: positive while the registration is
    still valid, negative once it expired. This is the opposite of the CNH
    convention and range buckets depend on it.
    """
    if is_missing(registration_date):
        return StatusDescriptor(OmnilinkStatus.UNKNOWN, MISSING_MESSAGE)
    expiry = omnilink_expiry(registration_date)
    if expiry is None:
        return StatusDescriptor(OmnilinkStatus.UNKNOWN, INVALID_MESSAGE)

    today = reference_date(today)
    days = diff_days(expiry, today)
    months = diff_months(expiry, today)
    # Months are the coarsest unit used in the message.
    span = describe_span(days, months)

    if days < 0:
        status = OmnilinkStatus.VENCIDO
        message = f"Cadastro Omnilink vencido há {span}."
    elif days <= EXPIRING_SOON_DAYS:
        status = OmnilinkStatus.PREST_VENCER
        message = f"Cadastro Omnilink em dia, prestes a vencer em {span}."
    else:
        status = OmnilinkStatus.EM_DIA
        message = f"Cadastro Omnilink em dia. Vence em {span}."

    if days < 0:
        direction = Direction.PAST
    elif days == 0:
        direction = Direction.TODAY
    else:
        direction = Direction.FUTURE

    return StatusDescriptor(
        status=status,
        message=message,
        days_difference=days,
        months_difference=months,
        years_difference=diff_years(expiry, today),
        expiry_date=expiry,
        direction=direction,
    )


def apply_omnilink_fields(
    record: Mapping[str, Any], now: Optional[datetime] = None
) -> Dict[str, Any]:
    """
    Return a copy of a driver record with the derived Omnilink fields set.

    ``omnilink_score_expiry_date`` and ``omnilink_score_status`` are recomputed
    from ``omnilink_score_registration_date``; both become None when the
    registration date is missing or invalid.
    """
    updated = dict(record)
    registration = updated.get("omnilink_score_registration_date")
    updated["omnilink_score_expiry_date"] = calculate_omnilink_score_expiry(
        registration
    )
    updated["omnilink_score_status"] = calculate_omnilink_score_status(
        registration, now
    )
    return updated
