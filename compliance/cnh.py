"""CNH (driver's license) expiry status."""

from datetime import date
from typing import Optional

from .calculations import (
    EXPIRING_SOON_DAYS,
    DateLike,
    describe_span,
    diff_days,
    diff_months,
    diff_years,
    is_missing,
    parse_date,
    reference_date,
)
from .status import CnhStatus, Direction
from .status_descriptor import StatusDescriptor

MISSING_MESSAGE = "Data de validade da CNH não informada."
INVALID_MESSAGE = "Data de validade da CNH inválida."
SEVERITY_TAG = "Gravíssimo"


def get_cnh_status(
    expiry_date: DateLike, today: Optional[date] = None
) -> StatusDescriptor:
    """
    Classify a license by its expiry date.

    Differences are ``today - expiry``: positive when the license expired in
    the past, negative while it is still valid.

    - expires today: EXPIRING_SOON
    - expires within EXPIRING_SOON_DAYS: EXPIRING_SOON
    - expires later: VALID
    - already expired: EXPIRED
    """
    if is_missing(expiry_date):
        return StatusDescriptor(CnhStatus.UNKNOWN, MISSING_MESSAGE)
    expiry = parse_date(expiry_date)
    if expiry is None:
        return StatusDescriptor(CnhStatus.UNKNOWN, INVALID_MESSAGE)

    today = reference_date(today)
    days = diff_days(today, expiry)
    months = diff_months(today, expiry)
    years = diff_years(today, expiry)
    span = describe_span(days, months, years)

    if days == 0:
        status = CnhStatus.EXPIRING_SOON
        direction = Direction.TODAY
        message = "CNH válida, mas vence hoje."
    elif days < 0:
        status = CnhStatus.VALID
        if abs(days) <= EXPIRING_SOON_DAYS:
            status = CnhStatus.EXPIRING_SOON
        direction = Direction.FUTURE
        message = f"CNH válida. Vence em {span}."
    else:
        status = CnhStatus.EXPIRED
        direction = Direction.PAST
        message = f"CNH vencida há {span}. - {SEVERITY_TAG}"

    return StatusDescriptor(
        status=status,
        message=message,
        days_difference=days,
        months_difference=months,
        years_difference=years,
        direction=direction,
    )
