"""StatusDescriptor dataclass for calculated credential status."""

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional, Union

from .status import CnhStatus, Direction, OmnilinkStatus

_DUE = (
    CnhStatus.EXPIRING_SOON,
    CnhStatus.EXPIRED,
    OmnilinkStatus.PREST_VENCER,
    OmnilinkStatus.VENCIDO,
)


@dataclass(frozen=True)
class StatusDescriptor:
    """
    Calculated status of one date-bearing credential.

    The sign of the difference fields depends on the calculator that built
    the descriptor: CNH differences are positive when the expiry is in the
    past, Omnilink differences are positive when it is in the future.
    ``direction`` and ``magnitude_days`` carry the same information without
    the sign ambiguity.
    """

    status: Union[CnhStatus, OmnilinkStatus]
    message: str
    days_difference: int = 0
    months_difference: int = 0
    years_difference: int = 0
    expiry_date: Optional[date] = None
    direction: Optional[Direction] = None

    @property
    def magnitude_days(self) -> int:
        return abs(self.days_difference)

    @property
    def is_due(self) -> bool:
        return self.status in _DUE

    @property
    def is_unknown(self) -> bool:
        return self.direction is None

    def to_dict(self) -> Dict[str, Any]:
        """Wire shape consumed by badges, cards and filter dialogs."""
        return {
            "status": self.status.value,
            "message": self.message,
            "daysDifference": self.days_difference,
            "monthsDifference": self.months_difference,
            "yearsDifference": self.years_difference,
            "expiryDate": self.expiry_date.isoformat() if self.expiry_date else None,
            "direction": self.direction.value if self.direction else None,
        }
