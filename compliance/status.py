"""Status enums for credential lifecycle states."""

from enum import Enum


class CnhStatus(str, Enum):
    """Driver's license (CNH) states. Values are persisted and rendered verbatim."""

    VALID = "valid"
    EXPIRING_SOON = "expiring_soon"
    EXPIRED = "expired"
    UNKNOWN = "unknown"

    @property
    def urgency(self) -> int:
        """Lower = more urgent."""
        return _CNH_URGENCY[self]


class OmnilinkStatus(str, Enum):
    """Omnilink Score registration states shown in the UI."""

    EM_DIA = "em_dia"
    PREST_VENCER = "prest_vencer"
    VENCIDO = "vencido"
    UNKNOWN = "unknown"

    @property
    def urgency(self) -> int:
        """Lower = more urgent."""
        return _OMNILINK_URGENCY[self]


class OmnilinkStorageStatus(str, Enum):
    """Two-value Omnilink status written back to the driver record."""

    EM_DIA = "em_dia"
    INAPTO = "inapto"


class Direction(str, Enum):
    """Where the expiry date lies relative to the reference date."""

    PAST = "past"
    TODAY = "today"
    FUTURE = "future"


_CNH_URGENCY = {
    CnhStatus.EXPIRED: 1,
    CnhStatus.EXPIRING_SOON: 2,
    CnhStatus.VALID: 3,
    CnhStatus.UNKNOWN: 4,
}

_OMNILINK_URGENCY = {
    OmnilinkStatus.VENCIDO: 1,
    OmnilinkStatus.PREST_VENCER: 2,
    OmnilinkStatus.EM_DIA: 3,
    OmnilinkStatus.UNKNOWN: 4,
}
