"""Range buckets over Omnilink status descriptors.

Each bucket pairs a status with a half-open range over the absolute value
of one difference field: ``lower < |diff| <= upper``. A missing bound is
unbounded. Buckets back the dashboard heatmap and its drill-down filters.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .status import OmnilinkStatus
from .status_descriptor import StatusDescriptor

logger = logging.getLogger(__name__)


class Unit(Enum):
    """Difference field a bucket range applies to."""

    DAYS = "days"
    MONTHS = "months"
    YEARS = "years"
    ANY = "any"  # status match only


class Granularity(Enum):
    """Time granularity of a heatmap grouping."""

    DAYS = "days"
    MONTHS = "months"
    YEARS = "years"

    @property
    def unit(self) -> Unit:
        return Unit(self.value)


class RangeKey(str, Enum):
    """Closed set of bucket keys; values are the keys used by filters."""

    VENCIDOS_0_30D = "vencidos_0-30d"
    VENCIDOS_31_90D = "vencidos_31-90d"
    VENCIDOS_91_180D = "vencidos_91-180d"
    VENCIDOS_180D_PLUS = "vencidos_180d+"
    VENCIDOS_0_1M = "vencidos_0-1m"
    VENCIDOS_1_3M = "vencidos_1-3m"
    VENCIDOS_3_6M = "vencidos_3-6m"
    VENCIDOS_6M_PLUS = "vencidos_6m+"
    VENCIDOS_0_1Y = "vencidos_0-1y"
    VENCIDOS_1_3Y = "vencidos_1-3y"
    VENCIDOS_3Y_PLUS = "vencidos_3y+"
    PREST_VENCER_0_30D = "prest_vencer_0-30d"
    PREST_VENCER_31_90D = "prest_vencer_31-90d"
    PREST_VENCER_90D_PLUS = "prest_vencer_90d+"
    PREST_VENCER_0_1M = "prest_vencer_0-1m"
    PREST_VENCER_1_3M = "prest_vencer_1-3m"
    PREST_VENCER_3M_PLUS = "prest_vencer_3m+"
    PREST_VENCER_ANY = "prest_vencer_any"
    EM_DIA_0_90D = "em_dia_0-90d"
    EM_DIA_91_180D = "em_dia_91-180d"
    EM_DIA_180D_PLUS = "em_dia_180d+"
    EM_DIA_0_3M = "em_dia_0-3m"
    EM_DIA_3_6M = "em_dia_3-6m"
    EM_DIA_6M_PLUS = "em_dia_6m+"
    EM_DIA_ANY = "em_dia_any"
    UNKNOWN_OMNILINK_ANY = "unknown_omnilink_any"


@dataclass(frozen=True)
class Bucket:
    """A status plus a (lower, upper] range over one difference field."""

    status: OmnilinkStatus
    unit: Unit
    lower: Optional[int] = None
    upper: Optional[int] = None
    label: str = ""

    def contains(self, descriptor: StatusDescriptor) -> bool:
        if descriptor.status != self.status:
            return False
        if self.unit is Unit.ANY:
            return True
        value = abs(_difference(descriptor, self.unit))
        if self.lower is not None and value <= self.lower:
            return False
        if self.upper is not None and value > self.upper:
            return False
        return True


def _difference(descriptor: StatusDescriptor, unit: Unit) -> int:
    if unit is Unit.DAYS:
        return descriptor.days_difference
    if unit is Unit.MONTHS:
        return descriptor.months_difference
    return descriptor.years_difference


_V = OmnilinkStatus.VENCIDO
_P = OmnilinkStatus.PREST_VENCER
_E = OmnilinkStatus.EM_DIA
_U = OmnilinkStatus.UNKNOWN

# Ordered by status urgency, then by range; heatmap rows follow this order.
BUCKETS = {
    RangeKey.VENCIDOS_0_30D: Bucket(_V, Unit.DAYS, None, 30, "Venc. (0-30d)"),
    RangeKey.VENCIDOS_31_90D: Bucket(_V, Unit.DAYS, 30, 90, "Venc. (31-90d)"),
    RangeKey.VENCIDOS_91_180D: Bucket(_V, Unit.DAYS, 90, 180, "Venc. (91-180d)"),
    RangeKey.VENCIDOS_180D_PLUS: Bucket(_V, Unit.DAYS, 180, None, "Venc. (180d+)"),
    RangeKey.VENCIDOS_0_1M: Bucket(_V, Unit.MONTHS, None, 1, "Venc. (0-1m)"),
    RangeKey.VENCIDOS_1_3M: Bucket(_V, Unit.MONTHS, 1, 3, "Venc. (1-3m)"),
    RangeKey.VENCIDOS_3_6M: Bucket(_V, Unit.MONTHS, 3, 6, "Venc. (3-6m)"),
    RangeKey.VENCIDOS_6M_PLUS: Bucket(_V, Unit.MONTHS, 6, None, "Venc. (6m+)"),
    RangeKey.VENCIDOS_0_1Y: Bucket(_V, Unit.YEARS, None, 1, "Venc. (0-1a)"),
    RangeKey.VENCIDOS_1_3Y: Bucket(_V, Unit.YEARS, 1, 3, "Venc. (1-3a)"),
    RangeKey.VENCIDOS_3Y_PLUS: Bucket(_V, Unit.YEARS, 3, None, "Venc. (3a+)"),
    RangeKey.PREST_VENCER_0_30D: Bucket(
        _P, Unit.DAYS, None, 30, "Prest. Venc. (0-30d)"
    ),
    RangeKey.PREST_VENCER_31_90D: Bucket(
        _P, Unit.DAYS, 30, 90, "Prest. Venc. (31-90d)"
    ),
    RangeKey.PREST_VENCER_90D_PLUS: Bucket(
        _P, Unit.DAYS, 90, None, "Prest. Venc. (90d+)"
    ),
    RangeKey.PREST_VENCER_0_1M: Bucket(_P, Unit.MONTHS, None, 1, "Prest. Venc. (0-1m)"),
    RangeKey.PREST_VENCER_1_3M: Bucket(_P, Unit.MONTHS, 1, 3, "Prest. Venc. (1-3m)"),
    RangeKey.PREST_VENCER_3M_PLUS: Bucket(
        _P, Unit.MONTHS, 3, None, "Prest. Venc. (3m+)"
    ),
    RangeKey.PREST_VENCER_ANY: Bucket(_P, Unit.ANY, label="Prest. Venc. (Qualquer)"),
    RangeKey.EM_DIA_0_90D: Bucket(_E, Unit.DAYS, None, 90, "Em Dia (0-90d)"),
    RangeKey.EM_DIA_91_180D: Bucket(_E, Unit.DAYS, 90, 180, "Em Dia (91-180d)"),
    RangeKey.EM_DIA_180D_PLUS: Bucket(_E, Unit.DAYS, 180, None, "Em Dia (180d+)"),
    RangeKey.EM_DIA_0_3M: Bucket(_E, Unit.MONTHS, None, 3, "Em Dia (0-3m)"),
    RangeKey.EM_DIA_3_6M: Bucket(_E, Unit.MONTHS, 3, 6, "Em Dia (3-6m)"),
    RangeKey.EM_DIA_6M_PLUS: Bucket(_E, Unit.MONTHS, 6, None, "Em Dia (6m+)"),
    RangeKey.EM_DIA_ANY: Bucket(_E, Unit.ANY, label="Em Dia (Qualquer)"),
    RangeKey.UNKNOWN_OMNILINK_ANY: Bucket(
        _U, Unit.ANY, label="Não Informado (Qualquer)"
    ),
}


def parse_range_key(key: Union[RangeKey, str, None]) -> Optional[RangeKey]:
    """Look up a bucket key; None if it is not one of the known keys."""
    if isinstance(key, RangeKey):
        return key
    try:
        return RangeKey(key)
    except ValueError:
        return None


def matches_bucket(
    descriptor: StatusDescriptor, key: Union[RangeKey, str, None]
) -> bool:
    """
    True if the descriptor falls inside the named bucket.

    Unrecognized keys never match; they are logged so typos in filter
    configuration show up without breaking the caller.
    """
    range_key = parse_range_key(key)
    if range_key is None:
        logger.warning("Unrecognized range bucket key: %r", key)
        return False
    return BUCKETS[range_key].contains(descriptor)


def assign_bucket(
    descriptor: StatusDescriptor, granularity: Granularity
) -> Optional[RangeKey]:
    """
    The first bucket for the descriptor at the given granularity.

    Statuses with no ranges at that granularity fall back to their
    status-only bucket (e.g. 'em_dia_any' at year granularity).
    """
    unit = granularity.unit
    ranged = [
        key
        for key, bucket in BUCKETS.items()
        if bucket.status == descriptor.status and bucket.unit is unit
    ]
    if not ranged:
        ranged = [
            key
            for key, bucket in BUCKETS.items()
            if bucket.status == descriptor.status and bucket.unit is Unit.ANY
        ]
    for key in ranged:
        if BUCKETS[key].contains(descriptor):
            return key
    return None
