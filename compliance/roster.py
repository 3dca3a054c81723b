"""Roster class - the driver aggregate behind dashboard cards and filters."""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Union

from .buckets import BUCKETS, Granularity, RangeKey, assign_bucket, parse_range_key
from .calculations import reference_date
from .driver import INDICACAO_STATUSES, Driver
from .status import CnhStatus, OmnilinkStatus


@dataclass
class StatusSummary:
    """Driver counts per CNH and per Omnilink status."""

    total: int
    cnh: Dict[CnhStatus, int]
    omnilink: Dict[OmnilinkStatus, int]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "cnh": {status.value: count for status, count in self.cnh.items()},
            "omnilink": {
                status.value: count for status, count in self.omnilink.items()
            },
        }


@dataclass
class BucketCount:
    """One heatmap row: drivers in a bucket, split by indication status."""

    key: RangeKey
    label: str
    counts: Dict[str, int] = field(
        default_factory=lambda: {status: 0 for status in INDICACAO_STATUSES}
    )

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key.value,
            "label": self.label,
            **self.counts,
            "total": self.total,
        }


class Roster:
    """All drivers of a fleet, with status aggregation helpers."""

    def __init__(self, drivers: Optional[List[Driver]] = None):
        self.drivers = drivers or []

    def __len__(self) -> int:
        return len(self.drivers)

    def get_driver(self, cpf: str) -> Optional[Driver]:
        """Find a driver by CPF."""
        for driver in self.drivers:
            if driver.cpf == cpf:
                return driver
        return None

    def status_summary(self, today: Optional[date] = None) -> StatusSummary:
        """Counts for the CNH and Omnilink dashboard cards."""
        today = reference_date(today)
        cnh = {status: 0 for status in CnhStatus}
        omnilink = {status: 0 for status in OmnilinkStatus}
        for driver in self.drivers:
            cnh[driver.cnh_status(today).status] += 1
            omnilink[driver.omnilink_status(today).status] += 1
        return StatusSummary(total=len(self.drivers), cnh=cnh, omnilink=omnilink)

    def drivers_with_cnh_status(
        self, status: CnhStatus, today: Optional[date] = None
    ) -> List[Driver]:
        today = reference_date(today)
        return [d for d in self.drivers if d.cnh_status(today).status == status]

    def drivers_with_omnilink_status(
        self, status: OmnilinkStatus, today: Optional[date] = None
    ) -> List[Driver]:
        today = reference_date(today)
        return [d for d in self.drivers if d.omnilink_status(today).status == status]

    def drivers_needing_attention(self, today: Optional[date] = None) -> List[Driver]:
        """Drivers whose CNH or Omnilink registration is expired or expiring soon."""
        today = reference_date(today)
        return [
            d
            for d in self.drivers
            if d.cnh_status(today).is_due or d.omnilink_status(today).is_due
        ]

    def filter_by_bucket(
        self,
        key: Union[RangeKey, str],
        indicacao: Optional[str] = None,
        today: Optional[date] = None,
    ) -> List[Driver]:
        """
        Drivers whose Omnilink status falls in a range bucket.

        Args:
            key: Range bucket key, e.g. "vencidos_31-90d"
            indicacao: If given, only drivers with this indication status
        """
        today = reference_date(today)
        range_key = parse_range_key(key)
        if range_key is None:
            return []
        bucket = BUCKETS[range_key]
        return [
            d
            for d in self.drivers
            if (indicacao is None or d.indicacao == indicacao)
            and bucket.contains(d.omnilink_status(today))
        ]

    def bucket_counts(
        self, granularity: Granularity, today: Optional[date] = None
    ) -> List[BucketCount]:
        """
        Heatmap rows at the given granularity.

        Rows are ordered by status urgency, then by range. Empty buckets
        are omitted.
        """
        today = reference_date(today)
        rows: Dict[RangeKey, BucketCount] = {}
        for driver in self.drivers:
            key = assign_bucket(driver.omnilink_status(today), granularity)
            if key is None:
                continue
            if key not in rows:
                rows[key] = BucketCount(key=key, label=BUCKETS[key].label)
            indicacao = driver.indicacao
            if indicacao not in rows[key].counts:
                rows[key].counts[indicacao] = 0
            rows[key].counts[indicacao] += 1
        return [rows[key] for key in BUCKETS if key in rows]
