"""
Driver credential compliance models.

This package classifies date-bearing driver credentials:
- Status enums: CNH and Omnilink lifecycle states
- StatusDescriptor: calculated status, message and offsets
- get_cnh_status / get_detailed_omnilink_status: the status calculators
- Range buckets: heatmap groupings and drill-down filters
- Driver / Roster: records and aggregate counts
- Formatting: pt-BR date and time display
"""

from .status import CnhStatus, Direction, OmnilinkStatus, OmnilinkStorageStatus
from .status_descriptor import StatusDescriptor
from .calculations import (
    EXPIRING_SOON_DAYS,
    add_months,
    describe_span,
    diff_days,
    diff_months,
    diff_years,
    parse_date,
)
from .formatting import format_date, format_long_date, format_time
from .cnh import get_cnh_status
from .omnilink import (
    OMNILINK_VALIDITY_MONTHS,
    apply_omnilink_fields,
    calculate_omnilink_score_expiry,
    calculate_omnilink_score_status,
    get_detailed_omnilink_status,
)
from .buckets import (
    BUCKETS,
    Bucket,
    Granularity,
    RangeKey,
    Unit,
    assign_bucket,
    matches_bucket,
    parse_range_key,
)
from .driver import Driver
from .roster import BucketCount, Roster, StatusSummary
from .loader import (
    add_driver,
    delete_driver,
    load_roster,
    refresh_omnilink_fields,
    save_roster,
    update_driver,
)

__all__ = [
    "CnhStatus",
    "Direction",
    "OmnilinkStatus",
    "OmnilinkStorageStatus",
    "StatusDescriptor",
    "EXPIRING_SOON_DAYS",
    "add_months",
    "describe_span",
    "diff_days",
    "diff_months",
    "diff_years",
    "parse_date",
    "format_date",
    "format_long_date",
    "format_time",
    "get_cnh_status",
    "OMNILINK_VALIDITY_MONTHS",
    "apply_omnilink_fields",
    "calculate_omnilink_score_expiry",
    "calculate_omnilink_score_status",
    "get_detailed_omnilink_status",
    "BUCKETS",
    "Bucket",
    "Granularity",
    "RangeKey",
    "Unit",
    "assign_bucket",
    "matches_bucket",
    "parse_range_key",
    "Driver",
    "BucketCount",
    "Roster",
    "StatusSummary",
    "add_driver",
    "delete_driver",
    "load_roster",
    "refresh_omnilink_fields",
    "save_roster",
    "update_driver",
]
