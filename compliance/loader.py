"""YAML loading and saving utilities for driver rosters."""

from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .driver import Driver
from .omnilink import apply_omnilink_fields
from .roster import Roster

# Record fields, in the order they are written back.
DRIVER_FIELDS = (
    "full_name",
    "cpf",
    "cnh",
    "cnh_expiry",
    "phone",
    "type",
    "omnilink_score_registration_date",
    "omnilink_score_expiry_date",
    "omnilink_score_status",
    "status_indicacao",
)

_DERIVED_FIELDS = ("omnilink_score_expiry_date", "omnilink_score_status")


def _as_text(value: Any) -> Any:
    """YAML turns unquoted dates into date objects; keep them as ISO strings."""
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def _parse_driver(dct: Dict[str, Any]) -> Driver:
    """Parse a record dictionary into a Driver."""
    return Driver(
        dct["full_name"],
        **{name: _as_text(dct.get(name)) for name in DRIVER_FIELDS[1:]},
    )


def _driver_to_dict(driver: Driver) -> Dict[str, Any]:
    """Serialize a Driver to the record format, omitting None values."""
    d: Dict[str, Any] = {}
    for name in DRIVER_FIELDS:
        value = getattr(driver, name)
        if value is not None:
            d[name] = value
    return d


def _load_raw(filename: Union[str, Path]) -> Dict[str, Any]:
    with open(filename, "r", encoding="utf-8") as fp:
        data = yaml.load(fp, Loader=yaml.SafeLoader)
    return data or {}


def _dump_raw(filename: Union[str, Path], data: Dict[str, Any]) -> None:
    with open(filename, "w", encoding="utf-8") as fp:
        yaml.dump(
            data,
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )


def load_roster(filename: Union[str, Path]) -> Roster:
    """Load a roster from a YAML file."""
    data = _load_raw(filename)
    records = data.get("drivers") or []
    return Roster([_parse_driver(record) for record in records])


def save_roster(filename: Union[str, Path], roster: Roster) -> None:
    """Write a roster to a YAML file, replacing its drivers list."""
    path = Path(filename)
    data = _load_raw(path) if path.exists() else {}
    data["drivers"] = [_driver_to_dict(driver) for driver in roster.drivers]
    _dump_raw(path, data)


def add_driver(filename: Union[str, Path], driver: Driver) -> None:
    """
    Append a driver to a roster file.

    The derived Omnilink fields are computed from the registration date
    before the record is written.
    """
    data = _load_raw(filename)

    if data.get("drivers") is None:
        data["drivers"] = []

    data["drivers"].append(apply_omnilink_fields(_driver_to_dict(driver)))
    _dump_raw(filename, data)


def update_driver(filename: Union[str, Path], index: int, driver: Driver) -> None:
    """Replace the driver at the given index, recomputing derived fields."""
    data = _load_raw(filename)

    drivers = data.get("drivers") or []
    if index < 0 or index >= len(drivers):
        raise IndexError(f"Driver index {index} out of range (0..{len(drivers) - 1})")

    drivers[index] = apply_omnilink_fields(_driver_to_dict(driver))
    _dump_raw(filename, data)


def delete_driver(filename: Union[str, Path], index: int) -> None:
    """Remove the driver at the given index."""
    data = _load_raw(filename)

    drivers = data.get("drivers") or []
    if index < 0 or index >= len(drivers):
        raise IndexError(f"Driver index {index} out of range (0..{len(drivers) - 1})")

    del drivers[index]
    _dump_raw(filename, data)


def refresh_omnilink_fields(
    filename: Union[str, Path], now: Optional[datetime] = None, dry_run: bool = False
) -> List[int]:
    """
    Recompute the stored Omnilink expiry date and status of every driver.

    Returns the indexes of the records whose derived fields changed. The file
    is only rewritten when something changed and ``dry_run`` is False.
    """
    data = _load_raw(filename)
    drivers = data.get("drivers") or []

    changed = []
    for index, record in enumerate(drivers):
        updated = apply_omnilink_fields(record, now)
        if any(_as_text(record.get(name)) != updated[name] for name in _DERIVED_FIELDS):
            changed.append(index)
            drivers[index] = updated

    if changed and not dry_run:
        _dump_raw(filename, data)
    return changed
