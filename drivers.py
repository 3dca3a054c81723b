#!/usr/bin/env python3
"""
Unified CLI for driver credential compliance.

Commands:
  status   - Show CNH and Omnilink status for every driver
  summary  - Show driver counts per status (dashboard cards)
  buckets  - Show Omnilink range buckets split by indication status
  filter   - List drivers in one Omnilink range bucket
  refresh  - Recompute stored Omnilink expiry date and status
"""

import argparse
import sys
from datetime import date, datetime, time
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from compliance import (
    CnhStatus,
    Direction,
    Driver,
    Granularity,
    OmnilinkStatus,
    StatusDescriptor,
    format_date,
    format_long_date,
    load_roster,
    parse_range_key,
    refresh_omnilink_fields,
)
from compliance.buckets import RangeKey
from compliance.driver import INDICACAO_STATUSES

CNH_GROUP_TITLES = {
    CnhStatus.EXPIRED: "EXPIRED:",
    CnhStatus.EXPIRING_SOON: "EXPIRING SOON:",
    CnhStatus.VALID: "VALID:",
    CnhStatus.UNKNOWN: "UNKNOWN (no CNH expiry):",
}

OMNILINK_GROUP_TITLES = {
    OmnilinkStatus.VENCIDO: "VENCIDO:",
    OmnilinkStatus.PREST_VENCER: "PRESTES A VENCER:",
    OmnilinkStatus.EM_DIA: "EM DIA:",
    OmnilinkStatus.UNKNOWN: "UNKNOWN (no Omnilink registration):",
}

# =============================================================================
# Formatting helpers
# =============================================================================


def parse_today(value: str) -> date:
    """argparse type for --today (YYYY-MM-DD)."""
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date '{value}', expected YYYY-MM-DD")


def format_offset(descriptor: StatusDescriptor) -> str:
    """Format distance to expiry for display (e.g., 'in 45d', '106d ago')."""
    if descriptor.is_unknown:
        return "-"
    if descriptor.direction == Direction.TODAY:
        return "today"
    if descriptor.direction == Direction.PAST:
        return f"{descriptor.magnitude_days}d ago"
    return f"in {descriptor.magnitude_days}d"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def make_status_table(drivers: List[Driver], today: date) -> List[List[str]]:
    """Convert drivers to status table rows."""
    rows = []
    for driver in drivers:
        cnh = driver.cnh_status(today)
        omnilink = driver.omnilink_status(today)
        rows.append(
            [
                truncate(driver.full_name),
                driver.cpf or "-",
                format_date(driver.cnh_expiry),
                cnh.status.value,
                format_offset(cnh),
                format_date(driver.omnilink_score_registration_date),
                format_date(omnilink.expiry_date),
                omnilink.status.value,
                format_offset(omnilink),
            ]
        )
    return rows


def make_driver_table(drivers: List[Driver], today: date) -> List[List[str]]:
    """Convert drivers to rows with the Omnilink message."""
    rows = []
    for driver in drivers:
        omnilink = driver.omnilink_status(today)
        rows.append(
            [
                truncate(driver.full_name),
                driver.cpf or "-",
                driver.indicacao,
                format_date(omnilink.expiry_date),
                omnilink.message,
            ]
        )
    return rows


# =============================================================================
# Status command
# =============================================================================


def cmd_status(args):
    """Show CNH and Omnilink status for every driver."""
    roster = load_roster(args.roster_file)
    today = args.today

    print(f"Roster: {args.roster_file}")
    print(f"Reference date: {format_long_date(today)}")
    print(f"Drivers: {len(roster)}")
    if args.by_cnh:
        print("Grouping: CNH status")
    print()

    headers = [
        "Driver",
        "CPF",
        "CNH expiry",
        "CNH",
        "CNH offset",
        "Omnilink reg.",
        "Omnilink expiry",
        "Omnilink",
        "Omnilink offset",
    ]

    if args.by_cnh:
        for status in sorted(CnhStatus, key=lambda s: s.urgency):
            title = CNH_GROUP_TITLES[status]
            drivers = sorted(
                roster.drivers_with_cnh_status(status, today),
                key=lambda d: d.full_name,
            )
            if drivers:
                print(title)
                print(tabulate(make_status_table(drivers, today), headers=headers, tablefmt="simple"))
                print()
        return 0

    for status in sorted(OmnilinkStatus, key=lambda s: s.urgency):
        title = OMNILINK_GROUP_TITLES[status]
        drivers = sorted(
            roster.drivers_with_omnilink_status(status, today),
            key=lambda d: d.full_name,
        )
        if drivers:
            print(title)
            print(tabulate(make_status_table(drivers, today), headers=headers, tablefmt="simple"))
            print()

    return 0


# =============================================================================
# Summary command
# =============================================================================


def cmd_summary(args):
    """Show driver counts per status."""
    roster = load_roster(args.roster_file)
    summary = roster.status_summary(args.today)

    print(f"Reference date: {format_long_date(args.today)}")
    print(f"Total drivers: {summary.total}")
    print(f"Needing attention: {len(roster.drivers_needing_attention(args.today))}")
    print()

    print("CNH:")
    rows = [[status.value, count] for status, count in summary.cnh.items()]
    print(tabulate(rows, headers=["Status", "Drivers"], tablefmt="simple"))
    print()

    print("Omnilink:")
    rows = [[status.value, count] for status, count in summary.omnilink.items()]
    print(tabulate(rows, headers=["Status", "Drivers"], tablefmt="simple"))

    return 0


# =============================================================================
# Buckets command
# =============================================================================


def cmd_buckets(args):
    """Show Omnilink range buckets split by indication status."""
    roster = load_roster(args.roster_file)
    granularity = Granularity(args.granularity)
    rows = roster.bucket_counts(granularity, args.today)

    print(f"Reference date: {format_date(args.today)}")
    print(f"Granularity: {granularity.value}")
    print()

    if not rows:
        print("No drivers found.")
        return 0

    headers = ["Bucket", "Key", *INDICACAO_STATUSES, "Total"]
    table = [
        [row.label, row.key.value, *(row.counts.get(s, 0) for s in INDICACAO_STATUSES), row.total]
        for row in rows
    ]
    print(tabulate(table, headers=headers, tablefmt="simple"))

    return 0


# =============================================================================
# Filter command
# =============================================================================


def cmd_filter(args):
    """List drivers in one Omnilink range bucket."""
    range_key = parse_range_key(args.range_key)
    if range_key is None:
        print(f"Error: Unknown range key '{args.range_key}'")
        print("\nAvailable keys:")
        for key in RangeKey:
            print(f"  {key.value}")
        return 1

    roster = load_roster(args.roster_file)
    drivers = roster.filter_by_bucket(range_key, indicacao=args.indicacao, today=args.today)

    print(f"Bucket: {range_key.value}")
    if args.indicacao:
        print(f"Filter: INDICACAO = {args.indicacao}")
    print(f"Showing: {len(drivers)} of {len(roster)}")
    print()

    if not drivers:
        print("No drivers in this bucket.")
        return 0

    headers = ["Driver", "CPF", "Indicacao", "Omnilink expiry", "Message"]
    print(tabulate(make_driver_table(drivers, args.today), headers=headers, tablefmt="simple"))

    return 0


# =============================================================================
# Refresh command
# =============================================================================


def cmd_refresh(args):
    """Recompute stored Omnilink expiry date and status."""
    now = datetime.combine(args.today, time.min) if args.today_given else None
    changed = refresh_omnilink_fields(args.roster_file, now=now, dry_run=args.dry_run)

    if not changed:
        print("All Omnilink fields are up to date.")
        return 0

    roster = load_roster(args.roster_file)
    print(f"Records to update: {len(changed)}")
    for index in changed:
        driver = roster.drivers[index]
        print(f"  [{index}] {driver.full_name}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    print("Roster updated.")
    return 0


# =============================================================================
# Main
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Driver credential compliance",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s rosters/example.yaml status
  %(prog)s rosters/example.yaml status --by-cnh
  %(prog)s rosters/example.yaml --today 2023-10-15 summary
  %(prog)s rosters/example.yaml buckets --granularity months
  %(prog)s rosters/example.yaml filter vencidos_31-90d --indicacao indicado
  %(prog)s rosters/example.yaml refresh --dry-run
""",
    )
    parser.add_argument(
        "roster_file",
        type=Path,
        help="Path to roster YAML file",
    )
    parser.add_argument(
        "--today",
        type=parse_today,
        help="Reference date in YYYY-MM-DD format (default: today)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Status subcommand
    status_parser = subparsers.add_parser(
        "status", help="Show CNH and Omnilink status for every driver"
    )
    status_parser.add_argument(
        "--by-cnh",
        action="store_true",
        help="Group by CNH status instead of Omnilink status",
    )

    # Summary subcommand
    subparsers.add_parser("summary", help="Show driver counts per status")

    # Buckets subcommand
    buckets_parser = subparsers.add_parser(
        "buckets", help="Show Omnilink range buckets split by indication status"
    )
    buckets_parser.add_argument(
        "--granularity",
        choices=[g.value for g in Granularity],
        default=Granularity.DAYS.value,
        help="Range granularity (default: days)",
    )

    # Filter subcommand
    filter_parser = subparsers.add_parser(
        "filter", help="List drivers in one Omnilink range bucket"
    )
    filter_parser.add_argument(
        "range_key",
        type=str,
        help="Range bucket key (e.g., 'vencidos_31-90d', 'em_dia_6m+')",
    )
    filter_parser.add_argument(
        "--indicacao",
        choices=INDICACAO_STATUSES,
        help="Only drivers with this indication status",
    )

    # Refresh subcommand
    refresh_parser = subparsers.add_parser(
        "refresh", help="Recompute stored Omnilink expiry date and status"
    )
    refresh_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be updated without saving",
    )

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    # Validate roster file exists
    if not args.roster_file.exists():
        print(f"Error: File not found: {args.roster_file}")
        return 1

    # Capture the reference date once for the whole command
    args.today_given = args.today is not None
    if args.today is None:
        args.today = date.today()

    # Dispatch to command handler
    if args.command == "status":
        return cmd_status(args)
    elif args.command == "summary":
        return cmd_summary(args)
    elif args.command == "buckets":
        return cmd_buckets(args)
    elif args.command == "filter":
        return cmd_filter(args)
    elif args.command == "refresh":
        return cmd_refresh(args)

    return 0


if __name__ == "__main__":
    sys.exit(main() or 0)
