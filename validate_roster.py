#!/usr/bin/env python3
"""
Check driver roster files before they are loaded.

Every schema violation in a file is reported with the record it belongs
to, not just the first one. CPFs must be unique because drivers are
looked up by CPF.
"""

import argparse
import sys
from collections import Counter
from pathlib import Path
from typing import List

import yaml
from jsonschema import Draft7Validator

SCHEMA_FILE = Path(__file__).parent / "schema.yaml"
ROSTERS_DIR = Path(__file__).parent / "rosters"


def load_schema() -> dict:
    with open(SCHEMA_FILE, encoding="utf-8") as f:
        return yaml.safe_load(f)


def _location(path) -> str:
    return ".".join(str(p) for p in path) or "(root)"


def duplicate_cpfs(data: dict) -> List[str]:
    """Problems for CPFs shared by more than one driver record."""
    counts = Counter(d["cpf"] for d in data["drivers"] if d.get("cpf"))
    return [
        f"Duplicate CPF {cpf} ({count} records)"
        for cpf, count in sorted(counts.items())
        if count > 1
    ]


def validate_roster_file(filepath: Path, schema: dict) -> List[str]:
    """Problems found in one roster file; empty when it is valid."""
    try:
        with open(filepath, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        return [f"YAML parse error: {e}"]
    except OSError as e:
        return [f"Error: {e}"]

    errors = sorted(
        Draft7Validator(schema).iter_errors(data),
        key=lambda e: [str(p) for p in e.path],
    )
    if errors:
        return [
            f"Schema validation error at {_location(e.path)}: {e.message}"
            for e in errors
        ]
    return duplicate_cpfs(data)


def roster_files(paths: List[Path]) -> List[Path]:
    """Explicit paths as given, or every YAML file in rosters/."""
    if paths:
        return paths
    return sorted(list(ROSTERS_DIR.glob("*.yaml")) + list(ROSTERS_DIR.glob("*.yml")))


def main(argv=None):
    parser = argparse.ArgumentParser(description="Validate driver roster files")
    parser.add_argument(
        "files",
        nargs="*",
        type=Path,
        help="Roster YAML files (default: all files in rosters/)",
    )
    args = parser.parse_args(argv)

    files = roster_files(args.files)
    if not files:
        print(f"Warning: No roster files found in {ROSTERS_DIR}")
        return 0

    schema = load_schema()
    failed = 0
    for filepath in files:
        problems = validate_roster_file(filepath, schema)
        if not problems:
            print(f"OK: {filepath.name}")
            continue
        failed += 1
        print(f"FAIL: {filepath.name}")
        for problem in problems:
            print(f"  {problem}")

    print()
    print(f"{len(files) - failed} of {len(files)} roster files valid")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
