"""Flask web application for driver credential compliance."""

import os
from datetime import date
from pathlib import Path

from flask import Flask, abort, jsonify, request

from compliance import (
    CnhStatus,
    Granularity,
    OmnilinkStatus,
    format_date,
    load_roster,
    parse_range_key,
)
from compliance.driver import INDICACAO_STATUSES

app = Flask(__name__)
app.secret_key = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-prod")

# Roster file (relative to project root unless ROSTER_FILE is set)
app.config["ROSTER_FILE"] = os.environ.get(
    "ROSTER_FILE", str(Path(__file__).parent.parent / "rosters" / "example.yaml")
)


def status_badge(status) -> str:
    """Badge variant for a status value."""
    variants = {
        CnhStatus.VALID: "success",
        CnhStatus.EXPIRING_SOON: "warning",
        CnhStatus.EXPIRED: "destructive",
        OmnilinkStatus.EM_DIA: "success",
        OmnilinkStatus.PREST_VENCER: "warning",
        OmnilinkStatus.VENCIDO: "destructive",
    }
    return variants.get(status, "secondary")


def get_today() -> date:
    """Reference date from the 'today' query parameter, defaulting to today."""
    value = request.args.get("today")
    if not value:
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError:
        abort(400, description=f"Invalid 'today' date: {value}")


def get_roster():
    path = Path(app.config["ROSTER_FILE"])
    if not path.exists():
        abort(404, description=f"Roster file not found: {path.name}")
    return load_roster(path)


def driver_payload(driver, today: date) -> dict:
    cnh = driver.cnh_status(today)
    omnilink = driver.omnilink_status(today)
    return {
        "full_name": driver.full_name,
        "cpf": driver.cpf,
        "type": driver.type,
        "status_indicacao": driver.indicacao,
        "cnh_expiry": format_date(driver.cnh_expiry),
        "omnilink_score_registration_date": format_date(
            driver.omnilink_score_registration_date
        ),
        "cnh_status": {**cnh.to_dict(), "badge": status_badge(cnh.status)},
        "omnilink_status": {**omnilink.to_dict(), "badge": status_badge(omnilink.status)},
        "needs_attention": cnh.is_due or omnilink.is_due,
    }


@app.errorhandler(400)
@app.errorhandler(404)
def json_error(error):
    return jsonify({"error": error.description}), error.code


@app.route("/api/drivers")
def drivers():
    """Every driver with CNH and Omnilink status, most urgent first."""
    today = get_today()
    roster = get_roster()
    ordered = sorted(
        roster.drivers,
        key=lambda d: (
            d.omnilink_status(today).status.urgency,
            d.cnh_status(today).status.urgency,
            d.full_name,
        ),
    )
    return jsonify(
        {
            "today": today.isoformat(),
            "drivers": [driver_payload(d, today) for d in ordered],
        }
    )


@app.route("/api/summary")
def summary():
    """Dashboard card counts."""
    today = get_today()
    roster = get_roster()
    return jsonify({"today": today.isoformat(), **roster.status_summary(today).to_dict()})


@app.route("/api/buckets")
def buckets():
    """Heatmap rows at the requested granularity."""
    today = get_today()
    value = request.args.get("granularity", Granularity.DAYS.value)
    try:
        granularity = Granularity(value)
    except ValueError:
        abort(400, description=f"Invalid granularity: {value}")
    roster = get_roster()
    rows = roster.bucket_counts(granularity, today)
    return jsonify(
        {
            "today": today.isoformat(),
            "granularity": granularity.value,
            "rows": [row.to_dict() for row in rows],
        }
    )


@app.route("/api/buckets/<range_key>")
def bucket_drivers(range_key: str):
    """Drill-down: drivers inside one range bucket."""
    today = get_today()
    key = parse_range_key(range_key)
    if key is None:
        abort(400, description=f"Unknown range key: {range_key}")
    indicacao = request.args.get("indicacao") or None
    if indicacao is not None and indicacao not in INDICACAO_STATUSES:
        abort(400, description=f"Invalid indicacao: {indicacao}")
    roster = get_roster()
    matched = roster.filter_by_bucket(key, indicacao=indicacao, today=today)
    return jsonify(
        {
            "today": today.isoformat(),
            "key": key.value,
            "drivers": [driver_payload(d, today) for d in matched],
        }
    )


if __name__ == "__main__":
    # Using 5001 to avoid conflict with macOS AirPlay Receiver on 5000
    app.run(debug=True, host="0.0.0.0", port=5001)
