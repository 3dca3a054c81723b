#!/usr/bin/env python3
"""Tests for Omnilink Score registration status."""
from datetime import date, datetime, timedelta, timezone

import pytest

from compliance import (
    Direction,
    OmnilinkStatus,
    apply_omnilink_fields,
    calculate_omnilink_score_expiry,
    calculate_omnilink_score_status,
    get_detailed_omnilink_status,
)
from compliance.omnilink import INVALID_MESSAGE, MISSING_MESSAGE

TODAY = date(2023, 10, 15)


class TestCalculateExpiry:
    """Tests for calculate_omnilink_score_expiry."""

    def test_six_calendar_months(self):
        assert calculate_omnilink_score_expiry("2024-01-31") == "2024-07-31"
        assert calculate_omnilink_score_expiry("2023-01-01") == "2023-07-01"

    def test_clamped_to_month_end(self):
        assert calculate_omnilink_score_expiry("2024-08-31") == "2025-02-28"

    @pytest.mark.parametrize("value", [None, "", "garbage", "2023-02-30"])
    def test_missing_or_invalid(self, value):
        assert calculate_omnilink_score_expiry(value) is None

    def test_expiry_beyond_calendar_is_none(self):
        assert calculate_omnilink_score_expiry("9999-06-30") == "9999-12-30"
        assert calculate_omnilink_score_expiry("9999-12-31") is None


class TestCalculateStatus:
    """Tests for calculate_omnilink_score_status (storage variant)."""

    def test_em_dia_while_expiry_ahead(self):
        now = datetime(2023, 10, 14, 23, 59)
        assert calculate_omnilink_score_status("2023-04-15", now) == "em_dia"

    def test_inapto_when_expiry_reached(self):
        now = datetime(2023, 10, 15, 0, 0)
        assert calculate_omnilink_score_status("2023-04-15", now) == "inapto"

    def test_no_expiring_soon_bucket(self):
        """Expiring next week is still 'em_dia' for storage."""
        now = datetime(2023, 10, 8, 12, 0)
        assert calculate_omnilink_score_status("2023-04-15", now) == "em_dia"

    def test_accepts_plain_date(self):
        assert calculate_omnilink_score_status("2023-04-15", TODAY) == "inapto"

    def test_invalid(self):
        assert calculate_omnilink_score_status(None) is None
        assert calculate_omnilink_score_status("garbage") is None

    def test_expiry_beyond_calendar_is_none(self):
        assert calculate_omnilink_score_status("9999-12-31", datetime(2023, 1, 1)) is None

    def test_aware_now_compared_by_wall_clock(self):
        before = datetime(2023, 10, 14, 23, 59, tzinfo=timezone(timedelta(hours=-3)))
        reached = datetime(2023, 10, 15, 0, 0, tzinfo=timezone.utc)
        assert calculate_omnilink_score_status("2023-04-15", before) == "em_dia"
        assert calculate_omnilink_score_status("2023-04-15", reached) == "inapto"


class TestDetailedStatus:
    """Tests for get_detailed_omnilink_status."""

    def test_missing(self):
        result = get_detailed_omnilink_status(None, TODAY)
        assert result.status == OmnilinkStatus.UNKNOWN
        assert result.message == MISSING_MESSAGE
        assert result.expiry_date is None
        assert result.days_difference == 0

    def test_invalid(self):
        result = get_detailed_omnilink_status("2023-99-01", TODAY)
        assert result.status == OmnilinkStatus.UNKNOWN
        assert result.message == INVALID_MESSAGE

    def test_expiry_beyond_calendar_is_unknown(self):
        result = get_detailed_omnilink_status("9999-12-31", TODAY)
        assert result.status == OmnilinkStatus.UNKNOWN
        assert result.message == INVALID_MESSAGE
        assert result.direction is None

    def test_expired_end_to_end(self):
        result = get_detailed_omnilink_status("2023-01-01", TODAY)
        assert result.expiry_date == date(2023, 7, 1)
        assert result.days_difference == -106
        assert result.months_difference == -3
        assert result.status == OmnilinkStatus.VENCIDO
        assert result.direction == Direction.PAST
        assert "3 meses" in result.message
        assert result.message == "Cadastro Omnilink vencido há 3 meses."

    def test_expired_yesterday(self):
        result = get_detailed_omnilink_status("2023-04-14", TODAY)
        assert result.status == OmnilinkStatus.VENCIDO
        assert result.message == "Cadastro Omnilink vencido há 1 dia."

    def test_expires_today_is_prest_vencer(self):
        result = get_detailed_omnilink_status("2023-04-15", TODAY)
        assert result.days_difference == 0
        assert result.status == OmnilinkStatus.PREST_VENCER
        assert result.direction == Direction.TODAY

    def test_90_days_is_prest_vencer(self):
        result = get_detailed_omnilink_status("2023-07-13", TODAY)
        assert result.expiry_date == date(2024, 1, 13)
        assert result.days_difference == 90
        assert result.months_difference == 2
        assert result.status == OmnilinkStatus.PREST_VENCER
        assert result.message == "Cadastro Omnilink em dia, prestes a vencer em 2 meses."

    def test_91_days_is_em_dia(self):
        result = get_detailed_omnilink_status("2023-07-14", TODAY)
        assert result.days_difference == 91
        assert result.status == OmnilinkStatus.EM_DIA
        assert result.message == "Cadastro Omnilink em dia. Vence em 2 meses."

    def test_no_year_granularity_in_message(self):
        result = get_detailed_omnilink_status("2023-10-15", TODAY)
        assert result.days_difference == 183
        assert result.message == "Cadastro Omnilink em dia. Vence em 6 meses."

    def test_long_expired_still_in_months(self):
        result = get_detailed_omnilink_status("2021-01-01", TODAY)
        assert result.years_difference == -2
        assert result.message == "Cadastro Omnilink vencido há 27 meses."

    @pytest.mark.parametrize("days_ahead", [91, 120, 150, 182])
    def test_beyond_90_days_always_em_dia(self, days_ahead):
        expiry = TODAY + timedelta(days=days_ahead)
        # registration = expiry - 6 months; only pick expiries that round-trip
        registration = date(expiry.year - (1 if expiry.month <= 6 else 0),
                            (expiry.month - 7) % 12 + 1, expiry.day)
        result = get_detailed_omnilink_status(registration, TODAY)
        assert result.expiry_date == expiry
        assert result.status == OmnilinkStatus.EM_DIA

    def test_idempotent(self):
        first = get_detailed_omnilink_status("2023-05-20", TODAY)
        second = get_detailed_omnilink_status("2023-05-20", TODAY)
        assert first == second


class TestApplyOmnilinkFields:
    """Tests for apply_omnilink_fields."""

    def test_derives_fields(self):
        record = {"full_name": "Ana", "omnilink_score_registration_date": "2023-04-15"}
        updated = apply_omnilink_fields(record, datetime(2023, 10, 1))
        assert updated["omnilink_score_expiry_date"] == "2023-10-15"
        assert updated["omnilink_score_status"] == "em_dia"
        assert updated["full_name"] == "Ana"

    def test_does_not_mutate_input(self):
        record = {"omnilink_score_registration_date": "2023-04-15"}
        apply_omnilink_fields(record, datetime(2023, 10, 1))
        assert "omnilink_score_status" not in record

    def test_clears_fields_when_missing(self):
        record = {
            "omnilink_score_registration_date": None,
            "omnilink_score_expiry_date": "2020-01-01",
            "omnilink_score_status": "em_dia",
        }
        updated = apply_omnilink_fields(record)
        assert updated["omnilink_score_expiry_date"] is None
        assert updated["omnilink_score_status"] is None
