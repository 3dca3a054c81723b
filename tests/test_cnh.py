#!/usr/bin/env python3
"""Tests for CNH expiry status."""
from datetime import date

import pytest

from compliance import CnhStatus, Direction, get_cnh_status
from compliance.cnh import INVALID_MESSAGE, MISSING_MESSAGE

TODAY = date(2024, 6, 15)


class TestMissingAndInvalid:
    """Missing and unparseable dates collapse to UNKNOWN without raising."""

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing(self, value):
        result = get_cnh_status(value, TODAY)
        assert result.status == CnhStatus.UNKNOWN
        assert result.message == MISSING_MESSAGE
        assert result.days_difference == 0
        assert result.months_difference == 0
        assert result.direction is None

    @pytest.mark.parametrize("value", ["abc", "2024-02-30", "15/06/2024"])
    def test_invalid(self, value):
        result = get_cnh_status(value, TODAY)
        assert result.status == CnhStatus.UNKNOWN
        assert result.message == INVALID_MESSAGE


class TestExpiringSoon:
    """Expiry today or within 90 days."""

    def test_expires_today(self):
        result = get_cnh_status("2024-06-15", TODAY)
        assert result.status == CnhStatus.EXPIRING_SOON
        assert result.message == "CNH válida, mas vence hoje."
        assert result.days_difference == 0
        assert result.direction == Direction.TODAY

    def test_exactly_90_days_ahead(self):
        result = get_cnh_status("2024-09-13", TODAY)
        assert result.status == CnhStatus.EXPIRING_SOON
        assert result.days_difference == -90
        assert result.months_difference == -2
        assert result.message == "CNH válida. Vence em 2 meses."

    def test_under_a_month_uses_days(self):
        result = get_cnh_status("2024-06-16", TODAY)
        assert result.status == CnhStatus.EXPIRING_SOON
        assert result.message == "CNH válida. Vence em 1 dia."


class TestValid:
    """Expiry more than 90 days ahead; differences are negative."""

    def test_91_days_ahead(self):
        result = get_cnh_status("2024-09-14", TODAY)
        assert result.status == CnhStatus.VALID
        assert result.days_difference == -91
        assert result.direction == Direction.FUTURE

    def test_years_preferred_over_months(self):
        result = get_cnh_status("2026-06-15", TODAY)
        assert result.status == CnhStatus.VALID
        assert result.years_difference == -2
        assert result.months_difference == -24
        assert result.message == "CNH válida. Vence em 2 anos."

    def test_singular_year(self):
        result = get_cnh_status("2025-07-15", TODAY)
        assert result.message == "CNH válida. Vence em 1 ano."


class TestExpired:
    """Expiry in the past; differences are positive."""

    def test_days(self):
        result = get_cnh_status("2024-06-10", TODAY)
        assert result.status == CnhStatus.EXPIRED
        assert result.days_difference == 5
        assert result.direction == Direction.PAST
        assert result.message == "CNH vencida há 5 dias. - Gravíssimo"

    def test_single_month(self):
        result = get_cnh_status("2024-05-10", TODAY)
        assert result.months_difference == 1
        assert result.message == "CNH vencida há 1 mês. - Gravíssimo"

    def test_months(self):
        result = get_cnh_status("2024-03-01", TODAY)
        assert result.message == "CNH vencida há 3 meses. - Gravíssimo"

    def test_years(self):
        result = get_cnh_status("2023-05-15", TODAY)
        assert result.years_difference == 1
        assert result.message == "CNH vencida há 1 ano. - Gravíssimo"

    def test_no_expiry_date_on_descriptor(self):
        assert get_cnh_status("2023-05-15", TODAY).expiry_date is None


class TestDeterminism:
    """Same input and same day give identical output."""

    def test_idempotent(self):
        assert get_cnh_status("2024-08-01", TODAY) == get_cnh_status("2024-08-01", TODAY)

    def test_accepts_date_value(self):
        assert get_cnh_status(date(2024, 8, 1), TODAY) == get_cnh_status("2024-08-01", TODAY)
