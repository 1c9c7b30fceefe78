"""
Unit tests for expiry date helpers.
"""

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from core.domain.exceptions import InvalidExpiryDateError, InvalidInputError
from licenses.domain.expiry import (
    end_of_day,
    expiring_window,
    expiry_from_period,
    parse_date_value,
    parse_expiry_date,
    parse_period_days,
)

NEW_YORK = ZoneInfo("America/New_York")


class TestParseExpiryDate:
    """Tests for parse_expiry_date."""

    def test_date_only_becomes_end_of_day(self):
        """Test a date-only string resolves to 23:59:59 local time."""
        expiry = parse_expiry_date("2025-12-31", timezone.utc)

        assert expiry == datetime(2025, 12, 31, 23, 59, 59, tzinfo=timezone.utc)

    def test_local_time_zone_is_applied(self):
        """Test the end of day is taken in the configured zone."""
        expiry = parse_expiry_date("2025-07-01", NEW_YORK)

        assert expiry.astimezone(timezone.utc) == datetime(2025, 7, 2, 3, 59, 59, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_means_no_expiry(self, value):
        """Test blank input clears the expiry."""
        assert parse_expiry_date(value, timezone.utc) is None

    @pytest.mark.parametrize("value", ["31/12/2025", "2025-13-01", "2025-02-30", "tomorrow", "2025-1"])
    def test_unparseable(self, value):
        """Test unparseable dates are rejected."""
        with pytest.raises(InvalidExpiryDateError):
            parse_expiry_date(value, timezone.utc)

    def test_accepts_date_objects(self):
        """Test date and datetime inputs."""
        assert parse_date_value(date(2025, 1, 2)) == date(2025, 1, 2)
        assert parse_date_value(datetime(2025, 1, 2, 8, 30)) == date(2025, 1, 2)

    def test_error_names_the_field(self):
        """Test the error message names the offending field."""
        with pytest.raises(InvalidExpiryDateError) as exc_info:
            parse_date_value("soon", "startDate")

        assert "startDate" in exc_info.value.message


class TestPeriod:
    """Tests for license period helpers."""

    @pytest.mark.parametrize(
        "value,expected",
        [(30, 30), ("30", 30), (30.0, 30), (36500, 36500), (None, None), ("", None)],
    )
    def test_parse_period_days(self, value, expected):
        """Test valid period values."""
        assert parse_period_days(value) == expected

    @pytest.mark.parametrize(
        "value", [0, -5, "abc", True, 1.5j, 1.5, "1.5", 36501, "999999999", float("inf")]
    )
    def test_parse_period_days_invalid(self, value):
        """Test invalid period values."""
        with pytest.raises(InvalidInputError):
            parse_period_days(value)

    def test_expiry_from_period_defaults_to_today(self):
        """Test the period counts from today when no start date is given."""
        expiry = expiry_from_period(None, 30, date(2025, 6, 15), timezone.utc)

        assert expiry == datetime(2025, 7, 15, 23, 59, 59, tzinfo=timezone.utc)

    def test_expiry_from_period_with_start(self):
        """Test the period counts from the start date."""
        expiry = expiry_from_period(date(2025, 1, 1), 10, date(2025, 6, 15), timezone.utc)

        assert expiry == end_of_day(date(2025, 1, 11), timezone.utc)

    def test_expiry_from_period_beyond_calendar(self):
        """Test a period ending past year 9999 is invalid input."""
        with pytest.raises(InvalidInputError):
            expiry_from_period(date(9999, 12, 1), 365, date(2025, 6, 15), timezone.utc)


class TestExpiringWindow:
    """Tests for expiring_window."""

    def test_window_bounds(self):
        """Test the window runs from start of today to end of today + days."""
        now = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)
        start, end = expiring_window(now, 7, timezone.utc)

        assert start == datetime(2025, 6, 15, 0, 0, tzinfo=timezone.utc)
        assert end == datetime(2025, 6, 22, 23, 59, 59, tzinfo=timezone.utc)

    def test_window_uses_local_date(self):
        """Test today is the local date, not the UTC date."""
        now = datetime(2025, 6, 15, 2, 0, tzinfo=timezone.utc)
        start, _ = expiring_window(now, 7, NEW_YORK)

        assert start.date() == date(2025, 6, 14)
