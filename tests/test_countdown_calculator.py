# /tests/test_countdown_calculator.py
"""
Unit tests for the countdown calculator

Covers the days/hours/minutes/seconds decomposition, the strict expiry
boundary and parsing of caller-supplied dates.
"""

from datetime import datetime, timedelta

import pytest
import pytz

from src.components.countdown_calculator import (
    CountdownResult,
    compute_countdown,
    parse_target_date,
)

NOW = datetime(2025, 6, 1, 8, 30, 0, tzinfo=pytz.utc)


class TestComputeCountdown:
    """Test cases for compute_countdown"""

    def test_one_of_each_unit(self):
        """90061 seconds is 1 day, 1 hour, 1 minute and 1 second"""
        result = compute_countdown(NOW + timedelta(seconds=90061), NOW)

        assert result == CountdownResult(expired=False, days=1, hours=1, minutes=1, seconds=1)

    @pytest.mark.parametrize("offset_seconds", [1, 59, 60, 61, 3599, 3600, 86399, 86400, 90061, 10 * 86400 + 5,
                                                400 * 86400 + 23 * 3600 + 59 * 60 + 59])
    def test_decomposition_matches_total_seconds(self, offset_seconds):
        """Units recombine to the remaining whole seconds and stay within range"""
        result = compute_countdown(NOW + timedelta(seconds=offset_seconds), NOW)

        assert result.expired is False
        assert result.total_seconds == offset_seconds
        assert result.days * 86400 + result.hours * 3600 + result.minutes * 60 + result.seconds == offset_seconds
        assert 0 <= result.hours < 24
        assert 0 <= result.minutes < 60
        assert 0 <= result.seconds < 60
        assert result.days >= 0

    def test_sub_second_remainder_is_floored(self):
        result = compute_countdown(NOW + timedelta(seconds=61, milliseconds=999), NOW)

        assert (result.minutes, result.seconds) == (1, 1)

    def test_less_than_a_second_left_is_not_expired(self):
        result = compute_countdown(NOW + timedelta(milliseconds=400), NOW)

        assert result.expired is False
        assert result.total_seconds == 0

    def test_target_equal_to_now_is_expired(self):
        """Zero remaining time is expiry, not a 00:00:00:00 countdown"""
        result = compute_countdown(NOW, NOW)

        assert result.expired is True
        assert result.days is None
        assert result.total_seconds is None

    def test_past_target_is_expired(self):
        result = compute_countdown(NOW - timedelta(days=3), NOW)

        assert result.expired is True
        assert result.units() == []

    def test_offsets_in_different_timezones(self):
        eastern = pytz.timezone('US/Eastern')
        target = eastern.localize(datetime(2025, 6, 1, 5, 30, 10))  # 09:30:10 UTC

        result = compute_countdown(target, NOW)

        assert (result.days, result.hours, result.minutes, result.seconds) == (0, 1, 0, 10)

    def test_units_in_display_order(self):
        result = compute_countdown(NOW + timedelta(days=2, hours=3, minutes=4, seconds=5), NOW)

        assert result.units() == [(2, 'DAYS'), (3, 'HOURS'), (4, 'MINS'), (5, 'SECS')]


class TestParseTargetDate:
    """Test cases for parse_target_date"""

    def test_zulu_suffix(self):
        parsed = parse_target_date('2025-12-31T23:59:59Z')

        assert parsed == datetime(2025, 12, 31, 23, 59, 59, tzinfo=pytz.utc)

    def test_explicit_offset_is_kept(self):
        parsed = parse_target_date('2025-12-31T23:59:59+05:30')

        assert parsed.utcoffset() == timedelta(hours=5, minutes=30)

    def test_fractional_seconds(self):
        parsed = parse_target_date('2025-12-31T23:59:59.250Z')

        assert parsed.microsecond == 250000

    def test_naive_datetime_uses_default_timezone(self):
        eastern = pytz.timezone('US/Eastern')

        parsed = parse_target_date('2025-12-31T23:59:59', eastern)

        assert parsed.utcoffset() == timedelta(hours=-5)
        assert parsed.astimezone(pytz.utc) == datetime(2026, 1, 1, 4, 59, 59, tzinfo=pytz.utc)

    def test_naive_datetime_defaults_to_utc(self):
        parsed = parse_target_date('2025-12-31T23:59:59')

        assert parsed.utcoffset() == timedelta(0)

    def test_date_only_is_midnight_utc(self):
        """Date-only strings ignore the default timezone"""
        parsed = parse_target_date('2025-12-31', pytz.timezone('Asia/Tokyo'))

        assert parsed == datetime(2025, 12, 31, 0, 0, 0, tzinfo=pytz.utc)

    def test_surrounding_whitespace_is_ignored(self):
        assert parse_target_date(' 2025-12-31T00:00:00Z ') == datetime(2025, 12, 31, tzinfo=pytz.utc)

    @pytest.mark.parametrize("value", ["not-a-date", "2025-13-45", "", "tomorrow"])
    def test_invalid_dates_raise_value_error(self, value):
        with pytest.raises(ValueError, match="Invalid date"):
            parse_target_date(value)
