"""Unit tests for the opening-hours oracle."""
from datetime import datetime

import pytest

from app.models import OpenStatus
from app.services import hours_oracle
from app.services.hours_oracle import (
    is_open_now,
    parse_time_range,
    to_monday_index,
    today_hours_text,
)

# 2024-01-01 is a Monday
MONDAY = datetime(2024, 1, 1, 12, 0)
SUNDAY = datetime(2024, 1, 7, 12, 0)


def week(monday_text: str, default: str = "定休日") -> list[str]:
    """Weekly table with Monday set and every other day closed."""
    return [monday_text] + [default] * 6


def at(hour: int, minute: int = 0) -> datetime:
    """A Monday at the given time."""
    return datetime(2024, 1, 1, hour, minute)


class TestWeekdayRemap:
    """Test Sunday=0 -> Monday=0 remapping."""

    def test_sunday_maps_to_last_index(self):
        assert to_monday_index(0) == 6

    def test_monday_maps_to_first_index(self):
        assert to_monday_index(1) == 0

    def test_saturday_maps_to_index_five(self):
        assert to_monday_index(6) == 5

    def test_sunday_datetime_reads_sunday_entry(self):
        """Sunday must read the 7th entry, not the first."""
        weekly = ["月曜日: 定休日"] + ["x"] * 5 + ["日曜日: 24時間営業"]
        assert today_hours_text(weekly, SUNDAY) == "日曜日: 24時間営業"
        assert is_open_now(weekly, SUNDAY) == OpenStatus.OPEN

    def test_monday_datetime_reads_monday_entry(self):
        weekly = ["月曜日: 定休日"] + ["x"] * 5 + ["日曜日: 24時間営業"]
        assert today_hours_text(weekly, MONDAY) == "月曜日: 定休日"
        assert is_open_now(weekly, MONDAY) == OpenStatus.CLOSED


class TestUnknownHours:
    """Missing data is unknown, never closed."""

    @pytest.mark.parametrize("weekly", [None, []])
    def test_absent_table_is_unknown(self, weekly):
        assert is_open_now(weekly, MONDAY) == OpenStatus.UNKNOWN

    def test_none_entry_for_today_is_unknown(self):
        weekly = [None, "火曜日: 定休日", "", "", "", "", ""]
        assert is_open_now(weekly, MONDAY) == OpenStatus.UNKNOWN

    def test_none_entry_on_another_day_is_ignored(self):
        weekly = ["月曜日: 7時00分～20時00分", None, None, "", "", "", ""]
        assert is_open_now(weekly, MONDAY) == OpenStatus.OPEN

    def test_missing_entry_for_today_is_unknown(self):
        """A short table without a Sunday entry."""
        assert is_open_now(["月曜日: 24時間営業"] * 3, SUNDAY) == OpenStatus.UNKNOWN

    def test_empty_entry_for_today_is_unknown(self):
        assert is_open_now(week(""), MONDAY) == OpenStatus.UNKNOWN

    def test_unparseable_text_is_unknown(self):
        assert is_open_now(week("月曜日: 要問い合わせ"), MONDAY) == OpenStatus.UNKNOWN

    def test_out_of_range_minutes_is_unknown(self):
        assert is_open_now(week("月曜日: 7時75分～20時00分"), MONDAY) == OpenStatus.UNKNOWN


class TestMarkers:
    """Test closed-day and 24-hour markers."""

    @pytest.mark.parametrize("hour", [0, 9, 12, 23])
    def test_closed_day_is_always_closed(self, hour):
        assert is_open_now(week("月曜日: 定休日"), at(hour)) == OpenStatus.CLOSED

    def test_holiday_marker_is_closed(self):
        assert is_open_now(week("月曜日: 休業日"), at(12)) == OpenStatus.CLOSED

    @pytest.mark.parametrize("text", ["月曜日: 24時間営業", "月曜日: 24 時間営業"])
    def test_24_hour_marker_spaced_and_unspaced(self, text):
        assert is_open_now(week(text), at(3)) == OpenStatus.OPEN


class TestStandardRange:
    """Test '7時00分～20時00分'."""

    TEXT = "月曜日: 7時00分～20時00分"

    @pytest.mark.parametrize(
        "hour,minute,expected",
        [
            (7, 0, OpenStatus.OPEN),
            (12, 30, OpenStatus.OPEN),
            (20, 0, OpenStatus.OPEN),
            (20, 1, OpenStatus.CLOSED),
            (6, 59, OpenStatus.CLOSED),
        ],
    )
    def test_inclusive_boundaries(self, hour, minute, expected):
        assert is_open_now(week(self.TEXT), at(hour, minute)) == expected

    @pytest.mark.parametrize("separator", ["～", "〜", "~", "-"])
    def test_separator_glyphs(self, separator):
        text = f"月曜日: 7時00分{separator}20時00分"
        assert is_open_now(week(text), at(12)) == OpenStatus.OPEN


class TestOvernightRange:
    """Test '18時00分〜2時00分' (closes after midnight)."""

    TEXT = "月曜日: 18時00分〜2時00分"

    @pytest.mark.parametrize(
        "hour,minute,expected",
        [
            (23, 0, OpenStatus.OPEN),
            (1, 30, OpenStatus.OPEN),
            (2, 0, OpenStatus.OPEN),
            (18, 0, OpenStatus.OPEN),
            (10, 0, OpenStatus.CLOSED),
            (3, 0, OpenStatus.CLOSED),
        ],
    )
    def test_both_sides_of_midnight(self, hour, minute, expected):
        assert is_open_now(week(self.TEXT), at(hour, minute)) == expected

    def test_closing_at_24_ends_the_same_day(self):
        """'24時00分' is the end of today, not midnight of the next."""
        weekly = week("月曜日: 11時00分～24時00分")
        assert is_open_now(weekly, at(0, 0)) == OpenStatus.CLOSED
        assert is_open_now(weekly, at(23, 59)) == OpenStatus.OPEN
        assert parse_time_range("11時00分～24時00分").crosses_midnight is False

    def test_late_night_notation_past_24(self):
        """'25時00分' closes at 1:00 the next day."""
        weekly = week("月曜日: 18時00分～25時00分")
        assert is_open_now(weekly, at(0, 30)) == OpenStatus.OPEN
        assert is_open_now(weekly, at(1, 30)) == OpenStatus.CLOSED


class TestSplitHoursLimitation:
    """Only the first range of a day is honoured."""

    TEXT = "月曜日: 11時00分～14時00分, 17時00分～22時00分"

    def test_first_range_open(self):
        assert is_open_now(week(self.TEXT), at(12)) == OpenStatus.OPEN

    def test_second_range_reported_closed(self):
        """Dinner session is not evaluated; known limitation."""
        assert is_open_now(week(self.TEXT), at(19)) == OpenStatus.CLOSED


class TestParseTimeRange:
    """Test range extraction."""

    def test_parses_minutes_of_day(self):
        time_range = parse_time_range("火曜日: 9時30分～21時15分")
        assert time_range.open_minute == 570
        assert time_range.close_minute == 1275
        assert time_range.crosses_midnight is False

    def test_overnight_range_crosses_midnight(self):
        time_range = parse_time_range("18時00分〜2時00分")
        assert time_range.crosses_midnight is True

    def test_no_match_returns_none(self):
        assert parse_time_range("営業時間不明") is None

    def test_never_raises_on_garbage(self):
        for text in ["", "時分～時分", "99時99分～99時99分", "🍜"]:
            hours_oracle.parse_time_range(text)
