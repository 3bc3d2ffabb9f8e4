"""
Tests for date utilities.

Tests range presets, the daily-energy window and query timestamp formats.
"""

import pytest
import pytz
from datetime import datetime

from src.energy_monitor.core import DateUtils
from src.energy_monitor.models import Window


REFERENCE = datetime(2024, 1, 17, 9, 30, 12)  # a Wednesday


@pytest.mark.unit
class TestPresets:
    """Test cases for named range presets."""

    @pytest.fixture
    def date_utils(self):
        """Create date utilities in UTC."""
        return DateUtils("UTC")

    def test_today(self, date_utils):
        """Today runs from midnight to the last picker minute."""
        window = date_utils.preset_window("today", REFERENCE)
        assert window == Window(datetime(2024, 1, 17, 0, 0), datetime(2024, 1, 17, 23, 59))

    def test_yesterday(self, date_utils):
        """Yesterday covers the whole previous day."""
        window = date_utils.preset_window("yesterday", REFERENCE)
        assert window == Window(datetime(2024, 1, 16, 0, 0), datetime(2024, 1, 16, 23, 59))

    def test_last7(self, date_utils):
        """Last 7 days starts seven midnights back and ends today."""
        window = date_utils.preset_window("last7", REFERENCE)
        assert window == Window(datetime(2024, 1, 10, 0, 0), datetime(2024, 1, 17, 23, 59))

    def test_this_week_starts_sunday(self, date_utils):
        """Weeks run Sunday to Saturday."""
        window = date_utils.preset_window("thisWeek", REFERENCE)
        assert window == Window(datetime(2024, 1, 14, 0, 0), datetime(2024, 1, 20, 23, 59))

    def test_this_week_on_sunday(self, date_utils):
        """On a Sunday the week starts that same day."""
        window = date_utils.preset_window("thisWeek", datetime(2024, 1, 14, 12, 0))
        assert window.start == datetime(2024, 1, 14, 0, 0)

    def test_unknown_preset(self, date_utils):
        """Unknown names are rejected."""
        with pytest.raises(ValueError, match="Unknown range preset"):
            date_utils.preset_window("lastMonth", REFERENCE)

    def test_custom_requires_values(self, date_utils):
        """The custom preset needs explicit picker values."""
        with pytest.raises(ValueError, match="custom_window"):
            date_utils.preset_window("custom", REFERENCE)

    def test_custom_window(self, date_utils):
        """Picker values are parsed into a window."""
        window = date_utils.custom_window("2024-05-01T08:00", "2024-05-01T10:30")
        assert window == Window(datetime(2024, 5, 1, 8, 0), datetime(2024, 5, 1, 10, 30))


@pytest.mark.unit
class TestDailyEnergyWindow:
    """Test cases for the backend-aligned daily window."""

    def test_window_bounds(self):
        """Start is yesterday midnight, end is one second past today's midnight."""
        window = DateUtils("UTC").daily_energy_window(datetime(2024, 1, 15, 9, 30))

        assert window.start == datetime(2024, 1, 14, 0, 0, 0)
        assert window.end == datetime(2024, 1, 15, 0, 0, 1)

    def test_formatted_bounds(self):
        """The query strings carry millisecond precision."""
        window = DateUtils("UTC").daily_energy_window(datetime(2024, 3, 1, 0, 0, 5))

        assert DateUtils.format_for_query(window.start) == "2024-02-29 00:00:00.000"
        assert DateUtils.format_for_query(window.end) == "2024-03-01 00:00:01.000"

    def test_aware_reference_uses_local_day(self):
        """An aware reference is converted to the local timezone first."""
        date_utils = DateUtils("Asia/Bangkok")
        reference = pytz.UTC.localize(datetime(2024, 1, 14, 20, 0))  # 03:00 on the 15th in Bangkok

        window = date_utils.daily_energy_window(reference)

        assert window.start == datetime(2024, 1, 14, 0, 0)
        assert window.end == datetime(2024, 1, 15, 0, 0, 1)


@pytest.mark.unit
class TestFormattingAndParsing:
    """Test cases for timestamp formatting and parsing."""

    def test_format_for_query(self):
        """Milliseconds are truncated to three digits."""
        dt = datetime(2024, 1, 14, 6, 5, 3, 250999)
        assert DateUtils.format_for_query(dt) == "2024-01-14 06:05:03.250"

    def test_format_range_summary(self):
        """Summaries use minute precision."""
        window = Window(datetime(2024, 1, 14, 0, 0), datetime(2024, 1, 14, 23, 59, 59))
        assert DateUtils.format_range_summary(window) == "2024-01-14 00:00 → 2024-01-14 23:59"

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("2024-01-14T06:00:00", datetime(2024, 1, 14, 6, 0)),
            ("2024-01-14 06:00:00", datetime(2024, 1, 14, 6, 0)),
            ("2024-01-14 06:00:00.123", datetime(2024, 1, 14, 6, 0, 0, 123000)),
            ("2024-01-14 06:00:00.12", datetime(2024, 1, 14, 6, 0, 0, 120000)),
            ("2024-01-14T06:00", datetime(2024, 1, 14, 6, 0)),
        ],
    )
    def test_parse_naive(self, text, expected):
        """Naive ISO-like strings are taken as local time."""
        assert DateUtils("UTC").parse_timestamp(text) == expected

    def test_parse_offset_converts_to_local(self):
        """Offsets are converted into the configured timezone."""
        parsed = DateUtils("Asia/Bangkok").parse_timestamp("2024-01-14T00:00:00Z")
        assert parsed == datetime(2024, 1, 14, 7, 0)
        assert parsed.tzinfo is None

    @pytest.mark.parametrize("text", ["", "   ", "yesterday", "14/01/2024 06:00"])
    def test_parse_invalid(self, text):
        """Unparseable values raise ValueError."""
        with pytest.raises(ValueError):
            DateUtils("UTC").parse_timestamp(text)

    def test_invalid_timezone(self):
        """Unknown timezones are rejected."""
        with pytest.raises(ValueError, match="Invalid timezone"):
            DateUtils("Mars/Olympus")

    def test_now_is_naive(self):
        """now() returns local wall-clock time without tzinfo."""
        assert DateUtils("Asia/Bangkok").now().tzinfo is None
