"""
Date and timezone utilities.

Centralizes window presets and the timestamp formats the query service speaks.
Meters report naive local date-times, so every window produced here is naive
and expressed in the configured timezone.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Optional, Union
import pytz
from pytz.tzinfo import BaseTzInfo

from . import constants
from ..models.window import Window


class DateUtils:
    """Utilities for window presets and timestamp handling."""

    def __init__(
        self,
        timezone_str: str = constants.DEFAULT_TIMEZONE,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize date utilities.

        Args:
            timezone_str: Local timezone of the meters (e.g., 'Asia/Bangkok')
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.timezone_str = timezone_str
        self.tz = self.parse_timezone(timezone_str)

    @staticmethod
    def parse_timezone(timezone_str: str) -> BaseTzInfo:
        """
        Parse timezone string to pytz timezone object.

        Args:
            timezone_str: Timezone string (e.g., 'Europe/Berlin', 'UTC')

        Returns:
            pytz timezone object

        Raises:
            ValueError: If timezone is invalid
        """
        try:
            return pytz.timezone(timezone_str)
        except pytz.exceptions.UnknownTimeZoneError:
            raise ValueError(f"Invalid timezone: {timezone_str}")

    def now(self) -> datetime:
        """Current wall-clock time in the local timezone, without tzinfo."""
        return datetime.now(pytz.UTC).astimezone(self.tz).replace(tzinfo=None)

    def _reference_day(self, reference: Optional[datetime]) -> date:
        if reference is None:
            reference = self.now()
        elif reference.tzinfo is not None:
            reference = reference.astimezone(self.tz).replace(tzinfo=None)
        return reference.date()

    @staticmethod
    def _day_start(day: date) -> datetime:
        return datetime.combine(day, datetime.min.time())

    @staticmethod
    def _day_last_minute(day: date) -> datetime:
        # Picker values carry minute precision, so end-of-day is 23:59
        return datetime.combine(day, datetime.min.time()).replace(hour=23, minute=59)

    def preset_window(self, name: str, reference: Optional[datetime] = None) -> Window:
        """
        Build one of the named dashboard range presets.

        Args:
            name: One of 'today', 'yesterday', 'last7', 'thisWeek'
            reference: Reference time (defaults to now in the local timezone)

        Returns:
            Window for the preset

        Raises:
            ValueError: If the preset name is unknown or is 'custom'
        """
        day = self._reference_day(reference)

        if name == constants.PRESET_TODAY:
            window = Window(self._day_start(day), self._day_last_minute(day))
        elif name == constants.PRESET_YESTERDAY:
            previous = day - timedelta(days=1)
            window = Window(self._day_start(previous), self._day_last_minute(previous))
        elif name == constants.PRESET_LAST_7_DAYS:
            window = Window(
                self._day_start(day - timedelta(days=7)), self._day_last_minute(day)
            )
        elif name == constants.PRESET_THIS_WEEK:
            # Weeks start on Sunday
            week_start = day - timedelta(days=(day.weekday() + 1) % 7)
            window = Window(
                self._day_start(week_start),
                self._day_last_minute(week_start + timedelta(days=6))
            )
        elif name == constants.PRESET_CUSTOM:
            raise ValueError("Custom range requires explicit start and end; use custom_window()")
        else:
            raise ValueError(
                f"Unknown range preset: {name!r} (expected one of {', '.join(constants.PRESETS)})"
            )

        self.logger.debug(f"Preset {name}: {self.format_range_summary(window)}")
        return window

    def custom_window(self, start: str, end: str) -> Window:
        """
        Build a window from two date-time picker values.

        Args:
            start: Start value (e.g., '2024-05-01T08:00')
            end: End value

        Returns:
            Window (not validated; see WindowValidator)
        """
        return Window(self.parse_timestamp(start), self.parse_timestamp(end))

    def daily_energy_window(self, reference: Optional[datetime] = None) -> Window:
        """
        Get the window used for the previous day's energy summary.

        The end is one second past local midnight so the day-bucket query
        also returns the midnight sample that closes the day.

        Args:
            reference: Reference time (defaults to now in the local timezone)

        Returns:
            Window from yesterday 00:00:00 to today 00:00:01

        Example:
            On 2024-01-15 at 09:30 returns
            (2024-01-14 00:00:00, 2024-01-15 00:00:01)
        """
        day = self._reference_day(reference)
        start = self._day_start(day - timedelta(days=1))
        end = self._day_start(day) + timedelta(
            seconds=constants.DAILY_WINDOW_END_OFFSET_SECONDS
        )

        self.logger.info(
            f"Daily energy window in {self.timezone_str}: "
            f"{self.format_for_query(start)} to {self.format_for_query(end)}"
        )

        return Window(start, end)

    @staticmethod
    def format_for_query(dt: datetime) -> str:
        """
        Format a datetime the way the query service expects.

        Args:
            dt: Naive local datetime

        Returns:
            'YYYY-MM-DD HH:mm:ss.SSS' string (e.g., '2024-01-15 00:00:01.000')
        """
        return f"{dt.strftime(constants.QUERY_DATETIME_FORMAT)}.{dt.microsecond // 1000:03d}"

    @staticmethod
    def format_range_summary(window: Window) -> str:
        """Human-readable 'start → end' with minute precision."""
        fmt = constants.SUMMARY_DATETIME_FORMAT
        return f"{window.start.strftime(fmt)} → {window.end.strftime(fmt)}"

    def parse_timestamp(self, value: Union[str, datetime]) -> datetime:
        """
        Parse an ISO-like timestamp into a naive local datetime.

        Accepts 'T' or space separators and optional fractional seconds.
        Timestamps carrying an offset (or 'Z') are converted to local time.

        Args:
            value: Timestamp string or datetime

        Returns:
            Naive datetime in local time

        Raises:
            ValueError: If the value is empty or cannot be parsed
        """
        if isinstance(value, datetime):
            parsed = value
        else:
            candidate = str(value).strip()
            if not candidate:
                raise ValueError("Timestamp is empty")

            if candidate.endswith("Z"):
                candidate = candidate[:-1] + "+00:00"

            try:
                parsed = datetime.fromisoformat(candidate)
            except ValueError:
                parsed = self._parse_with_formats(candidate)

        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(self.tz).replace(tzinfo=None)

        return parsed

    @staticmethod
    def _parse_with_formats(candidate: str) -> datetime:
        formats = (
            "%Y-%m-%d %H:%M:%S.%f",
            "%Y-%m-%dT%H:%M:%S.%f",
            "%Y-%m-%d %H:%M:%S",
            "%Y-%m-%dT%H:%M:%S",
            "%Y-%m-%d %H:%M",
            "%Y-%m-%dT%H:%M",
        )
        for fmt in formats:
            try:
                return datetime.strptime(candidate, fmt)
            except ValueError:
                continue
        raise ValueError(f"Invalid timestamp format: {candidate!r}")
