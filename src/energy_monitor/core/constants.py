"""
Application-wide constants for the energy monitor.

This module defines default values and constants used throughout the application.
"""

# Resolution tiers (bucket size in seconds)
MINUTE_SECONDS = 60
QUARTER_HOUR_SECONDS = 900
HOUR_SECONDS = 3600
DAY_SECONDS = 86400

# Automatic resolution table: (max window duration in seconds, bucket seconds)
# Upper bounds are inclusive; anything longer than the last bound uses days.
RESOLUTION_THRESHOLDS = (
    (2 * HOUR_SECONDS, MINUTE_SECONDS),         # <= 2 hours -> 1 minute
    (12 * HOUR_SECONDS, QUARTER_HOUR_SECONDS),  # <= 12 hours -> 15 minutes
    (2 * DAY_SECONDS, HOUR_SECONDS),            # <= 2 days -> 1 hour
    (30 * DAY_SECONDS, DAY_SECONDS),            # <= 30 days -> 1 day
)
FALLBACK_BUCKET_SECONDS = DAY_SECONDS

# Resolution override keyword meaning "use the automatic table"
AUTO_STEP = "auto"

# Query service timestamp format: "YYYY-MM-DD HH:mm:ss.SSS" (local time)
QUERY_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"

# Range summary format used by dashboards
SUMMARY_DATETIME_FORMAT = "%Y-%m-%d %H:%M"

# Range presets
PRESET_TODAY = "today"
PRESET_YESTERDAY = "yesterday"
PRESET_LAST_7_DAYS = "last7"
PRESET_THIS_WEEK = "thisWeek"
PRESET_CUSTOM = "custom"
PRESETS = (PRESET_TODAY, PRESET_YESTERDAY, PRESET_LAST_7_DAYS, PRESET_THIS_WEEK)

# The daily-energy window ends this many seconds past midnight so the
# bucket-aligned query returns the closing midnight sample.
DAILY_WINDOW_END_OFFSET_SECONDS = 1

# Query endpoint defaults
QUERY_ENDPOINT = "/query"

# Client defaults
DEFAULT_TIMEOUT = 30
DEFAULT_MAX_RETRIES = 0  # failed fetches are not retried
DEFAULT_POLL_INTERVAL = 1.0  # seconds
DEFAULT_TIMEZONE = "UTC"

# Energy unit shown next to totals
ENERGY_UNIT = "kWh"
