"""
Reading cleaning module.

Turns raw query rows into validated, chronologically sorted readings.
"""

import logging
import math
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from ..core import DateUtils
from ..models import Reading

RawRow = Union[Reading, Mapping[str, Any]]


class ReadingCleaner:
    """Drop malformed samples and sort the rest by timestamp."""

    def __init__(
        self,
        date_utils: Optional[DateUtils] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize reading cleaner.

        Args:
            date_utils: Date utilities used to parse row timestamps
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.date_utils = date_utils or DateUtils(logger=self.logger)

    def clean(self, rows: Iterable[RawRow]) -> List[Reading]:
        """
        Clean raw rows.

        Rows without a usable tag id or timestamp, or whose value is not a
        finite number, are dropped silently. The upstream order is not
        trusted, so the result is sorted by timestamp (then tag id and value,
        which makes the output independent of input order).

        Args:
            rows: Raw rows ({'tagId', 'timestamp', 'value'}) or Reading objects

        Returns:
            Sorted list of readings
        """
        readings: List[Reading] = []
        dropped = 0

        for row in rows or []:
            reading = self.to_reading(row)
            if reading is None:
                dropped += 1
                continue
            readings.append(reading)

        if dropped:
            self.logger.debug(f"Dropped {dropped} malformed readings")

        readings.sort(key=lambda r: (r.timestamp, r.tag_id, r.value))
        return readings

    def to_reading(self, row: RawRow) -> Optional[Reading]:
        """
        Convert one raw row to a Reading.

        Args:
            row: Raw row or Reading

        Returns:
            Reading, or None if the row is malformed
        """
        if isinstance(row, Reading):
            value = self.parse_value(row.value)
            tag_id = self.parse_tag_id(row.tag_id)
            if value is None or tag_id is None or not isinstance(row.timestamp, datetime):
                return None
            return Reading(tag_id=tag_id, timestamp=row.timestamp, value=value)

        if not isinstance(row, Mapping):
            return None

        tag_id = self.parse_tag_id(row.get("tagId"))
        value = self.parse_value(row.get("value"))
        raw_timestamp = row.get("timestamp")
        if tag_id is None or value is None or not raw_timestamp:
            return None

        try:
            timestamp = self.date_utils.parse_timestamp(raw_timestamp)
        except (TypeError, ValueError):
            return None

        return Reading(tag_id=tag_id, timestamp=timestamp, value=value)

    @staticmethod
    def parse_value(raw: Any) -> Optional[float]:
        """Finite float, or None for anything else (including booleans)."""
        if raw is None or isinstance(raw, bool):
            return None
        if isinstance(raw, str):
            raw = raw.strip()
            if not raw:
                return None
        try:
            value = float(raw)
        except (TypeError, ValueError, OverflowError):
            return None
        return value if math.isfinite(value) else None

    @staticmethod
    def parse_tag_id(raw: Any) -> Optional[int]:
        if raw is None or isinstance(raw, bool):
            return None
        if isinstance(raw, float) and not raw.is_integer():
            return None
        try:
            return int(raw)
        except (TypeError, ValueError, OverflowError):
            return None

    @staticmethod
    def group_by_tag(readings: Iterable[Reading]) -> Dict[int, List[Reading]]:
        """
        Partition readings by meter, keeping their order.

        Args:
            readings: Cleaned readings

        Returns:
            Dictionary mapping tag id to its readings
        """
        grouped: Dict[int, List[Reading]] = {}
        for reading in readings:
            grouped.setdefault(reading.tag_id, []).append(reading)
        return grouped
