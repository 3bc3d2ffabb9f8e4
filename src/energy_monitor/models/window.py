"""
Time window and resolution models.

Contains DTOs describing the requested window and the sampling tier.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class ResolutionTier(Enum):
    """Closed set of bucket sizes the query service aggregates to."""

    MINUTE = 60
    QUARTER_HOUR = 900
    HOUR = 3600
    DAY = 86400

    @property
    def bucket_seconds(self) -> int:
        return self.value

    @property
    def aggregation_flag(self) -> int:
        return 1

    @property
    def time_step(self) -> str:
        """Wire form of the tier, e.g. '900,1'."""
        return f"{self.bucket_seconds},{self.aggregation_flag}"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def from_time_step(cls, time_step: str) -> "ResolutionTier":
        """
        Parse a '<seconds>,1' time step into a tier.

        Args:
            time_step: Time step string

        Returns:
            Matching tier

        Raises:
            ValueError: If the time step is not one of the supported tiers
        """
        for tier in cls:
            if tier.time_step == time_step.strip():
                return tier
        supported = ", ".join(t.time_step for t in cls)
        raise ValueError(f"Unsupported time step: {time_step!r} (expected one of {supported})")


_LABELS = {
    ResolutionTier.MINUTE: "1 Minute",
    ResolutionTier.QUARTER_HOUR: "15 Minutes",
    ResolutionTier.HOUR: "1 Hour",
    ResolutionTier.DAY: "1 Day",
}


@dataclass(frozen=True)
class Window:
    """Requested [start, end) window in naive local time."""

    start: datetime
    end: datetime

    @property
    def duration_seconds(self) -> int:
        """Whole seconds between start and end (negative when inverted)."""
        return int((self.end - self.start).total_seconds())

    def contains(self, timestamp: datetime) -> bool:
        """Inclusive on both ends so the closing bucket sample is kept."""
        return self.start <= timestamp <= self.end
