"""
Meter reading data models.

Contains DTOs for raw readings and the values derived from them.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class Reading:
    """One cumulative meter sample."""

    tag_id: int
    timestamp: datetime
    value: float  # cumulative counter, meter unit (e.g. kWh)


@dataclass(frozen=True)
class DeltaPoint:
    """Positive usage between two adjacent readings, stamped with the later one."""

    timestamp: datetime
    delta: float


@dataclass(frozen=True)
class SeriesSummary:
    """Window-level totals for one meter."""

    initial_value: float
    final_value: float
    naive_total: float  # final - initial, wrong sign after a reset
    reset_aware_total: float  # sum of positive deltas
    point_count: int


@dataclass(frozen=True)
class TagExtraction:
    """Cleaned series, deltas and summary for one meter."""

    tag_id: int
    cleaned: Tuple[Reading, ...] = ()
    deltas: Tuple[DeltaPoint, ...] = ()
    summary: Optional[SeriesSummary] = None

    @property
    def total(self) -> Optional[float]:
        """Energy used in the window (reset-aware), None without enough data."""
        if self.summary is None:
            return None
        return self.summary.reset_aware_total

    @property
    def max_delta(self) -> float:
        return max((d.delta for d in self.deltas), default=0.0)
