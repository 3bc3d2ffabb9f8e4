"""
Delta extraction module.

Derives per-step usage and window totals from cumulative meter readings.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from .cleaner import RawRow, ReadingCleaner
from ..models import DeltaPoint, Reading, SeriesSummary, TagExtraction, Window


class DeltaExtractor:
    """Difference cumulative readings per meter, ignoring counter resets."""

    def __init__(
        self,
        cleaner: Optional[ReadingCleaner] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize delta extractor.

        Args:
            cleaner: Reading cleaner instance
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.cleaner = cleaner or ReadingCleaner(logger=self.logger)

    def extract(
        self,
        rows: Iterable[RawRow],
        window: Optional[Window] = None,
        tag_ids: Optional[Sequence[int]] = None
    ) -> Dict[int, TagExtraction]:
        """
        Extract deltas and summaries for every meter in a batch of rows.

        Args:
            rows: Raw rows for one or more meters, in any order
            window: If given, readings outside [start, end] are discarded
            tag_ids: Meters that were requested; those without readings get
                     an empty extraction

        Returns:
            Dictionary mapping tag id to its extraction
        """
        readings = self.cleaner.clean(rows)
        if window is not None:
            readings = [r for r in readings if window.contains(r.timestamp)]

        grouped = self.cleaner.group_by_tag(readings)
        for tag_id in tag_ids or ():
            grouped.setdefault(int(tag_id), [])

        results = {
            tag_id: self._extract_sorted(tag_id, tag_readings)
            for tag_id, tag_readings in sorted(grouped.items())
        }

        self.logger.debug(
            f"Extracted {len(results)} series from {len(readings)} readings"
        )
        return results

    def extract_tag(self, tag_id: int, rows: Iterable[RawRow]) -> TagExtraction:
        """
        Extract deltas and summary for a single meter.

        Rows belonging to other meters are ignored.

        Args:
            tag_id: Meter identifier
            rows: Raw rows or readings

        Returns:
            TagExtraction (summary is None with fewer than two readings)
        """
        readings = [r for r in self.cleaner.clean(rows) if r.tag_id == tag_id]
        return self._extract_sorted(tag_id, readings)

    def _extract_sorted(self, tag_id: int, readings: List[Reading]) -> TagExtraction:
        if len(readings) < 2:
            return TagExtraction(tag_id=tag_id, cleaned=tuple(readings))

        deltas = self.compute_deltas(readings)
        resets = len(readings) - 1 - len(deltas)
        if resets:
            self.logger.debug(f"Tag {tag_id}: skipped {resets} non-positive steps")

        return TagExtraction(
            tag_id=tag_id,
            cleaned=tuple(readings),
            deltas=tuple(deltas),
            summary=self.summarize(readings, deltas),
        )

    @staticmethod
    def compute_deltas(readings: Sequence[Reading]) -> List[DeltaPoint]:
        """
        Positive differences between adjacent readings.

        A negative step means the counter was reset or replaced, so it
        carries no consumption and is skipped rather than subtracted.

        Args:
            readings: Chronologically sorted readings of one meter

        Returns:
            DeltaPoints stamped with the later reading's timestamp
        """
        deltas: List[DeltaPoint] = []
        for previous, current in zip(readings, readings[1:]):
            delta = current.value - previous.value
            if delta > 0:
                deltas.append(DeltaPoint(timestamp=current.timestamp, delta=delta))
        return deltas

    @staticmethod
    def summarize(
        readings: Sequence[Reading],
        deltas: Sequence[DeltaPoint]
    ) -> Optional[SeriesSummary]:
        """
        Window totals for one meter.

        Args:
            readings: Sorted readings of one meter
            deltas: Its positive deltas

        Returns:
            SeriesSummary, or None with fewer than two readings
        """
        if len(readings) < 2:
            return None

        initial = readings[0].value
        final = readings[-1].value
        return SeriesSummary(
            initial_value=initial,
            final_value=final,
            naive_total=final - initial,
            reset_aware_total=sum(d.delta for d in deltas),
            point_count=len(readings),
        )

    def naive_delta(self, rows: Iterable[RawRow]) -> Optional[float]:
        """
        Last value minus first value of a cleaned series.

        Args:
            rows: Raw rows of a single meter

        Returns:
            Difference, or None with fewer than two readings
        """
        readings = self.cleaner.clean(rows)
        if len(readings) < 2:
            return None
        return readings[-1].value - readings[0].value
