"""
Energy usage service.

Ties window resolution, fetching and delta extraction together.
"""

import logging
from datetime import datetime
from typing import Dict, Optional, Sequence, TYPE_CHECKING

import requests  # type: ignore

from .data_fetcher import MeterDataFetcher
from ..core import DateUtils
from ..models import ResolutionTier, Snapshot, TagExtraction, Window
from ..processing import DataProcessor
from ..processing.resolution import StepOverride

if TYPE_CHECKING:
    from ..api import EmsQueryAPI


class EnergyService:
    """Derive per-meter usage for a window."""

    def __init__(
        self,
        api_client: "EmsQueryAPI",
        date_utils: Optional[DateUtils] = None,
        processor: Optional[DataProcessor] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize energy service.

        Args:
            api_client: API client instance
            date_utils: Date utilities for the local timezone
            processor: Data processor (resolution, extraction, validation)
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.date_utils = date_utils or DateUtils(logger=self.logger)
        self.processor = processor or DataProcessor(self.date_utils, self.logger)
        self.fetcher = MeterDataFetcher(api_client, self.processor.validator, self.logger)

    def usage(
        self,
        tag_ids: Sequence[int],
        window: Window,
        step: StepOverride = None
    ) -> Dict[int, TagExtraction]:
        """
        Fetch and extract usage for each meter.

        Args:
            tag_ids: Meter ids
            window: Requested window
            step: Optional resolution override ('auto', '900,1', or a tier)

        Returns:
            Dictionary mapping tag id to its extraction (every requested
            tag is present, possibly with an empty extraction)

        Raises:
            ValueError: If the window is invalid or the response is malformed
            requests.exceptions.RequestException: On upstream failure
        """
        tier = self._prepare(window, step)
        return self._usage_at(tag_ids, window, tier)

    def _prepare(self, window: Window, step: StepOverride) -> ResolutionTier:
        is_valid, errors = self.processor.validate_window(window)
        if not is_valid:
            raise ValueError("; ".join(errors))
        return self.processor.resolve_tier(window, step)

    def _usage_at(
        self,
        tag_ids: Sequence[int],
        window: Window,
        tier: ResolutionTier
    ) -> Dict[int, TagExtraction]:
        rows = self.fetcher.fetch(tag_ids, window, tier)
        return self.processor.extract(rows, tag_ids=tag_ids)

    def daily_energy(
        self,
        tag_ids: Sequence[int],
        reference: Optional[datetime] = None
    ) -> Dict[int, float]:
        """
        Energy used by each meter during the previous local day.

        Args:
            tag_ids: Meter ids
            reference: Reference time (defaults to now)

        Returns:
            Dictionary mapping tag id to its reset-aware total; meters with
            fewer than two readings are omitted
        """
        window = self.date_utils.daily_energy_window(reference)
        extractions = self.usage(tag_ids, window, step=ResolutionTier.DAY)

        totals = {
            tag_id: extraction.total
            for tag_id, extraction in extractions.items()
            if extraction.total is not None
        }

        missing = [t for t in tag_ids if t not in totals]
        if missing:
            self.logger.warning(f"No daily total for tags {missing}: insufficient readings")

        return totals

    def snapshot(
        self,
        tag_ids: Sequence[int],
        window: Window,
        step: StepOverride = None,
        sequence: int = 0
    ) -> Snapshot:
        """
        Run one usage cycle and capture the outcome as a Snapshot.

        Invalid windows and upstream failures are recorded in
        Snapshot.error instead of raising; extractions stay empty.

        Args:
            tag_ids: Meter ids
            window: Requested window
            step: Optional resolution override
            sequence: Cycle number

        Returns:
            Snapshot
        """
        tier: Optional[ResolutionTier] = None
        try:
            tier = self._prepare(window, step)
            extractions = self._usage_at(tag_ids, window, tier)
        except (requests.exceptions.RequestException, ValueError) as e:
            self.logger.error(f"Refresh {sequence} failed: {e}")
            return Snapshot(
                sequence=sequence,
                window=window,
                tier=tier,
                fetched_at=self.date_utils.now(),
                error=str(e) or e.__class__.__name__,
            )

        return Snapshot(
            sequence=sequence,
            window=window,
            tier=tier,
            fetched_at=self.date_utils.now(),
            extractions=extractions,
        )
