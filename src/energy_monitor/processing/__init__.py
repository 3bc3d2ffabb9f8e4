"""
Data processing module for the energy monitor.

Provides resolution selection, reading cleaning, delta extraction and
window validation.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .resolution import ResolutionSelector, select_resolution
from .cleaner import ReadingCleaner
from .deltas import DeltaExtractor
from .validator import WindowValidator
from ..core import DateUtils
from ..models import ResolutionTier, TagExtraction, Window


class DataProcessor:
    """
    Unified data processor combining resolution, extraction, and validation.

    This class provides a convenient interface to all processing operations.
    """

    def __init__(
        self,
        date_utils: Optional[DateUtils] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize data processor.

        Args:
            date_utils: Date utilities (timezone aware parsing)
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.resolution = ResolutionSelector(logger)
        self.cleaner = ReadingCleaner(date_utils, logger)
        self.extractor = DeltaExtractor(self.cleaner, logger)
        self.validator = WindowValidator(logger)

    def resolve_tier(self, window: Window, step=None) -> ResolutionTier:
        """Tier for the window, or the caller's explicit choice."""
        return self.resolution.resolve(window, step)

    def extract(
        self,
        rows: Iterable,
        window: Optional[Window] = None,
        tag_ids: Optional[Sequence[int]] = None
    ) -> Dict[int, TagExtraction]:
        """Clean, group and difference raw rows per meter."""
        return self.extractor.extract(rows, window=window, tag_ids=tag_ids)

    def validate_window(self, window: Window) -> Tuple[bool, List[str]]:
        """Validate a requested window."""
        return self.validator.validate_window(window)


__all__ = [
    "ResolutionSelector",
    "select_resolution",
    "ReadingCleaner",
    "DeltaExtractor",
    "WindowValidator",
    "DataProcessor",
]
