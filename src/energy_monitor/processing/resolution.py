"""
Resolution selection module.

Maps a requested window to the bucket size the query service aggregates to.
"""

import logging
from typing import Optional, Union

from ..core import constants
from ..models import ResolutionTier, Window

StepOverride = Optional[Union[str, ResolutionTier]]


class ResolutionSelector:
    """Choose a sampling tier from the window length."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def select(window: Window) -> ResolutionTier:
        """
        Pick the automatic tier for a window.

        Upper bounds are inclusive, so a window of exactly two hours still
        gets one-minute buckets.

        Args:
            window: Requested window (end > start)

        Returns:
            Resolution tier
        """
        duration = window.duration_seconds
        for max_seconds, bucket_seconds in constants.RESOLUTION_THRESHOLDS:
            if duration <= max_seconds:
                return ResolutionTier(bucket_seconds)
        return ResolutionTier(constants.FALLBACK_BUCKET_SECONDS)

    def resolve(self, window: Window, override: StepOverride = None) -> ResolutionTier:
        """
        Resolve the tier, honouring an explicit caller choice.

        Args:
            window: Requested window
            override: None or 'auto' for the automatic table, otherwise a
                      ResolutionTier or a time step such as '900,1'

        Returns:
            Resolution tier

        Raises:
            ValueError: If the override is not a supported tier
        """
        if isinstance(override, ResolutionTier):
            return override

        if override is not None and not isinstance(override, str):
            raise ValueError(f"Unsupported time step: {override!r}")

        if override is None or override.strip().lower() == constants.AUTO_STEP:
            tier = self.select(window)
            self.logger.debug(
                f"Auto resolution for {window.duration_seconds}s window -> {tier.time_step}"
            )
            return tier

        return ResolutionTier.from_time_step(override)


def select_resolution(window: Window) -> ResolutionTier:
    """Module-level shortcut for ResolutionSelector.select()."""
    return ResolutionSelector.select(window)
