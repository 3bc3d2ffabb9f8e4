"""
Window validation module.

Validates requested windows before any query is issued.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from ..models import Window


class WindowValidator:
    """Validate requested windows and meter lists."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize window validator.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def validate_window(self, window: Window) -> Tuple[bool, List[str]]:
        """
        Validate that a window has a positive length.

        Args:
            window: Requested window

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        errors = []

        if window.start is None or window.end is None:
            errors.append("Window start and end are required")
        elif window.end <= window.start:
            errors.append(
                f"Invalid window: end {window.end.isoformat()} must be after "
                f"start {window.start.isoformat()}"
            )

        is_valid = len(errors) == 0
        if not is_valid:
            self.logger.warning(f"Window rejected: {'; '.join(errors)}")
        return is_valid, errors

    def validate_tags(self, tag_ids: Sequence[int]) -> Tuple[bool, List[str]]:
        """
        Validate that at least one integer meter id was requested.

        Args:
            tag_ids: Requested meter ids

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        errors = []

        if not tag_ids:
            errors.append("At least one meter tag id is required")

        for tag_id in tag_ids or ():
            if isinstance(tag_id, bool) or not isinstance(tag_id, int):
                errors.append(f"Invalid tag id: {tag_id!r}")

        is_valid = len(errors) == 0
        return is_valid, errors
