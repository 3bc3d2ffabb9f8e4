"""
Data fetching service for meter readings.

Fetches aggregated readings from the query service for processing.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, TYPE_CHECKING

from ..models import QueryRequest, ResolutionTier, Window
from ..processing import WindowValidator

if TYPE_CHECKING:
    from ..api import EmsQueryAPI


class MeterDataFetcher:
    """Fetch raw meter rows for a window."""

    def __init__(
        self,
        api_client: "EmsQueryAPI",
        validator: Optional[WindowValidator] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize data fetcher.

        Args:
            api_client: API client instance
            validator: Window validator
            logger: Logger instance
        """
        self.api_client = api_client
        self.logger = logger or logging.getLogger(__name__)
        self.validator = validator or WindowValidator(logger)

    def build_request(
        self,
        tag_ids: Sequence[int],
        window: Window,
        tier: ResolutionTier,
        sql_clause: str = ""
    ) -> QueryRequest:
        """
        Build a validated query request.

        Args:
            tag_ids: Meter ids
            window: Requested window
            tier: Resolution tier
            sql_clause: Optional SQL filter passed through to the service

        Returns:
            QueryRequest

        Raises:
            ValueError: If the window or meter list is invalid
        """
        is_valid, errors = self.validator.validate_window(window)
        if not is_valid:
            raise ValueError("; ".join(errors))

        is_valid, errors = self.validator.validate_tags(tag_ids)
        if not is_valid:
            raise ValueError("; ".join(errors))

        return QueryRequest(
            value_ids=tuple(tag_ids),
            window=window,
            tier=tier,
            sql_clause=sql_clause,
        )

    def fetch(
        self,
        tag_ids: Sequence[int],
        window: Window,
        tier: ResolutionTier,
        sql_clause: str = ""
    ) -> List[Dict[str, Any]]:
        """
        Fetch raw rows for the given meters.

        No request is sent when the window is invalid. Upstream failures
        are propagated unchanged so callers can tell them apart from an
        empty result.

        Args:
            tag_ids: Meter ids
            window: Requested window
            tier: Resolution tier
            sql_clause: Optional SQL filter

        Returns:
            List of raw rows

        Raises:
            ValueError: If the window is invalid or the response is malformed
            requests.exceptions.RequestException: On network or HTTP failure
        """
        request = self.build_request(tag_ids, window, tier, sql_clause)
        rows = self.api_client.query(request)
        self.logger.info(
            f"Fetched {len(rows)} rows for tags {list(request.value_ids)} at {tier.label}"
        )
        return rows
