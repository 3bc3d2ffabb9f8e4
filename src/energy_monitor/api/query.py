"""
Query operations for the EMS time-series service.

Handles retrieval of aggregated meter readings.
"""

import logging
from typing import List, Dict, Any, Optional

from .helpers import build_query_payload, extract_rows
from ..core import constants
from ..models import QueryRequest


class QueryAPI:
    """Time-series query operations."""

    # Provided by the APIClient base class (logger, post)
    logger: logging.Logger

    def query(
        self,
        request: QueryRequest,
        endpoint: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """
        Fetch aggregated readings.

        Args:
            request: Meters, window and resolution to query
            endpoint: Override for the query endpoint

        Returns:
            List of rows with 'tagId', 'timestamp' and 'value'

        Raises:
            requests.exceptions.RequestException: On network or HTTP failure
            ValueError: If the response is not a list of rows
        """
        payload = build_query_payload(request)
        self.logger.debug(
            f"Querying {len(request.value_ids)} meters "
            f"{payload['timeBegin']} -> {payload['timeEnd']} step {payload['timeStep']}"
        )

        result = self.post(  # type: ignore[attr-defined]
            endpoint or constants.QUERY_ENDPOINT, data=payload
        )
        rows = extract_rows(result)

        self.logger.debug(f"Retrieved {len(rows)} rows")
        return rows
