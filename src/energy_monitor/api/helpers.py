"""
Helper functions for query service payloads.

Builds request bodies and splits response rows per meter.
"""

from typing import Any, Dict, List

from ..core import DateUtils
from ..models import QueryRequest


def build_query_payload(request: QueryRequest) -> Dict[str, Any]:
    """
    Build the JSON body for a query request.

    Expected payload format:
    {
        "valueIds": [13, 15],
        "valueNames": ["", ""],
        "timeBegin": "2024-01-14 00:00:00.000",
        "timeEnd": "2024-01-15 00:00:01.000",
        "timeStep": "86400,1",
        "sqlClause": ""
    }

    Args:
        request: Query request

    Returns:
        Payload dictionary
    """
    return {
        "valueIds": [int(v) for v in request.value_ids],
        "valueNames": list(request.names),
        "timeBegin": DateUtils.format_for_query(request.window.start),
        "timeEnd": DateUtils.format_for_query(request.window.end),
        "timeStep": request.tier.time_step,
        "sqlClause": request.sql_clause,
    }


def extract_rows(response: Any) -> List[Dict[str, Any]]:
    """
    Extract the row list from a query response.

    Args:
        response: Decoded JSON body

    Returns:
        List of row dictionaries ({'tagId', 'timestamp', 'value'})

    Raises:
        ValueError: If the body is not a list of rows
    """
    if response is None:
        return []

    if not isinstance(response, list):
        raise ValueError(
            f"Unexpected query response: expected a list of rows, got {type(response).__name__}"
        )

    return [row for row in response if isinstance(row, dict)]
