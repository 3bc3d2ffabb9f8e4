"""
API layer for the EMS time-series query service.

Provides a low-level HTTP client and the query operation.
"""

import logging
from typing import Optional

from .client import APIClient
from .query import QueryAPI
from . import helpers
from ..core import constants


class EmsQueryAPI(APIClient, QueryAPI):
    """
    Unified API client for the query service.

    Combines the HTTP session with the query operation.
    """

    def __init__(
        self,
        base_url: str,
        timeout: int = constants.DEFAULT_TIMEOUT,
        max_retries: int = constants.DEFAULT_MAX_RETRIES,
        verify_ssl: bool = True,
        logger: Optional[logging.Logger] = None
    ):
        super().__init__(
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
            verify_ssl=verify_ssl,
            logger=logger
        )


__all__ = [
    "APIClient",
    "QueryAPI",
    "EmsQueryAPI",
    "helpers",
]
