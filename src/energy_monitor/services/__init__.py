"""
Service layer for the energy monitor.

Orchestrates fetching, extraction and periodic refresh.
"""

from .data_fetcher import MeterDataFetcher
from .energy_service import EnergyService
from .poller import MeterPoller
from . import report

__all__ = [
    "MeterDataFetcher",
    "EnergyService",
    "MeterPoller",
    "report",
]
