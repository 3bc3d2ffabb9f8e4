"""
Data models for the energy monitor.

Contains DTOs for readings, windows, query requests and snapshots.
"""

from .reading import Reading, DeltaPoint, SeriesSummary, TagExtraction
from .window import ResolutionTier, Window
from .query import QueryRequest
from .snapshot import Snapshot

__all__ = [
    "Reading",
    "DeltaPoint",
    "SeriesSummary",
    "TagExtraction",
    "ResolutionTier",
    "Window",
    "QueryRequest",
    "Snapshot",
]
