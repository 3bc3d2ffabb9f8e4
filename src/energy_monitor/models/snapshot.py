"""
Snapshot model published by the poller.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional

from .reading import TagExtraction
from .window import ResolutionTier, Window


@dataclass(frozen=True)
class Snapshot:
    """Immutable result of one refresh cycle."""

    sequence: int
    window: Window
    tier: Optional[ResolutionTier]
    fetched_at: datetime
    extractions: Dict[int, TagExtraction] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def total_for(self, tag_id: int) -> Optional[float]:
        extraction = self.extractions.get(tag_id)
        return extraction.total if extraction else None
