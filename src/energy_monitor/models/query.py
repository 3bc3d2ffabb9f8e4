"""
Query service request model.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .window import ResolutionTier, Window


@dataclass(frozen=True)
class QueryRequest:
    """Request for aggregated readings of one or more meters."""

    value_ids: Tuple[int, ...]
    window: Window
    tier: ResolutionTier
    value_names: Optional[Tuple[str, ...]] = None
    sql_clause: str = ""

    @property
    def names(self) -> Tuple[str, ...]:
        """Value names, one empty string per id unless given."""
        if self.value_names is None:
            return tuple("" for _ in self.value_ids)
        return self.value_names
