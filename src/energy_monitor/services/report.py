"""
Pure render helpers.

Turn extractions and snapshots into display values without mutating them.
"""

import math
from typing import Any, Dict, List, Optional

from ..core import constants
from ..models import Snapshot, TagExtraction

PLACEHOLDER = "—"


def format_number(value: Optional[float], digits: int = 3) -> str:
    """Format a number with up to `digits` decimals and thousands separators."""
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return PLACEHOLDER
    text = f"{value:,.{digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_kwh(value: Optional[float]) -> str:
    """Format an energy figure with one decimal, e.g. '1,234.5 kWh'."""
    if value is None:
        return PLACEHOLDER
    return f"{value:,.1f} {constants.ENERGY_UNIT}"


def summarize_extraction(extraction: TagExtraction) -> Dict[str, Any]:
    """Display fields for one meter."""
    summary = extraction.summary
    return {
        "tag_id": extraction.tag_id,
        "points": len(extraction.cleaned),
        "steps": len(extraction.deltas),
        "total": format_kwh(extraction.total),
        "naive_total": format_kwh(summary.naive_total if summary else None),
        "max_delta": format_number(extraction.max_delta if extraction.deltas else None),
    }


def render_snapshot(snapshot: Snapshot) -> List[str]:
    """Text lines describing a snapshot."""
    if not snapshot.ok:
        return [f"[{snapshot.sequence}] Error: {snapshot.error}"]

    step = snapshot.tier.label if snapshot.tier else PLACEHOLDER
    lines = [f"[{snapshot.sequence}] Resolution {step}"]
    for tag_id in sorted(snapshot.extractions):
        fields = summarize_extraction(snapshot.extractions[tag_id])
        lines.append(
            f"  tag {fields['tag_id']}: {fields['total']} "
            f"({fields['points']} points, max Δ {fields['max_delta']})"
        )
    return lines
