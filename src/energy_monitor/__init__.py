"""
Energy Monitor

This package derives energy usage from cumulative meter readings returned by
a time-series query service, staying correct across counter resets.
"""

__version__ = "0.1.0"
__description__ = "Reset-aware usage from cumulative energy meter readings"


def __getattr__(name):
    """Lazy import to avoid importing dependencies when not needed."""
    if name == "EnergyMonitorApp":
        from .main import EnergyMonitorApp
        return EnergyMonitorApp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "EnergyMonitorApp",
]
