"""
Marine Heatwave Detection System

This package reconciles daily sea-surface temperature archives for coastal
sites, resolves day-of-year climatology and detects marine heatwave events.
"""

__version__ = "0.1.0"
__description__ = "Marine heatwave detection from daily SST archives"


def __getattr__(name):
    """Lazy import to avoid importing dependencies when not needed."""
    if name == "MarineHeatwaveApp":
        from .main import MarineHeatwaveApp
        return MarineHeatwaveApp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "MarineHeatwaveApp",
]
