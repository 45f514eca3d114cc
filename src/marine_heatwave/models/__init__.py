"""
Data models for marine heatwave detection.

Contains DTOs for locations, baseline climatology and heatwave events.
"""

from .location import Location
from .baseline import BaselineValues, BaselineRow, MISSING_BASELINE
from .heatwave import DayClassification, HeatwaveEvent, DetectionResult

__all__ = [
    "Location",
    "BaselineValues",
    "BaselineRow",
    "MISSING_BASELINE",
    "DayClassification",
    "HeatwaveEvent",
    "DetectionResult",
]
