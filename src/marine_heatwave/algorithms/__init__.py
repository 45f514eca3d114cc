"""
Detection algorithms for marine heatwaves.

Provides severity categorization and the event detector.
"""

from .category import categorize, MAX_CATEGORY
from .detector import HeatwaveDetector

__all__ = [
    "categorize",
    "MAX_CATEGORY",
    "HeatwaveDetector",
]
