"""
Core utilities for marine heatwave detection.

Provides configuration management, constants and calendar helpers.
"""

from . import constants
from .date_utils import DateUtils
from .config import Config

__all__ = [
    "Config",
    "constants",
    "DateUtils",
]
