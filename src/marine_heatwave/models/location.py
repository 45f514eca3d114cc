"""
Location data models.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Location:
    """Coastal monitoring site."""

    key: str
    name: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
