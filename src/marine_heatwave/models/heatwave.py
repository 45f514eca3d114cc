"""
Heatwave detection data models.

Contains DTOs for per-day classification and detected events.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..core.constants import CATEGORY_LABELS


@dataclass(frozen=True)
class DayClassification:
    """Classification of a single day inside a qualifying heatwave."""

    anomaly: float  # SST minus p90 (°C)
    category: int  # 0-4
    threshold: float  # p90 (°C)
    clim: Optional[float] = None  # Climatological mean (°C)

    @property
    def category_label(self) -> str:
        """Human-readable category name."""
        return CATEGORY_LABELS[self.category]


@dataclass(frozen=True)
class HeatwaveEvent:
    """A contiguous run of hot days meeting the minimum duration."""

    start: str
    end: str
    duration: int  # days
    max_anomaly: float  # °C
    min_anomaly: float  # °C
    mean_anomaly: float  # °C
    cumulative_anomaly: float  # °C·day
    category: int  # most severe day in the run
    peak_date: Optional[str] = None
    peak_sst: Optional[float] = None

    @property
    def category_label(self) -> str:
        """Human-readable category name."""
        return CATEGORY_LABELS[self.category]


@dataclass
class DetectionResult:
    """Output of one detection pass."""

    events: List[HeatwaveEvent] = field(default_factory=list)
    per_day: Dict[str, DayClassification] = field(default_factory=dict)
