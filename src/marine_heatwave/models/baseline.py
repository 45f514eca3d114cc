"""
Baseline climatology data models.

Contains DTOs for day-of-year climatology rows.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass(frozen=True)
class BaselineValues:
    """Climatology for one day-of-year at one location."""

    clim: Optional[float] = None  # Climatological mean (°C)
    p90: Optional[float] = None  # 90th percentile threshold (°C)
    sigma: Optional[float] = None  # Standard deviation (°C)

    @property
    def is_empty(self) -> bool:
        """True when no threshold is available for classification."""
        return self.p90 is None

    @property
    def delta(self) -> Optional[float]:
        """Gap between threshold and climatology, the unit of severity."""
        if self.clim is None or self.p90 is None:
            return None
        return self.p90 - self.clim


MISSING_BASELINE = BaselineValues()


@dataclass(frozen=True)
class BaselineRow:
    """
    One day-of-year of the baseline table.

    Location-agnostic values (``generic``) apply to every location when
    set; otherwise ``per_location`` is used, keyed by lower-case location key.
    """

    day_of_year: int
    generic: Optional[BaselineValues] = None
    per_location: Dict[str, BaselineValues] = field(default_factory=dict)

    def values_for(self, location_key: str) -> BaselineValues:
        """Get the baseline values that apply to a location."""
        if self.generic is not None:
            return self.generic
        return self.per_location.get(location_key.lower(), MISSING_BASELINE)
