"""
Data aggregation module.

Calculates daily mean sea-surface temperatures from hourly marine API data.
"""

import logging
import statistics
from typing import Dict, Any, List, Optional, Sequence

from ..core.date_utils import DateUtils
from .normalizer import normalize_date, normalize_number


class DataAggregator:
    """Calculate daily aggregates from hourly SST readings."""

    def __init__(
        self,
        timezone: Optional[str] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize data aggregator.

        Args:
            timezone: Local timezone used to bucket offset-aware timestamps
            logger: Logger instance
        """
        self.timezone = timezone
        self.logger = logger or logging.getLogger(__name__)
        self.date_utils = DateUtils(self.logger)

    def daily_means(
        self,
        times: Sequence[str],
        temperatures: Sequence[Any]
    ) -> Dict[str, float]:
        """
        Average hourly readings into one value per local day.

        Null or unparseable readings are skipped; days without any valid
        reading are left out of the result.

        Args:
            times: Hourly ISO timestamps
            temperatures: SST readings aligned with times

        Returns:
            Dictionary mapping canonical date to mean SST (°C)

        Raises:
            ValueError: If times and temperatures differ in length
        """
        if len(times) != len(temperatures):
            raise ValueError(
                f"times ({len(times)}) and temperatures ({len(temperatures)}) must be the same length"
            )

        by_date: Dict[str, List[float]] = {}
        for timestamp, raw in zip(times, temperatures):
            day = normalize_date(self.date_utils.local_date(timestamp, self.timezone))
            if not day:
                self.logger.debug(f"Skipping reading with unusable timestamp {timestamp!r}")
                continue
            value = normalize_number(raw)
            if value is None:
                continue
            by_date.setdefault(day, []).append(value)

        means = {day: statistics.mean(values) for day, values in by_date.items()}
        self.logger.debug(f"Aggregated {len(times)} hourly readings into {len(means)} days")
        return means

    def from_marine_response(self, payload: Dict[str, Any]) -> Dict[str, float]:
        """
        Calculate daily means from a marine API response.

        Args:
            payload: Decoded JSON with ``hourly.time`` and
                     ``hourly.sea_surface_temperature`` arrays

        Returns:
            Dictionary mapping canonical date to mean SST (°C)
        """
        hourly = payload.get("hourly") or {}
        times = hourly.get("time") or []
        temperatures = hourly.get("sea_surface_temperature") or []

        if not times:
            self.logger.warning("Marine response contains no hourly timestamps")
            return {}

        if len(times) != len(temperatures):
            self.logger.warning(
                f"Marine response has {len(times)} timestamps but {len(temperatures)} readings, "
                "ignoring the unmatched tail"
            )
            size = min(len(times), len(temperatures))
            times, temperatures = times[:size], temperatures[:size]

        return self.daily_means(times, temperatures)

    def combine_locations(
        self,
        per_location: Dict[str, Dict[str, float]]
    ) -> Dict[str, Dict[str, float]]:
        """
        Pivot per-location daily means into per-date readings.

        Args:
            per_location: {location_key: {date: value}}

        Returns:
            {date: {location_key: value}}, ready for ArchiveStore.merge_daily
        """
        combined: Dict[str, Dict[str, float]] = {}
        for location_key, daily in per_location.items():
            for day, value in daily.items():
                combined.setdefault(day, {})[location_key] = value
        return combined
