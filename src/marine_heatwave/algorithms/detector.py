"""
Marine heatwave event detection.

Scans an ordered, gap-filled daily series against its baseline and segments
it into heatwave events.
"""

import logging
import math
import statistics
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence, Union

from ..core import constants
from ..core.date_utils import DateLike, DateUtils
from ..models import BaselineValues, DayClassification, DetectionResult, HeatwaveEvent
from ..processing.validator import DataValidator
from .category import categorize

BaselineLike = Union[BaselineValues, Mapping[str, Any]]


def _is_finite(value: Optional[float]) -> bool:
    return value is not None and math.isfinite(value)


@dataclass
class _Run:
    """Consecutive hot days accumulated while in the in-run state."""

    dates: List[str] = field(default_factory=list)
    sst: List[float] = field(default_factory=list)
    days: List[DayClassification] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.dates)


class HeatwaveDetector:
    """
    Detect marine heatwaves in a daily SST series.

    A day is eligible when it has both an observation and a p90 threshold.
    Eligible days above the threshold extend the current run; any other day
    closes it. Closed runs shorter than ``min_duration`` are discarded.
    """

    def __init__(
        self,
        min_duration: int = constants.MIN_EVENT_DURATION,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize heatwave detector.

        Args:
            min_duration: Minimum run length in days for an event
            logger: Logger instance
        """
        if min_duration < 1:
            raise ValueError(f"min_duration must be at least 1, got {min_duration}")
        self.min_duration = min_duration
        self.logger = logger or logging.getLogger(__name__)
        self.validator = DataValidator(self.logger)

    def detect(
        self,
        dates: Sequence[str],
        sst_values: Sequence[Optional[float]],
        baselines: Sequence[BaselineLike]
    ) -> DetectionResult:
        """
        Segment a series into heatwave events.

        Args:
            dates: Canonical dates, strictly ascending and gap-filled
            sst_values: Observations aligned with dates (None for missing)
            baselines: Baseline values (or clim/p90 mappings) aligned with dates

        Returns:
            DetectionResult with events and per-day classification of every
            day that belongs to an event

        Raises:
            ValueError: If the inputs are misaligned or the dates are not
                        canonical and strictly ascending
        """
        is_valid, errors = self.validator.validate_series(dates, sst_values, baselines)
        if not is_valid:
            raise ValueError("; ".join(errors))

        result = DetectionResult()
        run = _Run()

        for day, sst, raw_baseline in zip(dates, sst_values, baselines):
            baseline = self._as_baseline(raw_baseline)

            if not _is_finite(sst) or not _is_finite(baseline.p90):
                self._close_run(run, result)
                run = _Run()
                continue

            anomaly = sst - baseline.p90
            if not anomaly > 0:
                self._close_run(run, result)
                run = _Run()
                continue

            run.dates.append(day)
            run.sst.append(sst)
            run.days.append(DayClassification(
                anomaly=anomaly,
                category=categorize(sst, baseline.p90, baseline.clim),
                threshold=baseline.p90,
                clim=baseline.clim,
            ))

        self._close_run(run, result)

        self.logger.info(
            f"Detected {len(result.events)} heatwave events over {len(dates)} days "
            f"({len(result.per_day)} heatwave days)"
        )
        return result

    def detect_range(
        self,
        store,
        index,
        start: DateLike,
        end: DateLike,
        location_key: str
    ) -> DetectionResult:
        """
        Detect heatwaves for a location over an inclusive date range.

        Builds the gap-filled date range, pulls aligned observations from
        the archive and baselines from the index, then runs ``detect``.

        Args:
            store: ArchiveStore with observations
            index: BaselineIndex with climatology
            start: First date of the range
            end: Last date of the range
            location_key: Location to analyse

        Returns:
            DetectionResult
        """
        dates = DateUtils.date_range(start, end)
        sst_values = store.series(dates, location_key)
        baselines = index.resolve_many(dates, location_key)

        self.validator.check_coverage(sst_values)
        self.logger.debug(
            f"Detection range {dates[0]}..{dates[-1]} for {location_key}: "
            f"{sum(1 for v in sst_values if v is not None)}/{len(dates)} days with data"
        )
        return self.detect(dates, sst_values, baselines)

    def _close_run(self, run: _Run, result: DetectionResult) -> None:
        """Leave the in-run state, keeping the run only if it is long enough."""
        if not run:
            return
        if len(run) < self.min_duration:
            self.logger.debug(
                f"Discarding {len(run)}-day excursion starting {run.dates[0]} "
                f"(minimum {self.min_duration} days)"
            )
            return

        anomalies = [day.anomaly for day in run.days]
        peak_index = max(range(len(run)), key=lambda i: run.sst[i])

        event = HeatwaveEvent(
            start=run.dates[0],
            end=run.dates[-1],
            duration=len(run),
            max_anomaly=max(anomalies),
            min_anomaly=min(anomalies),
            mean_anomaly=statistics.mean(anomalies),
            cumulative_anomaly=sum(anomalies),
            category=max(day.category for day in run.days),
            peak_date=run.dates[peak_index],
            peak_sst=run.sst[peak_index],
        )
        result.events.append(event)
        result.per_day.update(zip(run.dates, run.days))

        self.logger.debug(
            f"Heatwave {event.start}..{event.end} ({event.duration} days, {event.category_label})"
        )

    @staticmethod
    def _as_baseline(value: BaselineLike) -> BaselineValues:
        if isinstance(value, BaselineValues):
            return value
        if value is None:
            return BaselineValues()
        return BaselineValues(
            clim=value.get("clim"),
            p90=value.get("p90"),
            sigma=value.get("sigma"),
        )
