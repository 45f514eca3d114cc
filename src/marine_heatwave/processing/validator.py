"""
Data validation module.

Checks the caller contract of the detector and the coverage of observation
series.
"""

import logging
from typing import Any, List, Optional, Sequence, Tuple

from ..core import constants
from .normalizer import normalize_date


class DataValidator:
    """Validate detection inputs."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize data validator.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def validate_series(
        self,
        dates: Sequence[str],
        sst_values: Sequence[Optional[float]],
        baselines: Sequence[Any]
    ) -> Tuple[bool, List[str]]:
        """
        Validate that detection inputs are aligned and ordered.

        Args:
            dates: Canonical dates, strictly ascending
            sst_values: Observations aligned with dates (None for missing)
            baselines: Baseline values aligned with dates

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        errors = []

        if not (len(dates) == len(sst_values) == len(baselines)):
            errors.append(
                f"Inputs must be index-aligned: {len(dates)} dates, "
                f"{len(sst_values)} SST values, {len(baselines)} baselines"
            )

        previous = None
        for index, day in enumerate(dates):
            if normalize_date(day) != day:
                errors.append(f"Date at index {index} is not canonical YYYY-MM-DD: {day!r}")
                break
            if previous is not None and day <= previous:
                errors.append(
                    f"Dates must be strictly ascending: {previous} followed by {day} at index {index}"
                )
                break
            previous = day

        is_valid = len(errors) == 0
        return is_valid, errors

    def check_coverage(
        self,
        sst_values: Sequence[Optional[float]],
        min_coverage: float = constants.MIN_DATA_COVERAGE
    ) -> float:
        """
        Check what fraction of a series has observations.

        Args:
            sst_values: Observation series (None for missing)
            min_coverage: Fraction below which a warning is logged

        Returns:
            Fraction of non-null values (0.0 for an empty series)
        """
        if not sst_values:
            return 0.0

        present = sum(1 for value in sst_values if value is not None)
        coverage = present / len(sst_values)

        if coverage < min_coverage:
            self.logger.warning(
                f"Low data coverage: {present}/{len(sst_values)} days "
                f"({coverage:.0%}, expected at least {min_coverage:.0%})"
            )

        return coverage
