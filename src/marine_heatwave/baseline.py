"""
Baseline climatology index.

Maps calendar dates to day-of-year climatology (mean, 90th percentile and
optional sigma) per location.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from .core import constants
from .core.date_utils import DateLike, DateUtils
from .models import BaselineRow, BaselineValues, MISSING_BASELINE
from .processing.normalizer import header_key, normalize_number

_DAY_OF_YEAR_KEYS = {header_key(name) for name in constants.DAY_OF_YEAR_COLUMNS}
_GENERIC_KEYS = {
    header_key(constants.GENERIC_CLIM_COLUMN): "clim",
    header_key(constants.GENERIC_P90_COLUMN): "p90",
    header_key(constants.GENERIC_SIGMA_COLUMN): "sigma",
}


class BaselineIndex:
    """
    Day-of-year indexed baseline table.

    Rows are resolved once at load time into ``BaselineRow`` objects, so a
    lookup never has to branch on which column scheme the source used.
    """

    def __init__(
        self,
        rows: Iterable[BaselineRow] = (),
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize baseline index.

        Args:
            rows: Parsed baseline rows; the first row for a day-of-year wins
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self._rows: Dict[int, BaselineRow] = {}
        for row in rows:
            if row.day_of_year in self._rows:
                self.logger.warning(f"Duplicate baseline row for day {row.day_of_year}, keeping the first")
                continue
            self._rows[row.day_of_year] = row

        if len(self._rows) > constants.BASELINE_YEAR_LENGTH:
            self.logger.warning(
                f"Baseline table has {len(self._rows)} days; lookups assume a "
                f"{constants.BASELINE_YEAR_LENGTH}-day climatological year"
            )

    @classmethod
    def from_table(
        cls,
        records: Iterable[Mapping[str, Any]],
        logger: Optional[logging.Logger] = None
    ) -> "BaselineIndex":
        """
        Build an index from raw tabular records.

        Records need a ``day of year`` / ``day_of_year`` column and either
        generic ``climatology_mean``/``percentile_90``/``sigma`` columns or
        per-location ``<key>_clim``/``<key>_p90`` columns. Generic values
        win on any row where they are present. Records without a usable
        day-of-year are skipped.

        Args:
            records: Header -> cell mappings
            logger: Logger instance

        Returns:
            BaselineIndex
        """
        logger = logger or logging.getLogger(__name__)
        rows = []
        skipped = 0
        for record in records:
            row = cls._parse_record(record)
            if row is None:
                skipped += 1
                continue
            rows.append(row)

        if skipped:
            logger.debug(f"Skipped {skipped} baseline records without a usable day of year")
        logger.info(f"Loaded {len(rows)} baseline rows")
        return cls(rows, logger=logger)

    @staticmethod
    def _parse_record(record: Mapping[str, Any]) -> Optional[BaselineRow]:
        day_of_year = None
        generic: Dict[str, Optional[float]] = {}
        per_location: Dict[str, Dict[str, Optional[float]]] = {}

        for header, cell in record.items():
            if header is None:
                continue
            key = header_key(header)
            if key in _DAY_OF_YEAR_KEYS:
                number = normalize_number(cell)
                if number is not None and number.is_integer():
                    day_of_year = int(number)
            elif key in _GENERIC_KEYS:
                generic[_GENERIC_KEYS[key]] = normalize_number(cell)
            else:
                name = str(header).strip()
                for suffix, attr in ((constants.CLIM_SUFFIX, "clim"), (constants.P90_SUFFIX, "p90")):
                    if name.lower().endswith(suffix) and len(name) > len(suffix):
                        location_key = name[: -len(suffix)].lower()
                        per_location.setdefault(location_key, {})[attr] = normalize_number(cell)

        if day_of_year is None:
            return None

        generic_values = None
        if generic.get("clim") is not None or generic.get("p90") is not None:
            generic_values = BaselineValues(**generic)

        return BaselineRow(
            day_of_year=day_of_year,
            generic=generic_values,
            per_location={
                location_key: BaselineValues(**values)
                for location_key, values in per_location.items()
            },
        )

    def __len__(self) -> int:
        return len(self._rows)

    def row(self, day_of_year: int) -> Optional[BaselineRow]:
        """Get the raw row for a day-of-year, if present."""
        return self._rows.get(day_of_year)

    def resolve(self, day: DateLike, location_key: str) -> BaselineValues:
        """
        Resolve a calendar date to its baseline for a location.

        Args:
            day: Canonical date string or date
            location_key: Location key

        Returns:
            BaselineValues; the all-None sentinel when the day is not in the table

        Raises:
            ValueError: If the date is not canonical
        """
        row = self._rows.get(DateUtils.baseline_day_of_year(day))
        if row is None:
            return MISSING_BASELINE
        return row.values_for(location_key)

    def resolve_many(self, dates: Sequence[DateLike], location_key: str) -> List[BaselineValues]:
        """Resolve a date sequence, aligned index-for-index."""
        return [self.resolve(day, location_key) for day in dates]
