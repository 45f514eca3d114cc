"""
SST archive store.

Holds the canonical per-date, per-location temperature archive and merges
imported tables, fetched daily means and edited rows into it.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from .core import constants
from .models import Location
from .processing.normalizer import build_alias_table, header_key, normalize_date, normalize_number

ArchiveData = Dict[str, Dict[str, Optional[float]]]


@dataclass
class MergeStats:
    """Counts from one merge."""

    rows_seen: int = 0
    rows_accepted: int = 0
    rows_rejected: int = 0  # unparseable date
    values_written: int = 0
    values_skipped: int = 0  # present but unparseable


class ArchiveStore:
    """
    In-memory mapping from canonical date to per-location SST.

    Dates are never removed. Merges overwrite single location values and
    leave every other stored value for the date untouched.
    """

    def __init__(
        self,
        locations: Iterable[Location],
        data: Optional[Mapping[str, Mapping[str, Optional[float]]]] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize archive store.

        Args:
            locations: Known monitoring sites; their keys are the archive columns
            data: Existing archive to start from (copied)
            logger: Logger instance
        """
        self.locations = list(locations)
        self.logger = logger or logging.getLogger(__name__)
        self.aliases = build_alias_table(self.locations)
        self.data: ArchiveData = {}
        if data:
            self.data = {day: dict(values) for day, values in data.items()}

    def __len__(self) -> int:
        return len(self.data)

    def __contains__(self, day: str) -> bool:
        return day in self.data

    @property
    def location_keys(self) -> List[str]:
        """Archive columns: configured locations first, then any extra keys seen."""
        keys = [location.key for location in self.locations]
        for values in self.data.values():
            for key in values:
                if key not in keys:
                    keys.append(key)
        return keys

    def dates(self) -> List[str]:
        """All archived dates, ascending."""
        return sorted(self.data)

    def get(self, day: str, location_key: str) -> Optional[float]:
        """Get a stored value, or None if unset."""
        return self.data.get(day, {}).get(location_key)

    def merge_rows(self, rows: Iterable[Mapping[str, Any]]) -> MergeStats:
        """
        Merge raw tabular rows into the archive.

        Each row is a header -> cell mapping. Date and location columns are
        found through the alias table, so ``Date``, ``NusaDua`` or
        ``nusa dua`` all work. Rows with an unusable date are dropped; cells
        that do not parse leave the stored value alone.

        Args:
            rows: Raw rows, e.g. from tabular.parse_table

        Returns:
            Merge counts
        """
        stats = MergeStats()

        for row in rows:
            stats.rows_seen += 1
            fields = self._resolve_fields(row)

            day = normalize_date(fields.pop(constants.DATE_COLUMN, [""])[0])
            if not day:
                stats.rows_rejected += 1
                self.logger.debug(f"Dropping row {stats.rows_seen}: unusable date")
                continue

            stats.rows_accepted += 1
            entry = self.data.setdefault(day, {})

            for location_key, cells in fields.items():
                value = self._first_number(cells)
                if value is None:
                    if any(str(cell).strip() for cell in cells if cell is not None):
                        stats.values_skipped += 1
                    continue
                entry[location_key] = value
                stats.values_written += 1

        self.logger.info(
            f"Merged {stats.rows_accepted}/{stats.rows_seen} rows "
            f"({stats.values_written} values written, {stats.rows_rejected} rows rejected, "
            f"{stats.values_skipped} values unparseable); archive has {len(self.data)} dates"
        )
        return stats

    def merge_daily(self, daily: Mapping[str, Mapping[str, Any]]) -> MergeStats:
        """
        Merge per-date readings, e.g. freshly aggregated daily means.

        Args:
            daily: {date: {location_key: value}}

        Returns:
            Merge counts
        """
        rows = []
        for day, values in daily.items():
            row = {constants.DATE_COLUMN: day}
            row.update(values)
            rows.append(row)
        return self.merge_rows(rows)

    def to_rows(self) -> List[Dict[str, Any]]:
        """
        Export the archive as rows sorted by date ascending.

        Every row carries every known location column; unset values are ''.

        Returns:
            List of {'date': ..., <location>: value-or-''} dictionaries
        """
        keys = self.location_keys
        rows = []
        for day in self.dates():
            values = self.data[day]
            row: Dict[str, Any] = {constants.DATE_COLUMN: day}
            for key in keys:
                value = values.get(key)
                row[key] = "" if value is None else value
            rows.append(row)
        return rows

    def series(self, dates: Sequence[str], location_key: str) -> List[Optional[float]]:
        """
        Get observations for a location aligned with a date sequence.

        Args:
            dates: Canonical dates (typically a gap-filled range)
            location_key: Location column

        Returns:
            Values aligned index-for-index with dates, None where missing
        """
        return [self.get(day, location_key) for day in dates]

    def _resolve_fields(self, row: Mapping[str, Any]) -> Dict[str, List[Any]]:
        """Group a row's cells by canonical field name, keeping column order."""
        fields: Dict[str, List[Any]] = {}
        for header, cell in row.items():
            if header is None:
                continue
            field = self.aliases.get(header_key(header))
            if field is None:
                continue
            fields.setdefault(field, []).append(cell)
        return fields

    @staticmethod
    def _first_number(cells: List[Any]) -> Optional[float]:
        for cell in cells:
            value = normalize_number(cell)
            if value is not None:
                return value
        return None


def merge_rows(
    archive: Mapping[str, Mapping[str, Optional[float]]],
    rows: Iterable[Mapping[str, Any]],
    locations: Optional[Iterable[Location]] = None
) -> ArchiveData:
    """
    Merge rows into a copy of an archive mapping.

    Args:
        archive: Existing archive ({} to start fresh); not modified
        rows: Raw tabular rows
        locations: Known sites (defaults to the built-in registry)

    Returns:
        New archive mapping
    """
    if locations is None:
        locations = default_locations()
    store = ArchiveStore(locations, data=archive)
    store.merge_rows(rows)
    return store.data


def default_locations() -> List[Location]:
    """Built-in monitoring sites."""
    return [
        Location(key=key, **info)
        for key, info in constants.DEFAULT_LOCATIONS.items()
    ]
