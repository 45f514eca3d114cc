"""
Data writer module for exporting the archive and detected events.

Handles writing the canonical SST archive and heatwave event lists as CSV.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .archive import ArchiveStore
from .core import constants
from .models import DetectionResult
from .tabular import format_table

EVENT_COLUMNS = [
    "start",
    "end",
    "duration",
    "max_anomaly",
    "min_anomaly",
    "mean_anomaly",
    "cumulative_anomaly",
    "category",
    "category_label",
    "peak_date",
    "peak_sst",
]


class ArchiveWriter:
    """Write archive and detection results to CSV."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize archive writer.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def archive_to_csv(self, store: ArchiveStore) -> str:
        """
        Render the archive as CSV text.

        Header is ``date,<location1>,<location2>,...``, one row per date
        ascending, missing values empty.
        """
        columns = [constants.DATE_COLUMN] + store.location_keys
        return format_table(columns, store.to_rows())

    def events_to_rows(self, result: DetectionResult) -> List[Dict[str, Any]]:
        """Flatten detected events into export rows."""
        rows = []
        for event in result.events:
            rows.append({
                "start": event.start,
                "end": event.end,
                "duration": event.duration,
                "max_anomaly": round(event.max_anomaly, 3),
                "min_anomaly": round(event.min_anomaly, 3),
                "mean_anomaly": round(event.mean_anomaly, 3),
                "cumulative_anomaly": round(event.cumulative_anomaly, 3),
                "category": event.category,
                "category_label": event.category_label,
                "peak_date": event.peak_date,
                "peak_sst": event.peak_sst,
            })
        return rows

    def events_to_csv(self, result: DetectionResult) -> str:
        """Render detected events as CSV text."""
        return format_table(EVENT_COLUMNS, self.events_to_rows(result))

    def write_archive(self, store: ArchiveStore, path: Union[str, Path]) -> Path:
        """
        Write the archive to a CSV file.

        Args:
            store: Archive to export
            path: Output file path

        Returns:
            Path written
        """
        return self._write(path, self.archive_to_csv(store), f"{len(store)} archive rows")

    def write_events(self, result: DetectionResult, path: Union[str, Path]) -> Path:
        """
        Write detected events to a CSV file.

        Args:
            result: Detection result
            path: Output file path

        Returns:
            Path written
        """
        return self._write(path, self.events_to_csv(result), f"{len(result.events)} events")

    def _write(self, path: Union[str, Path], content: str, description: str) -> Path:
        output = Path(path)
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        self.logger.info(f"Wrote {description} to {output}")
        return output
