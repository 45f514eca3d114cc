"""
Main entry point for marine heatwave detection.

Orchestrates loading the baseline and archive, merging new observations,
exporting the archive and detecting heatwaves for a site.
"""

import json
import sys
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional

from .archive import ArchiveStore, MergeStats
from .baseline import BaselineIndex
from .core import Config
from .logger import LoggerContext, setup_logger, site_logger
from .models import DetectionResult
from .processing import DataAggregator
from .algorithms import HeatwaveDetector
from .tabular import read_table
from .writer import ArchiveWriter


class MarineHeatwaveApp:
    """Main application for marine heatwave detection."""

    def __init__(self, config_file: Optional[str] = None, log_level: str = "INFO"):
        """
        Initialize application.

        Args:
            config_file: Path to configuration file
            log_level: Logging level
        """
        self.config = Config(config_file)

        self.logger = setup_logger(log_level=log_level)
        self.logger.info("=" * 60)
        self.logger.info("Marine Heatwave Detection System")
        self.logger.info("=" * 60)
        self.logger.info(f"Configuration: {self.config}")

        self.locations = {location.key: location for location in self.config.locations}
        self.store = ArchiveStore(self.config.locations, logger=self.logger)
        self.baseline: Optional[BaselineIndex] = None
        self.aggregator = DataAggregator(timezone=self.config.timezone, logger=self.logger)
        self.detector = HeatwaveDetector(min_duration=self.config.min_duration, logger=self.logger)
        self.writer = ArchiveWriter(logger=self.logger)

    def load_baseline(self, path: Optional[str] = None) -> BaselineIndex:
        """
        Load the baseline climatology table.

        Raises:
            FileNotFoundError: If the baseline file does not exist
        """
        path = path or self.config.baseline_file
        with LoggerContext(self.logger, f"baseline load from {path}") as context:
            _, records = read_table(path)
            self.baseline = BaselineIndex.from_table(records, logger=self.logger)
            context.summary = f"{len(self.baseline)} days of year"
        return self.baseline

    def load_archive(self, path: Optional[str] = None) -> MergeStats:
        """
        Load the SST archive into the store.

        A missing archive file starts an empty archive.
        """
        path = path or self.config.archive_file
        if not Path(path).exists():
            self.logger.info(f"No archive found at {path}, starting a new archive")
            return MergeStats()
        return self.import_table(path)

    def import_table(self, path: str) -> MergeStats:
        """Merge a CSV/TSV table of daily values into the archive."""
        with LoggerContext(self.logger, f"table import from {path}") as context:
            _, rows = read_table(path)
            stats = self.store.merge_rows(rows)
            context.summary = _merge_summary(stats)
        return stats

    def import_hourly(self, location_key: str, path: str) -> MergeStats:
        """
        Merge a saved marine API hourly response for one location.

        Args:
            location_key: Location the response belongs to
            path: JSON file with ``hourly.time`` and ``hourly.sea_surface_temperature``
        """
        self._require_location(location_key)
        log = site_logger(self.logger, self.locations[location_key].name)
        with LoggerContext(log, f"hourly import from {path}") as context:
            with open(path, "r", encoding="utf-8") as f:
                payload = json.load(f)
            daily = self.aggregator.from_marine_response(payload)
            stats = self.store.merge_daily(self.aggregator.combine_locations({location_key: daily}))
            context.summary = f"{len(daily)} daily means, " + _merge_summary(stats)
        return stats

    def save_archive(self, path: Optional[str] = None) -> Path:
        """Write the archive back to CSV."""
        return self.writer.write_archive(self.store, path or self.config.archive_file)

    def detect(self, location_key: str, start: str, end: str) -> DetectionResult:
        """
        Detect heatwaves for a location over an inclusive date range.

        Raises:
            ValueError: If the location is unknown or the range is invalid
            RuntimeError: If the baseline has not been loaded
        """
        self._require_location(location_key)
        if self.baseline is None:
            raise RuntimeError("Baseline not loaded")

        log = site_logger(self.logger, self.locations[location_key].name)
        with LoggerContext(log, f"heatwave detection {start}..{end}") as context:
            result = self.detector.detect_range(self.store, self.baseline, start, end, location_key)
            context.summary = f"{len(result.events)} events, {len(result.per_day)} heatwave days"
        return result

    def log_events(self, location_key: str, result: DetectionResult) -> None:
        """Log a summary of detected events."""
        name = self.locations[location_key].name
        self.logger.info("=" * 60)
        self.logger.info(f"Heatwaves at {name}: {len(result.events)}")
        self.logger.info("=" * 60)
        for event in result.events:
            self.logger.info(
                f"{event.start} .. {event.end} | {event.duration:>3} days | "
                f"max {event.max_anomaly:.2f} °C | mean {event.mean_anomaly:.2f} °C | "
                f"cum {event.cumulative_anomaly:.2f} °C·day | {event.category_label}"
            )

    def run(
        self,
        location_key: str,
        start: str,
        end: str,
        imports: Optional[List[str]] = None,
        hourly: Optional[Dict[str, str]] = None,
        save: bool = False,
        events_out: Optional[str] = None
    ) -> DetectionResult:
        """
        Run a full load, merge, detect and export cycle.

        Args:
            location_key: Location to analyse
            start: First date of the range (YYYY-MM-DD)
            end: Last date of the range (YYYY-MM-DD)
            imports: Extra tables to merge into the archive
            hourly: {location_key: json_path} marine API responses to merge
            save: Write the merged archive back to the archive file
            events_out: Optional path for the event CSV

        Returns:
            DetectionResult
        """
        try:
            self.load_baseline()
            self.load_archive()

            for path in imports or []:
                self.import_table(path)
            for key, path in (hourly or {}).items():
                self.import_hourly(key, path)

            if save:
                self.save_archive()

            result = self.detect(location_key, start, end)
            self.log_events(location_key, result)

            if events_out:
                self.writer.write_events(result, events_out)

            self.logger.info("Processing complete")
            return result

        except Exception as e:
            self.logger.error(f"Application error: {e}", exc_info=True)
            raise

    def _require_location(self, location_key: str) -> None:
        if location_key not in self.locations:
            raise ValueError(
                f"Unknown location '{location_key}'. "
                f"Available locations: {', '.join(self.locations)}"
            )


def _merge_summary(stats: MergeStats) -> str:
    return (
        f"{stats.rows_accepted}/{stats.rows_seen} rows, "
        f"{stats.values_written} values written, {stats.values_skipped} skipped"
    )

def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Marine Heatwave Detection System"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file"
    )
    parser.add_argument(
        "--location",
        type=str,
        required=True,
        help="Location key to analyse (e.g. jimbaran)"
    )
    parser.add_argument(
        "--start",
        type=str,
        default=None,
        help="First date (YYYY-MM-DD). Default: January 1 of the current year"
    )
    parser.add_argument(
        "--end",
        type=str,
        default=None,
        help="Last date (YYYY-MM-DD). Default: today"
    )
    parser.add_argument(
        "--import",
        dest="imports",
        action="append",
        default=[],
        help="CSV/TSV table to merge into the archive (repeatable)"
    )
    parser.add_argument(
        "--hourly",
        action="append",
        default=[],
        metavar="LOCATION=FILE",
        help="Saved marine API JSON response to merge for a location (repeatable)"
    )
    parser.add_argument(
        "--save",
        action="store_true",
        help="Write the merged archive back to the archive file"
    )
    parser.add_argument(
        "--events-out",
        type=str,
        default=None,
        help="Write detected events to this CSV file"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level"
    )

    args = parser.parse_args()

    today = date.today()
    start = args.start or date(today.year, 1, 1).isoformat()
    end = args.end or today.isoformat()

    hourly = {}
    for item in args.hourly:
        key, sep, path = item.partition("=")
        if not sep or not key or not path:
            print(f"Invalid --hourly value: {item}. Use LOCATION=FILE")
            sys.exit(1)
        hourly[key] = path

    try:
        app = MarineHeatwaveApp(config_file=args.config, log_level=args.log_level)
        app.run(
            location_key=args.location,
            start=start,
            end=end,
            imports=args.imports,
            hourly=hourly,
            save=args.save,
            events_out=args.events_out
        )
    except Exception as e:
        print(f"Application failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
