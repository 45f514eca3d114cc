"""
Date and calendar utilities.

Centralizes canonical date handling, baseline day-of-year resolution and
local-day bucketing of timestamped observations.
"""

import calendar
import logging
from datetime import date, datetime, timedelta
from typing import List, Optional, Union

import pytz
from pytz.tzinfo import BaseTzInfo

from . import constants

DateLike = Union[str, date]


class DateUtils:
    """Utilities for canonical dates and timezone handling."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize date utilities.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def parse_timezone(timezone_str: str) -> BaseTzInfo:
        """
        Parse timezone string to pytz timezone object.

        Args:
            timezone_str: Timezone string (e.g., 'Asia/Singapore', 'UTC')

        Returns:
            pytz timezone object

        Raises:
            ValueError: If timezone is invalid
        """
        try:
            return pytz.timezone(timezone_str)
        except pytz.exceptions.UnknownTimeZoneError:
            raise ValueError(f"Invalid timezone: {timezone_str}")

    @staticmethod
    def to_date(value: DateLike) -> date:
        """
        Convert a canonical date string (or date) to a date object.

        Raises:
            ValueError: If the string is not a canonical YYYY-MM-DD date
        """
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        try:
            return datetime.strptime(value, constants.CANONICAL_DATE_FORMAT).date()
        except (TypeError, ValueError):
            raise ValueError(f"Not a canonical YYYY-MM-DD date: {value!r}")

    @staticmethod
    def format_date(value: date) -> str:
        """Format a date as canonical YYYY-MM-DD."""
        return value.strftime(constants.CANONICAL_DATE_FORMAT)

    @staticmethod
    def baseline_day_of_year(value: DateLike) -> int:
        """
        Get the baseline day-of-year for a date.

        The baseline table has one row per day of a 365-day year. In leap
        years every date after February 28 is shifted back by one day, so
        February 29 shares row 59 with February 28 and March 1 is always 60.

        Args:
            value: Canonical date string or date

        Returns:
            Day-of-year in the range 1-365
        """
        day = DateUtils.to_date(value)
        day_of_year = day.timetuple().tm_yday
        if calendar.isleap(day.year) and (day.month, day.day) > (2, 28):
            day_of_year -= 1
        return day_of_year

    @staticmethod
    def date_range(start: DateLike, end: DateLike) -> List[str]:
        """
        Get every canonical date from start to end inclusive.

        Raises:
            ValueError: If end is before start
        """
        start_day = DateUtils.to_date(start)
        end_day = DateUtils.to_date(end)
        if end_day < start_day:
            raise ValueError(f"End date {end_day} is before start date {start_day}")

        days = (end_day - start_day).days
        return [
            DateUtils.format_date(start_day + timedelta(days=offset))
            for offset in range(days + 1)
        ]

    def local_date(self, timestamp: str, timezone_str: Optional[str] = None) -> str:
        """
        Get the canonical local date a timestamp falls on.

        Naive timestamps (as returned by the marine API when a timezone is
        requested) are already local and keep their own date part. Timestamps
        with an offset are converted to the given timezone first.

        Args:
            timestamp: ISO 8601 timestamp, e.g. '2025-09-10T13:00'
            timezone_str: Target timezone for offset-aware timestamps

        Returns:
            Canonical date string
        """
        text = str(timestamp).strip()
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            # Not ISO; fall back to the date part before 'T'
            self.logger.debug(f"Non-ISO timestamp {text!r}, using date part")
            return text.split("T")[0]

        if parsed.tzinfo is not None and timezone_str:
            parsed = parsed.astimezone(self.parse_timezone(timezone_str))

        return self.format_date(parsed.date())
