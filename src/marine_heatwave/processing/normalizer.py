"""
Date and number normalization module.

Converts heterogeneous textual dates, numbers and column headers found in
hand-edited archives into canonical forms. Nothing in this module raises
for bad data: rejected values come back as ``""`` (dates) or ``None``
(numbers) and the caller drops them.
"""

import math
import re
from datetime import date, datetime
from typing import Any, Dict, Iterable, Optional

from dateutil import parser as date_parser
import pytz

from ..core import constants
from ..models import Location

# Day/month-first patterns, tried in order before the generic parser
_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_DAY_FIRST_PADDED = re.compile(r"^(\d{2})[-/](\d{2})[-/](\d{4})$")
_DAY_FIRST_SHORT = re.compile(r"^(\d{1,2})[-/](\d{1,2})[-/](\d{4})$")
_DAY_FIRST_DOTTED = re.compile(r"^(\d{2})\.(\d{2})\.(\d{4})$")

_PLAIN_FLOAT = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")

# Two defaults that differ in every date field; a generic parse that
# depends on the default is missing part of the date
_PARSE_DEFAULTS = (datetime(1904, 1, 1), datetime(1905, 2, 2))


def _canonical(year: str, month: str, day: str) -> str:
    """Build a canonical date string, or '' if it is not a real calendar day."""
    try:
        value = date(int(year), int(month), int(day))
    except ValueError:
        return ""
    return value.strftime(constants.CANONICAL_DATE_FORMAT)


def _generic_parse(text: str) -> str:
    """Fallback calendar parse of free-form date text."""
    results = []
    for default in _PARSE_DEFAULTS:
        try:
            parsed = date_parser.parse(text, default=default)
        except (ValueError, OverflowError, TypeError):
            return ""
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(pytz.UTC)
        results.append(parsed.date())

    if results[0] != results[1]:
        return ""
    return results[0].strftime(constants.CANONICAL_DATE_FORMAT)


def normalize_date(raw: Any) -> str:
    """
    Normalize a date cell to canonical YYYY-MM-DD.

    Accepted, in priority order:
        1. YYYY-MM-DD
        2. DD-MM-YYYY or DD/MM/YYYY
        3. D-M-YYYY or D/M/YYYY (zero-padded on output)
        4. DD.MM.YYYY
        5. Anything the generic parser understands unambiguously

    A value that structurally matches one of the day-first patterns but is
    not a real date is rejected rather than handed to the generic parser,
    which could read it month-first. Offset-aware values, whether text or
    datetime, are reduced to their UTC date.

    Args:
        raw: Raw cell value (string, date or datetime)

    Returns:
        Canonical date string, or '' if the value should be rejected
    """
    if raw is None:
        return ""
    if isinstance(raw, datetime):
        if raw.tzinfo is not None:
            raw = raw.astimezone(pytz.UTC)
        return raw.strftime(constants.CANONICAL_DATE_FORMAT)
    if isinstance(raw, date):
        return raw.strftime(constants.CANONICAL_DATE_FORMAT)

    text = str(raw).strip()
    if not text:
        return ""

    match = _ISO_DATE.match(text)
    if match:
        return _canonical(*match.groups())

    for pattern in (_DAY_FIRST_PADDED, _DAY_FIRST_SHORT, _DAY_FIRST_DOTTED):
        match = pattern.match(text)
        if match:
            day, month, year = match.groups()
            return _canonical(year, month, day)

    return _generic_parse(text)


def normalize_number(raw: Any) -> Optional[float]:
    """
    Normalize a numeric cell to a float.

    Strips whitespace (including thousand separators) and accepts a decimal
    comma. Never raises.

    Args:
        raw: Raw cell value

    Returns:
        Parsed float, or None for empty or unparseable input
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
        return value if math.isfinite(value) else None

    text = re.sub(r"\s+", "", str(raw)).replace(",", ".", 1)
    if not text or not _PLAIN_FLOAT.match(text):
        return None

    value = float(text)
    return value if math.isfinite(value) else None


def header_key(header: Any) -> str:
    """Reduce a column header to its alias-table key (case, spaces, underscores)."""
    return re.sub(r"[\s_]+", "", str(header)).lower()


def build_alias_table(locations: Iterable[Location]) -> Dict[str, str]:
    """
    Build the fixed header alias table for a set of locations.

    Each location answers to its key and its display name in any case and
    spacing, e.g. ``nusadua``, ``NusaDua``, ``NUSADUA``, ``nusa dua``,
    ``Nusa Dua``. The date column answers to ``date`` in any case.

    Args:
        locations: Known monitoring sites

    Returns:
        Mapping of header key to canonical field name ('date' or location key)
    """
    aliases = {header_key(constants.DATE_COLUMN): constants.DATE_COLUMN}
    for location in locations:
        for spelling in (location.key, location.name):
            aliases.setdefault(header_key(spelling), location.key)
    return aliases
