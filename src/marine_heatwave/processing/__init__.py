"""
Data processing module for marine heatwave detection.

Provides normalization, hourly aggregation and validation of SST data.
"""

from .normalizer import normalize_date, normalize_number, header_key, build_alias_table
from .aggregator import DataAggregator
from .validator import DataValidator

__all__ = [
    "normalize_date",
    "normalize_number",
    "header_key",
    "build_alias_table",
    "DataAggregator",
    "DataValidator",
]
