"""
Application-wide constants for marine heatwave detection.

This module defines default values and constants used throughout the application.
Detection thresholds specific to an algorithm are defined alongside it.
"""

# Canonical archive date format (Gregorian, no timezone component)
CANONICAL_DATE_FORMAT = "%Y-%m-%d"

# Minimum number of consecutive hot days for a run to count as a heatwave
MIN_EVENT_DURATION = 5

# Data coverage threshold
# Minimum fraction of non-null observations expected over a detection range
MIN_DATA_COVERAGE = 0.75

# Baseline climatology is built on a fixed non-leap year
BASELINE_YEAR_LENGTH = 365

# Severity categories (multiples of the p90 - climatology gap)
CATEGORY_LABELS = {
    0: "Heat Spike",
    1: "Category I",
    2: "Category II",
    3: "Category III",
    4: "Category IV",
}

# Default monitoring sites (Bali coast)
DEFAULT_LOCATIONS = {
    "jimbaran": {"name": "Jimbaran", "latitude": -8.783715, "longitude": 115.125306},
    "nusadua": {"name": "Nusa Dua", "latitude": -8.808350, "longitude": 115.263204},
    "sanur": {"name": "Sanur", "latitude": -8.673680, "longitude": 115.277472},
}

# Timezone used by the marine API for hourly timestamps
DEFAULT_TIMEZONE = "Asia/Singapore"

# Tabular column names
DATE_COLUMN = "date"
DAY_OF_YEAR_COLUMNS = ("day of year", "day_of_year")
GENERIC_CLIM_COLUMN = "climatology_mean"
GENERIC_P90_COLUMN = "percentile_90"
GENERIC_SIGMA_COLUMN = "sigma"
CLIM_SUFFIX = "_clim"
P90_SUFFIX = "_p90"
