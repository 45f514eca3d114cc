"""
Heatwave severity categorization.

Severity is relative: the excess over the 90th percentile is measured in
multiples of the gap between the 90th percentile and the climatological
mean (delta = p90 - clim).

    excess >= 3 * delta           -> 4 (Category IV)
    2 * delta <= excess < 3 delta -> 3 (Category III)
    1 * delta <= excess < 2 delta -> 2 (Category II)
    0 < excess < 1 * delta        -> 1 (Category I)
    no usable delta               -> 0 (Heat Spike)
"""

import math
from typing import Optional

MAX_CATEGORY = 4


def categorize(sst: float, p90: Optional[float], clim: Optional[float]) -> int:
    """
    Get the severity category of a single day.

    A missing or non-finite value, or a degenerate baseline where
    p90 <= clim, yields 0. So does an SST at or below the threshold.

    Args:
        sst: Observed sea-surface temperature (°C)
        p90: 90th percentile threshold (°C)
        clim: Climatological mean (°C)

    Returns:
        Category 0-4
    """
    if sst is None or p90 is None or clim is None:
        return 0

    delta = p90 - clim
    excess = sst - p90
    if not (math.isfinite(delta) and math.isfinite(excess)):
        return 0
    if delta <= 0 or excess <= 0:
        return 0

    for multiple in range(MAX_CATEGORY - 1, 0, -1):
        if excess >= multiple * delta:
            return multiple + 1
    return 1
