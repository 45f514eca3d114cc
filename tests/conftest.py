"""
Pytest configuration and shared fixtures for all tests.
"""

import sys
from pathlib import Path

import pytest

# Add the project root to sys.path so we can import from src
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from src.marine_heatwave.archive import default_locations  # noqa: E402
from src.marine_heatwave.models import BaselineValues  # noqa: E402


@pytest.fixture
def locations():
    """Built-in Jimbaran / Nusa Dua / Sanur sites."""
    return default_locations()


@pytest.fixture
def scenario():
    """Ten days with five sub-threshold days followed by five Category II days."""
    dates = [f"2025-01-{day:02d}" for day in range(1, 11)]
    sst = [27.0] * 5 + [30.5] * 5
    baselines = [BaselineValues(clim=28.0, p90=29.0)] * 10
    return dates, sst, baselines


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test touching the filesystem"
    )
    config.addinivalue_line(
        "markers", "unit: mark test as unit test (no external dependencies)"
    )
