"""Pytest configuration and fixtures."""

import importlib
import shutil
import sys
import tempfile
from unittest.mock import MagicMock

import pytest

# The macOS frameworks only exist on darwin; detection is tested against mocks.
for _framework in ("AppKit", "Quartz"):
    try:
        importlib.import_module(_framework)
    except ImportError:
        sys.modules[_framework] = MagicMock()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    temp_path = tempfile.mkdtemp()
    yield temp_path
    shutil.rmtree(temp_path)


@pytest.fixture
def sample_entry_records():
    """Ledger records as persisted on disk."""
    return [
        {
            "id": "b7c1",
            "day": "15/01/2024",
            "company": "Hudson & Meadow",
            "allocation": "Editing",
            "application": "DaVinci Resolve",
            "project": "Campaign_Video_Final",
            "timeStart": "2024-01-15T14:00:00.250000",
            "timeFinish": "2024-01-15T14:45:30.750000",
            "overview": "",
            "durationMs": 2730500,
        },
        {
            "id": "a3f9",
            "day": "15/01/2024",
            "company": "CORE",
            "allocation": "Production",
            "application": "Safari",
            "project": "GitHub",
            "timeStart": "2024-01-15T13:00:00.000000",
            "timeFinish": "2024-01-15T13:20:00.000000",
            "overview": "Review",
            "durationMs": 1200000,
        },
    ]


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "unit: mark test as unit test")
