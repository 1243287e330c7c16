"""
Pytest Configuration and Fixtures
"""

import json
import os
import sys
import pytest
import structlog

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(__file__)), 'src'))

# Set test environment
os.environ.pop("TARIFF_SCHEDULE_PATH", None)
os.environ.pop("STRICT_GROUP_VALIDATION", None)

from core.tariff import TariffSchedule
from tariffs.loader import DEFAULT_SCHEDULE_PATH, ScheduleCache, load_tariff_schedule


@pytest.fixture
def schedule() -> TariffSchedule:
    """The packaged 2025 tariff schedule."""
    return load_tariff_schedule(str(DEFAULT_SCHEDULE_PATH))


@pytest.fixture
def tariff_document():
    """The packaged tariff document as decoded JSON."""
    with open(DEFAULT_SCHEDULE_PATH, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture(autouse=True)
def reset_schedule_cache():
    """Each test sees the schedule configured for it."""
    ScheduleCache.reset()
    yield
    ScheduleCache.reset()


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo logging configuration applied by CLI tests."""
    yield
    structlog.reset_defaults()
