"""
Tariff Schedule Loader

Reads the published tariff document from TARIFF_SCHEDULE_PATH, falling back
to the schedule shipped with the package.
"""

import json
import os
from pathlib import Path
from threading import Lock
from typing import Optional

import structlog

from core.errors import TariffScheduleError
from core.tariff import TariffSchedule

logger = structlog.get_logger()

DEFAULT_SCHEDULE_PATH = Path(__file__).parent / "tariffs_2025.json"


def load_tariff_schedule(path: Optional[str] = None) -> TariffSchedule:
    """
    Load and validate a tariff document.

    Raises TariffScheduleError when the file is missing, unreadable, not JSON, or
    lacks a required group or rate.
    """
    source = Path(path or os.environ.get("TARIFF_SCHEDULE_PATH") or DEFAULT_SCHEDULE_PATH)

    try:
        with source.open("r", encoding="utf-8") as f:
            document = json.load(f)
    except FileNotFoundError:
        raise TariffScheduleError(f"Tariff schedule not found: {source}")
    except json.JSONDecodeError as e:
        raise TariffScheduleError(f"Tariff schedule is not valid JSON: {source}: {e}")
    except UnicodeDecodeError as e:
        raise TariffScheduleError(f"Tariff schedule is not UTF-8 text: {source}: {e}")
    except OSError as e:
        raise TariffScheduleError(f"Tariff schedule is unreadable: {source}: {e}")

    name = document.get("name") if isinstance(document, dict) else None
    schedule = TariffSchedule.from_dict(document, name=str(name) if name else source.stem)

    logger.info(
        "tariff_schedule_loaded",
        source=str(source),
        schedule=schedule.name,
    )

    return schedule


class ScheduleCache:
    """Process-wide cache of the configured schedule."""

    _schedule: Optional[TariffSchedule] = None
    _lock = Lock()

    @classmethod
    def get(cls) -> TariffSchedule:
        if cls._schedule is None:
            with cls._lock:
                if cls._schedule is None:
                    cls._schedule = load_tariff_schedule()
        return cls._schedule

    @classmethod
    def reset(cls) -> None:
        with cls._lock:
            cls._schedule = None


def get_tariff_schedule() -> TariffSchedule:
    """Get the configured tariff schedule, loading it on first use."""
    return ScheduleCache.get()
