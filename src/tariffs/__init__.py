"""
Tariff rate documents and their loader.
"""

from .loader import (
    DEFAULT_SCHEDULE_PATH,
    ScheduleCache,
    get_tariff_schedule,
    load_tariff_schedule,
)

__all__ = [
    "DEFAULT_SCHEDULE_PATH",
    "ScheduleCache",
    "get_tariff_schedule",
    "load_tariff_schedule",
]
