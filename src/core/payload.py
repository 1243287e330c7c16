"""
Consumption Payloads

One payload type per calculator. The `group` attribute is the discriminant
the dispatcher switches on; groups sharing a calculator share a payload type
and carry their tag as a field.
"""

from dataclasses import dataclass
from typing import Optional, Union

from .tariff import DUAL_RATE_GROUPS, SINGLE_RATE_GROUPS, TariffGroup


@dataclass(frozen=True)
class HouseholdTwoPayload:
    """Two-rate household meter: A1 (high) and A2 (low) readings."""
    a1_kwh: float
    a2_kwh: float

    @property
    def group(self) -> TariffGroup:
        return TariffGroup.HOUSEHOLD_TWO


@dataclass(frozen=True)
class HouseholdOnePayload:
    total_kwh: float

    @property
    def group(self) -> TariffGroup:
        return TariffGroup.HOUSEHOLD_ONE


@dataclass(frozen=True)
class DualRatePayload:
    """
    High/low consumption for group_1, group_2 and group_3.

    demand_kw and reactive_kvarh only apply to group_3.
    """
    group: TariffGroup
    high_kwh: float
    low_kwh: float
    demand_kw: Optional[float] = None
    reactive_kvarh: Optional[float] = None

    def __post_init__(self):
        if self.group not in DUAL_RATE_GROUPS:
            raise ValueError(f"{self.group.value} is not a dual-rate group")


@dataclass(frozen=True)
class SingleRatePayload:
    group: TariffGroup
    total_kwh: float

    def __post_init__(self):
        if self.group not in SINGLE_RATE_GROUPS:
            raise ValueError(f"{self.group.value} is not a single-rate group")


ConsumptionPayload = Union[
    HouseholdTwoPayload,
    HouseholdOnePayload,
    DualRatePayload,
    SingleRatePayload,
]
