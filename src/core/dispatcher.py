"""
Payload Dispatcher

Maps a consumption payload to its calculator. Payload types form a closed
set; the transport layer is responsible for turning request bodies into one
of them.
"""

from .calculators import (
    bill_dual_rate_no_blocks,
    bill_household_one,
    bill_household_two,
    bill_single_rate_no_blocks,
)
from .invoice import Invoice
from .payload import (
    ConsumptionPayload,
    DualRatePayload,
    HouseholdOnePayload,
    HouseholdTwoPayload,
    SingleRatePayload,
)
from .tariff import TariffGroup, TariffSchedule


def calculate(schedule: TariffSchedule, payload: ConsumptionPayload) -> Invoice:
    """Compute the invoice for a consumption payload."""
    if isinstance(payload, HouseholdTwoPayload):
        return bill_household_two(schedule, payload.a1_kwh, payload.a2_kwh)

    if isinstance(payload, HouseholdOnePayload):
        return bill_household_one(schedule, payload.total_kwh)

    if isinstance(payload, DualRatePayload):
        if payload.group is TariffGroup.GROUP_3:
            return bill_dual_rate_no_blocks(
                schedule,
                payload.group,
                payload.high_kwh,
                payload.low_kwh,
                demand_kw=payload.demand_kw or 0.0,
                reactive_kvarh=payload.reactive_kvarh or 0.0,
            )
        return bill_dual_rate_no_blocks(schedule, payload.group, payload.high_kwh, payload.low_kwh)

    if isinstance(payload, SingleRatePayload):
        return bill_single_rate_no_blocks(schedule, payload.group, payload.total_kwh)

    raise TypeError(f"Unsupported consumption payload: {type(payload).__name__}")
