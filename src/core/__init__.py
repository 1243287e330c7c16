"""
TARIFF RAIL - Core Module
Electricity bill estimation for the published tariff groups.

The engine is pure: a tariff schedule and a consumption payload go in, an
itemized invoice comes out. No I/O, no shared state.
"""

from .tariff import TariffGroup, TariffSchedule
from .payload import (
    ConsumptionPayload,
    HouseholdTwoPayload,
    HouseholdOnePayload,
    DualRatePayload,
    SingleRatePayload,
)
from .invoice import (
    Invoice,
    HouseholdTwoInvoice,
    HouseholdOneInvoice,
    DualRateInvoice,
    SingleRateInvoice,
)
from .calculators import (
    bill_household_two,
    bill_household_one,
    bill_dual_rate_no_blocks,
    bill_single_rate_no_blocks,
)
from .dispatcher import calculate
from .errors import PayloadError, TariffScheduleError

__all__ = [
    "TariffGroup",
    "TariffSchedule",
    "ConsumptionPayload",
    "HouseholdTwoPayload",
    "HouseholdOnePayload",
    "DualRatePayload",
    "SingleRatePayload",
    "Invoice",
    "HouseholdTwoInvoice",
    "HouseholdOneInvoice",
    "DualRateInvoice",
    "SingleRateInvoice",
    "bill_household_two",
    "bill_household_one",
    "bill_dual_rate_no_blocks",
    "bill_single_rate_no_blocks",
    "calculate",
    "PayloadError",
    "TariffScheduleError",
]
