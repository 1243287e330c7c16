"""
Invoice Results

Every numeric field holds the final, 2-decimal figure shown to the customer.
to_dict() produces the JSON shape returned by the calculate-bill endpoint.
"""

from dataclasses import dataclass
from typing import Any, Dict, Union

from .tariff import TariffGroup


@dataclass(frozen=True)
class Totals:
    """Fields shared by every invoice variant."""
    fixed_fee: float
    energy_cost: float
    net_amount: float
    tax: float
    final_bill: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fixed_fee": self.fixed_fee,
            "energy_cost": self.energy_cost,
            "net_amount": self.net_amount,
            "tax": self.tax,
            "final_bill": self.final_bill,
        }


@dataclass(frozen=True)
class HouseholdTwoBlocks:
    a1_block1_kwh: float
    a2_block1_kwh: float
    a1_block2_kwh: float
    a2_block2_kwh: float
    a1_block1_cost: float
    a2_block1_cost: float
    a1_block2_cost: float
    a2_block2_cost: float

    @property
    def block1_kwh(self) -> float:
        return self.a1_block1_kwh + self.a2_block1_kwh

    @property
    def block2_kwh(self) -> float:
        return self.a1_block2_kwh + self.a2_block2_kwh

    def to_dict(self) -> Dict[str, Any]:
        return {
            "a1_block1_kwh": self.a1_block1_kwh,
            "a2_block1_kwh": self.a2_block1_kwh,
            "a1_block2_kwh": self.a1_block2_kwh,
            "a2_block2_kwh": self.a2_block2_kwh,
            "a1_block1_cost": self.a1_block1_cost,
            "a2_block1_cost": self.a2_block1_cost,
            "a1_block2_cost": self.a1_block2_cost,
            "a2_block2_cost": self.a2_block2_cost,
        }


@dataclass(frozen=True)
class HouseholdTwoInvoice:
    a1_kwh: float
    a2_kwh: float
    blocks: HouseholdTwoBlocks
    totals: Totals
    group: TariffGroup = TariffGroup.HOUSEHOLD_TWO

    @property
    def total_kwh(self) -> float:
        return self.a1_kwh + self.a2_kwh

    def to_dict(self) -> Dict[str, Any]:
        return {
            "group": self.group.value,
            "inputs": {"a1_kwh": self.a1_kwh, "a2_kwh": self.a2_kwh},
            "blocks": self.blocks.to_dict(),
            **self.totals.to_dict(),
        }


@dataclass(frozen=True)
class HouseholdOneBlocks:
    block1_kwh: float
    block2_kwh: float
    block1_cost: float
    block2_cost: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "block1_kwh": self.block1_kwh,
            "block2_kwh": self.block2_kwh,
            "block1_cost": self.block1_cost,
            "block2_cost": self.block2_cost,
        }


@dataclass(frozen=True)
class HouseholdOneInvoice:
    total_kwh: float
    blocks: HouseholdOneBlocks
    totals: Totals
    group: TariffGroup = TariffGroup.HOUSEHOLD_ONE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "group": self.group.value,
            "inputs": {"total_kwh": self.total_kwh},
            "blocks": self.blocks.to_dict(),
            **self.totals.to_dict(),
        }


@dataclass(frozen=True)
class DualRateInvoice:
    """Invoice for group_1/2/3. demand/reactive figures are 0 unless billed."""
    group: TariffGroup
    high_kwh: float
    low_kwh: float
    demand_kw: float
    reactive_kvarh: float
    demand_cost: float
    reactive_cost: float
    totals: Totals

    @property
    def total_kwh(self) -> float:
        return self.high_kwh + self.low_kwh

    def to_dict(self) -> Dict[str, Any]:
        totals = self.totals
        return {
            "group": self.group.value,
            "inputs": {
                "high_kwh": self.high_kwh,
                "low_kwh": self.low_kwh,
                "demand_kw": self.demand_kw,
                "reactive_kvarh": self.reactive_kvarh,
            },
            "fixed_fee": totals.fixed_fee,
            "energy_cost": totals.energy_cost,
            "demand_cost": self.demand_cost,
            "reactive_cost": self.reactive_cost,
            "net_amount": totals.net_amount,
            "tax": totals.tax,
            "final_bill": totals.final_bill,
        }


@dataclass(frozen=True)
class SingleRateInvoice:
    group: TariffGroup
    total_kwh: float
    rate_eur_per_kwh: float
    totals: Totals

    def to_dict(self) -> Dict[str, Any]:
        return {
            "group": self.group.value,
            "inputs": {"total_kwh": self.total_kwh},
            "rate_eur_per_kwh": self.rate_eur_per_kwh,
            **self.totals.to_dict(),
        }


Invoice = Union[
    HouseholdTwoInvoice,
    HouseholdOneInvoice,
    DualRateInvoice,
    SingleRateInvoice,
]
