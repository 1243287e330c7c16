"""
Billing Calculators

One calculator per tariff structure:

- bill_household_two:         group_5, A1/A2 split across two blocks
- bill_household_one:         group_6, single rate across two blocks
- bill_dual_rate_no_blocks:   group_1/2/3, flat high/low (+ demand, reactive)
- bill_single_rate_no_blocks: group_4/7/8, flat single rate

Costs and totals are accumulated unrounded; each emitted field is rounded
once at the end.
"""

from .invoice import (
    DualRateInvoice,
    HouseholdOneBlocks,
    HouseholdOneInvoice,
    HouseholdTwoBlocks,
    HouseholdTwoInvoice,
    SingleRateInvoice,
    Totals,
)
from .rates import BLOCK_THRESHOLD_KWH, apply_tax, cents_to_unit, round2
from .tariff import DUAL_RATE_GROUPS, SINGLE_RATE_GROUPS, TariffGroup, TariffSchedule


def _totals(fixed_fee: float, energy_cost: float, extra_cost: float = 0.0) -> Totals:
    net = fixed_fee + (energy_cost + extra_cost)
    tax, final = apply_tax(net)
    return Totals(
        fixed_fee=round2(fixed_fee),
        energy_cost=round2(energy_cost),
        net_amount=round2(net),
        tax=round2(tax),
        final_bill=round2(final),
    )


def _as_group(group, allowed) -> TariffGroup:
    if not isinstance(group, TariffGroup):
        group = TariffGroup(group)
    if group not in allowed:
        raise ValueError(f"{group.value} is not priced by this calculator")
    return group


def bill_household_two(schedule: TariffSchedule, a1_kwh: float, a2_kwh: float) -> HouseholdTwoInvoice:
    """
    Bill a two-rate household meter (tariff group_5).

    A1 and A2 share the block structure in proportion to their part of the
    total: with 600/400 kWh, block 1 holds 480/320 and block 2 holds 120/80.
    """
    tariff = schedule.group_5
    total = a1_kwh + a2_kwh
    share_a1 = a1_kwh / total if total else 0.0
    share_a2 = a2_kwh / total if total else 0.0

    if total <= BLOCK_THRESHOLD_KWH:
        a1_b1, a2_b1 = total * share_a1, total * share_a2
        a1_b2 = a2_b2 = 0.0
    else:
        over = total - BLOCK_THRESHOLD_KWH
        a1_b1, a2_b1 = BLOCK_THRESHOLD_KWH * share_a1, BLOCK_THRESHOLD_KWH * share_a2
        a1_b2, a2_b2 = over * share_a1, over * share_a2

    cost_a1_b1 = a1_b1 * cents_to_unit(tariff.block_1.high)
    cost_a2_b1 = a2_b1 * cents_to_unit(tariff.block_1.low)
    cost_a1_b2 = a1_b2 * cents_to_unit(tariff.block_2.high)
    cost_a2_b2 = a2_b2 * cents_to_unit(tariff.block_2.low)

    energy = cost_a1_b1 + cost_a2_b1 + cost_a1_b2 + cost_a2_b2

    return HouseholdTwoInvoice(
        a1_kwh=round2(a1_kwh),
        a2_kwh=round2(a2_kwh),
        blocks=HouseholdTwoBlocks(
            a1_block1_kwh=round2(a1_b1),
            a2_block1_kwh=round2(a2_b1),
            a1_block2_kwh=round2(a1_b2),
            a2_block2_kwh=round2(a2_b2),
            a1_block1_cost=round2(cost_a1_b1),
            a2_block1_cost=round2(cost_a2_b1),
            a1_block2_cost=round2(cost_a1_b2),
            a2_block2_cost=round2(cost_a2_b2),
        ),
        totals=_totals(tariff.fixed_fee, energy),
    )


def bill_household_one(schedule: TariffSchedule, total_kwh: float) -> HouseholdOneInvoice:
    """Bill a one-rate household meter (tariff group_6)."""
    tariff = schedule.group_6

    b1_kwh = min(total_kwh, BLOCK_THRESHOLD_KWH)
    b2_kwh = max(0.0, total_kwh - BLOCK_THRESHOLD_KWH)

    cost_b1 = b1_kwh * cents_to_unit(tariff.block_1)
    cost_b2 = b2_kwh * cents_to_unit(tariff.block_2)

    return HouseholdOneInvoice(
        total_kwh=round2(total_kwh),
        blocks=HouseholdOneBlocks(
            block1_kwh=round2(b1_kwh),
            block2_kwh=round2(b2_kwh),
            block1_cost=round2(cost_b1),
            block2_cost=round2(cost_b2),
        ),
        totals=_totals(tariff.fixed_fee, cost_b1 + cost_b2),
    )


def bill_dual_rate_no_blocks(
    schedule: TariffSchedule,
    group,
    high_kwh: float,
    low_kwh: float,
    demand_kw: float = 0.0,
    reactive_kvarh: float = 0.0,
) -> DualRateInvoice:
    """
    Bill a flat high/low tariff (group_1, group_2, group_3).

    The demand charge is already €/kW; the reactive rate is c€/kVArh like
    every energy price. Demand and reactive costs stay 0 when the input is
    absent or zero, and for groups whose tariff has no such charge.
    """
    group = _as_group(group, DUAL_RATE_GROUPS)
    tariff = schedule.for_group(group)

    energy = high_kwh * cents_to_unit(tariff.high) + low_kwh * cents_to_unit(tariff.low)

    demand_rate = tariff.demand_charge or 0.0
    reactive_rate = tariff.reactive_energy or 0.0
    demand_cost = demand_kw * demand_rate if demand_kw else 0.0
    reactive_cost = reactive_kvarh * cents_to_unit(reactive_rate) if reactive_kvarh else 0.0

    return DualRateInvoice(
        group=group,
        high_kwh=round2(high_kwh),
        low_kwh=round2(low_kwh),
        demand_kw=round2(demand_kw) if demand_kw else 0.0,
        reactive_kvarh=round2(reactive_kvarh) if reactive_kvarh else 0.0,
        demand_cost=round2(demand_cost),
        reactive_cost=round2(reactive_cost),
        totals=_totals(tariff.fixed_fee, energy, demand_cost + reactive_cost),
    )


def bill_single_rate_no_blocks(schedule: TariffSchedule, group, total_kwh: float) -> SingleRateInvoice:
    """Bill a flat single-rate tariff (group_4, group_7, group_8)."""
    group = _as_group(group, SINGLE_RATE_GROUPS)
    tariff = schedule.for_group(group)
    rate = cents_to_unit(tariff.single)

    return SingleRateInvoice(
        group=group,
        total_kwh=round2(total_kwh),
        rate_eur_per_kwh=round2(rate),
        totals=_totals(tariff.fixed_fee, total_kwh * rate),
    )
