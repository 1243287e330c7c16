"""
Display-side derivations for rendering an invoice.

Nothing here recomputes charges; it only arranges invoice figures into rows
and derives the effective price per kWh.
"""

from dataclasses import dataclass
from typing import List, Optional

from .invoice import (
    DualRateInvoice,
    HouseholdOneInvoice,
    HouseholdTwoInvoice,
    Invoice,
    SingleRateInvoice,
)
from .rates import TAX_RATE


@dataclass(frozen=True)
class InvoiceLine:
    label: str
    amount: float
    quantity: Optional[float] = None
    unit: str = ""


def _charge_lines(invoice: Invoice) -> List[InvoiceLine]:
    if isinstance(invoice, HouseholdTwoInvoice):
        b = invoice.blocks
        lines = [
            InvoiceLine("A1 block 1", b.a1_block1_cost, b.a1_block1_kwh, "kWh"),
            InvoiceLine("A2 block 1", b.a2_block1_cost, b.a2_block1_kwh, "kWh"),
        ]
        if b.block2_kwh:
            lines.append(InvoiceLine("A1 block 2", b.a1_block2_cost, b.a1_block2_kwh, "kWh"))
            lines.append(InvoiceLine("A2 block 2", b.a2_block2_cost, b.a2_block2_kwh, "kWh"))
        return lines

    if isinstance(invoice, HouseholdOneInvoice):
        b = invoice.blocks
        lines = [InvoiceLine("Block 1", b.block1_cost, b.block1_kwh, "kWh")]
        if b.block2_kwh:
            lines.append(InvoiceLine("Block 2", b.block2_cost, b.block2_kwh, "kWh"))
        return lines

    if isinstance(invoice, DualRateInvoice):
        lines = [
            InvoiceLine("Active energy (high + low)", invoice.totals.energy_cost,
                        invoice.high_kwh + invoice.low_kwh, "kWh"),
        ]
        if invoice.demand_cost:
            lines.append(InvoiceLine("Demand charge", invoice.demand_cost, invoice.demand_kw, "kW"))
        if invoice.reactive_cost:
            lines.append(InvoiceLine("Reactive energy", invoice.reactive_cost, invoice.reactive_kvarh, "kVArh"))
        return lines

    if isinstance(invoice, SingleRateInvoice):
        return [InvoiceLine("Active energy", invoice.totals.energy_cost, invoice.total_kwh, "kWh")]

    raise TypeError(f"Unsupported invoice: {type(invoice).__name__}")


def invoice_lines(invoice: Invoice) -> List[InvoiceLine]:
    """Itemized rows in display order: charges, fixed fee, then totals."""
    totals = invoice.totals
    return _charge_lines(invoice) + [
        InvoiceLine("Fixed fee", totals.fixed_fee),
        InvoiceLine("Net amount", totals.net_amount),
        InvoiceLine(f"Tax ({TAX_RATE:.0%})", totals.tax),
        InvoiceLine("Final bill", totals.final_bill),
    ]


def effective_unit_price(invoice: Invoice) -> Optional[float]:
    """Final bill divided by consumed kWh, or None with no consumption."""
    total_kwh = invoice.total_kwh
    if not total_kwh:
        return None
    return round(invoice.totals.final_bill / total_kwh, 4)
