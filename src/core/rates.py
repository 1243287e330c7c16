"""
Rate and Rounding Primitives

Tariff documents author energy prices in hundredths of the currency unit
(c€/kWh). Calculators convert them once with cents_to_unit() and round every
emitted figure with round2().
"""

import math

TAX_RATE = 0.08
BLOCK_THRESHOLD_KWH = 800

# Absorbs binary representation error so 2.675 rounds to 2.68.
ROUNDING_EPSILON = 1e-12


def cents_to_unit(rate_in_hundredths: float) -> float:
    """Convert a rate in hundredths (c€/kWh) to base currency (€/kWh)."""
    return rate_in_hundredths / 100


def round2(value: float) -> float:
    """
    Round half-up to 2 decimal places.

    The epsilon is added before scaling, so values whose float representation
    sits just below the midpoint still round up.
    """
    return math.floor((value + ROUNDING_EPSILON) * 100 + 0.5) / 100


def apply_tax(net_amount: float):
    """Return (tax, final) for an unrounded net amount."""
    tax = net_amount * TAX_RATE
    return tax, net_amount + tax
