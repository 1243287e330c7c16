"""
TARIFF RAIL - Transport Module

Maps request bodies (current and legacy shapes) onto consumption payloads.
"""

from .normalize import CalculationRequest, normalize_payload

__all__ = ["CalculationRequest", "normalize_payload"]
