"""
Request Normalization

Turns a decoded JSON request body into a consumption payload. Handles the
legacy two-field body ({"consumption_high_rate", "consumption_low_rate"})
sent by older clients, which always meant the two-rate household tariff.
"""

from typing import Any, Optional

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.errors import PayloadError
from core.payload import (
    ConsumptionPayload,
    DualRatePayload,
    HouseholdOnePayload,
    HouseholdTwoPayload,
    SingleRatePayload,
)
from core.tariff import DUAL_RATE_GROUPS, SINGLE_RATE_GROUPS, TariffGroup

logger = structlog.get_logger()

# Largest accepted quantity; keeps every cost product finite.
MAX_QUANTITY = 1e9


def _quantity(description: str):
    return Field(None, ge=0, le=MAX_QUANTITY, allow_inf_nan=False, description=description)


class CalculationRequest(BaseModel):
    """Every field a calculate-bill body may carry, across all groups."""
    model_config = ConfigDict(extra="ignore")

    group: Optional[Any] = Field(None, description="Tariff group tag")
    a1_kwh: Optional[float] = _quantity("High-rate (A1) consumption, household_two")
    a2_kwh: Optional[float] = _quantity("Low-rate (A2) consumption, household_two")
    total_kwh: Optional[float] = _quantity("Total consumption, single-rate groups")
    high_kwh: Optional[float] = _quantity("High-rate consumption, group_1/2/3")
    low_kwh: Optional[float] = _quantity("Low-rate consumption, group_1/2/3")
    demand_kw: Optional[float] = _quantity("Peak demand, group_3")
    reactive_kvarh: Optional[float] = _quantity("Reactive energy, group_3")

    # Legacy names for a1_kwh / a2_kwh
    consumption_high_rate: Optional[float] = _quantity("Legacy name of a1_kwh")
    consumption_low_rate: Optional[float] = _quantity("Legacy name of a2_kwh")

    @property
    def has_legacy_fields(self) -> bool:
        return self.consumption_high_rate is not None or self.consumption_low_rate is not None


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "body"
    return f"Invalid field {location}: {first.get('msg', 'invalid value')}"


def _or_zero(value: Optional[float]) -> float:
    return value if value is not None else 0.0


def _household_two(request: CalculationRequest) -> HouseholdTwoPayload:
    a1 = request.a1_kwh if request.a1_kwh is not None else request.consumption_high_rate
    a2 = request.a2_kwh if request.a2_kwh is not None else request.consumption_low_rate
    return HouseholdTwoPayload(a1_kwh=_or_zero(a1), a2_kwh=_or_zero(a2))


def normalize_payload(body: Any, strict: bool = False) -> ConsumptionPayload:
    """
    Build the consumption payload for a request body.

    An absent or unknown group with legacy fields maps to household_two. With
    neither, the body falls back to household_two with zero consumption, or
    raises PayloadError when strict is set. Missing quantities default to 0.
    """
    if not isinstance(body, dict):
        raise PayloadError("Request body must be a JSON object")

    try:
        request = CalculationRequest.model_validate(body)
    except ValidationError as e:
        raise PayloadError(_describe(e))

    group = TariffGroup.parse(request.group)

    if group is None:
        if request.has_legacy_fields:
            logger.info("legacy_payload_mapped", group=request.group)
            return _household_two(request)
        if strict:
            raise PayloadError(f"Unknown tariff group: {request.group!r}")
        logger.warning(
            "unknown_group_defaulted",
            group=request.group,
            default=TariffGroup.HOUSEHOLD_TWO.value,
        )
        return HouseholdTwoPayload(a1_kwh=0.0, a2_kwh=0.0)

    if group is TariffGroup.HOUSEHOLD_TWO:
        return _household_two(request)

    if group is TariffGroup.HOUSEHOLD_ONE:
        return HouseholdOnePayload(total_kwh=_or_zero(request.total_kwh))

    if group in DUAL_RATE_GROUPS:
        if group is TariffGroup.GROUP_3:
            return DualRatePayload(
                group=group,
                high_kwh=_or_zero(request.high_kwh),
                low_kwh=_or_zero(request.low_kwh),
                demand_kw=request.demand_kw,
                reactive_kvarh=request.reactive_kvarh,
            )
        return DualRatePayload(
            group=group,
            high_kwh=_or_zero(request.high_kwh),
            low_kwh=_or_zero(request.low_kwh),
        )

    if group in SINGLE_RATE_GROUPS:
        return SingleRatePayload(group=group, total_kwh=_or_zero(request.total_kwh))

    raise PayloadError(f"Unsupported tariff group: {group.value}")
