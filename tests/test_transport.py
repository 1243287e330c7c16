"""
Tests for Request Normalization

Current payload shapes, the legacy two-field body, and the fallback for
bodies without a recognized group.
"""

import pytest
from core.errors import PayloadError
from core.payload import (
    DualRatePayload,
    HouseholdOnePayload,
    HouseholdTwoPayload,
    SingleRatePayload,
)
from core.tariff import TariffGroup
from transport.normalize import normalize_payload


class TestCurrentShapes:
    """Bodies carrying a known group tag."""

    def test_household_two(self):
        payload = normalize_payload({"group": "household_two", "a1_kwh": 300, "a2_kwh": 200})

        assert payload == HouseholdTwoPayload(a1_kwh=300, a2_kwh=200)

    def test_household_one(self):
        payload = normalize_payload({"group": "household_one", "total_kwh": 1200})

        assert payload == HouseholdOnePayload(total_kwh=1200)

    def test_group_3_with_optional_fields(self):
        payload = normalize_payload({
            "group": "group_3",
            "high_kwh": 400,
            "low_kwh": 300,
            "demand_kw": 50,
            "reactive_kvarh": 100,
        })

        assert payload == DualRatePayload(
            group=TariffGroup.GROUP_3, high_kwh=400, low_kwh=300, demand_kw=50, reactive_kvarh=100
        )

    def test_group_3_without_optional_fields(self):
        payload = normalize_payload({"group": "group_3", "high_kwh": 400, "low_kwh": 300})

        assert payload.demand_kw is None
        assert payload.reactive_kvarh is None

    def test_group_1_drops_demand(self):
        """Demand and reactive inputs are not carried for group_1/group_2."""
        payload = normalize_payload({"group": "group_1", "high_kwh": 1, "low_kwh": 2, "demand_kw": 9})

        assert payload == DualRatePayload(group=TariffGroup.GROUP_1, high_kwh=1, low_kwh=2)

    @pytest.mark.parametrize("group", ["group_4", "group_7", "group_8"])
    def test_single_rate_groups(self, group):
        payload = normalize_payload({"group": group, "total_kwh": 500})

        assert payload == SingleRatePayload(group=TariffGroup(group), total_kwh=500)

    def test_missing_quantities_default_to_zero(self):
        payload = normalize_payload({"group": "group_2"})

        assert payload.high_kwh == 0
        assert payload.low_kwh == 0

    def test_extra_fields_ignored(self):
        payload = normalize_payload({"group": "household_one", "total_kwh": 5, "note": "meter 12"})

        assert payload == HouseholdOnePayload(total_kwh=5)


class TestLegacyShape:
    """consumption_high_rate / consumption_low_rate bodies."""

    def test_legacy_fields_map_to_household_two(self):
        payload = normalize_payload({"consumption_high_rate": 300, "consumption_low_rate": 200})

        assert payload == HouseholdTwoPayload(a1_kwh=300, a2_kwh=200)

    def test_single_legacy_field(self):
        payload = normalize_payload({"consumption_low_rate": 120})

        assert payload == HouseholdTwoPayload(a1_kwh=0, a2_kwh=120)

    def test_legacy_with_unknown_group(self):
        payload = normalize_payload({"group": "legacy", "consumption_high_rate": 10})

        assert payload == HouseholdTwoPayload(a1_kwh=10, a2_kwh=0)

    def test_current_names_win_over_legacy(self):
        payload = normalize_payload({
            "group": "household_two",
            "a1_kwh": 5,
            "consumption_high_rate": 500,
            "consumption_low_rate": 7,
        })

        assert payload == HouseholdTwoPayload(a1_kwh=5, a2_kwh=7)

    def test_legacy_accepted_in_strict_mode(self):
        payload = normalize_payload({"consumption_high_rate": 1}, strict=True)

        assert payload == HouseholdTwoPayload(a1_kwh=1, a2_kwh=0)


class TestFallback:
    """Bodies with neither a known group nor legacy fields."""

    @pytest.mark.parametrize("body", [{}, {"group": "group_9"}, {"group": None}, {"group": 5}])
    def test_defaults_to_empty_household_two(self, body):
        assert normalize_payload(body) == HouseholdTwoPayload(a1_kwh=0, a2_kwh=0)

    @pytest.mark.parametrize("body", [{}, {"group": "group_9"}, {"group": "group_5"}])
    def test_strict_mode_rejects(self, body):
        with pytest.raises(PayloadError, match="Unknown tariff group"):
            normalize_payload(body, strict=True)


class TestRejection:
    """Malformed content never reaches the engine."""

    @pytest.mark.parametrize("body", [[], "household_two", 42, None])
    def test_non_object_body(self, body):
        with pytest.raises(PayloadError, match="JSON object"):
            normalize_payload(body)

    def test_non_numeric_quantity(self):
        with pytest.raises(PayloadError, match="total_kwh"):
            normalize_payload({"group": "household_one", "total_kwh": "a lot"})

    def test_negative_quantity(self):
        with pytest.raises(PayloadError, match="a1_kwh"):
            normalize_payload({"group": "household_two", "a1_kwh": -1, "a2_kwh": 0})

    @pytest.mark.parametrize("value", [float("inf"), float("nan")])
    def test_non_finite_quantity(self, value):
        with pytest.raises(PayloadError):
            normalize_payload({"group": "group_4", "total_kwh": value})

    def test_negative_legacy_quantity(self):
        with pytest.raises(PayloadError):
            normalize_payload({"consumption_high_rate": -5})

    @pytest.mark.parametrize(
        "body",
        [
            {"group": "group_4", "total_kwh": 1e308},
            {"group": "household_two", "a1_kwh": 1e308, "a2_kwh": 1e308},
            {"consumption_high_rate": 1e12},
        ],
    )
    def test_quantity_above_limit(self, body):
        with pytest.raises(PayloadError, match="less than or equal"):
            normalize_payload(body)

    def test_quantity_at_limit(self):
        assert normalize_payload({"group": "group_4", "total_kwh": 1e9}).total_kwh == 1e9
