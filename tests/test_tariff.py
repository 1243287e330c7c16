"""
Tests for the Tariff Schedule model and loader
"""

import json
import pytest
from core.errors import TariffScheduleError
from core.tariff import (
    DualRateTariff,
    OneRateBlockTariff,
    SingleRateTariff,
    TariffGroup,
    TariffSchedule,
    TwoRateBlockTariff,
)
from tariffs.loader import get_tariff_schedule, load_tariff_schedule


class TestTariffGroup:
    """Payload tags and their tariff records."""

    def test_household_groups_map_to_block_tariffs(self):
        assert TariffGroup.HOUSEHOLD_TWO.schedule_key == "group_5"
        assert TariffGroup.HOUSEHOLD_ONE.schedule_key == "group_6"

    def test_business_groups_map_to_themselves(self):
        assert TariffGroup.GROUP_3.schedule_key == "group_3"
        assert TariffGroup.GROUP_8.schedule_key == "group_8"

    def test_parse_unknown(self):
        """Unknown tags, including raw schedule keys, are not payload groups."""
        assert TariffGroup.parse("group_5") is None
        assert TariffGroup.parse(None) is None
        assert TariffGroup.parse("household_one") is TariffGroup.HOUSEHOLD_ONE

    def test_every_group_has_label(self):
        for group in TariffGroup:
            assert group.label


class TestTariffSchedule:
    """Parsing the published document."""

    def test_parses_packaged_document(self, schedule):
        assert isinstance(schedule.group_5, TwoRateBlockTariff)
        assert isinstance(schedule.group_6, OneRateBlockTariff)
        assert isinstance(schedule.group_3, DualRateTariff)
        assert isinstance(schedule.group_7, SingleRateTariff)
        assert schedule.name == "tariffs_2025"

    def test_only_group_3_has_demand_and_reactive(self, schedule):
        assert schedule.group_3.demand_charge is not None
        assert schedule.group_3.reactive_energy is not None
        assert schedule.group_1.demand_charge is None
        assert schedule.group_2.reactive_energy is None

    def test_for_group(self, schedule):
        assert schedule.for_group(TariffGroup.HOUSEHOLD_TWO) is schedule.group_5
        assert schedule.for_group(TariffGroup.GROUP_4) is schedule.group_4

    def test_numeric_strings_accepted(self, tariff_document):
        """Numeric strings parse like numbers."""
        tariff_document["group_4"]["fixed_fee"] = "4.5"
        schedule = TariffSchedule.from_dict(tariff_document)

        assert schedule.group_4.fixed_fee == 4.5

    def test_missing_group_rejected(self, tariff_document):
        del tariff_document["group_7"]

        with pytest.raises(TariffScheduleError, match="group_7"):
            TariffSchedule.from_dict(tariff_document)

    def test_missing_rate_rejected(self, tariff_document):
        del tariff_document["group_5"]["block_2"]["low"]

        with pytest.raises(TariffScheduleError, match="group_5.block_2.low"):
            TariffSchedule.from_dict(tariff_document)

    def test_non_numeric_rate_rejected(self, tariff_document):
        tariff_document["group_1"]["active_energy"]["high"] = "cheap"

        with pytest.raises(TariffScheduleError, match="not numeric"):
            TariffSchedule.from_dict(tariff_document)

    def test_non_object_rejected(self):
        with pytest.raises(TariffScheduleError):
            TariffSchedule.from_dict(["group_1"])

    def test_to_dict_matches_document(self, schedule, tariff_document):
        """Serialized schedule reproduces the published document."""
        assert schedule.to_dict() == tariff_document

    def test_schedule_is_immutable(self, schedule):
        with pytest.raises(Exception):
            schedule.group_5.fixed_fee = 0


class TestLoader:
    """Loading from files and configuration."""

    def test_load_from_path(self, tmp_path, tariff_document):
        tariff_document.pop("name")
        path = tmp_path / "custom_rates.json"
        path.write_text(json.dumps(tariff_document))

        schedule = load_tariff_schedule(str(path))

        assert schedule.name == "custom_rates"
        assert schedule.group_5.fixed_fee == tariff_document["group_5"]["fixed_fee"]

    def test_env_path(self, tmp_path, tariff_document, monkeypatch):
        tariff_document["name"] = "from_env"
        path = tmp_path / "rates.json"
        path.write_text(json.dumps(tariff_document))
        monkeypatch.setenv("TARIFF_SCHEDULE_PATH", str(path))

        assert get_tariff_schedule().name == "from_env"

    def test_cached(self):
        assert get_tariff_schedule() is get_tariff_schedule()

    def test_missing_file(self, tmp_path):
        with pytest.raises(TariffScheduleError, match="not found"):
            load_tariff_schedule(str(tmp_path / "missing.json"))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{ group_1: ")

        with pytest.raises(TariffScheduleError, match="not valid JSON"):
            load_tariff_schedule(str(path))

    def test_directory_path(self, tmp_path):
        with pytest.raises(TariffScheduleError, match="unreadable"):
            load_tariff_schedule(str(tmp_path))

    def test_non_utf8_file(self, tmp_path):
        path = tmp_path / "latin.json"
        path.write_bytes(b"\xff\xfe{")

        with pytest.raises(TariffScheduleError, match="UTF-8"):
            load_tariff_schedule(str(path))

    def test_numeric_name_kept_as_text(self, tmp_path, tariff_document):
        tariff_document["name"] = 2025
        path = tmp_path / "numbered.json"
        path.write_text(json.dumps(tariff_document))

        assert load_tariff_schedule(str(path)).name == "2025"
