"""
Tariff Schedule Model

A tariff schedule is the published rate document: one record per tariff
group (group_1 ... group_8). Energy prices are authored in hundredths of the
currency unit per kWh; the group_3 demand charge is authored in base units
per kW and must stay that way.

Records are frozen so a loaded schedule can be shared across requests.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from .errors import TariffScheduleError


class TariffGroup(Enum):
    """Billing categories accepted in a consumption payload."""
    HOUSEHOLD_TWO = "household_two"
    HOUSEHOLD_ONE = "household_one"
    GROUP_1 = "group_1"
    GROUP_2 = "group_2"
    GROUP_3 = "group_3"
    GROUP_4 = "group_4"
    GROUP_7 = "group_7"
    GROUP_8 = "group_8"

    @property
    def schedule_key(self) -> str:
        """Key of the group's record in the tariff document."""
        return _SCHEDULE_KEYS.get(self, self.value)

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def parse(cls, value: Any) -> Optional["TariffGroup"]:
        """Return the group for a tag, or None when the tag is unknown."""
        try:
            return cls(value)
        except ValueError:
            return None


_SCHEDULE_KEYS = {
    TariffGroup.HOUSEHOLD_TWO: "group_5",
    TariffGroup.HOUSEHOLD_ONE: "group_6",
}

_LABELS = {
    TariffGroup.HOUSEHOLD_TWO: "Household (2-tariff: A1/A2)",
    TariffGroup.HOUSEHOLD_ONE: "Household (1-tariff: single)",
    TariffGroup.GROUP_1: "Business 35 kV",
    TariffGroup.GROUP_2: "Business 10 kV",
    TariffGroup.GROUP_3: "Business 0.4 kV Category I",
    TariffGroup.GROUP_4: "Business 0.4 kV Category II",
    TariffGroup.GROUP_7: "Household per meter",
    TariffGroup.GROUP_8: "Public lighting",
}

DUAL_RATE_GROUPS = (TariffGroup.GROUP_1, TariffGroup.GROUP_2, TariffGroup.GROUP_3)
SINGLE_RATE_GROUPS = (TariffGroup.GROUP_4, TariffGroup.GROUP_7, TariffGroup.GROUP_8)


def _number(record: Mapping[str, Any], key: str, path: str) -> float:
    try:
        value = record[key]
    except (KeyError, TypeError):
        raise TariffScheduleError(f"Missing tariff field: {path}.{key}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise TariffScheduleError(f"Tariff field {path}.{key} is not numeric: {value!r}")


def _optional_number(record: Mapping[str, Any], key: str, path: str) -> Optional[float]:
    if record.get(key) is None:
        return None
    return _number(record, key, path)


def _section(record: Mapping[str, Any], key: str, path: str) -> Mapping[str, Any]:
    section = record.get(key) if isinstance(record, Mapping) else None
    if not isinstance(section, Mapping):
        raise TariffScheduleError(f"Missing tariff section: {path}.{key}")
    return section


@dataclass(frozen=True)
class RatePair:
    """High/low prices in hundredths per kWh."""
    high: float
    low: float


@dataclass(frozen=True)
class TwoRateBlockTariff:
    """Household two-rate tariff (group_5): A1/A2 prices per block."""
    fixed_fee: float
    block_1: RatePair
    block_2: RatePair

    @classmethod
    def from_dict(cls, record: Mapping[str, Any], path: str) -> "TwoRateBlockTariff":
        b1 = _section(record, "block_1", path)
        b2 = _section(record, "block_2", path)
        return cls(
            fixed_fee=_number(record, "fixed_fee", path),
            block_1=RatePair(
                high=_number(b1, "high", f"{path}.block_1"),
                low=_number(b1, "low", f"{path}.block_1"),
            ),
            block_2=RatePair(
                high=_number(b2, "high", f"{path}.block_2"),
                low=_number(b2, "low", f"{path}.block_2"),
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fixed_fee": self.fixed_fee,
            "block_1": {"high": self.block_1.high, "low": self.block_1.low},
            "block_2": {"high": self.block_2.high, "low": self.block_2.low},
        }


@dataclass(frozen=True)
class OneRateBlockTariff:
    """Household one-rate tariff (group_6): single price per block."""
    fixed_fee: float
    block_1: float
    block_2: float

    @classmethod
    def from_dict(cls, record: Mapping[str, Any], path: str) -> "OneRateBlockTariff":
        return cls(
            fixed_fee=_number(record, "fixed_fee", path),
            block_1=_number(_section(record, "block_1", path), "single", f"{path}.block_1"),
            block_2=_number(_section(record, "block_2", path), "single", f"{path}.block_2"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fixed_fee": self.fixed_fee,
            "block_1": {"single": self.block_1},
            "block_2": {"single": self.block_2},
        }


@dataclass(frozen=True)
class DualRateTariff:
    """
    Flat high/low tariff (group_1, group_2, group_3).

    demand_charge is €/kW (base units); reactive_energy is c€/kVArh.
    Both are None for groups that do not bill them.
    """
    fixed_fee: float
    high: float
    low: float
    demand_charge: Optional[float] = None
    reactive_energy: Optional[float] = None

    @classmethod
    def from_dict(cls, record: Mapping[str, Any], path: str) -> "DualRateTariff":
        energy = _section(record, "active_energy", path)
        return cls(
            fixed_fee=_number(record, "fixed_fee", path),
            high=_number(energy, "high", f"{path}.active_energy"),
            low=_number(energy, "low", f"{path}.active_energy"),
            demand_charge=_optional_number(record, "demand_charge", path),
            reactive_energy=_optional_number(record, "reactive_energy", path),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "fixed_fee": self.fixed_fee,
            "active_energy": {"high": self.high, "low": self.low},
        }
        if self.demand_charge is not None:
            data["demand_charge"] = self.demand_charge
        if self.reactive_energy is not None:
            data["reactive_energy"] = self.reactive_energy
        return data


@dataclass(frozen=True)
class SingleRateTariff:
    """Flat single-rate tariff (group_4, group_7, group_8)."""
    fixed_fee: float
    single: float

    @classmethod
    def from_dict(cls, record: Mapping[str, Any], path: str) -> "SingleRateTariff":
        return cls(
            fixed_fee=_number(record, "fixed_fee", path),
            single=_number(_section(record, "active_energy", path), "single", f"{path}.active_energy"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"fixed_fee": self.fixed_fee, "active_energy": {"single": self.single}}


@dataclass(frozen=True)
class TariffSchedule:
    """The full rate document, keyed the way it is published."""
    group_1: DualRateTariff
    group_2: DualRateTariff
    group_3: DualRateTariff
    group_4: SingleRateTariff
    group_5: TwoRateBlockTariff
    group_6: OneRateBlockTariff
    group_7: SingleRateTariff
    group_8: SingleRateTariff
    name: str = ""

    @classmethod
    def from_dict(cls, document: Mapping[str, Any], name: str = "") -> "TariffSchedule":
        """Build a schedule from a decoded tariff document."""
        if not isinstance(document, Mapping):
            raise TariffScheduleError("Tariff document must be a JSON object")

        def record(key: str) -> Mapping[str, Any]:
            value = document.get(key)
            if not isinstance(value, Mapping):
                raise TariffScheduleError(f"Missing tariff group: {key}")
            return value

        return cls(
            group_1=DualRateTariff.from_dict(record("group_1"), "group_1"),
            group_2=DualRateTariff.from_dict(record("group_2"), "group_2"),
            group_3=DualRateTariff.from_dict(record("group_3"), "group_3"),
            group_4=SingleRateTariff.from_dict(record("group_4"), "group_4"),
            group_5=TwoRateBlockTariff.from_dict(record("group_5"), "group_5"),
            group_6=OneRateBlockTariff.from_dict(record("group_6"), "group_6"),
            group_7=SingleRateTariff.from_dict(record("group_7"), "group_7"),
            group_8=SingleRateTariff.from_dict(record("group_8"), "group_8"),
            name=name or str(document.get("name", "")),
        )

    def for_group(self, group: TariffGroup):
        """Return the tariff record that prices a payload group."""
        return getattr(self, group.schedule_key)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.name:
            data["name"] = self.name
        for key in ("group_1", "group_2", "group_3", "group_4",
                    "group_5", "group_6", "group_7", "group_8"):
            data[key] = getattr(self, key).to_dict()
        return data
