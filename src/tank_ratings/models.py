"""
Data models for the tank database.

Vehicles with their stock/top equipment, the five module kinds and the two
states a dataset passes through:

- RawDataset: what ingestion produced. Parent/child links and module
  compatibility are still plain vehicle names.
- Dataset: the resolved state. Every link is a direct Vehicle reference.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any, Iterator, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_validator


# Representable ranges of the ingested numbers (byte / int32 in the
# scraped database). Plausibility is checked later by the validator.
Byte = Annotated[int, Field(ge=-128, le=127)]
Int32 = Annotated[int, Field(ge=-(2**31), le=2**31 - 1)]


# =============================================================================
# Enums
# =============================================================================

class Nation(str, Enum):
    """Nation a vehicle or module belongs to."""
    CHINA = "China"
    FRANCE = "France"
    GERMANY = "Germany"
    UK = "UK"
    USA = "USA"
    USSR = "USSR"

    @classmethod
    def parse(cls, text: str) -> "Nation":
        """Parse a nation from scraped text ("Soviet", "british", "USA"...)."""
        s = text.strip().lower()
        if "chin" in s:
            return cls.CHINA
        if "french" in s or "france" in s:
            return cls.FRANCE
        if "german" in s:
            return cls.GERMANY
        if "brit" in s or s == "uk" or "united kingdom" in s:
            return cls.UK
        if "america" in s or "usa" in s:
            return cls.USA
        if "soviet" in s or "ussr" in s:
            return cls.USSR
        raise ValueError(f"Nation '{text}' was not recognized")


class Currency(str, Enum):
    """Currency a vehicle or module is bought with."""
    CREDITS = "Credits"
    GOLD = "Gold"
    # Premium vehicles are never bought with credits or gold
    PREMIUM = "Premium"

    @classmethod
    def parse(cls, text: str) -> "Currency":
        s = text.strip().lower()
        for member in cls:
            if member.value.lower() == s:
                return member
        raise ValueError(f"Currency '{text}' was not recognized")


class VehicleType(str, Enum):
    """Vehicle class."""
    LIGHT_TANK = "LightTank"
    MEDIUM_TANK = "MediumTank"
    HEAVY_TANK = "HeavyTank"
    TANK_DESTROYER = "TankDestroyer"
    SELF_PROPELLED_GUN = "SelfPropelledGun"

    @classmethod
    def parse(cls, text: str) -> "VehicleType":
        """Parse the vehicle class labels used on the wiki."""
        s = text.strip()
        aliases = {
            "Light Tank": cls.LIGHT_TANK,
            "Medium Tank": cls.MEDIUM_TANK,
            "Heavy Tank": cls.HEAVY_TANK,
            "TD": cls.TANK_DESTROYER,
            "Tank Destroyer": cls.TANK_DESTROYER,
            "Turreted TD": cls.TANK_DESTROYER,
            "SPG": cls.SELF_PROPELLED_GUN,
            "Self Propelled Gun": cls.SELF_PROPELLED_GUN,
        }
        if s in aliases:
            return aliases[s]
        for member in cls:
            if member.value == s:
                return member
        raise ValueError(f"Vehicle type '{text}' was not recognized")

    @property
    def short_label(self) -> str:
        return {
            VehicleType.LIGHT_TANK: "Light",
            VehicleType.MEDIUM_TANK: "Medium",
            VehicleType.HEAVY_TANK: "Heavy",
            VehicleType.TANK_DESTROYER: "TD",
            VehicleType.SELF_PROPELLED_GUN: "SPG",
        }[self]

    @property
    def turret_optional(self) -> bool:
        """Whether vehicles of this class commonly come without a turret."""
        return self in (VehicleType.TANK_DESTROYER, VehicleType.SELF_PROPELLED_GUN)


class Development(str, Enum):
    """Development stage: initial (stock) or fully researched (top) equipment."""
    STOCK = "stock"
    TOP = "top"

    @property
    def short_label(self) -> str:
        return "S" if self is Development.STOCK else "T"


class ModuleKind(str, Enum):
    """The five equippable module kinds."""
    ENGINE = "Engine"
    GUN = "Gun"
    RADIO = "Radio"
    SUSPENSION = "Suspension"
    TURRET = "Turret"


class FuelType(str, Enum):
    GASOLINE = "Gasoline"
    DIESEL = "Diesel"

    @classmethod
    def parse(cls, text: str) -> "FuelType":
        s = text.strip().lower()
        if s.startswith("gasoline"):
            return cls.GASOLINE
        if s.startswith("diesel"):
            return cls.DIESEL
        raise ValueError(f"Fuel type '{text}' was not recognized")


def make_vehicle_id(name: str) -> str:
    """Derive a machine-safe vehicle id from its display name.

    >>> make_vehicle_id("T-34-85 (Rudy)")
    '_T-34-85Rudy'
    """
    cleaned = re.sub(r'[\\/:*?"<>|]', "", name.replace("\u00a0", " ").strip())
    return "_" + re.sub(r"[\s().]", "", cleaned)


def _parse_labels(data: Any, enums: dict[str, Any]) -> Any:
    """Turn scraped enum labels of a raw record into enum members."""
    if not isinstance(data, dict):
        return data
    parsed = dict(data)
    for key, enum in enums.items():
        value = parsed.get(key)
        if isinstance(value, str) and not isinstance(value, Enum):
            parsed[key] = enum.parse(value)
    return parsed


# =============================================================================
# Vehicles
# =============================================================================

class Equipment(BaseModel):
    """Attributes that differ between a vehicle's stock and top configuration."""
    model_config = ConfigDict(allow_inf_nan=False)

    development: Development | None = None
    hitpoints: Int32 = 0
    weight: float = Field(default=0.0, description="Current weight in tons")
    weight_limit: float = Field(default=0.0, description="Maximum load in tons")
    gun_elevation_low: float = Field(default=0.0, description="Gun depression in degrees")
    gun_elevation_high: float = Field(default=0.0, description="Gun elevation in degrees")
    view_range: float = Field(default=0.0, description="View range in meters")


class Vehicle(BaseModel):
    """A tank and its base attributes.

    Vehicles are identified by ``id``: two instances with the same id are the
    same vehicle. Relations to other vehicles exist in two states, the raw
    ``parent_names``/``child_names`` collected while scraping and the resolved
    ``parents``/``children`` filled in by the reference resolver.
    """
    model_config = ConfigDict(allow_inf_nan=False)

    id: str = Field(min_length=1, description="Unique, machine-safe identifier")
    name: str = Field(description="Display name")
    wiki_url: str = ""
    nation: Nation | None = None
    type: VehicleType | None = None
    tier: Byte = 0
    battle_tier_min: Byte = 0
    battle_tier_max: Byte = 0
    gift: bool = False
    crew: Byte = 0
    speed: float = Field(default=0.0, description="Top speed in km/h")
    hull_front: float = 0.0
    hull_side: float = 0.0
    hull_rear: float = 0.0
    gun_arc_left: float = Field(default=0.0, description="Gun traverse to the left, <= 0")
    gun_arc_right: float = Field(default=0.0, description="Gun traverse to the right; 360 means unlimited")
    cost: Int32 = 0
    currency: Currency | None = None
    stock: Equipment = Field(default_factory=lambda: Equipment(development=Development.STOCK))
    top: Equipment = Field(default_factory=lambda: Equipment(development=Development.TOP))

    parent_names: list[str] = Field(default_factory=list)
    child_names: list[str] = Field(default_factory=list)
    parents: list[Vehicle] = Field(default_factory=list, exclude=True, repr=False)
    children: list[Vehicle] = Field(default_factory=list, exclude=True, repr=False)

    @model_validator(mode="before")
    @classmethod
    def parse_scraped_labels(cls, data: Any) -> Any:
        """Accept wiki labels such as "Tank Destroyer" or "Soviet"."""
        return _parse_labels(data, {"nation": Nation, "type": VehicleType, "currency": Currency})

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vehicle):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def equipment(self, development: Development) -> Equipment:
        """Return the stock or top equipment."""
        return self.stock if development is Development.STOCK else self.top

    @property
    def is_resolved(self) -> bool:
        """True once no relation is left in name form."""
        return not self.parent_names and not self.child_names


# =============================================================================
# Modules
# =============================================================================

class Module(BaseModel):
    """Attributes shared by every module kind.

    ``compatible_names`` holds the vehicle names scraped for this module;
    ``compatibility`` holds the resolved vehicles. The module owns the
    vehicle <-> module edge list.
    """
    model_config = ConfigDict(allow_inf_nan=False)

    name: str
    wiki_url: str = ""
    nation: Nation | None = None
    tier: Byte = 0
    cost: Int32 = 0
    currency: Currency | None = None
    weight: float = Field(default=0.0, description="Weight in kg")

    compatible_names: list[str] = Field(default_factory=list)
    compatibility: list[Vehicle] = Field(default_factory=list, exclude=True, repr=False)

    _placeholder: bool = PrivateAttr(default=False)

    @model_validator(mode="before")
    @classmethod
    def parse_scraped_labels(cls, data: Any) -> Any:
        return _parse_labels(data, {"nation": Nation, "currency": Currency, "fuel": FuelType})

    @property
    def module_kind(self) -> ModuleKind:
        return ModuleKind(self.kind)

    @property
    def key(self) -> str:
        """Identity used in reports, e.g. ``"Gun:75 mm L/48"``."""
        return f"{self.kind}:{self.name}"

    @property
    def is_placeholder(self) -> bool:
        """True for the zero-valued stand-in returned for an empty index bucket."""
        return self._placeholder

    def sort_key(self) -> float:
        """Ordering key used by the module index (ascending: worst to best)."""
        return self.tier

    @classmethod
    def placeholder(cls) -> "Module":
        """Build a zero-valued instance of this module kind."""
        module = cls(name="")
        module._placeholder = True
        return module


class Engine(Module):
    kind: Literal["Engine"] = "Engine"
    power: Int32 = Field(default=0, description="Horsepower")
    fire_chance: float = Field(default=0.0, description="Chance of fire in percent")
    fuel: FuelType | None = None

    def sort_key(self) -> float:
        return self.power


class Gun(Module):
    kind: Literal["Gun"] = "Gun"
    ammo_capacity_min: Int32 = 0
    ammo_capacity_max: Int32 = 0
    damage_ap: Int32 = 0
    damage_apcr: Int32 = 0
    # Only the first HE shell type is recorded for guns with several
    damage_he: Int32 = 0
    damage_heat: Int32 = 0
    penetration_ap: Int32 = 0
    penetration_apcr: Int32 = 0
    penetration_he: Int32 = 0
    penetration_heat: Int32 = 0
    fire_rate_min: float = Field(default=0.0, description="Rounds per minute, worst case")
    fire_rate_max: float = Field(default=0.0, description="Rounds per minute, best case")
    accuracy_min: float = Field(default=0.0, description="Dispersion at 100 m, best case")
    accuracy_max: float = Field(default=0.0, description="Dispersion at 100 m, worst case")
    aim_time_min: float = 0.0
    aim_time_max: float = 0.0


class Radio(Module):
    kind: Literal["Radio"] = "Radio"
    range: Int32 = Field(default=0, description="Signal range in meters")

    def sort_key(self) -> float:
        return self.range


class Suspension(Module):
    kind: Literal["Suspension"] = "Suspension"
    load: float = Field(default=0.0, description="Load limit in tons")
    traverse: Int32 = Field(default=0, description="Hull traverse in degrees per second")


class Turret(Module):
    kind: Literal["Turret"] = "Turret"
    armor_front: float = 0.0
    armor_side: float = 0.0
    armor_rear: float = 0.0
    traverse: float = Field(default=0.0, description="Turret traverse in degrees per second")
    view_range: float = 0.0


AnyModule = Annotated[
    Union[Engine, Gun, Radio, Suspension, Turret],
    Field(discriminator="kind"),
]

MODULE_TYPES: dict[ModuleKind, type[Module]] = {
    ModuleKind.ENGINE: Engine,
    ModuleKind.GUN: Gun,
    ModuleKind.RADIO: Radio,
    ModuleKind.SUSPENSION: Suspension,
    ModuleKind.TURRET: Turret,
}


def _empty_modules() -> dict[ModuleKind, list[Module]]:
    return {kind: [] for kind in ModuleKind}


# =============================================================================
# Datasets
# =============================================================================

@dataclass
class RejectedRecord:
    """A scraped record that could not be turned into an entity."""
    kind: str           # "Vehicle" or a ModuleKind value
    identity: str       # id or name, if the record had one
    message: str


@dataclass
class ReferenceDefect:
    """A by-name reference that did not resolve, or a clashing identity."""
    owner: str          # vehicle id or module key
    relation: str       # "parents", "children", "compatibility" or "identity"
    name: str           # the offending reference
    message: str = ""

    def __str__(self) -> str:
        return self.message or f"{self.owner}: unresolved {self.relation} reference '{self.name}'"


@dataclass
class RawDataset:
    """Ingested vehicles and modules; relations are still vehicle names."""
    vehicles: list[Vehicle] = field(default_factory=list)
    modules: dict[ModuleKind, list[Module]] = field(default_factory=_empty_modules)
    rejected: list[RejectedRecord] = field(default_factory=list)

    def add_module(self, module: Module) -> None:
        self.modules[module.module_kind].append(module)

    def all_modules(self) -> Iterator[Module]:
        for kind in ModuleKind:
            yield from self.modules.get(kind, [])


@dataclass
class Dataset:
    """The resolved dataset: all vehicles and, grouped by kind, all modules.

    Built by the reference resolver. ``reference_defects`` lists every link
    that was dropped while resolving.
    """
    vehicles: list[Vehicle] = field(default_factory=list)
    modules: dict[ModuleKind, list[Module]] = field(default_factory=_empty_modules)
    reference_defects: list[ReferenceDefect] = field(default_factory=list)
    rejected: list[RejectedRecord] = field(default_factory=list)

    def __post_init__(self) -> None:
        for kind in ModuleKind:
            self.modules.setdefault(kind, [])
        self._by_id = {v.id: v for v in self.vehicles}

    def vehicle(self, vehicle_id: str) -> Vehicle | None:
        """Look up a vehicle by id."""
        return self._by_id.get(vehicle_id)

    def __contains__(self, vehicle: object) -> bool:
        if isinstance(vehicle, Vehicle):
            return self._by_id.get(vehicle.id) is vehicle
        return False

    def modules_of(self, kind: ModuleKind) -> list[Module]:
        return self.modules[kind]

    def all_modules(self) -> Iterator[Module]:
        for kind in ModuleKind:
            yield from self.modules[kind]

    def vehicles_of_type(self, vehicle_type: VehicleType) -> list[Vehicle]:
        return [v for v in self.vehicles if v.type is vehicle_type]


__all__ = [
    "Nation",
    "Currency",
    "VehicleType",
    "Development",
    "ModuleKind",
    "FuelType",
    "make_vehicle_id",
    "Equipment",
    "Vehicle",
    "Module",
    "Engine",
    "Gun",
    "Radio",
    "Suspension",
    "Turret",
    "AnyModule",
    "MODULE_TYPES",
    "RejectedRecord",
    "ReferenceDefect",
    "RawDataset",
    "Dataset",
]
