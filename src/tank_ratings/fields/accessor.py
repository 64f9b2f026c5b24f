"""
Field accessors.

Three independent tables map a FieldId to behavior:

- DISPLAY: a formatter returning the field as text,
- NUMERIC: an extractor returning the field as a number (-1.0 for fields
  without numeric meaning),
- catalogue.NORMALIZATION: the scoring direction of scorable fields.

Both DISPLAY and NUMERIC take a VehicleView, i.e. a vehicle seen in one
development through a module index.
"""

from dataclasses import dataclass
from typing import Any, Callable, Protocol

from ..models import Development, Equipment, Module, ModuleKind, Vehicle
from ..module_index import ModuleIndex
from .catalogue import (
    NORMALIZATION,
    RELATION_FIELDS,
    Direction,
    FieldId,
    is_rating_field,
    module_kind_of,
)

NOT_AVAILABLE = "n/a"
NOT_NUMERIC = -1.0


@dataclass(frozen=True)
class VehicleView:
    """A vehicle in one development, with its modules looked up in ``index``."""
    vehicle: Vehicle
    development: Development
    index: ModuleIndex

    @property
    def equipment(self) -> Equipment:
        return self.vehicle.equipment(self.development)

    @property
    def is_stock(self) -> bool:
        return self.development is Development.STOCK

    def module(self, kind: ModuleKind) -> Module:
        """The stock or top module of ``kind``; a placeholder if there is none."""
        return self.index.lookup(self.vehicle, kind, self.development)


class RatingLike(Protocol):
    def value_of(self, name: str) -> float | None: ...


# =============================================================================
# Formatting
# =============================================================================

def format_number(value: Any) -> str:
    """Integers as is, floats with one decimal."""
    if value is None:
        return NOT_AVAILABLE
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, int):
        return str(value)
    return f"{value:.1f}"


def format_precise(value: float | None) -> str:
    """Two decimals, used for gun figures."""
    return NOT_AVAILABLE if value is None else f"{value:.2f}"


def format_enum(value: Any) -> str:
    return NOT_AVAILABLE if value is None else value.value


def format_percent(score: float | None) -> str:
    """A score in [0, 1] as a percentage; "n/a" when not applicable."""
    return NOT_AVAILABLE if score is None else f"{score * 100:.1f}%"


def format_names(items: list) -> str:
    return ", ".join(item.name for item in items)


def _numeric(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return NOT_NUMERIC
    return float(value)


# =============================================================================
# Derived values
# =============================================================================

def _gun(view: VehicleView):
    return view.module(ModuleKind.GUN)


def gun_arc(view: VehicleView) -> float:
    return abs(view.vehicle.gun_arc_left) + view.vehicle.gun_arc_right


def elevation(view: VehicleView) -> float:
    eq = view.equipment
    return abs(eq.gun_elevation_low) + eq.gun_elevation_high


def fire_rate(view: VehicleView) -> float:
    """Rounds per minute: worst figure for stock, best for top."""
    gun = _gun(view)
    return gun.fire_rate_min if view.is_stock else gun.fire_rate_max


def ammo_capacity(view: VehicleView) -> float:
    gun = _gun(view)
    return float(gun.ammo_capacity_min if view.is_stock else gun.ammo_capacity_max)


def accuracy(view: VehicleView) -> float:
    """Dispersion: worst (largest) figure for stock, best for top."""
    gun = _gun(view)
    return gun.accuracy_max if view.is_stock else gun.accuracy_min


def aim_time(view: VehicleView) -> float:
    gun = _gun(view)
    return gun.aim_time_max if view.is_stock else gun.aim_time_min


def power_weight_ratio(view: VehicleView) -> float:
    """Horsepower per ton; 0.0 when the weight is unknown."""
    weight = view.equipment.weight
    if weight <= 0:
        return 0.0
    return view.module(ModuleKind.ENGINE).power / weight


def ammo_normalized(view: VehicleView) -> float:
    """Seconds of continuous fire before the ammunition runs out."""
    rate = fire_rate(view)
    if rate <= 0:
        return 0.0
    return ammo_capacity(view) / (rate / 60.0)


def damage_per_second(attr: str) -> Callable[[VehicleView], float]:
    def calc(view: VehicleView) -> float:
        return getattr(_gun(view), attr) * fire_rate(view) / 60.0
    return calc


# =============================================================================
# Table construction
# =============================================================================

DisplayFn = Callable[[VehicleView], str]
NumericFn = Callable[[VehicleView], float]

DISPLAY: dict[FieldId, DisplayFn] = {}
NUMERIC: dict[FieldId, NumericFn] = {}


def _register(field: FieldId, display: DisplayFn, numeric: NumericFn | None = None) -> None:
    DISPLAY[field] = display
    NUMERIC[field] = numeric if numeric is not None else (lambda view: NOT_NUMERIC)


def _vehicle_attr(field: FieldId, attr: str, fmt: Callable[[Any], str] = format_number) -> None:
    _register(
        field,
        lambda view: fmt(getattr(view.vehicle, attr)),
        lambda view: _numeric(getattr(view.vehicle, attr)),
    )


def _equipment_attr(field: FieldId, attr: str) -> None:
    _register(
        field,
        lambda view: format_number(getattr(view.equipment, attr)),
        lambda view: _numeric(getattr(view.equipment, attr)),
    )


# (field, attribute, formatter) for every per-module field
MODULE_FIELDS: dict[FieldId, tuple[str, Callable[[Any], str]]] = {}

for _prefix in ("ME", "MG", "MR", "MS", "MT"):
    MODULE_FIELDS[FieldId[f"{_prefix}_NAME"]] = ("name", str)
    MODULE_FIELDS[FieldId[f"{_prefix}_TIER"]] = ("tier", format_number)
    MODULE_FIELDS[FieldId[f"{_prefix}_NATION"]] = ("nation", format_enum)
    MODULE_FIELDS[FieldId[f"{_prefix}_COST"]] = ("cost", format_number)
    MODULE_FIELDS[FieldId[f"{_prefix}_CURRENCY"]] = ("currency", format_enum)
    MODULE_FIELDS[FieldId[f"{_prefix}_WEIGHT"]] = ("weight", format_number)
    MODULE_FIELDS[FieldId[f"{_prefix}_COMPATIBILITY"]] = ("compatibility", format_names)

MODULE_FIELDS.update({
    FieldId.ME_POWER: ("power", format_number),
    FieldId.ME_FIRE_CHANCE: ("fire_chance", format_number),
    FieldId.ME_FUEL: ("fuel", format_enum),
    FieldId.MG_ACCURACY_MIN: ("accuracy_min", format_precise),
    FieldId.MG_ACCURACY_MAX: ("accuracy_max", format_precise),
    FieldId.MG_AIM_TIME_MIN: ("aim_time_min", format_precise),
    FieldId.MG_AIM_TIME_MAX: ("aim_time_max", format_precise),
    FieldId.MG_AMMO_MIN: ("ammo_capacity_min", format_number),
    FieldId.MG_AMMO_MAX: ("ammo_capacity_max", format_number),
    FieldId.MG_DAMAGE_AP: ("damage_ap", format_number),
    FieldId.MG_DAMAGE_APCR: ("damage_apcr", format_number),
    FieldId.MG_DAMAGE_HE: ("damage_he", format_number),
    FieldId.MG_DAMAGE_HEAT: ("damage_heat", format_number),
    FieldId.MG_FIRE_RATE_MIN: ("fire_rate_min", format_precise),
    FieldId.MG_FIRE_RATE_MAX: ("fire_rate_max", format_precise),
    FieldId.MG_PEN_AP: ("penetration_ap", format_number),
    FieldId.MG_PEN_APCR: ("penetration_apcr", format_number),
    FieldId.MG_PEN_HE: ("penetration_he", format_number),
    FieldId.MG_PEN_HEAT: ("penetration_heat", format_number),
    FieldId.MR_RANGE: ("range", format_number),
    FieldId.MS_LOAD: ("load", format_number),
    FieldId.MS_TRAVERSE: ("traverse", format_number),
    FieldId.MT_ARMOR_FRONT: ("armor_front", format_number),
    FieldId.MT_ARMOR_SIDE: ("armor_side", format_number),
    FieldId.MT_ARMOR_REAR: ("armor_rear", format_number),
    FieldId.MT_TRAVERSE: ("traverse", format_number),
    FieldId.MT_VIEW_RANGE: ("view_range", format_number),
})


def format_module_field(field: FieldId, module: Module) -> str:
    attr, fmt = MODULE_FIELDS[field]
    if module.is_placeholder:
        return NOT_AVAILABLE
    return fmt(getattr(module, attr))


def _module_attr(field: FieldId) -> None:
    kind = module_kind_of(field)
    attr, _ = MODULE_FIELDS[field]
    _register(
        field,
        lambda view: format_module_field(field, view.module(kind)),
        lambda view: _numeric(getattr(view.module(kind), attr)),
    )


def _derived(field: FieldId, calc: NumericFn, fmt: Callable[[float], str] = format_number) -> None:
    _register(field, lambda view: fmt(calc(view)), calc)


def _gun_derived(field: FieldId, calc: NumericFn, fmt: Callable[[float], str] = format_number) -> None:
    """Derived gun figure, shown as "n/a" when the vehicle has no gun or it is zero."""
    def display(view: VehicleView) -> str:
        if _gun(view).is_placeholder:
            return NOT_AVAILABLE
        value = calc(view)
        return fmt(value) if value > 0 else NOT_AVAILABLE
    _register(field, display, calc)


def _build_tables() -> None:
    _vehicle_attr(FieldId.T_ID, "id", str)
    _vehicle_attr(FieldId.T_NAME, "name", str)
    _vehicle_attr(FieldId.T_TYPE, "type", format_enum)
    _vehicle_attr(FieldId.T_NATION, "nation", format_enum)
    _vehicle_attr(FieldId.T_TIER, "tier")
    _vehicle_attr(FieldId.T_BATTLE_TIER_MIN, "battle_tier_min")
    _vehicle_attr(FieldId.T_BATTLE_TIER_MAX, "battle_tier_max")
    _vehicle_attr(FieldId.T_CREW, "crew")
    _vehicle_attr(FieldId.T_TOP_SPEED, "speed")
    _vehicle_attr(FieldId.T_HULL_FRONT, "hull_front")
    _vehicle_attr(FieldId.T_HULL_SIDE, "hull_side")
    _vehicle_attr(FieldId.T_HULL_REAR, "hull_rear")
    _vehicle_attr(FieldId.T_COST, "cost")
    _vehicle_attr(FieldId.T_CURRENCY, "currency", format_enum)
    _vehicle_attr(FieldId.T_GIFT, "gift")
    _vehicle_attr(FieldId.T_GUN_ARC_LEFT, "gun_arc_left")
    _vehicle_attr(FieldId.T_GUN_ARC_RIGHT, "gun_arc_right")
    _register(FieldId.T_PARENTS, lambda view: format_names(view.vehicle.parents))
    _register(FieldId.T_CHILDREN, lambda view: format_names(view.vehicle.children))

    _register(FieldId.TE_DEVELOPMENT, lambda view: view.development.value.capitalize())
    _equipment_attr(FieldId.TE_ELEVATION_LOW, "gun_elevation_low")
    _equipment_attr(FieldId.TE_ELEVATION_HIGH, "gun_elevation_high")
    _equipment_attr(FieldId.TE_HITPOINTS, "hitpoints")
    _equipment_attr(FieldId.TE_VIEW_RANGE, "view_range")
    _equipment_attr(FieldId.TE_WEIGHT, "weight")
    _equipment_attr(FieldId.TE_WEIGHT_LIMIT, "weight_limit")

    for field in MODULE_FIELDS:
        _module_attr(field)

    for field, kind in RELATION_FIELDS.items():
        _register(
            field,
            lambda view, kind=kind: format_names(list(view.index.modules(view.vehicle, kind))),
        )

    _derived(FieldId.DP_GUN_ARC, gun_arc, lambda v: str(int(v)))
    _derived(FieldId.DP_ELEVATION, elevation)
    _derived(FieldId.DP_POWER_WEIGHT, power_weight_ratio)
    _gun_derived(FieldId.DP_AMMO_NORMALIZED, ammo_normalized)
    _gun_derived(FieldId.DP_DPS_AP, damage_per_second("damage_ap"))
    _gun_derived(FieldId.DP_DPS_APCR, damage_per_second("damage_apcr"))
    _gun_derived(FieldId.DP_DPS_HE, damage_per_second("damage_he"))
    _gun_derived(FieldId.DP_DPS_HEAT, damage_per_second("damage_heat"))
    _gun_derived(FieldId.DP_ACCURACY, accuracy, format_precise)
    _gun_derived(FieldId.DP_AIM_TIME, aim_time, format_precise)
    _gun_derived(FieldId.DP_FIRE_RATE, fire_rate, format_precise)
    _gun_derived(FieldId.DP_AMMO_CAPACITY, ammo_capacity, lambda v: str(int(v)))


_build_tables()


# =============================================================================
# Accessor
# =============================================================================

class FieldAccessor:
    """Reads catalogue fields of vehicles through a module index.

    Args:
        index: Module index used to find a vehicle's stock and top modules.
    """

    def __init__(self, index: ModuleIndex):
        self.index = index

    def view(self, vehicle: Vehicle, development: Development) -> VehicleView:
        return VehicleView(vehicle, development, self.index)

    def get(self, field: FieldId, vehicle: Vehicle, development: Development) -> str:
        """The field as display text.

        Raises:
            KeyError: For rating fields, which need a rating (see get_rating).
        """
        if is_rating_field(field):
            raise KeyError(f"{field.value} is a rating field, use get_rating()")
        return DISPLAY[field](self.view(vehicle, development))

    def calc(self, field: FieldId, vehicle: Vehicle, development: Development) -> float:
        """The field as a number; -1.0 for fields without numeric meaning."""
        if field not in NUMERIC:
            return NOT_NUMERIC
        return NUMERIC[field](self.view(vehicle, development))

    def get_module(self, field: FieldId, module: Module) -> str:
        """A module field read directly from a module.

        Raises:
            ValueError: If ``field`` is not a field of the module's kind.
        """
        if field not in MODULE_FIELDS or module_kind_of(field) is not module.module_kind:
            raise ValueError(f"{field.value} is not a {module.kind} field")
        return format_module_field(field, module)

    def get_rating(self, field: FieldId, rating: RatingLike) -> str:
        """A rating field as a percentage."""
        if not is_rating_field(field):
            raise ValueError(f"{field.value} is not a rating field")
        return format_percent(rating.value_of(field.attribute))

    @staticmethod
    def direction(field: FieldId) -> Direction | None:
        """HIGHER or LOWER for scorable fields, None otherwise."""
        return NORMALIZATION.get(field)


__all__ = [
    "NOT_AVAILABLE",
    "NOT_NUMERIC",
    "VehicleView",
    "FieldAccessor",
    "DISPLAY",
    "NUMERIC",
    "MODULE_FIELDS",
    "format_number",
    "format_precise",
    "format_percent",
]
