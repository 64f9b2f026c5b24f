"""
The field catalogue.

Every attribute that can be shown for or computed from a vehicle in one of
its two developments has a FieldId. Which fields are scored, and in which
direction, is kept in the NORMALIZATION table below.
"""

from enum import Enum

from ..models import ModuleKind


class FieldId(str, Enum):
    """Identifier of a vehicle, equipment, module, derived or rating field."""

    # Vehicle base attributes
    T_ID = "tank.id"
    T_NAME = "tank.name"
    T_TYPE = "tank.type"
    T_NATION = "tank.nation"
    T_TIER = "tank.tier"
    T_BATTLE_TIER_MIN = "tank.battle_tier_min"
    T_BATTLE_TIER_MAX = "tank.battle_tier_max"
    T_CREW = "tank.crew"
    T_TOP_SPEED = "tank.top_speed"
    T_HULL_FRONT = "tank.hull_front"
    T_HULL_SIDE = "tank.hull_side"
    T_HULL_REAR = "tank.hull_rear"
    T_COST = "tank.cost"
    T_CURRENCY = "tank.currency"
    T_GIFT = "tank.gift"
    T_GUN_ARC_LEFT = "tank.gun_arc_left"
    T_GUN_ARC_RIGHT = "tank.gun_arc_right"
    T_PARENTS = "tank.parents"
    T_CHILDREN = "tank.children"

    # Development dependent equipment
    TE_DEVELOPMENT = "equipment.development"
    TE_ELEVATION_LOW = "equipment.elevation_low"
    TE_ELEVATION_HIGH = "equipment.elevation_high"
    TE_HITPOINTS = "equipment.hitpoints"
    TE_VIEW_RANGE = "equipment.view_range"
    TE_WEIGHT = "equipment.weight"
    TE_WEIGHT_LIMIT = "equipment.weight_limit"

    # Engine
    ME_NAME = "engine.name"
    ME_TIER = "engine.tier"
    ME_NATION = "engine.nation"
    ME_COST = "engine.cost"
    ME_CURRENCY = "engine.currency"
    ME_WEIGHT = "engine.weight"
    ME_COMPATIBILITY = "engine.compatibility"
    ME_POWER = "engine.power"
    ME_FIRE_CHANCE = "engine.fire_chance"
    ME_FUEL = "engine.fuel"

    # Gun
    MG_NAME = "gun.name"
    MG_TIER = "gun.tier"
    MG_NATION = "gun.nation"
    MG_COST = "gun.cost"
    MG_CURRENCY = "gun.currency"
    MG_WEIGHT = "gun.weight"
    MG_COMPATIBILITY = "gun.compatibility"
    MG_ACCURACY_MIN = "gun.accuracy_min"
    MG_ACCURACY_MAX = "gun.accuracy_max"
    MG_AIM_TIME_MIN = "gun.aim_time_min"
    MG_AIM_TIME_MAX = "gun.aim_time_max"
    MG_AMMO_MIN = "gun.ammo_capacity_min"
    MG_AMMO_MAX = "gun.ammo_capacity_max"
    MG_DAMAGE_AP = "gun.damage_ap"
    MG_DAMAGE_APCR = "gun.damage_apcr"
    MG_DAMAGE_HE = "gun.damage_he"
    MG_DAMAGE_HEAT = "gun.damage_heat"
    MG_FIRE_RATE_MIN = "gun.fire_rate_min"
    MG_FIRE_RATE_MAX = "gun.fire_rate_max"
    MG_PEN_AP = "gun.penetration_ap"
    MG_PEN_APCR = "gun.penetration_apcr"
    MG_PEN_HE = "gun.penetration_he"
    MG_PEN_HEAT = "gun.penetration_heat"

    # Radio
    MR_NAME = "radio.name"
    MR_TIER = "radio.tier"
    MR_NATION = "radio.nation"
    MR_COST = "radio.cost"
    MR_CURRENCY = "radio.currency"
    MR_WEIGHT = "radio.weight"
    MR_COMPATIBILITY = "radio.compatibility"
    MR_RANGE = "radio.range"

    # Suspension
    MS_NAME = "suspension.name"
    MS_TIER = "suspension.tier"
    MS_NATION = "suspension.nation"
    MS_COST = "suspension.cost"
    MS_CURRENCY = "suspension.currency"
    MS_WEIGHT = "suspension.weight"
    MS_COMPATIBILITY = "suspension.compatibility"
    MS_LOAD = "suspension.load"
    MS_TRAVERSE = "suspension.traverse"

    # Turret
    MT_NAME = "turret.name"
    MT_TIER = "turret.tier"
    MT_NATION = "turret.nation"
    MT_COST = "turret.cost"
    MT_CURRENCY = "turret.currency"
    MT_WEIGHT = "turret.weight"
    MT_COMPATIBILITY = "turret.compatibility"
    MT_ARMOR_FRONT = "turret.armor_front"
    MT_ARMOR_SIDE = "turret.armor_side"
    MT_ARMOR_REAR = "turret.armor_rear"
    MT_TRAVERSE = "turret.traverse"
    MT_VIEW_RANGE = "turret.view_range"

    # All modules of a kind a vehicle can mount
    REL_ENGINES = "relation.engines"
    REL_GUNS = "relation.guns"
    REL_RADIOS = "relation.radios"
    REL_SUSPENSIONS = "relation.suspensions"
    REL_TURRETS = "relation.turrets"

    # Derived
    DP_GUN_ARC = "derived.gun_arc"
    DP_ELEVATION = "derived.elevation"
    DP_POWER_WEIGHT = "derived.power_weight_ratio"
    DP_AMMO_NORMALIZED = "derived.ammo_normalized"
    DP_DPS_AP = "derived.dps_ap"
    DP_DPS_APCR = "derived.dps_apcr"
    DP_DPS_HE = "derived.dps_he"
    DP_DPS_HEAT = "derived.dps_heat"
    DP_ACCURACY = "derived.accuracy"
    DP_AIM_TIME = "derived.aim_time"
    DP_FIRE_RATE = "derived.fire_rate"
    DP_AMMO_CAPACITY = "derived.ammo_capacity"

    # Ratings
    RT_OVERALL = "rating.overall"
    RT_DEFENSE = "rating.defense"
    RT_ATTACK = "rating.attack"
    RT_MOBILITY = "rating.mobility"
    RT_RECON = "rating.recon"
    RT_COST_BENEFIT = "rating.cost_benefit"
    RT_HITPOINTS = "rating.hitpoints"
    RT_WEIGHT = "rating.weight"
    RT_FIRE_CHANCE = "rating.fire_chance"
    RT_TURRET_TRAVERSE = "rating.turret_traverse"
    RT_SUSPENSION_TRAVERSE = "rating.suspension_traverse"
    RT_ACCURACY = "rating.accuracy"
    RT_AIM_TIME = "rating.aim_time"
    RT_AMMO = "rating.ammo"
    RT_TOP_SPEED = "rating.speed"
    RT_ENGINE_POWER = "rating.engine_power"
    RT_POWER_WEIGHT = "rating.power_weight_ratio"
    RT_RADIO_RANGE = "rating.radio_range"
    RT_VIEW_RANGE = "rating.view_range"
    RT_HULL_ARMOR = "rating.hull_armor"
    RT_TURRET_ARMOR = "rating.turret_armor"
    RT_GUN_ARC = "rating.gun_arc"
    RT_GUN_ELEVATION = "rating.gun_elevation"
    RT_DAMAGE = "rating.damage"
    RT_PENETRATION = "rating.penetration"

    @property
    def group(self) -> str:
        """The part before the dot: "tank", "gun", "derived", ..."""
        return self.value.split(".", 1)[0]

    @property
    def attribute(self) -> str:
        return self.value.split(".", 1)[1]


class Direction(str, Enum):
    """Which end of a field's range is better."""
    HIGHER = "higher"
    LOWER = "lower"


# Scorable fields only. Everything not listed here has no direction.
NORMALIZATION: dict[FieldId, Direction] = {
    FieldId.TE_HITPOINTS: Direction.HIGHER,
    FieldId.TE_WEIGHT: Direction.HIGHER,
    FieldId.TE_VIEW_RANGE: Direction.HIGHER,
    FieldId.T_TOP_SPEED: Direction.HIGHER,
    FieldId.T_HULL_FRONT: Direction.HIGHER,
    FieldId.T_HULL_SIDE: Direction.HIGHER,
    FieldId.T_HULL_REAR: Direction.HIGHER,
    FieldId.ME_POWER: Direction.HIGHER,
    FieldId.ME_FIRE_CHANCE: Direction.LOWER,
    FieldId.MG_PEN_AP: Direction.HIGHER,
    FieldId.MG_PEN_APCR: Direction.HIGHER,
    FieldId.MG_PEN_HE: Direction.HIGHER,
    FieldId.MG_PEN_HEAT: Direction.HIGHER,
    FieldId.MR_RANGE: Direction.HIGHER,
    FieldId.MS_TRAVERSE: Direction.HIGHER,
    FieldId.MT_ARMOR_FRONT: Direction.HIGHER,
    FieldId.MT_ARMOR_SIDE: Direction.HIGHER,
    FieldId.MT_ARMOR_REAR: Direction.HIGHER,
    FieldId.MT_TRAVERSE: Direction.HIGHER,
    FieldId.DP_GUN_ARC: Direction.HIGHER,
    FieldId.DP_ELEVATION: Direction.HIGHER,
    FieldId.DP_POWER_WEIGHT: Direction.HIGHER,
    FieldId.DP_AMMO_NORMALIZED: Direction.HIGHER,
    FieldId.DP_DPS_AP: Direction.HIGHER,
    FieldId.DP_DPS_APCR: Direction.HIGHER,
    FieldId.DP_DPS_HE: Direction.HIGHER,
    FieldId.DP_DPS_HEAT: Direction.HIGHER,
    FieldId.DP_ACCURACY: Direction.LOWER,
    FieldId.DP_AIM_TIME: Direction.LOWER,
}

SCORABLE_FIELDS: tuple[FieldId, ...] = tuple(NORMALIZATION)

MODULE_GROUPS: dict[str, ModuleKind] = {
    "engine": ModuleKind.ENGINE,
    "gun": ModuleKind.GUN,
    "radio": ModuleKind.RADIO,
    "suspension": ModuleKind.SUSPENSION,
    "turret": ModuleKind.TURRET,
}

RELATION_FIELDS: dict[FieldId, ModuleKind] = {
    FieldId.REL_ENGINES: ModuleKind.ENGINE,
    FieldId.REL_GUNS: ModuleKind.GUN,
    FieldId.REL_RADIOS: ModuleKind.RADIO,
    FieldId.REL_SUSPENSIONS: ModuleKind.SUSPENSION,
    FieldId.REL_TURRETS: ModuleKind.TURRET,
}


def module_kind_of(field: FieldId) -> ModuleKind | None:
    """The module kind a module field belongs to, None for other fields."""
    return MODULE_GROUPS.get(field.group)


def is_rating_field(field: FieldId) -> bool:
    return field.group == "rating"


__all__ = [
    "FieldId",
    "Direction",
    "NORMALIZATION",
    "SCORABLE_FIELDS",
    "MODULE_GROUPS",
    "RELATION_FIELDS",
    "module_kind_of",
    "is_rating_field",
]
