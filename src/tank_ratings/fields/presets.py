"""
Named, ordered field sets for table renderers.
"""

from .catalogue import FieldId as F

TANK_BASE: tuple[F, ...] = (
    F.T_NAME,
    F.T_TYPE,
    F.T_NATION,
    F.T_TIER,
    F.T_BATTLE_TIER_MIN,
    F.T_BATTLE_TIER_MAX,
    F.T_CREW,
    F.T_TOP_SPEED,
    F.T_HULL_FRONT,
    F.T_HULL_SIDE,
    F.T_HULL_REAR,
    F.T_COST,
    F.T_CURRENCY,
    F.T_GIFT,
    F.T_GUN_ARC_LEFT,
    F.T_GUN_ARC_RIGHT,
    F.T_CHILDREN,
    F.T_PARENTS,
    F.TE_DEVELOPMENT,
    F.TE_ELEVATION_LOW,
    F.TE_ELEVATION_HIGH,
    F.TE_HITPOINTS,
    F.TE_VIEW_RANGE,
    F.TE_WEIGHT,
    F.TE_WEIGHT_LIMIT,
    F.REL_ENGINES,
    F.REL_GUNS,
    F.REL_RADIOS,
    F.REL_SUSPENSIONS,
    F.REL_TURRETS,
)

MODULE_ENGINE: tuple[F, ...] = (
    F.ME_NATION, F.ME_TIER, F.ME_NAME, F.ME_POWER, F.ME_FIRE_CHANCE, F.ME_FUEL,
    F.ME_COST, F.ME_CURRENCY, F.ME_WEIGHT, F.ME_COMPATIBILITY,
)

MODULE_GUN: tuple[F, ...] = (
    F.MG_NATION, F.MG_TIER, F.MG_NAME,
    F.MG_AMMO_MIN, F.MG_AMMO_MAX,
    F.MG_DAMAGE_AP, F.MG_DAMAGE_APCR, F.MG_DAMAGE_HE, F.MG_DAMAGE_HEAT,
    F.MG_PEN_AP, F.MG_PEN_APCR, F.MG_PEN_HE, F.MG_PEN_HEAT,
    F.MG_FIRE_RATE_MIN, F.MG_FIRE_RATE_MAX,
    F.MG_ACCURACY_MIN, F.MG_ACCURACY_MAX,
    F.MG_AIM_TIME_MIN, F.MG_AIM_TIME_MAX,
    F.MG_COST, F.MG_CURRENCY, F.MG_WEIGHT, F.MG_COMPATIBILITY,
)

MODULE_RADIO: tuple[F, ...] = (
    F.MR_NATION, F.MR_TIER, F.MR_NAME, F.MR_RANGE,
    F.MR_COST, F.MR_CURRENCY, F.MR_WEIGHT, F.MR_COMPATIBILITY,
)

MODULE_SUSPENSION: tuple[F, ...] = (
    F.MS_NATION, F.MS_TIER, F.MS_NAME, F.MS_LOAD, F.MS_TRAVERSE,
    F.MS_COST, F.MS_CURRENCY, F.MS_WEIGHT, F.MS_COMPATIBILITY,
)

MODULE_TURRET: tuple[F, ...] = (
    F.MT_NATION, F.MT_TIER, F.MT_NAME,
    F.MT_ARMOR_FRONT, F.MT_ARMOR_SIDE, F.MT_ARMOR_REAR,
    F.MT_TRAVERSE, F.MT_VIEW_RANGE,
    F.MT_COST, F.MT_CURRENCY, F.MT_WEIGHT, F.MT_COMPATIBILITY,
)

# Vehicle base and equipment fields, then every module's fields
COMPLETE: tuple[F, ...] = (
    TANK_BASE[:-5]
    + MODULE_ENGINE
    + MODULE_GUN
    + MODULE_RADIO
    + MODULE_SUSPENSION
    + MODULE_TURRET
)

# Grouped by topic, mixing vehicle and module figures
DETAILED: tuple[F, ...] = (
    F.TE_DEVELOPMENT, F.T_NAME, F.T_TYPE, F.T_NATION, F.T_CREW,
    # tier
    F.T_TIER, F.T_BATTLE_TIER_MIN, F.T_BATTLE_TIER_MAX,
    # cost
    F.T_COST, F.T_CURRENCY, F.T_GIFT,
    # hp + weight
    F.TE_HITPOINTS, F.TE_WEIGHT, F.TE_WEIGHT_LIMIT,
    # mobility
    F.ME_POWER, F.DP_POWER_WEIGHT, F.T_TOP_SPEED, F.MS_TRAVERSE,
    # armor
    F.T_HULL_FRONT, F.T_HULL_SIDE, F.T_HULL_REAR,
    F.MT_ARMOR_FRONT, F.MT_ARMOR_SIDE, F.MT_ARMOR_REAR,
    # armament
    F.MG_DAMAGE_AP, F.MG_DAMAGE_APCR, F.MG_DAMAGE_HE, F.MG_DAMAGE_HEAT,
    F.MG_PEN_AP, F.MG_PEN_APCR, F.MG_PEN_HE, F.MG_PEN_HEAT,
    F.DP_FIRE_RATE, F.DP_AIM_TIME, F.DP_ACCURACY, F.DP_AMMO_CAPACITY,
    F.MT_TRAVERSE, F.DP_GUN_ARC, F.DP_ELEVATION,
    # general
    F.TE_VIEW_RANGE, F.MR_RANGE, F.ME_FIRE_CHANCE,
)

SIMPLE: tuple[F, ...] = (
    F.TE_DEVELOPMENT, F.T_NAME, F.T_TYPE, F.T_NATION, F.T_TIER,
    F.TE_HITPOINTS,
    F.T_HULL_FRONT, F.T_HULL_SIDE, F.T_HULL_REAR,
    F.MT_ARMOR_FRONT, F.MT_ARMOR_SIDE, F.MT_ARMOR_REAR,
    F.MG_DAMAGE_AP, F.MG_DAMAGE_APCR, F.MG_DAMAGE_HE,
    F.MG_PEN_AP, F.MG_PEN_APCR, F.MG_PEN_HE,
    F.DP_FIRE_RATE, F.DP_AIM_TIME, F.DP_ACCURACY, F.DP_AMMO_CAPACITY,
    F.MT_TRAVERSE,
    F.ME_POWER, F.T_TOP_SPEED, F.MS_TRAVERSE,
    F.TE_VIEW_RANGE, F.MR_RANGE, F.TE_WEIGHT, F.T_COST, F.T_CURRENCY,
)

RATING: tuple[F, ...] = (
    F.TE_DEVELOPMENT, F.T_NAME, F.T_TYPE, F.T_NATION, F.T_TIER,
    F.RT_OVERALL,
    F.RT_ATTACK, F.RT_DEFENSE, F.RT_MOBILITY, F.RT_RECON, F.RT_COST_BENEFIT,
    F.RT_DAMAGE, F.RT_PENETRATION, F.RT_ACCURACY, F.RT_AIM_TIME, F.RT_AMMO,
    F.RT_HITPOINTS, F.RT_HULL_ARMOR, F.RT_TURRET_ARMOR,
    F.RT_GUN_ARC, F.RT_GUN_ELEVATION,
    F.RT_TOP_SPEED, F.RT_POWER_WEIGHT,
    F.RT_SUSPENSION_TRAVERSE, F.RT_TURRET_TRAVERSE,
    F.RT_RADIO_RANGE, F.RT_VIEW_RANGE,
    F.RT_WEIGHT, F.RT_ENGINE_POWER, F.RT_FIRE_CHANCE,
)

PRESETS: dict[str, tuple[F, ...]] = {
    "complete": COMPLETE,
    "detailed": DETAILED,
    "simple": SIMPLE,
    "tank_base": TANK_BASE,
    "engine": MODULE_ENGINE,
    "gun": MODULE_GUN,
    "radio": MODULE_RADIO,
    "suspension": MODULE_SUSPENSION,
    "turret": MODULE_TURRET,
    "rating": RATING,
}

__all__ = [
    "TANK_BASE",
    "MODULE_ENGINE",
    "MODULE_GUN",
    "MODULE_RADIO",
    "MODULE_SUSPENSION",
    "MODULE_TURRET",
    "COMPLETE",
    "DETAILED",
    "SIMPLE",
    "RATING",
    "PRESETS",
]
