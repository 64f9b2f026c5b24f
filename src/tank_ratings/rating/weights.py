"""
Rating weight tables.

Weights are configuration, not code: they are read from a YAML file
(by default the packaged ``data/rating_weights.yaml``) and validated into
pydantic models. Any inconsistency is fatal and raised as WeightTableError
at load time.

Lookup order for the file:

1. an explicit path,
2. the ``TANK_RATINGS_WEIGHTS`` environment variable,
3. the packaged default.
"""

import logging
import math
import os
from enum import Enum
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..errors import WeightTableError
from ..models import VehicleType

logger = logging.getLogger("tank-ratings.rating")

WEIGHTS_ENV_VAR = "TANK_RATINGS_WEIGHTS"
DEFAULT_WEIGHTS_PATH = Path(__file__).parent.parent / "data" / "rating_weights.yaml"
WEIGHT_TOLERANCE = 1e-9


class Component(str, Enum):
    """A single rated quality of a vehicle."""
    HITPOINTS = "hitpoints"
    WEIGHT = "weight"
    FIRE_CHANCE = "fire_chance"
    TURRET_TRAVERSE = "turret_traverse"
    SUSPENSION_TRAVERSE = "suspension_traverse"
    ACCURACY = "accuracy"
    AIM_TIME = "aim_time"
    AMMO = "ammo"
    SPEED = "speed"
    ENGINE_POWER = "engine_power"
    POWER_WEIGHT_RATIO = "power_weight_ratio"
    RADIO_RANGE = "radio_range"
    VIEW_RANGE = "view_range"
    HULL_ARMOR = "hull_armor"
    TURRET_ARMOR = "turret_armor"
    GUN_ARC = "gun_arc"
    GUN_ELEVATION = "gun_elevation"
    DAMAGE = "damage"
    PENETRATION = "penetration"


class Category(str, Enum):
    """Rating categories combined into the overall rating."""
    DEFENSE = "defense"
    ATTACK = "attack"
    MOBILITY = "mobility"
    RECON = "recon"
    COST_BENEFIT = "cost_benefit"


# Categories with component weights; cost_benefit is never rated
RATED_CATEGORIES: tuple[Category, ...] = (
    Category.DEFENSE,
    Category.ATTACK,
    Category.MOBILITY,
    Category.RECON,
)


class WeightVariant(str, Enum):
    DEFAULT = "default"
    TURRET = "turret"
    NO_TURRET = "no_turret"


def _sums_to_one(weights: dict) -> bool:
    return math.isclose(math.fsum(weights.values()), 1.0, rel_tol=0.0, abs_tol=WEIGHT_TOLERANCE)


def _check_weights(label: str, weights: dict) -> None:
    negative = [str(getattr(k, "value", k)) for k, w in weights.items() if w < 0]
    if negative:
        raise ValueError(f"{label}: negative weights for {', '.join(negative)}")
    if not _sums_to_one(weights):
        total = math.fsum(weights.values())
        raise ValueError(f"{label}: weights sum to {total:.6f}, expected 1.0")


class VariantWeights(BaseModel):
    """Component weights of each category for one vehicle variant."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    defense: dict[Component, float]
    attack: dict[Component, float]
    mobility: dict[Component, float]
    recon: dict[Component, float]
    cost_benefit: dict[Component, float] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_categories(self) -> "VariantWeights":
        for category in RATED_CATEGORIES:
            weights = self.weights(category)
            if not weights:
                raise ValueError(f"category '{category.value}' has no components")
            _check_weights(category.value, weights)
        if self.cost_benefit:
            raise ValueError("category 'cost_benefit' is not rated and must be empty")
        return self

    def weights(self, category: Category) -> dict[Component, float]:
        return getattr(self, category.value)


class TypeWeights(BaseModel):
    """Overall and per-variant weights of one vehicle type."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    overall: dict[Category, float]
    variants: dict[WeightVariant, VariantWeights]

    @model_validator(mode="after")
    def _check_tables(self) -> "TypeWeights":
        missing = [c.value for c in RATED_CATEGORIES if c not in self.overall]
        if missing:
            raise ValueError(f"overall weights missing for {', '.join(missing)}")
        if self.overall.get(Category.COST_BENEFIT, 0.0) != 0.0:
            raise ValueError("overall weight of 'cost_benefit' must be 0")
        _check_weights("overall", self.overall)

        variants = set(self.variants)
        if variants not in ({WeightVariant.DEFAULT}, {WeightVariant.TURRET, WeightVariant.NO_TURRET}):
            raise ValueError(
                "variants must be either 'default' alone or both 'turret' and 'no_turret'"
            )
        return self

    @property
    def has_turret_variants(self) -> bool:
        return WeightVariant.DEFAULT not in self.variants

    def variant(self, has_turret: bool) -> tuple[WeightVariant, VariantWeights]:
        """Pick the variant for a vehicle with or without a rated turret."""
        if not self.has_turret_variants:
            return WeightVariant.DEFAULT, self.variants[WeightVariant.DEFAULT]
        key = WeightVariant.TURRET if has_turret else WeightVariant.NO_TURRET
        return key, self.variants[key]


class WeightTables(BaseModel):
    """Weight tables for every vehicle type."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    types: dict[VehicleType, TypeWeights]

    @model_validator(mode="after")
    def _check_types(self) -> "WeightTables":
        missing = [t.value for t in VehicleType if t not in self.types]
        if missing:
            raise ValueError(f"no weights for vehicle types {', '.join(missing)}")
        # Turret-less vehicles of these types are rated with their own weights
        single = [
            t.value for t, weights in self.types.items()
            if t.turret_optional and not weights.has_turret_variants
        ]
        if single:
            raise ValueError(f"{', '.join(single)}: 'turret' and 'no_turret' variants are required")
        return self

    def for_type(self, vehicle_type: VehicleType) -> TypeWeights:
        return self.types[vehicle_type]


def resolve_weights_path(path: Path | str | None = None) -> Path:
    """Pick the weights file: explicit path, environment, packaged default."""
    if path is not None:
        return Path(path)
    env = os.environ.get(WEIGHTS_ENV_VAR)
    if env:
        return Path(env)
    return DEFAULT_WEIGHTS_PATH


def load_weight_tables(path: Path | str | None = None) -> WeightTables:
    """Load and validate rating weights.

    Args:
        path: YAML file to read. Defaults to ``$TANK_RATINGS_WEIGHTS`` or the
            packaged tables.

    Raises:
        WeightTableError: If the file is missing, malformed or its weights
            are inconsistent.
    """
    source = resolve_weights_path(path)
    try:
        with open(source, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise WeightTableError(f"Cannot read rating weights from {source}: {e}") from e
    except yaml.YAMLError as e:
        raise WeightTableError(f"Malformed rating weights in {source}: {e}") from e

    if not isinstance(data, dict) or "types" not in data:
        raise WeightTableError(f"Rating weights in {source} must contain a 'types' key")

    try:
        tables = WeightTables.model_validate(data)
    except ValidationError as e:
        raise WeightTableError(f"Invalid rating weights in {source}: {e}") from e

    logger.debug(f"Loaded rating weights from {source}")
    return tables


@lru_cache(maxsize=1)
def default_weight_tables() -> WeightTables:
    """The packaged weight tables, loaded once."""
    return load_weight_tables(DEFAULT_WEIGHTS_PATH)


__all__ = [
    "Component",
    "Category",
    "WeightVariant",
    "RATED_CATEGORIES",
    "VariantWeights",
    "TypeWeights",
    "WeightTables",
    "WEIGHTS_ENV_VAR",
    "DEFAULT_WEIGHTS_PATH",
    "resolve_weights_path",
    "load_weight_tables",
    "default_weight_tables",
]
