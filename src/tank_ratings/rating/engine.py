"""
Rating engine.

Scores every vehicle relative to the best values of its scope:

    field score     value / best (higher is better) or best / value
    component       one field, an armor composite or a mean over ammo types
    category        weighted sum of components (weights per vehicle type)
    overall         weighted sum of categories

Scores lie in [0, 1]. ``None`` means not applicable: the vehicle lacks the
module, the gun lacks the ammo type, or the value could not be rated.
"""

import logging
import math
from typing import Iterable, Mapping, TypeVar

from ..errors import RatingScopeError
from ..fields import NORMALIZATION, Direction, FieldAccessor, FieldId
from ..models import Dataset, Development, Vehicle, VehicleType
from ..module_index import ModuleIndex
from .models import ComponentScore, FieldScore, RatingAnomaly, VehicleRating
from .normalization import BestValues, RatingScope, compute_best_values
from .weights import (
    RATED_CATEGORIES,
    Category,
    Component,
    WeightTables,
    default_weight_tables,
)

logger = logging.getLogger("tank-ratings.rating")

K = TypeVar("K")

COMPONENT_FIELDS: dict[Component, tuple[FieldId, ...]] = {
    Component.HITPOINTS: (FieldId.TE_HITPOINTS,),
    Component.WEIGHT: (FieldId.TE_WEIGHT,),
    Component.FIRE_CHANCE: (FieldId.ME_FIRE_CHANCE,),
    Component.TURRET_TRAVERSE: (FieldId.MT_TRAVERSE,),
    Component.SUSPENSION_TRAVERSE: (FieldId.MS_TRAVERSE,),
    Component.ACCURACY: (FieldId.DP_ACCURACY,),
    Component.AIM_TIME: (FieldId.DP_AIM_TIME,),
    Component.AMMO: (FieldId.DP_AMMO_NORMALIZED,),
    Component.SPEED: (FieldId.T_TOP_SPEED,),
    Component.ENGINE_POWER: (FieldId.ME_POWER,),
    Component.POWER_WEIGHT_RATIO: (FieldId.DP_POWER_WEIGHT,),
    Component.RADIO_RANGE: (FieldId.MR_RANGE,),
    Component.VIEW_RANGE: (FieldId.TE_VIEW_RANGE,),
    Component.HULL_ARMOR: (FieldId.T_HULL_FRONT, FieldId.T_HULL_SIDE, FieldId.T_HULL_REAR),
    Component.TURRET_ARMOR: (FieldId.MT_ARMOR_FRONT, FieldId.MT_ARMOR_SIDE, FieldId.MT_ARMOR_REAR),
    Component.GUN_ARC: (FieldId.DP_GUN_ARC,),
    Component.GUN_ELEVATION: (FieldId.DP_ELEVATION,),
    Component.DAMAGE: (FieldId.DP_DPS_AP, FieldId.DP_DPS_APCR, FieldId.DP_DPS_HE, FieldId.DP_DPS_HEAT),
    Component.PENETRATION: (FieldId.MG_PEN_AP, FieldId.MG_PEN_APCR, FieldId.MG_PEN_HE, FieldId.MG_PEN_HEAT),
}

ARMOR_COMPONENTS = frozenset({Component.HULL_ARMOR, Component.TURRET_ARMOR})
AMMO_TYPE_COMPONENTS = frozenset({Component.DAMAGE, Component.PENETRATION})

# front, side, rear
ARMOR_WEIGHTS = (0.5, 0.3, 0.2)


# =============================================================================
# Scoring functions
# =============================================================================

def exceeds_best(value: float, best: float | None, direction: Direction) -> bool:
    """Whether a positive value is better than the best value of its scope."""
    if best is None or value <= 0:
        return False
    if direction is Direction.HIGHER:
        return value > best
    return value < best


def field_percentage(value: float, best: float | None, direction: Direction) -> float | None:
    """Score a single value against the best value.

    Returns None when the value is not positive, there is no best value, or
    the value is beyond the best value.
    """
    if best is None or best <= 0 or math.isnan(value) or value <= 0:
        return None
    if exceeds_best(value, best, direction):
        return None
    if direction is Direction.HIGHER:
        return value / best
    return best / value


def armor_rating(front: float | None, side: float | None, rear: float | None) -> float | None:
    """Weighted armor score; not applicable if any side is."""
    if front is None or side is None or rear is None:
        return None
    wf, ws, wr = ARMOR_WEIGHTS
    return min(1.0, math.fsum((wf * front, ws * side, wr * rear)))


def mean_of_applicable(scores: Iterable[float | None]) -> float | None:
    """Mean of the applicable scores, None if there are none."""
    valid = [s for s in scores if s is not None]
    if not valid:
        return None
    return math.fsum(valid) / len(valid)


def weighted_sum(weights: Mapping[K, float], scores: Mapping[K, float | None]) -> float | None:
    """Linear combination of scores.

    Entries with a weight of zero are skipped. Any other entry that is not
    applicable makes the whole sum not applicable.
    """
    terms = []
    for key, weight in weights.items():
        if weight == 0:
            continue
        score = scores.get(key)
        if score is None:
            return None
        terms.append(weight * score)
    if not terms:
        return None
    return min(1.0, math.fsum(terms))


# =============================================================================
# Engine
# =============================================================================

class RatingEngine:
    """Rates the vehicles of one dataset.

    Args:
        dataset: The resolved dataset.
        index: Module index of ``dataset``; built if not given.
        weights: Weight tables; the packaged defaults if not given.
        accessor: Field accessor; built from ``index`` if not given.
    """

    def __init__(
        self,
        dataset: Dataset,
        index: ModuleIndex | None = None,
        weights: WeightTables | None = None,
        accessor: FieldAccessor | None = None,
    ):
        self.dataset = dataset
        self.index = index if index is not None else ModuleIndex.build(dataset)
        self.weights = weights if weights is not None else default_weight_tables()
        self.accessor = accessor if accessor is not None else FieldAccessor(self.index)
        self._best: dict[RatingScope, BestValues] = {}

    def best_values(self, scope: RatingScope | None = None) -> BestValues:
        """Best values of ``scope`` (the whole dataset by default), computed once."""
        scope = scope or RatingScope.everything()
        if scope not in self._best:
            self._best[scope] = compute_best_values(self.dataset, self.index, scope, self.accessor)
        return self._best[scope]

    def rate(self, vehicle: Vehicle, development: Development, best: BestValues) -> VehicleRating:
        """Rate one vehicle in one development.

        Raises:
            RatingScopeError: If the vehicle is not part of the dataset or not
                in the scope ``best`` was computed for.
        """
        if self.dataset.vehicle(vehicle.id) is None:
            raise RatingScopeError(f"Vehicle '{vehicle.id}' is not part of the rated dataset")
        if not best.scope.includes(vehicle):
            vehicle_type = vehicle.type.value if vehicle.type else "untyped"
            raise RatingScopeError(
                f"Vehicle '{vehicle.id}' ({vehicle_type}) is outside rating scope '{best.scope.label}'"
            )

        anomalies: list[RatingAnomaly] = []
        components = {
            component: self._score_component(component, vehicle, development, best, anomalies)
            for component in Component
        }
        rating = VehicleRating(
            vehicle_id=vehicle.id,
            vehicle_name=vehicle.name,
            vehicle_type=vehicle.type,
            development=development,
            scope=best.scope.label,
            components=components,
            anomalies=anomalies,
        )

        if vehicle.type is None:
            logger.warning(f"{vehicle.id}: vehicle has no type, categories are not rated")
            rating.categories = {category: None for category in Category}
            return rating

        type_weights = self.weights.for_type(vehicle.type)
        has_turret = components[Component.TURRET_ARMOR].score is not None
        variant_key, variant = type_weights.variant(has_turret)
        rating.variant = variant_key

        scores = {component: entry.score for component, entry in components.items()}
        for category in RATED_CATEGORIES:
            weights = variant.weights(category)
            rating.category_components[category] = list(weights)
            rating.categories[category] = weighted_sum(weights, scores)
            if rating.categories[category] is None:
                logger.debug(f"{vehicle.id} ({development.value}): {category.value} not applicable")
        rating.categories[Category.COST_BENEFIT] = None
        rating.category_components[Category.COST_BENEFIT] = []

        rating.overall = weighted_sum(type_weights.overall, rating.categories)
        return rating

    def _score_component(
        self,
        component: Component,
        vehicle: Vehicle,
        development: Development,
        best: BestValues,
        anomalies: list[RatingAnomaly],
    ) -> ComponentScore:
        field_scores = []
        for field_id in COMPONENT_FIELDS[component]:
            direction = NORMALIZATION[field_id]
            value = self.accessor.calc(field_id, vehicle, development)
            best_value = best.get(field_id)

            if value < 0:
                logger.warning(f"{vehicle.id}: {field_id.value} has illegal value {value}")
            if exceeds_best(value, best_value, direction):
                message = (
                    f"{vehicle.id} ({development.value}): {field_id.value} = {value} "
                    f"is beyond the best value {best_value} of scope '{best.scope.label}'"
                )
                logger.warning(message)
                anomalies.append(
                    RatingAnomaly(field=field_id, value=value, best=best_value, message=message)
                )

            field_scores.append(
                FieldScore(
                    field=field_id,
                    value=value,
                    best=best_value,
                    score=field_percentage(value, best_value, direction),
                )
            )

        scores = [fs.score for fs in field_scores]
        if component in ARMOR_COMPONENTS:
            score = armor_rating(*scores)
        elif component in AMMO_TYPE_COMPONENTS:
            score = mean_of_applicable(scores)
        else:
            score = scores[0]
        return ComponentScore(component=component, score=score, fields=field_scores)

    def rate_scope(self, scope: RatingScope | None = None) -> list[VehicleRating]:
        """Rate every vehicle of ``scope`` in both developments."""
        scope = scope or RatingScope.everything()
        best = self.best_values(scope)
        ratings = [
            self.rate(vehicle, development, best)
            for vehicle in scope.members(self.dataset)
            for development in Development
        ]
        logger.info(f"Rated {len(ratings)} vehicle configurations (scope: {scope.label})")
        return ratings

    def rate_by_type(self) -> dict[VehicleType, list[VehicleRating]]:
        """Rate each vehicle against the other vehicles of its type."""
        return {
            vehicle_type: self.rate_scope(RatingScope.of_type(vehicle_type))
            for vehicle_type in VehicleType
        }


__all__ = [
    "COMPONENT_FIELDS",
    "ARMOR_WEIGHTS",
    "exceeds_best",
    "field_percentage",
    "armor_rating",
    "mean_of_applicable",
    "weighted_sum",
    "RatingEngine",
]
