"""
Best values for normalization.

A vehicle's field score is its value relative to the best value of that
field among its peers. The peers are a RatingScope: the whole dataset or
all vehicles of one type. Best values are computed once per scope and
passed around as an immutable BestValues object.
"""

import logging
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping

from ..fields import NORMALIZATION, Direction, FieldAccessor, FieldId
from ..models import Dataset, Development, Vehicle, VehicleType
from ..module_index import ModuleIndex

logger = logging.getLogger("tank-ratings.rating")


@dataclass(frozen=True)
class RatingScope:
    """The set of vehicles compared with each other.

    ``vehicle_type`` None means every vehicle in the dataset.
    """
    vehicle_type: VehicleType | None = None

    @classmethod
    def everything(cls) -> "RatingScope":
        return cls(None)

    @classmethod
    def of_type(cls, vehicle_type: VehicleType) -> "RatingScope":
        return cls(vehicle_type)

    @property
    def label(self) -> str:
        return "all" if self.vehicle_type is None else self.vehicle_type.value

    def includes(self, vehicle: Vehicle) -> bool:
        return self.vehicle_type is None or vehicle.type is self.vehicle_type

    def members(self, dataset: Dataset) -> list[Vehicle]:
        return [v for v in dataset.vehicles if self.includes(v)]


@dataclass(frozen=True)
class BestValues:
    """Best value of every scorable field within one scope."""
    scope: RatingScope
    values: Mapping[FieldId, float] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        if not isinstance(self.values, MappingProxyType):
            object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def get(self, field_id: FieldId) -> float | None:
        """Best value of a field, None if no vehicle in scope had a positive one."""
        return self.values.get(field_id)

    def __contains__(self, field_id: object) -> bool:
        return field_id in self.values

    def __iter__(self) -> Iterator[FieldId]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)


def _usable(value: float) -> bool:
    return value > 0 and not math.isnan(value) and not math.isinf(value)


def compute_best_values(
    dataset: Dataset,
    index: ModuleIndex,
    scope: RatingScope | None = None,
    accessor: FieldAccessor | None = None,
) -> BestValues:
    """Find the best value of every scorable field within ``scope``.

    Every vehicle in scope is considered in both developments. For fields
    where higher is better the maximum wins, for the others the minimum.
    Zero and negative values (absent modules, ammo types a gun does not
    fire) never become the best value.
    """
    scope = scope or RatingScope.everything()
    accessor = accessor or FieldAccessor(index)
    best: dict[FieldId, float] = {}

    members = scope.members(dataset)
    for vehicle in members:
        for development in Development:
            for field_id, direction in NORMALIZATION.items():
                value = accessor.calc(field_id, vehicle, development)
                if not _usable(value):
                    continue
                current = best.get(field_id)
                if current is None:
                    best[field_id] = value
                elif direction is Direction.HIGHER and value > current:
                    best[field_id] = value
                elif direction is Direction.LOWER and value < current:
                    best[field_id] = value

    logger.debug(
        f"Computed {len(best)} best values over {len(members)} vehicles "
        f"(scope: {scope.label})"
    )
    return BestValues(scope, best)


__all__ = ["RatingScope", "BestValues", "compute_best_values"]
