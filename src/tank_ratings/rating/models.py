"""
Rating result models.
"""

from pydantic import BaseModel, Field

from ..fields import FieldId
from ..models import Development, VehicleType
from .weights import Category, Component, WeightVariant


class FieldScore(BaseModel):
    """One field of a component: raw value, best value and score."""
    field: FieldId
    value: float
    best: float | None = None
    score: float | None = Field(default=None, description="None when not applicable")


class ComponentScore(BaseModel):
    """Score of one component, with the field scores it was built from."""
    component: Component
    score: float | None = None
    fields: list[FieldScore] = Field(default_factory=list)


class RatingAnomaly(BaseModel):
    """A value better than the best value of its scope."""
    field: FieldId
    value: float
    best: float
    message: str


class VehicleRating(BaseModel):
    """The rating of one vehicle in one development.

    Scores are in [0, 1]; None means not applicable.
    """
    vehicle_id: str
    vehicle_name: str
    vehicle_type: VehicleType | None = None
    development: Development
    scope: str = Field(description="Label of the scope the best values came from")
    variant: WeightVariant | None = None
    components: dict[Component, ComponentScore] = Field(default_factory=dict)
    categories: dict[Category, float | None] = Field(default_factory=dict)
    category_components: dict[Category, list[Component]] = Field(default_factory=dict)
    overall: float | None = None
    anomalies: list[RatingAnomaly] = Field(default_factory=list)

    def score(self, component: Component) -> float | None:
        entry = self.components.get(component)
        return entry.score if entry is not None else None

    def constituents(self, category: Category) -> dict[Component, float | None]:
        """Scores of the components that make up a category."""
        return {c: self.score(c) for c in self.category_components.get(category, [])}

    def value_of(self, name: str) -> float | None:
        """Score by name: "overall", a category or a component."""
        if name == "overall":
            return self.overall
        if name in {c.value for c in Category}:
            return self.categories.get(Category(name))
        return self.score(Component(name))


__all__ = [
    "FieldScore",
    "ComponentScore",
    "RatingAnomaly",
    "VehicleRating",
]
