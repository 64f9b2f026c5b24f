"""
Vehicle rating: weight tables, best-value normalization and scoring.
"""

from .engine import (
    COMPONENT_FIELDS,
    RatingEngine,
    armor_rating,
    field_percentage,
    mean_of_applicable,
    weighted_sum,
)
from .models import ComponentScore, FieldScore, RatingAnomaly, VehicleRating
from .normalization import BestValues, RatingScope, compute_best_values
from .weights import (
    RATED_CATEGORIES,
    Category,
    Component,
    TypeWeights,
    VariantWeights,
    WeightTables,
    WeightVariant,
    default_weight_tables,
    load_weight_tables,
)

__all__ = [
    # Engine
    "RatingEngine",
    "COMPONENT_FIELDS",
    "field_percentage",
    "armor_rating",
    "mean_of_applicable",
    "weighted_sum",
    # Normalization
    "RatingScope",
    "BestValues",
    "compute_best_values",
    # Results
    "VehicleRating",
    "ComponentScore",
    "FieldScore",
    "RatingAnomaly",
    # Weights
    "Component",
    "Category",
    "WeightVariant",
    "RATED_CATEGORIES",
    "VariantWeights",
    "TypeWeights",
    "WeightTables",
    "load_weight_tables",
    "default_weight_tables",
]
