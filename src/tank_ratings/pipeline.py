"""
One batch pass over a scraped database.

ingest -> resolve -> index -> validate -> rate
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from .ingest import ingest_records
from .models import Dataset, RawDataset, VehicleType
from .module_index import ModuleIndex
from .rating import RatingEngine, RatingScope, VehicleRating, WeightTables
from .resolver import resolve
from .validator import ValidationReport, validate

logger = logging.getLogger("tank-ratings")


@dataclass
class PassResult:
    """Everything one pass produced."""
    dataset: Dataset
    index: ModuleIndex
    report: ValidationReport
    ratings: list[VehicleRating] = field(default_factory=list)
    ratings_by_type: dict[VehicleType, list[VehicleRating]] = field(default_factory=dict)

    def rating_for(self, vehicle_id: str, by_type: bool = False) -> list[VehicleRating]:
        """Ratings of one vehicle (stock and top)."""
        if by_type:
            pool = [r for ratings in self.ratings_by_type.values() for r in ratings]
        else:
            pool = self.ratings
        return [r for r in pool if r.vehicle_id == vehicle_id]


def run_pass(
    raw: RawDataset | Dataset,
    weights: WeightTables | None = None,
    by_type: bool = True,
) -> PassResult:
    """Resolve, index, validate and rate a dataset.

    Args:
        raw: Ingested dataset (resolved datasets are accepted as is).
        weights: Rating weights; the packaged defaults if not given.
        by_type: Also rate each vehicle against its own type.
    """
    dataset = resolve(raw)
    index = ModuleIndex.build(dataset)
    report = validate(dataset, index)
    if not report.is_clean:
        logger.warning(f"Dataset has {report.defect_count} defects, ratings may be incomplete")

    engine = RatingEngine(dataset, index, weights)
    ratings = engine.rate_scope(RatingScope.everything())
    ratings_by_type = engine.rate_by_type() if by_type else {}

    rated = sum(1 for r in ratings if r.overall is not None)
    logger.info(
        f"Pass complete: {len(dataset.vehicles)} vehicles, "
        f"{rated}/{len(ratings)} configurations with an overall rating"
    )
    return PassResult(dataset, index, report, ratings, ratings_by_type)


def run_records(
    vehicles: Iterable[Mapping[str, Any]],
    modules: Iterable[Mapping[str, Any]] = (),
    weights: WeightTables | None = None,
    by_type: bool = True,
) -> PassResult:
    """Ingest scraped records and run a pass over them."""
    return run_pass(ingest_records(vehicles, modules), weights, by_type)


__all__ = ["PassResult", "run_pass", "run_records"]
