"""
tank-ratings

Cross-referenced tank database with validation and comparative ratings.
"""

from .errors import RatingScopeError, ResolverError, TankRatingsError, WeightTableError
from .ingest import ingest_records
from .models import (
    Currency,
    Dataset,
    Development,
    Engine,
    Equipment,
    FuelType,
    Gun,
    Module,
    ModuleKind,
    Nation,
    Radio,
    RawDataset,
    Suspension,
    Turret,
    Vehicle,
    VehicleType,
    make_vehicle_id,
)
from .module_index import ModuleIndex
from .pipeline import PassResult, run_pass, run_records
from .resolver import ReferenceResolver, resolve
from .validator import ValidationReport, validate

from importlib.metadata import PackageNotFoundError, version as _get_version

try:
    __version__ = _get_version("tank-ratings")
except PackageNotFoundError:
    __version__ = "0.1.0"  # Running from a source checkout

__all__ = [
    "__version__",
    # Errors
    "TankRatingsError",
    "ResolverError",
    "WeightTableError",
    "RatingScopeError",
    # Models
    "Nation",
    "Currency",
    "VehicleType",
    "Development",
    "ModuleKind",
    "FuelType",
    "Equipment",
    "Vehicle",
    "Module",
    "Engine",
    "Gun",
    "Radio",
    "Suspension",
    "Turret",
    "RawDataset",
    "Dataset",
    "make_vehicle_id",
    # Operations
    "ingest_records",
    "resolve",
    "ReferenceResolver",
    "ModuleIndex",
    "validate",
    "ValidationReport",
    "run_pass",
    "run_records",
    "PassResult",
]
