"""
Field catalogue, accessors and presets.
"""

from .accessor import (
    DISPLAY,
    MODULE_FIELDS,
    NOT_AVAILABLE,
    NOT_NUMERIC,
    NUMERIC,
    FieldAccessor,
    VehicleView,
    format_percent,
)
from .catalogue import (
    NORMALIZATION,
    SCORABLE_FIELDS,
    Direction,
    FieldId,
    module_kind_of,
)
from .presets import PRESETS

__all__ = [
    "FieldId",
    "Direction",
    "NORMALIZATION",
    "SCORABLE_FIELDS",
    "module_kind_of",
    "FieldAccessor",
    "VehicleView",
    "DISPLAY",
    "NUMERIC",
    "MODULE_FIELDS",
    "NOT_AVAILABLE",
    "NOT_NUMERIC",
    "format_percent",
    "PRESETS",
]
