"""
Dataset validation.

Three independent checks over a resolved dataset:

1. Relational completeness: every vehicle can mount at least one module of
   each kind (turrets are optional for tank destroyers and artillery).
2. Vehicle attributes, including both equipment records, are within
   plausible bounds.
3. Module attributes are within plausible bounds, and every module fits at
   least one vehicle.

Validation is informational: every defect is collected into a
ValidationReport, nothing is raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from .models import (
    Dataset,
    Development,
    Module,
    ModuleKind,
    ReferenceDefect,
    Vehicle,
)
from .module_index import ModuleIndex

logger = logging.getLogger("tank-ratings.validator")


# =============================================================================
# Bounds
# =============================================================================

# (attribute, minimum, maximum); None leaves that side open
Bound = tuple[str, float | None, float | None]

VEHICLE_BOUNDS: tuple[Bound, ...] = (
    ("battle_tier_max", 1, 12),
    ("battle_tier_min", 1, 12),
    ("crew", 1, 10),
    ("gun_arc_right", 1, 360),
    ("gun_arc_left", -360, 0),
    ("hull_front", 5, None),
    ("hull_side", 5, None),
    ("hull_rear", 5, None),
    ("tier", 1, 12),
    ("speed", 5, 120),
)
VEHICLE_REQUIRED: tuple[str, ...] = ("currency", "nation", "type")

EQUIPMENT_BOUNDS: tuple[Bound, ...] = (
    ("gun_elevation_high", 1, 90),
    ("gun_elevation_low", -40, 50),
    ("hitpoints", 10, 10000),
    ("view_range", 50, 2000),
    ("weight", 1, None),
    ("weight_limit", 1, None),
)
EQUIPMENT_REQUIRED: tuple[str, ...] = ("development",)

# Stock modules are free, so a cost of 0 is fine
MODULE_BOUNDS: tuple[Bound, ...] = (
    ("cost", 0, None),
    ("tier", 1, 12),
    ("weight", 1, None),
)
MODULE_REQUIRED: tuple[str, ...] = ("currency", "nation")

# Damage and penetration can legitimately be 0 and are not checked
MODULE_KIND_BOUNDS: dict[ModuleKind, tuple[Bound, ...]] = {
    ModuleKind.ENGINE: (
        ("fire_chance", 0.01, 100),
        ("power", 5, 10000),
    ),
    ModuleKind.GUN: (
        ("accuracy_max", 0.1, None),
        ("accuracy_min", 0.1, None),
        ("aim_time_max", 0.5, None),
        ("aim_time_min", 0.5, None),
        ("ammo_capacity_max", 1, None),
        ("ammo_capacity_min", 1, None),
        ("fire_rate_max", 0.5, None),
        ("fire_rate_min", 0.5, None),
    ),
    ModuleKind.RADIO: (
        ("range", 50, 10000),
    ),
    ModuleKind.SUSPENSION: (
        ("load", 1, None),
        ("traverse", 1, None),
    ),
    ModuleKind.TURRET: (
        ("armor_front", 1, None),
        ("armor_side", 1, None),
        ("armor_rear", 1, None),
        ("traverse", 1, None),
        ("view_range", 50, 10000),
    ),
}
MODULE_KIND_REQUIRED: dict[ModuleKind, tuple[str, ...]] = {
    ModuleKind.ENGINE: ("fuel",),
}

MIN_NAME_LENGTH = 2

MISSING_MODULE_LABELS: dict[ModuleKind, str] = {
    ModuleKind.ENGINE: "Engines",
    ModuleKind.GUN: "Guns",
    ModuleKind.RADIO: "Radios",
    ModuleKind.SUSPENSION: "Suspensions",
    ModuleKind.TURRET: "Turrets (excluding TDs and SPGs)",
}


# =============================================================================
# Report
# =============================================================================

@dataclass
class Defect:
    """A single defect of one vehicle or module."""
    entity_id: str      # vehicle id or module key
    entity_name: str
    field: str          # e.g. "tier", "stock.hitpoints", "compatibility"
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class ValidationReport:
    """All defects found in one validation pass."""
    missing_modules: dict[ModuleKind, list[Defect]] = field(
        default_factory=lambda: {kind: [] for kind in ModuleKind}
    )
    vehicle_defects: dict[str, list[Defect]] = field(default_factory=dict)
    module_defects: dict[str, list[Defect]] = field(default_factory=dict)
    reference_defects: list[ReferenceDefect] = field(default_factory=list)

    @property
    def missing_relation_count(self) -> int:
        return sum(len(defects) for defects in self.missing_modules.values())

    @property
    def defect_count(self) -> int:
        """Total number of defects in all sections."""
        return (
            self.missing_relation_count
            + sum(len(d) for d in self.vehicle_defects.values())
            + sum(len(d) for d in self.module_defects.values())
            + len(self.reference_defects)
        )

    @property
    def is_clean(self) -> bool:
        return self.defect_count == 0

    def defects_for(self, entity_id: str) -> list[Defect]:
        """Attribute defects of one vehicle (by id) or module (by key)."""
        return self.vehicle_defects.get(entity_id) or self.module_defects.get(entity_id) or []

    def render(self) -> str:
        """Render the report as markdown-flavored plain text."""
        lines = ["", "------------------", "Dataset Validation Report", ""]

        lines.append("### Test 1")
        lines.append("")
        if self.missing_relation_count == 0:
            lines.append(
                "Missing Vehicle -> Module Relations: "
                "great, all vehicles have at least one of each module type!"
            )
        else:
            lines.append(
                f"Missing Vehicle -> Module Relations: "
                f"{self.missing_relation_count} faulty relations"
            )
            lines.append("")
            for kind in ModuleKind:
                label = MISSING_MODULE_LABELS[kind]
                defects = self.missing_modules.get(kind, [])
                if not defects:
                    lines.append(f"* {label}: great, every vehicle has at least one of these!")
                    continue
                lines.append(f"* {label}")
                for defect in defects:
                    lines.append(f"  - {defect.entity_name} ({defect.entity_id})")

        lines.append("")
        lines.append("### Test 2")
        lines.append("")
        if not self.vehicle_defects:
            lines.append(
                "Invalid Vehicle Attributes: "
                "great, the attributes of every vehicle seem to be valid!"
            )
        else:
            lines.append("Invalid Vehicle Attributes: each of these vehicles has some broken fields:")
            lines.append("")
            for vehicle_id, defects in self.vehicle_defects.items():
                lines.append(f"* {defects[0].entity_name} ({vehicle_id})")
                lines.extend(f"  - {defect.message}" for defect in defects)

        lines.append("")
        lines.append("### Test 3")
        lines.append("")
        if not self.module_defects:
            lines.append(
                "Invalid Module Attributes: "
                "great, the attributes of every module seem to be valid!"
            )
        else:
            lines.append("Invalid Module Attributes: each of these modules has some broken fields:")
            lines.append("")
            for key, defects in self.module_defects.items():
                lines.append(f"* {key}")
                lines.extend(f"  - {defect.message}" for defect in defects)

        if self.reference_defects:
            lines.append("")
            lines.append("### Unresolved References")
            lines.append("")
            lines.extend(f"* {defect}" for defect in self.reference_defects)

        lines.extend(["", "Report finished", "------------------", ""])
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()


# =============================================================================
# Validator
# =============================================================================

def _check_bounds(target: Any, bounds: Iterable[Bound], prefix: str = "") -> list[tuple[str, str]]:
    """Return (field, message) for every attribute outside its bounds."""
    problems = []
    for attr, low, high in bounds:
        value = getattr(target, attr)
        if (low is not None and value < low) or (high is not None and value > high):
            problems.append((f"{prefix}{attr}", f"{prefix}{attr}: {value}"))
    return problems


def _check_required(target: Any, attrs: Iterable[str], prefix: str = "") -> list[tuple[str, str]]:
    return [
        (f"{prefix}{attr}", f"{prefix}{attr} is not set")
        for attr in attrs
        if getattr(target, attr) is None
    ]


def _report_key(module: Module, taken: dict[str, int]) -> str:
    """``module.key``, numbered ("Gun:75 mm #2") when modules share kind and name."""
    count = taken.get(module.key, 0) + 1
    taken[module.key] = count
    return module.key if count == 1 else f"{module.key} #{count}"


class DatasetValidator:
    """Runs all checks over a dataset and its module index.

    Args:
        dataset: The resolved dataset.
        index: Module index built from ``dataset``.
    """

    def __init__(self, dataset: Dataset, index: ModuleIndex):
        self.dataset = dataset
        self.index = index

    def validate(self) -> ValidationReport:
        report = ValidationReport(reference_defects=list(self.dataset.reference_defects))

        for vehicle in self.dataset.vehicles:
            for kind in self.missing_kinds(vehicle):
                report.missing_modules[kind].append(
                    Defect(vehicle.id, vehicle.name, kind.value, f"no compatible {kind.value.lower()}")
                )
            defects = self.check_vehicle(vehicle)
            if defects:
                report.vehicle_defects.setdefault(vehicle.id, []).extend(defects)

        taken: dict[str, int] = {}
        for module in self.dataset.all_modules():
            key = _report_key(module, taken)
            defects = self.check_module(module, key)
            if defects:
                report.module_defects[key] = defects

        logger.info(
            f"Validated {len(self.dataset.vehicles)} vehicles: "
            f"{report.missing_relation_count} missing relations, "
            f"{len(report.vehicle_defects)} vehicles and "
            f"{len(report.module_defects)} modules with defects"
        )
        return report

    def missing_kinds(self, vehicle: Vehicle) -> list[ModuleKind]:
        """Module kinds the vehicle has no module for."""
        missing = []
        for kind in ModuleKind:
            if self.index.has_module(vehicle, kind):
                continue
            if kind is ModuleKind.TURRET and vehicle.type is not None and vehicle.type.turret_optional:
                continue
            missing.append(kind)
        return missing

    def check_vehicle(self, vehicle: Vehicle) -> list[Defect]:
        problems = _check_bounds(vehicle, VEHICLE_BOUNDS)
        problems += _check_required(vehicle, VEHICLE_REQUIRED)
        if vehicle.tier > 1 and vehicle.cost < 1:
            problems.append(("cost", f"cost: {vehicle.cost}"))
        for attr in ("id", "name"):
            value = getattr(vehicle, attr)
            if len(value) < MIN_NAME_LENGTH:
                problems.append((attr, f"{attr}: {value}"))

        for development in Development:
            equipment = vehicle.equipment(development)
            prefix = f"{development.value}."
            problems += _check_bounds(equipment, EQUIPMENT_BOUNDS, prefix)
            problems += _check_required(equipment, EQUIPMENT_REQUIRED, prefix)

        return [Defect(vehicle.id, vehicle.name, name, message) for name, message in problems]

    def check_module(self, module: Module, key: str | None = None) -> list[Defect]:
        """Check one module; ``key`` identifies it in the defects (default ``module.key``)."""
        key = key or module.key
        kind = module.module_kind
        problems: list[tuple[str, str]] = []
        if not module.compatibility:
            problems.append(("compatibility", "has no compatible vehicles"))
        problems += _check_bounds(module, MODULE_BOUNDS)
        problems += _check_required(module, MODULE_REQUIRED)
        if len(module.name) < MIN_NAME_LENGTH:
            problems.append(("name", f"name: {module.name}"))
        problems += _check_bounds(module, MODULE_KIND_BOUNDS.get(kind, ()))
        problems += _check_required(module, MODULE_KIND_REQUIRED.get(kind, ()))

        return [
            Defect(key, module.name, name, f"{kind.value} {module.name}: {message}")
            for name, message in problems
        ]


def validate(dataset: Dataset, index: ModuleIndex | None = None) -> ValidationReport:
    """Validate a resolved dataset, building the module index if not given."""
    if index is None:
        index = ModuleIndex.build(dataset)
    return DatasetValidator(dataset, index).validate()


__all__ = [
    "Defect",
    "ValidationReport",
    "DatasetValidator",
    "validate",
    "VEHICLE_BOUNDS",
    "EQUIPMENT_BOUNDS",
    "MODULE_BOUNDS",
    "MODULE_KIND_BOUNDS",
]
