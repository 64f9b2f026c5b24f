"""
Reference resolution.

Converts a RawDataset, where parent/child links and module compatibility
are vehicle names, into a Dataset where they are direct Vehicle references.
Names that match no vehicle are reported as ReferenceDefects and the link
is dropped; resolution never fails because of bad data.
"""

import logging
from typing import Iterable

from .errors import ResolverError
from .models import (
    Dataset,
    Module,
    ModuleKind,
    RawDataset,
    ReferenceDefect,
    Vehicle,
    make_vehicle_id,
)

logger = logging.getLogger("tank-ratings.resolver")


class ReferenceResolver:
    """Resolves the by-name references of one raw dataset.

    Vehicles are looked up by id first, then by display name, then by the
    id derived from the name (scraped pages are not consistent about which
    spelling they link with). The raw dataset is left untouched; the
    resolved dataset holds copies whose name lists have been consumed.

    Args:
        raw: The ingested, unresolved dataset.
    """

    def __init__(self, raw: RawDataset):
        self.raw = raw
        self.defects: list[ReferenceDefect] = []
        self._by_id: dict[str, Vehicle] = {}
        self._by_name: dict[str, Vehicle] = {}
        self._by_derived_id: dict[str, Vehicle] = {}

    def resolve(self) -> Dataset:
        """Run resolution and return the resolved dataset."""
        self.defects = []
        originals = self._deduplicate(self.raw.vehicles)

        # Copies first, so that every link can point at its final object
        resolved = [
            v.model_copy(update={"parents": [], "children": []})
            for v in originals
        ]
        self._index(resolved)

        for original, vehicle in zip(originals, resolved):
            vehicle.parents = self._lookup_all(vehicle.id, "parents", original.parent_names)
            vehicle.children = self._lookup_all(vehicle.id, "children", original.child_names)
            vehicle.parent_names = []
            vehicle.child_names = []

        modules: dict[ModuleKind, list[Module]] = {}
        for kind in ModuleKind:
            modules[kind] = [
                self._resolve_module(module) for module in self.raw.modules.get(kind, [])
            ]

        dataset = Dataset(
            vehicles=resolved,
            modules=modules,
            reference_defects=list(self.defects),
            rejected=list(self.raw.rejected),
        )
        logger.info(
            f"Resolved {len(resolved)} vehicles "
            f"({len(self.defects)} reference defects)"
        )
        return dataset

    def _deduplicate(self, vehicles: Iterable[Vehicle]) -> list[Vehicle]:
        """Keep the first vehicle for every id, report the others."""
        seen: set[str] = set()
        unique: list[Vehicle] = []
        for vehicle in vehicles:
            if vehicle.id in seen:
                message = f"Duplicate vehicle id '{vehicle.id}' ({vehicle.name}), keeping the first"
                logger.warning(message)
                self.defects.append(
                    ReferenceDefect(vehicle.id, "identity", vehicle.name, message)
                )
                continue
            seen.add(vehicle.id)
            unique.append(vehicle)
        return unique

    def _index(self, vehicles: list[Vehicle]) -> None:
        self._by_id = {}
        self._by_name = {}
        self._by_derived_id = {}
        for vehicle in vehicles:
            self._by_id[vehicle.id] = vehicle
            self._by_name.setdefault(vehicle.name, vehicle)
            self._by_derived_id.setdefault(make_vehicle_id(vehicle.name), vehicle)

    def _lookup(self, name: str) -> Vehicle | None:
        vehicle = self._by_id.get(name) or self._by_name.get(name)
        if vehicle is None:
            vehicle = self._by_derived_id.get(make_vehicle_id(name))
        return vehicle

    def _lookup_all(self, owner: str, relation: str, names: Iterable[str]) -> list[Vehicle]:
        """Resolve a list of names, dropping (and reporting) unknown ones."""
        found: list[Vehicle] = []
        seen: set[str] = set()
        for name in names:
            vehicle = self._lookup(name)
            if vehicle is None:
                logger.warning(f"{owner}: {relation} reference '{name}' does not match any vehicle")
                self.defects.append(ReferenceDefect(owner, relation, name))
                continue
            if vehicle.id not in seen:
                seen.add(vehicle.id)
                found.append(vehicle)
        return found

    def _resolve_module(self, module: Module) -> Module:
        compatibility = self._lookup_all(module.key, "compatibility", module.compatible_names)
        return module.model_copy(
            update={"compatibility": compatibility, "compatible_names": []}
        )


def resolve(data: RawDataset | Dataset) -> Dataset:
    """Resolve a raw dataset.

    A dataset that is already resolved is returned unchanged, so calling
    this twice is harmless.

    Raises:
        ResolverError: If ``data`` is neither a RawDataset nor a Dataset.
    """
    if isinstance(data, Dataset):
        return data
    if not isinstance(data, RawDataset):
        raise ResolverError(f"Cannot resolve object of type {type(data).__name__}")
    return ReferenceResolver(data).resolve()


__all__ = ["ReferenceResolver", "resolve"]
