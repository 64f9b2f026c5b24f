"""
Per-vehicle module lookup.

For every vehicle and module kind the index keeps the compatible modules
ordered from worst to best, so the stock configuration is the first entry
and the top configuration the last.
"""

import logging
from types import MappingProxyType
from typing import Mapping

from .models import (
    MODULE_TYPES,
    Dataset,
    Development,
    Module,
    ModuleKind,
    Vehicle,
)

logger = logging.getLogger("tank-ratings.index")

VehicleRef = Vehicle | str


def _vehicle_id(vehicle: VehicleRef) -> str:
    return vehicle if isinstance(vehicle, str) else vehicle.id


class ModuleIndex:
    """Immutable (vehicle, kind) -> ordered modules index.

    Build it with :meth:`build`; rebuild it when the dataset changes.
    """

    def __init__(self, buckets: Mapping[tuple[str, ModuleKind], tuple[Module, ...]]):
        self._buckets = MappingProxyType(dict(buckets))

    @classmethod
    def build(cls, dataset: Dataset) -> "ModuleIndex":
        """Build the index from every module's compatibility list."""
        collected: dict[tuple[str, ModuleKind], list[Module]] = {}
        for kind in ModuleKind:
            for module in dataset.modules_of(kind):
                for vehicle in module.compatibility:
                    bucket = collected.setdefault((vehicle.id, kind), [])
                    if not any(m is module for m in bucket):
                        bucket.append(module)

        # sorted() is stable: equal keys keep their dataset order
        buckets = {
            key: tuple(sorted(modules, key=lambda m: m.sort_key()))
            for key, modules in collected.items()
        }
        logger.debug(f"Built module index with {len(buckets)} buckets")
        return cls(buckets)

    def __len__(self) -> int:
        return len(self._buckets)

    def modules(self, vehicle: VehicleRef, kind: ModuleKind) -> tuple[Module, ...]:
        """All modules of ``kind`` the vehicle can mount, worst first."""
        return self._buckets.get((_vehicle_id(vehicle), kind), ())

    def has_module(self, vehicle: VehicleRef, kind: ModuleKind) -> bool:
        return bool(self.modules(vehicle, kind))

    def get(
        self, vehicle: VehicleRef, kind: ModuleKind, development: Development
    ) -> Module | None:
        """The stock (first) or top (last) module, or None if there is none."""
        bucket = self.modules(vehicle, kind)
        if not bucket:
            return None
        return bucket[0] if development is Development.STOCK else bucket[-1]

    def lookup(
        self, vehicle: VehicleRef, kind: ModuleKind, development: Development
    ) -> Module:
        """Like :meth:`get`, but an empty bucket yields a placeholder module.

        The placeholder has every attribute zeroed and ``is_placeholder``
        set, which is how downstream code tells it from a real module.
        Every call returns a new placeholder.
        """
        module = self.get(vehicle, kind, development)
        if module is not None:
            return module
        return MODULE_TYPES[kind].placeholder()


__all__ = ["ModuleIndex", "VehicleRef"]
