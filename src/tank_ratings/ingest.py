"""
Record ingestion.

Turns the plain mapping records produced by the scraper into validated
entities. A record that cannot be validated is reported as a
RejectedRecord and skipped; the remaining records are still ingested.
"""

import logging
from typing import Any, Iterable, Mapping

from pydantic import TypeAdapter, ValidationError

from .models import (
    AnyModule,
    Module,
    RawDataset,
    RejectedRecord,
    Vehicle,
    make_vehicle_id,
)

logger = logging.getLogger("tank-ratings.ingest")

_module_adapter: TypeAdapter = TypeAdapter(AnyModule)


def _first_error(error: ValidationError) -> str:
    """Condense a pydantic error into a one-line message."""
    details = error.errors()
    if not details:
        return str(error)
    first = details[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "record"
    suffix = f" (+{len(details) - 1} more)" if len(details) > 1 else ""
    return f"{location}: {first.get('msg', 'invalid value')}{suffix}"


def parse_vehicle(record: Mapping[str, Any] | Vehicle) -> Vehicle:
    """Validate a single vehicle record.

    A record without an ``id`` gets one derived from its ``name``.

    Raises:
        ValidationError: If the record is not a valid vehicle.
    """
    if isinstance(record, Vehicle):
        return record
    data = dict(record)
    if not data.get("id") and data.get("name"):
        data["id"] = make_vehicle_id(str(data["name"]))
    return Vehicle.model_validate(data)


def parse_module(record: Mapping[str, Any] | Module) -> Module:
    """Validate a single module record, dispatching on its ``kind``.

    Raises:
        ValidationError: If the record is not a valid module.
    """
    if isinstance(record, Module):
        return record
    return _module_adapter.validate_python(dict(record))


def ingest_records(
    vehicles: Iterable[Mapping[str, Any] | Vehicle],
    modules: Iterable[Mapping[str, Any] | Module] = (),
) -> RawDataset:
    """Build a RawDataset from scraped records.

    Args:
        vehicles: Vehicle records (mappings or already built Vehicle objects).
        modules: Module records; each mapping carries a ``kind`` key
            ("Engine", "Gun", "Radio", "Suspension" or "Turret").

    Returns:
        A RawDataset with every valid record and one RejectedRecord per
        record that failed validation.
    """
    raw = RawDataset()

    for record in vehicles:
        try:
            raw.vehicles.append(parse_vehicle(record))
        except ValidationError as e:
            identity = str(record.get("id") or record.get("name") or "")
            message = _first_error(e)
            logger.warning(f"Rejected vehicle record '{identity or 'unknown'}': {message}")
            raw.rejected.append(RejectedRecord("Vehicle", identity, message))

    for record in modules:
        try:
            raw.add_module(parse_module(record))
        except ValidationError as e:
            kind = str(record.get("kind") or "Module")
            identity = str(record.get("name") or "")
            message = _first_error(e)
            logger.warning(f"Rejected {kind} record '{identity or 'unknown'}': {message}")
            raw.rejected.append(RejectedRecord(kind, identity, message))

    module_count = sum(len(bucket) for bucket in raw.modules.values())
    logger.info(
        f"Ingested {len(raw.vehicles)} vehicles and {module_count} modules "
        f"({len(raw.rejected)} rejected)"
    )
    return raw


__all__ = ["ingest_records", "parse_vehicle", "parse_module"]
