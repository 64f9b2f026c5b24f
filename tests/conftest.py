"""
Pytest configuration and fixtures for tank-ratings tests.
"""

import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

# Add src directory to Python path to allow importing tank_ratings
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from tank_ratings.ingest import ingest_records  # noqa: E402
from tank_ratings.module_index import ModuleIndex  # noqa: E402
from tank_ratings.resolver import resolve  # noqa: E402


# =============================================================================
# Record builders
# =============================================================================

def equipment_record(development: str, **overrides) -> dict:
    record = {
        "development": development,
        "hitpoints": 500,
        "weight": 30.0,
        "weight_limit": 32.0,
        "gun_elevation_low": -7.0,
        "gun_elevation_high": 20.0,
        "view_range": 350.0,
    }
    record.update(overrides)
    return record


def vehicle_record(name: str, vehicle_type: str = "MediumTank", hitpoints: int = 500, **overrides) -> dict:
    """A vehicle that passes every validator bound."""
    equipment = overrides.pop("equipment", {})
    record = {
        "id": "_" + name.replace(" ", ""),
        "name": name,
        "nation": "Germany",
        "type": vehicle_type,
        "tier": 5,
        "battle_tier_min": 5,
        "battle_tier_max": 7,
        "crew": 5,
        "speed": 50.0,
        "hull_front": 50.0,
        "hull_side": 30.0,
        "hull_rear": 20.0,
        "gun_arc_left": -180.0,
        "gun_arc_right": 180.0,
        "cost": 350000,
        "currency": "Credits",
        "stock": equipment_record("stock", **{"hitpoints": hitpoints, **equipment}),
        "top": equipment_record("top", **{"hitpoints": hitpoints, **equipment}),
    }
    record.update(overrides)
    return record


def _module(kind: str, name: str, vehicles, **fields) -> dict:
    record = {
        "kind": kind,
        "name": name,
        "nation": "Germany",
        "tier": 5,
        "cost": 10000,
        "currency": "Credits",
        "weight": 500.0,
        "compatible_names": list(vehicles),
    }
    record.update(fields)
    return record


def engine_record(name: str, vehicles=(), **fields) -> dict:
    base = {"power": 300, "fire_chance": 20.0, "fuel": "Gasoline"}
    base.update(fields)
    return _module("Engine", name, vehicles, **base)


def gun_record(name: str, vehicles=(), **fields) -> dict:
    base = {
        "ammo_capacity_min": 60,
        "ammo_capacity_max": 60,
        "damage_ap": 110,
        "damage_apcr": 110,
        "damage_he": 175,
        "penetration_ap": 100,
        "penetration_apcr": 140,
        "penetration_he": 38,
        "fire_rate_min": 12.0,
        "fire_rate_max": 12.0,
        "accuracy_min": 0.4,
        "accuracy_max": 0.4,
        "aim_time_min": 2.0,
        "aim_time_max": 2.0,
    }
    base.update(fields)
    return _module("Gun", name, vehicles, **base)


def radio_record(name: str, vehicles=(), **fields) -> dict:
    base = {"range": 400}
    base.update(fields)
    return _module("Radio", name, vehicles, **base)


def suspension_record(name: str, vehicles=(), **fields) -> dict:
    base = {"load": 35.0, "traverse": 40}
    base.update(fields)
    return _module("Suspension", name, vehicles, **base)


def turret_record(name: str, vehicles=(), **fields) -> dict:
    base = {"armor_front": 80.0, "armor_side": 50.0, "armor_rear": 40.0, "traverse": 40.0, "view_range": 350.0}
    base.update(fields)
    return _module("Turret", name, vehicles, **base)


def full_kit(vehicle_name: str, turret: bool = True) -> list[dict]:
    """One module of each kind, compatible with a single vehicle."""
    kit = [
        engine_record(f"{vehicle_name} Engine", [vehicle_name]),
        gun_record(f"{vehicle_name} Gun", [vehicle_name]),
        radio_record(f"{vehicle_name} Radio", [vehicle_name]),
        suspension_record(f"{vehicle_name} Suspension", [vehicle_name]),
    ]
    if turret:
        kit.append(turret_record(f"{vehicle_name} Turret", [vehicle_name]))
    return kit


@pytest.fixture
def records():
    """Record builders for scraped vehicles and modules."""
    return SimpleNamespace(
        equipment=equipment_record,
        vehicle=vehicle_record,
        engine=engine_record,
        gun=gun_record,
        radio=radio_record,
        suspension=suspension_record,
        turret=turret_record,
        full_kit=full_kit,
    )


# =============================================================================
# Sample datasets
# =============================================================================

@pytest.fixture
def sample_records():
    """Three medium tanks in a line (500/800/1000 hp), a light tank and a casemate TD."""
    vehicles = [
        vehicle_record("Medium One", hitpoints=500, child_names=["Medium Two"]),
        vehicle_record("Medium Two", hitpoints=800, parent_names=["Medium One"], child_names=["Medium Three"]),
        vehicle_record("Medium Three", hitpoints=1000, parent_names=["Medium Two"]),
        vehicle_record("Light One", vehicle_type="LightTank", hitpoints=300, speed=70.0),
        vehicle_record("Hunter", vehicle_type="TankDestroyer", hitpoints=700, gun_arc_left=-10.0, gun_arc_right=10.0),
    ]
    modules = []
    for vehicle in vehicles:
        modules.extend(full_kit(vehicle["name"], turret=vehicle["type"] != "TankDestroyer"))
    return vehicles, modules


@pytest.fixture
def sample_raw(sample_records):
    vehicles, modules = sample_records
    return ingest_records(vehicles, modules)


@pytest.fixture
def sample_dataset(sample_raw):
    return resolve(sample_raw)


@pytest.fixture
def sample_index(sample_dataset):
    return ModuleIndex.build(sample_dataset)
