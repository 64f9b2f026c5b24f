"""
Tests for record ingestion.
"""

import logging

from tank_ratings.ingest import ingest_records, parse_module
from tank_ratings.models import FuelType, Gun, ModuleKind, Nation, Vehicle, VehicleType


class TestIngestRecords:
    """Tests for ingest_records()."""

    def test_valid_records(self, sample_records):
        """Every valid record becomes an entity."""
        vehicles, modules = sample_records
        raw = ingest_records(vehicles, modules)
        assert len(raw.vehicles) == 5
        assert len(raw.modules[ModuleKind.ENGINE]) == 5
        assert len(raw.modules[ModuleKind.TURRET]) == 4
        assert raw.rejected == []

    def test_records_keep_names(self, sample_raw):
        """Relations are still names after ingestion."""
        medium_two = next(v for v in sample_raw.vehicles if v.name == "Medium Two")
        assert medium_two.parent_names == ["Medium One"]
        assert medium_two.parents == []

    def test_missing_identity_rejected(self, records, caplog):
        """A record without id and name is rejected, the others are kept."""
        bad = records.vehicle("Broken")
        del bad["id"]
        del bad["name"]
        with caplog.at_level(logging.WARNING, logger="tank-ratings.ingest"):
            raw = ingest_records([records.vehicle("Good"), bad])
        assert [v.name for v in raw.vehicles] == ["Good"]
        assert len(raw.rejected) == 1
        assert raw.rejected[0].kind == "Vehicle"
        assert "Rejected vehicle record" in caplog.text

    def test_id_derived_from_name(self, records):
        record = records.vehicle("Pz.Kpfw. IV")
        del record["id"]
        raw = ingest_records([record])
        assert raw.vehicles[0].id == "_PzKpfwIV"

    def test_out_of_range_number_rejected(self, records):
        """A crew count that does not fit in a byte is rejected."""
        raw = ingest_records([records.vehicle("Crowded", crew=1000)])
        assert raw.vehicles == []
        assert raw.rejected[0].identity == "_Crowded"
        assert "crew" in raw.rejected[0].message

    def test_unknown_module_kind_rejected(self, records):
        bad = records.engine("Mystery")
        bad["kind"] = "Jetpack"
        raw = ingest_records([], [bad, records.gun("Fine")])
        assert [m.name for m in raw.all_modules()] == ["Fine"]
        assert raw.rejected[0].kind == "Jetpack"
        assert raw.rejected[0].identity == "Mystery"

    def test_enum_values_parsed(self, records):
        raw = ingest_records([records.vehicle("Scout", vehicle_type="LightTank")])
        assert raw.vehicles[0].type is VehicleType.LIGHT_TANK

    def test_scraped_labels_parsed(self, records):
        """Wiki labels are accepted in place of enum values."""
        raw = ingest_records(
            [records.vehicle("Hunter", vehicle_type="Tank Destroyer", nation="Soviet")],
            [records.engine("V-2", ["Hunter"], fuel="Diesel (high octane)", nation="soviet")],
        )
        assert raw.rejected == []
        assert raw.vehicles[0].type is VehicleType.TANK_DESTROYER
        assert raw.vehicles[0].nation is Nation.USSR
        engine = raw.modules[ModuleKind.ENGINE][0]
        assert engine.fuel is FuelType.DIESEL
        assert engine.nation is Nation.USSR

    def test_unknown_label_rejected(self, records):
        raw = ingest_records([records.vehicle("Boat", vehicle_type="Hovercraft")])
        assert raw.vehicles == []
        assert "Hovercraft" in raw.rejected[0].message

    def test_built_entities_pass_through(self):
        vehicle = Vehicle(id="_V", name="V")
        gun = Gun(name="G")
        raw = ingest_records([vehicle], [gun])
        assert raw.vehicles[0] is vehicle
        assert raw.modules[ModuleKind.GUN][0] is gun


class TestParseModule:
    def test_dispatch_on_kind(self, records):
        module = parse_module(records.radio("SR-1", range=550))
        assert module.module_kind is ModuleKind.RADIO
        assert module.range == 550
