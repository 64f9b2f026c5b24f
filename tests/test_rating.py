"""
Tests for the rating engine.

Covers best-value computation, field percentages, composite scores,
category and overall ratings, turret variants, scope errors and anomalies.
"""

import logging

import pytest

from tank_ratings.errors import RatingScopeError
from tank_ratings.fields import FieldAccessor, FieldId
from tank_ratings.fields.catalogue import Direction
from tank_ratings.ingest import ingest_records
from tank_ratings.models import Development, Vehicle, VehicleType
from tank_ratings.module_index import ModuleIndex
from tank_ratings.rating import (
    BestValues,
    Category,
    Component,
    RatingEngine,
    RatingScope,
    WeightVariant,
    armor_rating,
    compute_best_values,
    field_percentage,
    mean_of_applicable,
    weighted_sum,
)
from tank_ratings.resolver import resolve

STOCK = Development.STOCK
TOP = Development.TOP
MEDIUMS = RatingScope.of_type(VehicleType.MEDIUM_TANK)


@pytest.fixture
def engine(sample_dataset, sample_index):
    return RatingEngine(sample_dataset, sample_index)


def _engine_for(vehicles, modules):
    dataset = resolve(ingest_records(vehicles, modules))
    return RatingEngine(dataset, ModuleIndex.build(dataset))


# =============================================================================
# Scoring Functions
# =============================================================================

class TestFieldPercentage:
    """Tests for field_percentage()."""

    def test_higher_is_better(self):
        assert field_percentage(500.0, 1000.0, Direction.HIGHER) == 0.5

    def test_lower_is_better(self):
        assert field_percentage(0.4, 0.3, Direction.LOWER) == pytest.approx(0.75)

    def test_best_scores_one(self):
        assert field_percentage(1000.0, 1000.0, Direction.HIGHER) == 1.0
        assert field_percentage(0.3, 0.3, Direction.LOWER) == 1.0

    def test_not_applicable(self):
        """Non-positive values and missing best values are not applicable."""
        assert field_percentage(0.0, 1000.0, Direction.HIGHER) is None
        assert field_percentage(-3.0, 1000.0, Direction.HIGHER) is None
        assert field_percentage(500.0, None, Direction.HIGHER) is None

    def test_beyond_best(self):
        assert field_percentage(1200.0, 1000.0, Direction.HIGHER) is None
        assert field_percentage(0.2, 0.3, Direction.LOWER) is None


class TestComposites:
    """Tests for armor, mean and weighted sums."""

    def test_armor_rating(self):
        assert armor_rating(1.0, 1.0, 1.0) == 1.0
        assert armor_rating(1.0, 0.5, 0.0) == pytest.approx(0.65)

    def test_armor_rating_needs_all_sides(self):
        assert armor_rating(1.0, None, 1.0) is None

    def test_mean_of_applicable(self):
        assert mean_of_applicable([0.5, None, 1.0, None]) == pytest.approx(0.75)
        assert mean_of_applicable([None, None]) is None

    def test_weighted_sum(self):
        assert weighted_sum({"a": 0.5, "b": 0.5}, {"a": 1.0, "b": 0.5}) == pytest.approx(0.75)

    def test_weighted_sum_propagates_not_applicable(self):
        assert weighted_sum({"a": 0.5, "b": 0.5}, {"a": 1.0, "b": None}) is None

    def test_zero_weight_never_propagates(self):
        assert weighted_sum({"a": 1.0, "b": 0.0}, {"a": 0.8, "b": None}) == pytest.approx(0.8)

    def test_weighted_sum_capped(self):
        assert weighted_sum({"a": 0.7, "b": 0.3}, {"a": 1.0, "b": 1.0}) <= 1.0


# =============================================================================
# Best Values
# =============================================================================

class TestBestValues:
    """Tests for compute_best_values()."""

    def test_three_mediums(self, sample_dataset, sample_index):
        """500/800/1000 hp: the best is 1000."""
        best = compute_best_values(sample_dataset, sample_index, MEDIUMS)
        assert best.get(FieldId.TE_HITPOINTS) == 1000.0
        assert best.scope == MEDIUMS

    def test_scope_restricts_peers(self, sample_dataset, sample_index):
        everything = compute_best_values(sample_dataset, sample_index)
        mediums = compute_best_values(sample_dataset, sample_index, MEDIUMS)
        assert everything.get(FieldId.T_TOP_SPEED) == 70.0
        assert mediums.get(FieldId.T_TOP_SPEED) == 50.0

    def test_zero_never_best(self, sample_dataset, sample_index):
        """No gun fires HEAT, so there is no best HEAT damage."""
        best = compute_best_values(sample_dataset, sample_index)
        assert best.get(FieldId.DP_DPS_HEAT) is None
        assert FieldId.MG_PEN_HEAT not in best

    def test_lower_is_better_keeps_minimum(self, records):
        engine = _engine_for(
            [records.vehicle("Sharp"), records.vehicle("Blunt")],
            [
                records.gun("Sharp Gun", ["Sharp"], accuracy_min=0.3, accuracy_max=0.3),
                records.gun("Blunt Gun", ["Blunt"], accuracy_min=0.4, accuracy_max=0.4),
            ],
        )
        assert engine.best_values().get(FieldId.DP_ACCURACY) == pytest.approx(0.3)

    def test_read_only(self, sample_dataset, sample_index):
        best = compute_best_values(sample_dataset, sample_index)
        with pytest.raises(TypeError):
            best.values[FieldId.TE_HITPOINTS] = 1.0

    def test_plain_mapping_is_frozen(self):
        best = BestValues(RatingScope.everything(), {FieldId.TE_HITPOINTS: 10.0})
        with pytest.raises(TypeError):
            best.values[FieldId.TE_HITPOINTS] = 1.0

    def test_computed_once_per_scope(self, engine):
        assert engine.best_values(MEDIUMS) is engine.best_values(MEDIUMS)

    def test_catalogue_untouched(self, sample_dataset, sample_index):
        """Computing best values leaves the dataset as it was."""
        before = [v.model_dump() for v in sample_dataset.vehicles]
        compute_best_values(sample_dataset, sample_index)
        assert [v.model_dump() for v in sample_dataset.vehicles] == before


# =============================================================================
# Rating
# =============================================================================

class TestRate:
    """Tests for RatingEngine.rate()."""

    def test_hitpoints_half(self, engine, sample_dataset):
        """The 500 hp medium scores 0.5 against the 1000 hp medium."""
        best = engine.best_values(MEDIUMS)
        rating = engine.rate(sample_dataset.vehicle("_MediumOne"), STOCK, best)
        assert rating.score(Component.HITPOINTS) == 0.5
        field = rating.components[Component.HITPOINTS].fields[0]
        assert (field.value, field.best) == (500.0, 1000.0)

    def test_best_vehicle_scores_one(self, engine, sample_dataset):
        best = engine.best_values(MEDIUMS)
        rating = engine.rate(sample_dataset.vehicle("_MediumThree"), TOP, best)
        assert rating.score(Component.HITPOINTS) == 1.0

    def test_best_lower_is_better_scores_one(self, records):
        engine = _engine_for(
            [records.vehicle("Sharp"), records.vehicle("Blunt")],
            [
                records.gun("Sharp Gun", ["Sharp"], accuracy_min=0.3, accuracy_max=0.3),
                records.gun("Blunt Gun", ["Blunt"], accuracy_min=0.4, accuracy_max=0.4),
            ],
        )
        best = engine.best_values()
        sharp = engine.rate(engine.dataset.vehicle("_Sharp"), STOCK, best)
        blunt = engine.rate(engine.dataset.vehicle("_Blunt"), STOCK, best)
        assert sharp.score(Component.ACCURACY) == 1.0
        assert blunt.score(Component.ACCURACY) == pytest.approx(0.75)

    def test_scores_in_range(self, engine):
        """Every score is in [0, 1] or not applicable."""
        for rating in engine.rate_scope():
            scores = [c.score for c in rating.components.values()]
            scores += list(rating.categories.values()) + [rating.overall]
            for score in scores:
                assert score is None or 0.0 <= score <= 1.0

    def test_idempotent(self, engine, sample_dataset):
        best = engine.best_values()
        vehicle = sample_dataset.vehicle("_MediumTwo")
        assert engine.rate(vehicle, TOP, best) == engine.rate(vehicle, TOP, best)

    def test_medium_fully_rated(self, engine, sample_dataset):
        rating = engine.rate(sample_dataset.vehicle("_MediumTwo"), STOCK, engine.best_values())
        assert rating.variant is WeightVariant.DEFAULT
        for category in (Category.DEFENSE, Category.ATTACK, Category.MOBILITY, Category.RECON):
            assert rating.categories[category] is not None
        assert rating.categories[Category.COST_BENEFIT] is None
        assert rating.overall is not None
        assert rating.anomalies == []

    def test_overall_is_weighted_categories(self, engine, sample_dataset):
        rating = engine.rate(sample_dataset.vehicle("_MediumTwo"), STOCK, engine.best_values())
        overall = engine.weights.for_type(VehicleType.MEDIUM_TANK).overall
        expected = sum(overall[c] * rating.categories[c] for c in overall if overall[c])
        assert rating.overall == pytest.approx(expected)

    def test_damage_is_mean_of_ammo_types(self, engine, sample_dataset):
        """HEAT is not fired, so damage averages AP, APCR and HE."""
        rating = engine.rate(sample_dataset.vehicle("_MediumOne"), STOCK, engine.best_values())
        fields = {f.field: f.score for f in rating.components[Component.DAMAGE].fields}
        assert fields[FieldId.DP_DPS_HEAT] is None
        applicable = [s for s in fields.values() if s is not None]
        assert rating.score(Component.DAMAGE) == pytest.approx(sum(applicable) / 3)

    def test_td_without_turret(self, engine, sample_dataset):
        """A casemate TD uses the no-turret weights and still gets rated."""
        rating = engine.rate(sample_dataset.vehicle("_Hunter"), STOCK, engine.best_values())
        assert rating.score(Component.TURRET_ARMOR) is None
        assert rating.variant is WeightVariant.NO_TURRET
        assert Component.TURRET_ARMOR not in rating.category_components[Category.DEFENSE]
        assert rating.categories[Category.DEFENSE] is not None
        assert rating.overall is not None

    def test_medium_without_turret_not_applicable(self, records):
        """A turret-less medium has no turret variant: defense and overall are n/a."""
        engine = _engine_for([records.vehicle("Bare")], records.full_kit("Bare", turret=False))
        rating = engine.rate(engine.dataset.vehicle("_Bare"), STOCK, engine.best_values())
        assert rating.variant is WeightVariant.DEFAULT
        assert rating.categories[Category.DEFENSE] is None
        assert rating.categories[Category.ATTACK] is not None
        assert rating.overall is None

    def test_constituents(self, engine, sample_dataset):
        rating = engine.rate(sample_dataset.vehicle("_LightOne"), TOP, engine.best_values())
        recon = rating.constituents(Category.RECON)
        assert set(recon) == {Component.RADIO_RANGE, Component.VIEW_RANGE}

    def test_value_of(self, engine, sample_dataset):
        rating = engine.rate(sample_dataset.vehicle("_MediumThree"), TOP, engine.best_values())
        assert rating.value_of("overall") == rating.overall
        assert rating.value_of("attack") == rating.categories[Category.ATTACK]
        assert rating.value_of("hitpoints") == 1.0
        assert FieldAccessor(engine.index).get_rating(FieldId.RT_HITPOINTS, rating) == "100.0%"

    def test_untyped_vehicle(self, records, caplog):
        engine = _engine_for([records.vehicle("Mystery", vehicle_type=None)], records.full_kit("Mystery"))
        with caplog.at_level(logging.WARNING, logger="tank-ratings.rating"):
            rating = engine.rate(engine.dataset.vehicle("_Mystery"), STOCK, engine.best_values())
        assert rating.overall is None
        assert all(score is None for score in rating.categories.values())
        assert rating.score(Component.HITPOINTS) == 1.0
        assert "no type" in caplog.text


class TestScope:
    """Rating against the wrong best values is an error."""

    def test_outside_scope(self, engine, sample_dataset):
        light = sample_dataset.vehicle("_LightOne")
        with pytest.raises(RatingScopeError, match="outside rating scope 'MediumTank'"):
            engine.rate(light, STOCK, engine.best_values(MEDIUMS))

    def test_not_in_dataset(self, engine):
        stranger = Vehicle(id="_Stranger", name="Stranger", type=VehicleType.MEDIUM_TANK)
        with pytest.raises(RatingScopeError, match="not part of the rated dataset"):
            engine.rate(stranger, STOCK, engine.best_values())


class TestAnomalies:
    """Values beyond the best value are reported, not scored."""

    def test_anomaly_recorded(self, engine, sample_dataset, caplog):
        best = BestValues(RatingScope.everything(), {FieldId.TE_HITPOINTS: 400.0})
        with caplog.at_level(logging.WARNING, logger="tank-ratings.rating"):
            rating = engine.rate(sample_dataset.vehicle("_MediumOne"), STOCK, best)
        assert rating.score(Component.HITPOINTS) is None
        assert len(rating.anomalies) == 1
        anomaly = rating.anomalies[0]
        assert (anomaly.field, anomaly.value, anomaly.best) == (FieldId.TE_HITPOINTS, 500.0, 400.0)
        assert "beyond the best value" in caplog.text


class TestRateScope:
    """Tests for rate_scope() and rate_by_type()."""

    def test_both_developments(self, engine, sample_dataset):
        ratings = engine.rate_scope()
        assert len(ratings) == 2 * len(sample_dataset.vehicles)
        assert {r.development for r in ratings} == {STOCK, TOP}

    def test_by_type(self, engine):
        by_type = engine.rate_by_type()
        assert set(by_type) == set(VehicleType)
        assert len(by_type[VehicleType.MEDIUM_TANK]) == 6
        assert by_type[VehicleType.HEAVY_TANK] == []
        assert all(r.scope == "MediumTank" for r in by_type[VehicleType.MEDIUM_TANK])

    def test_by_type_changes_peers(self, engine):
        """Within its own type, the light tank is the fastest."""
        light_all = [r for r in engine.rate_scope() if r.vehicle_id == "_LightOne"][0]
        light_own = engine.rate_by_type()[VehicleType.LIGHT_TANK][0]
        assert light_own.score(Component.HITPOINTS) == 1.0
        assert light_all.score(Component.HITPOINTS) == pytest.approx(0.3)
        assert light_all.score(Component.SPEED) == 1.0
