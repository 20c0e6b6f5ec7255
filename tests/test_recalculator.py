"""Tests for what-if travel-time recalculation."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from models.school import Coordinates, SchoolRecord
from models.travel import TravelSample
from models.override import CapacityOverrides
from engine.district_aggregator import aggregate_baseline
from engine.geo import haversine_km
from engine.recalculator import (
    recalculate, recalculate_detailed, resolve_district_layer, compare_district_layers,
    BASIS_LOCAL, BASIS_NEAREST, BASIS_SATURATED,
)

CENTER = (24.7, 46.7)
KM_PER_DEG_LAT = 111.19


def make_school(sid, district, capacity, enrollment, lat=CENTER[0], lon=CENTER[1], located=True):
    loc = Coordinates(lat, lon) if located else None
    return SchoolRecord(sid, f"School {sid}", district, "High", "Boys", capacity, enrollment, loc)


def make_baseline(*districts, minutes=18.0):
    samples = [TravelSample(d, minutes, Coordinates(*CENTER)) for d in districts]
    return aggregate_baseline(samples)


def north_of_center(km):
    return CENTER[0] + km / KM_PER_DEG_LAT


class TestRecalculate:
    def test_override_creates_local_option(self):
        """District D: A over capacity at the centroid, B 4 km away."""
        schools = [
            make_school("A", "D", 500, 600),
            make_school("B", "D", 800, 500, lat=north_of_center(4)),
        ]
        baseline = make_baseline("D")

        overrides = CapacityOverrides().set("A", 700)
        result = recalculate(schools, overrides, baseline)
        assert result["D"] == 5

    def test_nearest_school_in_other_district(self):
        schools = [
            make_school("A", "D1", 500, 600),
            make_school("C", "D2", 800, 500, lat=north_of_center(4)),
            make_school("F", "D2", 800, 500, lat=north_of_center(9)),
        ]
        baseline = make_baseline("D1")
        detail = recalculate_detailed(schools, CapacityOverrides().set("A", 500), baseline)["D1"]

        expected_km = haversine_km(CENTER[0], CENTER[1], north_of_center(4), CENTER[1])
        assert detail.basis == BASIS_NEAREST
        assert detail.nearest_school_id == "C"
        assert detail.nearest_distance_km == pytest.approx(expected_km)
        assert detail.minutes == pytest.approx(expected_km * 3)

    def test_saturated_system_falls_back(self):
        schools = [make_school("A", "D1", 500, 600), make_school("B", "D2", 300, 300)]
        detail = recalculate_detailed(schools, CapacityOverrides().set("A", 500), make_baseline("D1"))["D1"]
        assert detail.basis == BASIS_SATURATED
        assert detail.minutes == 30

    def test_spare_capacity_never_increases_time(self):
        schools = [
            make_school("A", "D1", 500, 600),
            make_school("C", "D2", 800, 500, lat=north_of_center(6)),
        ]
        baseline = make_baseline("D1")
        before = recalculate(schools, CapacityOverrides().set("C", 800), baseline)["D1"]
        after = recalculate(schools, CapacityOverrides().set("C", 800).set("A", 650), baseline)["D1"]
        assert before > 5
        assert after == 5
        assert after <= before

    def test_from_saturated_to_local(self):
        schools = [make_school("A", "D1", 500, 600)]
        baseline = make_baseline("D1")
        before = recalculate(schools, CapacityOverrides().set("A", 500), baseline)["D1"]
        after = recalculate(schools, CapacityOverrides().set("A", 601), baseline)["D1"]
        assert before == 30
        assert after == 5

    def test_unlocated_school_counts_locally_only(self):
        schools = [
            make_school("A", "D1", 900, 600, located=False),
            make_school("B", "D2", 500, 600),
        ]
        baseline = make_baseline("D1", "D2")
        details = recalculate_detailed(schools, CapacityOverrides().set("B", 500), baseline)
        assert details["D1"].basis == BASIS_LOCAL
        # D2's only candidate has no coordinates, so nothing is reachable
        assert details["D2"].basis == BASIS_SATURATED

    def test_configurable_policy(self):
        schools = [make_school("A", "D1", 500, 600)]
        baseline = make_baseline("D1")
        cfg = {"local_option_minutes": 2, "saturation_fallback_minutes": 45}
        assert recalculate(schools, CapacityOverrides().set("A", 500), baseline, cfg)["D1"] == 45
        assert recalculate(schools, CapacityOverrides().set("A", 700), baseline, cfg)["D1"] == 2

    def test_only_drawable_districts(self):
        schools = [make_school("A", "D9", 500, 100)]
        result = recalculate(schools, CapacityOverrides().set("A", 600), make_baseline("D1"))
        assert list(result) == ["D1"]


class TestResolveDistrictLayer:
    def test_baseline_untouched_without_overrides(self):
        schools = [make_school("A", "D1", 500, 100)]
        baseline = make_baseline("D1")
        layer = resolve_district_layer(baseline, schools, CapacityOverrides())
        assert layer["D1"].recalculated_travel_time_minutes is None
        assert layer["D1"].travel_time_minutes == 18.0

    def test_recalculated_with_overrides(self):
        schools = [make_school("A", "D1", 500, 600)]
        baseline = make_baseline("D1")
        layer = resolve_district_layer(baseline, schools, CapacityOverrides().set("A", 650))
        assert layer["D1"].recalculated_travel_time_minutes == 5
        assert layer["D1"].travel_time_minutes == 5
        assert layer["D1"].mean_travel_time_minutes == 18.0
        # The baseline map itself is not modified
        assert baseline["D1"].recalculated_travel_time_minutes is None

    def test_comparison_rows(self):
        schools = [make_school("A", "D1", 500, 600)]
        layer = resolve_district_layer(make_baseline("D1"), schools, CapacityOverrides().set("A", 650))
        rows = compare_district_layers(layer)
        assert rows[0]["District"] == "D1"
        assert rows[0]["Baseline (min)"] == 18.0
        assert rows[0]["What-If (min)"] == 5.0
        assert rows[0]["Change (min)"] == -13.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
