"""Tests for district roll-ups and system KPIs."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from models.school import SchoolRecord
from models.override import CapacityOverrides
from engine.district_impact import (
    compute_district_impact, compute_system_summary, district_impact_rows,
)


def make_school(sid, district, capacity, enrollment):
    return SchoolRecord(sid, sid, district, "High", "Boys", capacity, enrollment)


def make_schools():
    return [
        make_school("A", "D1", 500, 600),
        make_school("B", "D1", 800, 500),
        make_school("C", "D2", 0, 100),
    ]


class TestDistrictImpact:
    def test_baseline(self):
        impact = compute_district_impact(make_schools())
        d1 = impact["D1"]
        assert d1["school_count"] == 2
        assert d1["total_capacity"] == 1300
        assert d1["total_enrollment"] == 1100
        assert d1["capacity_change"] == 0
        assert d1["overcrowded"] == 1
        assert d1["utilization_pct"] == pytest.approx(84.6)

    def test_with_override(self):
        impact = compute_district_impact(make_schools(), CapacityOverrides().set("A", 700))
        d1 = impact["D1"]
        assert d1["total_capacity"] == 1500
        assert d1["original_capacity"] == 1300
        assert d1["capacity_change"] == 200
        assert d1["overcrowded"] == 0

    def test_zero_capacity_district(self):
        d2 = compute_district_impact(make_schools())["D2"]
        assert d2["utilization_pct"] == 0
        assert d2["overcrowded"] == 1

    def test_rows_sorted_by_utilization(self):
        impact = compute_district_impact(make_schools())
        rows = district_impact_rows(impact, {"D1": 12.34})
        assert [r["District"] for r in rows] == ["D1", "D2"]
        assert rows[0]["Travel (min)"] == 12.3
        assert rows[1]["Travel (min)"] is None


class TestSystemSummary:
    def test_summary(self):
        summary = compute_system_summary(make_schools())
        assert summary["total_schools"] == 3
        assert summary["total_enrollment"] == 1200
        assert summary["total_deficit"] == 200
        assert summary["overcapacity_schools"] == 2
        assert summary["tier_counts"]["Critical"] == 1
        assert summary["tier_counts"]["Near-capacity"] == 0
        assert summary["tier_counts"]["Over-capacity"] == 0
        assert summary["tier_counts"]["Acceptable"] == 2

    def test_empty(self):
        summary = compute_system_summary([])
        assert summary["total_schools"] == 0
        assert summary["avg_utilization_pct"] == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
