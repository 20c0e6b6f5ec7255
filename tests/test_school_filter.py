"""Tests for school layer filtering."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from models.school import SchoolRecord
from models.filters import FilterCriteria, TierToggles
from models.override import CapacityOverrides
from engine.school_filter import filter_schools


def make_school(sid, enrollment, capacity=1000, school_type="High", gender="Boys"):
    return SchoolRecord(sid, f"School {sid}", "D1", school_type, gender, capacity, enrollment)


def make_schools():
    return [
        make_school("crit", 1300),
        make_school("over", 1050, school_type="Elementary"),
        make_school("near", 900, gender="Girls"),
        make_school("ok", 500, school_type=None),
    ]


class TestFilterSchools:
    def test_defaults_keep_everything(self):
        schools = make_schools()
        assert filter_schools(schools, FilterCriteria()) == schools

    def test_utilization_range(self):
        result = filter_schools(make_schools(), FilterCriteria(utilization_min=85, utilization_max=110))
        assert [s.id for s in result] == ["over", "near"]

    def test_type_and_gender(self):
        result = filter_schools(make_schools(), FilterCriteria(school_type="High", gender="Boys"))
        assert [s.id for s in result] == ["crit"]

    def test_unknown_type_only_matches_all(self):
        result = filter_schools(make_schools(), FilterCriteria(school_type="Elementary"))
        assert [s.id for s in result] == ["over"]

    def test_tier_toggles(self):
        criteria = FilterCriteria(tiers=TierToggles(critical=False, acceptable=False))
        result = filter_schools(make_schools(), criteria)
        assert [s.id for s in result] == ["over", "near"]

    def test_empty_result_is_valid(self):
        criteria = FilterCriteria(tiers=TierToggles(False, False, False, False))
        assert filter_schools(make_schools(), criteria) == []

    def test_idempotent(self):
        criteria = FilterCriteria(utilization_min=50, gender="Boys")
        once = filter_schools(make_schools(), criteria)
        assert filter_schools(once, criteria) == once

    def test_uses_overrides(self):
        overrides = CapacityOverrides().set("crit", 2000)
        criteria = FilterCriteria(tiers=TierToggles(critical=True, over=False, near=False, acceptable=False))
        assert filter_schools(make_schools(), criteria, overrides) == []


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
