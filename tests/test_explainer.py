"""Tests for recalculation explanations."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from engine.recalculator import DistrictRecalculation, BASIS_LOCAL, BASIS_NEAREST, BASIS_SATURATED
from engine.explainer import explain_recalculation


class TestExplainRecalculation:
    def test_local(self):
        recalc = DistrictRecalculation("D1", 5.0, BASIS_LOCAL, 120, local_schools_with_spare=2)
        steps = explain_recalculation(recalc, 18.0)
        assert "Local option available" in steps[2]
        assert steps[-1] == "Result: 5.0 min (-13.0 min vs baseline)"

    def test_nearest(self):
        recalc = DistrictRecalculation(
            "D1", 12.0, BASIS_NEAREST, 0,
            nearest_school_id="C", nearest_school_name="School C",
            nearest_school_district="D2", nearest_distance_km=4.0,
        )
        steps = explain_recalculation(recalc, 10.0)
        assert "School C (D2)" in steps[2]
        assert "max(5, 4.0 km x 3 min/km)" in steps[3]
        assert steps[-1].endswith("(+2.0 min vs baseline)")

    def test_saturated_without_baseline(self):
        recalc = DistrictRecalculation("D1", 30.0, BASIS_SATURATED, 0)
        steps = explain_recalculation(recalc)
        assert "no observed travel time" in steps[0]
        assert "saturation" in steps[2]
        assert steps[-1] == "Result: 30.0 min"


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
