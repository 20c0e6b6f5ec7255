"""Tests for district travel-time aggregation."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from models.school import Coordinates
from models.travel import TravelSample
from engine.district_aggregator import aggregate_baseline


def make_sample(district="D1", minutes=10.0, lat=24.7, lon=46.7, located=True):
    return TravelSample(district, minutes, Coordinates(lat, lon) if located else None)


class TestAggregateBaseline:
    def test_mean_and_centroid(self):
        samples = [
            make_sample(minutes=10, lat=24.6, lon=46.6),
            make_sample(minutes=20, lat=24.7, lon=46.7),
            make_sample(minutes=30, lat=24.8, lon=46.8),
        ]
        agg = aggregate_baseline(samples)["D1"]
        assert agg.mean_travel_time_minutes == 20
        assert agg.centroid.lat == pytest.approx(24.7)
        assert agg.centroid.lon == pytest.approx(46.7)
        assert agg.sample_count == 3
        assert agg.recalculated_travel_time_minutes is None

    def test_unlocated_samples_count_toward_mean_only(self):
        samples = [
            make_sample(minutes=10, lat=24.6, lon=46.6),
            make_sample(minutes=30, located=False),
        ]
        agg = aggregate_baseline(samples)["D1"]
        assert agg.mean_travel_time_minutes == 20
        assert agg.centroid == Coordinates(24.6, 46.6)
        assert agg.sample_count == 2
        assert agg.located_count == 1

    def test_district_without_located_samples_is_absent(self):
        samples = [make_sample("D1"), make_sample("D2", located=False)]
        result = aggregate_baseline(samples)
        assert "D1" in result
        assert "D2" not in result

    def test_empty_input(self):
        assert aggregate_baseline([]) == {}

    def test_groups_by_district(self):
        samples = [make_sample("D1", 10), make_sample("D2", 40), make_sample("D1", 20)]
        result = aggregate_baseline(samples)
        assert list(result) == ["D1", "D2"]
        assert result["D1"].mean_travel_time_minutes == 15
        assert result["D2"].mean_travel_time_minutes == 40


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
