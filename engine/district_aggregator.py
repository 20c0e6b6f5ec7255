"""District-level travel-time aggregation from point samples."""

from typing import Dict, List
from models.school import Coordinates
from models.travel import TravelSample, DistrictAggregate


def aggregate_baseline(samples: List[TravelSample]) -> Dict[str, DistrictAggregate]:
    """Group samples by district into centroid + mean travel time.

    Every sample counts toward the mean; only located samples count toward the
    centroid. A district without any located sample cannot be drawn and is
    left out of the result.
    """
    groups: Dict[str, List[TravelSample]] = {}
    for sample in samples:
        if not sample.district:
            continue
        groups.setdefault(sample.district, []).append(sample)

    aggregates: Dict[str, DistrictAggregate] = {}
    for district, group in groups.items():
        located = [s.location for s in group if s.location is not None]
        if not located:
            continue

        mean_time = sum(s.travel_time_minutes for s in group) / len(group)
        centroid = Coordinates(
            lat=sum(p.lat for p in located) / len(located),
            lon=sum(p.lon for p in located) / len(located),
        )
        aggregates[district] = DistrictAggregate(
            district=district,
            centroid=centroid,
            sample_count=len(group),
            located_count=len(located),
            mean_travel_time_minutes=mean_time,
        )
    return aggregates
