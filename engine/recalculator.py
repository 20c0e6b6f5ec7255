"""What-if travel-time recalculation — nearest school with spare capacity."""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
from models.school import Coordinates, SchoolRecord
from models.travel import DistrictAggregate
from models.override import CapacityOverrides
from engine.geo import distance_between, estimate_travel_minutes
from engine.utilization import SchoolStatus, school_status
from config.defaults import LOCAL_OPTION_MINUTES, SATURATION_FALLBACK_MINUTES

BASIS_LOCAL = "local"
BASIS_NEAREST = "nearest"
BASIS_SATURATED = "saturated"


@dataclass(frozen=True)
class DistrictRecalculation:
    district: str
    minutes: float
    basis: str                            # BASIS_LOCAL, BASIS_NEAREST or BASIS_SATURATED
    district_spare_seats: int
    local_schools_with_spare: int = 0
    nearest_school_id: Optional[str] = None
    nearest_school_name: Optional[str] = None
    nearest_school_district: Optional[str] = None
    nearest_distance_km: Optional[float] = None


def spare_seats_by_district(statuses: List[SchoolStatus]) -> Dict[str, int]:
    totals: Dict[str, int] = {}
    for item in statuses:
        totals[item.school.district] = totals.get(item.school.district, 0) + item.spare_seats
    return totals


def nearest_with_spare(
    origin: Coordinates,
    statuses: List[SchoolStatus],
) -> Tuple[Optional[SchoolStatus], Optional[float]]:
    """Closest located school anywhere in the system that still has spare seats."""
    best, best_km = None, None
    for item in statuses:
        if item.spare_seats <= 0 or item.school.location is None:
            continue
        km = distance_between(origin, item.school.location)
        if best_km is None or km < best_km:
            best, best_km = item, km
    return best, best_km


def recalculate_detailed(
    schools: List[SchoolRecord],
    overrides: CapacityOverrides,
    aggregates: Dict[str, DistrictAggregate],
    rule_config: Optional[dict] = None,
) -> Dict[str, DistrictRecalculation]:
    """Recompute travel time for every drawable district under the overrides.

    A district with spare seats of its own gets the flat local-option time
    regardless of distance. Otherwise the nearest school system-wide with spare
    seats is found from the district centroid (greedy, O(districts x schools)),
    and if no such school exists the saturation fallback is used.
    """
    cfg = rule_config or {}
    local_minutes = cfg.get("local_option_minutes", LOCAL_OPTION_MINUTES)
    fallback_minutes = cfg.get("saturation_fallback_minutes", SATURATION_FALLBACK_MINUTES)

    statuses = [school_status(s, overrides) for s in schools]
    district_spare = spare_seats_by_district(statuses)

    results: Dict[str, DistrictRecalculation] = {}
    for district, agg in aggregates.items():
        spare = district_spare.get(district, 0)
        local_count = sum(1 for item in statuses
                          if item.school.district == district and item.spare_seats > 0)

        if spare > 0 and local_count > 0:
            results[district] = DistrictRecalculation(
                district=district,
                minutes=local_minutes,
                basis=BASIS_LOCAL,
                district_spare_seats=spare,
                local_schools_with_spare=local_count,
            )
            continue

        nearest, km = nearest_with_spare(agg.centroid, statuses)
        if nearest is None:
            results[district] = DistrictRecalculation(
                district=district,
                minutes=fallback_minutes,
                basis=BASIS_SATURATED,
                district_spare_seats=spare,
            )
            continue

        results[district] = DistrictRecalculation(
            district=district,
            minutes=estimate_travel_minutes(km, cfg),
            basis=BASIS_NEAREST,
            district_spare_seats=spare,
            nearest_school_id=nearest.school.id,
            nearest_school_name=nearest.school.name,
            nearest_school_district=nearest.school.district,
            nearest_distance_km=km,
        )
    return results


def recalculate(
    schools: List[SchoolRecord],
    overrides: CapacityOverrides,
    aggregates: Dict[str, DistrictAggregate],
    rule_config: Optional[dict] = None,
) -> Dict[str, float]:
    """District -> recalculated minutes."""
    detailed = recalculate_detailed(schools, overrides, aggregates, rule_config)
    return {district: r.minutes for district, r in detailed.items()}


def resolve_district_layer(
    aggregates: Dict[str, DistrictAggregate],
    schools: List[SchoolRecord],
    overrides: CapacityOverrides,
    rule_config: Optional[dict] = None,
) -> Dict[str, DistrictAggregate]:
    """District layer to draw: baseline untouched, or recalculated when overrides exist."""
    if not overrides.is_active:
        return dict(aggregates)

    minutes = recalculate(schools, overrides, aggregates, rule_config)
    return {
        district: agg.with_recalculated(minutes.get(district))
        for district, agg in aggregates.items()
    }


def compare_district_layers(layer: Dict[str, DistrictAggregate]) -> List[dict]:
    """Per-district baseline vs what-if travel time."""
    rows = []
    for district in sorted(layer):
        agg = layer[district]
        what_if = agg.recalculated_travel_time_minutes
        rows.append({
            "District": district,
            "Samples": agg.sample_count,
            "Baseline (min)": round(agg.mean_travel_time_minutes, 1),
            "What-If (min)": round(what_if, 1) if what_if is not None else None,
            "Change (min)": round(what_if - agg.mean_travel_time_minutes, 1) if what_if is not None else 0.0,
        })
    return rows
