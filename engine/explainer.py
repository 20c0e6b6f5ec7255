"""Generates human-readable explanations for recalculated district travel times."""

from typing import List, Optional
from engine.recalculator import (
    DistrictRecalculation, BASIS_LOCAL, BASIS_NEAREST, BASIS_SATURATED,
)
from config.defaults import MIN_TRAVEL_MINUTES, MINUTES_PER_KM


def explain_recalculation(
    recalc: DistrictRecalculation,
    baseline_minutes: Optional[float] = None,
    rule_config: Optional[dict] = None,
) -> List[str]:
    """Produce step-by-step explanation for one district's what-if travel time."""
    cfg = rule_config or {}
    floor = cfg.get("min_travel_minutes", MIN_TRAVEL_MINUTES)
    per_km = cfg.get("minutes_per_km", MINUTES_PER_KM)
    steps = []

    if baseline_minutes is not None:
        steps.append(
            f"Step 1 - Baseline: observed samples average {baseline_minutes:.1f} min "
            f"for {recalc.district}"
        )
    else:
        steps.append(f"Step 1 - Baseline: no observed travel time for {recalc.district}")

    steps.append(
        f"Step 2 - Local capacity: {recalc.district_spare_seats:,} spare seats "
        f"across {recalc.local_schools_with_spare} school(s) in the district"
    )

    if recalc.basis == BASIS_LOCAL:
        steps.append(
            f"Step 3 - Local option available => flat {recalc.minutes:.0f} min "
            f"(distance to the specific school is not considered)"
        )
    elif recalc.basis == BASIS_NEAREST:
        steps.append(
            f"Step 3 - No local seats: nearest school with spare seats is "
            f"{recalc.nearest_school_name} ({recalc.nearest_school_district}), "
            f"{recalc.nearest_distance_km:.1f} km from the district centre"
        )
        steps.append(
            f"Step 4 - Distance estimate: max({floor:g}, {recalc.nearest_distance_km:.1f} km x "
            f"{per_km:g} min/km) "
            f"= {recalc.minutes:.1f} min (straight-line approximation, not a routed time)"
        )
    elif recalc.basis == BASIS_SATURATED:
        steps.append(
            f"Step 3 - No school in the system has spare seats => saturation "
            f"fallback of {recalc.minutes:.0f} min"
        )

    if baseline_minutes is not None:
        delta = recalc.minutes - baseline_minutes
        steps.append(f"Result: {recalc.minutes:.1f} min ({delta:+.1f} min vs baseline)")
    else:
        steps.append(f"Result: {recalc.minutes:.1f} min")

    return steps
