"""District capacity roll-ups and system-wide KPIs under what-if overrides."""

from typing import Dict, List, Optional
from models.school import SchoolRecord
from models.override import CapacityOverrides
from engine.utilization import school_status, utilization_pct
from config.defaults import TIER_ORDER


def compute_district_impact(
    schools: List[SchoolRecord],
    overrides: Optional[CapacityOverrides] = None,
) -> Dict[str, dict]:
    """Per-district capacity, enrollment and overcrowding with overrides applied."""
    stats: Dict[str, dict] = {}
    for school in schools:
        status = school_status(school, overrides)
        district = school.district or "Unknown"
        if district not in stats:
            stats[district] = {
                "school_count": 0,
                "total_capacity": 0,
                "original_capacity": 0,
                "capacity_change": 0,
                "total_enrollment": 0,
                "overcrowded": 0,
            }
        d = stats[district]
        d["school_count"] += 1
        d["total_capacity"] += status.effective_capacity
        d["original_capacity"] += school.capacity
        d["capacity_change"] += status.effective_capacity - school.capacity
        d["total_enrollment"] += school.enrollment
        if school.enrollment > status.effective_capacity:
            d["overcrowded"] += 1

    for d in stats.values():
        d["utilization_pct"] = round(utilization_pct(d["total_enrollment"], d["total_capacity"]), 1)
    return stats


def compute_system_summary(
    schools: List[SchoolRecord],
    overrides: Optional[CapacityOverrides] = None,
) -> dict:
    """Headline KPIs for the whole system."""
    statuses = [school_status(s, overrides) for s in schools]
    tier_counts = {tier: 0 for tier in TIER_ORDER}
    for s in statuses:
        tier_counts[s.status.tier] += 1

    total_enrollment = sum(s.school.enrollment for s in statuses)
    total_capacity = sum(s.effective_capacity for s in statuses)
    avg_utilization = (sum(s.status.utilization_pct for s in statuses) / len(statuses)
                       if statuses else 0.0)

    return {
        "total_schools": len(statuses),
        "total_enrollment": total_enrollment,
        "total_capacity": total_capacity,
        "total_deficit": sum(s.deficit for s in statuses),
        "total_spare_seats": sum(s.spare_seats for s in statuses),
        "avg_utilization_pct": avg_utilization,
        "overcapacity_schools": sum(1 for s in statuses if s.deficit > 0),
        "located_schools": sum(1 for s in statuses if s.school.has_location),
        "tier_counts": tier_counts,
    }


def district_impact_rows(
    impact: Dict[str, dict],
    travel_minutes: Optional[Dict[str, float]] = None,
) -> List[dict]:
    """Flatten impact stats into table rows, worst utilization first."""
    travel_minutes = travel_minutes or {}
    rows = []
    for district, d in impact.items():
        minutes = travel_minutes.get(district)
        rows.append({
            "District": district,
            "Schools": d["school_count"],
            "Capacity": d["total_capacity"],
            "Capacity Change": d["capacity_change"],
            "Enrollment": d["total_enrollment"],
            "Utilization %": d["utilization_pct"],
            "Overcrowded": d["overcrowded"],
            "Travel (min)": round(minutes, 1) if minutes is not None else None,
        })
    rows.sort(key=lambda r: r["Utilization %"], reverse=True)
    return rows
