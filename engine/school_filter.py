"""School layer filtering by utilization range, type, gender and tier."""

from typing import List, Optional
from models.school import SchoolRecord
from models.filters import FilterCriteria
from models.override import CapacityOverrides
from engine.utilization import school_status
from config.defaults import ALL


def matches(
    school: SchoolRecord,
    criteria: FilterCriteria,
    overrides: Optional[CapacityOverrides] = None,
) -> bool:
    status = school_status(school, overrides).status

    if status.utilization_pct < criteria.utilization_min:
        return False
    if status.utilization_pct > criteria.utilization_max:
        return False
    if criteria.school_type != ALL and school.school_type != criteria.school_type:
        return False
    if criteria.gender != ALL and school.gender != criteria.gender:
        return False
    return criteria.tiers.is_enabled(status.tier)


def filter_schools(
    schools: List[SchoolRecord],
    criteria: FilterCriteria,
    overrides: Optional[CapacityOverrides] = None,
) -> List[SchoolRecord]:
    """Keep schools passing every criterion. An empty result is valid."""
    return [s for s in schools if matches(s, criteria, overrides)]
