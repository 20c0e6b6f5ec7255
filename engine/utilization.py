"""Seat-utilization tiers for schools and travel-time severity for districts."""

from dataclasses import dataclass
from typing import Optional
from models.school import SchoolRecord
from models.override import CapacityOverrides
from config.defaults import (
    UTILIZATION_TIERS, TIER_ACCEPTABLE, ACCEPTABLE_COLOR,
    TRAVEL_SEVERITY_BANDS, TRAVEL_GOOD,
)


@dataclass(frozen=True)
class UtilizationStatus:
    utilization_pct: float
    tier: str
    color: str


@dataclass(frozen=True)
class SchoolStatus:
    """A school's derived state under the current overrides."""
    school: SchoolRecord
    effective_capacity: int
    spare_seats: int
    deficit: int
    status: UtilizationStatus

    @property
    def is_overridden(self) -> bool:
        return self.effective_capacity != self.school.capacity


@dataclass(frozen=True)
class TravelSeverity:
    level: str
    color: str
    opacity: float


def utilization_pct(enrollment: int, effective_capacity: int) -> float:
    if effective_capacity <= 0:
        return 0.0
    return enrollment / effective_capacity * 100


def classify(enrollment: int, effective_capacity: int) -> UtilizationStatus:
    """Map enrollment against effective capacity to a tier and display color."""
    pct = utilization_pct(enrollment, effective_capacity)
    for lower_bound, tier, color in UTILIZATION_TIERS:
        if pct >= lower_bound:
            return UtilizationStatus(pct, tier, color)
    return UtilizationStatus(pct, TIER_ACCEPTABLE, ACCEPTABLE_COLOR)


def school_status(
    school: SchoolRecord,
    overrides: Optional[CapacityOverrides] = None,
) -> SchoolStatus:
    overrides = overrides or CapacityOverrides()
    capacity = overrides.effective_capacity(school.id, school.capacity)
    return SchoolStatus(
        school=school,
        effective_capacity=capacity,
        spare_seats=max(0, capacity - school.enrollment),
        deficit=max(0, school.enrollment - capacity),
        status=classify(school.enrollment, capacity),
    )


def classify_travel_time(minutes: float) -> TravelSeverity:
    """Accessibility bands for district circles; deliberately separate from seat tiers."""
    for lower_bound, level, color, opacity in TRAVEL_SEVERITY_BANDS:
        if minutes > lower_bound:
            return TravelSeverity(level, color, opacity)
    level, color, opacity = TRAVEL_GOOD
    return TravelSeverity(level, color, opacity)
