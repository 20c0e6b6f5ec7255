from dataclasses import dataclass, replace
from typing import Optional
from models.school import Coordinates


@dataclass(frozen=True)
class TravelSample:
    district: str
    travel_time_minutes: float     # >= 0
    location: Optional[Coordinates] = None


@dataclass(frozen=True)
class DistrictAggregate:
    district: str
    centroid: Coordinates
    sample_count: int              # All samples with a usable district
    located_count: int             # Samples that contributed to the centroid
    mean_travel_time_minutes: float
    recalculated_travel_time_minutes: Optional[float] = None

    @property
    def is_recalculated(self) -> bool:
        return self.recalculated_travel_time_minutes is not None

    @property
    def travel_time_minutes(self) -> float:
        """Travel time to display: the what-if value when present, else the baseline."""
        if self.recalculated_travel_time_minutes is not None:
            return self.recalculated_travel_time_minutes
        return self.mean_travel_time_minutes

    def with_recalculated(self, minutes: Optional[float]) -> "DistrictAggregate":
        return replace(self, recalculated_travel_time_minutes=minutes)
