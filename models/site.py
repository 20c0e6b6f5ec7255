from dataclasses import dataclass, field
from typing import List, Optional
from models.school import Coordinates


@dataclass(frozen=True)
class OptimalSite:
    """Proposed new school site. Computed upstream; only rendered here."""
    name: str
    district: str
    location: Optional[Coordinates]
    recommended_capacity: int
    students_served: int
    avg_distance_km: float
    priority: str                  # "HIGH", "MEDIUM", ...
    districts_served: List[str] = field(default_factory=list)
