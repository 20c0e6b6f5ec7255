from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lon: float


@dataclass(frozen=True)
class SchoolRecord:
    id: str
    name: str
    district: str
    school_type: Optional[str]     # "Elementary", "Intermediate", "High" or None if unknown
    gender: Optional[str]          # "Boys", "Girls" or None if unknown
    capacity: int                  # Design capacity, >= 0
    enrollment: int                # >= 0
    location: Optional[Coordinates] = None

    @property
    def has_location(self) -> bool:
        return self.location is not None
