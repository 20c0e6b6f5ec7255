from dataclasses import dataclass, field
from config.defaults import (
    ALL, DEFAULT_UTILIZATION_MIN, DEFAULT_UTILIZATION_MAX,
    TIER_CRITICAL, TIER_OVER, TIER_NEAR, TIER_ACCEPTABLE,
)


@dataclass(frozen=True)
class TierToggles:
    critical: bool = True
    over: bool = True
    near: bool = True
    acceptable: bool = True

    def is_enabled(self, tier: str) -> bool:
        return {
            TIER_CRITICAL: self.critical,
            TIER_OVER: self.over,
            TIER_NEAR: self.near,
            TIER_ACCEPTABLE: self.acceptable,
        }.get(tier, False)


@dataclass(frozen=True)
class FilterCriteria:
    utilization_min: float = DEFAULT_UTILIZATION_MIN
    utilization_max: float = DEFAULT_UTILIZATION_MAX
    school_type: str = ALL         # ALL or one of SCHOOL_TYPES
    gender: str = ALL              # ALL or one of GENDERS
    tiers: TierToggles = field(default_factory=TierToggles)
