from models.school import Coordinates, SchoolRecord
from models.travel import TravelSample, DistrictAggregate
from models.filters import FilterCriteria, TierToggles
from models.override import CapacityOverrides, OverrideRequest
from models.site import OptimalSite
from models.audit import AuditEntry
