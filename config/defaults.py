"""Default configuration constants for the School Capacity What-If Dashboard."""

import os

# Upstream workflow endpoints
API_BASE_URL = os.getenv("SCHOOL_API_BASE_URL", "https://n8n.hantoush.space/webhook")
CAPACITY_ENDPOINT = "analyze-capacity"
OPTIMAL_SITES_ENDPOINT = "find-optimal-locations"
TRAVEL_TIME_ENDPOINT = "travel-time-heatmap"

# Fetch behaviour: retries after the first attempt, linear delay between them
FETCH_RETRIES = 3
RETRY_DELAY_SECONDS = 1.0
REQUEST_TIMEOUT_SECONDS = 30

LOG_LEVEL = os.getenv("SCHOOL_DASHBOARD_LOG_LEVEL", "INFO")

# Metro bounding box (inclusive)
REGION_LAT_RANGE = (23.0, 26.0)
REGION_LON_RANGE = (45.0, 48.0)
MAP_CENTER = (24.7136, 46.6753)
MAP_ZOOM = 10

# Field alias tables, probed in order
LATITUDE_FIELDS = ["latitude", "lat", "Latitude", "LAT", "y", "center_lat"]
LONGITUDE_FIELDS = ["longitude", "lng", "lon", "Longitude", "LON", "x", "center_lon"]

SCHOOL_FIELD_ALIASES = {
    "id": ["id", "school_id", "code", "school_code"],
    "name": ["name", "school_name", "name_en", "name_ar"],
    "district": ["district", "district_name", "from_district"],
    "school_type": ["school_type", "type", "level", "stage"],
    "gender": ["gender", "sex"],
    "capacity": ["capacity", "design_capacity"],
    "enrollment": ["enrollment", "current_enrollment", "students"],
}

SAMPLE_FIELD_ALIASES = {
    "district": ["district", "from_district", "district_name", "name"],
    "travel_time": ["avg_travel_time_minutes", "nearest_school_time", "travel_time", "time"],
}

SITE_FIELD_ALIASES = {
    "name": ["name", "site_name", "location_name"],
    "district": ["recommended_district", "district", "district_name"],
    "recommended_capacity": ["recommended_capacity", "capacity"],
    "students_served": ["estimated_students_served", "students_served"],
    "avg_distance_km": ["avg_distance_km", "average_distance_km"],
    "priority": ["priority"],
}

# Response envelopes, probed in order. Dotted keys descend into nested objects.
SCHOOL_ENVELOPE_KEYS = ["overcapacity_schools", "results.schools", "schools"]
SAMPLE_ENVELOPE_KEYS = ["district_analysis", "heatmap_data", "results.heatmap_data"]
SITE_ENVELOPE_KEYS = ["recommendations", "results.optimal_locations"]

DEFAULT_SITE_CAPACITY = 800
DEFAULT_SITE_PRIORITY = "HIGH"

# Canonical enums
SCHOOL_TYPES = ["Elementary", "Intermediate", "High"]
GENDERS = ["Boys", "Girls"]
ALL = "all"

SCHOOL_TYPE_ALIASES = {
    "elementary": "Elementary",
    "primary": "Elementary",
    "intermediate": "Intermediate",
    "middle": "Intermediate",
    "high": "High",
    "secondary": "High",
}

GENDER_ALIASES = {
    "boys": "Boys",
    "boy": "Boys",
    "male": "Boys",
    "m": "Boys",
    "girls": "Girls",
    "girl": "Girls",
    "female": "Girls",
    "f": "Girls",
}

# Utilization tiers: (lower bound %, tier, color), checked top-down
TIER_CRITICAL = "Critical"
TIER_OVER = "Over-capacity"
TIER_NEAR = "Near-capacity"
TIER_ACCEPTABLE = "Acceptable"

UTILIZATION_TIERS = [
    (120.0, TIER_CRITICAL, "#dc2626"),
    (100.0, TIER_OVER, "#f97316"),
    (85.0, TIER_NEAR, "#fbbf24"),
]
ACCEPTABLE_COLOR = "#22c55e"
TIER_ORDER = [TIER_CRITICAL, TIER_OVER, TIER_NEAR, TIER_ACCEPTABLE]

# District travel severity: (exclusive lower bound minutes, level, color, opacity)
TRAVEL_SEVERITY_BANDS = [
    (20.0, "High", "#ef4444", 0.30),
    (10.0, "Medium", "#f97316", 0.25),
]
TRAVEL_GOOD = ("Good", "#22c55e", 0.20)
DISTRICT_CIRCLE_RADIUS_M = 3000

# Distance heuristic (stands in for a routing engine)
EARTH_RADIUS_KM = 6371.0
MIN_TRAVEL_MINUTES = 5.0
MINUTES_PER_KM = 3.0

# What-if recalculation policy
LOCAL_OPTION_MINUTES = 5.0
SATURATION_FALLBACK_MINUTES = 30.0

# Default filter
DEFAULT_UTILIZATION_MIN = 0.0
DEFAULT_UTILIZATION_MAX = 200.0

# Synthetic sample data
SAMPLE_DISTRICTS = [
    ("Al Olaya", 24.6900, 46.6850),
    ("Al Malaz", 24.6600, 46.7300),
    ("Al Naseem", 24.7350, 46.8200),
    ("Al Suwaidi", 24.5900, 46.6400),
    ("Al Yasmin", 24.8250, 46.6450),
    ("Al Aziziyah", 24.5800, 46.7600),
    ("Al Nakheel", 24.7550, 46.6300),
    ("Al Shifa", 24.5500, 46.7000),
]
SAMPLE_SEED = 42
