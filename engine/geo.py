"""Coordinate extraction, great-circle distance and the distance-to-time heuristic."""

import math
from typing import List, Optional
from models.school import Coordinates
from config.defaults import (
    LATITUDE_FIELDS, LONGITUDE_FIELDS,
    REGION_LAT_RANGE, REGION_LON_RANGE,
    EARTH_RADIUS_KM, MIN_TRAVEL_MINUTES, MINUTES_PER_KM,
)


def _first_present(record: dict, fields: List[str]):
    for name in fields:
        value = record.get(name)
        if value is not None:
            return value
    return None


def _parse_float(value) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(parsed) or math.isinf(parsed):
        return None
    return parsed


def in_region(lat: float, lon: float) -> bool:
    return (REGION_LAT_RANGE[0] <= lat <= REGION_LAT_RANGE[1]
            and REGION_LON_RANGE[0] <= lon <= REGION_LON_RANGE[1])


def extract_coordinates(record) -> Optional[Coordinates]:
    """Pull a validated (lat, lon) out of a record with inconsistent field names.

    The first non-null candidate per axis wins; it must parse as a float and the
    point must fall inside the metro bounding box. Anything else returns None.
    """
    if not isinstance(record, dict):
        return None

    lat = _parse_float(_first_present(record, LATITUDE_FIELDS))
    lon = _parse_float(_first_present(record, LONGITUDE_FIELDS))

    if lat is None or lon is None:
        return None
    if not in_region(lat, lon):
        return None
    return Coordinates(lat=lat, lon=lon)


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometres."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = (math.sin(d_phi / 2) ** 2
         + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_between(a: Coordinates, b: Coordinates) -> float:
    return haversine_km(a.lat, a.lon, b.lat, b.lon)


def estimate_travel_minutes(km: float, rule_config: Optional[dict] = None) -> float:
    """Approximate travel time from straight-line distance.

    Not a routing result: a 5-minute floor for local access, then 3 min/km
    (roughly 20 km/h on urban arterials).
    """
    cfg = rule_config or {}
    floor = cfg.get("min_travel_minutes", MIN_TRAVEL_MINUTES)
    per_km = cfg.get("minutes_per_km", MINUTES_PER_KM)
    return max(floor, km * per_km)
