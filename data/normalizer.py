"""Raw upstream records into canonical typed records.

Upstream payloads rename fields freely, so each canonical field is resolved
once here through an ordered alias table. Nothing in this module raises on bad
input: unusable values become None or 0, and unusable records are dropped.
"""

import logging
import math
from typing import List, Optional, Tuple
from models.school import SchoolRecord
from models.travel import TravelSample
from models.site import OptimalSite
from engine.geo import extract_coordinates
from config.defaults import (
    SCHOOL_FIELD_ALIASES, SAMPLE_FIELD_ALIASES, SITE_FIELD_ALIASES,
    SCHOOL_ENVELOPE_KEYS, SAMPLE_ENVELOPE_KEYS, SITE_ENVELOPE_KEYS,
    SCHOOL_TYPE_ALIASES, GENDER_ALIASES,
    DEFAULT_SITE_CAPACITY, DEFAULT_SITE_PRIORITY,
)

logger = logging.getLogger(__name__)


def resolve_field(record: dict, aliases: List[str]):
    """First alias holding a non-null, non-blank value."""
    for name in aliases:
        value = record.get(name)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        if isinstance(value, float) and math.isnan(value):
            continue
        return value
    return None


def as_int(value) -> int:
    """Lenient non-negative int: '500', '500.0' and 500.7 give 500; junk gives 0."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if math.isnan(number) or math.isinf(number):
        return 0
    return max(0, int(number))


def as_float(value) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return max(0.0, number)


def as_text(value) -> str:
    return str(value).strip() if value is not None else ""


def canonical_school_type(value) -> Optional[str]:
    if value is None:
        return None
    return SCHOOL_TYPE_ALIASES.get(str(value).strip().lower())


def canonical_gender(value) -> Optional[str]:
    if value is None:
        return None
    return GENDER_ALIASES.get(str(value).strip().lower())


def unwrap_records(payload, envelope_keys: List[str]) -> List[dict]:
    """Find the record list inside a response envelope; [] when there is none."""
    if isinstance(payload, list):
        return [r for r in payload if isinstance(r, dict)]
    if not isinstance(payload, dict):
        return []

    for key in envelope_keys:
        node = payload
        for part in key.split("."):
            node = node.get(part) if isinstance(node, dict) else None
        if isinstance(node, list) and node:
            return [r for r in node if isinstance(r, dict)]
    return []


def normalize_school(record: dict, index: int = 0, fallback_id: Optional[str] = None) -> SchoolRecord:
    a = SCHOOL_FIELD_ALIASES
    school_id = as_text(resolve_field(record, a["id"])) or fallback_id or f"school-{index}"
    return SchoolRecord(
        id=school_id,
        name=as_text(resolve_field(record, a["name"])) or school_id,
        district=as_text(resolve_field(record, a["district"])),
        school_type=canonical_school_type(resolve_field(record, a["school_type"])),
        gender=canonical_gender(resolve_field(record, a["gender"])),
        capacity=as_int(resolve_field(record, a["capacity"])),
        enrollment=as_int(resolve_field(record, a["enrollment"])),
        location=extract_coordinates(record),
    )


def normalize_travel_sample(record: dict) -> Optional[TravelSample]:
    """None when the sample has no usable district."""
    a = SAMPLE_FIELD_ALIASES
    district = as_text(resolve_field(record, a["district"]))
    if not district:
        return None
    return TravelSample(
        district=district,
        travel_time_minutes=as_float(resolve_field(record, a["travel_time"])),
        location=extract_coordinates(record),
    )


def normalize_site(record: dict) -> OptimalSite:
    a = SITE_FIELD_ALIASES
    served = record.get("districts_served") or []
    capacity = as_int(resolve_field(record, a["recommended_capacity"]))
    return OptimalSite(
        name=as_text(resolve_field(record, a["name"])) or "New School Site",
        district=as_text(resolve_field(record, a["district"])),
        location=extract_coordinates(record),
        recommended_capacity=capacity or DEFAULT_SITE_CAPACITY,
        students_served=as_int(resolve_field(record, a["students_served"])),
        avg_distance_km=as_float(resolve_field(record, a["avg_distance_km"])),
        priority=as_text(resolve_field(record, a["priority"])).upper() or DEFAULT_SITE_PRIORITY,
        districts_served=[as_text(d) for d in served] if isinstance(served, list) else [],
    )


def _fallback_ids(records: List[dict]) -> List[Optional[str]]:
    """Generated ids for records without one, never reusing an id already in the batch."""
    taken = {as_text(resolve_field(r, SCHOOL_FIELD_ALIASES["id"])) for r in records}
    ids = []
    for i, r in enumerate(records):
        if as_text(resolve_field(r, SCHOOL_FIELD_ALIASES["id"])):
            ids.append(None)
            continue
        candidate, n = f"school-{i}", 1
        while candidate in taken:
            n += 1
            candidate = f"school-{i}-{n}"
        taken.add(candidate)
        ids.append(candidate)
    return ids


def normalize_schools(payload) -> List[SchoolRecord]:
    records = unwrap_records(payload, SCHOOL_ENVELOPE_KEYS)
    schools = [
        normalize_school(r, i, fallback_id)
        for i, (r, fallback_id) in enumerate(zip(records, _fallback_ids(records)))
    ]
    unlocated = sum(1 for s in schools if s.location is None)
    if unlocated:
        logger.info("%d of %d schools have no usable coordinates", unlocated, len(schools))
    return schools


def normalize_travel_samples(payload) -> List[TravelSample]:
    records = unwrap_records(payload, SAMPLE_ENVELOPE_KEYS)
    samples = []
    for r in records:
        sample = normalize_travel_sample(r)
        if sample is None:
            logger.debug("Dropping travel sample without district: %s", r)
            continue
        samples.append(sample)
    if len(samples) < len(records):
        logger.info("Dropped %d travel samples without a district", len(records) - len(samples))
    return samples


def normalize_sites(payload) -> List[OptimalSite]:
    return [normalize_site(r) for r in unwrap_records(payload, SITE_ENVELOPE_KEYS)]


def normalize_all(
    capacity_payload,
    travel_payload,
    sites_payload,
) -> Tuple[List[SchoolRecord], List[TravelSample], List[OptimalSite]]:
    return (
        normalize_schools(capacity_payload),
        normalize_travel_samples(travel_payload),
        normalize_sites(sites_payload),
    )
