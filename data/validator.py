"""Data quality checks for loaded school and travel-time records."""

from dataclasses import dataclass, field
from typing import List
import pandas as pd
from models.school import SchoolRecord
from models.travel import TravelSample
from models.override import CapacityOverrides


@dataclass
class ValidationResult:
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def validate_schools(schools: List[SchoolRecord]) -> ValidationResult:
    result = ValidationResult()
    if not schools:
        result.is_valid = False
        result.errors.append("Schools: No school records were loaded.")
        return result

    df = pd.DataFrame([{
        "id": s.id,
        "district": s.district,
        "capacity": s.capacity,
        "located": s.has_location,
        "school_type": s.school_type,
    } for s in schools])

    unlocated = int((~df["located"]).sum())
    if unlocated:
        result.warnings.append(
            f"Schools: {unlocated} of {len(df)} records have no usable coordinates "
            "and will not appear on the map."
        )

    zero_capacity = int((df["capacity"] == 0).sum())
    if zero_capacity:
        result.warnings.append(
            f"Schools: {zero_capacity} records have zero capacity; utilization is reported as 0%."
        )

    no_district = int((df["district"] == "").sum())
    if no_district:
        result.warnings.append(f"Schools: {no_district} records have no district.")

    unknown_type = int(df["school_type"].isna().sum())
    if unknown_type:
        result.warnings.append(
            f"Schools: {unknown_type} records have an unrecognised school type "
            "and only appear when the type filter is 'all'."
        )

    dupes = df[df.duplicated(subset=["id"], keep=False)]["id"].unique().tolist()
    if dupes:
        result.warnings.append(f"Schools: Duplicate school ids: {dupes}")

    return result


def validate_samples(samples: List[TravelSample]) -> ValidationResult:
    result = ValidationResult()
    if not samples:
        result.warnings.append("Travel: No travel-time samples; the district layer will be empty.")
        return result

    unlocated = sum(1 for s in samples if s.location is None)
    if unlocated:
        result.warnings.append(
            f"Travel: {unlocated} of {len(samples)} samples have no usable coordinates "
            "and are left out of district centroids."
        )

    districts = {s.district for s in samples}
    located_districts = {s.district for s in samples if s.location is not None}
    undrawable = sorted(districts - located_districts)
    if undrawable:
        result.warnings.append(
            f"Travel: Districts without any located sample cannot be drawn: {', '.join(undrawable)}"
        )
    return result


def validate_overrides(
    overrides: CapacityOverrides,
    schools: List[SchoolRecord],
) -> ValidationResult:
    """Flag override keys that no longer match a loaded school."""
    result = ValidationResult()
    known = {s.id for s in schools}
    stale = sorted(sid for sid, _ in overrides.items() if sid not in known)
    if stale:
        result.warnings.append(f"Overrides: Unknown school ids will be ignored: {', '.join(stale)}")
    return result
