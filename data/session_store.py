"""Typed wrapper around st.session_state for application data.

The session owns the only mutable reference to the override snapshot; every
edit replaces it wholesale so the engine always sees a consistent value.
"""

import logging
import streamlit as st
from typing import Dict, List, Optional
from datetime import datetime
from models.school import SchoolRecord
from models.travel import TravelSample
from models.site import OptimalSite
from models.filters import FilterCriteria
from models.override import CapacityOverrides, OverrideRequest
from models.audit import AuditEntry
from config.defaults import (
    LOCAL_OPTION_MINUTES, SATURATION_FALLBACK_MINUTES,
    MIN_TRAVEL_MINUTES, MINUTES_PER_KM,
)

logger = logging.getLogger(__name__)


def initialize_session_state():
    """Initialize all session state keys with defaults."""
    defaults = {
        "schools": [],
        "travel_samples": [],
        "sites": [],
        "overrides": CapacityOverrides(),
        "what_if_mode": False,
        "filter_criteria": FilterCriteria(),
        "audit_log": [],
        "data_loaded": False,
        "data_source": None,
        "fetch_errors": {},
        "rule_config": {
            "local_option_minutes": LOCAL_OPTION_MINUTES,
            "saturation_fallback_minutes": SATURATION_FALLBACK_MINUTES,
            "min_travel_minutes": MIN_TRAVEL_MINUTES,
            "minutes_per_km": MINUTES_PER_KM,
        },
    }
    for key, default in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = default


# --- Getters ---

def get_schools() -> List[SchoolRecord]:
    return st.session_state.get("schools", [])


def get_travel_samples() -> List[TravelSample]:
    return st.session_state.get("travel_samples", [])


def get_sites() -> List[OptimalSite]:
    return st.session_state.get("sites", [])


def get_overrides() -> CapacityOverrides:
    return st.session_state.get("overrides", CapacityOverrides())


def is_what_if_mode() -> bool:
    return st.session_state.get("what_if_mode", False)


def get_filter_criteria() -> FilterCriteria:
    return st.session_state.get("filter_criteria", FilterCriteria())


def get_audit_log() -> List[AuditEntry]:
    return st.session_state.get("audit_log", [])


def get_rule_config() -> dict:
    return st.session_state.get("rule_config", {})


def get_fetch_errors() -> Dict[str, str]:
    return st.session_state.get("fetch_errors", {})


def get_data_source() -> Optional[str]:
    return st.session_state.get("data_source")


def is_data_loaded() -> bool:
    return st.session_state.get("data_loaded", False)


# --- Setters ---

def set_dataset(
    schools: List[SchoolRecord],
    samples: List[TravelSample],
    sites: List[OptimalSite],
    source: str,
    fetch_errors: Optional[Dict[str, str]] = None,
):
    """Replace the loaded data. Overrides from a previous dataset are dropped."""
    st.session_state["schools"] = schools
    st.session_state["travel_samples"] = samples
    st.session_state["sites"] = sites
    st.session_state["data_source"] = source
    st.session_state["fetch_errors"] = fetch_errors or {}
    st.session_state["data_loaded"] = True
    st.session_state["overrides"] = CapacityOverrides()
    add_audit_entry(
        "load_data", None, "", f"{len(schools)} schools, {len(samples)} samples",
        rationale=f"Loaded from {source}",
    )


def set_filter_criteria(criteria: FilterCriteria):
    st.session_state["filter_criteria"] = criteria


def set_rule_config(config: dict):
    st.session_state["rule_config"] = config


# --- What-if ---

def set_what_if_mode(enabled: bool):
    """Toggle what-if mode. Turning it off discards every override."""
    was_enabled = is_what_if_mode()
    st.session_state["what_if_mode"] = enabled
    if was_enabled and not enabled:
        reset_all_overrides()


def apply_override_request(request: OverrideRequest) -> bool:
    """Apply an operator capacity edit. Returns False if it was rejected."""
    current = get_overrides()
    known_ids = [s.id for s in get_schools()]
    updated = current.apply(request, known_ids)
    if updated is current:
        if not request.is_reset:
            logger.info("Ignored capacity override %r for %s", request.new_capacity, request.school_id)
        return False

    old_value = current.get(request.school_id)
    new_value = updated.get(request.school_id)
    st.session_state["overrides"] = updated
    add_audit_entry(
        "reset_capacity" if request.is_reset else "set_capacity",
        request.school_id,
        "" if old_value is None else str(old_value),
        "" if new_value is None else str(new_value),
    )
    return True


def reset_all_overrides():
    current = get_overrides()
    if not current.is_active:
        return
    st.session_state["overrides"] = current.reset_all()
    add_audit_entry("reset_all", None, f"{len(current)} override(s)", "")


# --- Audit ---

def add_audit_entry(
    action: str,
    school_id: Optional[str],
    old_value: str,
    new_value: str,
    rationale: str = "",
):
    entry = AuditEntry(
        timestamp=datetime.now(),
        action=action,
        school_id=school_id,
        old_value=old_value,
        new_value=new_value,
        rationale=rationale,
    )
    st.session_state["audit_log"].append(entry)
