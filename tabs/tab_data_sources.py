"""Tab 3: Data & Sources — fetch, upload or generate data, recalculation policy, override log."""

import logging
import streamlit as st
import pandas as pd

from data.client import SchoolDataClient
from data.loader import load_file, load_multi_sheet_excel
from data.normalizer import normalize_all
from data.validator import validate_schools, validate_samples, validate_overrides
from data.sample_data import generate_payloads
from data.session_store import (
    set_dataset, get_schools, get_overrides, get_audit_log, get_rule_config,
    set_rule_config, get_fetch_errors, is_data_loaded,
)
from config.defaults import API_BASE_URL

logger = logging.getLogger(__name__)


def _load_and_validate(capacity_payload, travel_payload, sites_payload, source, fetch_errors=None):
    """Normalize, validate and store a dataset."""
    schools, samples, sites = normalize_all(capacity_payload, travel_payload, sites_payload)

    s_result = validate_schools(schools)
    t_result = validate_samples(samples)

    for e in s_result.errors + t_result.errors:
        st.error(e)
    if not s_result.is_valid:
        return False

    for w in s_result.warnings + t_result.warnings:
        st.warning(w)

    set_dataset(schools, samples, sites, source, fetch_errors)
    st.success(
        f"Data loaded: {len(schools)} schools, {len(samples)} travel samples, "
        f"{len(sites)} proposed sites"
    )
    return True


def render(sidebar_state):
    """Render the Data & Sources tab."""
    st.header("Data & Sources")

    # --- Data Source ---
    st.subheader("Load Data")

    source = st.radio(
        "Source",
        ["Live endpoints", "Upload files", "Sample data"],
        horizontal=True,
        key="data_source_mode",
    )

    if source == "Live endpoints":
        base_url = st.text_input("Workflow base URL", value=API_BASE_URL, key="api_base_url")
        if st.button("Fetch Data", type="primary", key="btn_fetch"):
            with st.spinner("Fetching capacity, travel-time and site data..."):
                result = SchoolDataClient(base_url=base_url).fetch_all()
            for name, message in result.errors.items():
                st.error(f"{name}: {message}. Try again later.")
            _load_and_validate(
                result.payloads.get("capacity", []),
                result.payloads.get("travel", []),
                result.payloads.get("sites", []),
                "live endpoints",
                result.errors,
            )

    elif source == "Upload files":
        st.caption(
            "Upload one `.xlsx` workbook with **Schools** and **Travel** sheets (optional **Sites**), "
            "or separate JSON/CSV/XLSX files. Field names are matched against known aliases."
        )
        workbook = st.file_uploader("Workbook", type=["xlsx"], key="upload_workbook")
        col1, col2, col3 = st.columns(3)
        with col1:
            schools_file = st.file_uploader("Schools", type=["json", "csv", "xlsx"], key="upload_schools")
        with col2:
            travel_file = st.file_uploader("Travel Samples", type=["json", "csv", "xlsx"], key="upload_travel")
        with col3:
            sites_file = st.file_uploader("Proposed Sites", type=["json", "csv", "xlsx"], key="upload_sites")

        if st.button("Upload & Validate", type="primary", key="btn_upload"):
            try:
                if workbook:
                    schools_raw, travel_raw, sites_raw = load_multi_sheet_excel(workbook)
                    _load_and_validate(schools_raw, travel_raw, sites_raw, workbook.name)
                elif schools_file and travel_file:
                    _load_and_validate(
                        load_file(schools_file),
                        load_file(travel_file),
                        load_file(sites_file) if sites_file else [],
                        "uploaded files",
                    )
                else:
                    st.warning("Please upload a workbook, or both a schools file and a travel file.")
            except ValueError as e:
                logger.warning("Upload rejected: %s", e)
                st.error(f"Error loading file: {e}")

    else:
        st.caption("Synthetic schools and travel samples around eight districts. Reproducible.")
        if st.button("Load Sample Data", type="primary", key="btn_sample"):
            payloads = generate_payloads()
            _load_and_validate(payloads["capacity"], payloads["travel"], payloads["sites"], "sample data")

    errors = get_fetch_errors()
    if errors:
        st.warning(f"Last fetch was partial; missing datasets: {', '.join(errors)}")

    st.divider()

    # --- Recalculation Policy ---
    st.subheader("What-If Recalculation Policy")
    st.caption(
        "Placeholder heuristics, not validated travel models. "
        "Travel time from distance is a straight-line estimate, not a routed time."
    )
    cfg = dict(get_rule_config())
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        cfg["local_option_minutes"] = st.number_input(
            "Local option (min)", min_value=0.0, value=float(cfg.get("local_option_minutes", 5.0)),
            step=1.0, key="cfg_local",
        )
    with col2:
        cfg["saturation_fallback_minutes"] = st.number_input(
            "No spare seats anywhere (min)", min_value=0.0,
            value=float(cfg.get("saturation_fallback_minutes", 30.0)), step=1.0, key="cfg_fallback",
        )
    with col3:
        cfg["min_travel_minutes"] = st.number_input(
            "Minimum travel (min)", min_value=0.0, value=float(cfg.get("min_travel_minutes", 5.0)),
            step=1.0, key="cfg_min_travel",
        )
    with col4:
        cfg["minutes_per_km"] = st.number_input(
            "Minutes per km", min_value=0.1, value=float(cfg.get("minutes_per_km", 3.0)),
            step=0.5, key="cfg_per_km",
        )
    if cfg != get_rule_config():
        set_rule_config(cfg)

    if not is_data_loaded():
        return

    st.divider()

    # --- Data Quality ---
    st.subheader("Data Quality")
    schools = get_schools()
    o_result = validate_overrides(get_overrides(), schools)
    for w in o_result.warnings:
        st.warning(w)
    located = sum(1 for s in schools if s.has_location)
    st.caption(f"{located} of {len(schools)} schools have usable coordinates.")

    st.divider()

    # --- Override Log ---
    st.subheader("Override Log")
    log = get_audit_log()
    if log:
        st.dataframe(pd.DataFrame([{
            "Time": e.timestamp.strftime("%H:%M:%S"),
            "Action": e.action,
            "School": e.school_id or "—",
            "Old": e.old_value,
            "New": e.new_value,
            "Note": e.rationale,
        } for e in reversed(log)]), width="stretch")
    else:
        st.caption("No changes recorded in this session.")
