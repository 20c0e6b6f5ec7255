"""Tab 1: Capacity Map — school utilization, district travel time and what-if edits."""

import streamlit as st

from data.session_store import (
    get_schools, get_travel_samples, get_sites, get_overrides, get_rule_config,
    apply_override_request, reset_all_overrides, is_data_loaded,
)
from models.override import OverrideRequest
from engine.school_filter import filter_schools
from engine.utilization import school_status
from engine.district_aggregator import aggregate_baseline
from engine.recalculator import resolve_district_layer
from engine.district_impact import compute_system_summary
from components.charts import capacity_map
from components.metrics_cards import render_metric_row, summary_metrics
from components.tables import render_school_table

CAPACITY_INPUT_PREFIX = "what_if_capacity_"


def capacity_input_key(school_id: str) -> str:
    return f"{CAPACITY_INPUT_PREFIX}{school_id}"


def clear_capacity_inputs(school_id=None):
    """Drop stored editor values so the input re-reads the effective capacity.

    Clears one school's input, or every school's when no id is given.
    """
    if school_id is not None:
        st.session_state.pop(capacity_input_key(school_id), None)
        return
    for key in [k for k in st.session_state.keys() if str(k).startswith(CAPACITY_INPUT_PREFIX)]:
        st.session_state.pop(key, None)


def render(sidebar_state):
    """Render the Capacity Map tab."""
    st.header("Capacity Map")

    if not is_data_loaded():
        st.info("No data loaded. Please fetch or upload data in the Data & Sources tab.")
        return

    schools = get_schools()
    overrides = get_overrides()
    rule_config = get_rule_config()

    visible = filter_schools(schools, sidebar_state.criteria, overrides)
    statuses = [school_status(s, overrides) for s in visible]

    baseline = aggregate_baseline(get_travel_samples())
    districts = resolve_district_layer(baseline, schools, overrides, rule_config)

    # --- KPIs ---
    summary = compute_system_summary(schools, overrides)
    baseline_summary = compute_system_summary(schools) if overrides.is_active else None
    render_metric_row(summary_metrics(summary, baseline_summary))

    # --- Map ---
    fig = capacity_map(
        statuses, districts, get_sites(),
        show_schools=sidebar_state.show_schools,
        show_sites=sidebar_state.show_sites,
        show_districts=sidebar_state.show_districts,
    )
    st.plotly_chart(fig, width="stretch")

    col1, col2, col3 = st.columns(3)
    col1.metric("Schools Shown", f"{len(visible):,} / {len(schools):,}")
    col2.metric("Districts Drawn", len(districts))
    col3.metric("Proposed Sites", len(get_sites()))

    if sidebar_state.what_if_mode:
        st.divider()
        _render_what_if_editor(schools, overrides)

    st.divider()

    # --- School Table ---
    st.subheader("Schools")
    if statuses:
        render_school_table(statuses)
    else:
        st.info("No schools match the current filters.")


def _render_what_if_editor(schools, overrides):
    st.subheader("What-If: Change School Capacity")
    st.caption(
        "Edits are hypothetical and kept for this session only. "
        "District travel times are recalculated from the nearest school with spare seats."
    )

    school_map = {s.id: s for s in schools}
    col1, col2 = st.columns([2, 1])
    with col1:
        school_id = st.selectbox(
            "School",
            options=list(school_map.keys()),
            format_func=lambda sid: f"{school_map[sid].name} ({school_map[sid].district})",
            key="what_if_school",
        )
    school = school_map[school_id]
    current = overrides.effective_capacity(school.id, school.capacity)
    with col2:
        new_capacity = st.number_input(
            "New Capacity",
            min_value=0, value=current, step=50,
            key=capacity_input_key(school.id),
        )

    status = school_status(school, overrides)
    st.caption(
        f"Enrollment {school.enrollment:,} | original capacity {school.capacity:,} | "
        f"utilization {status.status.utilization_pct:.1f}% ({status.status.tier})"
    )

    b1, b2, b3 = st.columns(3)
    with b1:
        if st.button("Apply", type="primary", key="btn_apply_capacity"):
            if apply_override_request(OverrideRequest(school.id, new_capacity)):
                st.rerun()
            else:
                st.warning("Capacity must be a non-negative whole number.")
    with b2:
        if st.button("Reset School", key="btn_reset_capacity", disabled=school.id not in overrides):
            apply_override_request(OverrideRequest(school.id))
            clear_capacity_inputs(school.id)
            st.rerun()
    with b3:
        if st.button("Reset All", key="btn_reset_all", disabled=not overrides.is_active):
            reset_all_overrides()
            clear_capacity_inputs()
            st.rerun()

    if overrides.is_active:
        changes = ", ".join(
            f"{school_map[sid].name}: {school_map[sid].capacity:,} → {cap:,}"
            for sid, cap in overrides.items() if sid in school_map
        )
        st.info(f"Active changes: {changes}")
