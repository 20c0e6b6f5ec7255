"""Tab 2: District Impact — travel time and utilization consequences of what-if edits."""

import streamlit as st
import pandas as pd

from data.session_store import (
    get_schools, get_travel_samples, get_overrides, get_rule_config, is_data_loaded,
)
from engine.district_aggregator import aggregate_baseline
from engine.recalculator import (
    recalculate_detailed, resolve_district_layer, compare_district_layers,
)
from engine.district_impact import compute_district_impact, district_impact_rows
from engine.explainer import explain_recalculation
from engine.utilization import classify_travel_time
from components.charts import district_travel_bar, district_utilization_bar
from components.tables import render_comparison_table, render_styled_table


def render(sidebar_state):
    """Render the District Impact tab."""
    st.header("District Impact")

    if not is_data_loaded():
        st.info("No data loaded. Please fetch or upload data in the Data & Sources tab.")
        return

    schools = get_schools()
    overrides = get_overrides()
    rule_config = get_rule_config()

    baseline = aggregate_baseline(get_travel_samples())
    layer = resolve_district_layer(baseline, schools, overrides, rule_config)

    if not overrides.is_active:
        st.caption("Showing observed travel times. Enable What-If Mode and change a capacity to compare.")

    # --- Travel Time ---
    if layer:
        comparison = compare_district_layers(layer)
        for row in comparison:
            minutes = row["What-If (min)"] if row["What-If (min)"] is not None else row["Baseline (min)"]
            row["Status"] = classify_travel_time(minutes).level

        col1, col2 = st.columns([3, 2])
        with col1:
            st.plotly_chart(district_travel_bar(comparison), width="stretch")
        with col2:
            render_comparison_table(pd.DataFrame(comparison))
    else:
        st.info("No district has a located travel-time sample, so there is nothing to draw.")

    st.divider()

    # --- Capacity Roll-up ---
    st.subheader("District Capacity")
    impact = compute_district_impact(schools, overrides)
    travel_minutes = {d: agg.travel_time_minutes for d, agg in layer.items()}
    rows = district_impact_rows(impact, travel_minutes)
    if rows:
        col1, col2 = st.columns([2, 3])
        with col1:
            st.plotly_chart(district_utilization_bar(rows), width="stretch")
        with col2:
            render_styled_table(pd.DataFrame(rows))

    # --- Explanations ---
    if overrides.is_active and layer:
        st.divider()
        st.subheader("How Travel Times Were Recalculated")
        detailed = recalculate_detailed(schools, overrides, baseline, rule_config)
        for district in sorted(detailed):
            with st.expander(f"{district}: {detailed[district].minutes:.1f} min"):
                steps = explain_recalculation(
                    detailed[district],
                    baseline[district].mean_travel_time_minutes,
                    rule_config,
                )
                for step in steps:
                    st.markdown(f"- {step}")
