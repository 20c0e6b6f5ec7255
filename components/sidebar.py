"""Global sidebar controls for filters, map layers and what-if mode."""

import streamlit as st
from dataclasses import dataclass
from data.session_store import (
    get_overrides, get_data_source, is_data_loaded, is_what_if_mode,
    set_filter_criteria, set_what_if_mode,
)
from models.filters import FilterCriteria, TierToggles
from config.defaults import (
    ALL, SCHOOL_TYPES, GENDERS, DEFAULT_UTILIZATION_MIN, DEFAULT_UTILIZATION_MAX,
)


@dataclass
class SidebarState:
    criteria: FilterCriteria
    what_if_mode: bool
    show_schools: bool = True
    show_sites: bool = True
    show_districts: bool = True


def render_sidebar() -> SidebarState:
    """Render the global sidebar controls and return current state."""
    with st.sidebar:
        st.title("School Capacity Planning")
        st.divider()

        # Data status indicator
        if is_data_loaded():
            st.success(f"Data loaded ({get_data_source()})")
        else:
            st.warning("No data loaded — go to the Data & Sources tab")

        # What-if mode
        what_if = st.toggle("What-If Mode", value=is_what_if_mode(), key="sidebar_what_if")
        if what_if != is_what_if_mode():
            set_what_if_mode(what_if)
        if what_if:
            count = len(get_overrides())
            st.caption(f"Capacity overrides: {count}" if count else "No capacity changes yet")

        st.divider()

        # Map layers
        st.subheader("Layers")
        show_schools = st.checkbox("Schools", value=True, key="layer_schools")
        show_sites = st.checkbox("Optimal Locations", value=True, key="layer_sites")
        show_districts = st.checkbox("District Travel Time", value=True, key="layer_districts")

        st.divider()

        # Filters
        st.subheader("Filters")
        util_min, util_max = st.slider(
            "Utilization %",
            min_value=0, max_value=int(DEFAULT_UTILIZATION_MAX),
            value=(int(DEFAULT_UTILIZATION_MIN), int(DEFAULT_UTILIZATION_MAX)),
            step=5,
            key="filter_utilization",
        )
        school_type = st.selectbox(
            "School Type", [ALL] + SCHOOL_TYPES,
            format_func=lambda x: "All types" if x == ALL else x,
            key="filter_school_type",
        )
        gender = st.selectbox(
            "Gender", [ALL] + GENDERS,
            format_func=lambda x: "All" if x == ALL else x,
            key="filter_gender",
        )

        st.caption("Status")
        tiers = TierToggles(
            critical=st.checkbox("Critical (≥120%)", value=True, key="tier_critical"),
            over=st.checkbox("Over capacity (100–120%)", value=True, key="tier_over"),
            near=st.checkbox("Near capacity (85–100%)", value=True, key="tier_near"),
            acceptable=st.checkbox("Acceptable (<85%)", value=True, key="tier_acceptable"),
        )

    criteria = FilterCriteria(
        utilization_min=float(util_min),
        utilization_max=float(util_max),
        school_type=school_type,
        gender=gender,
        tiers=tiers,
    )
    set_filter_criteria(criteria)

    return SidebarState(
        criteria=criteria,
        what_if_mode=what_if,
        show_schools=show_schools,
        show_sites=show_sites,
        show_districts=show_districts,
    )
