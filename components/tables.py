"""Styled dataframe display helpers."""

import streamlit as st
import pandas as pd
from typing import List, Optional
from engine.utilization import SchoolStatus
from components.charts import TIER_COLORS


def render_styled_table(
    df: pd.DataFrame,
    title: Optional[str] = None,
    height: Optional[int] = None,
    width: str = "stretch",
):
    """Render a styled, non-editable dataframe."""
    if title:
        st.subheader(title)
    st.dataframe(df, height=height if height is not None else "auto", width=width)


def school_rows(statuses: List[SchoolStatus]) -> List[dict]:
    return [{
        "ID": s.school.id,
        "School": s.school.name,
        "District": s.school.district,
        "Type": s.school.school_type or "—",
        "Gender": s.school.gender or "—",
        "Capacity": s.effective_capacity,
        "Original Capacity": s.school.capacity,
        "Enrollment": s.school.enrollment,
        "Utilization %": round(s.status.utilization_pct, 1),
        "Status": s.status.tier,
        "Deficit": s.deficit,
        "Spare Seats": s.spare_seats,
    } for s in statuses]


def render_school_table(statuses: List[SchoolStatus], tier_column: str = "Status"):
    """Render a school table with tier-colored status cells."""
    df = pd.DataFrame(school_rows(statuses))

    def color_tier(val):
        color = TIER_COLORS.get(val)
        if color:
            return f"color: {color}; font-weight: bold"
        return ""

    if tier_column in df.columns:
        styled = df.style.map(color_tier, subset=[tier_column])
        st.dataframe(styled, width="stretch")
    else:
        st.dataframe(df, width="stretch")


def render_comparison_table(df: pd.DataFrame, change_column: str = "Change (min)"):
    """Render a comparison table; lower travel time is an improvement."""
    def color_change(val):
        try:
            v = float(val)
            if v < 0:
                return "color: #155724; font-weight: bold"
            elif v > 0:
                return "color: #cc0000; font-weight: bold"
        except (ValueError, TypeError):
            pass
        return ""

    if change_column in df.columns:
        styled = df.style.map(color_change, subset=[change_column])
        st.dataframe(styled, width="stretch")
    else:
        st.dataframe(df, width="stretch")
