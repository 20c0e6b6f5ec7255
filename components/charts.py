"""Plotly figure builders for the school capacity dashboard."""

import math
import plotly.express as px
import plotly.graph_objects as go
import pandas as pd
from typing import Dict, List
from models.travel import DistrictAggregate
from models.site import OptimalSite
from engine.utilization import SchoolStatus, classify_travel_time
from config.defaults import (
    MAP_CENTER, MAP_ZOOM, DISTRICT_CIRCLE_RADIUS_M, TIER_ORDER, UTILIZATION_TIERS,
    TIER_ACCEPTABLE, ACCEPTABLE_COLOR,
)

TIER_COLORS = {tier: color for _, tier, color in UTILIZATION_TIERS}
TIER_COLORS[TIER_ACCEPTABLE] = ACCEPTABLE_COLOR


def _circle_path(lat: float, lon: float, radius_m: float, points: int = 36):
    """Approximate a ground circle as a closed lat/lon ring."""
    d_lat = radius_m / 111_320
    d_lon = radius_m / (111_320 * math.cos(math.radians(lat)))
    angles = [2 * math.pi * i / points for i in range(points + 1)]
    return ([lat + d_lat * math.sin(a) for a in angles],
            [lon + d_lon * math.cos(a) for a in angles])


def capacity_map(
    statuses: List[SchoolStatus],
    districts: Dict[str, DistrictAggregate],
    sites: List[OptimalSite],
    show_schools: bool = True,
    show_sites: bool = True,
    show_districts: bool = True,
) -> go.Figure:
    """Map with district travel-time circles, school markers and proposed sites."""
    fig = go.Figure()

    if show_districts:
        for agg in districts.values():
            severity = classify_travel_time(agg.travel_time_minutes)
            lats, lons = _circle_path(agg.centroid.lat, agg.centroid.lon, DISTRICT_CIRCLE_RADIUS_M)
            label = f"{agg.travel_time_minutes:.1f} min"
            if agg.is_recalculated:
                label += f" (baseline {agg.mean_travel_time_minutes:.1f})"
            fig.add_trace(go.Scattermap(
                lat=lats, lon=lons,
                mode="lines",
                fill="toself",
                fillcolor=_rgba(severity.color, severity.opacity),
                line=dict(color=severity.color, width=2),
                name=agg.district,
                hovertext=f"<b>{agg.district}</b><br>Avg travel: {label}<br>Status: {severity.level}",
                hoverinfo="text",
                showlegend=False,
            ))

    if show_schools and statuses:
        located = [s for s in statuses if s.school.location is not None]
        for tier in TIER_ORDER:
            group = [s for s in located if s.status.tier == tier]
            if not group:
                continue
            fig.add_trace(go.Scattermap(
                lat=[s.school.location.lat for s in group],
                lon=[s.school.location.lon for s in group],
                mode="markers",
                marker=dict(size=11, color=TIER_COLORS[tier]),
                name=tier,
                text=[_school_hover(s) for s in group],
                hoverinfo="text",
            ))

    if show_sites:
        located_sites = [s for s in sites if s.location is not None]
        if located_sites:
            fig.add_trace(go.Scattermap(
                lat=[s.location.lat for s in located_sites],
                lon=[s.location.lon for s in located_sites],
                mode="markers",
                marker=dict(size=16, color="#9333ea"),
                name="Proposed Site",
                text=[
                    f"<b>{s.name}</b><br>{s.district}<br>Capacity: {s.recommended_capacity:,}"
                    f"<br>Students served: {s.students_served:,}<br>Priority: {s.priority}"
                    for s in located_sites
                ],
                hoverinfo="text",
            ))

    fig.update_layout(
        map=dict(style="open-street-map", center=dict(lat=MAP_CENTER[0], lon=MAP_CENTER[1]),
                 zoom=MAP_ZOOM),
        margin=dict(l=0, r=0, t=0, b=0),
        height=620,
        legend=dict(yanchor="top", y=0.99, xanchor="left", x=0.01),
    )
    return fig


def _school_hover(s: SchoolStatus) -> str:
    text = (
        f"<b>{s.school.name}</b><br>{s.school.district}<br>"
        f"Capacity: {s.effective_capacity:,}"
    )
    if s.is_overridden:
        text += f" (was {s.school.capacity:,})"
    text += f"<br>Enrollment: {s.school.enrollment:,}<br>Utilization: {s.status.utilization_pct:.1f}%"
    if s.deficit:
        text += f"<br>Deficit: {s.deficit:,}"
    return text


def _rgba(hex_color: str, alpha: float) -> str:
    h = hex_color.lstrip("#")
    r, g, b = int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)
    return f"rgba({r},{g},{b},{alpha})"


def tier_donut(tier_counts: Dict[str, int], title: str = "Schools by Status") -> go.Figure:
    """Donut chart of school counts per utilization tier."""
    labels = [t for t in TIER_ORDER if tier_counts.get(t)]
    fig = go.Figure(data=[go.Pie(
        labels=labels,
        values=[tier_counts[t] for t in labels],
        hole=0.6,
        marker_colors=[TIER_COLORS[t] for t in labels],
        textinfo="percent+label",
    )])
    total = sum(tier_counts.values())
    fig.update_layout(
        title=title,
        height=350,
        showlegend=True,
        annotations=[dict(text=f"{total} schools", x=0.5, y=0.5, font_size=16, showarrow=False)],
    )
    return fig


def district_travel_bar(comparison_rows: List[dict]) -> go.Figure:
    """Grouped bar of baseline vs what-if travel time per district."""
    df = pd.DataFrame(comparison_rows)
    value_cols = ["Baseline (min)"]
    if "What-If (min)" in df.columns and df["What-If (min)"].notna().any():
        value_cols.append("What-If (min)")
    fig = px.bar(
        df, x="District", y=value_cols,
        barmode="group",
        labels={"value": "Minutes", "variable": ""},
        title="District Travel Time",
        color_discrete_map={"Baseline (min)": "#4A90D9", "What-If (min)": "#E8734A"},
    )
    fig.update_layout(legend_title_text="", height=400)
    return fig


def district_utilization_bar(impact_rows: List[dict]) -> go.Figure:
    """Horizontal bar of district utilization under current overrides."""
    df = pd.DataFrame(impact_rows).sort_values("Utilization %")
    fig = px.bar(
        df, x="Utilization %", y="District",
        orientation="h",
        title="District Utilization",
        color="Utilization %",
        color_continuous_scale=["#22c55e", "#fbbf24", "#f97316", "#dc2626"],
        range_color=[0, 140],
    )
    fig.update_layout(height=max(300, len(df) * 35), yaxis_type="category")
    fig.update_traces(texttemplate="%{x:.1f}%", textposition="auto")
    return fig
