"""Reusable KPI metric card widgets."""

import streamlit as st
from typing import Optional


def render_metric_row(metrics: list[dict]):
    """Render a row of metric cards.

    Each metric dict should have: label, value, and optionally delta, delta_color.
    """
    cols = st.columns(len(metrics))
    for col, m in zip(cols, metrics):
        with col:
            delta = m.get("delta")
            delta_color = m.get("delta_color", "normal")
            st.metric(
                label=m["label"],
                value=m["value"],
                delta=delta,
                delta_color=delta_color,
            )


def summary_metrics(summary: dict, baseline: Optional[dict] = None) -> list[dict]:
    """KPI cards for a system summary, with deltas against the baseline when given."""
    def delta(key, fmt="{:+,}"):
        if baseline is None:
            return None
        diff = summary[key] - baseline[key]
        return fmt.format(diff) if diff else None

    return [
        {"label": "Total Schools", "value": f"{summary['total_schools']:,}"},
        {"label": "Total Students", "value": f"{summary['total_enrollment']:,}"},
        {"label": "Capacity Deficit", "value": f"{summary['total_deficit']:,}",
         "delta": delta("total_deficit"), "delta_color": "inverse"},
        {"label": "Avg Utilization", "value": f"{summary['avg_utilization_pct']:.1f}%",
         "delta": delta("avg_utilization_pct", "{:+.1f}%"), "delta_color": "inverse"},
    ]
