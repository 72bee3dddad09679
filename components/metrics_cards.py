"""KPI metric card rows for the dashboard and the allocation view."""

import streamlit as st

from models.allocation import AllocationReport
from models.dashboard import PortfolioDashboard


def _render_row(metrics: list[dict]):
    cols = st.columns(len(metrics))
    for col, m in zip(cols, metrics):
        with col:
            st.metric(label=m["label"], value=m["value"], delta=m.get("delta"),
                      delta_color=m.get("delta_color", "normal"))


def render_dashboard_metrics(dashboard: PortfolioDashboard):
    utilization = (dashboard.total_occupied / dashboard.total_capacity
                   if dashboard.total_capacity else 0)
    _render_row([
        {"label": "Total Capacity", "value": f"{dashboard.total_capacity:,}"},
        {"label": "Occupied", "value": f"{dashboard.total_occupied:,}"},
        {"label": "Available", "value": f"{dashboard.total_available:,}"},
        {"label": "Utilization", "value": f"{utilization:.1%}"},
        {"label": f"Closures in {dashboard.month_name}", "value": len(dashboard.closures_this_month)},
    ])


def render_allocation_metrics(report: AllocationReport):
    _render_row([
        {"label": "Seats Affected", "value": report.closure_plan.seats_affected},
        {"label": "Allocated", "value": report.total_allocated},
        {
            "label": "Unseated",
            "value": report.unseated_staff,
            "delta": f"-{report.unseated_staff}" if report.unseated_staff else None,
            "delta_color": "normal",
        },
        {"label": "Candidate Sites", "value": len(report.recommendations)},
    ])
