"""Plotly chart builders for the Seat Capacity & Closure Allocation Platform."""

import plotly.express as px
import plotly.graph_objects as go
import pandas as pd
from typing import List, Optional

from config.defaults import RISK_COLORS, RISK_LEVELS, MONTH_ABBREVIATIONS
from models.allocation import AllocationRecommendation
from models.dashboard import SiteStatus


def site_capacity_bar(
    sites: List[SiteStatus],
    title: str = "Capacity vs Occupancy by Site",
) -> go.Figure:
    """Grouped bar of capacity and occupied seats per site."""
    df = pd.DataFrame([{
        "site": s.site_name,
        "Capacity": s.total_capacity,
        "Occupied": s.total_occupied,
    } for s in sites])
    fig = px.bar(
        df, x="site", y=["Capacity", "Occupied"],
        barmode="group",
        labels={"value": "Seats", "site": "Site", "variable": ""},
        title=title,
        color_discrete_map={"Capacity": "#4A90D9", "Occupied": "#E8734A"},
    )
    fig.update_layout(legend_title_text="", height=400)
    return fig


def floor_utilization_bar(site: SiteStatus) -> go.Figure:
    """Horizontal bar of floor utilization for one site, colored by risk."""
    df = pd.DataFrame([{
        "floor": f.floor_name,
        "utilization": f.utilization_percent,
        "risk": f.risk_status,
    } for f in site.floors])
    fig = px.bar(
        df, x="utilization", y="floor",
        orientation="h",
        color="risk",
        color_discrete_map=RISK_COLORS,
        category_orders={"risk": RISK_LEVELS},
        title=f"Floor Utilization — {site.site_name}",
        labels={"utilization": "Utilization %", "floor": "Floor", "risk": "Risk"},
    )
    fig.update_layout(height=max(250, len(df) * 45), yaxis_type="category")
    fig.add_vline(x=100, line_dash="dash", line_color="#cc0000")
    return fig


def allocation_bar(recommendations: List[AllocationRecommendation]) -> go.Figure:
    """Available vs recommended seats per destination site."""
    fig = go.Figure()
    names = [r.target_site_name for r in recommendations]
    fig.add_trace(go.Bar(
        name="Available", x=names, y=[r.available_capacity for r in recommendations],
        marker_color="#4A90D9",
    ))
    fig.add_trace(go.Bar(
        name="Recommended", x=names, y=[r.recommended_allocation for r in recommendations],
        marker_color=[RISK_COLORS.get(r.risk_status, "#E8734A") for r in recommendations],
    ))
    fig.update_layout(
        barmode="group",
        title="Recommended Allocation by Destination Site",
        xaxis_title="Site",
        yaxis_title="Seats",
        height=400,
    )
    return fig


def region_capacity_timeline(
    timeline: List[dict],
    seats_needed: int,
    suggested_month: Optional[str] = None,
) -> go.Figure:
    """Regional available seats per month against the seats that must move."""
    df = pd.DataFrame(timeline)
    df["label"] = df["year_month"].map(lambda ym: MONTH_ABBREVIATIONS[int(ym[5:7]) - 1])
    fig = px.line(
        df, x="label", y="available", markers=True,
        title="Regional Available Capacity Through Year-End",
        labels={"label": "Month", "available": "Available Seats"},
    )
    fig.add_hline(
        y=seats_needed, line_dash="dash", line_color="#cc0000",
        annotation_text=f"Needed: {seats_needed}",
    )
    if suggested_month and suggested_month in set(df["year_month"]):
        # Category axes take the category's position
        position = df["year_month"].tolist().index(suggested_month)
        fig.add_vline(x=position, line_dash="dot", line_color="#4CAF50")
    fig.update_layout(height=350)
    return fig
