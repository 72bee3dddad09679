"""Tab 1: Capacity Dashboard — portfolio seat capacity and risk for the selected month."""

import streamlit as st
import pandas as pd

from data.session_store import get_repository, get_rule_config, is_data_loaded
from engine.dashboard import get_dashboard
from components.metrics_cards import render_dashboard_metrics
from components.charts import site_capacity_bar, floor_utilization_bar
from components.tables import render_risk_table, render_styled_table


def render(sidebar_state):
    """Render the Capacity Dashboard tab."""
    st.header("Capacity Dashboard")

    if not is_data_loaded():
        st.info("No data loaded. Please load data in the Data tab.")
        return

    dashboard = get_dashboard(get_repository(), sidebar_state.year_month, get_rule_config())
    sites = dashboard.sites
    if sidebar_state.region_id:
        site_ids = {s.site_id for s in get_repository().list_sites()
                    if s.region_id == sidebar_state.region_id}
        sites = [s for s in sites if s.site_id in site_ids]

    st.caption(f"{dashboard.month_name} {dashboard.year}")
    render_dashboard_metrics(dashboard)
    st.divider()

    if sites:
        st.plotly_chart(site_capacity_bar(sites), use_container_width=True)

    site_rows = [{
        "Site": s.site_name,
        "Code": s.site_code,
        "Region": s.region_name,
        "Status": s.status,
        "Capacity": s.total_capacity,
        "Occupied": s.total_occupied,
        "Available": s.total_available,
        "Utilization %": s.utilization_percent,
        "Risk": s.risk_status,
    } for s in sites]
    render_risk_table(pd.DataFrame(site_rows))

    st.divider()
    st.subheader("Floor & Zone Detail")

    site_names = [s.site_name for s in sites]
    if not site_names:
        return
    selected = st.selectbox("Site", site_names, key="dashboard_site")
    site = next(s for s in sites if s.site_name == selected)

    if site.floors:
        st.plotly_chart(floor_utilization_bar(site), use_container_width=True)

    zone_rows = [{
        "Floor": f.floor_name,
        "Zone": z.zone_name,
        "Capacity": z.capacity,
        "Occupied": z.occupied,
        "Available": z.available,
        "Utilization %": z.utilization_percent,
        "Risk": z.risk_status,
        "Closure Date": z.closure_date or "",
    } for f in site.floors for z in f.zones]
    render_risk_table(pd.DataFrame(zone_rows))

    if dashboard.closures_this_month:
        render_styled_table(pd.DataFrame([{
            "Site": c.site_name,
            "Floor": c.floor_name,
            "Zones": c.zone_names,
            "Closure Date": c.closure_date,
            "Seats Affected": c.seats_affected,
            "Status": c.status,
        } for c in dashboard.closures_this_month]), title=f"Closures in {dashboard.month_name}")
