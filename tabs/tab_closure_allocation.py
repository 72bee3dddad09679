"""Tab 2: Closure Allocation — where displaced staff go when a floor closes."""

import json

import streamlit as st
import pandas as pd

from data.session_store import (
    get_repository, get_rule_config, is_data_loaded,
    get_selected_closure_id, set_selected_closure_id,
)
from engine.allocation_engine import get_allocation_recommendation
from engine.errors import AllocationError
from engine.stable_month import region_capacity_timeline
from models.serialization import to_payload
from components.metrics_cards import render_allocation_metrics
from components.charts import allocation_bar, region_capacity_timeline as timeline_chart
from components.tables import render_risk_table


def _render_business_units(report):
    st.subheader("Displaced Staff by Business Unit")
    for bu in report.by_business_unit:
        with st.expander(f"{bu.business_unit} — {bu.total_seats} seats"):
            rows = [{
                "Client": c.client,
                "Project": p.project_code,
                "Seats": p.seats,
            } for c in bu.clients for p in c.projects]
            st.dataframe(pd.DataFrame(rows), use_container_width=True)


def _render_recommendations(report):
    st.subheader("Destination Sites")
    if not report.recommendations:
        st.warning("No site in this region has available capacity.")
        return

    st.plotly_chart(allocation_bar(report.recommendations), use_container_width=True)
    render_risk_table(pd.DataFrame([{
        "Site": r.target_site_name,
        "Code": r.target_site_code,
        "Available": r.available_capacity,
        "Recommended": r.recommended_allocation,
        "Business Units": ", ".join(r.allocated_business_units),
        "Projects": ", ".join(r.allocated_projects),
        "New Utilization %": r.new_utilization,
        "Risk": r.risk_status,
    } for r in report.recommendations]))

    for r in report.recommendations:
        if not r.floor_breakdown:
            continue
        with st.expander(f"{r.target_site_name}: floor / zone availability"):
            st.dataframe(pd.DataFrame([{
                "Floor": f.floor_name,
                "Zone": z.zone_name,
                "Capacity": z.capacity,
                "Occupied": z.occupied,
                "Available": z.available,
            } for f in r.floor_breakdown for z in f.zones]), use_container_width=True)


def _render_date_recommendation(report, repository, plan):
    advice = report.date_recommendation
    if advice is None:
        return
    st.subheader("Closure Month Advice")
    if advice.has_capacity:
        st.success(f"{advice.reason} (stable through {advice.stable_through})")
    elif advice.suggested_closure_month:
        st.warning(f"{advice.reason} — suggested: {advice.suggested_month_name}")
    else:
        st.error(advice.reason)

    site = plan.floor.site
    timeline = region_capacity_timeline(repository, site.region_id, site.site_id, plan.year_month)
    st.plotly_chart(
        timeline_chart(timeline, plan.seats_affected, advice.suggested_closure_month),
        use_container_width=True,
    )


def render(sidebar_state):
    """Render the Closure Allocation tab."""
    st.header("Closure Allocation")

    if not is_data_loaded():
        st.info("No data loaded. Please load data in the Data tab.")
        return

    repository = get_repository()
    plans = repository.list_closure_plans()
    if sidebar_state.region_id:
        plans = [p for p in plans if p.floor.site.region_id == sidebar_state.region_id]
    if not plans:
        st.info("No closure plans. Schedule one in the Data tab.")
        return

    plan_ids = [p.plan_id for p in plans]
    labels = {p.plan_id: f"{p.floor.site.name} / {p.floor.name} — {p.closure_date.isoformat()}" for p in plans}
    current = get_selected_closure_id()
    selected_id = st.selectbox(
        "Closure Plan",
        plan_ids,
        index=plan_ids.index(current) if current in plan_ids else 0,
        format_func=lambda pid: labels[pid],
        key="allocation_plan",
    )
    if selected_id != current:
        set_selected_closure_id(selected_id)

    try:
        report = get_allocation_recommendation(repository, selected_id, get_rule_config())
    except AllocationError as e:
        st.error(str(e))
        return

    plan = repository.get_closure_plan(selected_id)
    cp = report.closure_plan
    st.caption(
        f"{cp.site_name} · {cp.floor_name} ({cp.zone_names}) · closes {cp.closure_date} · "
        f"{cp.region_name}"
    )

    render_allocation_metrics(report)
    if report.unseated_staff > 0:
        st.error(
            f"{report.unseated_staff} seats could not be placed: "
            + ", ".join(f"{u.project_code} ({u.seats})" for u in report.unseated_projects)
        )

    st.divider()
    col1, col2 = st.columns([2, 3])
    with col1:
        _render_business_units(report)
    with col2:
        _render_recommendations(report)

    st.divider()
    _render_date_recommendation(report, repository, plan)

    with st.expander("How this allocation was built"):
        for step in report.explanation_steps:
            st.markdown(f"- {step}")

    st.download_button(
        "Download allocation (JSON)",
        data=json.dumps(to_payload(report), indent=2),
        file_name=f"allocation_{cp.id}.json",
        mime="application/json",
    )
