"""Tab 3: Data & Settings — portfolio upload, closure scheduling, risk thresholds."""

import logging
from datetime import date

import streamlit as st
import pandas as pd

from config.defaults import RISK_OVERFLOW_THRESHOLD, RISK_THRESHOLD, WARNING_THRESHOLD
from data.loader import build_repository, load_multi_sheet_excel, load_file, SHEET_KEYS, OPTIONAL_SHEETS
from data.validator import validate_portfolio, SHEET_LABELS
from data.sample_data import generate_sample_frames
from data.session_store import (
    get_repository, set_repository, is_data_loaded, get_rule_config, set_rule_config,
)
from engine.errors import AllocationError

logger = logging.getLogger(__name__)


def _load_and_validate(frames):
    """Validate uploaded sheets and store the resulting repository."""
    result = validate_portfolio(frames)
    if not result.is_valid:
        for e in result.errors:
            st.error(e)
        return False

    for w in result.warnings:
        st.warning(w)

    repository = build_repository(frames)
    set_repository(repository)

    sites = repository.list_sites()
    floors = sum(len(s.floors) for s in sites)
    plans = repository.list_closure_plans()
    st.success(
        f"Data loaded: {len(repository.list_regions())} regions, {len(sites)} sites, "
        f"{floors} floors, {len(plans)} closure plans"
    )
    return True


def _render_upload():
    st.subheader("Data Upload")

    upload_mode = st.radio(
        "Upload mode",
        ["Single Excel workbook", "Separate CSV / XLSX files"],
        horizontal=True,
        key="upload_mode",
    )

    if upload_mode == "Single Excel workbook":
        st.caption(
            "Upload one `.xlsx` file with a sheet per entity: "
            + ", ".join(f"**{SHEET_LABELS[k]}**" for k in SHEET_KEYS)
            + ". Closure Plans is optional."
        )
        workbook = st.file_uploader("Portfolio workbook", type=["xlsx"], key="upload_workbook")
        if st.button("Upload & Validate", type="primary", key="btn_upload_workbook"):
            if workbook:
                try:
                    _load_and_validate(load_multi_sheet_excel(workbook))
                except (ValueError, KeyError, AllocationError) as e:
                    logger.exception("Workbook upload failed")
                    st.error(f"Error loading file: {e}")
            else:
                st.warning("Please upload an Excel file.")
    else:
        uploads = {}
        cols = st.columns(2)
        for idx, key in enumerate(SHEET_KEYS):
            label = SHEET_LABELS[key] + (" (optional)" if key in OPTIONAL_SHEETS else "")
            with cols[idx % 2]:
                uploads[key] = st.file_uploader(label, type=["csv", "xlsx"], key=f"upload_{key}")

        if st.button("Upload & Validate", type="primary", key="btn_upload_files"):
            missing = [SHEET_LABELS[k] for k in SHEET_KEYS if uploads[k] is None and k not in OPTIONAL_SHEETS]
            if missing:
                st.warning(f"Please upload: {', '.join(missing)}")
            else:
                try:
                    frames = {k: load_file(f) for k, f in uploads.items() if f is not None}
                    _load_and_validate(frames)
                except (ValueError, KeyError, AllocationError) as e:
                    logger.exception("File upload failed")
                    st.error(f"Error loading file: {e}")

    st.divider()
    year = st.number_input("Sample data year", min_value=2000, max_value=2100,
                           value=date.today().year, step=1, key="sample_year")
    if st.button("Load Sample Data", key="btn_sample"):
        _load_and_validate(generate_sample_frames(int(year)))


def _render_closure_scheduler():
    st.subheader("Schedule a Floor Closure")
    repository = get_repository()

    floors = [(s, f) for s in repository.list_sites() for f in s.floors]
    floor_labels = {f.floor_id: f"{s.name} / {f.name}" for s, f in floors}

    with st.form("closure_form"):
        floor_id = st.selectbox("Floor", list(floor_labels), format_func=lambda fid: floor_labels[fid])
        closure_date = st.date_input("Closure date", value=date.today())
        seats = st.number_input(
            "Seats affected (0 = use the floor's assigned seats that month)",
            min_value=0, value=0, step=1,
        )
        submitted = st.form_submit_button("Save Closure Plan", type="primary")

    if submitted:
        try:
            plan = repository.add_closure_plan(floor_id, closure_date, int(seats) or None)
        except AllocationError as e:
            st.error(str(e))
        else:
            st.success(f"Saved {plan.plan_id}: {plan.seats_affected} seats closing {plan.closure_date.isoformat()}")

    plans = repository.list_closure_plans()
    if plans:
        st.dataframe(pd.DataFrame([{
            "ID": p.plan_id,
            "Site": p.floor.site.name,
            "Floor": p.floor.name,
            "Closure Date": p.closure_date.isoformat(),
            "Seats Affected": p.seats_affected,
            "Status": p.status,
        } for p in plans]), use_container_width=True)

        to_remove = st.selectbox("Remove closure plan", [None] + [p.plan_id for p in plans],
                                 format_func=lambda pid: "—" if pid is None else pid,
                                 key="remove_plan")
        if to_remove and st.button("Remove", key="btn_remove_plan"):
            repository.remove_closure_plan(to_remove)
            st.rerun()


def _render_rule_config():
    st.subheader("Risk Thresholds")
    config = get_rule_config()

    col1, col2, col3 = st.columns(3)
    with col1:
        warning = st.number_input(
            "Warning at (%)", min_value=0.0, max_value=200.0, step=0.5,
            value=float(config.get("warning_threshold", WARNING_THRESHOLD)),
        )
    with col2:
        risk = st.number_input(
            "Risk at (%)", min_value=0.0, max_value=200.0, step=0.5,
            value=float(config.get("risk_threshold", RISK_THRESHOLD)),
        )
    with col3:
        overflow = st.number_input(
            "Overflow above (%)", min_value=0.0, max_value=200.0, step=0.5,
            value=float(config.get("overflow_threshold", RISK_OVERFLOW_THRESHOLD)),
        )

    if st.button("Save Thresholds", key="btn_thresholds"):
        if not warning <= risk <= overflow:
            st.error("Thresholds must satisfy warning ≤ risk ≤ overflow.")
        else:
            set_rule_config({
                "overflow_threshold": overflow,
                "risk_threshold": risk,
                "warning_threshold": warning,
            })
            st.success("Thresholds saved.")


def render(sidebar_state):
    """Render the Data & Settings tab."""
    st.header("Data & Settings")

    _render_upload()

    if is_data_loaded():
        st.divider()
        _render_closure_scheduler()

    st.divider()
    _render_rule_config()
