"""Typed wrapper around st.session_state for application data."""

import streamlit as st
from datetime import date
from typing import Optional

from config.defaults import RISK_OVERFLOW_THRESHOLD, RISK_THRESHOLD, WARNING_THRESHOLD
from data.repository import InMemoryCapacityRepository
from engine.months import format_year_month


def initialize_session_state():
    """Initialize all session state keys with defaults."""
    today = date.today()
    defaults = {
        "repository": None,
        "data_loaded": False,
        "selected_year_month": format_year_month(today.year, today.month),
        "selected_closure_id": None,
        "rule_config": {
            "overflow_threshold": RISK_OVERFLOW_THRESHOLD,
            "risk_threshold": RISK_THRESHOLD,
            "warning_threshold": WARNING_THRESHOLD,
        },
    }
    for key, default in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = default


# --- Getters ---

def get_repository() -> Optional[InMemoryCapacityRepository]:
    return st.session_state.get("repository")


def is_data_loaded() -> bool:
    return st.session_state.get("data_loaded", False)


def get_selected_year_month() -> str:
    return st.session_state.get("selected_year_month")


def get_selected_closure_id() -> Optional[str]:
    return st.session_state.get("selected_closure_id")


def get_rule_config() -> dict:
    return st.session_state.get("rule_config", {})


# --- Setters ---

def set_repository(repository: InMemoryCapacityRepository):
    st.session_state["repository"] = repository
    st.session_state["data_loaded"] = repository is not None
    st.session_state["selected_closure_id"] = None


def set_selected_year_month(year_month: str):
    st.session_state["selected_year_month"] = year_month


def set_selected_closure_id(plan_id: Optional[str]):
    st.session_state["selected_closure_id"] = plan_id


def set_rule_config(config: dict):
    st.session_state["rule_config"] = config
