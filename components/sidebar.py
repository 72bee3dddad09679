"""Global sidebar controls for month and region selection."""

import streamlit as st
from dataclasses import dataclass
from datetime import date
from typing import Optional

from config.defaults import MONTH_NAMES
from data.session_store import (
    get_repository, get_selected_year_month, set_selected_year_month, is_data_loaded,
)
from engine.months import parse_year_month, format_year_month


@dataclass
class SidebarState:
    year_month: str
    region_id: Optional[str]


def render_sidebar() -> SidebarState:
    """Render the global sidebar controls and return current state."""
    with st.sidebar:
        st.title("Seat Capacity Planning")
        st.divider()

        year, month = parse_year_month(get_selected_year_month())
        this_year = date.today().year
        years = list(range(this_year - 1, this_year + 3))
        if year not in years:
            years.append(year)

        col1, col2 = st.columns(2)
        with col1:
            selected_month = st.selectbox(
                "Month",
                options=list(range(1, 13)),
                format_func=lambda m: MONTH_NAMES[m - 1],
                index=month - 1,
                key="sidebar_month",
            )
        with col2:
            selected_year = st.selectbox(
                "Year", options=sorted(years), index=sorted(years).index(year), key="sidebar_year",
            )

        year_month = format_year_month(selected_year, selected_month)
        if year_month != get_selected_year_month():
            set_selected_year_month(year_month)

        region_id = None
        repository = get_repository()
        if repository is not None:
            regions = repository.list_regions()
            options = [None] + [r.region_id for r in regions]
            names = {r.region_id: r.name for r in regions}
            region_id = st.selectbox(
                "Region",
                options=options,
                format_func=lambda rid: "All regions" if rid is None else names.get(rid, rid),
                key="sidebar_region",
            )

        st.divider()

        if is_data_loaded():
            st.success("Data loaded")
        else:
            st.warning("No data loaded — go to the Data tab")

    return SidebarState(year_month=year_month, region_id=region_id)
