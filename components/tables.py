"""Styled dataframe display helpers."""

import streamlit as st
import pandas as pd
from typing import Optional

from config.defaults import RISK_COLORS


def render_styled_table(
    df: pd.DataFrame,
    title: Optional[str] = None,
    height: Optional[int] = None,
    use_container_width: bool = True,
):
    """Render a styled, non-editable dataframe."""
    if title:
        st.subheader(title)
    st.dataframe(df, height=height, use_container_width=use_container_width)


def risk_cell_style(val) -> str:
    color = RISK_COLORS.get(val)
    if color is None:
        return ""
    return f"background-color: {color}; color: white; font-weight: bold"


def render_risk_table(df: pd.DataFrame, risk_column: str = "Risk"):
    """Render a table with color-coded risk statuses."""
    if risk_column in df.columns:
        styled = df.style.map(risk_cell_style, subset=[risk_column])
        st.dataframe(styled, use_container_width=True)
    else:
        st.dataframe(df, use_container_width=True)
