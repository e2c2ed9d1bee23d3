"""BP Tracker - Streamlit Web UI.

Main application entry point using st.navigation.

Usage:
    pdm run streamlit run streamlit_app/app.py
"""

from __future__ import annotations

import streamlit as st

st.set_page_config(
    page_title="Blood Pressure Tracker",
    page_icon=":material/monitor_heart:",
    layout="wide",
)

pages = {
    "Readings": [
        st.Page(
            "pages/0_Dashboard.py",
            title="New Reading",
            icon=":material/cardiology:",
            default=True,
        ),
        st.Page(
            "pages/1_History.py",
            title="History & Trends",
            icon=":material/monitoring:",
        ),
    ],
}

st.navigation(pages).run()
