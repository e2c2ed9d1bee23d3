"""History page - Reading history with trend charts and export."""

from __future__ import annotations

import sys
from datetime import datetime, timedelta
from pathlib import Path

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from bp_tracker.export import readings_to_csv  # noqa: E402
from bp_tracker.history_store import ReadingNotFoundError  # noqa: E402
from bp_tracker.main import BloodPressureTracker, load_config  # noqa: E402
from streamlit_app.components.icons import CATEGORY_COLORS, ICONS, load_fontawesome  # noqa: E402
from streamlit_app.components.version import show_version_footer  # noqa: E402


def get_tracker() -> BloodPressureTracker:
    """Get or create tracker instance."""
    if "tracker" not in st.session_state:
        config = load_config(str(project_root / "config" / "config.yaml"))
        st.session_state.tracker = BloodPressureTracker.from_config(config)
    tracker: BloodPressureTracker = st.session_state.tracker
    return tracker


def main() -> None:
    """History page."""
    load_fontawesome()

    tracker = get_tracker()

    # Sidebar - Filters
    with st.sidebar:
        st.subheader("Filters")
        days = st.selectbox(
            "Time Range",
            options=[7, 30, 90, 365, 0],
            format_func=lambda x: f"Last {x} days" if x > 0 else "All time",
            index=1,
        )
        limit = st.number_input("Max records", min_value=10, max_value=1000, value=100)
        st.markdown("---")
        show_version_footer()

    st.markdown(f"# {ICONS['table']} Reading History", unsafe_allow_html=True)
    st.markdown("Browse, export and delete blood pressure readings")

    end_date = datetime.now()
    start_date = end_date - timedelta(days=days) if days > 0 else None
    readings = tracker.store.get_all(limit=int(limit), start_date=start_date, end_date=end_date)

    if not readings:
        st.warning("No readings found with selected filters.")
        return

    df = pd.DataFrame([r.to_dict() for r in readings])
    df["timestamp"] = pd.to_datetime(df["timestamp"])

    st.markdown("---")
    st.subheader(f"Found {len(readings)} readings")

    display_data = [
        {
            "ID": r.id,
            "Date": r.timestamp.strftime("%d %b %Y, %H:%M"),
            "SYS": r.systolic,
            "DIA": r.diastolic,
            "Pulse": r.pulse,
            "Category": r.classification or "Unknown",
        }
        for r in readings
    ]
    st.dataframe(display_data, width="stretch", hide_index=True)

    col1, col2 = st.columns(2)
    with col1:
        st.download_button(
            label="Download as CSV",
            icon=":material/download:",
            data=readings_to_csv(readings),
            file_name=f"blood_pressure_readings_{datetime.now().strftime('%Y%m%d')}.csv",
            mime="text/csv",
        )
    with col2:
        with st.form("delete_reading"):
            reading_id = st.selectbox("Reading", options=[r.id for r in readings])
            if st.form_submit_button("Delete reading", icon=":material/delete:"):
                try:
                    deleted = tracker.delete(int(reading_id))
                except ReadingNotFoundError as e:
                    st.error(str(e))
                else:
                    st.success(f"Deleted reading {reading_id}: {deleted}")
                    st.rerun()

    # Blood Pressure Chart
    st.markdown("---")
    st.subheader("Blood Pressure Trend")

    df_melted = df.melt(
        id_vars=["timestamp"],
        value_vars=["systolic", "diastolic"],
        var_name="Metric",
        value_name="Value",
    )
    df_melted["Metric"] = df_melted["Metric"].str.title()

    fig = px.line(
        df_melted.sort_values("timestamp"),
        x="timestamp",
        y="Value",
        color="Metric",
        color_discrete_map={
            "Systolic": "#dc3545",
            "Diastolic": "#3498db",
        },
        markers=True,
    )

    # Add reference lines
    fig.add_hline(y=140, line_dash="dash", line_color="orange", annotation_text="Stage 2 SYS")
    fig.add_hline(y=90, line_dash="dash", line_color="orange", annotation_text="Stage 2 DIA")
    fig.add_hline(y=120, line_dash="dot", line_color="green", annotation_text="Normal SYS")
    fig.add_hline(y=80, line_dash="dot", line_color="green", annotation_text="Normal DIA")

    fig.update_layout(
        xaxis_title="Date",
        yaxis_title="mmHg",
        hovermode="x unified",
        legend={"yanchor": "top", "y": 0.99, "xanchor": "left", "x": 0.01},
        margin={"t": 20},
    )
    st.plotly_chart(fig, use_container_width=True)

    # Pulse Chart
    st.subheader("Heart Rate Trend")
    fig_pulse = px.area(
        df.sort_values("timestamp"),
        x="timestamp",
        y="pulse",
        color_discrete_sequence=["#9b59b6"],
    )
    fig_pulse.add_hline(y=100, line_dash="dash", line_color="orange", annotation_text="High")
    fig_pulse.add_hline(y=60, line_dash="dash", line_color="blue", annotation_text="Low")
    fig_pulse.update_layout(
        xaxis_title="Date",
        yaxis_title="BPM",
        hovermode="x unified",
        margin={"t": 20},
    )
    st.plotly_chart(fig_pulse, use_container_width=True)

    # Category distribution, most severe at top
    st.markdown("---")
    st.subheader("Reading Categories")
    counts = df["classification"].replace("", "Unknown").value_counts()
    order = [label for label in reversed(CATEGORY_COLORS) if label in counts]
    order += [label for label in counts.index if label not in order]

    fig_cat = go.Figure()
    fig_cat.add_trace(
        go.Bar(
            x=[int(counts[label]) for label in order],
            y=order,
            orientation="h",
            marker_color=[CATEGORY_COLORS.get(label, "#6c757d") for label in order],
            text=[int(counts[label]) for label in order],
            textposition="inside",
            insidetextanchor="middle",
            texttemplate="<b>%{text}</b>",
        )
    )
    fig_cat.update_layout(
        xaxis_title="Count",
        yaxis_title="",
        margin={"t": 20, "l": 10},
        showlegend=False,
    )
    st.plotly_chart(fig_cat, use_container_width=True)


if __name__ == "__main__":
    main()
