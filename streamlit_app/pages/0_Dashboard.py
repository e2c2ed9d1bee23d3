"""BP Tracker - Streamlit Web UI.

Dashboard with the three-measurement form and current statistics.

Usage:
    pdm run streamlit run streamlit_app/app.py
"""

from __future__ import annotations

import sys
from pathlib import Path

import streamlit as st

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from bp_tracker.main import BloodPressureTracker, load_config  # noqa: E402
from bp_tracker.models import ReadingInput, Stats, WindowAverage  # noqa: E402
from bp_tracker.validation import ValidationFailure  # noqa: E402
from streamlit_app.components.icons import (  # noqa: E402
    ICONS,
    get_bp_category_icon,
    load_fontawesome,
)
from streamlit_app.components.version import show_version_footer  # noqa: E402

# Load Font Awesome
load_fontawesome()

# Initialize session state
if "tracker" not in st.session_state:
    config = load_config(str(project_root / "config" / "config.yaml"))
    st.session_state.tracker = BloodPressureTracker.from_config(config)


def get_tracker() -> BloodPressureTracker:
    """Get tracker instance from session state."""
    tracker: BloodPressureTracker = st.session_state.tracker
    return tracker


def show_window(title: str, window: WindowAverage) -> None:
    """Show one averaging window."""
    st.subheader(title)
    if window.is_empty:
        st.write("No data")
        return
    avg = window.average
    st.metric("Blood Pressure", f"{avg.systolic}/{avg.diastolic} mmHg")
    st.metric("Pulse", f"{avg.pulse} bpm")
    st.caption(f"{window.count} reading{'s' if window.count != 1 else ''}")


def show_stats(stats: Stats) -> None:
    """Show last reading and window averages."""
    col1, col2, col3, col4 = st.columns(4)

    with col1:
        st.subheader("Last Reading")
        last = stats.last_reading
        if last:
            formatted_date = last.timestamp.strftime("%d %b %Y, %H:%M")
            st.markdown(f"{ICONS['calendar']} **Date:** {formatted_date}", unsafe_allow_html=True)
            st.metric("Blood Pressure", f"{last.systolic}/{last.diastolic} mmHg")
            st.metric("Pulse", f"{last.pulse} bpm")
            st.markdown(
                f"{get_bp_category_icon(last.classification)} {last.classification}",
                unsafe_allow_html=True,
            )
        else:
            st.write("No readings yet.")

    with col2:
        show_window("7-Day Average", stats.seven_day)
    with col3:
        show_window("30-Day Average", stats.thirty_day)
    with col4:
        show_window("All-Time Average", stats.all_time)


def reading_form() -> ReadingInput | None:
    """Render the submission form.

    Returns:
        ReadingInput when the form was submitted, otherwise None
    """
    with st.form("new_reading", clear_on_submit=False):
        payload: dict[str, object] = {}
        for n in (1, 2, 3):
            st.markdown(f"**Reading {n}**")
            col1, col2, col3 = st.columns(3)
            with col1:
                payload[f"systolic{n}"] = st.number_input(
                    "Systolic", value=120, step=1, key=f"systolic{n}"
                )
            with col2:
                payload[f"diastolic{n}"] = st.number_input(
                    "Diastolic", value=80, step=1, key=f"diastolic{n}"
                )
            with col3:
                payload[f"pulse{n}"] = st.number_input("Pulse", value=70, step=1, key=f"pulse{n}")

        payload["timestamp"] = st.text_input(
            "Timestamp (optional)",
            placeholder="YYYY-MM-DD HH:MM:SS",
            help="Leave empty to use the current time",
        )
        submitted = st.form_submit_button("Save Reading")

    if not submitted:
        return None
    return ReadingInput.from_dict(payload)


def main() -> None:
    """Main application."""
    st.markdown(f"# {ICONS['heart']} Dashboard", unsafe_allow_html=True)
    st.markdown("---")

    tracker = get_tracker()

    with st.sidebar:
        st.markdown(
            "Take three readings one to two minutes apart and enter them below. "
            "The three readings must agree within 15 mmHg."
        )
        st.markdown("---")
        show_version_footer()

    submission = reading_form()
    if submission is not None:
        try:
            result = tracker.submit(submission)
        except ValidationFailure as e:
            st.error("Validation errors")
            for violation in e.violations:
                st.markdown(f"- **{violation.field}**: {violation.message}")
        else:
            reading = result.reading
            st.success(f"Saved average {reading.systolic}/{reading.diastolic} mmHg, {reading.pulse} bpm")
            st.markdown(
                f"{get_bp_category_icon(result.category)} **{result.category.label}** "
                f"({result.category.description})",
                unsafe_allow_html=True,
            )
            st.info(result.recommendation)

    st.markdown("---")
    show_stats(tracker.stats())


if __name__ == "__main__":
    main()
