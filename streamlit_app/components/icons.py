"""Font Awesome icons helper for Streamlit."""

from __future__ import annotations

import streamlit as st

from bp_tracker.classification import BPCategory, category_from_label

# Font Awesome CSS - load once per page
FA_CSS = """
<link rel="stylesheet" href="https://cdnjs.cloudflare.com/ajax/libs/font-awesome/6.5.1/css/all.min.css">
<style>
.fa-icon { font-size: 1em; }
.fa-icon-lg { font-size: 1.2em; }
.fa-icon-success { color: #28a745; }
.fa-icon-danger { color: #dc3545; }
.fa-icon-warning { color: #ffc107; }
.fa-icon-info { color: #17a2b8; }
.fa-icon-muted { color: #6c757d; }
</style>
"""


def load_fontawesome() -> None:
    """Load Font Awesome CSS. Call once per page."""
    st.markdown(FA_CSS, unsafe_allow_html=True)


def icon(name: str, color: str = "", size: str = "") -> str:
    """Generate Font Awesome icon HTML.

    Args:
        name: Icon name without 'fa-' prefix (e.g., 'check', 'heart-pulse')
        color: Color class: success, danger, warning, info, muted
        size: Size class: lg for larger

    Returns:
        HTML string for the icon
    """
    classes = ["fa-solid", f"fa-{name}", "fa-icon"]
    if size:
        classes.append(f"fa-icon-{size}")
    if color:
        classes.append(f"fa-icon-{color}")
    return f'<i class="{" ".join(classes)}"></i>'


# Pre-defined icons
ICONS = {
    "heart": icon("heart-pulse", "danger"),
    "calendar": icon("calendar-days", "warning"),
    "table": icon("table", "warning"),
}

CATEGORY_ICONS = {
    BPCategory.NORMAL: icon("circle", "success"),
    BPCategory.ELEVATED: icon("circle", "warning"),
    BPCategory.STAGE_1: icon("circle-exclamation", "warning"),
    BPCategory.STAGE_2: icon("circle-exclamation", "danger"),
    BPCategory.CRISIS: icon("circle-radiation", "danger"),
}

# Chart colors by category label, mildest first
CATEGORY_COLORS = {
    BPCategory.NORMAL.label: "#28a745",
    BPCategory.ELEVATED.label: "#8bc34a",
    BPCategory.STAGE_1.label: "#ffc107",
    BPCategory.STAGE_2.label: "#dc3545",
    BPCategory.CRISIS.label: "#6a1b3d",
}


def get_bp_category_icon(category: BPCategory | str) -> str:
    """Get icon for a blood pressure category or its label."""
    if isinstance(category, str):
        category = category_from_label(category)  # type: ignore[assignment]
    return CATEGORY_ICONS.get(category, icon("circle-question", "muted"))  # type: ignore[arg-type]
