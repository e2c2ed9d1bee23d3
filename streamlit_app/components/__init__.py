"""Streamlit UI components."""

from streamlit_app.components.icons import (
    CATEGORY_COLORS,
    ICONS,
    get_bp_category_icon,
    load_fontawesome,
)
from streamlit_app.components.version import get_version, show_version_footer

__all__ = [
    "CATEGORY_COLORS",
    "ICONS",
    "get_bp_category_icon",
    "get_version",
    "load_fontawesome",
    "show_version_footer",
]
