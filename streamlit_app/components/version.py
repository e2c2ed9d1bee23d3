"""Version helper for Streamlit UI."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import streamlit as st


@lru_cache(maxsize=1)
def get_version() -> str:
    """Get version from pyproject.toml.

    Returns:
        Version string (e.g., '0.1.0')
    """
    pyproject_paths = [
        Path(__file__).parent.parent.parent / "pyproject.toml",  # streamlit_app/components -> root
        Path("pyproject.toml"),  # Current directory
    ]

    for pyproject_path in pyproject_paths:
        if not pyproject_path.exists():
            continue
        for line in pyproject_path.read_text().splitlines():
            if line.startswith("version = "):
                # Extract version from: version = "0.1.0"
                return line.split("=")[1].strip().strip('"').strip("'")

    return "unknown"


def show_version_footer() -> None:
    """Display version footer in Streamlit sidebar."""
    st.caption(f"BP Tracker v{get_version()}")
