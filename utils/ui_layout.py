"""Reusable layout helpers for Streamlit pages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

import streamlit as st
from streamlit.delta_generator import DeltaGenerator

from utils.ui_state import get_data_dir

NavRenderer = Callable[[], None]


@dataclass(frozen=True)
class _NavigationLink:
    label: str
    target: str
    help_text: Optional[str] = None


_NAV_LINKS = (
    _NavigationLink("Overview", "app.py", "Study summary and data status."),
    _NavigationLink("Scenario comparison", "pages/01_Scenario_Comparison.py", "Porto vs Berlin yearly results."),
    _NavigationLink("Pareto front", "pages/02_Pareto_Front.py", "NSGA-II designs with filters."),
    _NavigationLink("PV orientation", "pages/03_PV_Orientation.py", "Azimuth/slope grid search."),
)


def _render_navigation_block(container: DeltaGenerator) -> None:
    """Render standardized navigation links for the workspace."""

    container.markdown("#### Navigate")
    for link in _NAV_LINKS:
        container.page_link(link.target, label=link.label, help=link.help_text)


def _render_status_block(container: DeltaGenerator) -> None:
    """Show where resources are read from."""

    data_dir = get_data_dir()
    container.markdown("#### Data")
    container.caption(f"Data directory: `{data_dir}`")
    if not data_dir.exists():
        container.caption("Directory not found; charts will show placeholders until it is populated.")


def init_page_layout(
    *,
    page_title: str,
    main_title: str,
    description: Optional[str] = None,
) -> NavRenderer:
    """Initialize the page layout with shared navigation and status blocks.

    The helper sets ``st.set_page_config`` immediately, reserves a header slot at
    the top of the page, and returns a renderer that fills it in.
    """

    st.set_page_config(page_title=page_title, layout="wide")
    header_container = st.container()

    def _render() -> None:
        with header_container:
            st.title(main_title)
            if description:
                st.caption(description)

            nav_col, status_col = st.columns([3, 2])
            _render_navigation_block(nav_col)
            _render_status_block(status_col)

        st.divider()

    return _render
