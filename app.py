"""Unit Design Planner — Streamlit entry point."""

import streamlit as st
import sys
import os

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from components.sidebar import render_sidebar
from config.defaults import LOG_JSON, LOG_LEVEL
from config.logging_config import setup_logging
from data.session_store import initialize_session_state
from tabs import (
    tab_inventory,
    tab_visual_selection,
    tab_range_selection,
)


@st.cache_resource
def _configure_logging():
    setup_logging(LOG_LEVEL, json_output=LOG_JSON)
    return True


def main():
    st.set_page_config(
        page_title="Unit Design Planner",
        page_icon="🏢",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    _configure_logging()
    initialize_session_state()
    sidebar_state = render_sidebar()

    tab1, tab2, tab3 = st.tabs([
        "🏗️ Inventory",
        "🖱️ Visual Selection",
        "📐 Range Selection",
    ])

    with tab1:
        tab_inventory.render(sidebar_state)
    with tab2:
        tab_visual_selection.render(sidebar_state)
    with tab3:
        tab_range_selection.render(sidebar_state)


if __name__ == "__main__":
    main()
