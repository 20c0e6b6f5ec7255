"""School Capacity What-If Dashboard — Streamlit entry point."""

import logging
import streamlit as st
import sys
import os

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from components.sidebar import render_sidebar
from data.session_store import initialize_session_state
from config.defaults import LOG_LEVEL
from tabs import (
    tab_map,
    tab_district_impact,
    tab_data_sources,
)


def main():
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    st.set_page_config(
        page_title="School Capacity Planning",
        page_icon="🏫",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    initialize_session_state()
    sidebar_state = render_sidebar()

    tab1, tab2, tab3 = st.tabs([
        "🗺️ Capacity Map",
        "📍 District Impact",
        "⚙️ Data & Sources",
    ])

    with tab1:
        tab_map.render(sidebar_state)
    with tab2:
        tab_district_impact.render(sidebar_state)
    with tab3:
        tab_data_sources.render(sidebar_state)


if __name__ == "__main__":
    main()
