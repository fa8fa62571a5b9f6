"""Tools hub: available and announced tools."""
from __future__ import annotations

import streamlit as st

from config import configure_logging
from state import ensure_session_defaults
from theme import inject_theme
from ui.chrome import render_app_footer, render_app_header, require_login
from ui.navigation import Page, render_global_navigation
from views import render_tools_page

st.set_page_config(
    page_title="Écoles de Production｜Outils",
    page_icon="🧰",
    layout="wide",
)

configure_logging()
inject_theme()
ensure_session_defaults()
require_login()
render_global_navigation(Page.TOOLS)
render_app_header(title="🧰 Outils")
render_tools_page()
render_app_footer()
