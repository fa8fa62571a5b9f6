"""Streamlit entry point – forwards to the shared home page renderer."""
from __future__ import annotations

import streamlit as st

from config import configure_logging
from state import ensure_session_defaults
from theme import inject_theme
from ui.chrome import APP_TITLE, render_app_footer, render_app_header, require_login
from ui.navigation import Page, render_global_navigation
from views import render_home_page

st.set_page_config(
    page_title=APP_TITLE,
    page_icon="🏭",
    layout="wide",
)

configure_logging()
inject_theme()
ensure_session_defaults()
require_login()
render_global_navigation(Page.HOME)
render_app_header(title=f"🏭 {APP_TITLE}")
render_home_page()
render_app_footer()
