"""Page bodies shared by the Streamlit entry points."""

from .accounting import render_accounting_page
from .home import render_home_page
from .resources import render_resources_page
from .tools import render_tools_page
from .under_development import render_under_development_page

__all__ = [
    "render_accounting_page",
    "render_home_page",
    "render_resources_page",
    "render_tools_page",
    "render_under_development_page",
]
