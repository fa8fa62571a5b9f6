"""Placeholder shown for the announced tools that are not built yet."""
from __future__ import annotations

import streamlit as st

from ui.components import render_callout
from ui.navigation import Page, switch_to

DEFAULT_TITLE = "Page en cours de développement"


def render_under_development_page(title: str | None = None) -> None:
    st.subheader(f"🚧 {title or DEFAULT_TITLE}")
    st.write(
        "Cette fonctionnalité est actuellement en cours de développement. "
        "Elle sera bientôt disponible dans une prochaine version."
    )
    render_callout(
        icon="💡",
        title="Suggestion",
        body="Explorez les autres outils disponibles en attendant la mise en ligne de cette page.",
    )
    if st.button("← Retour aux outils"):
        switch_to(Page.TOOLS)


__all__ = ["DEFAULT_TITLE", "render_under_development_page"]
