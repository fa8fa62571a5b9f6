"""Tools hub listing the available and announced tools."""
from __future__ import annotations

import streamlit as st

from services.questionnaire import FlowStatus, QuestionnaireFlow
from state import get_workspace
from ui.navigation import PLANNED_TOOLS, Page, open_planned_tool

from .home import Shortcut, render_shortcut_grid

NETWORK_MAP_URL = "https://www.ecoles-de-production.com/le-reseau-des-ecoles/"

QUESTIONNAIRE_STATUS_LABELS = {
    FlowStatus.NOT_STARTED: "Non commencé",
    FlowStatus.IN_PROGRESS: "En cours",
    FlowStatus.COMPLETED: "Terminé",
}

TOOL_SHORTCUTS: tuple[Shortcut, ...] = (
    Shortcut(Page.QUESTIONNAIRE, "Arbre de décision", "Évaluez votre préparation en 20 questions ciblées pour identifier les points d'amélioration."),
    Shortcut(Page.STATUTES, "Création de statuts", "Générez automatiquement les statuts de votre association avec un formulaire simple."),
    Shortcut(Page.LOCATION, "Analyse territoriale", "Comparez l'attractivité des territoires envisagés pour l'implantation."),
    Shortcut(Page.ACCOUNTING, "Outils de l'expert-comptable", "Plan comptable, coefficient de déduction de TVA et résultat fiscal."),
)


def render_tools_page() -> None:
    flow = QuestionnaireFlow(get_workspace().questionnaire.load())
    st.subheader("🧰 Outils d'évaluation")
    st.caption(f"Arbre de décision : {QUESTIONNAIRE_STATUS_LABELS[flow.status]}")
    render_shortcut_grid(TOOL_SHORTCUTS, columns=2, key_prefix="tools")
    st.link_button("🗺️ Cartographie du réseau des écoles de production", NETWORK_MAP_URL)

    st.divider()
    st.subheader("🚧 Outils annoncés")
    st.caption("Ces outils seront disponibles dans une prochaine version.")
    columns = st.columns(3)
    for index, title in enumerate(PLANNED_TOOLS):
        with columns[index % 3]:
            if st.button(title, key=f"planned_tool_{index}"):
                open_planned_tool(title)


__all__ = ["NETWORK_MAP_URL", "TOOL_SHORTCUTS", "render_tools_page"]
