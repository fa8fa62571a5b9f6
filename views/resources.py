"""Static resources: methodological guides, methodology, annexes and contact."""
from __future__ import annotations

from dataclasses import dataclass

import streamlit as st

from config import settings
from services.documents import spreadsheet_template_bytes
from ui.streamlit_compat import use_container_width_kwargs

from .accounting import TEMPLATE_FILENAME, XLSX_MIME


@dataclass(frozen=True)
class GuideStep:
    title: str
    status: str
    description: str
    details: tuple[str, ...]


@dataclass(frozen=True)
class Guide:
    title: str
    summary: str
    length: str
    steps: tuple[GuideStep, ...] = ()


STEP_STATUS_ICONS = {"complete": "✅", "progress": "🔄", "pending": "⏳"}

GUIDES: tuple[Guide, ...] = (
    Guide(
        "Guide de création",
        "Processus complet étape par étape pour créer votre école de production.",
        "8 étapes • 45 min",
        (
            GuideStep(
                "Étape 1 : Définition du projet",
                "complete",
                "Clarifiez votre vision, vos objectifs et votre public cible. Identifiez les filières professionnelles à développer.",
                (
                    "Analyse du territoire et des besoins économiques",
                    "Définition des métiers et compétences à enseigner",
                    "Étude de la concurrence et du positionnement",
                ),
            ),
            GuideStep(
                "Étape 2 : Étude de marché",
                "progress",
                "Analysez l'environnement économique local et validez le besoin pour votre école.",
                (
                    "Enquête auprès des entreprises locales",
                    "Analyse des besoins en compétences",
                    "Étude de la demande de formation",
                ),
            ),
            GuideStep(
                "Étape 3 : Business plan",
                "pending",
                "Élaborez un plan d'affaires détaillé avec projections financières.",
                (
                    "Modèle économique et financier",
                    "Plan de financement pluriannuel",
                    "Stratégie de développement",
                ),
            ),
        ),
    ),
    Guide(
        "Aspects juridiques",
        "Guide des démarches administratives et du cadre réglementaire.",
        "5 étapes • 30 min",
    ),
    Guide(
        "Partenariats",
        "Stratégies pour développer des partenariats avec les entreprises locales.",
        "6 étapes • 25 min",
    ),
)

METHODOLOGY_AXES: tuple[tuple[str, str], ...] = (
    ("1. Diagnostic initial", "Évaluation des capacités du porteur de projet et de la maturité du projet."),
    ("2. Accompagnement structuré", "Guidance méthodologique avec outils adaptés et suivi personnalisé."),
    ("3. Pilotage continu", "Mise en place d'indicateurs de performance et d'outils de suivi."),
)

ANNEXES: tuple[tuple[str, str], ...] = (
    ("Cadre réglementaire", "Textes officiels et réglementation des écoles de production."),
    ("Modèles financiers", "Templates Excel pour business plan et projections financières."),
    ("Études de cas", "Exemples concrets de créations d'écoles de production."),
)


def render_guides() -> None:
    st.subheader("📖 Guides méthodologiques")
    columns = st.columns(len(GUIDES))
    for column, guide in zip(columns, GUIDES):
        with column:
            with st.container(border=True):
                st.markdown(f"**{guide.title}**")
                st.write(guide.summary)
                st.caption(guide.length)
    for guide in GUIDES:
        if not guide.steps:
            continue
        st.markdown(f"#### {guide.title} d'école de production")
        for step in guide.steps:
            with st.expander(f"{STEP_STATUS_ICONS[step.status]} {step.title}"):
                st.write(step.description)
                st.markdown("\n".join(f"- {detail}" for detail in step.details))


def render_methodology() -> None:
    st.subheader("🧭 Méthodologie")
    st.write("La méthodologie développée dans ce mémoire s'articule autour de trois axes principaux :")
    for title, body in METHODOLOGY_AXES:
        st.markdown(f"**{title}**")
        st.write(body)


def render_annexes() -> None:
    st.subheader("📎 Annexes")
    for title, description in ANNEXES:
        with st.container(border=True):
            st.markdown(f"**{title}**")
            st.caption(description)
            if title == "Modèles financiers":
                st.download_button(
                    "📥 Télécharger le modèle Excel",
                    data=spreadsheet_template_bytes(),
                    file_name=TEMPLATE_FILENAME,
                    mime=XLSX_MIME,
                    key="annex_template_download",
                    **use_container_width_kwargs(st.download_button),
                )
            else:
                st.info("Document disponible sur demande auprès de l'auteur du mémoire.")


def render_contact() -> None:
    st.subheader("✉️ Contact")
    left, right = st.columns(2)
    with left:
        with st.container(border=True):
            st.markdown("**Auteur du mémoire**")
            st.write("Candidat(e) au Diplôme d'Expertise Comptable")
            st.markdown(f"[{settings.CONTACT_EMAIL}](mailto:{settings.CONTACT_EMAIL})")
    with right:
        with st.container(border=True):
            st.markdown("**Support technique**")
            st.write("Pour toute question sur l'utilisation des outils, écrivez à l'adresse ci-contre.")


def render_resources_page() -> None:
    guides_tab, methodology_tab, annexes_tab, contact_tab = st.tabs(
        ["Guides", "Méthodologie", "Annexes", "Contact"]
    )
    with guides_tab:
        render_guides()
    with methodology_tab:
        render_methodology()
    with annexes_tab:
        render_annexes()
    with contact_tab:
        render_contact()


__all__ = [
    "ANNEXES",
    "GUIDES",
    "METHODOLOGY_AXES",
    "render_annexes",
    "render_contact",
    "render_guides",
    "render_methodology",
    "render_resources_page",
]
