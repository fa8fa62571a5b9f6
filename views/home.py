"""Landing page: thesis presentation and shortcuts to the main tools."""
from __future__ import annotations

from dataclasses import dataclass

import streamlit as st

from ui.components import render_callout
from ui.navigation import NAVIGATION_ITEMS, Page, switch_to
from ui.streamlit_compat import use_container_width_kwargs

PROBLEM_STATEMENT = (
    "Comment l'expert-comptable peut-il accompagner au mieux un porteur de projet dans la "
    "création d'une école de production ainsi que dans son suivi financier et extra-financier ?"
)


@dataclass(frozen=True)
class Shortcut:
    page: Page
    title: str
    description: str


HOME_SHORTCUTS: tuple[Shortcut, ...] = (
    Shortcut(Page.TOOLS, "Outils d'évaluation", "Questionnaires et arbres de décision pour évaluer la faisabilité de votre projet."),
    Shortcut(Page.CALCULATORS, "Calculateurs financiers", "Outils de calcul pour le business plan et la gestion financière."),
    Shortcut(Page.BUSINESS_PLAN, "Business Plan", "Générateur de business plan structuré avec projections financières automatisées."),
    Shortcut(Page.RENTABILITY, "Simulateur de rentabilité", "Analysez la viabilité économique avec différents scénarios de projection."),
    Shortcut(Page.PARTNERSHIPS, "Suivi des partenariats", "Gérez vos relations avec les entreprises partenaires et opportunités de stages."),
    Shortcut(Page.RESOURCES, "Guides interactifs", "Guides méthodologiques étape par étape pour la création d'école."),
)


def render_shortcut_grid(shortcuts: tuple[Shortcut, ...], *, columns: int = 3, key_prefix: str = "home") -> None:
    grid = st.columns(columns)
    for index, shortcut in enumerate(shortcuts):
        item = NAVIGATION_ITEMS[shortcut.page]
        with grid[index % columns]:
            with st.container(border=True):
                st.markdown(f"#### {item.icon} {shortcut.title}")
                st.write(shortcut.description)
                if st.button(
                    "Ouvrir",
                    key=f"{key_prefix}_shortcut_{shortcut.page.value}",
                    **use_container_width_kwargs(st.button),
                ):
                    switch_to(shortcut.page)


def render_home_page() -> None:
    st.subheader("Accueil")
    st.write(
        "Bienvenue sur le site de présentation du mémoire relatif à l'accompagnement à la création "
        "d'une École de Production par un expert-comptable."
    )
    st.write(
        "Ce site constitue un support à la rédaction du mémoire dans le cadre de l'obtention du "
        "Diplôme d'Expertise Comptable (DEC). Vous y trouverez différents outils, ressources et "
        "illustrations conçus pour faciliter l'accompagnement des porteurs de projet dans la "
        "création et le pilotage d'une école de production."
    )
    render_callout(icon="❓", title="Problématique", body=PROBLEM_STATEMENT)
    render_shortcut_grid(HOME_SHORTCUTS)


__all__ = ["HOME_SHORTCUTS", "Shortcut", "render_home_page", "render_shortcut_grid"]
