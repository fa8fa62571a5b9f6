"""Typed page identifiers, sidebar navigation and the project journey banner."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import textwrap
from typing import Dict

import streamlit as st

from ui.streamlit_compat import use_container_width_kwargs


class Page(str, Enum):
    HOME = "accueil"
    TOOLS = "outils"
    QUESTIONNAIRE = "questionnaire"
    CALCULATORS = "calculateurs"
    BUSINESS_PLAN = "business-plan"
    RENTABILITY = "rentabilite"
    LOCATION = "implantation"
    PEDAGOGICAL_COSTS = "couts-pedagogiques"
    PARTNERSHIPS = "partenariats"
    SUBSIDIES = "subventions"
    TRAINING = "formations"
    STATUTES = "statuts"
    DASHBOARD = "tableau-de-bord"
    ACCOUNTING = "expert-comptable"
    RESOURCES = "ressources"
    UNDER_DEVELOPMENT = "en-developpement"
    SETTINGS = "parametres"


@dataclass(frozen=True)
class NavigationItem:
    """Metadata for a sidebar navigation entry."""

    page: Page
    label: str
    icon: str
    description: str
    page_path: str
    section: str
    step_label: str = ""
    include_in_flow: bool = False
    show_in_sidebar: bool = True


SECTION_ORDER: tuple[str, ...] = ("Présentation", "Évaluer", "Créer", "Financer", "Piloter", "Paramètres")


NAVIGATION_ITEMS: Dict[Page, NavigationItem] = {
    Page.HOME: NavigationItem(
        Page.HOME, "Accueil", "🏠", "Présentation du mémoire et accès rapide aux outils.",
        "pages/00_Accueil.py", "Présentation",
    ),
    Page.TOOLS: NavigationItem(
        Page.TOOLS, "Outils d'évaluation", "🧰", "Questionnaire, statuts et outils annoncés.",
        "pages/05_Outils.py", "Présentation",
    ),
    Page.QUESTIONNAIRE: NavigationItem(
        Page.QUESTIONNAIRE, "Arbre de décision", "🌳",
        "Évaluez la maturité du porteur et du projet en 20 questions.",
        "pages/10_Questionnaire.py", "Évaluer", step_label="① Auto-évaluation", include_in_flow=True,
    ),
    Page.CALCULATORS: NavigationItem(
        Page.CALCULATORS, "Budget initial", "🧮", "Estimez le budget nécessaire à l'ouverture.",
        "pages/15_Calculateurs.py", "Financer",
    ),
    Page.BUSINESS_PLAN: NavigationItem(
        Page.BUSINESS_PLAN, "Business plan", "📘", "Projet, projections sur 3 ans, ROI et point mort.",
        "pages/20_Business_Plan.py", "Financer", step_label="③ Business plan", include_in_flow=True,
    ),
    Page.RENTABILITY: NavigationItem(
        Page.RENTABILITY, "Rentabilité", "📈", "Scénarios optimiste, réaliste et pessimiste.",
        "pages/25_Rentabilite.py", "Financer", step_label="④ Rentabilité", include_in_flow=True,
    ),
    Page.LOCATION: NavigationItem(
        Page.LOCATION, "Analyse territoriale", "🗺️", "Score d'attractivité et SWOT des territoires.",
        "pages/30_Implantation.py", "Évaluer", step_label="② Territoire", include_in_flow=True,
    ),
    Page.PEDAGOGICAL_COSTS: NavigationItem(
        Page.PEDAGOGICAL_COSTS, "Coûts pédagogiques", "🎓", "Coût par filière, par élève et par heure.",
        "pages/35_Couts_Pedagogiques.py", "Piloter",
    ),
    Page.PARTNERSHIPS: NavigationItem(
        Page.PARTNERSHIPS, "Partenariats", "🤝", "Suivi des entreprises partenaires.",
        "pages/40_Partenariats.py", "Piloter",
    ),
    Page.SUBSIDIES: NavigationItem(
        Page.SUBSIDIES, "Subventions", "💶", "Préparation et suivi des dossiers de financement.",
        "pages/45_Subventions.py", "Financer", step_label="⑤ Financements", include_in_flow=True,
    ),
    Page.TRAINING: NavigationItem(
        Page.TRAINING, "Plan de formation", "🗓️", "Planification des modules de l'année.",
        "pages/50_Formations.py", "Piloter",
    ),
    Page.STATUTES: NavigationItem(
        Page.STATUTES, "Statuts", "📜", "Génération des statuts d'association loi 1901.",
        "pages/55_Statuts.py", "Créer",
    ),
    Page.DASHBOARD: NavigationItem(
        Page.DASHBOARD, "Tableau de bord", "📊", "Synthèse de tous les outils et activité récente.",
        "pages/60_Tableau_de_bord.py", "Piloter", step_label="⑥ Pilotage", include_in_flow=True,
    ),
    Page.ACCOUNTING: NavigationItem(
        Page.ACCOUNTING, "Expert-comptable", "🧾", "Plan comptable, coefficient de TVA et résultat fiscal.",
        "pages/65_Expert_Comptable.py", "Créer",
    ),
    Page.RESOURCES: NavigationItem(
        Page.RESOURCES, "Ressources", "📚", "Guides, méthodologie, annexes et contact.",
        "pages/70_Ressources.py", "Présentation",
    ),
    Page.UNDER_DEVELOPMENT: NavigationItem(
        Page.UNDER_DEVELOPMENT, "En développement", "🚧", "Outils annoncés, bientôt disponibles.",
        "pages/80_En_developpement.py", "Présentation", show_in_sidebar=False,
    ),
    Page.SETTINGS: NavigationItem(
        Page.SETTINGS, "Paramètres", "⚙️", "Sauvegarde et réinitialisation des données.",
        "pages/90_Parametres.py", "Paramètres",
    ),
}


def check_navigation_coverage() -> None:
    """Every :class:`Page` must have exactly one navigation entry keyed by itself."""

    missing = [page.name for page in Page if page not in NAVIGATION_ITEMS]
    mismatched = [page.name for page, item in NAVIGATION_ITEMS.items() if item.page is not page]
    paths = [item.page_path for item in NAVIGATION_ITEMS.values()]
    if missing or mismatched or len(set(paths)) != len(paths):
        raise RuntimeError(
            f"Navigation incomplete: missing={missing} mismatched={mismatched}"
        )


check_navigation_coverage()

WORKFLOW_ITEMS: tuple[NavigationItem, ...] = tuple(
    sorted(
        (item for item in NAVIGATION_ITEMS.values() if item.include_in_flow),
        key=lambda item: item.step_label,
    )
)

# Announced tools rendered by the "under development" page.
PLANNED_TOOLS: tuple[str, ...] = (
    "Critères pour obtenir le label",
    "Contrat de prêt subordonné",
    "Habilitation taxe apprentissage",
    "Prix de vente des produits",
    "Modèle de rapport adapté",
    "Suivi des subventions",
    "Suivi des prêts",
    "Exemple d'organigramme",
    "Entretiens porteurs de projet",
    "Guide d'application de la TVA",
    "Étude de marché",
)


def switch_to(page: Page) -> None:
    """Navigate to the multipage script registered for *page*."""

    st.switch_page(NAVIGATION_ITEMS[page].page_path)


def open_planned_tool(title: str) -> None:
    st.session_state["under_development_title"] = title
    switch_to(Page.UNDER_DEVELOPMENT)


def render_global_navigation(current: Page) -> None:
    """Render labelled sidebar navigation grouped by section."""

    st.sidebar.markdown(
        "<div class='sidebar-nav__header'>Navigation</div>",
        unsafe_allow_html=True,
    )

    nav_container = st.sidebar.container()
    with nav_container:
        st.markdown("<div class='sidebar-nav' role='navigation'>", unsafe_allow_html=True)
        for section in SECTION_ORDER:
            st.caption(section)
            for item in NAVIGATION_ITEMS.values():
                if item.section != section or not item.show_in_sidebar:
                    continue
                is_active = item.page is current
                clicked = st.button(
                    f"{item.icon} {item.label}",
                    key=f"nav_button_{item.page.value}",
                    help=item.description,
                    **use_container_width_kwargs(st.button),
                    type="primary" if is_active else "secondary",
                    disabled=is_active,
                )
                if clicked and not is_active:
                    switch_to(item.page)
        st.markdown("</div>", unsafe_allow_html=True)

    st.sidebar.caption("Évaluer, financer, créer puis piloter : suivez le parcours de création.")


def render_workflow_banner(current: Page) -> None:
    """Render the project journey banner indicating the current step."""

    if not WORKFLOW_ITEMS:
        return

    current_index = next(
        (idx for idx, item in enumerate(WORKFLOW_ITEMS) if item.page is current),
        None,
    )
    if current_index is None:
        return

    fragments: list[str] = []
    for idx, item in enumerate(WORKFLOW_ITEMS):
        status = "completed" if idx < current_index else "upcoming"
        if idx == current_index:
            status = "current"
        aria_current = " aria-current=\"step\"" if status == "current" else ""
        fragments.append(
            textwrap.dedent(
                """
                <li class='workflow-banner__item workflow-banner__item--{status}'{aria_current}>
                  <span class='workflow-banner__badge'>{badge}</span>
                  <span class='workflow-banner__label-text'>{icon} {label}</span>
                </li>
                """
            ).format(
                status=status,
                aria_current=aria_current,
                badge=f"{idx + 1:02d}",
                icon=item.icon,
                label=item.label,
            )
        )

    if current_index >= len(WORKFLOW_ITEMS) - 1:
        next_step_text = "Parcours terminé"
    else:
        next_step_text = WORKFLOW_ITEMS[current_index + 1].label

    banner_html = textwrap.dedent(
        """
        <section class='workflow-banner' aria-label='Parcours de création'>
          <ol class='workflow-banner__list'>
            {items}
          </ol>
          <div class='workflow-banner__meta'>Étape suivante : {next_step}</div>
        </section>
        """
    ).format(items="".join(fragments), next_step=next_step_text)

    st.markdown(banner_html, unsafe_allow_html=True)


__all__ = [
    "NAVIGATION_ITEMS",
    "NavigationItem",
    "PLANNED_TOOLS",
    "Page",
    "SECTION_ORDER",
    "WORKFLOW_ITEMS",
    "check_navigation_coverage",
    "open_planned_tool",
    "render_global_navigation",
    "render_workflow_banner",
    "switch_to",
]
