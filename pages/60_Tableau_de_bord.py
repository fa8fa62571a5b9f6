"""Steering dashboard aggregating every tool's stored data."""
from __future__ import annotations

import html

import streamlit as st

from calc import aggregate_dashboard, margin_status
from config import configure_logging
from formatting import format_euro, format_number, format_percent
from state import ensure_session_defaults, get_workspace
from theme import inject_theme
from ui.chrome import render_app_footer, render_app_header, require_login
from ui.components import MetricCard, render_metric_cards, status_badge_html
from ui.navigation import Page, render_global_navigation, render_workflow_banner, switch_to
from ui.streamlit_compat import use_container_width_kwargs

ACTIVITY_ICONS = {"formation": "📚", "partenariat": "🤝", "subvention": "💰"}
QUICK_ACTIONS: tuple[tuple[Page, str, str], ...] = (
    (Page.QUESTIONNAIRE, "Évaluer le projet", "Questionnaire 20 questions"),
    (Page.BUSINESS_PLAN, "Business Plan", "Créer un plan structuré"),
    (Page.PARTNERSHIPS, "Ajouter un partenaire", "Gérer les entreprises"),
    (Page.SUBSIDIES, "Demande de subvention", "Financer le projet"),
)

st.set_page_config(
    page_title="Écoles de Production｜Tableau de bord",
    page_icon="📊",
    layout="wide",
)

configure_logging()
inject_theme()
ensure_session_defaults()
require_login()
render_global_navigation(Page.DASHBOARD)
render_app_header(title="📊 Tableau de bord")
render_workflow_banner(Page.DASHBOARD)

metrics = aggregate_dashboard(get_workspace().dashboard_sources())
margin_label, margin_tone = margin_status(metrics.profit_margin)

st.subheader("Vue d'ensemble")
render_metric_cards(
    [
        MetricCard(icon="🎓", label="Étudiants", value=format_number(metrics.total_students)),
        MetricCard(icon="📚", label="Modules actifs", value=format_number(metrics.active_modules)),
        MetricCard(icon="🤝", label="Partenaires actifs", value=format_number(metrics.active_partnerships)),
        MetricCard(
            icon="💶",
            label="Revenus projetés",
            value=format_euro(metrics.revenue),
            footnote=f"Investissement initial : {format_euro(metrics.total_budget)}",
        ),
    ],
    grid_aria_label="Indicateurs principaux",
)

st.subheader("Indicateurs financiers et pédagogiques")
render_metric_cards(
    [
        MetricCard(
            icon="📈",
            label="Marge bénéficiaire",
            value=format_percent(metrics.profit_margin),
            description=margin_label,
            footnote="Recettes moins coûts pédagogiques",
            tone=margin_tone,
        ),
        MetricCard(
            icon="🧮",
            label="Coût par étudiant",
            value=format_euro(metrics.avg_cost_per_student),
            footnote=f"Coûts pédagogiques : {format_euro(metrics.pedagogical_costs)}",
        ),
        MetricCard(icon="💰", label="Demandes de subventions", value=format_number(metrics.pending_subsidies),
                   description="Dossiers soumis en attente de réponse"),
        MetricCard(icon="🏅", label="Taux de certification", value=format_percent(metrics.certification_rate)),
        MetricCard(icon="✅", label="Modules terminés", value=format_number(metrics.completed_modules)),
        MetricCard(
            icon="👩‍🏫",
            label="Ratio étudiant/formateur",
            value="—" if metrics.students_per_trainer is None else format_number(metrics.students_per_trainer, 1),
        ),
        MetricCard(
            icon="🌳",
            label="Auto-évaluation",
            value=format_percent(metrics.questionnaire_score, 0),
            description="Score du questionnaire" if metrics.questionnaire_score is not None else "Questionnaire non terminé",
        ),
    ],
    grid_aria_label="Indicateurs détaillés",
)

activity_col, actions_col = st.columns([2, 1])
with activity_col:
    st.subheader("Activité récente")
    if not metrics.activities:
        st.info("Aucune activité récente. Commencez à utiliser les outils pour voir vos données ici.")
    for activity in metrics.activities:
        with st.container(border=True):
            st.markdown(
                f"{ACTIVITY_ICONS.get(activity.type, '•')} **{html.escape(activity.title)}** "
                + status_badge_html(activity.status, activity.tone),
                unsafe_allow_html=True,
            )
            st.caption(f"{activity.description} · {activity.date:%d/%m/%Y}")
with actions_col:
    st.subheader("Actions rapides")
    for page, title, description in QUICK_ACTIONS:
        if st.button(f"{title}", key=f"dashboard_action_{page.value}", help=description,
                     **use_container_width_kwargs(st.button)):
            switch_to(page)

render_app_footer()
