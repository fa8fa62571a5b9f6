"""Business plan generator with a three-year projection and PDF export."""
from __future__ import annotations

import logging

import pandas as pd
import streamlit as st

from calc import breakeven_label, return_on_investment
from config import configure_logging
from formatting import format_euro, format_percent
from models import PROJECTION_YEARS, BusinessPlan, FinancialProjections, YearProjection
from services.documents import business_plan_pdf
from services.security import safe_filename
from state import ensure_session_defaults, get_workspace
from theme import inject_theme
from ui.chrome import render_app_footer, render_app_header, require_login
from ui.components import MetricCard, render_metric_cards
from ui.navigation import Page, render_global_navigation, render_workflow_banner
from ui.streamlit_compat import use_container_width_kwargs

logger = logging.getLogger(__name__)

YEAR_LABELS = {"year1": "Année 1", "year2": "Année 2", "year3": "Année 3"}

st.set_page_config(
    page_title="Écoles de Production｜Business Plan",
    page_icon="📄",
    layout="wide",
)

configure_logging()
inject_theme()
ensure_session_defaults()
require_login()
render_global_navigation(Page.BUSINESS_PLAN)
render_app_header(title="📄 Business Plan")
render_workflow_banner(Page.BUSINESS_PLAN)

repository = get_workspace().business_plan
plan = repository.load()

with st.form("business_plan_form"):
    general_tab, market_tab, financial_tab = st.tabs(
        ["Informations générales", "Analyse de marché", "Projections financières"]
    )
    with general_tab:
        st.markdown("**Informations générales du projet**")
        left, right = st.columns(2)
        with left:
            project_name = st.text_input("Nom du projet", value=plan.project_name, placeholder="École de Production XYZ")
            location = st.text_input("Localisation", value=plan.location, placeholder="Ville, Région")
        with right:
            promoter_name = st.text_input("Nom du porteur de projet", value=plan.promoter_name, placeholder="Votre nom")
            student_capacity = st.number_input(
                "Capacité d'accueil (étudiants)", min_value=0, step=1, value=plan.student_capacity
            )
        target_sectors = st.text_input(
            "Secteurs d'activité ciblés",
            value=plan.target_sectors,
            placeholder="Bâtiment, Industrie, Services...",
        )
    with market_tab:
        st.markdown("**Analyse de marché et stratégie**")
        partnerships = st.text_area(
            "Partenariats entreprises",
            value=plan.partnerships,
            placeholder="Liste des entreprises partenaires et types de collaboration...",
        )
        competition_analysis = st.text_area(
            "Analyse concurrentielle",
            value=plan.competition_analysis,
            placeholder="Autres écoles, centres de formation dans la région...",
        )
        marketing_strategy = st.text_area(
            "Stratégie de communication",
            value=plan.marketing_strategy,
            placeholder="Plan de communication, recrutement des étudiants...",
        )
    with financial_tab:
        st.markdown("**Investissement initial**")
        invest_col, costs_col, revenue_col = st.columns(3)
        with invest_col:
            initial_investment = st.number_input(
                "Investissement initial (€)", min_value=0, step=1000, value=int(plan.initial_investment)
            )
        with costs_col:
            operating_costs = st.number_input(
                "Charges annuelles (€)", min_value=0, step=1000, value=int(plan.operating_costs)
            )
        with revenue_col:
            expected_revenue = st.number_input(
                "Revenus attendus (€)", min_value=0, step=1000, value=int(plan.expected_revenue)
            )
        st.markdown("**Projections sur 3 ans**")
        projections = {}
        for column, year in zip(st.columns(len(PROJECTION_YEARS)), PROJECTION_YEARS):
            current = getattr(plan.financial_projections, year)
            with column:
                st.caption(YEAR_LABELS[year])
                revenue = st.number_input(
                    "Revenus (€)", min_value=0, step=1000, value=int(current.revenue), key=f"bp_{year}_revenue"
                )
                expenses = st.number_input(
                    "Charges (€)", min_value=0, step=1000, value=int(current.expenses), key=f"bp_{year}_expenses"
                )
            projections[year] = YearProjection(revenue=revenue, expenses=expenses)
    submitted = st.form_submit_button("💾 Sauvegarder", type="primary")

if submitted:
    plan = BusinessPlan(
        project_name=project_name,
        promoter_name=promoter_name,
        location=location,
        target_sectors=target_sectors,
        student_capacity=student_capacity,
        initial_investment=initial_investment,
        operating_costs=operating_costs,
        expected_revenue=expected_revenue,
        partnerships=partnerships,
        competition_analysis=competition_analysis,
        marketing_strategy=marketing_strategy,
        financial_projections=FinancialProjections(**projections),
    )
    repository.save(plan)
    st.success("Business plan sauvegardé. Vos données ont été enregistrées.")

st.subheader("Indicateurs clés")
roi = return_on_investment(plan)
year3_profit = plan.financial_projections.year3.profit
render_metric_cards(
    [
        MetricCard(
            icon="📈",
            label="ROI Année 3",
            value=format_percent(roi),
            description="Résultat de l'année 3 rapporté à l'investissement initial",
            tone=None if roi is None else ("positive" if roi > 0 else "negative"),
        ),
        MetricCard(
            icon="⏱️",
            label="Seuil de rentabilité",
            value=breakeven_label(plan),
            description="Années nécessaires pour amortir l'investissement",
        ),
        MetricCard(
            icon="💶",
            label="Résultat année 3",
            value=format_euro(year3_profit),
            tone="positive" if year3_profit >= 0 else "negative",
        ),
    ],
    grid_aria_label="Indicateurs du business plan",
)

projection_table = pd.DataFrame(
    [
        {
            "Année": YEAR_LABELS[year],
            "Revenus": format_euro(projection.revenue),
            "Charges": format_euro(projection.expenses),
            "Résultat": format_euro(projection.profit),
        }
        for year, projection in plan.financial_projections.by_year().items()
    ]
)
st.dataframe(projection_table, hide_index=True, **use_container_width_kwargs(st.dataframe))

try:
    pdf_bytes = business_plan_pdf(plan)
except Exception as exc:  # pragma: no cover - UI feedback
    logger.exception("Business plan PDF generation failed")
    st.error(f"Génération du rapport impossible : {exc}")
else:
    st.download_button(
        "📄 Générer le PDF",
        data=pdf_bytes,
        file_name=f"business_plan_{safe_filename(plan.project_name, default='ecole')}.pdf",
        mime="application/pdf",
    )

render_app_footer()
