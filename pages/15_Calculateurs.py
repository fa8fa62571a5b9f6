"""Financial calculators hub with the initial budget estimator."""
from __future__ import annotations

import pandas as pd
import streamlit as st

from config import configure_logging
from formatting import format_euro
from models import BudgetInputs
from state import ensure_session_defaults
from theme import inject_theme
from ui.chrome import render_app_footer, render_app_header, require_login
from ui.components import MetricCard, render_metric_cards
from ui.navigation import Page, render_global_navigation, switch_to
from ui.streamlit_compat import use_container_width_kwargs

BUDGET_FIELDS: tuple[tuple[str, str], ...] = (
    ("local_cost", "Locaux et aménagement (€)"),
    ("equipment_cost", "Équipements pédagogiques (€)"),
    ("it_cost", "Matériel informatique (€)"),
    ("startup_cost", "Frais de démarrage (€)"),
)

st.set_page_config(
    page_title="Écoles de Production｜Calculateurs",
    page_icon="🧮",
    layout="wide",
)

configure_logging()
inject_theme()
ensure_session_defaults()
require_login()
render_global_navigation(Page.CALCULATORS)
render_app_header(title="🧮 Calculateurs financiers")

budget_col, rentability_col, plan_col = st.columns(3)
with budget_col:
    with st.container(border=True):
        st.markdown("#### 💶 Calculateur de budget")
        st.write("Estimez le budget initial nécessaire pour créer votre école de production.")
with rentability_col:
    with st.container(border=True):
        st.markdown("#### 📈 Calcul de rentabilité")
        st.write("Analysez la viabilité économique et le retour sur investissement.")
        if st.button("Ouvrir le simulateur", key="calc_open_rentability"):
            switch_to(Page.RENTABILITY)
with plan_col:
    with st.container(border=True):
        st.markdown("#### 📄 Business Plan")
        st.write("Générateur de business plan structuré avec projections financières.")
        if st.button("Ouvrir le générateur", key="calc_open_business_plan"):
            switch_to(Page.BUSINESS_PLAN)

st.subheader("Calculateur de budget initial")
budget: BudgetInputs = st.session_state["budget_inputs"]
inputs_col, result_col = st.columns(2)
with inputs_col:
    st.markdown("**Coûts d'installation**")
    values = {
        field: st.number_input(
            label,
            min_value=0,
            step=1000,
            value=int(getattr(budget, field)),
            key=f"budget_{field}",
        )
        for field, label in BUDGET_FIELDS
    }
budget = BudgetInputs(**values)
st.session_state["budget_inputs"] = budget

with result_col:
    render_metric_cards(
        [
            MetricCard(
                icon="🏗️",
                label="Estimation du budget",
                value=format_euro(budget.total()),
                description="Budget initial estimé",
            )
        ],
        grid_aria_label="Budget initial",
    )
    report = pd.DataFrame(
        [{"Poste": label.replace(" (€)", ""), "Montant (€)": float(getattr(budget, field))} for field, label in BUDGET_FIELDS]
        + [{"Poste": "Total", "Montant (€)": float(budget.total())}]
    )
    st.dataframe(report, hide_index=True, **use_container_width_kwargs(st.dataframe))
    st.download_button(
        "📄 Générer le rapport",
        data=report.to_csv(index=False, sep=";").encode("utf-8-sig"),
        file_name="budget_initial.csv",
        mime="text/csv",
    )

render_app_footer()
