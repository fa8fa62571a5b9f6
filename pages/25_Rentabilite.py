"""Rentability simulator comparing optimistic, realistic and pessimistic scenarios."""
from __future__ import annotations

import altair as alt
import pandas as pd
import streamlit as st

from calc import compare_scenarios, compute_rentability, margin_status
from config import configure_logging
from formatting import format_euro, format_percent
from models import SCENARIO_LABELS, RentabilityInputs, Scenario
from state import ensure_session_defaults, get_workspace
from theme import THEME_COLORS, inject_theme
from ui.chrome import render_app_footer, render_app_header, require_login
from ui.components import MetricCard, render_callout, render_metric_cards
from ui.navigation import Page, render_global_navigation, render_workflow_banner
from ui.streamlit_compat import use_container_width_kwargs

REVENUE_FIELDS: tuple[tuple[str, str], ...] = (
    ("tuition_fee", "Frais de scolarité par étudiant (€)"),
    ("subsidies", "Subventions publiques (€)"),
    ("other_revenue", "Autres revenus (€)"),
)
EXPENSE_FIELDS: tuple[tuple[str, str], ...] = (
    ("salaries", "Salaires et charges sociales (€)"),
    ("facility_rent", "Loyer/charges locaux (€)"),
    ("equipment", "Équipements/maintenance (€)"),
    ("utilities", "Énergie/communications (€)"),
    ("insurance", "Assurances (€)"),
    ("other_expenses", "Autres charges (€)"),
)
SCENARIO_COLORS = {
    Scenario.OPTIMISTIC: THEME_COLORS["chart_optimistic"],
    Scenario.REALISTIC: THEME_COLORS["chart_realistic"],
    Scenario.PESSIMISTIC: THEME_COLORS["chart_pessimistic"],
}

st.set_page_config(
    page_title="Écoles de Production｜Rentabilité",
    page_icon="📈",
    layout="wide",
)

configure_logging()
inject_theme()
ensure_session_defaults()
require_login()
render_global_navigation(Page.RENTABILITY)
render_app_header(title="📈 Simulateur de rentabilité")
render_workflow_banner(Page.RENTABILITY)

repository = get_workspace().rentability
inputs = repository.load()

inputs_col, results_col = st.columns([1, 1])
with inputs_col:
    with st.form("rentability_form"):
        st.markdown("**Revenus**")
        students = st.number_input("Nombre d'étudiants", min_value=0, step=1, value=inputs.students)
        values = {
            field: st.number_input(label, min_value=0, step=500, value=int(getattr(inputs, field)))
            for field, label in REVENUE_FIELDS
        }
        st.markdown("**Charges**")
        values.update(
            {
                field: st.number_input(label, min_value=0, step=500, value=int(getattr(inputs, field)))
                for field, label in EXPENSE_FIELDS
            }
        )
        submitted = st.form_submit_button("💾 Enregistrer les hypothèses", type="primary")
    if submitted:
        inputs = repository.save(RentabilityInputs(students=students, scenario=inputs.scenario, **values))
        st.success("Hypothèses de rentabilité enregistrées.")

with results_col:
    st.markdown("**Scénarios**")
    scenarios = list(Scenario)
    selected = st.radio(
        "Scénario",
        scenarios,
        index=scenarios.index(inputs.scenario),
        format_func=lambda scenario: f"{SCENARIO_LABELS[scenario][0]} ({SCENARIO_LABELS[scenario][1]})",
        label_visibility="collapsed",
    )
    if selected != inputs.scenario:
        inputs = repository.save(inputs.model_copy(update={"scenario": selected}))

    metrics = compute_rentability(inputs)
    label, tone = margin_status(metrics.margin)
    render_metric_cards(
        [
            MetricCard(icon="📊", label="Marge bénéficiaire", value=format_percent(metrics.margin), tone=tone,
                       description=label),
            MetricCard(icon="💶", label="Revenus totaux", value=format_euro(metrics.revenue)),
            MetricCard(icon="💸", label="Charges totales", value=format_euro(metrics.expenses)),
            MetricCard(
                icon="🧾",
                label="Résultat net",
                value=format_euro(metrics.profit),
                tone="positive" if metrics.profit >= 0 else "negative",
            ),
            MetricCard(
                icon="🎓",
                label="Coût par étudiant",
                value=format_euro(metrics.cost_per_student),
                footnote=f"Revenu par étudiant : {format_euro(metrics.revenue_per_student)}",
            ),
        ],
        grid_aria_label="Résultats du scénario",
    )
    if metrics.profit < 0:
        render_callout(
            icon="⚠️",
            title="Attention",
            body=(
                "Le projet présente un déficit dans ce scénario. Envisagez d'augmenter les revenus "
                "(subventions, partenariats) ou de réduire les charges."
            ),
            tone="negative",
        )

st.subheader("Comparaison des scénarios")
comparison = compare_scenarios(inputs)
chart_rows = []
for scenario, scenario_metrics in comparison.items():
    for measure, amount in (
        ("Revenus", scenario_metrics.revenue),
        ("Charges", scenario_metrics.expenses),
        ("Résultat", scenario_metrics.profit),
    ):
        chart_rows.append(
            {
                "Scénario": SCENARIO_LABELS[scenario][0],
                "Indicateur": measure,
                "Montant": float(amount),
                "Montant affiché": format_euro(amount),
            }
        )
chart_df = pd.DataFrame(chart_rows)
color_scale = alt.Scale(
    domain=[SCENARIO_LABELS[scenario][0] for scenario in Scenario],
    range=[SCENARIO_COLORS[scenario] for scenario in Scenario],
)
comparison_chart = (
    alt.Chart(chart_df)
    .mark_bar(cornerRadiusEnd=4)
    .encode(
        x=alt.X("Indicateur:N", title=None, sort=["Revenus", "Charges", "Résultat"]),
        xOffset=alt.XOffset("Scénario:N", sort=[SCENARIO_LABELS[scenario][0] for scenario in Scenario]),
        y=alt.Y("Montant:Q", title="Montant (€)", axis=alt.Axis(format=",.0f")),
        color=alt.Color("Scénario:N", scale=color_scale, legend=alt.Legend(title="Scénario")),
        tooltip=[
            alt.Tooltip("Scénario:N"),
            alt.Tooltip("Indicateur:N"),
            alt.Tooltip("Montant affiché:N", title="Montant"),
        ],
    )
    .properties(height=280)
)
st.altair_chart(comparison_chart, **use_container_width_kwargs(st.altair_chart))

summary = pd.DataFrame(
    [
        {
            "Scénario": SCENARIO_LABELS[scenario][0],
            "Revenus": format_euro(scenario_metrics.revenue),
            "Charges": format_euro(scenario_metrics.expenses),
            "Résultat": format_euro(scenario_metrics.profit),
            "Marge": format_percent(scenario_metrics.margin),
        }
        for scenario, scenario_metrics in comparison.items()
    ]
)
st.dataframe(summary, hide_index=True, **use_container_width_kwargs(st.dataframe))

render_app_footer()
