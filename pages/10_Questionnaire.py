"""Decision tree: the 20-question self-assessment of the project holder."""
from __future__ import annotations

import time

import streamlit as st

from config import configure_logging, settings
from formatting import format_percent
from models import QUESTION_COUNT, SECTION_HEADINGS, Answer
from services.documents import questionnaire_pdf
from services.questionnaire import FlowStatus, QuestionnaireFlow
from state import ensure_session_defaults, get_workspace
from theme import inject_theme
from ui.chrome import render_app_footer, render_app_header, require_login
from ui.components import MetricCard, render_callout, render_metric_cards
from ui.navigation import Page, render_global_navigation, render_workflow_banner, switch_to
from ui.streamlit_compat import rerun, use_container_width_kwargs

st.set_page_config(
    page_title="Écoles de Production｜Arbre de décision",
    page_icon="🌳",
    layout="wide",
)

configure_logging()
inject_theme()
ensure_session_defaults()
require_login()
render_global_navigation(Page.QUESTIONNAIRE)
render_app_header(title="🌳 Arbre de décision")
render_workflow_banner(Page.QUESTIONNAIRE)

repository = get_workspace().questionnaire
flow = QuestionnaireFlow(repository.load(), st.session_state.get("questionnaire_pending_advice"))


def _commit() -> None:
    repository.save(flow.state)
    st.session_state["questionnaire_pending_advice"] = flow.pending_advice
    rerun()


st.write(
    "20 questions pour évaluer votre projet d'école de production et identifier les axes d'amélioration."
)

if flow.status is FlowStatus.COMPLETED:
    status_text = "Questionnaire terminé ✅"
elif flow.status is FlowStatus.IN_PROGRESS:
    status_text = f"Question {flow.state.current_index + 1} sur {QUESTION_COUNT}"
else:
    status_text = "Prêt à commencer"
st.progress(int(flow.progress()), text=status_text)

if flow.status is FlowStatus.NOT_STARTED:
    if st.button("▶️ Lancer le questionnaire", type="primary"):
        flow.start()
        _commit()

elif flow.status is FlowStatus.IN_PROGRESS:
    index = flow.state.current_index
    if index in SECTION_HEADINGS:
        st.markdown(f"### {SECTION_HEADINGS[index]}")
    with st.container(border=True):
        st.markdown(f"**{index + 1}. {flow.current_question.text}**")
        recorded = flow.state.answers[index] if index < len(flow.state.answers) else None
        if recorded is not None:
            st.caption(f"Réponse enregistrée : {recorded.value}")
        yes_col, no_col, back_col = st.columns(3)
        answering_blocked = flow.pending_advice is not None
        with yes_col:
            if st.button("✅ OUI", disabled=answering_blocked, **use_container_width_kwargs(st.button)):
                flow.answer(Answer.OUI)
                _commit()
        with no_col:
            if st.button("❌ NON", disabled=answering_blocked, **use_container_width_kwargs(st.button)):
                flow.answer(Answer.NON)
                _commit()
        with back_col:
            if st.button("← Précédent", disabled=index == 0, **use_container_width_kwargs(st.button)):
                flow.previous()
                _commit()

    if flow.advice:
        render_callout(icon="💡", title="Conseil", body=flow.advice, tone="caution")
        time.sleep(settings.ADVICE_DELAY_SECONDS)
        flow.confirm_advance()
        _commit()

else:
    report = flow.report()
    st.subheader("📊 Résultats de l'évaluation")
    render_metric_cards(
        [
            MetricCard(icon="🎯", label="Score global", value=format_percent(report.score, 0)),
            MetricCard(icon="🧭", label="Appréciation", value=report.assessment.split(" - ")[0],
                       description=report.assessment),
            MetricCard(
                icon="🛠️",
                label="Points d'amélioration",
                value=str(report.no_count),
                description=f"{report.no_count} points d'amélioration identifiés",
                tone="positive" if report.no_count == 0 else "caution",
            ),
        ],
        grid_aria_label="Résultats du questionnaire",
    )
    back_col, restart_col, export_col = st.columns(3)
    with back_col:
        if st.button("← Retour aux outils", **use_container_width_kwargs(st.button)):
            switch_to(Page.TOOLS)
    with restart_col:
        if st.button("🔄 Recommencer", **use_container_width_kwargs(st.button)):
            flow.restart()
            _commit()
    with export_col:
        try:
            pdf_bytes = questionnaire_pdf(flow.state)
        except Exception as exc:  # pragma: no cover - UI feedback
            st.error(f"Export PDF impossible : {exc}")
        else:
            st.download_button(
                "📄 Exporter PDF",
                data=pdf_bytes,
                file_name="questionnaire_auto_evaluation.pdf",
                mime="application/pdf",
                **use_container_width_kwargs(st.download_button),
            )

render_app_footer()
