"""Subsidy applications: build funding files, follow their status, export PDFs."""
from __future__ import annotations

import logging
from decimal import Decimal

import streamlit as st

from calc import subsidy_stats
from calc.dashboard import SUBSIDY_TONES
from config import configure_logging
from formatting import format_euro, format_number
from models import FUNDING_BODIES, SUBSIDY_STATUS_LABELS, TRAINING_SECTORS, SubsidyApplication, SubsidyStatus
from services.documents import subsidy_pdf
from services.repositories import RecordNotFoundError
from services.security import safe_filename
from state import NEW_RECORD, editing_record, ensure_session_defaults, get_workspace, set_editing_record
from theme import inject_theme
from ui.chrome import render_app_footer, render_app_header, require_login
from ui.components import (
    MetricCard,
    record_heading_html,
    render_metric_cards,
    render_skipped_records_warning,
    status_badge_html,
)
from ui.navigation import Page, render_global_navigation, render_workflow_banner
from ui.streamlit_compat import rerun, use_container_width_kwargs
from validators import collect_error_messages, validate_subsidy

logger = logging.getLogger(__name__)

TOOL = "subsidies"
BUDGET_LABELS = {
    "personnel": "Personnel (€)",
    "equipment": "Équipements (€)",
    "operations": "Fonctionnement (€)",
    "other": "Autres (€)",
}
TEXT_FIELDS: tuple[tuple[str, str, str], ...] = (
    ("organization_name", "Nom de l'organisation", "Association XYZ"),
    ("siret_number", "Numéro SIRET", "12345678901234"),
    ("contact_person", "Personne de contact", "Nom Prénom"),
    ("email", "Email", "contact@ecole.fr"),
    ("phone", "Téléphone", "01 23 45 67 89"),
    ("address", "Adresse", "Adresse postale de l'organisation"),
)
NARRATIVE_FIELDS: tuple[tuple[str, str, str], ...] = (
    ("objectives", "Objectifs du projet", "Objectifs spécifiques, mesurables, atteignables..."),
    ("target_audience", "Public visé", "Jeunes de 15 à 18 ans sans qualification..."),
    ("methodology", "Méthodologie", "Pédagogie du « faire pour apprendre »..."),
    ("partner_organizations", "Organisations partenaires", "Entreprises, collectivités, associations..."),
    ("expected_outcomes", "Résultats attendus", "Impact attendu, bénéficiaires..."),
    ("evaluation_criteria", "Critères d'évaluation", "Indicateurs de suivi et de réussite..."),
    ("sustainability", "Pérennité", "Modèle économique à l'issue du financement..."),
    ("innovation", "Innovation", "Caractère innovant du projet..."),
    ("social_impact", "Impact social", "Contribution au développement local..."),
)

st.set_page_config(
    page_title="Écoles de Production｜Subventions",
    page_icon="💰",
    layout="wide",
)

configure_logging()
inject_theme()
ensure_session_defaults()
require_login()
render_global_navigation(Page.SUBSIDIES)
render_app_header(title="💰 Dossiers de subventions")
render_workflow_banner(Page.SUBSIDIES)

repository = get_workspace().subsidies


def _editor_values(application: SubsidyApplication) -> dict:
    values = {
        "project_title": application.project_title,
        "amount": int(application.amount),
        "funding_body": application.funding_body or None,
        "program_name": application.program_name or None,
        "project_description": application.project_description,
        "expected_students": application.expected_students,
        "project_duration": application.project_duration,
        "start_date": application.start_date,
        "sectors": [sector for sector in application.sectors if sector in TRAINING_SECTORS],
        "status": application.status,
        "submission_date": application.submission_date,
        "response_date": application.response_date,
    }
    values.update({field: getattr(application, field) for field, _, _ in TEXT_FIELDS + NARRATIVE_FIELDS})
    values.update({f"budget_{field}": int(getattr(application.budget, field)) for field in BUDGET_LABELS})
    return values


def _clear_editor(prefix: str) -> None:
    for key in [key for key in st.session_state.keys() if key.startswith(prefix)]:
        del st.session_state[key]
    set_editing_record(TOOL, None)


def _render_editor(record_id: str) -> None:
    prefix = f"subsidy_{record_id}_"
    if record_id == NEW_RECORD:
        current = SubsidyApplication.model_construct(funding_body="", project_title="", amount=Decimal("0"))
    else:
        try:
            current = repository.get(record_id)
        except RecordNotFoundError:
            st.warning("Ce dossier n'existe plus.")
            set_editing_record(TOOL, None)
            return
    for field, value in _editor_values(current).items():
        st.session_state.setdefault(prefix + field, value)
    if st.session_state[prefix + "funding_body"] not in FUNDING_BODIES:
        st.session_state[prefix + "funding_body"] = None

    with st.container(border=True):
        st.markdown("#### Nouveau dossier" if record_id == NEW_RECORD else f"#### Modifier {current.project_title}")
        title_col, amount_col = st.columns([2, 1])
        with title_col:
            st.text_input("Titre du projet *", placeholder="École de Production XYZ", key=prefix + "project_title")
        with amount_col:
            st.number_input("Montant demandé (€) *", min_value=0, step=1000, key=prefix + "amount")
        body_col, program_col = st.columns(2)
        with body_col:
            st.selectbox(
                "Organisme financeur *",
                list(FUNDING_BODIES),
                placeholder="Choisir un organisme",
                key=prefix + "funding_body",
            )
        programs = list(FUNDING_BODIES.get(st.session_state[prefix + "funding_body"] or "", ()))
        if st.session_state[prefix + "program_name"] not in programs:
            st.session_state[prefix + "program_name"] = None
        with program_col:
            st.selectbox(
                "Programme de financement",
                programs,
                placeholder="Choisir un programme",
                key=prefix + "program_name",
                disabled=not programs,
            )
        st.text_area(
            "Description du projet",
            placeholder="Présentation générale du projet d'école de production...",
            key=prefix + "project_description",
        )
        identity_columns = st.columns(3)
        for index, (field, label, placeholder) in enumerate(TEXT_FIELDS):
            with identity_columns[index % 3]:
                st.text_input(label, placeholder=placeholder, key=prefix + field)
        students_col, duration_col, start_col = st.columns(3)
        with students_col:
            st.number_input("Nombre d'étudiants visés", min_value=0, step=1, key=prefix + "expected_students")
        with duration_col:
            st.number_input("Durée du projet (mois)", min_value=1, step=1, key=prefix + "project_duration")
        with start_col:
            st.date_input("Date de début", format="DD/MM/YYYY", key=prefix + "start_date")
        st.multiselect("Filières concernées", list(TRAINING_SECTORS), key=prefix + "sectors")

        st.markdown("**Budget prévisionnel**")
        budget_columns = st.columns(len(BUDGET_LABELS))
        for column, (field, label) in zip(budget_columns, BUDGET_LABELS.items()):
            with column:
                st.number_input(label, min_value=0, step=500, key=prefix + f"budget_{field}")
        budget_total = sum(st.session_state[prefix + f"budget_{field}"] for field in BUDGET_LABELS)
        st.caption(f"Total du budget : {format_euro(budget_total)}")

        with st.expander("Contenu du dossier", expanded=record_id != NEW_RECORD):
            for field, label, placeholder in NARRATIVE_FIELDS:
                st.text_area(label, placeholder=placeholder, key=prefix + field)

        status_col, submitted_col, response_col = st.columns(3)
        with status_col:
            st.selectbox(
                "Statut", list(SubsidyStatus), format_func=SUBSIDY_STATUS_LABELS.get, key=prefix + "status"
            )
        with submitted_col:
            st.date_input("Date de soumission", format="DD/MM/YYYY", key=prefix + "submission_date")
        with response_col:
            st.date_input("Date de réponse", format="DD/MM/YYYY", key=prefix + "response_date")

        save_col, cancel_col = st.columns(2)
        with save_col:
            save = st.button("💾 Sauvegarder", type="primary", key=prefix + "save", **use_container_width_kwargs(st.button))
        with cancel_col:
            cancel = st.button("Annuler", key=prefix + "cancel", **use_container_width_kwargs(st.button))

    if cancel:
        _clear_editor(prefix)
        rerun()
    if not save:
        return
    values = {field: st.session_state[prefix + field] for field in _editor_values(current)}
    payload = {
        key: value for key, value in values.items() if not key.startswith("budget_")
    }
    payload["funding_body"] = payload["funding_body"] or ""
    payload["program_name"] = payload["program_name"] or ""
    payload["budget"] = {field: values[f"budget_{field}"] for field in BUDGET_LABELS}
    if record_id != NEW_RECORD:
        payload["id"] = record_id
    application, issues = validate_subsidy(payload)
    if issues:
        st.error("Veuillez remplir les champs obligatoires.\n\n" + collect_error_messages(issues))
        return
    try:
        if record_id == NEW_RECORD:
            repository.create(application)
        else:
            repository.update(application)
    except RecordNotFoundError as exc:
        st.error(str(exc))
        return
    _clear_editor(prefix)
    st.toast("Dossier sauvegardé")
    rerun()


applications = repository.list()
render_skipped_records_warning(repository.skipped_records)
stats = subsidy_stats(applications)
render_metric_cards(
    [
        MetricCard(icon="📁", label="Dossiers créés", value=format_number(stats.total)),
        MetricCard(icon="📤", label="Dossiers soumis", value=format_number(stats.submitted), tone="caution"),
        MetricCard(icon="✅", label="Dossiers approuvés", value=format_number(stats.approved), tone="positive"),
        MetricCard(icon="💶", label="Montant total demandé", value=format_euro(stats.total_amount)),
    ],
    grid_aria_label="Synthèse des subventions",
)

editing = editing_record(TOOL)
header_col, action_col = st.columns([4, 1])
with header_col:
    st.subheader("Dossiers de subventions")
with action_col:
    if editing is None and st.button("➕ Nouveau dossier", **use_container_width_kwargs(st.button)):
        set_editing_record(TOOL, NEW_RECORD)
        rerun()

if editing is not None:
    _render_editor(editing)

if not applications:
    st.info('Aucun dossier de subvention créé. Cliquez sur "Nouveau dossier" pour commencer.')

for application in applications:
    with st.container(border=True):
        title_col, pdf_col, edit_col, delete_col = st.columns([5, 1, 1, 1])
        with title_col:
            badge = status_badge_html(
                SUBSIDY_STATUS_LABELS[application.status], SUBSIDY_TONES.get(application.status, "neutral")
            )
            st.markdown(record_heading_html(application.project_title, badge), unsafe_allow_html=True)
            funding = application.funding_body
            if application.program_name:
                funding = f"{funding} - {application.program_name}"
            st.caption(f"{funding} · {format_euro(application.amount)}")
        with pdf_col:
            try:
                pdf_bytes = subsidy_pdf(application)
            except Exception:  # pragma: no cover - UI feedback
                logger.exception("Subsidy PDF generation failed for %s", application.id)
                st.error("PDF indisponible")
            else:
                st.download_button(
                    "📄",
                    data=pdf_bytes,
                    file_name=f"subvention_{safe_filename(application.project_title)}.pdf",
                    mime="application/pdf",
                    key=f"subsidy_pdf_{application.id}",
                    help="Exporter le dossier en PDF",
                )
        with edit_col:
            if st.button("✏️", key=f"subsidy_edit_{application.id}", help="Modifier"):
                set_editing_record(TOOL, application.id)
                rerun()
        with delete_col:
            if st.button("🗑️", key=f"subsidy_delete_{application.id}", help="Supprimer"):
                repository.delete(application.id)
                st.toast("Le dossier de subvention a été supprimé.")
                rerun()
        if application.project_description:
            st.write(application.project_description)
        dates = []
        if application.submission_date:
            dates.append(f"Soumis le {application.submission_date:%d/%m/%Y}")
        if application.response_date:
            dates.append(f"Réponse le {application.response_date:%d/%m/%Y}")
        if dates:
            st.caption(" • ".join(dates))

render_app_footer()
