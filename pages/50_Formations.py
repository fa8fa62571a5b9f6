"""Training planner: annual training modules, their status and a monthly calendar."""
from __future__ import annotations

import html
from datetime import date

import streamlit as st

from calc import group_modules_by_month, training_stats
from calc.dashboard import MODULE_TONES
from config import configure_logging
from formatting import format_number
from models import (
    CERTIFICATION_TYPES,
    MODULE_STATUS_LABELS,
    TRAINING_SECTORS,
    ModuleStatus,
    TrainingModule,
)
from services.repositories import RecordNotFoundError
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
from ui.navigation import Page, render_global_navigation
from ui.streamlit_compat import rerun, use_container_width_kwargs
from validators import collect_error_messages, validate_training_module

TOOL = "training_modules"

st.set_page_config(
    page_title="Écoles de Production｜Plan de formation",
    page_icon="🗓️",
    layout="wide",
)

configure_logging()
inject_theme()
ensure_session_defaults()
require_login()
render_global_navigation(Page.TRAINING)
render_app_header(title="🗓️ Plan de formation")

workspace = get_workspace()
modules_repository = workspace.training_modules


def _option_index(options: list, value: str) -> int | None:
    return options.index(value) if value in options else None


def _render_editor(record_id: str) -> None:
    current = TrainingModule.model_construct(title="", sector="", start_date=date.today())
    if record_id != NEW_RECORD:
        try:
            current = modules_repository.get(record_id)
        except RecordNotFoundError:
            st.warning("Ce module n'existe plus.")
            set_editing_record(TOOL, None)
            return

    sectors = list(TRAINING_SECTORS)
    certifications = list(CERTIFICATION_TYPES)
    statuses = list(ModuleStatus)
    with st.form(f"training_module_form_{record_id}"):
        st.markdown("#### Nouveau module" if record_id == NEW_RECORD else f"#### Modifier {current.title}")
        title_col, sector_col = st.columns(2)
        with title_col:
            title = st.text_input("Titre du module *", value=current.title, placeholder="Ex: Initiation à la maçonnerie")
        with sector_col:
            sector = st.selectbox(
                "Secteur *", sectors, index=_option_index(sectors, current.sector), placeholder="Choisir un secteur"
            )
        duration_col, start_col, end_col, students_col = st.columns(4)
        with duration_col:
            duration = st.number_input("Durée (heures)", min_value=0, step=1, value=current.duration)
        with start_col:
            start_date = st.date_input("Date de début *", value=current.start_date, format="DD/MM/YYYY")
        with end_col:
            end_date = st.date_input("Date de fin", value=current.end_date, format="DD/MM/YYYY")
        with students_col:
            students = st.number_input("Nb étudiants", min_value=0, step=1, value=current.students)
        instructor_col, certification_col, status_col = st.columns(3)
        with instructor_col:
            instructor = st.text_input("Formateur", value=current.instructor, placeholder="Nom du formateur")
        with certification_col:
            certification = st.selectbox(
                "Certification visée",
                certifications,
                index=_option_index(certifications, current.certification),
                placeholder="Type de certification",
            )
        with status_col:
            status = st.selectbox(
                "Statut", statuses, index=statuses.index(current.status), format_func=MODULE_STATUS_LABELS.get
            )
        objectives = st.text_area(
            "Objectifs pédagogiques", value=current.objectives, placeholder="Définir les objectifs d'apprentissage..."
        )
        skills = st.text_area(
            "Compétences visées", value="\n".join(current.skills), placeholder="Une compétence par ligne..."
        )
        prerequisites = st.text_area("Prérequis", value=current.prerequisites, placeholder="Connaissances requises...")
        resources = st.text_area(
            "Ressources nécessaires", value=current.resources, placeholder="Matériel, outils, supports..."
        )
        save_col, cancel_col = st.columns(2)
        with save_col:
            save = st.form_submit_button("💾 Sauvegarder", type="primary")
        with cancel_col:
            cancel = st.form_submit_button("Annuler")

    if cancel:
        set_editing_record(TOOL, None)
        rerun()
    if not save:
        return
    payload = {
        "title": title,
        "sector": sector or "",
        "duration": duration,
        "start_date": start_date,
        "end_date": end_date,
        "instructor": instructor,
        "students": students,
        "objectives": objectives,
        "skills": skills,
        "certification": certification or "",
        "status": status,
        "prerequisites": prerequisites,
        "resources": resources,
    }
    if record_id != NEW_RECORD:
        payload["id"] = record_id
    module, issues = validate_training_module(payload)
    if issues:
        st.error("Veuillez remplir les champs obligatoires.\n\n" + collect_error_messages(issues))
        return
    try:
        if record_id == NEW_RECORD:
            modules_repository.create(module)
        else:
            modules_repository.update(module)
    except RecordNotFoundError as exc:
        st.error(str(exc))
        return
    set_editing_record(TOOL, None)
    st.toast("Module sauvegardé")
    rerun()


def _render_module(module: TrainingModule) -> None:
    with st.container(border=True):
        title_col, edit_col, delete_col = st.columns([6, 1, 1])
        with title_col:
            badge = status_badge_html(MODULE_STATUS_LABELS[module.status], MODULE_TONES.get(module.status, "neutral"))
            st.markdown(record_heading_html(module.title, badge), unsafe_allow_html=True)
            period = f"{module.start_date:%d/%m/%Y}"
            if module.end_date:
                period += f" → {module.end_date:%d/%m/%Y}"
            details = [module.sector, f"{module.duration} h", f"{module.students} étudiants", period]
            if module.instructor:
                details.append(module.instructor)
            if module.certification:
                details.append(module.certification)
            st.caption(" · ".join(details))
        with edit_col:
            if st.button("✏️", key=f"module_edit_{module.id}", help="Modifier"):
                set_editing_record(TOOL, module.id)
                rerun()
        with delete_col:
            if st.button("🗑️", key=f"module_delete_{module.id}", help="Supprimer"):
                modules_repository.delete(module.id)
                st.toast("Le module a été supprimé avec succès.")
                rerun()
        if module.objectives:
            st.write(f"**Objectifs :** {module.objectives}")
        if module.skills:
            st.write("**Compétences :** " + ", ".join(module.skills))
        if module.prerequisites:
            st.write(f"**Prérequis :** {module.prerequisites}")
        if module.resources:
            st.write(f"**Ressources :** {module.resources}")


plan = workspace.training_plan.load()
render_skipped_records_warning(workspace.training_plan.skipped_records)
stats = training_stats(plan.modules)
render_metric_cards(
    [
        MetricCard(icon="📚", label="Modules total", value=format_number(stats.total)),
        MetricCard(icon="✅", label="Terminés", value=format_number(stats.completed), tone="positive"),
        MetricCard(icon="🔄", label="En cours", value=format_number(stats.in_progress), tone="caution"),
        MetricCard(icon="⏱️", label="Heures total", value=format_number(stats.total_hours)),
        MetricCard(icon="🎓", label="Étudiants", value=format_number(stats.total_students)),
    ],
    grid_aria_label="Synthèse du plan de formation",
)

year_col, action_col = st.columns([4, 1])
with year_col:
    academic_year = st.text_input("Année scolaire", value=plan.academic_year, max_chars=9)
    if academic_year.strip() and academic_year.strip() != plan.academic_year:
        plan = workspace.training_plan.save(plan.model_copy(update={"academic_year": academic_year.strip()}))
editing = editing_record(TOOL)
with action_col:
    if editing is None and st.button("➕ Ajouter un module", **use_container_width_kwargs(st.button)):
        set_editing_record(TOOL, NEW_RECORD)
        rerun()

if editing is not None:
    _render_editor(editing)

list_tab, calendar_tab = st.tabs(["Modules", "Calendrier"])
with list_tab:
    if not plan.modules:
        st.info('Aucun module de formation planifié. Cliquez sur "Ajouter un module" pour commencer.')
    for module in plan.modules:
        _render_module(module)
with calendar_tab:
    grouped = group_modules_by_month(plan.modules)
    if not grouped:
        st.info("Aucun module planifié dans le calendrier.")
    for month, modules in grouped.items():
        st.markdown(f"#### {month.capitalize()}")
        for module in modules:
            st.markdown(
                f"- {module.start_date:%d/%m} · **{html.escape(module.title)}** "
                f"({html.escape(module.sector)}, {module.duration} h) "
                + status_badge_html(MODULE_STATUS_LABELS[module.status], MODULE_TONES.get(module.status, "neutral")),
                unsafe_allow_html=True,
            )

render_app_footer()
