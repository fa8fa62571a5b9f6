"""Pedagogical cost model: per-sector costs with overhead and an Excel export."""
from __future__ import annotations

import logging

import pandas as pd
import streamlit as st

from calc import pedagogical_cost_rows, sector_cost, summarize_pedagogical_costs
from config import configure_logging
from formatting import format_euro, format_number
from models import SECTOR_TEMPLATES, PedagogicalSector
from services.documents import pedagogical_costs_excel
from services.repositories import RecordNotFoundError
from state import NEW_RECORD, editing_record, ensure_session_defaults, get_workspace, set_editing_record
from theme import inject_theme
from ui.chrome import render_app_footer, render_app_header, require_login
from ui.components import MetricCard, render_metric_cards, render_skipped_records_warning
from ui.navigation import Page, render_global_navigation
from ui.streamlit_compat import rerun, use_container_width_kwargs
from validators import collect_error_messages, validate_sector

logger = logging.getLogger(__name__)

TOOL = "pedagogical_sectors"
XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
NUMERIC_FIELDS: tuple[tuple[str, str, int], ...] = (
    ("students", "Nombre d'étudiants *", 1),
    ("hours", "Heures de formation/an", 50),
    ("trainers", "Nombre de formateurs", 1),
    ("trainer_salary", "Salaire annuel formateur (€)", 1000),
    ("equipment", "Équipements/an (€)", 500),
    ("materials", "Matières premières/an (€)", 500),
    ("certifications", "Certifications/examens (€)", 100),
)
NEW_SECTOR_DEFAULTS = {
    "name": "",
    "students": 12,
    "hours": 1200,
    "trainers": 1,
    "trainer_salary": 35000,
    "equipment": 0,
    "materials": 0,
    "certifications": 500,
}

st.set_page_config(
    page_title="Écoles de Production｜Coûts pédagogiques",
    page_icon="🎓",
    layout="wide",
)

configure_logging()
inject_theme()
ensure_session_defaults()
require_login()
render_global_navigation(Page.PEDAGOGICAL_COSTS)
render_app_header(title="🎓 Coûts pédagogiques")

workspace = get_workspace()
costs_repository = workspace.pedagogical_costs
sectors = workspace.pedagogical_sectors


def _seed_editor(prefix: str, values: dict) -> None:
    for field, value in values.items():
        st.session_state.setdefault(prefix + field, value)


def _apply_template(prefix: str) -> None:
    name = st.session_state.get(prefix + "template")
    for template in SECTOR_TEMPLATES:
        if template["name"] == name:
            for field, value in template.items():
                st.session_state[prefix + field] = value
            return


def _clear_editor(prefix: str) -> None:
    for key in [key for key in st.session_state.keys() if key.startswith(prefix)]:
        del st.session_state[key]
    set_editing_record(TOOL, None)


def _render_editor(record_id: str) -> None:
    prefix = f"sector_{record_id}_"
    if record_id == NEW_RECORD:
        _seed_editor(prefix, NEW_SECTOR_DEFAULTS)
    else:
        try:
            current = sectors.get(record_id)
        except RecordNotFoundError:
            st.warning("Cette filière n'existe plus.")
            set_editing_record(TOOL, None)
            return
        _seed_editor(
            prefix,
            {
                field: (value if isinstance(value, (str, int)) else int(value))
                for field, value in current.model_dump(exclude={"id"}).items()
            },
        )

    with st.container(border=True):
        name_col, template_col = st.columns(2)
        with name_col:
            st.text_input("Nom de la filière *", placeholder="Ex: Bâtiment - Maçonnerie", key=prefix + "name")
        with template_col:
            st.selectbox(
                "Modèle pré-défini",
                [template["name"] for template in SECTOR_TEMPLATES],
                index=None,
                placeholder="Choisir un modèle",
                key=prefix + "template",
                on_change=_apply_template,
                args=(prefix,),
            )
        numeric_columns = st.columns(4)
        for index, (field, label, step) in enumerate(NUMERIC_FIELDS):
            with numeric_columns[index % 4]:
                st.number_input(label, min_value=0, step=step, key=prefix + field)
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
    payload = {field: st.session_state[prefix + field] for field in NEW_SECTOR_DEFAULTS}
    if record_id != NEW_RECORD:
        payload["id"] = record_id
    sector, issues = validate_sector(payload)
    if issues:
        st.error("Veuillez remplir les champs obligatoires.\n\n" + collect_error_messages(issues))
        return
    try:
        if record_id == NEW_RECORD:
            sectors.create(sector)
        else:
            sectors.update(sector)
    except RecordNotFoundError as exc:
        st.error(str(exc))
        return
    _clear_editor(prefix)
    st.toast("Filière sauvegardée")
    rerun()


data = costs_repository.load()
render_skipped_records_warning(costs_repository.skipped_records)
summary = summarize_pedagogical_costs(data)
render_metric_cards(
    [
        MetricCard(icon="👥", label="Étudiants total", value=format_number(summary.total_students)),
        MetricCard(icon="💶", label="Coûts pédagogiques", value=format_euro(summary.total_costs),
                   footnote="Hors coûts administratifs"),
        MetricCard(icon="🎓", label="Coût moyen/étudiant", value=format_euro(summary.avg_cost_per_student)),
        MetricCard(icon="⏱️", label="Coût moyen/heure", value=format_euro(summary.avg_cost_per_hour, 2)),
    ],
    grid_aria_label="Synthèse des coûts pédagogiques",
)

settings_col, actions_col = st.columns([2, 1])
with settings_col:
    with st.form("pedagogical_settings_form"):
        st.markdown("**Paramètres généraux**")
        rate_col, admin_col = st.columns(2)
        with rate_col:
            overhead_rate = st.number_input(
                "Taux de charges indirectes (%)", min_value=0.0, max_value=100.0, step=1.0,
                value=float(data.overhead_rate),
            )
        with admin_col:
            admin_costs = st.number_input(
                "Coûts administratifs annuels (€)", min_value=0, step=1000, value=int(data.admin_costs)
            )
        if st.form_submit_button("Appliquer"):
            data = costs_repository.save(
                data.model_copy(update={"overhead_rate": overhead_rate, "admin_costs": admin_costs})
            )
            rerun()
with actions_col:
    st.markdown("**Actions**")
    editing = editing_record(TOOL)
    if editing is None and st.button("➕ Ajouter une filière", **use_container_width_kwargs(st.button)):
        set_editing_record(TOOL, NEW_RECORD)
        rerun()
    try:
        workbook = pedagogical_costs_excel(data)
    except Exception as exc:  # pragma: no cover - UI feedback
        logger.exception("Pedagogical cost export failed")
        st.error(f"Export Excel impossible : {exc}")
    else:
        st.download_button(
            "📊 Export Excel",
            data=workbook,
            file_name="couts_pedagogiques.xlsx",
            mime=XLSX_MIME,
            disabled=not data.sectors,
            **use_container_width_kwargs(st.download_button),
        )

if editing is not None:
    _render_editor(editing)

if not data.sectors:
    st.info('Aucune filière configurée pour le moment. Cliquez sur "Ajouter une filière" pour commencer.')
else:
    st.dataframe(
        pd.DataFrame(pedagogical_cost_rows(data)),
        hide_index=True,
        **use_container_width_kwargs(st.dataframe),
    )
    for sector in data.sectors:
        cost = sector_cost(sector, data.overhead_rate)
        with st.container(border=True):
            title_col, edit_col, delete_col = st.columns([6, 1, 1])
            with title_col:
                st.markdown(
                    f"**{sector.name}** · {sector.students} étudiants · {format_number(sector.hours)} h/an"
                )
            with edit_col:
                if st.button("✏️", key=f"sector_edit_{sector.id}", help="Modifier"):
                    set_editing_record(TOOL, sector.id)
                    rerun()
            with delete_col:
                if st.button("🗑️", key=f"sector_delete_{sector.id}", help="Supprimer"):
                    sectors.delete(sector.id)
                    st.toast("La filière a été supprimée avec succès.")
                    rerun()
            total_col, student_col, hour_col, direct_col, overhead_col = st.columns(5)
            total_col.metric("Coût total annuel", format_euro(cost.total_cost))
            student_col.metric("Coût/étudiant", format_euro(cost.cost_per_student))
            hour_col.metric("Coût/heure", format_euro(cost.cost_per_hour, 2))
            direct_col.metric("Coûts directs", format_euro(cost.direct_costs))
            overhead_col.metric("Charges indirectes", format_euro(cost.overhead_costs))

render_app_footer()
