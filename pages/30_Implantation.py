"""Territorial analysis: score candidate locations and compare them."""
from __future__ import annotations

import pandas as pd
import streamlit as st

from calc import territorial_score, territory_tier
from config import configure_logging
from models import CRITERIA_LABELS, SWOT_FIELDS, TARGET_SECTORS, LocationAnalysis, LocationCriteria
from services.repositories import RecordNotFoundError
from state import NEW_RECORD, editing_record, ensure_session_defaults, get_workspace, set_editing_record
from theme import inject_theme
from ui.chrome import render_app_footer, render_app_header, require_login
from ui.components import (
    record_heading_html,
    render_score_bar,
    render_skipped_records_warning,
    status_badge_html,
)
from ui.navigation import Page, render_global_navigation, render_workflow_banner
from ui.streamlit_compat import rerun, use_container_width_kwargs
from validators import collect_error_messages, validate_location

TOOL = "locations"
SWOT_PLACEHOLDERS = {
    "strengths": "Une force par ligne...",
    "weaknesses": "Une faiblesse par ligne...",
    "opportunities": "Une opportunité par ligne...",
    "threats": "Une menace par ligne...",
}

st.set_page_config(
    page_title="Écoles de Production｜Implantation",
    page_icon="📍",
    layout="wide",
)

configure_logging()
inject_theme()
ensure_session_defaults()
require_login()
render_global_navigation(Page.LOCATION)
render_app_header(title="📍 Analyse territoriale")
render_workflow_banner(Page.LOCATION)

repository = get_workspace().locations


def _render_editor(record_id: str) -> None:
    current = LocationAnalysis.model_construct(city_name="", region="")
    if record_id != NEW_RECORD:
        try:
            current = repository.get(record_id)
        except RecordNotFoundError:
            st.warning("Cette analyse n'existe plus.")
            set_editing_record(TOOL, None)
            return
    prefix = f"loc_{record_id}_"
    with st.container(border=True):
        st.markdown("#### Nouvelle analyse" if record_id == NEW_RECORD else f"#### Modifier {current.city_name}")
        city_col, region_col, postal_col = st.columns([2, 2, 1])
        with city_col:
            city_name = st.text_input("Ville/Commune *", value=current.city_name, placeholder="Ex: Lyon", key=prefix + "city")
        with region_col:
            region = st.text_input(
                "Région *", value=current.region, placeholder="Ex: Auvergne-Rhône-Alpes", key=prefix + "region"
            )
        with postal_col:
            postal_code = st.text_input("Code postal", value=current.postal_code, placeholder="69000", key=prefix + "postal")
        target_sectors = st.multiselect(
            "Secteurs d'activité visés",
            list(TARGET_SECTORS),
            default=[sector for sector in current.target_sectors if sector in TARGET_SECTORS],
            key=prefix + "sectors",
        )

        st.markdown("**Critères d'évaluation (0-100)**")
        criteria = {}
        criteria_columns = st.columns(2)
        for index, (field, label) in enumerate(CRITERIA_LABELS.items()):
            with criteria_columns[index % 2]:
                criteria[field] = st.slider(
                    label, 0, 100, int(getattr(current.criteria, field)), key=prefix + field
                )
        preview_score = territorial_score(LocationCriteria(**criteria))
        preview_tier = territory_tier(preview_score)
        st.markdown(
            f"**Score d'attractivité : {preview_score}/100** "
            + status_badge_html(preview_tier.label, preview_tier.tone),
            unsafe_allow_html=True,
        )
        render_score_bar(preview_score, tone=preview_tier.tone, label="Score d'attractivité")
        st.caption(preview_tier.recommendation)

        swot = {}
        swot_columns = st.columns(2)
        for index, (field, label) in enumerate(SWOT_FIELDS.items()):
            with swot_columns[index % 2]:
                swot[field] = st.text_area(
                    label,
                    value="\n".join(getattr(current, field)),
                    placeholder=SWOT_PLACEHOLDERS[field],
                    key=prefix + field,
                )
        notes = st.text_area(
            "Notes complémentaires",
            value=current.notes,
            placeholder="Observations particulières, données locales...",
            key=prefix + "notes",
        )

        save_col, cancel_col = st.columns(2)
        with save_col:
            save = st.button("💾 Sauvegarder", type="primary", key=prefix + "save", **use_container_width_kwargs(st.button))
        with cancel_col:
            cancel = st.button("Annuler", key=prefix + "cancel", **use_container_width_kwargs(st.button))

    if cancel:
        set_editing_record(TOOL, None)
        rerun()
    if not save:
        return
    payload = {
        "city_name": city_name,
        "region": region,
        "postal_code": postal_code,
        "target_sectors": target_sectors,
        "criteria": criteria,
        "notes": notes,
        **swot,
    }
    if record_id != NEW_RECORD:
        payload["id"] = record_id
        payload["analyzed_date"] = current.analyzed_date
    analysis, issues = validate_location(payload)
    if issues:
        st.error("Veuillez remplir les champs obligatoires.\n\n" + collect_error_messages(issues))
        return
    try:
        if record_id == NEW_RECORD:
            repository.create(analysis)
        else:
            repository.update(analysis)
    except RecordNotFoundError as exc:
        st.error(str(exc))
        return
    set_editing_record(TOOL, None)
    st.toast("Analyse sauvegardée")
    rerun()


editing = editing_record(TOOL)
header_col, action_col = st.columns([4, 1])
with header_col:
    st.subheader("Analyses territoriales")
with action_col:
    if editing is None and st.button("➕ Nouvelle analyse", **use_container_width_kwargs(st.button)):
        set_editing_record(TOOL, NEW_RECORD)
        rerun()

if editing is not None:
    _render_editor(editing)

analyses = repository.ranked()
render_skipped_records_warning(repository.skipped_records)
if not analyses:
    st.info('Aucune analyse territoriale créée. Cliquez sur "Nouvelle analyse" pour commencer.')
else:
    comparison = pd.DataFrame(
        [
            {
                "Rang": rank,
                "Ville": analysis.city_name,
                "Région": analysis.region,
                "Score": analysis.overall_score,
                "Appréciation": territory_tier(analysis.overall_score).label,
            }
            for rank, analysis in enumerate(analyses, start=1)
        ]
    )
    st.dataframe(
        comparison,
        hide_index=True,
        column_config={
            "Score": st.column_config.ProgressColumn("Score", min_value=0, max_value=100, format="%d"),
        },
        **use_container_width_kwargs(st.dataframe),
    )
    for analysis in analyses:
        tier = territory_tier(analysis.overall_score)
        with st.container(border=True):
            title_col, edit_col, delete_col = st.columns([6, 1, 1])
            with title_col:
                postal = f" ({analysis.postal_code})" if analysis.postal_code else ""
                badge = status_badge_html(f"{analysis.overall_score}/100 · {tier.label}", tier.tone)
                st.markdown(
                    record_heading_html(analysis.city_name, badge, suffix=f"{postal} · {analysis.region}"),
                    unsafe_allow_html=True,
                )
            with edit_col:
                if st.button("✏️", key=f"loc_edit_{analysis.id}", help="Modifier"):
                    set_editing_record(TOOL, analysis.id)
                    rerun()
            with delete_col:
                if st.button("🗑️", key=f"loc_delete_{analysis.id}", help="Supprimer"):
                    try:
                        repository.delete(analysis.id)
                    except RecordNotFoundError as exc:
                        st.error(str(exc))
                    else:
                        st.toast("L'analyse territoriale a été supprimée.")
                        rerun()
            render_score_bar(analysis.overall_score, tone=tier.tone, label=f"Score de {analysis.city_name}")
            if analysis.target_sectors:
                st.caption("Secteurs ciblés : " + ", ".join(analysis.target_sectors))
            st.write(f"**Recommandation :** {analysis.recommendation}")
            with st.expander("Analyse SWOT"):
                swot_columns = st.columns(4)
                for column, (field, label) in zip(swot_columns, SWOT_FIELDS.items()):
                    with column:
                        st.markdown(f"**{label}**")
                        items = getattr(analysis, field)
                        st.markdown("\n".join(f"- {item}" for item in items) if items else "_Aucun élément_")
                if analysis.notes:
                    st.caption(analysis.notes)

render_app_footer()
