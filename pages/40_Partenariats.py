"""Partnership tracker: companies hosting students, with status follow-up."""
from __future__ import annotations

import streamlit as st

from calc import partnership_stats
from calc.dashboard import PARTNERSHIP_TONES
from config import configure_logging
from formatting import format_number
from models import (
    PARTNERSHIP_STATUS_LABELS,
    PARTNERSHIP_TYPE_LABELS,
    Partnership,
    PartnershipStatus,
    PartnershipType,
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
from validators import collect_error_messages, validate_partnership

TOOL = "partnerships"

st.set_page_config(
    page_title="Écoles de Production｜Partenariats",
    page_icon="🤝",
    layout="wide",
)

configure_logging()
inject_theme()
ensure_session_defaults()
require_login()
render_global_navigation(Page.PARTNERSHIPS)
render_app_header(title="🤝 Suivi des partenariats")

repository = get_workspace().partnerships


def _render_editor(record_id: str) -> None:
    current = Partnership.model_construct(company_name="", contact_person="")
    if record_id != NEW_RECORD:
        try:
            current = repository.get(record_id)
        except RecordNotFoundError:
            st.warning("Ce partenariat n'existe plus.")
            set_editing_record(TOOL, None)
            return

    with st.form(f"partnership_form_{record_id}"):
        st.markdown("#### Nouveau partenaire" if record_id == NEW_RECORD else f"#### Modifier {current.company_name}")
        left, right = st.columns(2)
        with left:
            company_name = st.text_input("Nom de l'entreprise *", value=current.company_name,
                                         placeholder="Nom de l'entreprise")
            email = st.text_input("Email", value=current.email, placeholder="contact@entreprise.com")
            location = st.text_input("Localisation", value=current.location, placeholder="Ville")
            partnership_type = st.selectbox(
                "Type de partenariat",
                list(PartnershipType),
                index=list(PartnershipType).index(current.partnership_type),
                format_func=PARTNERSHIP_TYPE_LABELS.get,
            )
            students = st.number_input("Nombre d'étudiants", min_value=0, step=1, value=current.students)
        with right:
            contact_person = st.text_input("Personne de contact *", value=current.contact_person,
                                           placeholder="Nom du contact")
            phone = st.text_input("Téléphone", value=current.phone, placeholder="01 23 45 67 89")
            sector = st.text_input("Secteur d'activité", value=current.sector, placeholder="Industrie, BTP...")
            status = st.selectbox(
                "Statut",
                list(PartnershipStatus),
                index=list(PartnershipStatus).index(current.status),
                format_func=PARTNERSHIP_STATUS_LABELS.get,
            )
            last_contact = st.date_input("Dernier contact", value=current.last_contact, format="DD/MM/YYYY")
        next_action = st.text_input("Prochaine action", value=current.next_action, placeholder="Relance téléphonique...")
        notes = st.text_area("Notes", value=current.notes, placeholder="Notes sur le partenaire...")
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
        "company_name": company_name,
        "contact_person": contact_person,
        "email": email,
        "phone": phone,
        "sector": sector,
        "location": location,
        "partnership_type": partnership_type,
        "status": status,
        "students": students,
        "notes": notes,
        "last_contact": last_contact,
        "next_action": next_action,
    }
    if record_id != NEW_RECORD:
        payload["id"] = record_id
    partnership, issues = validate_partnership(payload)
    if issues:
        st.error("Veuillez remplir les champs obligatoires.\n\n" + collect_error_messages(issues))
        return
    try:
        if record_id == NEW_RECORD:
            repository.create(partnership)
        else:
            repository.update(partnership)
    except RecordNotFoundError as exc:
        st.error(str(exc))
        return
    set_editing_record(TOOL, None)
    st.toast("Partenariat sauvegardé")
    rerun()


partnerships = repository.list()
render_skipped_records_warning(repository.skipped_records)
stats = partnership_stats(partnerships)
render_metric_cards(
    [
        MetricCard(icon="🏢", label="Partenaires total", value=format_number(stats.total)),
        MetricCard(icon="✅", label="Partenariats actifs", value=format_number(stats.active), tone="positive"),
        MetricCard(icon="🔭", label="Prospects", value=format_number(stats.prospects)),
        MetricCard(icon="🎓", label="Places étudiants", value=format_number(stats.total_students)),
    ],
    grid_aria_label="Synthèse des partenariats",
)

editing = editing_record(TOOL)
header_col, action_col = st.columns([4, 1])
with header_col:
    st.subheader("Liste des partenaires")
with action_col:
    if editing is None and st.button("➕ Ajouter un partenaire", **use_container_width_kwargs(st.button)):
        set_editing_record(TOOL, NEW_RECORD)
        rerun()

if editing is not None:
    _render_editor(editing)

if not partnerships:
    st.info('Aucun partenaire enregistré pour le moment. Cliquez sur "Ajouter un partenaire" pour commencer.')

for partnership in partnerships:
    with st.container(border=True):
        title_col, edit_col, delete_col = st.columns([6, 1, 1])
        with title_col:
            badge = status_badge_html(
                PARTNERSHIP_STATUS_LABELS[partnership.status], PARTNERSHIP_TONES.get(partnership.status, "neutral")
            )
            st.markdown(record_heading_html(partnership.company_name, badge), unsafe_allow_html=True)
            details = [partnership.contact_person, PARTNERSHIP_TYPE_LABELS[partnership.partnership_type]]
            if partnership.sector:
                details.append(partnership.sector)
            if partnership.location:
                details.append(partnership.location)
            details.append(f"{partnership.students} étudiants")
            st.caption(" · ".join(details))
        with edit_col:
            if st.button("✏️", key=f"partnership_edit_{partnership.id}", help="Modifier"):
                set_editing_record(TOOL, partnership.id)
                rerun()
        with delete_col:
            if st.button("🗑️", key=f"partnership_delete_{partnership.id}", help="Supprimer"):
                repository.delete(partnership.id)
                st.toast("Le partenariat a été supprimé avec succès.")
                rerun()
        contact_bits = [bit for bit in (partnership.email, partnership.phone) if bit]
        if contact_bits:
            st.write(" · ".join(contact_bits))
        if partnership.last_contact:
            st.write(f"Dernier contact : {partnership.last_contact:%d/%m/%Y}")
        if partnership.next_action:
            st.write(f"Prochaine action : {partnership.next_action}")
        if partnership.notes:
            st.caption(partnership.notes)

render_app_footer()
