"""Association statutes generator (loi 1901) with live preview and download."""
from __future__ import annotations

import html
import logging

import streamlit as st

from config import configure_logging
from models import STATUTES_REQUIRED_FIELDS, StatutesData
from services.documents import DOCX_MIME, render_statutes, statutes_docx, statutes_filename
from state import ensure_session_defaults, reset_session_keys
from theme import inject_theme
from ui.chrome import render_app_footer, render_app_header, require_login
from ui.components import render_callout
from ui.navigation import Page, render_global_navigation
from ui.streamlit_compat import rerun
from validators import collect_error_messages, validate_statutes

logger = logging.getLogger(__name__)

IMPORTANT_NOTES = (
    "Les statuts générés respectent le cadre légal des associations loi 1901",
    "Vous devrez compléter les champs entre crochets avant la déclaration",
    "N'oubliez pas de faire signer les statuts par le président et le secrétaire",
    "Ces statuts doivent être déposés en préfecture pour officialiser votre association",
)

st.set_page_config(
    page_title="Écoles de Production｜Statuts",
    page_icon="📜",
    layout="wide",
)

configure_logging()
inject_theme()
ensure_session_defaults()
require_login()
render_global_navigation(Page.STATUTES)
render_app_header(title="📜 Générateur de statuts")

form: StatutesData = st.session_state["statutes_form"]

form_col, preview_col = st.columns([1, 1])
with form_col:
    st.markdown("**Informations de l'association**")
    association_name = st.text_input(
        "Nom de l'association *", value=form.association_name, placeholder="École de Production XYZ"
    )
    purpose = st.text_area(
        "Objet de l'association",
        value=form.purpose,
        placeholder="Formation professionnelle par la pédagogie du faire...",
    )
    registered_office = st.text_input(
        "Siège social *", value=form.registered_office, placeholder="123 rue de l'École, 75000 Paris"
    )
    duration_col, fee_col = st.columns(2)
    with duration_col:
        duration_years = st.text_input("Durée (années)", value=form.duration_years, placeholder="99")
    with fee_col:
        membership_fee = st.text_input("Cotisation annuelle (€)", value=form.membership_fee, placeholder="50")
    st.markdown("**Bureau**")
    president_name = st.text_input(
        "Nom du président *", value=form.president_name, placeholder="Nom Prénom du président"
    )
    secretary_name = st.text_input(
        "Nom du secrétaire *", value=form.secretary_name, placeholder="Nom Prénom du secrétaire"
    )
    st.caption("Champs obligatoires : " + ", ".join(STATUTES_REQUIRED_FIELDS.values()))

form = StatutesData(
    association_name=association_name,
    president_name=president_name,
    secretary_name=secretary_name,
    registered_office=registered_office,
    purpose=purpose,
    duration_years=duration_years,
    membership_fee=membership_fee,
)
st.session_state["statutes_form"] = form
statutes_text = render_statutes(form)
issues = validate_statutes(form)

with form_col:
    preview_label = "Masquer l'aperçu" if st.session_state["statutes_preview"] else "👁️ Aperçu des statuts"
    preview_btn_col, reset_btn_col = st.columns(2)
    with preview_btn_col:
        if st.button(preview_label):
            st.session_state["statutes_preview"] = not st.session_state["statutes_preview"]
            rerun()
    with reset_btn_col:
        if st.button("↺ Vider le formulaire"):
            reset_session_keys(["statutes_form", "statutes_preview"])
            rerun()
    if issues:
        st.button("📥 Télécharger les statuts", disabled=True, help=collect_error_messages(issues))
        st.warning(
            "Informations manquantes : veuillez remplir au minimum le nom de l'association, "
            "le président, le secrétaire et le siège social."
        )
    else:
        text_col, word_col = st.columns(2)
        with text_col:
            downloaded = st.download_button(
                "📥 Télécharger les statuts",
                data=statutes_text.encode("utf-8"),
                file_name=statutes_filename(form),
                mime="text/plain",
                type="primary",
            )
        with word_col:
            downloaded = st.download_button(
                "📝 Version Word",
                data=statutes_docx(form),
                file_name=statutes_filename(form, extension="docx"),
                mime=DOCX_MIME,
            ) or downloaded
        if downloaded:
            logger.info("Statutes downloaded for %s", form.association_name)
            st.success("Les statuts ont été téléchargés avec succès.")

with preview_col:
    if st.session_state["statutes_preview"]:
        st.markdown("**Aperçu des statuts**")
        st.markdown(
            f"<pre class='statutes-preview' aria-label='Aperçu des statuts'>{html.escape(statutes_text)}</pre>",
            unsafe_allow_html=True,
        )
    render_callout(
        icon="ℹ️",
        title="Informations importantes",
        body=" • ".join(IMPORTANT_NOTES),
    )

render_app_footer()
