"""Application settings: stored data backup, reset and security notes."""
from __future__ import annotations

import streamlit as st

from config import configure_logging, settings
from services import auth
from services.database import dumps
from services.security import safe_filename
from state import ensure_session_defaults, get_workspace, reset_app_state
from theme import inject_theme
from ui.chrome import render_app_footer, render_app_header, require_login
from ui.navigation import Page, render_global_navigation
from ui.streamlit_compat import rerun, use_container_width_kwargs

st.set_page_config(
    page_title="Écoles de Production｜Paramètres",
    page_icon="⚙️",
    layout="wide",
)

configure_logging()
inject_theme()
ensure_session_defaults()
current_user = require_login()
render_global_navigation(Page.SETTINGS)
render_app_header(title="⚙️ Paramètres")

workspace = get_workspace()

data_tab, reset_tab, security_tab = st.tabs(["Sauvegarde", "Réinitialisation", "Sécurité"])

with data_tab:
    st.subheader("Sauvegarde des données")
    st.caption(f"Connecté en tant que : {current_user.display_name} ({current_user.username})")
    backup = workspace.backup()
    st.write(f"{len(backup['values'])} jeu(x) de données enregistré(s).")
    st.download_button(
        "📥 Télécharger la sauvegarde JSON",
        data=dumps(backup).encode("utf-8"),
        file_name=f"edp_sauvegarde_{safe_filename(current_user.username, default='utilisateur')}.json",
        mime="application/json",
        **use_container_width_kwargs(st.download_button),
    )
    st.caption("La sauvegarde contient les données de tous les outils pour votre compte.")

with reset_tab:
    st.subheader("Réinitialiser les données")
    st.caption(
        "Supprime toutes les données enregistrées (business plan, analyses, partenariats, "
        "subventions, formations, coûts pédagogiques et questionnaire)."
    )
    confirmed = st.checkbox("Je confirme vouloir supprimer définitivement mes données.")
    if st.button("🗑️ Tout réinitialiser", type="secondary", disabled=not confirmed):
        workspace.reset_all()
        reset_app_state()
        st.toast("Toutes les données ont été réinitialisées.", icon="✅")
        rerun()

with security_tab:
    st.subheader("Sécurité")
    st.markdown(
        "- Les mots de passe sont vérifiés par empreinte PBKDF2-SHA256 et ne sont jamais stockés en clair.\n"
        f"- Les données sont enregistrées dans la base configurée (`{settings.DATABASE_URL.split(':', 1)[0]}`), "
        "séparément pour chaque compte."
    )
    if st.button("Se déconnecter", key="settings_logout_button"):
        auth.logout_user()
        rerun()

render_app_footer()
