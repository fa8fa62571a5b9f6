"""Shared UI chrome elements (login gate, header, footer)."""
from __future__ import annotations

from dataclasses import dataclass
import html

import streamlit as st

from config import settings
from services import auth
from services.auth import AuthError
from ui.streamlit_compat import rerun, use_container_width_kwargs
from validators import collect_error_messages, validate_login

APP_TITLE = "Écoles de Production"
APP_SUBTITLE = (
    "Proposition d'une démarche méthodologique d'accompagnement par l'expert-comptable "
    "dans la création et le pilotage d'une école de production"
)


@dataclass(frozen=True)
class HeaderActions:
    """User interactions emitted from the global header."""

    logout_requested: bool = False


def render_login_form() -> None:
    """Login card shown to anonymous visitors."""

    _, center, _ = st.columns([1, 2, 1])
    with center:
        st.title("🔐 Connexion")
        st.caption("Écoles de Production - Soutenance")
        with st.form("login_form"):
            username = st.text_input("Nom d'utilisateur", placeholder="Votre nom d'utilisateur")
            password = st.text_input("Mot de passe", type="password", placeholder="Votre mot de passe")
            submitted = st.form_submit_button("Se connecter", **use_container_width_kwargs(st.form_submit_button))
        if submitted:
            issues = validate_login(username, password)
            if issues:
                st.error(collect_error_messages(issues))
                return
            try:
                with st.spinner("Connexion en cours..."):
                    auth.login_user(username, password)
            except AuthError as exc:
                st.error(str(exc))
                return
            rerun()


def require_login() -> auth.AuthUser:
    """Stop the script with the login form unless a user is authenticated."""

    user = auth.get_current_user()
    if user is None:
        render_login_form()
        st.stop()
    return user


def render_app_header(*, title: str, subtitle: str | None = None) -> HeaderActions:
    """Render the page header with the display settings and the account menu."""

    logout_requested = False
    with st.container():
        columns = st.columns([5, 1.3, 1.4], gap="large")
        with columns[0]:
            st.title(title)
            st.caption(subtitle or APP_SUBTITLE)
        with columns[1]:
            with st.popover("Aa Affichage", help="Taille du texte et contraste."):
                st.slider(
                    "Taille du texte",
                    min_value=0.9,
                    max_value=1.3,
                    step=0.05,
                    key="ui_font_scale",
                )
                st.toggle("Contraste élevé", key="ui_high_contrast")
                st.radio(
                    "Thème",
                    options=["light", "dark"],
                    format_func=lambda value: "Clair" if value == "light" else "Sombre",
                    key="ui_color_scheme",
                )
        with columns[2]:
            current_user = auth.get_current_user()
            if current_user:
                with st.popover(f"👤 {current_user.display_name}"):
                    st.markdown(f"**{current_user.display_name}**\n\n`{current_user.username}`")
                    last_updated = st.session_state.get("last_updated_ts")
                    if last_updated:
                        st.caption(f"Dernière sauvegarde : {last_updated}")
                    if st.button("Se déconnecter", key="header_logout_button"):
                        auth.logout_user()
                        st.toast("Vous êtes déconnecté.", icon="👋")
                        logout_requested = True
                        rerun()
    return HeaderActions(logout_requested=logout_requested)


def render_app_footer(caption: str = "Mémoire d'expertise comptable - Écoles de Production") -> None:
    """Render the global footer."""

    st.divider()
    st.markdown(
        """
        <footer class="app-footer" role="contentinfo">
            <p>{caption}</p>
            <p><a href="mailto:{email}">{email}</a></p>
        </footer>
        """.format(caption=html.escape(caption), email=html.escape(settings.CONTACT_EMAIL)),
        unsafe_allow_html=True,
    )


__all__ = [
    "APP_SUBTITLE",
    "APP_TITLE",
    "HeaderActions",
    "render_app_footer",
    "render_app_header",
    "render_login_form",
    "require_login",
]
