"""Utilities for managing Streamlit session state defaults and resets."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, Mapping

import streamlit as st

from models import BudgetInputs, StatutesData
from services.auth import AUTH_SESSION_KEY, get_current_user
from services.repositories import Workspace, open_workspace

logger = logging.getLogger(__name__)

StateFactory = Callable[[], Any]
TypeHint = type | tuple[type, ...] | None

WORKSPACE_KEY = "_workspace"
ANONYMOUS_NAMESPACE = "anonyme"
NEW_RECORD = "__new__"


@dataclass(frozen=True)
class StateSpec:
    """Definition of a session state entry."""

    default_factory: StateFactory
    type_hint: TypeHint
    description: str

    def create_default(self) -> Any:
        """Return a new default value for the state entry."""
        return self.default_factory()

    def is_valid(self, value: Any) -> bool:
        """Check whether *value* matches the declared type hint."""
        if self.type_hint is None:
            return True
        hints = self.type_hint if isinstance(self.type_hint, tuple) else (self.type_hint,)
        return isinstance(value, hints)


STATE_SPECS: Dict[str, StateSpec] = {
    "last_updated_ts": StateSpec(lambda: "", str, "Horodatage de la dernière sauvegarde"),
    "questionnaire_pending_advice": StateSpec(
        lambda: None, (int, type(None)), "Question dont le conseil est affiché"
    ),
    "budget_inputs": StateSpec(BudgetInputs, BudgetInputs, "Saisie du calculateur de budget initial"),
    "statutes_form": StateSpec(StatutesData, StatutesData, "Saisie du générateur de statuts"),
    "statutes_preview": StateSpec(lambda: False, bool, "Aperçu des statuts affiché"),
    "editing_record_id": StateSpec(dict, dict, "Enregistrement en cours d'édition, par outil"),
    "under_development_title": StateSpec(
        lambda: "Page en cours de développement", str, "Titre de la page en développement"
    ),
    "ui_font_scale": StateSpec(lambda: 1.0, (float, int), "Taille du texte"),
    "ui_high_contrast": StateSpec(lambda: False, bool, "Mode contraste élevé"),
    "ui_color_scheme": StateSpec(lambda: "light", str, "Thème clair ou sombre"),
}


def ensure_session_defaults(overrides: Mapping[str, Any] | None = None) -> None:
    """Populate :mod:`st.session_state` with defaults and type-validate entries."""

    overrides = overrides or {}
    for key, spec in STATE_SPECS.items():
        if key in overrides:
            st.session_state[key] = overrides[key]
            continue
        if key not in st.session_state or not spec.is_valid(st.session_state[key]):
            st.session_state[key] = spec.create_default()


def reset_session_keys(keys: Iterable[str] | None = None) -> None:
    """Reset selected state keys to their default values."""

    target_keys = list(keys) if keys is not None else list(STATE_SPECS.keys())
    for key in target_keys:
        if key in STATE_SPECS:
            st.session_state[key] = STATE_SPECS[key].create_default()
        elif key in st.session_state:
            del st.session_state[key]


def reset_app_state(preserve: Iterable[str] | None = None) -> None:
    """Clear the current session state and re-apply defaults.

    The authenticated user is always kept.
    """

    preserved = set(preserve or []) | {AUTH_SESSION_KEY}
    for key in list(st.session_state.keys()):
        if key not in preserved:
            del st.session_state[key]
    ensure_session_defaults()


def _mark_updated(key: str) -> None:
    st.session_state["last_updated_ts"] = datetime.now().strftime("%d/%m/%Y %H:%M")
    logger.debug("Session notified of a change to %s", key)


def editing_record(tool: str) -> str | None:
    """Return the id being edited in *tool*, :data:`NEW_RECORD` for a creation, else ``None``."""

    return st.session_state["editing_record_id"].get(tool)


def set_editing_record(tool: str, record_id: str | None) -> None:
    editing = dict(st.session_state["editing_record_id"])
    if record_id is None:
        editing.pop(tool, None)
    else:
        editing[tool] = record_id
    st.session_state["editing_record_id"] = editing


def get_workspace() -> Workspace:
    """Return the repositories of the logged-in user, opened once per session."""

    user = get_current_user()
    namespace = user.username if user else ANONYMOUS_NAMESPACE
    workspace = st.session_state.get(WORKSPACE_KEY)
    if not isinstance(workspace, Workspace) or workspace.store.namespace != namespace:
        workspace = open_workspace(namespace)
        workspace.subscribe(_mark_updated)
        st.session_state[WORKSPACE_KEY] = workspace
    return workspace


__all__ = [
    "NEW_RECORD",
    "STATE_SPECS",
    "StateSpec",
    "editing_record",
    "ensure_session_defaults",
    "get_workspace",
    "reset_app_state",
    "reset_session_keys",
    "set_editing_record",
]
