"""Demo authentication helpers and Streamlit session integration.

The accounts below are placeholders for the demonstration site, not a
security boundary.
"""
from __future__ import annotations

import logging
import time
from dataclasses import asdict, dataclass
from functools import lru_cache
from typing import Dict, Optional

import streamlit as st
from passlib.context import CryptContext

from config import settings

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
AUTH_SESSION_KEY = "auth_user"


class AuthError(Exception):
    """Raised when authentication fails."""


@dataclass(frozen=True)
class AuthUser:
    username: str
    display_name: str
    role: str = "member"


@dataclass(frozen=True)
class DemoAccount:
    password: str
    display_name: str
    role: str


DEMO_ACCOUNTS: Dict[str, DemoAccount] = {
    "admin": DemoAccount("password", "Administrateur", "admin"),
    "expert-comptable": DemoAccount("demo123", "Expert-comptable", "accountant"),
    "directeur": DemoAccount("ecole123", "Directeur d'école", "director"),
}


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    try:
        return pwd_context.verify(password, hashed)
    except (TypeError, ValueError):
        return False


@lru_cache(maxsize=None)
def _demo_hash(username: str) -> str:
    return hash_password(DEMO_ACCOUNTS[username].password)


def authenticate(username: str, password: str) -> AuthUser:
    """Validate credentials against the demo accounts and return the user."""

    username_normalised = username.strip().lower()
    account = DEMO_ACCOUNTS.get(username_normalised)
    if account is None or not verify_password(password, _demo_hash(username_normalised)):
        logger.warning("Rejected login for %r", username_normalised)
        raise AuthError("Nom d'utilisateur ou mot de passe incorrect")
    return AuthUser(username=username_normalised, display_name=account.display_name, role=account.role)


def _store_user(user: AuthUser) -> None:
    st.session_state[AUTH_SESSION_KEY] = asdict(user)


def login_user(username: str, password: str, *, delay: Optional[float] = None) -> AuthUser:
    """Authenticate after the simulated network delay and store the user in the session."""

    wait = settings.LOGIN_DELAY_SECONDS if delay is None else delay
    if wait > 0:
        time.sleep(wait)
    user = authenticate(username, password)
    _store_user(user)
    logger.info("User %s logged in", user.username)
    return user


def logout_user() -> None:
    """Clear the authenticated user from the session."""

    if AUTH_SESSION_KEY in st.session_state:
        logger.info("User %s logged out", st.session_state[AUTH_SESSION_KEY].get("username"))
        del st.session_state[AUTH_SESSION_KEY]


def get_current_user() -> Optional[AuthUser]:
    """Return the authenticated user, if any."""

    data = st.session_state.get(AUTH_SESSION_KEY)
    if isinstance(data, dict) and {"username", "display_name", "role"}.issubset(data.keys()):
        return AuthUser(**data)
    return None


def is_authenticated() -> bool:
    return get_current_user() is not None


__all__ = [
    "AUTH_SESSION_KEY",
    "AuthError",
    "AuthUser",
    "DEMO_ACCOUNTS",
    "authenticate",
    "get_current_user",
    "hash_password",
    "is_authenticated",
    "login_user",
    "logout_user",
    "verify_password",
]
