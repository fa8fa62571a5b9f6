from __future__ import annotations

import unittest

import streamlit as st

from services.auth import (
    AUTH_SESSION_KEY,
    AuthError,
    authenticate,
    get_current_user,
    hash_password,
    is_authenticated,
    login_user,
    logout_user,
    verify_password,
)


class PasswordHashingTests(unittest.TestCase):
    def test_hash_and_verify(self) -> None:
        hashed = hash_password("secret")
        self.assertNotEqual(hashed, "secret")
        self.assertTrue(verify_password("secret", hashed))
        self.assertFalse(verify_password("other", hashed))

    def test_malformed_hash_is_rejected(self) -> None:
        self.assertFalse(verify_password("secret", "not-a-hash"))


class AuthenticateTests(unittest.TestCase):
    def test_demo_account(self) -> None:
        user = authenticate("admin", "password")
        self.assertEqual(user.username, "admin")
        self.assertEqual(user.role, "admin")

    def test_username_is_normalised(self) -> None:
        user = authenticate("  Expert-Comptable ", "demo123")
        self.assertEqual(user.username, "expert-comptable")
        self.assertEqual(user.display_name, "Expert-comptable")

    def test_wrong_credentials(self) -> None:
        with self.assertRaises(AuthError):
            authenticate("admin", "wrong")
        with self.assertRaises(AuthError):
            authenticate("inconnu", "password")


class SessionTests(unittest.TestCase):
    def setUp(self) -> None:
        st.session_state.clear()

    def tearDown(self) -> None:
        st.session_state.clear()

    def test_login_stores_user_and_logout_clears_it(self) -> None:
        self.assertFalse(is_authenticated())

        user = login_user("directeur", "ecole123", delay=0)
        self.assertEqual(st.session_state[AUTH_SESSION_KEY]["username"], "directeur")
        self.assertEqual(get_current_user(), user)

        logout_user()
        self.assertNotIn(AUTH_SESSION_KEY, st.session_state)
        self.assertIsNone(get_current_user())

    def test_failed_login_leaves_session_untouched(self) -> None:
        with self.assertRaises(AuthError):
            login_user("directeur", "nope", delay=0)
        self.assertNotIn(AUTH_SESSION_KEY, st.session_state)

    def test_incomplete_session_payload_is_ignored(self) -> None:
        st.session_state[AUTH_SESSION_KEY] = {"username": "admin"}
        self.assertIsNone(get_current_user())
