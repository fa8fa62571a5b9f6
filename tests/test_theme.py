from __future__ import annotations

import unittest
from unittest import mock

import streamlit as st

import theme
from services import security


class InjectThemeTests(unittest.TestCase):
    def setUp(self) -> None:
        st.session_state.clear()

    def tearDown(self) -> None:
        st.session_state.clear()

    def test_only_the_stylesheet_is_injected(self) -> None:
        with mock.patch.object(theme.st, "markdown") as markdown:
            theme.inject_theme()

        self.assertEqual(markdown.call_count, 1)
        injected = markdown.call_args.args[0]
        self.assertIn("<style", injected)
        self.assertNotIn("<script", injected)
        self.assertNotIn("<meta", injected)

    def test_security_module_only_sanitises_names(self) -> None:
        self.assertEqual(security.__all__, ["safe_filename"])
        self.assertFalse(hasattr(security, "enforce_https"))
