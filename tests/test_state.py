from __future__ import annotations

import unittest

import streamlit as st

from models import BudgetInputs, StatutesData
from services.auth import AUTH_SESSION_KEY
from state import (
    NEW_RECORD,
    STATE_SPECS,
    editing_record,
    ensure_session_defaults,
    reset_app_state,
    reset_session_keys,
    set_editing_record,
)


class SessionDefaultsTests(unittest.TestCase):
    def setUp(self) -> None:
        st.session_state.clear()

    def tearDown(self) -> None:
        st.session_state.clear()

    def test_defaults_are_populated(self) -> None:
        ensure_session_defaults()
        for key in STATE_SPECS:
            self.assertIn(key, st.session_state)
        self.assertIsInstance(st.session_state["budget_inputs"], BudgetInputs)
        self.assertIsNone(st.session_state["questionnaire_pending_advice"])

    def test_invalid_values_are_replaced(self) -> None:
        st.session_state["statutes_form"] = {"association_name": "EDP"}
        st.session_state["statutes_preview"] = "yes"
        ensure_session_defaults()
        self.assertEqual(st.session_state["statutes_form"], StatutesData())
        self.assertFalse(st.session_state["statutes_preview"])

    def test_overrides_win(self) -> None:
        ensure_session_defaults({"questionnaire_pending_advice": 3})
        self.assertEqual(st.session_state["questionnaire_pending_advice"], 3)

    def test_reset_selected_keys(self) -> None:
        ensure_session_defaults()
        st.session_state["statutes_form"] = StatutesData(association_name="EDP")
        st.session_state["statutes_preview"] = True
        st.session_state["scratch"] = 1

        reset_session_keys(["statutes_form", "statutes_preview", "scratch"])

        self.assertEqual(st.session_state["statutes_form"], StatutesData())
        self.assertFalse(st.session_state["statutes_preview"])
        self.assertNotIn("scratch", st.session_state)

    def test_reset_app_state_keeps_the_user(self) -> None:
        ensure_session_defaults()
        st.session_state[AUTH_SESSION_KEY] = {"username": "admin", "display_name": "Admin", "role": "admin"}
        st.session_state["budget_inputs"] = BudgetInputs(local_cost="1")

        reset_app_state()

        self.assertIn(AUTH_SESSION_KEY, st.session_state)
        self.assertEqual(st.session_state["budget_inputs"], BudgetInputs())


class EditingRecordTests(unittest.TestCase):
    def setUp(self) -> None:
        st.session_state.clear()
        ensure_session_defaults()

    def tearDown(self) -> None:
        st.session_state.clear()

    def test_each_tool_tracks_its_own_record(self) -> None:
        self.assertIsNone(editing_record("partnerships"))

        set_editing_record("partnerships", NEW_RECORD)
        set_editing_record("subsidies", "abc")
        self.assertEqual(editing_record("partnerships"), NEW_RECORD)
        self.assertEqual(editing_record("subsidies"), "abc")

        set_editing_record("partnerships", None)
        self.assertIsNone(editing_record("partnerships"))
        self.assertEqual(editing_record("subsidies"), "abc")
