import unittest

from models import QUESTION_COUNT, Answer, QuestionnaireState
from services.questionnaire import FlowStatus, QuestionnaireError, QuestionnaireFlow


class QuestionnaireFlowTests(unittest.TestCase):
    def setUp(self) -> None:
        self.flow = QuestionnaireFlow()
        self.flow.start()

    def test_start(self) -> None:
        flow = QuestionnaireFlow()
        self.assertIs(flow.status, FlowStatus.NOT_STARTED)
        self.assertEqual(flow.progress(), 0.0)

        flow.start()
        self.assertIs(flow.status, FlowStatus.IN_PROGRESS)
        self.assertEqual(flow.state.current_index, 0)
        self.assertEqual(flow.state.answers, [])

    def test_answering_before_start_is_rejected(self) -> None:
        with self.assertRaises(QuestionnaireError):
            QuestionnaireFlow().answer(Answer.OUI)

    def test_oui_advances(self) -> None:
        self.flow.answer(Answer.OUI)
        self.assertEqual(self.flow.state.current_index, 1)
        self.assertEqual(self.flow.state.answers, [Answer.OUI])
        self.assertIsNone(self.flow.advice)
        self.assertEqual(self.flow.progress(), 1 / QUESTION_COUNT * 100)

    def test_non_shows_advice_before_advancing(self) -> None:
        self.flow.answer("NON")
        self.assertEqual(self.flow.state.current_index, 0)
        self.assertEqual(self.flow.pending_advice, 0)
        self.assertEqual(self.flow.advice, "Réinterroger ses motivations et clarifier sa vision long terme")

        with self.assertRaises(QuestionnaireError):
            self.flow.answer(Answer.OUI)

        self.flow.confirm_advance()
        self.assertIsNone(self.flow.pending_advice)
        self.assertEqual(self.flow.state.current_index, 1)

    def test_confirm_without_advice_is_a_no_op(self) -> None:
        self.flow.confirm_advance()
        self.assertEqual(self.flow.state.current_index, 0)

    def test_previous_keeps_answers(self) -> None:
        self.flow.answer(Answer.OUI)
        self.flow.answer(Answer.OUI)
        self.flow.previous()
        self.assertEqual(self.flow.state.current_index, 1)
        self.assertEqual(self.flow.state.answers, [Answer.OUI, Answer.OUI])

        self.flow.answer(Answer.NON)
        self.assertEqual(self.flow.state.answers, [Answer.OUI, Answer.NON])

    def test_previous_on_first_question_stays(self) -> None:
        self.flow.previous()
        self.assertEqual(self.flow.state.current_index, 0)

    def test_previous_cancels_pending_advice(self) -> None:
        self.flow.answer(Answer.OUI)
        self.flow.answer(Answer.NON)
        self.flow.previous()
        self.assertIsNone(self.flow.pending_advice)
        self.assertEqual(self.flow.state.current_index, 0)

    def test_completion_after_last_question(self) -> None:
        for _ in range(QUESTION_COUNT - 1):
            self.flow.answer(Answer.OUI)
        self.flow.answer(Answer.NON)
        self.assertIs(self.flow.status, FlowStatus.IN_PROGRESS)

        self.flow.confirm_advance()
        self.assertIs(self.flow.status, FlowStatus.COMPLETED)
        self.assertEqual(self.flow.progress(), 100.0)
        self.assertEqual(len(self.flow.state.answers), QUESTION_COUNT)

        report = self.flow.report()
        self.assertEqual(report.no_count, 1)
        with self.assertRaises(QuestionnaireError):
            self.flow.answer(Answer.OUI)

    def test_restart_clears_everything(self) -> None:
        self.flow.answer(Answer.NON)
        self.flow.restart()
        self.assertIs(self.flow.status, FlowStatus.NOT_STARTED)
        self.assertIsNone(self.flow.pending_advice)
        self.assertEqual(self.flow.state, QuestionnaireState())

    def test_resumes_from_stored_state(self) -> None:
        stored = QuestionnaireState(current_index=5, answers=["OUI"] * 5 + ["bogus"], is_started=True)
        flow = QuestionnaireFlow(stored, pending_advice=None)
        self.assertEqual(flow.state.answers[-1], None)
        self.assertEqual(flow.progress(), 25.0)
        self.assertEqual(flow.current_question.text, "Ai-je une posture humaine adaptée à des jeunes en fragilité ?")

    def test_stored_index_is_clamped(self) -> None:
        self.assertEqual(QuestionnaireState(current_index=99).current_index, QUESTION_COUNT - 1)
        self.assertEqual(QuestionnaireState(current_index="x").current_index, 0)
