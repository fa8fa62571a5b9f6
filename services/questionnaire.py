"""Linear progression through the self-assessment questionnaire."""
from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from calc import QuestionnaireReport, questionnaire_report
from models import QUESTION_COUNT, QUESTIONS, Answer, Question, QuestionnaireState

logger = logging.getLogger(__name__)


class FlowStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class QuestionnaireError(RuntimeError):
    """Raised when an action is not allowed in the current flow status."""


class QuestionnaireFlow:
    """Drive a :class:`QuestionnaireState` through its questions.

    A ``NON`` answer leaves the flow on the same question with
    :attr:`pending_advice` set; the caller shows the advice and then calls
    :meth:`confirm_advance` once the display delay has elapsed. Going back
    never erases recorded answers.
    """

    def __init__(self, state: Optional[QuestionnaireState] = None, pending_advice: Optional[int] = None) -> None:
        self.state = state or QuestionnaireState()
        self.pending_advice = pending_advice

    @property
    def status(self) -> FlowStatus:
        if self.state.is_completed:
            return FlowStatus.COMPLETED
        if self.state.is_started:
            return FlowStatus.IN_PROGRESS
        return FlowStatus.NOT_STARTED

    @property
    def current_question(self) -> Question:
        return QUESTIONS[self.state.current_index]

    @property
    def advice(self) -> Optional[str]:
        if self.pending_advice is None:
            return None
        return QUESTIONS[self.pending_advice].advice

    def progress(self) -> float:
        """Completion percentage shown by the progress bar."""

        if self.status is FlowStatus.COMPLETED:
            return 100.0
        if self.status is FlowStatus.NOT_STARTED:
            return 0.0
        return self.state.current_index / QUESTION_COUNT * 100

    def start(self) -> None:
        self.state = QuestionnaireState(is_started=True)
        self.pending_advice = None

    def answer(self, value: Answer | str) -> None:
        if self.status is not FlowStatus.IN_PROGRESS:
            raise QuestionnaireError("Le questionnaire n'est pas en cours")
        if self.pending_advice is not None:
            raise QuestionnaireError("Un conseil est en cours d'affichage")
        answer = Answer(value)
        index = self.state.current_index
        answers = list(self.state.answers)
        answers.extend([None] * (index + 1 - len(answers)))
        answers[index] = answer
        self.state = self.state.model_copy(update={"answers": answers})
        if answer is Answer.NON:
            self.pending_advice = index
        else:
            self._advance()

    def confirm_advance(self) -> None:
        """Leave the advice display and move on to the next question."""

        if self.pending_advice is None:
            return
        self.pending_advice = None
        self._advance()

    def _advance(self) -> None:
        index = self.state.current_index
        if index >= QUESTION_COUNT - 1:
            self.state = self.state.model_copy(update={"is_completed": True})
            logger.info("Questionnaire completed with %d NON answers", self.state.no_count())
        else:
            self.state = self.state.model_copy(update={"current_index": index + 1})

    def previous(self) -> None:
        self.pending_advice = None
        if self.status is FlowStatus.IN_PROGRESS and self.state.current_index > 0:
            self.state = self.state.model_copy(update={"current_index": self.state.current_index - 1})

    def restart(self) -> None:
        self.state = QuestionnaireState()
        self.pending_advice = None

    def report(self) -> QuestionnaireReport:
        return questionnaire_report(self.state.answers)


__all__ = ["FlowStatus", "QuestionnaireError", "QuestionnaireFlow"]
