"""State machine for a single timed practice test.

A session moves through ``CONFIGURING -> IN_PROGRESS -> FINISHED | EXITED``.
Finishing, confirming an exit and clock expiry all share one terminal path:
unanswered questions are filled in, the score is computed once from the
final answer mapping, the clock is stopped and the summary is handed to the
result reporter. A reporter failure is logged and never reopens the session.
"""

from __future__ import annotations

import logging
import math
import time
from typing import Callable

from dgca_practice.core.errors import InvalidConfiguration, InvalidOption, InvalidSessionState
from dgca_practice.core.models import (
    AnswerRecord,
    QuestionItem,
    SessionConfig,
    SessionPhase,
    SessionState,
    SessionSummary,
)
from dgca_practice.core.services.result_store import ResultReporter
from dgca_practice.core.services.session_clock import SessionClock

logger = logging.getLogger(__name__)


class PracticeSession:
    """Owns the state of one practice test from ``begin`` to its summary."""

    def __init__(
        self,
        reporter: ResultReporter | None = None,
        clock: SessionClock | None = None,
        now: Callable[[], float] = time.time,
    ) -> None:
        self._reporter = reporter
        self._clock = clock or SessionClock()
        self._clock.set_expiry_handler(self._handle_clock_expired)
        self._now = now

        self._config: SessionConfig | None = None
        self._state = SessionState()
        self._summary: SessionSummary | None = None
        self._report_error: Exception | None = None

    # --- Lifecycle ---

    def begin(self, config: SessionConfig) -> None:
        if self._state.phase is not SessionPhase.CONFIGURING:
            raise InvalidSessionState("A session can only be started once; create a new session instead.")
        if not config.questions:
            raise InvalidConfiguration("A practice session needs at least one question.")

        # Validates the budget before any state changes.
        self._clock.start(config.time_budget_seconds)

        self._config = config
        self._state = SessionState(
            phase=SessionPhase.IN_PROGRESS,
            current_index=0,
            answers={},
            remaining_seconds=config.time_budget_seconds,
            started_at_epoch=self._now(),
        )
        logger.info(
            "Practice session '%s' started: %d questions, %d seconds",
            config.label,
            len(config.questions),
            config.time_budget_seconds,
        )

    def tick(self) -> bool:
        """Forward one clock tick. Returns True when the tick ended the session."""
        if self._state.phase is not SessionPhase.IN_PROGRESS:
            return False
        expired = self._clock.tick()
        if not expired:
            self._state.remaining_seconds = self._clock.remaining_seconds
        return expired

    def finish(self) -> SessionSummary:
        self._require_in_progress("finish")
        return self._terminate(SessionPhase.FINISHED)

    def request_exit(self) -> None:
        """Acknowledge an exit request; the confirmation prompt belongs to the caller."""
        self._require_in_progress("request an exit from")

    def confirm_exit(self) -> SessionSummary:
        self._require_in_progress("exit")
        return self._terminate(SessionPhase.EXITED)

    def cancel_exit(self) -> None:
        self._require_in_progress("cancel an exit from")

    # --- Answers ---

    def select_answer(self, option_index: int) -> AnswerRecord:
        self._require_in_progress("answer")
        question = self._current_question()
        if (
            isinstance(option_index, bool)
            or not isinstance(option_index, int)
            or not 0 <= option_index < len(question.options)
        ):
            raise InvalidOption(
                f"Option {option_index!r} is out of range for question {question.id} "
                f"({len(question.options)} options)."
            )

        record = AnswerRecord(
            question_id=question.id,
            selected_option_index=option_index,
            is_correct=question.is_correct(option_index),
        )
        self._state.answers[question.id] = record
        return record

    # --- Navigation ---

    def go_to_next(self) -> int:
        return self.go_to_index(self._state.current_index + 1)

    def go_to_previous(self) -> int:
        return self.go_to_index(self._state.current_index - 1)

    def go_to_index(self, index: int) -> int:
        self._require_in_progress("navigate")
        last_index = len(self._questions()) - 1
        self._state.current_index = max(0, min(index, last_index))
        return self._state.current_index

    # --- Read accessors ---

    @property
    def phase(self) -> SessionPhase:
        return self._state.phase

    @property
    def state(self) -> SessionState:
        return self._state.copy()

    @property
    def config(self) -> SessionConfig | None:
        return self._config

    @property
    def summary(self) -> SessionSummary | None:
        return self._summary

    @property
    def report_error(self) -> Exception | None:
        return self._report_error

    @property
    def current_question(self) -> QuestionItem | None:
        if self._config is None:
            return None
        return self._current_question()

    @property
    def answered_count(self) -> int:
        return sum(1 for record in self._state.answers.values() if record.is_answered)

    def is_answered(self, index: int) -> bool:
        questions = self._questions()
        if not 0 <= index < len(questions):
            return False
        record = self._state.answers.get(questions[index].id)
        return record is not None and record.is_answered

    # --- Internals ---

    def _handle_clock_expired(self) -> None:
        if self._state.phase is SessionPhase.IN_PROGRESS:
            self._state.remaining_seconds = 0
            self._terminate(SessionPhase.FINISHED)

    def _terminate(self, phase: SessionPhase) -> SessionSummary:
        questions = self._questions()
        ended_at = self._now()

        answers: dict[str, AnswerRecord] = {}
        for question in questions:
            answers[question.id] = self._state.answers.get(question.id) or AnswerRecord.unanswered(question.id)
        self._state.answers = dict(answers)

        started_at = self._state.started_at_epoch if self._state.started_at_epoch is not None else ended_at
        summary = SessionSummary(
            label=self._config.label,
            score_correct=sum(1 for record in answers.values() if record.is_correct),
            total_questions=len(questions),
            elapsed_seconds=max(0, math.floor(ended_at - started_at)),
            answers=answers,
            was_exited_early=phase is SessionPhase.EXITED,
            category=self._config.category,
            questions=questions,
        )

        self._clock.stop()
        self._state.remaining_seconds = self._clock.remaining_seconds
        self._state.phase = phase
        self._summary = summary
        logger.info(
            "Practice session '%s' %s: %d/%d correct in %ds",
            summary.label,
            phase.value,
            summary.score_correct,
            summary.total_questions,
            summary.elapsed_seconds,
        )

        self._report(summary)
        return summary

    def _report(self, summary: SessionSummary) -> None:
        if self._reporter is None:
            return
        try:
            self._reporter.report(summary.label, summary)
        except Exception as exc:  # the session stays terminal whatever the reporter does
            self._report_error = exc
            logger.exception("Result reporter failed for session '%s'", summary.label)

    def _require_in_progress(self, action: str) -> None:
        phase = self._state.phase
        if phase is not SessionPhase.IN_PROGRESS:
            raise InvalidSessionState(f"Cannot {action} a session that is {phase.value}.")

    def _questions(self) -> tuple[QuestionItem, ...]:
        if self._config is None:
            return ()
        return self._config.questions

    def _current_question(self) -> QuestionItem:
        return self._config.questions[self._state.current_index]
