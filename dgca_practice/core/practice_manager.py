"""Business logic shared by the Qt window and the HTTP API.

``PracticeManager`` is the single process-wide state object: it owns the
question bank, the result store, the active practice session and the small
UI flags that the web client used to keep in browser storage. Every public
method takes the manager lock, so clock ticks from the Qt timer and calls
from API threads are applied one at a time.
"""

from __future__ import annotations

import logging
import random
from threading import Lock
from typing import Callable

from dgca_practice.constants.practice_constants import (
    ALL_CATEGORIES,
    DEFAULT_QUESTION_COUNT,
    DEFAULT_TIME_LIMIT_MINUTES,
    MAX_QUESTION_COUNT,
    MAX_TIME_LIMIT_MINUTES,
    MIN_QUESTION_COUNT,
    MIN_TIME_LIMIT_MINUTES,
    MIXED_TOPICS_LABEL,
    RECENT_RESULTS_LIMIT,
)
from dgca_practice.core.errors import InvalidConfiguration, InvalidSessionState, NoActiveSession
from dgca_practice.core.models import (
    AnswerRecord,
    QuestionItem,
    SessionConfig,
    SessionSnapshot,
    SessionState,
    SessionSummary,
    TestResultRecord,
    UserProgress,
)
from dgca_practice.core.services.practice_session import PracticeSession
from dgca_practice.core.services.question_bank import QuestionBank
from dgca_practice.core.services.result_store import ResultReporter, ResultStore

logger = logging.getLogger(__name__)


class PracticeManager:
    """Facade for the practice services: QuestionBank, ResultStore and PracticeSession."""

    def __init__(
        self,
        question_bank: QuestionBank | None = None,
        result_store: ResultStore | None = None,
        session_factory: Callable[[ResultReporter], PracticeSession] | None = None,
    ) -> None:
        self._lock = Lock()

        self._bank = question_bank or QuestionBank()
        self._results = result_store or ResultStore()
        self._session_factory = session_factory or (lambda reporter: PracticeSession(reporter=reporter))
        self._session: PracticeSession | None = None
        self._session_serial: int = 0

        self._exit_requested: bool = False
        self._welcome_shown: bool = False

    # --- Question Bank ---

    def load_question_bank(self, questions: list[QuestionItem]) -> None:
        with self._lock:
            self._bank.load_questions(questions)
            logger.info("Loaded %d questions across %d categories", len(questions), len(self._bank.list_categories()))

    def list_categories(self) -> dict[str, int]:
        with self._lock:
            return self._bank.category_counts()

    def get_question_count(self, category: str | None = None) -> int:
        with self._lock:
            return self._bank.question_count(category)

    def has_questions(self) -> bool:
        with self._lock:
            return self._bank.has_questions()

    # --- Session lifecycle ---

    def start_practice(
        self,
        category: str | None = None,
        question_count: int = DEFAULT_QUESTION_COUNT,
        time_limit_minutes: int = DEFAULT_TIME_LIMIT_MINUTES,
        label: str | None = None,
        *,
        replace: bool = False,
        rng: random.Random | None = None,
    ) -> SessionState:
        if not MIN_QUESTION_COUNT <= question_count <= MAX_QUESTION_COUNT:
            raise InvalidConfiguration(
                f"Question count must be between {MIN_QUESTION_COUNT} and {MAX_QUESTION_COUNT}."
            )
        if not MIN_TIME_LIMIT_MINUTES <= time_limit_minutes <= MAX_TIME_LIMIT_MINUTES:
            raise InvalidConfiguration(
                f"Time limit must be between {MIN_TIME_LIMIT_MINUTES} and {MAX_TIME_LIMIT_MINUTES} minutes."
            )

        with self._lock:
            if self._session is not None and not self._session.phase.is_terminal and not replace:
                raise InvalidSessionState("A practice test is already in progress.")

            normalized_category = None if category in (None, "", ALL_CATEGORIES) else category
            questions = self._bank.draw_questions(normalized_category, question_count, rng=rng)
            config = SessionConfig(
                questions=tuple(questions),
                time_budget_seconds=time_limit_minutes * 60,
                label=label or self._default_label(normalized_category),
                category=normalized_category,
            )

            if self._session is not None and not self._session.phase.is_terminal:
                logger.info("Replacing unfinished practice session '%s'", self._session.config.label)
                self._session.confirm_exit()

            session = self._session_factory(self._results)
            session.begin(config)
            self._session = session
            self._session_serial += 1
            self._exit_requested = False
            return session.state

    def finish(self) -> SessionSummary:
        with self._lock:
            summary = self._require_session().finish()
            self._exit_requested = False
            return summary

    def request_exit(self) -> None:
        with self._lock:
            self._require_session().request_exit()
            self._exit_requested = True

    def confirm_exit(self) -> SessionSummary:
        with self._lock:
            session = self._require_session()
            if not self._exit_requested:
                raise InvalidSessionState("Exit must be requested before it can be confirmed.")
            summary = session.confirm_exit()
            self._exit_requested = False
            return summary

    def cancel_exit(self) -> None:
        with self._lock:
            self._require_session().cancel_exit()
            self._exit_requested = False

    def is_exit_requested(self) -> bool:
        with self._lock:
            return self._exit_requested

    def tick(self) -> bool:
        """Advance the active session's clock by one second, if there is one."""
        with self._lock:
            if self._session is None:
                return False
            expired = self._session.tick()
            if expired:
                self._exit_requested = False
            return expired

    # --- Answers & navigation ---

    def select_answer(self, option_index: int) -> AnswerRecord:
        with self._lock:
            return self._require_session().select_answer(option_index)

    def go_to_next(self) -> int:
        with self._lock:
            return self._require_session().go_to_next()

    def go_to_previous(self) -> int:
        with self._lock:
            return self._require_session().go_to_previous()

    def go_to_index(self, index: int) -> int:
        with self._lock:
            return self._require_session().go_to_index(index)

    # --- Session reads ---

    def has_active_session(self) -> bool:
        with self._lock:
            return self._session is not None and not self._session.phase.is_terminal

    def get_session_state(self) -> SessionState:
        with self._lock:
            return self._require_session().state

    def get_session_config(self) -> SessionConfig:
        with self._lock:
            return self._require_session().config

    def get_current_question(self) -> QuestionItem:
        with self._lock:
            return self._require_session().current_question

    def get_summary(self) -> SessionSummary | None:
        with self._lock:
            return self._require_session().summary

    def get_answered_flags(self) -> list[bool]:
        with self._lock:
            session = self._require_session()
            return [session.is_answered(index) for index in range(len(session.config.questions))]

    def get_snapshot(self) -> SessionSnapshot:
        """Read state, config, current question, flags and summary in one step.

        Readers that need more than one of these values use the snapshot so a
        session started by another client cannot be mixed into the result.
        """
        with self._lock:
            session = self._require_session()
            return SessionSnapshot(
                session_id=self._session_serial,
                state=session.state,
                config=session.config,
                current_question=session.current_question,
                answered=tuple(session.is_answered(index) for index in range(len(session.config.questions))),
                exit_requested=self._exit_requested,
                summary=session.summary,
            )

    def get_session_id(self) -> int:
        """Serial of the most recently started session; 0 before the first one."""
        with self._lock:
            return self._session_serial

    # --- Results ---

    def get_results(self, limit: int = RECENT_RESULTS_LIMIT) -> list[TestResultRecord]:
        return self._results.get_results(limit)

    def get_progress(self) -> UserProgress:
        return self._results.get_progress()

    # --- Process-wide UI flags ---

    def mark_welcome_shown(self) -> None:
        with self._lock:
            self._welcome_shown = True

    def has_seen_welcome(self) -> bool:
        with self._lock:
            return self._welcome_shown

    def reset(self) -> None:
        """Drop the active session and UI flags; stored results are kept."""
        with self._lock:
            if self._session is not None and not self._session.phase.is_terminal:
                self._session.confirm_exit()
            self._session = None
            self._exit_requested = False
            self._welcome_shown = False

    # --- Internals ---

    def _require_session(self) -> PracticeSession:
        if self._session is None:
            raise NoActiveSession("No practice test has been started.")
        return self._session

    def _default_label(self, category: str | None) -> str:
        if category is None:
            return MIXED_TOPICS_LABEL
        return category.replace("-", " ").title()
