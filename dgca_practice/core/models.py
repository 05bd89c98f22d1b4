"""Domain models for the practice-test engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from dgca_practice.constants.practice_constants import UNANSWERED_OPTION_INDEX


class Difficulty(Enum):
    """Difficulty tag attached to every question."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class SessionPhase(Enum):
    """Lifecycle stage of a practice session."""

    CONFIGURING = "configuring"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"
    EXITED = "exited"

    @property
    def is_terminal(self) -> bool:
        return self in (SessionPhase.FINISHED, SessionPhase.EXITED)


@dataclass(frozen=True, slots=True)
class QuestionItem:
    """Multiple-choice question served to a practice session."""

    id: str
    prompt: str
    options: tuple[str, ...]
    correct_option_index: int
    explanation: str | None = None
    difficulty: Difficulty = Difficulty.MEDIUM
    category: str = "general"
    source: str | None = None

    def is_correct(self, option_index: int) -> bool:
        return option_index == self.correct_option_index


@dataclass(frozen=True, slots=True)
class SessionConfig:
    """Immutable input to ``PracticeSession.begin``."""

    questions: tuple[QuestionItem, ...]
    time_budget_seconds: int
    label: str
    category: str | None = None


@dataclass(frozen=True, slots=True)
class AnswerRecord:
    """Recorded choice (or absence of one) for a single question."""

    question_id: str
    selected_option_index: int
    is_correct: bool

    @property
    def is_answered(self) -> bool:
        return self.selected_option_index != UNANSWERED_OPTION_INDEX

    @classmethod
    def unanswered(cls, question_id: str) -> AnswerRecord:
        return cls(
            question_id=question_id,
            selected_option_index=UNANSWERED_OPTION_INDEX,
            is_correct=False,
        )


@dataclass(slots=True)
class SessionState:
    """Mutable state owned by a ``PracticeSession``.

    Readers only ever see copies produced by :meth:`copy`.
    """

    phase: SessionPhase = SessionPhase.CONFIGURING
    current_index: int = 0
    answers: dict[str, AnswerRecord] = field(default_factory=dict)
    remaining_seconds: int = 0
    started_at_epoch: float | None = None

    def copy(self) -> SessionState:
        return SessionState(
            phase=self.phase,
            current_index=self.current_index,
            answers=dict(self.answers),
            remaining_seconds=self.remaining_seconds,
            started_at_epoch=self.started_at_epoch,
        )


@dataclass(frozen=True, slots=True)
class SessionSummary:
    """Final, immutable result of a terminated session.

    ``answers`` is exposed as a read-only mapping; ``questions`` keeps the
    session's question order for review screens.
    """

    label: str
    score_correct: int
    total_questions: int
    elapsed_seconds: int
    answers: Mapping[str, AnswerRecord]
    was_exited_early: bool
    category: str | None = None
    questions: tuple[QuestionItem, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "answers", MappingProxyType(dict(self.answers)))
        object.__setattr__(self, "questions", tuple(self.questions))

    @property
    def answered_count(self) -> int:
        return sum(1 for record in self.answers.values() if record.is_answered)

    @property
    def unanswered_count(self) -> int:
        return self.total_questions - self.answered_count

    @property
    def incorrect_count(self) -> int:
        return self.answered_count - self.score_correct

    @property
    def score_percentage(self) -> int:
        if self.total_questions == 0:
            return 0
        return round(self.score_correct / self.total_questions * 100)


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    """Consistent view of the active session, read under one manager lock."""

    session_id: int
    state: SessionState
    config: SessionConfig
    current_question: QuestionItem
    answered: tuple[bool, ...]
    exit_requested: bool
    summary: SessionSummary | None = None

    @property
    def is_active(self) -> bool:
        return not self.state.phase.is_terminal


@dataclass(frozen=True, slots=True)
class TestResultRecord:
    """Persisted outcome of one practice test."""

    __test__ = False  # keep pytest from collecting this as a test class

    id: str
    label: str
    category: str | None
    score: int
    total_questions: int
    time_taken: int
    answers: tuple[AnswerRecord, ...]
    exited: bool
    created_at: datetime


@dataclass(frozen=True, slots=True)
class CategoryProgress:
    """Aggregated results for one subject category."""

    category: str
    tests_taken: int
    questions_attempted: int
    correct_answers: int
    average_score: float
    last_attempted: datetime


@dataclass(frozen=True, slots=True)
class UserProgress:
    """Aggregated results across every stored practice test."""

    total_tests_taken: int
    total_questions_attempted: int
    correct_answers: int
    categories: list[CategoryProgress]

    @property
    def accuracy_percentage(self) -> int:
        if self.total_questions_attempted == 0:
            return 0
        return round(self.correct_answers / self.total_questions_attempted * 100)
