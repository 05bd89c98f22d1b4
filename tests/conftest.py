import random

import pytest

from dgca_practice.core.models import QuestionItem, SessionConfig
from dgca_practice.core.practice_manager import PracticeManager
from dgca_practice.core.question_importer import load_sample_question_bank
from dgca_practice.core.services.result_store import ResultStore


class FakeNow:
    """Wall clock the tests move by hand."""

    def __init__(self, start: float = 1_000.0):
        self.value = start

    def __call__(self) -> float:
        return self.value

    def advance(self, seconds: float) -> None:
        self.value += seconds


class RecordingReporter:
    def __init__(self):
        self.reports = []

    def report(self, label, summary):
        self.reports.append((label, summary))


class FailingReporter:
    def __init__(self):
        self.calls = 0

    def report(self, label, summary):
        self.calls += 1
        raise RuntimeError("storage unavailable")


def make_question(question_id: str, correct: int = 0, category: str = "general", options=None) -> QuestionItem:
    return QuestionItem(
        id=question_id,
        prompt=f"Prompt for {question_id}",
        options=tuple(options or ("A", "B", "C", "D")),
        correct_option_index=correct,
        category=category,
    )


@pytest.fixture
def fake_now():
    return FakeNow()


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def three_questions():
    return (make_question("q1", correct=1), make_question("q2", correct=0), make_question("q3", correct=2))


@pytest.fixture
def three_question_config(three_questions):
    return SessionConfig(questions=three_questions, time_budget_seconds=60, label="Mixed Topics")


@pytest.fixture
def sample_questions():
    return load_sample_question_bank().questions


@pytest.fixture
def result_store():
    return ResultStore()


@pytest.fixture
def manager(sample_questions, result_store):
    practice_manager = PracticeManager(result_store=result_store)
    practice_manager.load_question_bank(sample_questions)
    return practice_manager


@pytest.fixture
def rng():
    return random.Random(7)
