"""Service for storing finished practice tests and aggregating progress."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
import logging
from threading import Lock
from typing import Protocol
from uuid import uuid4

from dgca_practice.constants.practice_constants import ALL_CATEGORIES, RECENT_RESULTS_LIMIT
from dgca_practice.core.models import (
    CategoryProgress,
    SessionSummary,
    TestResultRecord,
    UserProgress,
)

logger = logging.getLogger(__name__)


class ResultReporter(Protocol):
    """Receives the summary of every terminated practice session."""

    def report(self, label: str, summary: SessionSummary) -> None:
        ...


@dataclass(slots=True)
class _CategoryTally:
    """Mutable per-category accumulator used while building progress."""

    category: str
    tests_taken: int = 0
    questions_attempted: int = 0
    correct_answers: int = 0
    score_total: float = 0.0
    last_attempted: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class ResultStore:
    """In-memory result reporter keeping test history for the running process."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._results: list[TestResultRecord] = []

    def report(self, label: str, summary: SessionSummary) -> None:
        record = TestResultRecord(
            id=uuid4().hex,
            label=label,
            category=summary.category,
            score=summary.score_correct,
            total_questions=summary.total_questions,
            time_taken=summary.elapsed_seconds,
            answers=tuple(summary.answers.values()),
            exited=summary.was_exited_early,
            created_at=datetime.now(timezone.utc),
        )
        with self._lock:
            self._results.append(record)
        logger.info("Stored result %s for '%s': %d/%d", record.id, label, record.score, record.total_questions)

    def get_results(self, limit: int = RECENT_RESULTS_LIMIT) -> list[TestResultRecord]:
        """Return up to ``limit`` results, newest first."""
        with self._lock:
            newest_first = list(reversed(self._results))
        return newest_first[: max(0, limit)]

    def get_result(self, result_id: str) -> TestResultRecord | None:
        with self._lock:
            return next((r for r in self._results if r.id == result_id), None)

    def get_progress(self) -> UserProgress:
        with self._lock:
            results = list(self._results)

        tallies: dict[str, _CategoryTally] = {}
        for result in results:
            key = result.category or ALL_CATEGORIES
            tally = tallies.get(key)
            if tally is None:
                tally = _CategoryTally(category=key, last_attempted=result.created_at)
                tallies[key] = tally
            tally.tests_taken += 1
            tally.questions_attempted += result.total_questions
            tally.correct_answers += result.score
            if result.total_questions:
                tally.score_total += result.score / result.total_questions * 100
            tally.last_attempted = max(tally.last_attempted, result.created_at)

        categories = [
            CategoryProgress(
                category=tally.category,
                tests_taken=tally.tests_taken,
                questions_attempted=tally.questions_attempted,
                correct_answers=tally.correct_answers,
                average_score=round(tally.score_total / tally.tests_taken, 1),
                last_attempted=tally.last_attempted,
            )
            for tally in sorted(tallies.values(), key=lambda t: t.last_attempted, reverse=True)
        ]
        return UserProgress(
            total_tests_taken=len(results),
            total_questions_attempted=sum(r.total_questions for r in results),
            correct_answers=sum(r.score for r in results),
            categories=categories,
        )

    def clear(self) -> None:
        with self._lock:
            self._results.clear()
