"""Tests for the in-memory result store and progress aggregation."""

from dgca_practice.core.models import AnswerRecord, SessionSummary
from dgca_practice.core.services.result_store import ResultStore


def _summary(correct: int, total: int, category=None, exited=False, elapsed=30) -> SessionSummary:
    answers = {}
    for index in range(total):
        question_id = f"q{index}"
        if index < correct:
            answers[question_id] = AnswerRecord(question_id, 0, True)
        else:
            answers[question_id] = AnswerRecord.unanswered(question_id)
    return SessionSummary(
        label=category or "Mixed Topics",
        score_correct=correct,
        total_questions=total,
        elapsed_seconds=elapsed,
        answers=answers,
        was_exited_early=exited,
        category=category,
    )


class TestResultStore:
    def test_report_stores_record(self):
        store = ResultStore()
        summary = _summary(3, 4, category="meteorology", exited=True, elapsed=95)

        store.report("Meteorology", summary)

        [record] = store.get_results()
        assert record.label == "Meteorology"
        assert record.category == "meteorology"
        assert record.score == 3
        assert record.total_questions == 4
        assert record.time_taken == 95
        assert record.exited is True
        assert len(record.answers) == 4
        assert store.get_result(record.id) == record
        assert store.get_result("missing") is None

    def test_results_are_newest_first_and_limited(self):
        store = ResultStore()
        for correct in range(5):
            store.report(f"Test {correct}", _summary(correct, 5))

        results = store.get_results(limit=3)

        assert [r.label for r in results] == ["Test 4", "Test 3", "Test 2"]
        assert store.get_results(limit=0) == []

    def test_clear(self):
        store = ResultStore()
        store.report("Mixed Topics", _summary(1, 2))
        store.clear()
        assert store.get_results() == []


class TestProgress:
    def test_empty_progress(self):
        progress = ResultStore().get_progress()

        assert progress.total_tests_taken == 0
        assert progress.categories == []
        assert progress.accuracy_percentage == 0

    def test_progress_by_category(self):
        store = ResultStore()
        store.report("Meteorology", _summary(4, 5, category="meteorology"))
        store.report("Meteorology", _summary(2, 5, category="meteorology"))
        store.report("Mixed Topics", _summary(5, 10))

        progress = store.get_progress()

        assert progress.total_tests_taken == 3
        assert progress.total_questions_attempted == 20
        assert progress.correct_answers == 11
        assert progress.accuracy_percentage == 55

        by_category = {entry.category: entry for entry in progress.categories}
        assert set(by_category) == {"meteorology", "all"}
        meteorology = by_category["meteorology"]
        assert meteorology.tests_taken == 2
        assert meteorology.questions_attempted == 10
        assert meteorology.correct_answers == 6
        assert meteorology.average_score == 60.0
        assert by_category["all"].average_score == 50.0
