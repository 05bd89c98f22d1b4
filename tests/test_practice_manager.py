"""Tests for the PracticeManager facade."""

import pytest

from dgca_practice.core.errors import InvalidConfiguration, InvalidSessionState, NoActiveSession, QuestionBankError
from dgca_practice.core.models import SessionPhase


class TestQuestionBank:
    def test_categories_from_sample_bank(self, manager):
        categories = manager.list_categories()

        assert categories["instruments"] == 3
        assert categories["regulations"] == 1
        assert manager.get_question_count() == 12
        assert manager.get_question_count("meteorology") == 2
        assert manager.has_questions()


class TestStartPractice:
    def test_start_mixed_topics(self, manager, rng):
        state = manager.start_practice(question_count=5, time_limit_minutes=10, rng=rng)

        assert state.phase is SessionPhase.IN_PROGRESS
        assert state.remaining_seconds == 600
        config = manager.get_session_config()
        assert config.label == "Mixed Topics"
        assert config.category is None
        assert len(config.questions) == 5
        assert manager.has_active_session()

    def test_start_by_category_caps_question_count(self, manager, rng):
        manager.start_practice(category="radio-navigation", question_count=10, rng=rng)

        config = manager.get_session_config()
        assert config.label == "Radio Navigation"
        assert config.category == "radio-navigation"
        assert {q.category for q in config.questions} == {"radio-navigation"}
        assert len(config.questions) == 2

    def test_all_is_treated_as_mixed(self, manager, rng):
        manager.start_practice(category="all", question_count=3, rng=rng)
        assert manager.get_session_config().category is None

    @pytest.mark.parametrize(
        "count, minutes",
        [(0, 15), (51, 15), (10, 0), (10, 61)],
    )
    def test_bounds_are_enforced(self, manager, count, minutes):
        with pytest.raises(InvalidConfiguration):
            manager.start_practice(question_count=count, time_limit_minutes=minutes)
        assert not manager.has_active_session()

    def test_unknown_category(self, manager):
        with pytest.raises(QuestionBankError):
            manager.start_practice(category="astronomy")

    def test_second_start_requires_replace(self, manager, result_store, rng):
        manager.start_practice(question_count=3, rng=rng)
        with pytest.raises(InvalidSessionState):
            manager.start_practice(question_count=3, rng=rng)

        manager.start_practice(category="meteorology", question_count=2, replace=True, rng=rng)

        [replaced] = result_store.get_results()
        assert replaced.exited is True
        assert replaced.label == "Mixed Topics"
        assert manager.get_session_config().category == "meteorology"

    def test_start_after_finish(self, manager, rng):
        manager.start_practice(question_count=3, rng=rng)
        manager.finish()
        manager.start_practice(question_count=3, rng=rng)
        assert manager.has_active_session()


class TestExitFlow:
    def test_confirm_requires_request(self, manager, rng):
        manager.start_practice(question_count=3, rng=rng)

        with pytest.raises(InvalidSessionState):
            manager.confirm_exit()

        manager.request_exit()
        assert manager.is_exit_requested()
        assert manager.has_active_session()

        summary = manager.confirm_exit()

        assert summary.was_exited_early
        assert not manager.is_exit_requested()
        assert manager.get_session_state().phase is SessionPhase.EXITED

    def test_cancel_resets_request(self, manager, rng):
        manager.start_practice(question_count=3, rng=rng)
        manager.request_exit()
        manager.cancel_exit()

        assert not manager.is_exit_requested()
        with pytest.raises(InvalidSessionState):
            manager.confirm_exit()
        manager.select_answer(0)
        assert manager.get_answered_flags()[0] is True


class TestSessionOperations:
    def test_no_session(self, manager):
        with pytest.raises(NoActiveSession):
            manager.get_session_state()
        with pytest.raises(NoActiveSession):
            manager.select_answer(0)
        assert manager.tick() is False
        assert not manager.has_active_session()

    def test_finish_records_result(self, manager, rng):
        manager.start_practice(question_count=4, rng=rng)
        question = manager.get_current_question()
        manager.select_answer(question.correct_option_index)
        manager.go_to_next()

        summary = manager.finish()

        assert summary.score_correct == 1
        assert summary.unanswered_count == 3
        assert manager.get_summary() is summary
        [result] = manager.get_results()
        assert result.score == 1
        assert manager.get_progress().total_tests_taken == 1

    def test_tick_expires_session(self, manager, rng):
        manager.start_practice(question_count=2, time_limit_minutes=1, rng=rng)

        expired = [manager.tick() for _ in range(60)]

        assert expired[-1] is True
        assert expired.count(True) == 1
        assert not manager.has_active_session()
        assert manager.get_summary().was_exited_early is False

    def test_navigation(self, manager, rng):
        manager.start_practice(question_count=3, rng=rng)

        assert manager.go_to_next() == 1
        assert manager.go_to_index(7) == 2
        assert manager.go_to_previous() == 1


class TestFlags:
    def test_welcome_flag(self, manager):
        assert not manager.has_seen_welcome()
        manager.mark_welcome_shown()
        assert manager.has_seen_welcome()

    def test_reset_exits_active_session_and_keeps_results(self, manager, result_store, rng):
        manager.mark_welcome_shown()
        manager.start_practice(question_count=3, rng=rng)

        manager.reset()

        assert not manager.has_seen_welcome()
        assert not manager.has_active_session()
        assert result_store.get_results()[0].exited is True
        with pytest.raises(NoActiveSession):
            manager.get_summary()


class TestSnapshot:
    def test_snapshot_without_session(self, manager):
        assert manager.get_session_id() == 0
        with pytest.raises(NoActiveSession):
            manager.get_snapshot()

    def test_snapshot_is_consistent(self, manager, rng):
        manager.start_practice(question_count=3, rng=rng)
        manager.select_answer(0)
        manager.request_exit()

        snapshot = manager.get_snapshot()

        assert snapshot.session_id == 1
        assert snapshot.is_active
        assert snapshot.answered == (True, False, False)
        assert snapshot.exit_requested
        assert snapshot.current_question == snapshot.config.questions[0]
        assert snapshot.summary is None

    def test_replacement_changes_session_id(self, manager, rng):
        manager.start_practice(question_count=10, rng=rng)
        first = manager.get_snapshot()

        manager.start_practice(question_count=2, replace=True, rng=rng)
        second = manager.get_snapshot()

        assert second.session_id == first.session_id + 1
        assert manager.get_session_id() == second.session_id
        assert len(second.answered) == len(second.config.questions) == 2
        assert second.state.current_index == 0

    def test_snapshot_after_finish_carries_summary(self, manager, rng):
        manager.start_practice(question_count=3, rng=rng)
        summary = manager.finish()

        snapshot = manager.get_snapshot()

        assert not snapshot.is_active
        assert snapshot.summary is summary
        assert summary.questions == snapshot.config.questions
