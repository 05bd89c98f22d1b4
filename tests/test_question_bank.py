"""Tests for the question bank service."""

import random

import pytest

from conftest import make_question
from dgca_practice.core.errors import QuestionBankError
from dgca_practice.core.models import QuestionItem
from dgca_practice.core.services.question_bank import QuestionBank


@pytest.fixture
def bank():
    question_bank = QuestionBank()
    question_bank.load_questions(
        [
            make_question("met-1", category="meteorology"),
            make_question("met-2", category="Meteorology "),
            make_question("nav-1", category="radio-navigation"),
        ]
    )
    return question_bank


class TestLoading:
    def test_categories_are_normalized_and_counted(self, bank):
        assert bank.category_counts() == {"meteorology": 2, "radio-navigation": 1}
        assert bank.list_categories() == ["meteorology", "radio-navigation"]
        assert bank.question_count() == 3
        assert bank.question_count("all") == 3
        assert bank.question_count("meteorology") == 2

    def test_empty_load_is_rejected(self):
        with pytest.raises(QuestionBankError):
            QuestionBank().load_questions([])

    def test_duplicate_ids_are_rejected(self, bank):
        with pytest.raises(QuestionBankError):
            bank.load_questions([make_question("dup"), make_question("dup")])
        with pytest.raises(QuestionBankError):
            bank.add_question(make_question("met-1"))
        assert bank.question_count() == 3

    @pytest.mark.parametrize(
        "question",
        [
            QuestionItem(id=" ", prompt="Prompt", options=("A", "B"), correct_option_index=0),
            QuestionItem(id="x", prompt="  ", options=("A", "B"), correct_option_index=0),
            QuestionItem(id="x", prompt="Prompt", options=("Only",), correct_option_index=0),
            QuestionItem(id="x", prompt="Prompt", options=("A", " "), correct_option_index=0),
            QuestionItem(id="x", prompt="Prompt", options=("A", "B"), correct_option_index=2),
        ],
    )
    def test_invalid_questions_are_rejected(self, question):
        with pytest.raises(QuestionBankError):
            QuestionBank().add_question(question)

    def test_get_question(self, bank):
        assert bank.get_question("nav-1").category == "radio-navigation"
        with pytest.raises(QuestionBankError):
            bank.get_question("missing")

    def test_clear(self, bank):
        bank.clear()
        assert not bank.has_questions()
        bank.add_question(make_question("met-1"))
        assert bank.question_count() == 1


class TestDrawing:
    def test_draw_is_limited_to_pool_size(self, bank):
        drawn = bank.draw_questions("meteorology", 10, rng=random.Random(1))
        assert sorted(q.id for q in drawn) == ["met-1", "met-2"]

    def test_draw_across_all_categories(self, bank):
        drawn = bank.draw_questions(None, 2, rng=random.Random(1))
        assert len(drawn) == 2
        assert len({q.id for q in drawn}) == 2

    def test_draw_is_reproducible_with_seed(self, bank):
        first = bank.draw_questions("all", 3, rng=random.Random(5))
        second = bank.draw_questions("all", 3, rng=random.Random(5))
        assert first == second

    def test_unknown_category_raises(self, bank):
        with pytest.raises(QuestionBankError):
            bank.draw_questions("performance", 5)

    def test_non_positive_count_raises(self, bank):
        with pytest.raises(QuestionBankError):
            bank.draw_questions(None, 0)
