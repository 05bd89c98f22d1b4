"""Service holding the question bank that practice sessions draw from."""

from __future__ import annotations

from collections import Counter
import random

from dgca_practice.constants.practice_constants import ALL_CATEGORIES
from dgca_practice.core.errors import QuestionBankError
from dgca_practice.core.models import QuestionItem


class QuestionBank:
    """Stores validated questions and hands out ordered question sets."""

    def __init__(self) -> None:
        self._questions: list[QuestionItem] = []
        self._ids: set[str] = set()

    def load_questions(self, questions: list[QuestionItem]) -> None:
        """Replace the bank with a new list of questions."""
        if not questions:
            raise QuestionBankError("Question bank must contain at least one question.")

        prepared: list[QuestionItem] = []
        seen: set[str] = set()
        for question in questions:
            cleaned = self._prepare_question(question)
            if cleaned.id in seen:
                raise QuestionBankError(f"Duplicate question id '{cleaned.id}'.")
            seen.add(cleaned.id)
            prepared.append(cleaned)

        self._questions = prepared
        self._ids = seen

    def add_question(self, question: QuestionItem) -> QuestionItem:
        prepared = self._prepare_question(question)
        if prepared.id in self._ids:
            raise QuestionBankError(f"Duplicate question id '{prepared.id}'.")
        self._questions.append(prepared)
        self._ids.add(prepared.id)
        return prepared

    def get_questions(self, category: str | None = None) -> list[QuestionItem]:
        if category is None or category == ALL_CATEGORIES:
            return list(self._questions)
        return [q for q in self._questions if q.category == category]

    def get_question(self, question_id: str) -> QuestionItem:
        for question in self._questions:
            if question.id == question_id:
                return question
        raise QuestionBankError(f"Unknown question id '{question_id}'.")

    def question_count(self, category: str | None = None) -> int:
        return len(self.get_questions(category))

    def has_questions(self) -> bool:
        return bool(self._questions)

    def category_counts(self) -> dict[str, int]:
        counts = Counter(q.category for q in self._questions)
        return dict(sorted(counts.items()))

    def list_categories(self) -> list[str]:
        return list(self.category_counts())

    def draw_questions(
        self,
        category: str | None,
        count: int,
        rng: random.Random | None = None,
    ) -> list[QuestionItem]:
        """Return up to ``count`` randomly chosen questions from ``category``.

        ``None`` or ``"all"`` draws across every category.
        """
        if count <= 0:
            raise QuestionBankError("Question count must be a positive integer.")
        pool = self.get_questions(category)
        if not pool:
            raise QuestionBankError(f"No questions available for category '{category or ALL_CATEGORIES}'.")
        rng = rng or random.Random()
        return rng.sample(pool, min(count, len(pool)))

    def clear(self) -> None:
        self._questions = []
        self._ids = set()

    def _prepare_question(self, question: QuestionItem) -> QuestionItem:
        """Validate and normalize a question before storage."""
        question_id = question.id.strip()
        if not question_id:
            raise QuestionBankError("Question id must not be empty.")

        prompt = question.prompt.strip()
        if not prompt:
            raise QuestionBankError(f"Question '{question_id}' has no prompt text.")

        options = self._validate_options(question_id, question.options)
        if not 0 <= question.correct_option_index < len(options):
            raise QuestionBankError(
                f"Question '{question_id}' marks option {question.correct_option_index} correct "
                f"but only has {len(options)} options."
            )

        explanation = (question.explanation or "").strip() or None
        category = question.category.strip().lower() or "general"

        return QuestionItem(
            id=question_id,
            prompt=prompt,
            options=options,
            correct_option_index=question.correct_option_index,
            explanation=explanation,
            difficulty=question.difficulty,
            category=category,
            source=question.source,
        )

    @staticmethod
    def _validate_options(question_id: str, options: tuple[str, ...] | list[str]) -> tuple[str, ...]:
        if len(options) < 2:
            raise QuestionBankError(f"Question '{question_id}' needs at least two options.")
        cleaned = tuple(option.strip() for option in options)
        if any(not option for option in cleaned):
            raise QuestionBankError(f"Question '{question_id}' has an empty option.")
        return cleaned
