"""Utilities for loading a question bank from a plain-text file.

File format (repeat blocks separated by blank lines or '---'):

    ID: met-001              (optional; generated from the category otherwise)
    CATEGORY: meteorology    (optional; defaults to 'general')
    SOURCE: Oxford           (optional)
    DIFFICULTY: easy|medium|hard   (optional; defaults to medium)
    Q: Question text (supports markdown + LaTeX). Additional lines until the
       next marker are treated as part of the question.
    A: First option text
    B: Second option text
    ...                      (two to six options, upper-case letters from A)
    CORRECT: B
    EXPLANATION: Why B is right. May continue on following lines.

Example:

    CATEGORY: navigation
    Q: How many nautical miles are in one degree of latitude?
    A: 30
    B: 60
    C: 90
    D: 120
    CORRECT: B
    EXPLANATION: One minute of latitude is one nautical mile.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from pathlib import Path

from dgca_practice.constants.practice_constants import DEFAULT_CATEGORY
from dgca_practice.core.errors import QuestionBankError
from dgca_practice.core.models import Difficulty, QuestionItem


class QuestionImportError(QuestionBankError):
    """Raised when a question-bank file cannot be parsed."""


@dataclass(slots=True)
class ImportedQuestionBank:
    """Container for the source path and the parsed questions."""

    source_path: Path
    questions: list[QuestionItem]


_OPTION_LETTERS = ("A", "B", "C", "D", "E", "F")
_METADATA_KEYS = ("ID", "CATEGORY", "SOURCE", "DIFFICULTY", "CORRECT")


def load_questions_from_file(file_path: Path) -> ImportedQuestionBank:
    text = file_path.read_text(encoding="utf-8")
    questions = parse_question_text(text)
    if not questions:
        raise QuestionImportError("Question bank file did not contain any questions.")
    return ImportedQuestionBank(source_path=file_path, questions=questions)


def parse_question_text(text: str) -> list[QuestionItem]:
    blocks: list[str] = []
    current_block: list[str] = []
    for raw_line in text.splitlines():
        stripped = raw_line.strip()
        if stripped == "---":
            if current_block:
                blocks.append("\n".join(current_block))
                current_block = []
            continue
        if stripped:
            current_block.append(raw_line)
        elif current_block:
            blocks.append("\n".join(current_block))
            current_block = []
    if current_block:
        blocks.append("\n".join(current_block))

    questions: list[QuestionItem] = []
    generated_ids: Counter[str] = Counter()
    for number, block in enumerate(blocks, start=1):
        try:
            questions.append(_parse_block(block, generated_ids))
        except QuestionImportError as exc:
            raise QuestionImportError(f"Question block {number}: {exc}") from exc
    return questions


def _parse_block(block: str, generated_ids: Counter[str]) -> QuestionItem:
    metadata: dict[str, str] = {}
    question_lines: list[str] = []
    explanation_lines: list[str] = []
    options: dict[str, str] = {}
    current_section: str | None = None

    for raw_line in block.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        raw_key, separator, value = line.partition(":")
        raw_key = raw_key.strip()
        key = raw_key.upper()

        if key == "Q" and separator:
            question_lines = [value.strip()]
            current_section = "Q"
            continue

        if key == "EXPLANATION" and separator:
            explanation_lines = [value.strip()]
            current_section = "EXPLANATION"
            continue

        if key in _METADATA_KEYS and separator:
            metadata[key] = value.strip()
            current_section = None
            continue

        # Option letters are upper-case only; "a: ..." is ordinary text.
        if raw_key in _OPTION_LETTERS and separator:
            options[raw_key] = value.strip()
            current_section = raw_key
            continue

        if current_section == "Q":
            question_lines.append(line)
        elif current_section == "EXPLANATION":
            explanation_lines.append(line)
        elif current_section in _OPTION_LETTERS:
            options[current_section] = f"{options[current_section]}\n{line}"
        else:
            raise QuestionImportError(f"Encountered text outside of a known section: '{line}'.")

    prompt = "\n".join(question_lines).strip()
    if not prompt:
        raise QuestionImportError("Question text missing (Q: ...).")

    option_list = _collect_options(options)
    correct_index = _parse_correct(metadata.get("CORRECT"), len(option_list))
    difficulty = _parse_difficulty(metadata.get("DIFFICULTY"))
    category = (metadata.get("CATEGORY") or DEFAULT_CATEGORY).lower()

    question_id = metadata.get("ID") or ""
    if not question_id:
        generated_ids[category] += 1
        question_id = f"{category}-{generated_ids[category]:03d}"

    explanation = "\n".join(explanation_lines).strip() or None

    return QuestionItem(
        id=question_id,
        prompt=prompt,
        options=tuple(option_list),
        correct_option_index=correct_index,
        explanation=explanation,
        difficulty=difficulty,
        category=category,
        source=metadata.get("SOURCE") or None,
    )


def _collect_options(options: dict[str, str]) -> list[str]:
    if len(options) < 2:
        raise QuestionImportError("Each question must define at least two options (A, B, ...).")
    expected = _OPTION_LETTERS[: len(options)]
    if set(options) != set(expected):
        raise QuestionImportError(f"Options must be lettered consecutively from A; found {sorted(options)}.")
    option_list = [options[letter].strip() for letter in expected]
    if any(not option for option in option_list):
        raise QuestionImportError("Option text cannot be empty.")
    return option_list


def _parse_correct(raw_value: str | None, option_count: int) -> int:
    if not raw_value:
        raise QuestionImportError("CORRECT must name the correct option letter.")
    letter = raw_value.strip().upper()
    valid = _OPTION_LETTERS[:option_count]
    if letter not in valid:
        raise QuestionImportError(f"CORRECT must be one of {', '.join(valid)}.")
    return valid.index(letter)


def _parse_difficulty(raw_value: str | None) -> Difficulty:
    if not raw_value:
        return Difficulty.MEDIUM
    try:
        return Difficulty(raw_value.strip().lower())
    except ValueError as exc:
        raise QuestionImportError("DIFFICULTY must be easy, medium or hard.") from exc


SAMPLE_QUESTION_BANK_PATH = Path(__file__).resolve().parent.parent / "data" / "sample_question_bank.txt"


def load_sample_question_bank() -> ImportedQuestionBank:
    """Load the small question bank shipped with the package."""
    return load_questions_from_file(SAMPLE_QUESTION_BANK_PATH)
