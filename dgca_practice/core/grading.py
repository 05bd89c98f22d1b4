"""Grade bands and display helpers for practice-test results."""

from __future__ import annotations

from dataclasses import dataclass
import math


@dataclass(frozen=True, slots=True)
class GradeInfo:
    grade: str
    message: str
    passed: bool


_GRADE_BANDS: tuple[tuple[int, GradeInfo], ...] = (
    (90, GradeInfo("A+", "Excellent! You're ready!", True)),
    (80, GradeInfo("A", "Great performance!", True)),
    (70, GradeInfo("B", "Good job! Keep practicing.", True)),
    (60, GradeInfo("C", "Needs improvement.", False)),
)
_LOWEST_GRADE = GradeInfo("D", "More practice needed.", False)


def grade_for_percentage(percentage: float) -> GradeInfo:
    for threshold, info in _GRADE_BANDS:
        if percentage >= threshold:
            return info
    return _LOWEST_GRADE


def format_duration(seconds: int) -> str:
    """Format elapsed seconds as ``"Xm Ys"``."""
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes}m {secs}s"


def recommended_time_limit_minutes(question_count: int) -> int:
    """Suggested time budget: ninety seconds per question, rounded up."""
    return math.ceil(max(0, question_count) * 1.5)
