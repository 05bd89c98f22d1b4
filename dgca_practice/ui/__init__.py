"""Qt UI components for the practice application."""

from .dialog_helpers import (
    confirm_exit_test,
    confirm_finish_with_unanswered,
    show_error,
    show_info,
    show_warning,
)
from .practice_main_window import PracticeMainWindow
from .question_renderer import render_question, render_review

__all__ = [
    "PracticeMainWindow",
    "confirm_exit_test",
    "confirm_finish_with_unanswered",
    "show_error",
    "show_info",
    "show_warning",
    "render_question",
    "render_review",
]
