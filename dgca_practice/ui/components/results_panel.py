"""Component for reviewing a finished practice test."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import Qt
from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from dgca_practice.constants.ui_constants import (
    RESULTS_EXITED_TITLE,
    RESULTS_RETRY_BUTTON,
    RESULTS_TITLE,
)
from dgca_practice.core.grading import format_duration, grade_for_percentage
from dgca_practice.core.models import QuestionItem, SessionSummary
from dgca_practice.styling.styles import Styles
from dgca_practice.ui.question_renderer import render_review


class ResultsPanel(QWidget):
    """Shows score, grade and a per-question review."""

    def __init__(self, on_retry: Callable[[], None], parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.on_retry = on_retry
        self._questions: list[QuestionItem] = []
        self._summary: SessionSummary | None = None
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.title_label = QLabel(RESULTS_TITLE, self)
        self.title_label.setAlignment(Qt.AlignCenter)
        self.title_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.title_label)

        self.score_label = QLabel("", self)
        self.score_label.setAlignment(Qt.AlignCenter)
        self.score_label.setStyleSheet("font-size: 28pt; font-weight: bold;")
        layout.addWidget(self.score_label)

        self.grade_label = QLabel("", self)
        self.grade_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.grade_label)

        stats_row = QHBoxLayout()
        self.correct_label = QLabel("", self)
        self.incorrect_label = QLabel("", self)
        self.unanswered_label = QLabel("", self)
        self.time_label = QLabel("", self)
        for label in (self.correct_label, self.incorrect_label, self.unanswered_label, self.time_label):
            label.setAlignment(Qt.AlignCenter)
            stats_row.addWidget(label)
        layout.addLayout(stats_row)

        review_row = QHBoxLayout()
        self.review_list = QListWidget(self)
        self.review_list.setMaximumWidth(220)
        self.review_list.currentRowChanged.connect(self._show_review)
        review_row.addWidget(self.review_list)
        self.review_view = QWebEngineView(self)
        review_row.addWidget(self.review_view, stretch=1)
        layout.addLayout(review_row, stretch=1)

        self.retry_button = QPushButton(RESULTS_RETRY_BUTTON, self)
        self.retry_button.clicked.connect(self.on_retry)
        layout.addWidget(self.retry_button)

    def show_summary(self, summary: SessionSummary) -> None:
        self._summary = summary
        self._questions = list(summary.questions)
        questions = self._questions

        grade = grade_for_percentage(summary.score_percentage)
        self.title_label.setText(RESULTS_EXITED_TITLE if summary.was_exited_early else RESULTS_TITLE)
        self.score_label.setText(f"{summary.score_percentage}%  ({grade.grade})")
        self.grade_label.setText(grade.message)
        self.grade_label.setStyleSheet(Styles.get_review_style(grade.passed))
        self.correct_label.setText(f"Correct: {summary.score_correct}")
        self.incorrect_label.setText(f"Incorrect: {summary.incorrect_count}")
        self.unanswered_label.setText(f"Unanswered: {summary.unanswered_count}")
        self.time_label.setText(f"Time: {format_duration(summary.elapsed_seconds)}")

        self.review_list.clear()
        for idx, question in enumerate(questions):
            record = summary.answers[question.id]
            mark = "✓" if record.is_correct else "✗"
            item = QListWidgetItem(f"{mark}  Question {idx + 1}", self.review_list)
            item.setToolTip(question.id)
        if questions:
            self.review_list.setCurrentRow(0)

    def _show_review(self, row: int) -> None:
        if self._summary is None or not 0 <= row < len(self._questions):
            return
        question = self._questions[row]
        record = self._summary.answers[question.id]
        self.review_view.setHtml(render_review(question, record.selected_option_index))
