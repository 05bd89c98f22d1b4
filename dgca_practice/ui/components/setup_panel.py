"""Component for configuring a new practice test."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QComboBox,
    QFormLayout,
    QGroupBox,
    QLabel,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from dgca_practice.constants.practice_constants import (
    ALL_CATEGORIES,
    DEFAULT_QUESTION_COUNT,
    DEFAULT_TIME_LIMIT_MINUTES,
    MAX_QUESTION_COUNT,
    MAX_TIME_LIMIT_MINUTES,
    MIN_QUESTION_COUNT,
    MIN_TIME_LIMIT_MINUTES,
    MIXED_TOPICS_LABEL,
    QUESTION_COUNT_STEP,
    TIME_LIMIT_STEP_MINUTES,
)
from dgca_practice.constants.ui_constants import (
    SETUP_DESCRIPTION,
    SETUP_RECOMMENDED_TEMPLATE,
    SETUP_START_BUTTON,
    SETUP_TITLE,
)
from dgca_practice.core.grading import recommended_time_limit_minutes
from dgca_practice.core.practice_manager import PracticeManager
from dgca_practice.styling.styles import Styles


class SetupPanel(QWidget):
    """Lets the user pick a subject, question count and time limit."""

    def __init__(
        self,
        practice_manager: PracticeManager,
        on_start: Callable[[str | None, int, int], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.practice_manager = practice_manager
        self.on_start = on_start
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        title = QLabel(SETUP_TITLE, self)
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(title)

        description = QLabel(SETUP_DESCRIPTION, self)
        description.setAlignment(Qt.AlignCenter)
        layout.addWidget(description)

        group = QGroupBox("Test Configuration", self)
        form = QFormLayout()
        group.setLayout(form)

        self.category_combo = QComboBox(self)
        self.category_combo.currentIndexChanged.connect(self._sync_question_limit)
        form.addRow("Subject Category", self.category_combo)

        self.question_count_spinbox = QSpinBox(self)
        self.question_count_spinbox.setSingleStep(QUESTION_COUNT_STEP)
        self.question_count_spinbox.valueChanged.connect(self._update_recommendation)
        form.addRow("Number of Questions", self.question_count_spinbox)

        self.time_limit_spinbox = QSpinBox(self)
        self.time_limit_spinbox.setRange(MIN_TIME_LIMIT_MINUTES, MAX_TIME_LIMIT_MINUTES)
        self.time_limit_spinbox.setSingleStep(TIME_LIMIT_STEP_MINUTES)
        self.time_limit_spinbox.setValue(DEFAULT_TIME_LIMIT_MINUTES)
        self.time_limit_spinbox.setSuffix(" min")
        form.addRow("Time Limit", self.time_limit_spinbox)

        self.recommendation_label = QLabel("", self)
        form.addRow("", self.recommendation_label)

        layout.addWidget(group)

        self.start_button = QPushButton(SETUP_START_BUTTON, self)
        self.start_button.clicked.connect(self._handle_start_click)
        layout.addWidget(self.start_button)
        layout.addStretch()

    def refresh_categories(self) -> None:
        counts = self.practice_manager.list_categories()
        self.category_combo.blockSignals(True)
        self.category_combo.clear()
        self.category_combo.addItem(f"{MIXED_TOPICS_LABEL} ({sum(counts.values())})", ALL_CATEGORIES)
        for slug, count in counts.items():
            self.category_combo.addItem(f"{slug.replace('-', ' ').title()} ({count})", slug)
        self.category_combo.blockSignals(False)
        self._sync_question_limit()

    def _selected_category(self) -> str | None:
        data = self.category_combo.currentData()
        return None if data in (None, ALL_CATEGORIES) else data

    def _sync_question_limit(self) -> None:
        available = self.practice_manager.get_question_count(self._selected_category())
        maximum = max(MIN_QUESTION_COUNT, min(available, MAX_QUESTION_COUNT))
        self.question_count_spinbox.setRange(MIN_QUESTION_COUNT, maximum)
        self.question_count_spinbox.setValue(min(DEFAULT_QUESTION_COUNT, maximum))
        self.start_button.setEnabled(available > 0)
        self._update_recommendation()

    def _update_recommendation(self) -> None:
        count = self.question_count_spinbox.value()
        minutes = recommended_time_limit_minutes(count)
        self.recommendation_label.setText(SETUP_RECOMMENDED_TEMPLATE.format(minutes=minutes, count=count))

    def _handle_start_click(self) -> None:
        self.on_start(
            self._selected_category(),
            self.question_count_spinbox.value(),
            self.time_limit_spinbox.value(),
        )
