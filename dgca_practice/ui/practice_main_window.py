"""Qt main window hosting the setup, test and results views."""

from __future__ import annotations

from enum import Enum, auto
import logging

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import (
    QHBoxLayout,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from dgca_practice.constants.about import APP_ABOUT_TEXT, APP_LICENSE, APP_NAME, APP_VERSION, HELP_TEXT
from dgca_practice.constants.practice_constants import CLOCK_TICK_INTERVAL_MS
from dgca_practice.constants.ui_constants import (
    NO_QUESTIONS_MESSAGE,
    TIME_UP_MESSAGE,
    TIME_UP_TITLE,
    WELCOME_MESSAGE,
    WELCOME_TITLE,
    WINDOW_TITLE,
)
from dgca_practice.core.errors import (
    InvalidConfiguration,
    InvalidSessionState,
    NoActiveSession,
    QuestionBankError,
)
from dgca_practice.core.practice_manager import PracticeManager
from dgca_practice.styling.styles import Styles
from dgca_practice.ui.components.results_panel import ResultsPanel
from dgca_practice.ui.components.setup_panel import SetupPanel
from dgca_practice.ui.components.test_panel import TestPanel
from dgca_practice.ui.dialog_helpers import show_error, show_info, show_warning

logger = logging.getLogger(__name__)


class PracticeMode(Enum):
    """High-level UI mode for the practice window."""

    SETUP = auto()
    TEST = auto()
    RESULTS = auto()


class PracticeMainWindow(QMainWindow):
    """Main Qt window; its one-second timer is the clock source for the active session."""

    def __init__(self, practice_manager: PracticeManager, api_url: str | None = None) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.practice_manager = practice_manager
        self.api_url = api_url
        self._mode = PracticeMode.SETUP
        self._font_size: int = 14

        self._build_ui()
        self._configure_clock_timer()
        self.setStyleSheet(Styles.get_main_window_style())
        self.setup_panel.refresh_categories()

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)
        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        button_row = QHBoxLayout()
        button_row.addStretch()
        self.about_button = QPushButton(f"About {APP_NAME}", self)
        self.about_button.clicked.connect(self._handle_about)
        button_row.addWidget(self.about_button)
        self.help_button = QPushButton("Help", self)
        self.help_button.clicked.connect(self._handle_help)
        button_row.addWidget(self.help_button)
        root_layout.addLayout(button_row)

        self.mode_stack = QStackedWidget(self)
        self.setup_panel = SetupPanel(self.practice_manager, on_start=self._handle_start, parent=self)
        self.test_panel = TestPanel(self.practice_manager, on_session_ended=self._show_results, parent=self)
        self.results_panel = ResultsPanel(on_retry=self._handle_retry, parent=self)
        self.mode_stack.addWidget(self.setup_panel)
        self.mode_stack.addWidget(self.test_panel)
        self.mode_stack.addWidget(self.results_panel)
        root_layout.addWidget(self.mode_stack)

        self._set_mode(PracticeMode.SETUP)

    def _configure_clock_timer(self) -> None:
        self.clock_timer = QTimer(self)
        self.clock_timer.setInterval(CLOCK_TICK_INTERVAL_MS)
        self.clock_timer.timeout.connect(self._handle_clock_tick)
        self.clock_timer.start()

    def show_welcome_if_needed(self) -> None:
        if self.practice_manager.has_seen_welcome():
            return
        self.practice_manager.mark_welcome_shown()
        show_info(self, WELCOME_TITLE, WELCOME_MESSAGE)

    def _handle_clock_tick(self) -> None:
        expired = self.practice_manager.tick()
        if expired:
            logger.info("Time budget used up; showing results")
            self._show_results()
            show_info(self, TIME_UP_TITLE, TIME_UP_MESSAGE)
            return

        try:
            snapshot = self.practice_manager.get_snapshot()
        except NoActiveSession:
            snapshot = None

        if snapshot is not None and snapshot.is_active:
            if self._mode != PracticeMode.TEST or snapshot.session_id != self.test_panel.session_id:
                # A session started or replaced from the web API takes over the window.
                self._enter_test_mode()
            else:
                self.test_panel.refresh()
        elif self._mode == PracticeMode.TEST:
            self._show_results()

    def _set_mode(self, mode: PracticeMode) -> None:
        self._mode = mode
        index_map = {
            PracticeMode.SETUP: 0,
            PracticeMode.TEST: 1,
            PracticeMode.RESULTS: 2,
        }
        self.mode_stack.setCurrentIndex(index_map[mode])

    def _handle_start(self, category: str | None, question_count: int, time_limit_minutes: int) -> None:
        try:
            self.practice_manager.start_practice(
                category=category,
                question_count=question_count,
                time_limit_minutes=time_limit_minutes,
            )
        except QuestionBankError:
            show_warning(self, "No questions", NO_QUESTIONS_MESSAGE)
            return
        except (InvalidConfiguration, InvalidSessionState) as exc:
            show_error(self, "Cannot start test", str(exc))
            return
        self._enter_test_mode()

    def _enter_test_mode(self) -> None:
        self.test_panel.start_session()
        self._set_mode(PracticeMode.TEST)

    def _show_results(self) -> None:
        try:
            summary = self.practice_manager.get_summary()
        except InvalidSessionState:
            self._set_mode(PracticeMode.SETUP)
            return
        if summary is None:
            return
        if self._mode != PracticeMode.RESULTS:
            self.results_panel.show_summary(summary)
            self._set_mode(PracticeMode.RESULTS)

    def _handle_retry(self) -> None:
        self.setup_panel.refresh_categories()
        self._set_mode(PracticeMode.SETUP)

    def _handle_about(self) -> None:
        details = f"{APP_NAME} v{APP_VERSION}\nLicense: {APP_LICENSE}\n\n{APP_ABOUT_TEXT}"
        if self.api_url:
            details += f"\n\nWeb API: {self.api_url}"
        show_info(self, f"About {APP_NAME}", details)

    def _handle_help(self) -> None:
        show_info(self, f"{APP_NAME} Help", HELP_TEXT)

    def closeEvent(self, event) -> None:  # noqa: N802 - Qt override
        self.clock_timer.stop()
        self.practice_manager.reset()
        super().closeEvent(event)
