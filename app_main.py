"""Application entry point for DGCA Practice."""

from __future__ import annotations

import logging
from pathlib import Path
import sys

from PySide6.QtWidgets import QApplication

from dgca_practice.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from dgca_practice.constants.practice_constants import DEFAULT_QUESTION_BANK_PATH
from dgca_practice.core.errors import QuestionBankError
from dgca_practice.core.practice_manager import PracticeManager
from dgca_practice.core.question_importer import load_questions_from_file, load_sample_question_bank
from dgca_practice.server.api_server import start_api_server
from dgca_practice.ui.practice_main_window import PracticeMainWindow
from dgca_practice.utils.logging_config import configure_logging


def _load_question_bank(manager: PracticeManager, logger: logging.Logger) -> None:
    """Load ./question_bank.txt when present, otherwise the bundled sample bank."""
    bank_path = Path(DEFAULT_QUESTION_BANK_PATH)
    try:
        if bank_path.exists():
            imported = load_questions_from_file(bank_path)
        else:
            logger.info("No %s found; using the bundled sample questions", bank_path)
            imported = load_sample_question_bank()
        manager.load_question_bank(imported.questions)
    except (OSError, QuestionBankError) as exc:
        logger.error("Unable to load question bank: %s", exc)


def main() -> None:
    """Initialize logging, load questions, start the API server, and launch the Qt UI."""
    logger = configure_logging()
    logger.info("Starting DGCA Practice...")

    practice_manager = PracticeManager()
    _load_question_bank(practice_manager, logger)

    start_api_server(practice_manager, host=DEFAULT_HOST, port=DEFAULT_PORT)
    api_url = f"http://{DEFAULT_HOST}:{DEFAULT_PORT}/"
    logger.info("Practice API available at %s", api_url)

    app = QApplication(sys.argv)
    window = PracticeMainWindow(practice_manager=practice_manager, api_url=api_url)
    window.show()
    window.show_welcome_if_needed()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
