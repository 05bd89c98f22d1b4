"""Helper functions for common dialog patterns in the practice window."""

from __future__ import annotations

from PySide6.QtWidgets import QMessageBox, QWidget

from dgca_practice.constants.ui_constants import EXIT_CONFIRM_MESSAGE, EXIT_CONFIRM_TITLE


def confirm_exit_test(parent: QWidget) -> bool:
    """Ask the user to confirm leaving a running practice test.

    Returns:
        True if the user confirmed the exit, False otherwise
    """
    reply = QMessageBox.question(
        parent,
        EXIT_CONFIRM_TITLE,
        EXIT_CONFIRM_MESSAGE,
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No,
    )
    return reply == QMessageBox.Yes


def confirm_finish_with_unanswered(parent: QWidget, unanswered: int) -> bool:
    """Warn before submitting a test that still has unanswered questions."""
    reply = QMessageBox.question(
        parent,
        "Submit Test",
        f"{unanswered} question(s) are still unanswered and will be marked incorrect. Submit anyway?",
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No,
    )
    return reply == QMessageBox.Yes


def show_error(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.critical(parent, title, message)


def show_info(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.information(parent, title, message)


def show_warning(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.warning(parent, title, message)
