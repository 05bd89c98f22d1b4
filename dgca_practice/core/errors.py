"""Exception types raised by the practice-test core."""

from __future__ import annotations


class PracticeSessionError(Exception):
    """Base class for errors raised by a practice session."""


class InvalidConfiguration(PracticeSessionError):
    """Raised when a session or clock is started with unusable settings."""


class InvalidOption(PracticeSessionError):
    """Raised when an answer index is outside the current question's options."""


class InvalidSessionState(PracticeSessionError):
    """Raised when an operation is not allowed in the session's current phase."""


class NoActiveSession(InvalidSessionState):
    """Raised by the manager when no practice session has been started."""


class QuestionBankError(Exception):
    """Raised when questions cannot be stored in or drawn from the bank."""
