"""Countdown clock that drives the time budget of a practice session."""

from __future__ import annotations

import logging
from typing import Callable

from dgca_practice.constants.practice_constants import LOW_TIME_WARNING_SECONDS
from dgca_practice.core.errors import InvalidConfiguration

logger = logging.getLogger(__name__)


class SessionClock:
    """Counts down once per ``tick`` and signals expiry exactly once.

    The clock does not schedule itself; the host (a Qt timer, a test, a
    background thread) calls :meth:`tick` roughly once per second.
    """

    def __init__(self, on_expired: Callable[[], None] | None = None) -> None:
        self._on_expired = on_expired
        self._remaining_seconds: int = 0
        self._running: bool = False
        self._expired: bool = False

    def set_expiry_handler(self, on_expired: Callable[[], None] | None) -> None:
        self._on_expired = on_expired

    def start(self, budget_seconds: int) -> None:
        if isinstance(budget_seconds, bool) or not isinstance(budget_seconds, int):
            raise InvalidConfiguration("Time budget must be an integer number of seconds.")
        if budget_seconds <= 0:
            raise InvalidConfiguration("Time budget must be a positive number of seconds.")
        self._remaining_seconds = budget_seconds
        self._running = True
        self._expired = False

    def tick(self) -> bool:
        """Advance one second. Returns True when this tick expired the clock."""
        if not self._running:
            return False

        self._remaining_seconds -= 1
        if self._remaining_seconds > 0:
            return False

        self._remaining_seconds = 0
        self._running = False
        self._expired = True
        logger.info("Session clock expired")
        if self._on_expired is not None:
            self._on_expired()
        return True

    def stop(self) -> None:
        self._running = False

    @property
    def remaining_seconds(self) -> int:
        return self._remaining_seconds

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def has_expired(self) -> bool:
        return self._expired


def format_clock(seconds: int) -> str:
    """Format a second count as ``MM:SS``."""
    seconds = max(0, seconds)
    minutes, secs = divmod(seconds, 60)
    return f"{minutes:02d}:{secs:02d}"


def is_low_time(seconds: int, threshold: int = LOW_TIME_WARNING_SECONDS) -> bool:
    return seconds < threshold
