# errors.py
# Exception hierarchy for the solver core

from __future__ import annotations


class CalendarPuzzleError(Exception):
    """Base class for solver errors."""
    pass


class ConfigurationError(CalendarPuzzleError):
    """Static layout or piece set is inconsistent; refuse to search."""

    def __init__(self, message: str, detail: object | None = None):
        self.message = message
        self.detail = detail
        super().__init__(message)


class SearchCancelled(CalendarPuzzleError):
    """A running search was superseded or cancelled."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"search cancelled after {attempts} attempts")
