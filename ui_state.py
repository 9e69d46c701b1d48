from __future__ import annotations

from enum import Enum, auto

from messages import MessageKind, SearchMessage


class UIState(Enum):
    IDLE = auto()
    SOLVING = auto()
    SOLVED = auto()
    UNSOLVED = auto()
    FAILED = auto()


class AppState:
    def __init__(self, month: int, day: int):
        self.current_state = UIState.IDLE
        self.month = month
        self.day = day
        self.request_id: int | None = None
        self.attempts = 0
        self.board: list[list[int]] | None = None
        self.error: str | None = None

    def shift_month(self, delta: int) -> None:
        self.month = (self.month - 1 + delta) % 12 + 1
        self._reset()

    def shift_day(self, delta: int) -> None:
        self.day = (self.day - 1 + delta) % 31 + 1
        self._reset()

    def start(self, request_id: int) -> None:
        self._reset()
        self.request_id = request_id
        self.current_state = UIState.SOLVING

    def apply(self, message: SearchMessage) -> None:
        # Messages for a request we no longer show are dropped
        if message.request_id != self.request_id:
            return
        if message.kind == MessageKind.PROGRESS:
            self.attempts = max(self.attempts, message.attempts)
        elif message.kind == MessageKind.SOLVED:
            self.attempts = message.attempts
            self.board = message.board
            self.current_state = UIState.SOLVED
        elif message.kind == MessageKind.UNSOLVED:
            self.attempts = message.attempts
            self.current_state = UIState.UNSOLVED
        elif message.kind == MessageKind.FAILED:
            self.error = message.error
            self.current_state = UIState.FAILED

    def status_text(self) -> str:
        if self.current_state == UIState.SOLVING:
            return f"Searching... {self.attempts:,} attempts"
        if self.current_state == UIState.SOLVED:
            return f"Solved in {self.attempts:,} attempts"
        if self.current_state == UIState.UNSOLVED:
            return f"No solution ({self.attempts:,} attempts)"
        if self.current_state == UIState.FAILED:
            return f"Search failed: {self.error}"
        return "Arrows pick a date, Enter solves"

    def _reset(self) -> None:
        self.current_state = UIState.IDLE
        self.request_id = None
        self.attempts = 0
        self.board = None
        self.error = None
