"""Tests for the host's view state."""

from __future__ import annotations

from messages import FailedMessage, ProgressMessage, SolvedMessage, UnsolvedMessage
from ui_state import AppState, UIState


def test_date_wraps():
    state = AppState(12, 31)
    state.shift_month(1)
    state.shift_day(1)
    assert (state.month, state.day) == (1, 1)
    state.shift_month(-1)
    state.shift_day(-1)
    assert (state.month, state.day) == (12, 31)


def test_progress_then_solution():
    state = AppState(1, 1)
    state.start(4)
    state.apply(ProgressMessage(request_id=4, attempts=10_000))
    assert state.current_state == UIState.SOLVING
    assert "10,000" in state.status_text()
    state.apply(SolvedMessage(request_id=4, board=[[1]], attempts=12_345))
    assert state.current_state == UIState.SOLVED
    assert state.board == [[1]]
    assert state.status_text() == "Solved in 12,345 attempts"


def test_stale_messages_ignored():
    state = AppState(1, 1)
    state.start(2)
    state.apply(SolvedMessage(request_id=1, board=[[1]], attempts=5))
    assert state.current_state == UIState.SOLVING
    assert state.board is None


def test_unsolved_and_failed():
    state = AppState(2, 30)
    state.start(1)
    state.apply(UnsolvedMessage(request_id=1, attempts=99))
    assert state.current_state == UIState.UNSOLVED
    state.start(2)
    state.apply(FailedMessage(request_id=2, error="boom"))
    assert state.status_text() == "Search failed: boom"


def test_changing_date_clears_result():
    state = AppState(1, 1)
    state.start(1)
    state.apply(SolvedMessage(request_id=1, board=[[1]], attempts=5))
    state.shift_day(1)
    assert state.current_state == UIState.IDLE
    assert state.board is None
