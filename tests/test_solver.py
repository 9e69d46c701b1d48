"""Tests for the backtracking search and solution enumeration."""

from __future__ import annotations

import threading

import pytest

from board import BLOCKED, OPEN, build_board, open_cells
from errors import SearchCancelled
from pieces import Orientation
from solver import (
    AttemptCounter,
    can_place,
    islands_fillable,
    solve,
    solve_all,
    solve_for_date,
    validate_solution,
)


class TestAttemptCounter:
    def test_progress_at_every_interval(self) -> None:
        seen: list[int] = []
        counter = AttemptCounter(interval=3, on_progress=seen.append)
        for _ in range(7):
            counter.tick()
        assert counter.count == 7
        assert seen == [3, 6]

    def test_cancellation_checked_every_attempt(self) -> None:
        cancelled = threading.Event()
        counter = AttemptCounter(interval=10_000, cancelled=cancelled)
        counter.tick()
        cancelled.set()
        with pytest.raises(SearchCancelled) as exc_info:
            counter.tick()
        assert exc_info.value.attempts == 1
        assert counter.count == 1

    def test_cancelled_search_stops_without_result(self, catalog) -> None:
        cancelled = threading.Event()
        cancelled.set()
        counter = AttemptCounter(cancelled=cancelled)
        with pytest.raises(SearchCancelled):
            solve(build_board(1, 1), sorted(catalog), catalog, counter)
        assert counter.count == 0

    def test_interval_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            AttemptCounter(interval=0)


class TestBaseCases:
    def test_full_board_no_pieces_is_solved(self) -> None:
        board = [[BLOCKED, BLOCKED], [BLOCKED, BLOCKED]]
        assert solve(board, [], {}) == board

    def test_full_board_with_pieces_left_fails(self, trominoes) -> None:
        board = [[BLOCKED, BLOCKED], [BLOCKED, BLOCKED]]
        assert solve(board, [0], trominoes) is None

    def test_open_cells_without_pieces_fails(self) -> None:
        assert solve([[OPEN]], [], {}) is None


class TestSmallBoards:
    def test_two_trominoes_tile_rectangle(self, trominoes) -> None:
        board = [[OPEN] * 3 for _ in range(2)]
        result = solve(board, [0, 1], trominoes)
        assert result is not None
        assert validate_solution(result, board, trominoes) == []

    def test_input_board_untouched(self, trominoes) -> None:
        board = [[OPEN] * 3 for _ in range(2)]
        solve(board, [0, 1], trominoes)
        assert board == [[OPEN] * 3 for _ in range(2)]

    def test_impossible_shape(self, trominoes) -> None:
        assert solve([[OPEN, OPEN, OPEN]], [0], trominoes) is None

    def test_anchor_left_of_column_zero(self) -> None:
        shape = Orientation.from_rows(((0, 1), (1, 1)))
        board = [[BLOCKED, OPEN], [OPEN, OPEN]]
        assert solve(board, [0], {0: (shape,)}) == [[BLOCKED, 1], [1, 1]]

    def test_can_place_bounds(self) -> None:
        shape = Orientation.from_rows(((0, 1), (1, 1)))
        board = [[OPEN, OPEN], [OPEN, OPEN]]
        assert not can_place(board, shape, 0, 0)
        assert can_place(board, shape, 0, 1)

    def test_attempts_counted(self, trominoes) -> None:
        counter = AttemptCounter(interval=1000)
        solve([[OPEN] * 3 for _ in range(2)], [0, 1], trominoes, counter)
        assert counter.count >= 2

    def test_islands(self) -> None:
        board = [[OPEN, BLOCKED, OPEN]]
        assert not islands_fillable(board, [2])
        assert islands_fillable(board, [1, 1])

    def test_enumerates_all_small_tilings(self, trominoes) -> None:
        board = [[OPEN] * 3 for _ in range(2)]
        solutions = list(solve_all(board, trominoes))
        # Two ways to split a 2x3 into L-trominoes, each with either label order
        assert len(solutions) == 4
        assert all(validate_solution(s, board, trominoes) == [] for s in solutions)


class TestCalendar:
    def test_solves_new_year(self, catalog) -> None:
        [result] = solve_for_date(1, 1)
        assert validate_solution(result, build_board(1, 1), catalog) == []

    def test_covers_exactly_open_cells(self) -> None:
        initial = build_board(7, 15)
        [result] = solve_for_date(7, 15, prune=True)
        covered = {(r, c) for r, row in enumerate(result) for c, v in enumerate(row) if v > 0}
        assert covered == open_cells(initial)

    def test_deterministic(self) -> None:
        assert solve_for_date(3, 9, prune=True) == solve_for_date(3, 9, prune=True)

    def test_pruning_keeps_first_solution(self) -> None:
        plain = AttemptCounter()
        pruned = AttemptCounter()
        a = solve_for_date(12, 25, prune=False, counter=plain)
        b = solve_for_date(12, 25, prune=True, counter=pruned)
        assert a == b
        assert pruned.count <= plain.count

    def test_february_thirtieth_has_outcome(self, catalog) -> None:
        result = solve_for_date(2, 30, prune=True)
        for board in result:
            assert validate_solution(board, build_board(2, 30), catalog) == []

    def test_find_all(self, catalog) -> None:
        initial = build_board(1, 1)
        solutions = solve_for_date(1, 1, find_all=True)
        assert solutions
        assert len({tuple(map(tuple, s)) for s in solutions}) == len(solutions)
        assert all(validate_solution(s, initial, catalog) == [] for s in solutions)
        [first] = solve_for_date(1, 1, prune=True)
        assert first in solutions


class TestValidateSolution:
    def test_reports_uncovered_cell(self, trominoes) -> None:
        board = [[OPEN] * 3 for _ in range(2)]
        problems = validate_solution(board, board, trominoes)
        assert "open cell (0, 0) left uncovered" in problems

    def test_reports_covered_block(self, trominoes) -> None:
        initial = [[BLOCKED, OPEN, OPEN], [OPEN, OPEN, OPEN], [OPEN, OPEN, OPEN]]
        solution = [[1, 2, 2], [1, 1, 2], [OPEN, OPEN, OPEN]]
        problems = validate_solution(solution, initial, trominoes)
        assert "blocked cell (0, 0) covered by 1" in problems

    def test_reports_wrong_shape(self, trominoes) -> None:
        initial = [[OPEN] * 3 for _ in range(2)]
        solution = [[1, 1, 1], [2, 2, 2]]
        problems = validate_solution(solution, initial, trominoes)
        assert "piece 0 footprint matches none of its orientations" in problems
