# solver.py
# First-empty-cell backtracking search, plus exact-cover enumeration of every tiling

from __future__ import annotations

import logging
import threading
from typing import Callable, Iterator, Mapping, Sequence

from board import (
    BLOCKED,
    OPEN,
    Board,
    Cell,
    build_board,
    copy_board,
    first_open_cell,
)
from config import settings
from dlx import ExactCover
from errors import SearchCancelled
from pieces import Orientation, all_piece_orientations
from placements import generate_placements

logger = logging.getLogger(__name__)

Orientations = Mapping[int, Sequence[Orientation]]


class AttemptCounter:
    """Counts placement attempts for one search.

    The cancellation event is checked on every attempt; every `interval`
    attempts the progress callback receives the running count. Owned by a
    single search.
    """

    def __init__(
        self,
        interval: int | None = None,
        on_progress: Callable[[int], None] | None = None,
        cancelled: threading.Event | None = None,
    ):
        self.count = 0
        self.interval = interval if interval is not None else settings.progress_interval
        if self.interval <= 0:
            raise ValueError("interval must be positive")
        self.on_progress = on_progress
        self.cancelled = cancelled

    def tick(self) -> None:
        if self.cancelled is not None and self.cancelled.is_set():
            raise SearchCancelled(self.count)
        self.count += 1
        if self.on_progress is not None and self.count % self.interval == 0:
            self.on_progress(self.count)


def can_place(board: Board, orientation: Orientation, row: int, col: int) -> bool:
    """True if orientation, anchored on (row, col), lands only on open cells."""
    rows = len(board)
    cols = len(board[0])
    for dr, dc in orientation.offsets:
        r, c = row + dr, col + dc
        if r < 0 or r >= rows or c < 0 or c >= cols or board[r][c] != OPEN:
            return False
    return True


def _fill(board: Board, orientation: Orientation, row: int, col: int, value: int) -> None:
    for dr, dc in orientation.offsets:
        board[row + dr][col + dc] = value


def _subset_sums(sizes: Sequence[int]) -> set[int]:
    sums = {0}
    for size in sizes:
        sums |= {s + size for s in sums}
    return sums


def _open_regions(board: Board) -> list[int]:
    """Sizes of the 4-connected regions of open cells."""
    rows = len(board)
    cols = len(board[0])
    seen: set[Cell] = set()
    sizes: list[int] = []
    for r in range(rows):
        for c in range(cols):
            if board[r][c] != OPEN or (r, c) in seen:
                continue
            seen.add((r, c))
            stack = [(r, c)]
            size = 0
            while stack:
                cr, cc = stack.pop()
                size += 1
                for nr, nc in ((cr + 1, cc), (cr - 1, cc), (cr, cc + 1), (cr, cc - 1)):
                    if 0 <= nr < rows and 0 <= nc < cols and board[nr][nc] == OPEN and (nr, nc) not in seen:
                        seen.add((nr, nc))
                        stack.append((nr, nc))
            sizes.append(size)
    return sizes


def islands_fillable(board: Board, piece_sizes: Sequence[int]) -> bool:
    """Every open region must be fillable by some subset of the remaining pieces."""
    sums = _subset_sums(piece_sizes)
    return all(size in sums for size in _open_regions(board))


def _search(
    board: Board,
    remaining: tuple[int, ...],
    orientations: Orientations,
    counter: AttemptCounter,
    prune: bool,
) -> Board | None:
    target = first_open_cell(board)
    if target is None:
        return board if not remaining else None
    if not remaining:
        return None

    row, col = target
    for i, piece_id in enumerate(remaining):
        rest = remaining[:i] + remaining[i + 1:]
        for orientation in orientations[piece_id]:
            if not can_place(board, orientation, row, col):
                continue
            counter.tick()
            _fill(board, orientation, row, col, piece_id + 1)
            if not prune or islands_fillable(
                board, [orientations[p][0].size for p in rest]
            ):
                result = _search(board, rest, orientations, counter, prune)
                if result is not None:
                    return result
            _fill(board, orientation, row, col, OPEN)

    return None


def solve(
    board: Board,
    remaining_piece_ids: Sequence[int],
    orientations: Orientations | None = None,
    counter: AttemptCounter | None = None,
    prune: bool | None = None,
) -> Board | None:
    """Tile every open cell of board with the given pieces, each used once.

    Always fills the first open cell (row-major) before any later one, trying
    pieces in the given order and orientations in catalog order. Returns a
    new fully labeled board, or None when no tiling exists. The input board
    is not modified.
    """
    if orientations is None:
        orientations = all_piece_orientations()
    if counter is None:
        counter = AttemptCounter()
    if prune is None:
        prune = settings.prune_islands

    result = _search(copy_board(board), tuple(remaining_piece_ids), orientations, counter, prune)
    logger.debug(
        "Search %s after %d attempts", "solved" if result is not None else "exhausted", counter.count
    )
    return result


def solve_all(
    board: Board,
    orientations: Orientations | None = None,
    counter: AttemptCounter | None = None,
) -> Iterator[Board]:
    """Yield every tiling of board that uses each piece exactly once."""
    if orientations is None:
        orientations = all_piece_orientations()
    if counter is None:
        counter = AttemptCounter()

    placements = generate_placements(board, orientations)

    # Column mapping: first piece columns, then cell columns.
    piece_ids = sorted(orientations)
    cells = sorted(
        (r, c) for r, row in enumerate(board) for c, value in enumerate(row) if value == OPEN
    )
    matrix = ExactCover([("piece", p) for p in piece_ids] + [("cell", cell) for cell in cells])
    for row_id, placement in enumerate(placements):
        matrix.add_row(
            row_id,
            [("piece", placement.piece)] + [("cell", cell) for cell in placement.cells],
        )

    for row_ids in matrix.solve(on_select=lambda _row_id: counter.tick()):
        labeled = copy_board(board)
        for row_id in row_ids:
            placement = placements[row_id]
            for r, c in placement.cells:
                labeled[r][c] = placement.piece + 1
        yield labeled


def solve_for_date(
    month: int,
    day: int,
    find_all: bool = False,
    prune: bool | None = None,
    counter: AttemptCounter | None = None,
) -> list[Board]:
    """Solutions for a calendar date: one board, every board, or [] if none."""
    board = build_board(month, day)
    orientations = all_piece_orientations()
    if counter is None:
        counter = AttemptCounter()

    if find_all:
        solutions = list(solve_all(board, orientations, counter))
        logger.info("%d/%d: %d solutions, %d attempts", month, day, len(solutions), counter.count)
        return solutions

    result = solve(board, sorted(orientations), orientations, counter, prune)
    logger.info(
        "%d/%d: %s, %d attempts", month, day, "solved" if result else "no solution", counter.count
    )
    return [result] if result is not None else []


def validate_solution(
    solution: Board,
    initial: Board,
    orientations: Orientations | None = None,
) -> list[str]:
    """Problems with a labeled board relative to its starting board; [] if valid."""
    if orientations is None:
        orientations = all_piece_orientations()

    if len(solution) != len(initial) or any(
        len(a) != len(b) for a, b in zip(solution, initial)
    ):
        return ["board dimensions differ"]

    problems: list[str] = []
    footprints: dict[int, list[Cell]] = {}
    for r, row in enumerate(initial):
        for c, start in enumerate(row):
            value = solution[r][c]
            if start == BLOCKED:
                if value != BLOCKED:
                    problems.append(f"blocked cell {(r, c)} covered by {value}")
            elif start == OPEN:
                if value == OPEN:
                    problems.append(f"open cell {(r, c)} left uncovered")
                elif value - 1 not in orientations:
                    problems.append(f"cell {(r, c)} has unknown label {value}")
                else:
                    footprints.setdefault(value - 1, []).append((r, c))
            elif value != start:
                problems.append(f"pre-placed cell {(r, c)} changed")

    for piece_id, shapes in orientations.items():
        cells = footprints.get(piece_id)
        if cells is None:
            problems.append(f"piece {piece_id} not placed")
            continue
        min_r = min(r for r, _ in cells)
        min_c = min(c for _, c in cells)
        normalized = tuple(sorted((r - min_r, c - min_c) for r, c in cells))
        if not any(normalized == shape.cells for shape in shapes):
            problems.append(f"piece {piece_id} footprint matches none of its orientations")

    return problems
