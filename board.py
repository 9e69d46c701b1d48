# board.py
# Board geometry, month/day coordinate maps, per-date board construction

from __future__ import annotations

from dataclasses import dataclass, field

from errors import ConfigurationError

BOARD_ROWS = 7
BOARD_COLS = 7

OPEN = 0
BLOCKED = -1

# A board is a mutable grid: OPEN, BLOCKED, or piece_id + 1
Board = list[list[int]]
Cell = tuple[int, int]

# Month coordinates (1–12)
MONTH_COORDS: dict[int, Cell] = {
    month: ((month - 1) // 6, (month - 1) % 6) for month in range(1, 13)
}

# Day coordinates (1–31)
DAY_COORDS: dict[int, Cell] = {
    day: ((day - 1) // 7 + 2, (day - 1) % 7) for day in range(1, 32)
}

# Fixed cells no piece may ever cover (the two notches)
ILLEGAL_CELLS: frozenset[Cell] = frozenset(
    {
        (0, 6),
        (1, 6),
        (6, 3),
        (6, 4),
        (6, 5),
        (6, 6),
    }
)


@dataclass(frozen=True)
class Layout:
    rows: int
    cols: int
    month_coords: dict[int, Cell] = field(hash=False)
    day_coords: dict[int, Cell] = field(hash=False)
    blocked: frozenset[Cell] = frozenset()

    def label_at(self, cell: Cell) -> str | None:
        """Short label for a cell: "M3", "D17", "X" for blocked, None if unlabeled."""
        if cell in self.blocked:
            return "X"
        for month, coord in self.month_coords.items():
            if coord == cell:
                return f"M{month}"
        for day, coord in self.day_coords.items():
            if coord == cell:
                return f"D{day}"
        return None


CALENDAR_LAYOUT = Layout(
    rows=BOARD_ROWS,
    cols=BOARD_COLS,
    month_coords=MONTH_COORDS,
    day_coords=DAY_COORDS,
    blocked=ILLEGAL_CELLS,
)


def validate_layout(layout: Layout, months: int | None = None, days: int | None = None) -> None:
    """Raise ConfigurationError unless every cell has at most one label and
    the month/day labels are exactly 1..months and 1..days.

    months and days default to the number of labels, so only gaps are caught.
    """
    if layout.rows <= 0 or layout.cols <= 0:
        raise ConfigurationError(f"Layout has invalid dimensions {layout.rows}x{layout.cols}")
    if months is None:
        months = len(layout.month_coords)
    if days is None:
        days = len(layout.day_coords)

    if sorted(layout.month_coords) != list(range(1, months + 1)):
        raise ConfigurationError(
            f"Layout must label months 1..{months}", sorted(layout.month_coords)
        )
    if sorted(layout.day_coords) != list(range(1, days + 1)):
        raise ConfigurationError(
            f"Layout must label days 1..{days}", sorted(layout.day_coords)
        )

    seen: dict[Cell, str] = {}
    labeled = (
        [(cell, "X") for cell in sorted(layout.blocked)]
        + [(cell, f"M{m}") for m, cell in layout.month_coords.items()]
        + [(cell, f"D{d}") for d, cell in layout.day_coords.items()]
    )
    for (r, c), label in labeled:
        if not (0 <= r < layout.rows and 0 <= c < layout.cols):
            raise ConfigurationError(f"{label} at {(r, c)} is outside the board", (r, c))
        if (r, c) in seen:
            raise ConfigurationError(
                f"Cell {(r, c)} labeled twice: {seen[(r, c)]} and {label}", (r, c)
            )
        seen[(r, c)] = label


def build_board(month: int, day: int, layout: Layout = CALENDAR_LAYOUT) -> Board:
    """Fresh board for a date: the month and day squares are blocked along
    with the layout's fixed cells, everything else is open."""
    if month not in layout.month_coords:
        raise ValueError(f"Layout has no cell for month {month}")
    if day not in layout.day_coords:
        raise ValueError(f"Layout has no cell for day {day}")

    board: Board = [[OPEN] * layout.cols for _ in range(layout.rows)]
    for r, c in layout.blocked:
        board[r][c] = BLOCKED
    month_r, month_c = layout.month_coords[month]
    day_r, day_c = layout.day_coords[day]
    board[month_r][month_c] = BLOCKED
    board[day_r][day_c] = BLOCKED
    return board


def copy_board(board: Board) -> Board:
    return [row[:] for row in board]


def open_cells(board: Board) -> set[Cell]:
    return {
        (r, c)
        for r, row in enumerate(board)
        for c, value in enumerate(row)
        if value == OPEN
    }


def first_open_cell(board: Board) -> Cell | None:
    """First open cell scanning row-major, or None when the board is full."""
    for r, row in enumerate(board):
        for c, value in enumerate(row):
            if value == OPEN:
                return r, c
    return None


def format_board(board: Board) -> str:
    """Text grid: '#' blocked, '.' open, piece label 1..9 otherwise."""
    lines = []
    for row in board:
        chars = []
        for value in row:
            if value == BLOCKED:
                chars.append("#")
            elif value == OPEN:
                chars.append(".")
            else:
                chars.append(str(value))
        lines.append(" ".join(chars))
    return "\n".join(lines)
