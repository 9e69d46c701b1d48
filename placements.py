# placements.py
# Generate all valid piece placements on a board

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from board import OPEN, Board, Cell
from pieces import Orientation


@dataclass(frozen=True)
class Placement:
    piece: int
    cells: tuple[Cell, ...]  # board coordinates covered by this placement


def generate_placements(
    board: Board,
    piece_orientations: Mapping[int, tuple[Orientation, ...]],
) -> list[Placement]:
    """Every position of every orientation whose cells are all open on board.

    Ordered by piece id, then orientation, then row-major offset.
    """
    placements: list[Placement] = []
    rows = len(board)
    cols = len(board[0]) if board else 0

    for piece_id, orientations in sorted(piece_orientations.items()):
        for shape in orientations:
            # Slide shape over the board
            for dr in range(rows - shape.height + 1):
                for dc in range(cols - shape.width + 1):
                    placed = tuple((r + dr, c + dc) for r, c in shape.cells)
                    if all(board[r][c] == OPEN for r, c in placed):
                        placements.append(Placement(piece=piece_id, cells=placed))

    return placements
