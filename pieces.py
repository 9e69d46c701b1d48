# pieces.py
# Piece definitions + rotations/flips

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property, lru_cache
from typing import Iterable, Mapping, Sequence

from board import CALENDAR_LAYOUT, Cell, Layout, validate_layout
from errors import ConfigurationError

# Canonical piece shapes as occupancy rows, trimmed to their bounding box.
# Board labels are piece id + 1.
PIECE_SHAPES: dict[int, tuple[tuple[int, ...], ...]] = {
    0: ((1, 1), (1, 1), (1, 1)),
    1: ((1, 1), (1, 0), (1, 1)),
    2: ((1, 0), (1, 1), (0, 1), (0, 1)),
    3: ((1, 0, 0), (1, 0, 0), (1, 1, 1)),
    4: ((1, 0), (1, 1), (1, 1)),
    5: ((1, 0), (1, 1), (1, 0), (1, 0)),
    6: ((1, 1), (1, 0), (1, 0), (1, 0)),
    7: ((1, 1, 0), (0, 1, 0), (0, 1, 1)),
}

# One hexomino and seven pentominoes: 6 + 7 * 5 = 41 open cells per date
PIECE_SIZES: dict[int, int] = {0: 6, 1: 5, 2: 5, 3: 5, 4: 5, 5: 5, 6: 5, 7: 5}


@dataclass(frozen=True)
class Orientation:
    """Immutable occupancy mask. Equality and hash are structural."""

    mask: tuple[tuple[bool, ...], ...]

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[int]]) -> "Orientation":
        return cls(tuple(tuple(bool(v) for v in row) for row in rows))

    @property
    def height(self) -> int:
        return len(self.mask)

    @property
    def width(self) -> int:
        return len(self.mask[0]) if self.mask else 0

    @cached_property
    def cells(self) -> tuple[Cell, ...]:
        """Filled cells in row-major order."""
        return tuple(
            (r, c)
            for r, row in enumerate(self.mask)
            for c, filled in enumerate(row)
            if filled
        )

    @property
    def size(self) -> int:
        return len(self.cells)

    @property
    def anchor(self) -> Cell:
        """First filled cell in row-major order."""
        return self.cells[0]

    @cached_property
    def offsets(self) -> tuple[Cell, ...]:
        """Filled cells relative to the anchor; the anchor itself is (0, 0)."""
        ar, ac = self.anchor
        return tuple((r - ar, c - ac) for r, c in self.cells)

    def rotate(self) -> "Orientation":
        """Rotate 90° clockwise: new[c][R-1-r] = old[r][c]."""
        rows, cols = self.height, self.width
        rotated = [[False] * rows for _ in range(cols)]
        for r in range(rows):
            for c in range(cols):
                rotated[c][rows - 1 - r] = self.mask[r][c]
        return Orientation(tuple(tuple(row) for row in rotated))

    def mirror(self) -> "Orientation":
        """Horizontal flip: every row reversed."""
        return Orientation(tuple(tuple(reversed(row)) for row in self.mask))

    def __str__(self) -> str:
        return "\n".join("".join("#" if v else "." for v in row) for row in self.mask)


def generate_orientations(shape: Orientation) -> tuple[Orientation, ...]:
    """All unique rotations + horizontal flip orientations, in discovery order."""
    seen: set[Orientation] = set()
    result: list[Orientation] = []

    current = shape
    for _ in range(4):
        for variant in (current, current.mirror()):
            if variant not in seen:
                seen.add(variant)
                result.append(variant)
        current = current.rotate()

    return tuple(result)


def _is_connected(cells: Sequence[Cell]) -> bool:
    remaining = set(cells)
    stack = [cells[0]]
    remaining.discard(cells[0])
    while stack:
        r, c = stack.pop()
        for n in ((r + 1, c), (r - 1, c), (r, c + 1), (r, c - 1)):
            if n in remaining:
                remaining.discard(n)
                stack.append(n)
    return not remaining


def validate_shapes(
    shapes: Mapping[int, Sequence[Sequence[int]]],
    sizes: Mapping[int, int],
    layout: Layout = CALENDAR_LAYOUT,
) -> None:
    """Raise ConfigurationError unless the piece set can tile a date on layout."""
    validate_layout(layout)
    if sorted(shapes) != list(range(len(shapes))):
        raise ConfigurationError("Piece ids must be 0..n-1", sorted(shapes))

    total = 0
    for piece_id, rows in shapes.items():
        if not rows or not rows[0]:
            raise ConfigurationError(f"Piece {piece_id} has an empty shape", piece_id)
        if any(len(row) != len(rows[0]) for row in rows):
            raise ConfigurationError(f"Piece {piece_id} is not rectangular", piece_id)

        shape = Orientation.from_rows(rows)
        if shape.size != sizes.get(piece_id):
            raise ConfigurationError(
                f"Piece {piece_id} covers {shape.size} cells, expected {sizes.get(piece_id)}",
                piece_id,
            )
        if not any(shape.mask[0]) or not any(shape.mask[-1]) or not any(
            row[0] for row in shape.mask
        ) or not any(row[-1] for row in shape.mask):
            raise ConfigurationError(f"Piece {piece_id} has an empty border row or column", piece_id)
        if not _is_connected(shape.cells):
            raise ConfigurationError(f"Piece {piece_id} is not connected", piece_id)
        total += shape.size

    # Two labeled cells are left uncovered for every date
    target = layout.rows * layout.cols - len(layout.blocked) - 2
    if total != target:
        raise ConfigurationError(
            f"Pieces cover {total} cells but a date leaves {target} open", total
        )


def build_catalog(
    shapes: Mapping[int, Sequence[Sequence[int]]] = PIECE_SHAPES,
    sizes: Mapping[int, int] = PIECE_SIZES,
    layout: Layout = CALENDAR_LAYOUT,
) -> dict[int, tuple[Orientation, ...]]:
    validate_shapes(shapes, sizes, layout)
    return {
        piece_id: generate_orientations(Orientation.from_rows(rows))
        for piece_id, rows in sorted(shapes.items())
    }


@lru_cache(maxsize=None)
def all_piece_orientations() -> dict[int, tuple[Orientation, ...]]:
    """Process-wide orientation table. Treat as read-only."""
    return build_catalog()


def variations(piece_id: int) -> tuple[Orientation, ...]:
    return all_piece_orientations()[piece_id]
