from __future__ import annotations

import pytest

from pieces import Orientation, all_piece_orientations, generate_orientations

L_TROMINO = ((1, 0), (1, 1))


@pytest.fixture
def catalog():
    return all_piece_orientations()


@pytest.fixture
def trominoes():
    """Two L-trominoes: enough to tile a 2x3 rectangle."""
    shapes = generate_orientations(Orientation.from_rows(L_TROMINO))
    return {0: shapes, 1: shapes}
