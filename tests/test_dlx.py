"""Tests for the exact cover matrix."""

from __future__ import annotations

import pytest

from dlx import ExactCover


def _matrix() -> ExactCover:
    matrix = ExactCover(["a", "b", "c"])
    matrix.add_row(0, ["a", "b"])
    matrix.add_row(1, ["c"])
    matrix.add_row(2, ["a"])
    matrix.add_row(3, ["b", "c"])
    return matrix


def test_finds_every_cover():
    solutions = [sorted(s) for s in _matrix().solve()]
    assert sorted(solutions) == [[0, 1], [2, 3]]


def test_uncoverable_column_has_no_solution():
    matrix = ExactCover(["a", "b"])
    matrix.add_row(0, ["a"])
    assert list(matrix.solve()) == []
    assert list(ExactCover(["a"]).solve()) == []


def test_empty_matrix_has_empty_cover():
    assert list(ExactCover([]).solve()) == [[]]


def test_on_select_sees_each_tried_row():
    tried: list[int] = []
    list(_matrix().solve(on_select=tried.append))
    assert sorted(set(tried)) == [0, 1, 2, 3]


def test_duplicate_column_rejected():
    with pytest.raises(ValueError, match="Duplicate column"):
        ExactCover(["a", "a"])


def test_unknown_column_rejected():
    with pytest.raises(KeyError):
        ExactCover(["a"]).add_row(0, ["z"])
