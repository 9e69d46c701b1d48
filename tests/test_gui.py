"""Tests for board cell captions."""

from __future__ import annotations

from gui import _cell_text


def test_month_caption():
    assert _cell_text((0, 2)) == "MAR"


def test_day_caption():
    assert _cell_text((5, 6)) == "28"


def test_blocked_cell_has_no_caption():
    assert _cell_text((0, 6)) == ""
