"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from config import Settings


def test_defaults():
    s = Settings(_env_file=None)
    assert s.progress_interval == 10_000
    assert s.prune_islands is False
    assert s.find_all is False


def test_env_override(monkeypatch):
    monkeypatch.setenv("CALPUZZLE_PROGRESS_INTERVAL", "250")
    monkeypatch.setenv("CALPUZZLE_PRUNE_ISLANDS", "true")
    s = Settings(_env_file=None)
    assert s.progress_interval == 250
    assert s.prune_islands is True


def test_interval_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, progress_interval=0)
