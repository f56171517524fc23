"""Test configuration and shared fixtures."""

import os

import pytest

from setsugar.config.settings import TransformConfig


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep SETSUGAR_* variables and stray .env files out of the tests."""
    for name in list(os.environ):
        if name.upper().startswith("SETSUGAR_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def all_on() -> TransformConfig:
    """Every elimination enabled."""
    return TransformConfig()
