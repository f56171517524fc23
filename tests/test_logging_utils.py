"""Tests for logging helpers."""

import pytest
from loguru import logger

from setsugar import logging_utils
from setsugar.config.settings import LogSettings
from setsugar.core.transformer import transform
from setsugar.logging_utils import configure_logging, parse_log_filter
from setsugar.surface.parser import parse_formula


@pytest.fixture
def fresh_logging(monkeypatch):
    monkeypatch.setattr(logging_utils, "_CONFIGURED_PROFILE", None)
    yield
    logger.remove()


def test_parse_log_filter_default():
    assert parse_log_filter("") == ("warning", {})


def test_parse_log_filter_global_level():
    assert parse_log_filter("INFO") == ("info", {})


def test_parse_log_filter_modules():
    level, modules = parse_log_filter("debug, setsugar.core=debug, setsugar.surface=false")
    assert level == "debug"
    assert modules == {"setsugar.core": "DEBUG", "setsugar.surface": False}


def test_module_filter_enables_debug_below_global_level(fresh_logging, capsys):
    configure_logging(settings=LogSettings(filter="warning,setsugar.core=debug"))

    transform(parse_formula("v0 ⊆ v1"))
    logger.info("outside.core")

    err = capsys.readouterr().err
    assert "transform.start" in err
    assert "transform.pass name=subset" in err
    assert "outside.core" not in err


def test_disabled_module_is_silent(fresh_logging, capsys):
    configure_logging(settings=LogSettings(filter="debug,setsugar.core=false"))

    transform(parse_formula("v0 ⊆ v1"))
    logger.warning("outside.core")

    err = capsys.readouterr().err
    assert "transform." not in err
    assert "outside.core" in err


def test_configure_logging_runs_once_per_profile(fresh_logging, capsys):
    configure_logging(settings=LogSettings(filter="warning"))
    configure_logging(settings=LogSettings(filter="debug"))

    logger.info("still.warning")

    assert "still.warning" not in capsys.readouterr().err
