"""
Tests for process-level logging setup
"""

from loguru import logger

from dbseed.logging_utils import configure_logging


def test_default_level(capsys):
    assert configure_logging() == "WARNING"
    logger.info("hidden")
    logger.warning("shown")
    err = capsys.readouterr().err
    assert "hidden" not in err
    assert "shown" in err


def test_env_override(monkeypatch):
    monkeypatch.setenv("DBSEED_LOG_LEVEL", "info")
    assert configure_logging() == "INFO"


def test_verbose_forces_debug(monkeypatch, capsys):
    monkeypatch.setenv("DBSEED_LOG_LEVEL", "ERROR")
    assert configure_logging(verbose=True) == "DEBUG"
    logger.debug("details")
    assert "details" in capsys.readouterr().err


def test_reconfigure_same_level_keeps_one_sink(capsys):
    configure_logging("INFO")
    configure_logging("info")
    logger.info("once")
    assert capsys.readouterr().err.count("once") == 1
