import pytest
from loguru import logger

from dbseed import logging_utils


@pytest.fixture(autouse=True)
def _reset_logging(monkeypatch):
    """Each test starts unconfigured and leaves no sinks on captured streams"""
    monkeypatch.setattr(logging_utils, '_CONFIGURED_LEVEL', None)
    monkeypatch.delenv("DBSEED_LOG_LEVEL", raising=False)
    logger.remove()
    yield
    logger.remove()
