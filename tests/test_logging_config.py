"""Tests for root logger setup."""

import logging

import pytest

from service_catalog_api.app.core.logging_config import NOISY_LOGGERS, setup_logging


@pytest.fixture
def configure(monkeypatch: pytest.MonkeyPatch):
    """Run ``setup_logging`` against a root logger with no handlers.

    Returns the handlers it attached; the root logger's handlers and the
    levels touched are restored afterwards.
    """
    root = logging.getLogger()
    monkeypatch.setattr(root, "level", root.level)
    for name in NOISY_LOGGERS:
        driver_logger = logging.getLogger(name)
        monkeypatch.setattr(driver_logger, "level", driver_logger.level)
    created = []

    def _configure(level: str, logfile=None) -> list:
        saved = root.handlers[:]
        root.handlers.clear()
        try:
            setup_logging(level, logfile)
            added = root.handlers[:]
        finally:
            root.handlers[:] = saved
        created.extend(added)
        return added

    yield _configure
    for handler in created:
        handler.close()


def test_console_handler_and_level(configure) -> None:
    handlers = configure("debug")

    assert len(handlers) == 1
    assert isinstance(handlers[0], logging.StreamHandler)
    assert logging.getLogger().level == logging.DEBUG


def test_driver_loggers_stay_at_warning(configure) -> None:
    configure("DEBUG")

    for name in NOISY_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING


def test_unknown_level_falls_back_to_info(configure) -> None:
    configure("chatty")

    assert logging.getLogger().level == logging.INFO


def test_log_file(configure, tmp_path) -> None:
    log_path = tmp_path / "catalog.log"

    handlers = configure("INFO", str(log_path))

    assert len(handlers) == 2
    assert isinstance(handlers[1], logging.FileHandler)
    assert handlers[1].baseFilename == str(log_path.resolve())


def test_existing_handlers_are_left_alone() -> None:
    root = logging.getLogger()
    marker = logging.NullHandler()
    root.addHandler(marker)
    try:
        before = root.handlers[:]
        level = root.level

        setup_logging("DEBUG")

        assert root.handlers == before
        assert root.level == level
    finally:
        root.removeHandler(marker)
