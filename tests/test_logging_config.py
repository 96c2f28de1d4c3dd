"""Tests for the logging setup."""

from __future__ import annotations

import logging

import pytest

from beacon_api.app.core.config import Settings
from beacon_api.app.core.logging_config import ACCESS_LOGGER, APP_LOGGER, setup_logging


def tagged(logger: logging.Logger) -> list:
    return [h for h in logger.handlers if getattr(h, "beacon_api_handler", False)]


@pytest.fixture(autouse=True)
def restore_loggers():
    app_logger = logging.getLogger(APP_LOGGER)
    access_logger = logging.getLogger(ACCESS_LOGGER)
    levels = (app_logger.level, access_logger.level)
    yield
    for handler in tagged(app_logger):
        app_logger.removeHandler(handler)
        handler.close()
    app_logger.setLevel(levels[0])
    access_logger.setLevel(levels[1])


def test_levels_come_from_settings() -> None:
    logger = setup_logging(Settings(log_level="debug", access_log_level="WARNING"))

    assert logger.name == APP_LOGGER
    assert logger.level == logging.DEBUG
    assert logging.getLogger(ACCESS_LOGGER).level == logging.WARNING


def test_unknown_level_falls_back_to_info() -> None:
    logger = setup_logging(Settings(log_level="chatty"))
    assert logger.level == logging.INFO


def test_repeated_setup_does_not_stack_handlers() -> None:
    setup_logging(Settings(log_file=""))
    setup_logging(Settings(log_file=""))
    logger = setup_logging(Settings(log_file=""))

    assert len(tagged(logger)) == 1


def test_root_logger_is_left_alone() -> None:
    before = list(logging.getLogger().handlers)
    setup_logging(Settings(log_file=""))
    assert logging.getLogger().handlers == before


def test_log_file_receives_service_records(tmp_path) -> None:
    log_file = tmp_path / "beacon.log"
    logger = setup_logging(Settings(log_level="INFO", log_file=str(log_file)))

    assert len(tagged(logger)) == 2
    logging.getLogger("beacon_api.app.services.beacon_service").info("Created beacon %s", 7)
    for handler in tagged(logger):
        handler.flush()

    content = log_file.read_text(encoding="utf-8")
    assert "[INFO] beacon_api.app.services.beacon_service: Created beacon 7" in content


def test_log_file_follows_latest_settings(tmp_path) -> None:
    first = tmp_path / "first.log"
    second = tmp_path / "second.log"
    setup_logging(Settings(log_file=str(first)))
    logger = setup_logging(Settings(log_file=str(second)))

    logger.warning("rotated")
    for handler in tagged(logger):
        handler.flush()

    assert "rotated" in second.read_text(encoding="utf-8")
    assert "rotated" not in first.read_text(encoding="utf-8")
