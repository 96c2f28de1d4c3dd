"""
Logging for the beacon service.

Only the ``beacon_api`` logger tree and uvicorn's access log are
touched; the root logger is left to whoever embeds the app (uvicorn,
pytest).  Application records get one console handler and, when
``Settings.log_file`` is set, a file handler as well.  Handlers added
here are tagged so that building several apps in one process (tests)
does not stack duplicates.
"""

import logging
from pathlib import Path

from .config import Settings

APP_LOGGER = "beacon_api"
ACCESS_LOGGER = "uvicorn.access"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def _own_handlers(logger: logging.Logger) -> list:
    return [h for h in logger.handlers if getattr(h, "beacon_api_handler", False)]


def setup_logging(config: Settings) -> logging.Logger:
    """Configure the ``beacon_api`` and ``uvicorn.access`` loggers from ``config``.

    Levels are (re)applied on every call.  Handlers are replaced, so the
    log file follows the most recent settings.  Returns the application
    logger.
    """
    logger = logging.getLogger(APP_LOGGER)
    logger.setLevel(_level(config.log_level))
    logging.getLogger(ACCESS_LOGGER).setLevel(_level(config.access_log_level))

    for handler in _own_handlers(logger):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list = [logging.StreamHandler()]
    if config.log_file:
        handlers.append(logging.FileHandler(Path(config.log_file).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.beacon_api_handler = True
        logger.addHandler(handler)
    return logger
