"""
Logging configuration for the gym API.

Every module logs through ``logging.getLogger(__name__)``, so all of
the service's records flow through the ``gym_api`` package logger.
``setup_logging`` configures that logger from :class:`Settings`: the
level (``DEBUG`` whenever ``debug`` is on), a console handler unless
the host process (uvicorn with a log config, pytest) already handles
the root logger, and an optional ``LOG_FILE`` handler.  Handlers added
here are tagged so repeated ``create_app`` calls do not duplicate them.
"""

import logging
from pathlib import Path

from .config import Settings


APP_LOGGER_NAME = "gym_api"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_HANDLER_TAG = "_gym_api_handler"


def _tagged(handler: logging.Handler, formatter: logging.Formatter) -> logging.Handler:
    handler.setFormatter(formatter)
    setattr(handler, _HANDLER_TAG, True)
    return handler


def resolve_level(settings: Settings) -> int:
    """Return the numeric log level for ``settings``; unknown names mean INFO."""
    if settings.debug:
        return logging.DEBUG
    level = logging.getLevelName(settings.log_level.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(settings: Settings) -> logging.Logger:
    """Configure and return the ``gym_api`` logger."""
    logger = logging.getLogger(APP_LOGGER_NAME)
    logger.setLevel(resolve_level(settings))

    if any(getattr(handler, _HANDLER_TAG, False) for handler in logger.handlers):
        return logger

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    if logging.getLogger().handlers:
        # The root logger already prints; records reach it by propagation.
        logger.propagate = True
    else:
        logger.addHandler(_tagged(logging.StreamHandler(), formatter))
        logger.propagate = False

    if settings.log_file:
        log_path = Path(settings.log_file).resolve()
        logger.addHandler(_tagged(logging.FileHandler(log_path, encoding="utf-8"), formatter))
    return logger
