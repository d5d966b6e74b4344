"""Logging setup for the ``medprice`` logger namespace.

Every module asks for its logger through ``get_logger(__name__)``; the first
call installs one stderr handler on the ``medprice`` logger. The starting level
comes from ``MEDPRICE_LOG_LEVEL`` (DEBUG, INFO, WARNING, ERROR; INFO when unset)
and the CLI ``--verbose`` flag lowers it to DEBUG through ``set_log_level``.
"""

import logging
import os
import sys

LOGGER_NAMESPACE = "medprice"
LOG_LEVEL_ENV = "MEDPRICE_LOG_LEVEL"

_FORMAT = "%(levelname)s [%(name)s] %(message)s"
# Debug output also carries the source line.
_DEBUG_FORMAT = "%(levelname)s [%(name)s:%(lineno)d] %(message)s"

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
}

_configured = False


def _formatter(level: int) -> logging.Formatter:
    return logging.Formatter(_DEBUG_FORMAT if level <= logging.DEBUG else _FORMAT)


def _level_from_env() -> int:
    return _LEVELS.get(os.environ.get(LOG_LEVEL_ENV, "").strip().upper(), logging.INFO)


def configure_logging(level: int | None = None) -> None:
    """Install the namespace handler once; later calls are no-ops."""
    global _configured
    if _configured:
        return

    if level is None:
        level = _level_from_env()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_formatter(level))

    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    package_logger.setLevel(level)
    package_logger.addHandler(handler)
    package_logger.propagate = False
    _configured = True


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    if name == LOGGER_NAMESPACE or name.startswith(f"{LOGGER_NAMESPACE}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


def set_log_level(level: int) -> None:
    """Change the namespace level at runtime, switching the line format to match."""
    configure_logging()
    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    package_logger.setLevel(level)
    for handler in package_logger.handlers:
        handler.setFormatter(_formatter(level))
