"""Logging configuration for mini-resp.

Library modules only create loggers under ``mini_resp``; handlers are attached
here by the CLI, never on import.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOGGER_NAME = "mini_resp"

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(log_path: Path, *, verbose: bool = False) -> None:
    """Send package logs to a rotating file, and to stderr when ``verbose``.

    The file receives DEBUG and above (request sizes, reply kinds); stderr
    receives the same records for ``--verbose`` runs. Idempotent per handler kind.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    formatter = logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT)

    if not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # RotatingFileHandler is itself a StreamHandler subclass
    has_console = any(type(h) is logging.StreamHandler for h in logger.handlers)
    if verbose and not has_console:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(formatter)
        logger.addHandler(console)
