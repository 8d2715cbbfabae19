"""Logging configuration for the uploader and its operator script."""

import logging
import sys

from objectstore.core.config import get_settings

# httpx logs every request line at INFO; storage.upload already logs each PUT.
TRANSPORT_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: int | None = None) -> None:
    """Configure stdout logging.

    Args:
        level: Explicit level; otherwise DEBUG when settings.debug, else INFO.
            Transport loggers follow it only at DEBUG and stay at WARNING otherwise.
    """
    if level is None:
        level = logging.DEBUG if get_settings().debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    transport_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)


def get_logger(name: str) -> logging.Logger:
    """Return a module logger (pass __name__)."""
    return logging.getLogger(name)
