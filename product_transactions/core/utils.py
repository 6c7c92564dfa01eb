"""Shared utility functions for the Product Transactions API."""

import logging
import re
from pathlib import Path

import colorlog

# Leading numeric prefix, e.g. "150", "-2.5e3", ".75", "150abc" -> "150".
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def get_logger(name: str) -> logging.Logger:
    """Get a logger with a colorized format for the project.

    Dotted names (``product-transactions.api``) are left handler-less so their
    records propagate to the project logger and its file handler.
    """
    logger = logging.getLogger(name)
    if "." in name:
        return logger
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = colorlog.ColoredFormatter(
            "%(log_color)s%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "bold_red",
            },
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.propagate = False
    return logger


def ensure_dir(path: str | Path) -> None:
    """Ensure a directory exists (like mkdir -p)."""
    Path(path).mkdir(parents=True, exist_ok=True)


def parse_float(value: str) -> float | None:
    """Parse the leading numeric prefix of a string, returning None when there is none.

    Mirrors the lenient parsing clients expect from search boxes: ``"150"`` and
    ``"150 usd"`` both yield ``150.0`` while ``"shirt"`` yields ``None``.
    """
    match = _FLOAT_PREFIX.match(value)
    if not match:
        return None
    return float(match.group(1))
