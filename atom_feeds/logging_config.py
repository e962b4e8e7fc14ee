"""Logging setup for atom_feeds."""

import logging
import sys
from typing import Optional

from atom_feeds.config import AtomConfig, get_config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("atom_feeds")


def setup_logging(config: Optional[AtomConfig] = None) -> logging.Logger:
    """Configure the atom_feeds logger.

    Logs go to stderr so that XML written to stdout stays clean.

    Args:
        config: Optional configuration (defaults to the process config)

    Returns:
        The configured package logger
    """
    if config is None:
        config = get_config()

    level = getattr(logging, config.log_level.upper(), logging.INFO)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the atom_feeds hierarchy."""
    if name == "atom_feeds" or name.startswith("atom_feeds."):
        return logging.getLogger(name)
    return logger.getChild(name)
