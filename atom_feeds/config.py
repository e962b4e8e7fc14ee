"""Configuration for atom_feeds.

Settings are read from environment variables:
    ATOM_FEEDS_LOG_LEVEL         log level name (default INFO)
    ATOM_FEEDS_USER_AGENT        User-Agent sent when fetching feeds
    ATOM_FEEDS_TIMEOUT           HTTP timeout in seconds (default 30)
    ATOM_FEEDS_FOLLOW_REDIRECTS  "true" or "false" (default true)
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_USER_AGENT = "AtomFeeds/1.0 (Atom Feed Reader)"
DEFAULT_TIMEOUT = 30.0


@dataclass
class AtomConfig:
    """Runtime settings for fetching and logging."""

    name: str = "atom_feeds"
    log_level: str = "INFO"
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT
    follow_redirects: bool = True


def _env_float(key: str, default: float) -> float:
    value = os.environ.get(key)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        logging.getLogger(__name__).warning(
            f"Invalid value for {key}: {value!r}, using {default}"
        )
        return default


def load_config() -> AtomConfig:
    """Load configuration from the environment.

    Returns:
        AtomConfig populated from ATOM_FEEDS_* variables
    """
    return AtomConfig(
        log_level=os.environ.get("ATOM_FEEDS_LOG_LEVEL", "INFO").upper(),
        user_agent=os.environ.get("ATOM_FEEDS_USER_AGENT", DEFAULT_USER_AGENT),
        timeout=_env_float("ATOM_FEEDS_TIMEOUT", DEFAULT_TIMEOUT),
        follow_redirects=os.environ.get(
            "ATOM_FEEDS_FOLLOW_REDIRECTS", "true"
        ).lower() == "true",
    )


# Process-wide default, loaded on first use
_config: Optional[AtomConfig] = None


def get_config() -> AtomConfig:
    """Get or create the default configuration."""
    global _config

    if _config is None:
        _config = load_config()

    return _config
