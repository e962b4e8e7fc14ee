"""Atom feed fetcher.

This module downloads an Atom document over HTTP and hands the body to the
strict XML codec.
"""

from typing import Optional

import httpx

from atom_feeds.config import AtomConfig, get_config
from atom_feeds.errors import TransportError
from atom_feeds.logging_config import get_logger
from atom_feeds.models.atom import AtomFeed
from atom_feeds.services.codec import parse_atom_feed

ATOM_MIME_TYPE = "application/atom+xml"


def _client_options(config: AtomConfig) -> dict:
    return {
        "follow_redirects": config.follow_redirects,
        "timeout": config.timeout,
        "headers": {
            "Accept": ATOM_MIME_TYPE,
            "User-Agent": config.user_agent,
        },
    }


def download_atom_feed(url: str, config: Optional[AtomConfig] = None) -> AtomFeed:
    """Download and parse an Atom feed.

    Args:
        url: URL of the Atom feed
        config: Optional configuration (defaults to the process config)

    Returns:
        Parsed AtomFeed

    Raises:
        TransportError: If the request fails or returns a non-success status
        MalformedDocument: If the response body is not a well-formed Atom feed
    """
    if config is None:
        config = get_config()

    logger = get_logger(__name__)
    logger.info(f"Downloading Atom feed: {url}")

    with httpx.Client(**_client_options(config)) as client:
        try:
            response = client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Failed to fetch feed: {e}")
            raise TransportError(str(e)) from e

    return parse_atom_feed(response.content)


async def download_atom_feed_async(url: str, config: Optional[AtomConfig] = None) -> AtomFeed:
    """Download and parse an Atom feed without blocking the event loop.

    Args:
        url: URL of the Atom feed
        config: Optional configuration (defaults to the process config)

    Returns:
        Parsed AtomFeed
    """
    if config is None:
        config = get_config()

    logger = get_logger(__name__)
    logger.info(f"Downloading Atom feed: {url}")

    async with httpx.AsyncClient(**_client_options(config)) as client:
        try:
            response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Failed to fetch feed: {e}")
            raise TransportError(str(e)) from e

    return parse_atom_feed(response.content)
