"""Generic feed loader.

This module reads any RSS/Atom dialect with feedparser and converts the
result into a generic Feed that the Atom mapper can render.
"""

import time
from datetime import datetime, timezone
from typing import Any, Optional, Union

import feedparser

from atom_feeds.errors import MalformedDocument
from atom_feeds.logging_config import get_logger
from atom_feeds.models.schemas import Author, Feed, Item, Link


def _to_datetime(value: Optional[time.struct_time]) -> Optional[datetime]:
    """Convert a feedparser struct_time (always UTC) to an aware datetime."""
    if not value:
        return None
    try:
        return datetime(*value[:6], tzinfo=timezone.utc)
    except (ValueError, TypeError):
        return None


def _primary_link(data: Any) -> Link:
    # Prefer the alternate link, the same one feedparser exposes as "link"
    for link in data.get("links", []):
        if link.get("rel", "alternate") == "alternate" and link.get("href"):
            return Link(href=link["href"], rel="alternate")

    href = data.get("link", "")
    return Link(href=href, rel="alternate" if href else "")


def _author(data: Any) -> Optional[Author]:
    detail = data.get("author_detail") or {}
    name = detail.get("name") or data.get("author", "")
    email = detail.get("email", "")
    if not name and not email:
        return None
    return Author(name=name, email=email)


def _description(entry: Any) -> str:
    for content in entry.get("content", []):
        if content.get("value"):
            return content["value"]
    return entry.get("summary", "")


def _item(entry: Any) -> Item:
    return Item(
        id=entry.get("id", ""),
        title=entry.get("title", ""),
        link=_primary_link(entry),
        description=_description(entry),
        author=_author(entry),
        created=_to_datetime(entry.get("published_parsed") or entry.get("created_parsed")),
        updated=_to_datetime(entry.get("updated_parsed")),
    )


def feed_from_parsed(parsed: Any) -> Feed:
    """Convert a feedparser result into a generic Feed.

    Args:
        parsed: Result of feedparser.parse()

    Returns:
        Feed with metadata and items in document order
    """
    data = parsed.feed
    feed = Feed(
        title=data.get("title", ""),
        link=_primary_link(data),
        description=data.get("subtitle", "") or data.get("description", ""),
        author=_author(data),
        copyright=data.get("rights", ""),
        created=_to_datetime(data.get("published_parsed")),
        updated=_to_datetime(data.get("updated_parsed")),
    )

    for entry in parsed.entries:
        feed.add(_item(entry))

    return feed


def load_feed(source: Union[str, bytes]) -> Feed:
    """Parse RSS/Atom content into a generic Feed.

    Args:
        source: Feed document as text or bytes

    Returns:
        Generic Feed

    Raises:
        MalformedDocument: If feedparser finds neither a feed title nor entries
    """
    logger = get_logger(__name__)

    # feedparser treats a str as a URL or filename when it looks like one
    if isinstance(source, str):
        source = source.encode("utf-8")

    parsed = feedparser.parse(source)

    if parsed.bozo and not parsed.entries and not parsed.feed.get("title"):
        logger.warning(f"Feed parsing error: {parsed.bozo_exception}")
        raise MalformedDocument(str(parsed.bozo_exception))

    feed = feed_from_parsed(parsed)
    logger.info(f"Loaded {len(feed.items)} items from feed {feed.title!r}")
    return feed
