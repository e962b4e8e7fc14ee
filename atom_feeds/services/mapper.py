"""Atom mapper service.

This module turns a generic Feed into an Atom document: it copies the feed
metadata, normalizes timestamps to RFC 3339 and derives an id for every
entry that lacks one.
"""

import re
import uuid
from datetime import datetime, timezone
from typing import Optional
from urllib.parse import unquote, urlsplit

from atom_feeds.logging_config import get_logger
from atom_feeds.models.atom import (
    ATOM_NS,
    AtomContent,
    AtomEntry,
    AtomFeed,
    AtomLink,
    AtomPerson,
)
from atom_feeds.models.schemas import Feed, Item
from atom_feeds.services.codec import to_xml

RFC3339 = "rfc3339"
DATE_ONLY = "%Y-%m-%d"

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def format_time(fmt: str, t: datetime) -> str:
    """Format a timestamp, treating naive datetimes as UTC.

    Args:
        fmt: RFC3339 or a strftime pattern
        t: Timestamp to format

    Returns:
        Formatted timestamp
    """
    if t.tzinfo is None:
        t = t.replace(tzinfo=timezone.utc)

    if fmt == DATE_ONLY:
        # strftime does not zero-pad years below 1000
        return t.date().isoformat()
    if fmt != RFC3339:
        return t.strftime(fmt)

    text = t.replace(microsecond=0).isoformat()
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text


def any_time_format(fmt: str, primary: Optional[datetime], fallback: Optional[datetime]) -> str:
    """Format the first timestamp that is set.

    Prefers the primary (usually the update time), falls back to the
    secondary (usually the creation time) and returns "" when neither is set.
    """
    if primary is not None:
        return format_time(fmt, primary)
    if fallback is not None:
        return format_time(fmt, fallback)
    return ""


def new_uuid() -> uuid.UUID:
    """Return a fresh random (version 4) UUID."""
    return uuid.uuid4()


def _host_and_path(href: str):
    """Split an href into host and decoded path.

    Falls back to the raw href and "/invalid.html" when the href is not a
    valid URL: control characters, whitespace in the host, bad percent
    escapes or a path that does not decode as UTF-8.
    """
    try:
        if _CONTROL_CHARS.search(href):
            raise ValueError(f"invalid control character in URL: {href!r}")
        parts = urlsplit(href)
        # netloc without user info, port kept
        host = parts.netloc.rpartition("@")[2]
        if any(c.isspace() for c in host) or _BAD_ESCAPE.search(host):
            raise ValueError(f"invalid host: {host!r}")
        if _BAD_ESCAPE.search(parts.path):
            raise ValueError(f"invalid escape in path: {parts.path!r}")
        path = unquote(parts.path, errors="strict")
    except ValueError:  # includes UnicodeDecodeError
        return href, "/invalid.html"
    return host, path


def new_atom_entry(item: Item) -> AtomEntry:
    """Build an Atom entry from a generic item.

    Args:
        item: Generic item to convert

    Returns:
        AtomEntry with content, link, updated time, id and optional author
    """
    entry_id = item.id

    if not entry_id:
        # no id given: build a tag URI from the link and date, else a uuid
        if item.link.href and (item.created is not None or item.updated is not None):
            date_str = any_time_format(DATE_ONLY, item.updated, item.created)
            host, path = _host_and_path(item.link.href)
            entry_id = f"tag:{host},{date_str}:{path}"
        else:
            entry_id = f"urn:uuid:{new_uuid()}"

    entry = AtomEntry(
        title=item.title,
        links=[AtomLink(href=item.link.href, rel=item.link.rel)],
        # assume the description is html
        content=AtomContent(content=item.description, type="html"),
        id=entry_id,
        updated=any_time_format(RFC3339, item.updated, item.created),
    )

    if item.author is not None and (item.author.name or item.author.email):
        entry.author = AtomPerson(name=item.author.name, email=item.author.email)

    return entry


class Atom:
    """Wraps a generic Feed so it can be rendered as Atom."""

    def __init__(self, feed: Feed):
        self.feed = feed

    def atom_feed(self) -> AtomFeed:
        """Create a new AtomFeed from the wrapped feed's data."""
        logger = get_logger(__name__)
        feed = self.feed

        atom = AtomFeed(
            xmlns=ATOM_NS,
            title=feed.title,
            links=[AtomLink(href=feed.link.href, rel=feed.link.rel)],
            subtitle=feed.description,
            id=feed.link.href,
            updated=any_time_format(RFC3339, feed.updated, feed.created),
            rights=feed.copyright,
        )

        if feed.author is not None:
            atom.author = AtomPerson(name=feed.author.name, email=feed.author.email)
        else:
            atom.author = AtomPerson(name="", email="")

        for item in feed.items:
            atom.entries.append(new_atom_entry(item))

        logger.debug(f"Mapped feed {feed.title!r} with {len(atom.entries)} entries")
        return atom

    def feed_xml(self) -> AtomFeed:
        """Return an XML-ready document for the wrapped feed."""
        return self.atom_feed()


def to_atom(feed: Feed, pretty: bool = True) -> str:
    """Render a generic feed as Atom XML text."""
    return to_xml(Atom(feed), pretty=pretty)
