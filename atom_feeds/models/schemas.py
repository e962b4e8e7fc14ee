"""Generic feed models for atom_feeds.

This module defines the format-agnostic feed and item structures that
callers build before rendering them as Atom.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass
class Link:
    """A hyperlink with an optional relation such as "alternate" or "self"."""

    href: str = ""
    rel: str = ""


@dataclass
class Author:
    """Represents the author of a feed or item."""

    name: str = ""
    email: str = ""


@dataclass
class Item:
    """Represents a single item of a feed.

    The description is treated as HTML markup. A timestamp of None means
    the instant is unknown.
    """

    title: str = ""
    link: Link = field(default_factory=Link)
    description: str = ""
    id: str = ""
    author: Optional[Author] = None
    created: Optional[datetime] = None
    updated: Optional[datetime] = None


@dataclass
class Feed:
    """Represents a feed and its ordered items."""

    title: str = ""
    link: Link = field(default_factory=Link)
    description: str = ""
    author: Optional[Author] = None
    copyright: str = ""
    created: Optional[datetime] = None
    updated: Optional[datetime] = None
    items: List[Item] = field(default_factory=list)

    def add(self, item: Item) -> None:
        """Append an item to the feed."""
        self.items.append(item)
