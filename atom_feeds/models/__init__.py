"""Data models for atom_feeds."""

from .atom import (
    ATOM_NS,
    AtomContent,
    AtomEntry,
    AtomFeed,
    AtomLink,
    AtomPerson,
    AtomSummary,
    AtomText,
    XmlFeed,
)
from .schemas import Author, Feed, Item, Link

__all__ = [
    "ATOM_NS",
    "AtomContent",
    "AtomEntry",
    "AtomFeed",
    "AtomLink",
    "AtomPerson",
    "AtomSummary",
    "AtomText",
    "XmlFeed",
    "Author",
    "Feed",
    "Item",
    "Link",
]
