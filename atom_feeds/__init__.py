"""atom_feeds - Atom 1.0 feed generation and parsing."""

from atom_feeds.errors import AtomFeedError, MalformedDocument, TransportError
from atom_feeds.models.atom import AtomEntry, AtomFeed, AtomLink, AtomPerson
from atom_feeds.models.schemas import Author, Feed, Item, Link
from atom_feeds.services.codec import parse_atom_feed, to_xml
from atom_feeds.services.fetcher import download_atom_feed
from atom_feeds.services.mapper import Atom, to_atom

__all__ = [
    "Atom",
    "AtomEntry",
    "AtomFeed",
    "AtomFeedError",
    "AtomLink",
    "AtomPerson",
    "Author",
    "Feed",
    "Item",
    "Link",
    "MalformedDocument",
    "TransportError",
    "download_atom_feed",
    "parse_atom_feed",
    "to_atom",
    "to_xml",
]
