"""Services for atom_feeds."""

from .codec import parse_atom_feed, to_bytes, to_xml, write_atom
from .feed_source import feed_from_parsed, load_feed
from .fetcher import download_atom_feed, download_atom_feed_async
from .mapper import Atom, any_time_format, new_atom_entry, new_uuid, to_atom

__all__ = [
    "Atom",
    "any_time_format",
    "download_atom_feed",
    "download_atom_feed_async",
    "feed_from_parsed",
    "load_feed",
    "new_atom_entry",
    "new_uuid",
    "parse_atom_feed",
    "to_atom",
    "to_bytes",
    "to_xml",
    "write_atom",
]
