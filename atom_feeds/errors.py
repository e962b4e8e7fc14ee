"""Exceptions raised by atom_feeds."""


class AtomFeedError(Exception):
    """Base class for atom_feeds errors."""


class TransportError(AtomFeedError):
    """Raised when an Atom feed cannot be fetched over HTTP."""


class MalformedDocument(AtomFeedError):
    """Raised when a byte stream is not a well-formed Atom document."""
