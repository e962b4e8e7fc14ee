"""Atom document models.

These dataclasses mirror the Atom 1.0 XML schema (RFC 4287). Field order
follows the element order used when encoding.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Tuple, runtime_checkable

ATOM_NS = "http://www.w3.org/2005/Atom"


@runtime_checkable
class XmlFeed(Protocol):
    """Anything that can produce an Atom document ready for encoding."""

    def feed_xml(self) -> "AtomFeed":
        ...


@dataclass
class AtomPerson:
    """Person construct shared by author and contributor elements."""

    name: str = ""
    uri: str = ""
    email: str = ""


@dataclass
class AtomText:
    """Text body with its `type` attribute."""

    content: str = ""
    type: str = ""


@dataclass
class AtomContent(AtomText):
    """Entry content element."""


@dataclass
class AtomSummary(AtomText):
    """Entry summary element."""


@dataclass
class AtomLink:
    href: str = ""
    rel: str = ""


def _find_link(links: List[AtomLink], rel: str) -> Tuple[str, bool]:
    for link in links:
        if link.rel == rel:
            return link.href, True
    return "", False


@dataclass
class AtomEntry:
    """Represents an Atom entry."""

    title: str = ""  # required
    updated: str = ""  # required
    id: str = ""  # required
    category: str = ""
    content: Optional[AtomContent] = None
    rights: str = ""
    source: str = ""
    published: str = ""
    contributor: Optional[AtomPerson] = None
    links: List[AtomLink] = field(default_factory=list)  # required without content
    summary: Optional[AtomSummary] = None
    author: Optional[AtomPerson] = None  # required if the feed lacks an author

    def link(self, rel: str) -> Tuple[str, bool]:
        """Return the href of the first link with the given relation.

        Args:
            rel: Link relation to look for

        Returns:
            Tuple of (href, found); ("", False) when no link matches
        """
        return _find_link(self.links, rel)


@dataclass
class AtomFeed:
    """Represents an Atom feed document."""

    xmlns: str = ATOM_NS
    title: str = ""  # required
    id: str = ""  # required
    updated: str = ""  # required
    category: str = ""
    icon: str = ""
    logo: str = ""
    rights: str = ""
    subtitle: str = ""
    links: List[AtomLink] = field(default_factory=list)
    author: Optional[AtomPerson] = None  # required
    contributor: Optional[AtomPerson] = None
    entries: List[AtomEntry] = field(default_factory=list)

    def link(self, rel: str) -> Tuple[str, bool]:
        """Return the href of the first link with the given relation.

        Args:
            rel: Link relation to look for

        Returns:
            Tuple of (href, found); ("", False) when no link matches
        """
        return _find_link(self.links, rel)

    def feed_xml(self) -> "AtomFeed":
        """Return the document ready for encoding (the feed itself)."""
        return self
