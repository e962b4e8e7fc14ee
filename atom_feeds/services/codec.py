"""Atom XML codec.

This module encodes Atom documents to XML and strictly decodes XML back
into AtomFeed objects using lxml.
"""

import re
from typing import BinaryIO, Optional, Union

from lxml import etree

from atom_feeds.errors import MalformedDocument
from atom_feeds.logging_config import get_logger
from atom_feeds.models.atom import (
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

# Characters that XML 1.0 does not allow in text or attribute values
_INVALID_XML_CHARS = re.compile(
    "[^\u0009\u000a\u000d\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)


def _clean(value: str) -> str:
    return _INVALID_XML_CHARS.sub("\ufffd", value)


class _Encoder:
    """Builds an lxml tree for one AtomFeed."""

    def __init__(self, ns: str):
        self.ns = ns

    def tag(self, name: str) -> str:
        return f"{{{self.ns}}}{name}" if self.ns else name

    def text(self, parent, name: str, value: str, required: bool = False) -> None:
        if value or required:
            etree.SubElement(parent, self.tag(name)).text = _clean(value)

    def person(self, parent, name: str, person: Optional[AtomPerson]) -> None:
        if person is None:
            return
        el = etree.SubElement(parent, self.tag(name))
        self.text(el, "name", person.name)
        self.text(el, "uri", person.uri)
        self.text(el, "email", person.email)

    def body(self, parent, name: str, body: Optional[AtomText]) -> None:
        if body is None:
            return
        el = etree.SubElement(parent, self.tag(name), type=_clean(body.type))
        el.text = _clean(body.content)

    def links(self, parent, links) -> None:
        for link in links:
            el = etree.SubElement(parent, self.tag("link"), href=_clean(link.href))
            if link.rel:
                el.set("rel", _clean(link.rel))

    def entry(self, parent, entry: AtomEntry) -> None:
        el = etree.SubElement(parent, self.tag("entry"))
        self.text(el, "title", entry.title, required=True)
        self.text(el, "updated", entry.updated, required=True)
        self.text(el, "id", entry.id, required=True)
        self.text(el, "category", entry.category)
        self.body(el, "content", entry.content)
        self.text(el, "rights", entry.rights)
        self.text(el, "source", entry.source)
        self.text(el, "published", entry.published)
        self.person(el, "contributor", entry.contributor)
        self.links(el, entry.links)
        self.body(el, "summary", entry.summary)
        self.person(el, "author", entry.author)

    def feed(self, feed: AtomFeed):
        nsmap = {None: self.ns} if self.ns else None
        root = etree.Element(self.tag("feed"), nsmap=nsmap)
        self.text(root, "title", feed.title, required=True)
        self.text(root, "id", feed.id, required=True)
        self.text(root, "updated", feed.updated, required=True)
        self.text(root, "category", feed.category)
        self.text(root, "icon", feed.icon)
        self.text(root, "logo", feed.logo)
        self.text(root, "rights", feed.rights)
        self.text(root, "subtitle", feed.subtitle)
        self.links(root, feed.links)
        self.person(root, "author", feed.author)
        self.person(root, "contributor", feed.contributor)
        for entry in feed.entries:
            self.entry(root, entry)
        return root


def to_bytes(obj: XmlFeed, pretty: bool = True) -> bytes:
    """Encode an XML-ready object as a UTF-8 Atom document.

    Args:
        obj: Anything implementing feed_xml(), e.g. an Atom wrapper or AtomFeed
        pretty: Indent nested elements by two spaces

    Returns:
        XML declaration followed by the feed element
    """
    feed = obj.feed_xml()
    root = _Encoder(feed.xmlns).feed(feed)
    return etree.tostring(root, xml_declaration=True, encoding="UTF-8", pretty_print=pretty)


def to_xml(obj: XmlFeed, pretty: bool = True) -> str:
    """Encode an XML-ready object as Atom XML text."""
    return to_bytes(obj, pretty=pretty).decode("utf-8")


def write_atom(obj: XmlFeed, stream: BinaryIO, pretty: bool = True) -> None:
    """Write an XML-ready object to a binary stream."""
    stream.write(to_bytes(obj, pretty=pretty))


def _local_name(el) -> Optional[str]:
    """Return the local name of an Atom (or un-namespaced) element."""
    if not isinstance(el.tag, str):
        return None  # comment or processing instruction
    qname = etree.QName(el)
    if qname.namespace not in (None, ATOM_NS):
        return None
    return qname.localname


def _chardata(el) -> str:
    # text directly inside the element, nested markup skipped
    return "".join([el.text or ""] + [child.tail or "" for child in el])


def _decode_person(el) -> AtomPerson:
    person = AtomPerson()
    for child in el:
        name = _local_name(child)
        if name in ("name", "uri", "email"):
            setattr(person, name, _chardata(child))
    return person


def _decode_link(el) -> AtomLink:
    return AtomLink(href=el.get("href", ""), rel=el.get("rel", ""))


def _decode_entry(el) -> AtomEntry:
    entry = AtomEntry()
    for child in el:
        name = _local_name(child)
        if name in ("title", "updated", "id", "rights", "source", "published"):
            setattr(entry, name, _chardata(child))
        elif name == "category":
            entry.category = _chardata(child) or child.get("term", "")
        elif name == "content":
            entry.content = AtomContent(content=_chardata(child), type=child.get("type", ""))
        elif name == "summary":
            entry.summary = AtomSummary(content=_chardata(child), type=child.get("type", ""))
        elif name == "link":
            entry.links.append(_decode_link(child))
        elif name == "author":
            entry.author = _decode_person(child)
        elif name == "contributor":
            entry.contributor = _decode_person(child)
    return entry


def _decode_feed(root) -> AtomFeed:
    feed = AtomFeed(xmlns=etree.QName(root).namespace or "")
    for child in root:
        name = _local_name(child)
        if name in ("title", "id", "updated", "icon", "logo", "rights", "subtitle"):
            setattr(feed, name, _chardata(child))
        elif name == "category":
            feed.category = _chardata(child) or child.get("term", "")
        elif name == "link":
            feed.links.append(_decode_link(child))
        elif name == "author":
            feed.author = _decode_person(child)
        elif name == "contributor":
            feed.contributor = _decode_person(child)
        elif name == "entry":
            feed.entries.append(_decode_entry(child))
    return feed


def parse_atom_feed(content: Union[str, bytes]) -> AtomFeed:
    """Strictly parse an Atom document.

    Args:
        content: Raw XML text or bytes

    Returns:
        Populated AtomFeed

    Raises:
        MalformedDocument: If the input is not well-formed XML or its root
            element is not an Atom feed
    """
    logger = get_logger(__name__)

    options = {"recover": False, "resolve_entities": False, "no_network": True}
    if isinstance(content, str):
        content = content.encode("utf-8")
        # the text is already decoded, so ignore any encoding declaration
        options["encoding"] = "utf-8"

    parser = etree.XMLParser(**options)
    try:
        root = etree.fromstring(content, parser)
    except (etree.XMLSyntaxError, ValueError) as e:
        logger.error(f"Failed to parse Atom feed: {e}")
        raise MalformedDocument(str(e)) from e

    if _local_name(root) != "feed":
        message = f"expected element <feed> but have <{etree.QName(root).localname}>"
        logger.error(f"Failed to parse Atom feed: {message}")
        raise MalformedDocument(message)

    feed = _decode_feed(root)
    logger.info(f"Parsed Atom feed {feed.title!r} with {len(feed.entries)} entries")
    return feed
