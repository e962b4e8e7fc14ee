"""Unit tests for the Atom mapper.

Tests for timestamp formatting, entry id derivation and feed mapping.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from atom_feeds.models.atom import ATOM_NS, AtomFeed, AtomPerson, XmlFeed
from atom_feeds.models.schemas import Author, Feed, Item, Link
from atom_feeds.services.mapper import (
    DATE_ONLY,
    RFC3339,
    Atom,
    any_time_format,
    format_time,
    new_atom_entry,
    new_uuid,
)


UPDATED = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
CREATED = datetime(2023, 12, 1, 8, 0, tzinfo=timezone.utc)


def uuid_from_id(entry_id: str) -> uuid.UUID:
    assert entry_id.startswith("urn:uuid:")
    return uuid.UUID(entry_id[len("urn:uuid:"):])


class TestTimeFormatting:
    """Tests for RFC 3339 formatting and the any-time rule."""

    def test_rfc3339_utc_uses_z(self):
        """Test that UTC timestamps end with Z."""
        assert format_time(RFC3339, UPDATED) == "2024-01-15T10:30:00Z"

    def test_rfc3339_drops_microseconds(self):
        """Test that fractional seconds are not emitted."""
        t = datetime(2024, 1, 15, 10, 30, 5, 123456, tzinfo=timezone.utc)
        assert format_time(RFC3339, t) == "2024-01-15T10:30:05Z"

    def test_rfc3339_keeps_offset(self):
        """Test that non-UTC offsets are written as +HH:MM."""
        t = datetime(2024, 1, 15, 10, 30, tzinfo=timezone(timedelta(hours=2)))
        assert format_time(RFC3339, t) == "2024-01-15T10:30:00+02:00"

    def test_naive_is_utc(self):
        """Test that naive datetimes are treated as UTC."""
        assert format_time(RFC3339, datetime(2024, 1, 15, 10, 30)) == "2024-01-15T10:30:00Z"

    def test_date_only_pattern(self):
        """Test formatting with a strftime pattern."""
        assert format_time(DATE_ONLY, UPDATED) == "2024-01-15"

    def test_any_time_format_neither_set(self):
        """Test that no timestamps gives an empty string, not now."""
        assert any_time_format(RFC3339, None, None) == ""

    def test_any_time_format_fallback(self):
        """Test that the fallback is used when the primary is unset."""
        assert any_time_format(RFC3339, None, CREATED) == "2023-12-01T08:00:00Z"

    def test_any_time_format_prefers_primary(self):
        """Test that the primary wins when both are set."""
        assert any_time_format(RFC3339, UPDATED, CREATED) == "2024-01-15T10:30:00Z"
        assert any_time_format(RFC3339, UPDATED, None) == "2024-01-15T10:30:00Z"


class TestEntryIds:
    """Tests for entry id derivation."""

    def test_existing_id_is_kept(self):
        """Test that a given id is used exactly as-is."""
        item = Item(id="not a uri at all", link=Link(href="https://example.com/a"), updated=UPDATED)
        assert new_atom_entry(item).id == "not a uri at all"

    def test_tag_uri_from_link_and_updated(self):
        """Test tag URI built from link host/path and the update date."""
        item = Item(link=Link(href="https://example.com/posts/1?x=y"), updated=UPDATED, created=CREATED)
        assert new_atom_entry(item).id == "tag:example.com,2024-01-15:/posts/1"

    def test_tag_uri_falls_back_to_created(self):
        """Test tag URI uses the creation date when there is no update date."""
        item = Item(link=Link(href="https://example.com/posts/1"), created=CREATED)
        assert new_atom_entry(item).id == "tag:example.com,2023-12-01:/posts/1"

    def test_tag_uri_host_keeps_port_drops_userinfo(self):
        """Test that the host part keeps the port but not user info."""
        item = Item(link=Link(href="http://user:pw@example.com:8080/a/b"), updated=UPDATED)
        assert new_atom_entry(item).id == "tag:example.com:8080,2024-01-15:/a/b"

    def test_tag_uri_unparseable_href(self):
        """Test fallback to the raw href and /invalid.html."""
        item = Item(link=Link(href="http://[::1/post"), updated=UPDATED)
        assert new_atom_entry(item).id == "tag:http://[::1/post,2024-01-15:/invalid.html"

    def test_tag_uri_path_is_decoded(self):
        """Test that percent escapes in the path are decoded."""
        item = Item(link=Link(href="https://example.com/caf%C3%A9/a%20b"), updated=UPDATED)
        assert new_atom_entry(item).id == "tag:example.com,2024-01-15:/café/a b"

    @pytest.mark.parametrize("href", [
        "https://example.com/%zz",
        "https://example.com/%C3",
        "http://exa mple.com/a",
        "https://example.com/a\x01b",
    ])
    def test_tag_uri_invalid_href_falls_back(self, href):
        """Test that invalid URLs use the raw href and /invalid.html."""
        item = Item(link=Link(href=href), updated=UPDATED)
        assert new_atom_entry(item).id == f"tag:{href},2024-01-15:/invalid.html"

    def test_tag_uri_pads_early_years(self):
        """Test that the date part always has a four digit year."""
        item = Item(link=Link(href="https://example.com/a"), updated=datetime(5, 1, 1, tzinfo=timezone.utc))
        assert new_atom_entry(item).id == "tag:example.com,0005-01-01:/a"

    def test_uuid_without_link(self):
        """Test that an item without a link gets a urn:uuid id."""
        item = Item(title="No link", updated=UPDATED)
        assert uuid_from_id(new_atom_entry(item).id).version == 4

    def test_uuid_without_timestamps(self):
        """Test that an item with a link but no timestamps gets a urn:uuid id."""
        item = Item(link=Link(href="https://example.com/a"))
        assert uuid_from_id(new_atom_entry(item).id).version == 4

    def test_uuids_differ_between_calls(self):
        """Test that identical items receive different ids."""
        first = new_atom_entry(Item(title="Same"))
        second = new_atom_entry(Item(title="Same"))
        assert first.id != second.id

    def test_new_uuid_is_random(self):
        """Test that new_uuid returns version 4 UUIDs."""
        value = new_uuid()
        assert value.version == 4
        assert value != new_uuid()


class TestNewAtomEntry:
    """Tests for the remaining entry fields."""

    def test_content_title_link_updated(self):
        """Test that content, title, link and updated are copied."""
        item = Item(
            title="First Post",
            link=Link(href="https://example.com/post1", rel="alternate"),
            description="<p>Hello &amp; welcome</p>",
            updated=UPDATED,
        )

        entry = new_atom_entry(item)

        assert entry.title == "First Post"
        assert entry.content.content == "<p>Hello &amp; welcome</p>"
        assert entry.content.type == "html"
        assert len(entry.links) == 1
        assert entry.links[0].href == "https://example.com/post1"
        assert entry.links[0].rel == "alternate"
        assert entry.updated == "2024-01-15T10:30:00Z"
        assert entry.summary is None

    def test_updated_empty_without_timestamps(self):
        """Test that updated is empty when the item has no timestamps."""
        assert new_atom_entry(Item(title="Undated")).updated == ""

    def test_author_name_and_email(self):
        """Test that the author's name and email are mapped, uri is not."""
        item = Item(author=Author(name="Jane", email="jane@example.com"))
        assert new_atom_entry(item).author == AtomPerson(name="Jane", uri="", email="jane@example.com")

    @pytest.mark.parametrize("author", [None, Author(), Author(name="", email="")])
    def test_empty_author_is_unset(self, author):
        """Test that missing or empty authors leave the entry author unset."""
        assert new_atom_entry(Item(author=author)).author is None


class TestAtomFeedMapping:
    """Tests for mapping a generic Feed to an AtomFeed."""

    def make_feed(self) -> Feed:
        feed = Feed(
            title="Test Blog",
            link=Link(href="https://example.com/", rel="alternate"),
            description="A blog about tests",
            author=Author(name="Jane", email="jane@example.com"),
            copyright="Copyright 2024 Jane",
            created=CREATED,
        )
        feed.add(Item(title="One", link=Link(href="https://example.com/1"), updated=UPDATED))
        feed.add(Item(title="Two", id="urn:example:2"))
        feed.add(Item(title="Three", link=Link(href="https://example.com/3"), created=CREATED))
        return feed

    def test_feed_fields(self):
        """Test feed-level metadata mapping."""
        atom = Atom(self.make_feed()).atom_feed()

        assert atom.xmlns == ATOM_NS
        assert atom.title == "Test Blog"
        assert atom.id == "https://example.com/"
        assert atom.subtitle == "A blog about tests"
        assert atom.rights == "Copyright 2024 Jane"
        assert atom.updated == "2023-12-01T08:00:00Z"
        assert atom.link("alternate") == ("https://example.com/", True)
        assert atom.author == AtomPerson(name="Jane", email="jane@example.com")

    def test_entries_keep_order(self):
        """Test that entries follow the item order."""
        atom = Atom(self.make_feed()).atom_feed()

        assert [e.title for e in atom.entries] == ["One", "Two", "Three"]
        assert atom.entries[1].id == "urn:example:2"
        assert atom.entries[2].id == "tag:example.com,2023-12-01:/3"

    def test_missing_author_is_synthesized(self):
        """Test that a feed without author still gets an empty author."""
        atom = Atom(Feed(title="Anonymous")).atom_feed()

        assert atom.author is not None
        assert atom.author.name == ""
        assert atom.author.email == ""

    def test_empty_feed(self):
        """Test that an empty feed maps to a valid document."""
        atom = Atom(Feed()).atom_feed()

        assert atom.title == ""
        assert atom.id == ""
        assert atom.updated == ""
        assert atom.entries == []
        assert atom.author == AtomPerson()

    def test_feed_xml_capability(self):
        """Test that both the wrapper and the document are XML-ready."""
        wrapper = Atom(self.make_feed())
        document = wrapper.feed_xml()

        assert isinstance(wrapper, XmlFeed)
        assert isinstance(document, XmlFeed)
        assert isinstance(document, AtomFeed)
        assert document.feed_xml() is document
