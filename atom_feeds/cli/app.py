"""atom_feeds - command line interface.

Fetch, parse and convert Atom feeds from the shell.
"""

import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

import click

from atom_feeds.config import get_config
from atom_feeds.errors import AtomFeedError
from atom_feeds.logging_config import logger, setup_logging
from atom_feeds.models.atom import AtomFeed
from atom_feeds.services.codec import parse_atom_feed, to_xml
from atom_feeds.services.feed_source import load_feed
from atom_feeds.services.fetcher import download_atom_feed
from atom_feeds.services.mapper import Atom


def _echo_feed(feed: AtomFeed, as_xml: bool) -> None:
    """Print a parsed feed as XML or as a short summary."""
    if as_xml:
        click.echo(to_xml(feed), nl=False)
        return

    click.echo(f"Title:   {feed.title}")
    click.echo(f"Id:      {feed.id}")
    click.echo(f"Updated: {feed.updated}")
    click.echo(f"Entries: {len(feed.entries)}")
    for entry in feed.entries:
        href, _ = entry.link("alternate")
        if not href and entry.links:
            href = entry.links[0].href
        click.echo(f"  - {entry.updated or '-'}  {entry.title}  {href}")


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Override the configured log level"
)
def main(log_level: Optional[str]) -> None:
    """Fetch, parse and convert Atom feeds."""
    config = get_config()
    if log_level:
        config = replace(config, log_level=log_level.upper())
    setup_logging(config)


@main.command()
@click.argument("url")
@click.option("--xml", "as_xml", is_flag=True, help="Print the feed as Atom XML")
def fetch(url: str, as_xml: bool) -> None:
    """Download an Atom feed and print it."""
    try:
        feed = download_atom_feed(url)
    except AtomFeedError as e:
        raise click.ClickException(f"{url}: {e}") from e

    _echo_feed(feed, as_xml)


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--xml", "as_xml", is_flag=True, help="Print the feed as Atom XML")
def parse(path: Path, as_xml: bool) -> None:
    """Strictly parse a local Atom file and print it."""
    try:
        feed = parse_atom_feed(path.read_bytes())
    except AtomFeedError as e:
        raise click.ClickException(f"{path}: {e}") from e

    _echo_feed(feed, as_xml)


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the Atom document to a file instead of stdout"
)
def convert(path: Path, output: Optional[Path]) -> None:
    """Convert an RSS or Atom file to Atom 1.0."""
    try:
        feed = load_feed(path.read_bytes())
    except AtomFeedError as e:
        raise click.ClickException(f"{path}: {e}") from e

    xml = to_xml(Atom(feed))

    if output is None:
        click.echo(xml, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(xml, encoding="utf-8")
    logger.info(f"Wrote {len(feed.items)} entries to {output}")


if __name__ == "__main__":
    sys.exit(main())
