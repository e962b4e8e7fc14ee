"""Command line interface for atom_feeds."""

from atom_feeds.cli.app import main

__all__ = ["main"]
