"""Main module for atom_feeds.

This module allows the command line to be run as a Python module using:
python -m atom_feeds

It delegates to the CLI application's main function.
"""

from atom_feeds.cli.app import main

if __name__ == "__main__":
    main()
