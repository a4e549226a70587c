"""Movie Listing - a small movie catalogue API over a single SQLite table."""

__version__ = "0.1.0"
