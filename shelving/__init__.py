"""Shelve, unshelve and list local working-copy changes."""

__version__ = "0.1.0"
