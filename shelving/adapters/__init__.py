"""External adapters for the shelving commands.

This package contains all external dependencies (the svn binary,
diffstat, the terminal, the command-line parser) and provides
implementations of the core port interfaces.

Adapter Organization:

- store/: Shelf persistence over a Subversion working copy
- diffstat/: Patch summaries for listings
- notification/: Progress callbacks
- cli/: Command-line interface for shelve, unshelve and shelves
"""
