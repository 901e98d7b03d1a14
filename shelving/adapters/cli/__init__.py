"""Command-line interface adapters.

Provides the shelving subcommands:
- shelve: Shelve, delete or list shelved changes
- unshelve: Reapply a shelved change
- shelves: List shelved changes with diff statistics
"""
