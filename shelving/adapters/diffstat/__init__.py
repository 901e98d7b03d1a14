"""Diff-statistics adapters."""

from .command import DiffStatCommandAdapter

__all__ = ["DiffStatCommandAdapter"]
