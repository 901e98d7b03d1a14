"""Shelf store adapters."""

from .working_copy import WorkingCopyShelfStore

__all__ = ["WorkingCopyShelfStore"]
