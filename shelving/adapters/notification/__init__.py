"""Notification adapters."""

from .stdout import StdoutNotifier

__all__ = ["StdoutNotifier"]
