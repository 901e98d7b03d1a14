"""Stdout notification adapter.

Provides the progress callback installed in ClientContext.notify,
printing one line per path the store touches.
"""

import sys
from typing import TextIO

from shelving.core.models import NotifyAction, ShelfNotification

_LABELS = {
    NotifyAction.SHELVED: "Shelved",
    NotifyAction.REVERTED: "Reverted",
    NotifyAction.PATCHED: "Patched",
    NotifyAction.DELETED: "Deleted",
}


class StdoutNotifier:
    """Callable notification sink with svn-style progress lines."""

    def __init__(self, out: TextIO | None = None):
        """Initialize the notifier.

        Args:
            out: Stream to print to. None means sys.stdout at write time.
        """
        self.out = out

    def __call__(self, notification: ShelfNotification) -> None:
        print(
            self.format(notification),
            file=self.out if self.out is not None else sys.stdout,
        )

    @staticmethod
    def format(notification: ShelfNotification) -> str:
        """Format a notification as ``<Label> '<path>'``."""
        return f"{_LABELS[notification.action]} '{notification.path}'"
