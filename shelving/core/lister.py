"""Ordering of shelved changes by modification time.

The store returns an unordered mapping; everything that shows or picks
shelves goes through a single explicit sort so the result never depends
on the store's iteration order.
"""

import logging
from collections.abc import Mapping

from .models import ClientContext, ShelfRecord
from .ports import ShelfStorePort

logger = logging.getLogger(__name__)


def sort_by_modification_time(
    shelves: Mapping[str, ShelfRecord],
) -> list[tuple[str, ShelfRecord]]:
    """Order shelves oldest first.

    Records with identical timestamps are ordered by store key.
    """
    return sorted(
        shelves.items(),
        key=lambda item: (item[1].modified_at, item[0]),
    )


class ShelfLister:
    """Lists shelved changes for a working-copy root, oldest first.

    Read-only; store errors propagate unchanged.
    """

    def __init__(self, store: ShelfStorePort):
        self.store = store

    def list_sorted_by_date(
        self, root: str, ctx: ClientContext
    ) -> list[tuple[str, ShelfRecord]]:
        """Return (key, record) pairs ordered by modified_at ascending."""
        shelves = self.store.list_shelved_changes(root, ctx)
        logger.debug(f"Found {len(shelves)} shelved changes under {root}")
        return sort_by_modification_time(shelves)
