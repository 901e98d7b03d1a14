"""Shelf name resolution.

A shelf is addressed either by an explicit name argument or, when the
name is omitted, by picking the youngest shelved change.
"""

import logging
from collections.abc import Sequence

from .arguments import take_name
from .errors import NoShelvesFoundError
from .lister import ShelfLister
from .models import ClientContext

logger = logging.getLogger(__name__)

# File extension of the on-disk patch artifact; store keys carry it,
# shelf names do not.
PATCH_SUFFIX = ".patch"


def strip_patch_suffix(key: str) -> str:
    """Turn a store key into a bare shelf name."""
    if key.endswith(PATCH_SUFFIX):
        return key[: -len(PATCH_SUFFIX)]
    return key


class NameResolver:
    """Determines which shelf a command operates on."""

    def __init__(self, lister: ShelfLister):
        self.lister = lister

    def youngest(self, root: str, ctx: ClientContext) -> str:
        """Name of the most recently modified shelf.

        Raises:
            NoShelvesFoundError: If there are no shelved changes.
        """
        shelves = self.lister.list_sorted_by_date(root, ctx)
        if not shelves:
            raise NoShelvesFoundError()

        key, _record = shelves[-1]
        return strip_patch_suffix(key)

    def resolve(
        self, args: Sequence[str], root: str, ctx: ClientContext
    ) -> tuple[str, list[str], bool]:
        """Pick the shelf named by the first argument, else the youngest.

        Returns:
            Tuple of (name, remaining arguments, auto_selected).
        """
        if args:
            name, remaining = take_name(args)
            return name, remaining, False

        name = self.youngest(root, ctx)
        logger.debug(f"Auto-selected youngest shelf {name!r}")
        return name, [], True
