"""Domain models for the shelving commands.

All models in this module use only Python standard library types,
ensuring zero external dependencies in the core domain.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import TypeAlias


@dataclass(frozen=True)
class ShelfRecord:
    """Metadata describing one shelved change.

    Records are produced by the store and are read-only to the core.
    `modified_at` is the sole ordering key between records.
    """

    name: str
    patch_path: str
    modified_at: datetime
    size_bytes: int
    message: str = ""

    def __post_init__(self) -> None:
        """Validate record invariants on creation."""
        if not self.name or not self.name.strip():
            raise ValueError("name must be a non-empty string")
        if self.size_bytes < 0:
            raise ValueError(
                f"size_bytes must be non-negative, got {self.size_bytes}"
            )


class Depth(Enum):
    """How far below a target path an operation descends."""

    EMPTY = "empty"
    FILES = "files"
    IMMEDIATES = "immediates"
    INFINITY = "infinity"


class NotifyAction(Enum):
    """Progress events reported through the notification callback."""

    SHELVED = "shelved"
    REVERTED = "reverted"
    PATCHED = "patched"
    DELETED = "deleted"


@dataclass(frozen=True)
class ShelfNotification:
    """A single progress event for one path."""

    path: str
    action: NotifyAction


NotifyCallback: TypeAlias = Callable[[ShelfNotification], None]


@dataclass(frozen=True)
class ShelveOptions:
    """Parsed command-line options shared by the shelving subcommands.

    `depth` of None means the user did not ask for a depth; shelve-create
    treats that as INFINITY. `extra_targets` holds targets read from a
    --targets file, appended after the positional arguments.
    """

    list_only: bool = False
    quiet: bool = False
    remove: bool = False
    keep_local: bool = False
    dry_run: bool = False
    depth: Depth | None = None
    changelists: tuple[str, ...] = ()
    message: str | None = None
    extra_targets: tuple[str, ...] = ()


@dataclass
class ClientContext:
    """Per-invocation client state passed by reference to every operation.

    Note: This dataclass is intentionally mutable. Quiet mode clears
    `notify`, and the log-message scope sets and releases `log_message`
    around a create-shelve call.
    """

    notify: NotifyCallback | None = None
    log_message: str | None = None

    def emit(self, path: str, action: NotifyAction) -> None:
        """Send a notification if a callback is installed."""
        if self.notify is not None:
            self.notify(ShelfNotification(path=path, action=action))
