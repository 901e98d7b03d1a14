"""Port interfaces for the shelving commands.

These abstract base classes define the boundaries between core
command logic and external adapters. Implementations live in the
adapters/ package.

Port Interface Categories:

1. **Driven Ports** (core calls out to adapters)
   - ShelfStorePort: Create, apply, delete and list shelved changes
   - DiffStatPort: Summarize a patch artifact for listings

2. **Callback slot**
   - ClientContext.notify: Progress notifications, may be None
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence

from .models import ClientContext, Depth, ShelfRecord


class ShelfStorePort(ABC):
    """Port for the change-management subsystem that owns shelved changes.

    Adapters implementing this port are responsible for capturing and
    applying patches and for persisting shelf artifacts. The core never
    mutates records and never assumes what happens to a shelf after it
    is applied.

    Implementations must handle:
    - Atomicity of each create/delete/apply operation
    - Honouring the dry-run flag (validate and report, change nothing)
    - Reporting progress through ctx.notify when it is set
    """

    @abstractmethod
    def list_shelved_changes(
        self, root: str, ctx: ClientContext
    ) -> Mapping[str, ShelfRecord]:
        """Retrieve all shelved changes for a working-copy root.

        Args:
            root: Absolute path inside the working copy.
            ctx: Client context for this invocation.

        Returns:
            Mapping of store key (the artifact file name, including its
            suffix) to record. No ordering is guaranteed.

        Raises:
            StoreOperationError: If the root does not exist or the store
                cannot be read.
        """

    @abstractmethod
    def create_shelve(
        self,
        name: str,
        targets: Sequence[str],
        depth: Depth,
        changelists: Sequence[str],
        keep_local: bool,
        dry_run: bool,
        ctx: ClientContext,
    ) -> None:
        """Shelve local modifications under `targets` as `name`.

        Args:
            name: Bare shelf name.
            targets: Absolute local paths to shelve.
            depth: Depth to descend below each target.
            changelists: Restrict to these changelists (empty means all).
            keep_local: If True, leave the working copy modified.
            dry_run: If True, report what would happen without changes.
            ctx: Client context; ctx.log_message holds the log message.

        Raises:
            StoreOperationError: If the name already exists, there is
                nothing to shelve, or the underlying tool fails.
        """

    @abstractmethod
    def delete_shelve(
        self, name: str, root: str, dry_run: bool, ctx: ClientContext
    ) -> None:
        """Delete the shelved change `name`.

        Raises:
            StoreOperationError: If no such shelf exists or deletion fails.
        """

    @abstractmethod
    def apply_shelve(
        self,
        name: str,
        root: str,
        keep_local: bool,
        dry_run: bool,
        ctx: ClientContext,
    ) -> None:
        """Apply the shelved change `name` to the working copy.

        Whether the shelf is removed afterwards is up to the adapter;
        keep_local is forwarded unchanged.

        Raises:
            StoreOperationError: If no such shelf exists or the patch
                does not apply.
        """


class DiffStatPort(ABC):
    """Port for the external tool that summarizes a patch."""

    @abstractmethod
    def summarize(self, patch_path: str) -> str:
        """Return a diff-statistics block for a patch file.

        Args:
            patch_path: Path to the patch artifact.

        Returns:
            Formatted summary text, or an empty string if none is
            available.
        """
