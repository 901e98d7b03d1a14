"""Command dispatcher for shelve, unshelve and shelves.

Each operation validates the argument shape, resolves the shelf name,
delegates the mutating work to the store and prints a confirmation.
The first error aborts the command; nothing is retried.
"""

import logging
import os
import sys
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import TextIO

from .arguments import (
    absolutize,
    check_targets_are_local_paths,
    collect_targets,
    require_no_arguments,
    strip_peg_revision,
    take_name,
    to_utf8,
)
from .errors import TargetValidationError
from .lister import ShelfLister
from .models import ClientContext, Depth, ShelfRecord, ShelveOptions
from .ports import DiffStatPort, ShelfStorePort
from .resolver import NameResolver, strip_patch_suffix

logger = logging.getLogger(__name__)

NAME_COLUMN_WIDTH = 30
MESSAGE_DISPLAY_LENGTH = 50


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_listing_entry(
    key: str, record: ShelfRecord, now: datetime
) -> str:
    """Format the two listing lines for one shelf.

    Args:
        key: Store key of the shelf.
        record: The shelf's record.
        now: Reference time for the age column.

    Returns:
        Header line and indented message line, joined by a newline.
    """
    age_minutes = int((now - record.modified_at).total_seconds() / 60)
    header = (
        f"{strip_patch_suffix(key):<{NAME_COLUMN_WIDTH}} "
        f"{age_minutes:6d} mins old "
        f"{record.size_bytes:10d} bytes"
    )
    return f"{header}\n {record.message[:MESSAGE_DISPLAY_LENGTH]}"


@contextmanager
def log_message_scope(
    ctx: ClientContext, options: ShelveOptions
) -> Iterator[None]:
    """Attach the log message to the context for the duration of a call.

    The message is released on the way out whether or not the body
    raised; exceptions pass through untouched.
    """
    if options.message is None:
        yield
        return

    ctx.log_message = options.message
    try:
        yield
    finally:
        ctx.log_message = None
        logger.debug("Released log message")


class ShelveCommands:
    """Entry points for the three shelving subcommands.

    Holds no state between invocations: every call re-queries the store.
    """

    def __init__(
        self,
        store: ShelfStorePort,
        diffstat: DiffStatPort,
        out: TextIO | None = None,
        err: TextIO | None = None,
        clock: Callable[[], datetime] = _utc_now,
        getcwd: Callable[[], str] = os.getcwd,
    ):
        """Initialize the dispatcher.

        Args:
            store: ShelfStorePort implementation that owns the shelves.
            diffstat: DiffStatPort used for listings with statistics.
            out: Stream for results. None means sys.stdout at write time.
            err: Stream for warnings. None means sys.stderr at write time.
            clock: Returns the current time as an aware datetime.
            getcwd: Returns the current working directory.
        """
        self.store = store
        self.diffstat = diffstat
        self.out = out
        self.err = err
        self.clock = clock
        self.getcwd = getcwd
        self.lister = ShelfLister(store)
        self.resolver = NameResolver(self.lister)

    def shelve(
        self,
        args: Sequence[str | bytes],
        options: ShelveOptions,
        ctx: ClientContext,
    ) -> None:
        """Create, delete or list shelved changes.

        Raises:
            ArgumentShapeError: On a bad argument shape.
            TargetValidationError: If no targets are given or one is a URL.
            EncodingError: If the name or log message is not valid UTF-8.
            StoreOperationError: If the store operation fails.
        """
        if options.quiet:
            ctx.notify = None

        root = self._working_copy_root()

        if options.list_only:
            require_no_arguments(args)
            self.list_shelves(root, diffstat=not options.quiet, ctx=ctx)
            return

        name, remaining = take_name(args)

        if options.remove:
            require_no_arguments(remaining)
            logger.debug(f"Deleting shelf {name!r} (dry_run={options.dry_run})")
            self.store.delete_shelve(name, root, options.dry_run, ctx)
            if not options.quiet:
                self._print(f"deleted '{name}'")
            return

        targets, skipped = collect_targets(remaining, options.extra_targets)
        for target in skipped:
            self._warn(f"Skipping argument: '{target}' ends in a reserved name")

        # No implicit '.' target here, unlike most other commands.
        if not targets:
            raise TargetValidationError()

        check_targets_are_local_paths(targets)
        if options.message is not None:
            to_utf8(options.message)
        depth = options.depth if options.depth is not None else Depth.INFINITY
        targets = absolutize([strip_peg_revision(t) for t in targets], root)

        logger.debug(
            f"Shelving {len(targets)} targets as {name!r} "
            f"(depth={depth.value}, dry_run={options.dry_run})"
        )
        with log_message_scope(ctx, options):
            self.store.create_shelve(
                name,
                targets,
                depth,
                options.changelists,
                options.keep_local,
                options.dry_run,
                ctx,
            )

        if not options.quiet:
            self._print(f"shelved '{name}'")

    def unshelve(
        self,
        args: Sequence[str | bytes],
        options: ShelveOptions,
        ctx: ClientContext,
    ) -> None:
        """Apply a shelved change, or list shelves.

        Raises:
            ArgumentShapeError: On a bad argument shape.
            NoShelvesFoundError: If no name is given and nothing is shelved.
            EncodingError: If the name is not valid UTF-8.
            StoreOperationError: If the store operation fails.
        """
        root = self._working_copy_root()

        if options.list_only:
            require_no_arguments(args)
            self.list_shelves(root, diffstat=not options.quiet, ctx=ctx)
            return

        name, remaining, auto_selected = self.resolver.resolve(args, root, ctx)
        if auto_selected:
            self._print(f"unshelving the youngest change, '{name}'")

        require_no_arguments([*remaining, *options.extra_targets])

        if options.quiet:
            ctx.notify = None

        logger.debug(f"Unshelving {name!r} (dry_run={options.dry_run})")
        self.store.apply_shelve(
            name, root, options.keep_local, options.dry_run, ctx
        )
        if not options.quiet:
            self._print(f"unshelved '{name}'")

    def shelves(
        self,
        args: Sequence[str | bytes],
        options: ShelveOptions,
        ctx: ClientContext,
    ) -> None:
        """List all shelved changes with diff statistics."""
        require_no_arguments(args)
        root = self._working_copy_root()
        self.list_shelves(root, diffstat=True, ctx=ctx)

    def list_shelves(
        self, root: str, diffstat: bool, ctx: ClientContext
    ) -> None:
        """Print every shelf under `root`, oldest first."""
        now = self.clock()
        for key, record in self.lister.list_sorted_by_date(root, ctx):
            self._print(format_listing_entry(key, record, now))
            if diffstat:
                summary = self.diffstat.summarize(record.patch_path)
                if summary:
                    self._print(summary.rstrip("\n"))
                self._print("")

    def _working_copy_root(self) -> str:
        return os.path.abspath(self.getcwd())

    def _print(self, text: str) -> None:
        print(text, file=self.out if self.out is not None else sys.stdout)

    def _warn(self, text: str) -> None:
        logger.warning(text)
        print(text, file=self.err if self.err is not None else sys.stderr)
