"""Working-copy shelf store adapter.

Implements ShelfStorePort on top of a Subversion working copy. Each
shelf is a patch file in the working copy's administrative area:

    <wc-root>/.svn/shelves/<name>.patch   the captured diff
    <wc-root>/.svn/shelves/<name>.log     the log message, if any

Patches are captured with ``svn diff``, removed from the working copy
with ``svn revert`` and reapplied with ``svn patch``.
"""

import logging
import subprocess
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from pathlib import Path

from shelving.core.errors import StoreOperationError
from shelving.core.models import ClientContext, Depth, NotifyAction, ShelfRecord
from shelving.core.ports import ShelfStorePort
from shelving.core.resolver import PATCH_SUFFIX

logger = logging.getLogger(__name__)

ADMIN_DIR_NAME = ".svn"
LOG_SUFFIX = ".log"
INDEX_PREFIX = "Index: "
# Patches may hold bytes from files in any encoding; they pass through unchanged.
PATCH_ERRORS = "surrogateescape"


class WorkingCopyShelfStore(ShelfStorePort):
    """Stores shelved changes as patch files inside the working copy."""

    def __init__(self, svn_binary: str = "svn", shelves_dir: str = "shelves"):
        """Initialize the working-copy store.

        Args:
            svn_binary: Name or path of the svn executable.
            shelves_dir: Directory under the admin area that holds shelves.
        """
        self.svn_binary = svn_binary
        self.shelves_dir = shelves_dir

    def list_shelved_changes(
        self, root: str, ctx: ClientContext
    ) -> Mapping[str, ShelfRecord]:
        """Map each patch file name to its record."""
        shelves_path = self._shelves_path(root)
        if not shelves_path.is_dir():
            return {}

        shelves: dict[str, ShelfRecord] = {}
        try:
            for patch in shelves_path.glob(f"*{PATCH_SUFFIX}"):
                name = patch.name[: -len(PATCH_SUFFIX)]
                if not name.strip():
                    logger.warning(f"Ignoring unnamed shelf file '{patch}'")
                    continue
                stat = patch.stat()
                shelves[patch.name] = ShelfRecord(
                    name=name,
                    patch_path=str(patch),
                    modified_at=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
                    size_bytes=stat.st_size,
                    message=self._read_message(shelves_path, name),
                )
        except OSError as e:
            raise StoreOperationError(f"Can't read shelves in '{shelves_path}': {e}") from e
        return shelves

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
        """Capture a diff of `targets` and, unless keep_local, revert them."""
        wc_root = self._find_wc_root(targets[0])
        shelves_path = wc_root / ADMIN_DIR_NAME / self.shelves_dir
        patch_path = _shelf_file(shelves_path, name, PATCH_SUFFIX)
        if patch_path.exists():
            raise StoreOperationError(f"Shelved change '{name}' already exists")

        selection = ["--depth", depth.value]
        for changelist in changelists:
            selection += ["--changelist", changelist]

        diff = self._run_svn(["diff", *selection, *targets], cwd=wc_root)
        if not diff.strip():
            raise StoreOperationError(
                f"No local modifications could be found to shelve as '{name}'"
            )

        paths = _paths_in_patch(diff)
        for path in paths:
            ctx.emit(path, NotifyAction.SHELVED)

        if dry_run:
            logger.info(f"Dry run: would shelve {len(paths)} paths as '{name}'")
            return

        try:
            patch_bytes = diff.encode("utf-8", errors=PATCH_ERRORS)
            log_bytes = (
                ctx.log_message.encode("utf-8")
                if ctx.log_message is not None
                else None
            )
        except UnicodeError as e:
            raise StoreOperationError(f"Can't encode shelf '{name}': {e}") from e

        log_path = _shelf_file(shelves_path, name, LOG_SUFFIX)
        try:
            shelves_path.mkdir(parents=True, exist_ok=True)
            patch_path.write_bytes(patch_bytes)
            if log_bytes is not None:
                log_path.write_bytes(log_bytes)
        except OSError as e:
            patch_path.unlink(missing_ok=True)
            raise StoreOperationError(f"Can't write shelf '{name}': {e}") from e

        if not keep_local:
            self._run_svn(["revert", *selection, *targets], cwd=wc_root)
            for path in paths:
                ctx.emit(path, NotifyAction.REVERTED)

        logger.info(f"Shelved {len(paths)} paths as '{name}'")

    def delete_shelve(
        self, name: str, root: str, dry_run: bool, ctx: ClientContext
    ) -> None:
        """Remove the patch and message files of a shelf."""
        shelves_path = self._shelves_path(root)
        patch_path = self._existing_patch(shelves_path, name)

        if not dry_run:
            try:
                patch_path.unlink()
                _shelf_file(shelves_path, name, LOG_SUFFIX).unlink(missing_ok=True)
            except OSError as e:
                raise StoreOperationError(f"Can't delete shelf '{name}': {e}") from e

        ctx.emit(str(patch_path), NotifyAction.DELETED)

    def apply_shelve(
        self,
        name: str,
        root: str,
        keep_local: bool,
        dry_run: bool,
        ctx: ClientContext,
    ) -> None:
        """Apply a shelf with ``svn patch`` and drop it unless keep_local."""
        wc_root = self._find_wc_root(root)
        shelves_path = wc_root / ADMIN_DIR_NAME / self.shelves_dir
        patch_path = self._existing_patch(shelves_path, name)

        args = ["patch", str(patch_path)]
        if dry_run:
            args.append("--dry-run")
        self._run_svn(args, cwd=wc_root)

        try:
            diff = patch_path.read_text(encoding="utf-8", errors=PATCH_ERRORS)
        except OSError as e:
            raise StoreOperationError(f"Can't read shelf '{name}': {e}") from e
        for path in _paths_in_patch(diff):
            ctx.emit(path, NotifyAction.PATCHED)

        if dry_run or keep_local:
            return

        self.delete_shelve(name, str(wc_root), dry_run=False, ctx=ctx)

    def _shelves_path(self, root: str) -> Path:
        return self._find_wc_root(root) / ADMIN_DIR_NAME / self.shelves_dir

    def _existing_patch(self, shelves_path: Path, name: str) -> Path:
        patch_path = _shelf_file(shelves_path, name, PATCH_SUFFIX)
        if not patch_path.is_file():
            raise StoreOperationError(f"Shelved change '{name}' not found")
        return patch_path

    @staticmethod
    def _find_wc_root(path: str) -> Path:
        """Walk up from `path` to the directory holding the admin area."""
        start = Path(path)
        if not start.exists():
            raise StoreOperationError(f"The path '{path}' does not exist")

        start = start.resolve()
        if not start.is_dir():
            start = start.parent
        for candidate in (start, *start.parents):
            if (candidate / ADMIN_DIR_NAME).is_dir():
                return candidate
        raise StoreOperationError(f"'{path}' is not a working copy")

    @staticmethod
    def _read_message(shelves_path: Path, name: str) -> str:
        log_path = shelves_path / f"{name}{LOG_SUFFIX}"
        if not log_path.is_file():
            return ""
        return log_path.read_text(encoding="utf-8", errors="replace").strip()

    def _run_svn(self, args: list[str], cwd: Path) -> str:
        """Run svn and return its stdout.

        Raises:
            StoreOperationError: If svn is missing or exits non-zero.
        """
        command = [self.svn_binary, *args]
        logger.debug(f"Running {' '.join(command)} in {cwd}")
        try:
            result = subprocess.run(
                command,
                cwd=cwd,
                capture_output=True,
                encoding="utf-8",
                errors=PATCH_ERRORS,
                check=False,
            )
        except OSError as e:
            raise StoreOperationError(f"Can't run '{self.svn_binary}': {e}") from e

        if result.returncode != 0:
            raise StoreOperationError(
                result.stderr.strip()
                or f"'{self.svn_binary} {args[0]}' exited with status {result.returncode}"
            )
        return result.stdout


def _paths_in_patch(diff: str) -> list[str]:
    """Paths named by the ``Index:`` headers of a unified diff."""
    return [
        line[len(INDEX_PREFIX):].strip()
        for line in diff.splitlines()
        if line.startswith(INDEX_PREFIX)
    ]


def _shelf_file(shelves_path: Path, name: str, suffix: str) -> Path:
    """Path of one shelf file, refusing names that leave `shelves_path`."""
    path = shelves_path / f"{name}{suffix}"
    if not name.strip() or "\0" in name or path.parent != shelves_path:
        raise StoreOperationError(f"'{name}' is not a valid shelf name")
    return path
