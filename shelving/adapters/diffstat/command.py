"""Diff-statistics adapter.

Implements DiffStatPort by running the external ``diffstat`` tool on a
patch file. The summary is decoration for listings, so a missing or
failing tool yields an empty summary instead of an error.
"""

import logging
import subprocess

from shelving.core.ports import DiffStatPort

logger = logging.getLogger(__name__)


class DiffStatCommandAdapter(DiffStatPort):
    """Runs ``diffstat <patch>`` and returns its output."""

    def __init__(self, diffstat_binary: str = "diffstat"):
        """Initialize the adapter.

        Args:
            diffstat_binary: Name or path of the diffstat executable.
        """
        self.diffstat_binary = diffstat_binary

    def summarize(self, patch_path: str) -> str:
        """Return the diffstat block for `patch_path`, or "" on failure."""
        try:
            result = subprocess.run(
                [self.diffstat_binary, patch_path],
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as e:
            logger.warning(f"Can't run {self.diffstat_binary}: {e}")
            return ""

        if result.returncode != 0:
            logger.debug(
                f"{self.diffstat_binary} exited with status {result.returncode} "
                f"for {patch_path}: {result.stderr.strip()}"
            )
            return ""
        return result.stdout
