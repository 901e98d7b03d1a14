"""Positional-argument helpers for the shelving subcommands.

Pure functions: they take the raw argument list left over after option
parsing and either return a normalized form or raise one of the
argument errors from the taxonomy.
"""

import os
import re
from collections.abc import Sequence

from .errors import ArgumentShapeError, EncodingError, TargetValidationError

ILLEGAL_TARGET_CODE = "E200009"
RESERVED_NAMES = frozenset({".svn"})

_URL_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")
_NAME_FORBIDDEN_CHARS = frozenset({"/", "\\", "\0"})


def to_utf8(arg: str | bytes) -> str:
    """Return `arg` as text, rejecting anything that is not valid UTF-8.

    Undecodable command-line bytes reach Python as lone surrogates, which
    fail the encode check.
    """
    try:
        if isinstance(arg, bytes):
            return arg.decode("utf-8")
        arg.encode("utf-8")
    except UnicodeError as e:
        raise EncodingError() from e
    return arg


def check_shelf_name(name: str) -> str:
    """Reject names that cannot be stored as a single file name.

    Raises:
        ArgumentShapeError: If the name is blank, is `.` or `..`, or
            contains a path separator or NUL.
    """
    if not name.strip():
        raise ArgumentShapeError("Shelf name must not be empty")
    if name in (".", "..") or any(char in name for char in _NAME_FORBIDDEN_CHARS):
        raise ArgumentShapeError(f"'{name}' is not a valid shelf name")
    return name


def take_name(args: Sequence[str | bytes]) -> tuple[str, list[str | bytes]]:
    """Split off the first argument as a shelf name.

    Raises:
        ArgumentShapeError: If there are no arguments or the name is invalid.
        EncodingError: If the name is not valid UTF-8.
    """
    if not args:
        raise ArgumentShapeError("Not enough arguments provided")
    return check_shelf_name(to_utf8(args[0])), list(args[1:])


def require_no_arguments(args: Sequence[object]) -> None:
    """Reject trailing positional arguments."""
    if args:
        raise ArgumentShapeError()


def is_url(target: str) -> bool:
    return bool(_URL_PATTERN.match(target))


def collect_targets(
    args: Sequence[str | bytes], extra_targets: Sequence[str] = ()
) -> tuple[list[str], list[str]]:
    """Merge positional targets with targets read from a file.

    Targets whose last path component is a reserved administrative name
    are dropped.

    Returns:
        Tuple of (targets, skipped reserved targets).
    """
    targets: list[str] = []
    skipped: list[str] = []
    for raw in [*args, *extra_targets]:
        target = to_utf8(raw)
        if os.path.basename(target.rstrip("/")) in RESERVED_NAMES:
            skipped.append(target)
            continue
        targets.append(target)
    return targets, skipped


def check_targets_are_local_paths(targets: Sequence[str]) -> None:
    """Raise TargetValidationError for any URL target."""
    for target in targets:
        if is_url(target):
            raise TargetValidationError(
                f"'{target}' is not a local path", code=ILLEGAL_TARGET_CODE
            )


def strip_peg_revision(target: str) -> str:
    """Remove a trailing ``@REV`` from the last path component."""
    for index in range(len(target) - 1, -1, -1):
        char = target[index]
        if char == "/":
            break
        if char == "@":
            return target[:index]
    return target


def absolutize(targets: Sequence[str], root: str) -> list[str]:
    """Resolve relative targets against the working-copy root."""
    return [os.path.normpath(os.path.join(root, target)) for target in targets]
