"""CLI command implementations for shelving.

Maps the shelve, unshelve and shelves subcommands onto ShelveCommands.
Option parsing lives here; argument-shape validation stays in the core,
so positional arguments are passed through untouched.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import typer

from shelving.core.commands import ShelveCommands
from shelving.core.errors import ArgumentShapeError, EncodingError, ShelvingError
from shelving.core.models import ClientContext, Depth, ShelveOptions

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Set aside and reapply local working-copy changes.",
    no_args_is_help=True,
    add_completion=False,
)


@dataclass
class CommandEnvironment:
    """Everything a subcommand needs, built by the composition root."""

    commands: ShelveCommands
    context: ClientContext


def _environment(ctx: typer.Context) -> CommandEnvironment:
    if not isinstance(ctx.obj, CommandEnvironment):
        raise RuntimeError("shelving CLI invoked without a CommandEnvironment")
    return ctx.obj


def _read_text_file(path: Path) -> str:
    """Read a UTF-8 text file given on the command line."""
    try:
        return path.read_bytes().decode("utf-8")
    except UnicodeDecodeError as e:
        raise EncodingError(f"Can't convert '{path}' to UTF-8") from e


def _read_targets_file(path: Optional[Path]) -> tuple[str, ...]:
    if path is None:
        return ()
    return tuple(line.strip() for line in _read_text_file(path).splitlines() if line.strip())


def _log_message(message: Optional[str], message_file: Optional[Path]) -> Optional[str]:
    if message is not None and message_file is not None:
        raise ArgumentShapeError(
            "--message (-m) and --file (-F) are mutually exclusive"
        )
    if message_file is not None:
        return _read_text_file(message_file)
    return message


def _report(error: ShelvingError, subcommand: str) -> None:
    """Print a failure once to stderr in client error format."""
    message = str(error)
    if isinstance(error, ArgumentShapeError) and message == ArgumentShapeError.default_message:
        message = f"Try 'svn help {subcommand}' for more information"
    typer.echo(f"svn: {error.code}: {message}", err=True)


@app.command("shelve")
def shelve_command(
    ctx: typer.Context,
    args: Optional[List[str]] = typer.Argument(None, metavar="NAME [PATH...]"),
    list_only: bool = typer.Option(False, "--list", help="List shelved changes by name, without the .patch suffix."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Print nothing, or only summary information."),
    remove: bool = typer.Option(False, "--remove", help="Delete the shelved change NAME."),
    keep_local: bool = typer.Option(False, "--keep-local", help="Keep the changes in the working copy."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Try the operation but make no changes."),
    depth: Optional[Depth] = typer.Option(None, "--depth", case_sensitive=False, help="Limit operation by depth."),
    changelists: Optional[List[str]] = typer.Option(None, "--changelist", "--cl", help="Operate only on members of this changelist."),
    message: Optional[str] = typer.Option(None, "--message", "-m", help="Log message to store with the shelved change."),
    message_file: Optional[Path] = typer.Option(None, "--file", "-F", exists=True, dir_okay=False, help="Read the log message from FILE."),
    targets_file: Optional[Path] = typer.Option(None, "--targets", exists=True, dir_okay=False, help="Read additional target paths from FILE, one per line."),
) -> None:
    """Put local changes aside, as if committing and then reverting them."""
    env = _environment(ctx)
    try:
        options = ShelveOptions(
            list_only=list_only,
            quiet=quiet,
            remove=remove,
            keep_local=keep_local,
            dry_run=dry_run,
            depth=depth,
            changelists=tuple(changelists or ()),
            message=_log_message(message, message_file),
            extra_targets=_read_targets_file(targets_file),
        )
        env.commands.shelve(args or [], options, env.context)
    except ShelvingError as e:
        logger.debug(f"shelve failed: {e!r}")
        _report(e, "shelve")
        raise typer.Exit(code=1)


@app.command("unshelve")
def unshelve_command(
    ctx: typer.Context,
    args: Optional[List[str]] = typer.Argument(None, metavar="[NAME]"),
    list_only: bool = typer.Option(False, "--list", help="List shelved changes by name, without the .patch suffix."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Print nothing, or only summary information."),
    keep_local: bool = typer.Option(False, "--keep-local", help="Keep the shelved change after applying it."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Try the operation but make no changes."),
    targets_file: Optional[Path] = typer.Option(None, "--targets", exists=True, dir_okay=False, help="Read additional target paths from FILE, one per line."),
) -> None:
    """Bring a shelved change back to the working copy (default: the youngest)."""
    env = _environment(ctx)
    try:
        options = ShelveOptions(
            list_only=list_only,
            quiet=quiet,
            keep_local=keep_local,
            dry_run=dry_run,
            extra_targets=_read_targets_file(targets_file),
        )
        env.commands.unshelve(args or [], options, env.context)
    except ShelvingError as e:
        logger.debug(f"unshelve failed: {e!r}")
        _report(e, "unshelve")
        raise typer.Exit(code=1)


@app.command("shelves")
def shelves_command(
    ctx: typer.Context,
    args: Optional[List[str]] = typer.Argument(None, hidden=True),
) -> None:
    """List shelved changes with diff statistics.

    Names are shown without the .patch suffix of the stored file, so each
    one can be passed straight to unshelve.
    """
    env = _environment(ctx)
    try:
        env.commands.shelves(args or [], ShelveOptions(), env.context)
    except ShelvingError as e:
        logger.debug(f"shelves failed: {e!r}")
        _report(e, "shelves")
        raise typer.Exit(code=1)
