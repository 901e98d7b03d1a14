"""Composition root for the shelving commands.

This module is the ONLY location that imports both core command logic
and concrete adapter implementations. All wiring of dependencies
happens here, creating a clear entry point for the application.

Module Structure:
- Configuration loading via config module
- Logging setup
- Adapter instantiation
- Command environment construction
- Hand-off to the Typer application
"""

import logging
import sys

from shelving.adapters.cli.commands import CommandEnvironment, app
from shelving.adapters.diffstat.command import DiffStatCommandAdapter
from shelving.adapters.notification.stdout import StdoutNotifier
from shelving.adapters.store.working_copy import WorkingCopyShelfStore
from shelving.config import Settings, load_settings
from shelving.core.commands import ShelveCommands
from shelving.core.models import ClientContext


def configure_logging(log_level: str, log_format: str) -> None:
    """Configure application logging.

    Logs go to stderr so they never mix with listing output.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Log format (json, text).
    """
    level = getattr(logging, log_level, logging.WARNING)

    if log_format == "json":
        format_str = '{"time": "%(asctime)s", "level": "%(levelname)s", "message": "%(message)s"}'
    else:
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
    )


def build_environment(settings: Settings) -> CommandEnvironment:
    """Instantiate adapters and wire them into the command dispatcher."""
    store = WorkingCopyShelfStore(
        svn_binary=settings.svn_binary,
        shelves_dir=settings.shelves_dir,
    )
    diffstat = DiffStatCommandAdapter(diffstat_binary=settings.diffstat_binary)
    commands = ShelveCommands(store=store, diffstat=diffstat)
    context = ClientContext(notify=StdoutNotifier())
    return CommandEnvironment(commands=commands, context=context)


def main() -> None:
    """Application entry point.

    Exit codes:
        0: Command succeeded
        1: Invalid configuration or command failure
        2: Usage error reported by the option parser
    """
    logger = logging.getLogger(__name__)
    try:
        settings = load_settings()
    except ValueError as e:
        # pydantic's ValidationError is a ValueError
        print(f"svn: invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)

    configure_logging(
        "DEBUG" if settings.debug else settings.log_level,
        settings.log_format,
    )
    logger.debug("Starting shelving commands")

    app(obj=build_environment(settings), prog_name="svn")


if __name__ == "__main__":
    main()
