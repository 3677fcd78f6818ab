"""CLI utility functions for vcheck.

Provides helper functions for:
- Config wiring: Extracting Typer CLI options and passing to load_config
- Error exit: Consistent user-friendly error message with exit codes
- Logging setup: Routing library loggers through Rich on stderr
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler

from vcheck.config import VcheckConfig, load_config

# Exit code conventions
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1  # User error (bad input, missing file, bad config, etc.)
EXIT_VALIDATION_FAILED = 2  # A checker rejected the document


# -----------------------------------------------------------------------------
# Error Formatting Helpers
# -----------------------------------------------------------------------------


def error(msg: str, *, exit_code: int = EXIT_USER_ERROR) -> NoReturn:
    """Print an error message and exit with the given exit code.

    Args:
        msg: The error message to display.
        exit_code: Exit code to use (default: EXIT_USER_ERROR=1).

    Raises:
        typer.Exit: Always raises to exit the program.
    """
    styled_prefix = typer.style("Error:", fg=typer.colors.RED, bold=True)
    typer.echo(f"{styled_prefix} {msg}", err=True)
    raise typer.Exit(code=exit_code)


# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------


def configure_logging(level: str) -> None:
    """Send vcheck log records to stderr through Rich.

    Only the "vcheck" logger tree is configured; the root logger is left to
    the host application.

    Args:
        level: Logging level name, e.g. "WARNING".
    """
    package_logger = logging.getLogger("vcheck")
    package_logger.setLevel(level)

    for handler in list(package_logger.handlers):
        if isinstance(handler, RichHandler):
            package_logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
    )
    handler.setLevel(level)
    package_logger.addHandler(handler)


# -----------------------------------------------------------------------------
# Config Wiring Helper
# -----------------------------------------------------------------------------


def wire_config(
    checkers: list[str] | None = None,
    log_level: str | None = None,
    start_dir: Path | None = None,
) -> VcheckConfig:
    """Wire CLI options to load_config with appropriate overrides.

    Args:
        checkers: Checker references given on the command line. These are
            appended after the configured checkers.
        log_level: Override for the logging level.
        start_dir: Directory to start searching for config files.

    Returns:
        Fully resolved VcheckConfig instance.

    Raises:
        typer.Exit: If configuration is invalid.
    """
    cli_overrides: dict[str, Any] = {}

    if checkers:
        cli_overrides["extra_checkers"] = list(checkers)
    if log_level is not None:
        cli_overrides["log_level"] = log_level

    try:
        return load_config(cli_overrides=cli_overrides, start_dir=start_dir)
    except ValueError as e:
        error(f"Invalid configuration: {e}", exit_code=EXIT_USER_ERROR)


# -----------------------------------------------------------------------------
# Typer Option Factory Functions
# -----------------------------------------------------------------------------
# Typer consumes Option objects when decorating commands, so each command
# needs a fresh instance.


def checker_option() -> Any:
    """Create a Typer Option for --checker / -k (repeatable)."""
    return typer.Option(
        None,
        "--checker",
        "-k",
        help="Checker reference 'package.module:Name'. Repeat to add more; "
        "added after configured checkers.",
    )


def log_level_option() -> Any:
    """Create a Typer Option for --log-level."""
    return typer.Option(
        None,
        "--log-level",
        help="Logging level (default: WARNING).",
        envvar="VCHECK_LOG_LEVEL",
    )


def json_option() -> Any:
    """Create a Typer Option for --json."""
    return typer.Option(
        False,
        "--json",
        help="Output as JSON.",
    )
