"""vcheck CLI - Main entry point."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from vcheck import __version__
from vcheck.checkers.base import ConformanceViolation
from vcheck.cli_utils import (
    EXIT_USER_ERROR,
    EXIT_VALIDATION_FAILED,
    checker_option,
    configure_logging,
    json_option,
    log_level_option,
    wire_config,
)
from vcheck.container import ValidationContainer
from vcheck.loader import CheckerLoadError, build_container
from vcheck.payload import PayloadError, load_payload

app = typer.Typer(
    name="vcheck",
    help="vcheck - Run pluggable conformance checkers against documents.",
    add_completion=False,
)

# Rich consoles for output
console = Console()
err_console = Console(stderr=True)


# -----------------------------------------------------------------------------
# Output Helpers
# -----------------------------------------------------------------------------


def _output_success(message: str, quiet: bool = False) -> None:
    """Print a success message."""
    if not quiet:
        console.print(f"[green]Success:[/green] {escape(message)}")


def _output_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)


def _output_warning(message: str, quiet: bool = False) -> None:
    """Print a warning message."""
    if not quiet:
        err_console.print(f"[yellow]Warning:[/yellow] {escape(message)}")


def _exit_error(message: str, exit_code: int = EXIT_USER_ERROR) -> NoReturn:
    """Print error and exit."""
    _output_error(message)
    raise typer.Exit(code=exit_code)


def _load_container(references: list[str]) -> ValidationContainer:
    """Build the container, exiting with a user error if a checker fails to load."""
    try:
        return build_container(references)
    except CheckerLoadError as e:
        _exit_error(str(e))


# -----------------------------------------------------------------------------
# Version and Main Callbacks
# -----------------------------------------------------------------------------


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"vcheck version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """vcheck - Run pluggable conformance checkers against documents."""
    pass


# -----------------------------------------------------------------------------
# Checkers Command
# -----------------------------------------------------------------------------


@app.command("checkers")
def list_checkers(
    checker: list[str] | None = checker_option(),
    log_level: str | None = log_level_option(),
    json_output: bool = json_option(),
) -> None:
    """List the checkers that would run, in dispatch order.

    Checkers come from .vcheckrc, pyproject.toml [tool.vcheck], the
    VCHECK_CHECKERS environment variable and --checker options.
    """
    config = wire_config(checkers=checker, log_level=log_level)
    configure_logging(config.log_level)
    container = _load_container(config.checkers)

    rows = [
        {
            "position": position,
            "reference": reference,
            "class": type(instance).__name__,
        }
        for position, (reference, instance) in enumerate(
            zip(config.checkers, container.checkers), start=1
        )
    ]

    if json_output:
        console.print_json(json.dumps({"checkers": rows}))
        return

    if not rows:
        console.print("No checkers configured.")
        return

    table = Table(title="Registered Checkers")
    table.add_column("#", justify="right")
    table.add_column("Reference", style="cyan")
    table.add_column("Class", style="green")

    for row in rows:
        table.add_row(str(row["position"]), row["reference"], row["class"])

    console.print(table)


# -----------------------------------------------------------------------------
# Check Command
# -----------------------------------------------------------------------------


@app.command()
def check(
    payload_path: Path = typer.Argument(
        ...,
        help="YAML file describing the document context and objects to check.",
    ),
    checker: list[str] | None = checker_option(),
    log_level: str | None = log_level_option(),
    json_output: bool = json_option(),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Minimal output for CI.",
    ),
) -> None:
    """Validate a document payload against every registered checker.

    Each object in the payload is checked first, in file order, followed by
    the document-level context. Validation stops at the first failure.

    Exits with code 2 if a checker rejects the document, 1 on configuration
    or input errors.
    """
    config = wire_config(checkers=checker, log_level=log_level)
    configure_logging(config.log_level)
    container = _load_container(config.checkers)

    try:
        payload = load_payload(payload_path)
    except PayloadError as e:
        _exit_error(str(e))

    if len(container) == 0:
        _output_warning("No checkers configured; nothing will be validated.", quiet or json_output)

    result: dict[str, Any] = {
        "valid": True,
        "payload": str(payload_path),
        "checkers": len(container),
        "objects_total": len(payload.objects),
        "objects_checked": 0,
        "document_checked": False,
        "violation": None,
    }

    try:
        for obj_payload in payload.objects:
            obj_payload.dispatch(container)
            result["objects_checked"] += 1
        container.validate(payload.context)
        result["document_checked"] = True
    except ConformanceViolation as e:
        result["valid"] = False
        result["violation"] = {
            "type": type(e).__name__,
            "message": e.message,
            "key": getattr(e.key, "value", e.key),
        }
    except Exception as e:
        # A checker crashed; the run is still a failed validation.
        result["valid"] = False
        result["violation"] = {
            "type": type(e).__name__,
            "message": str(e),
            "key": None,
        }

    if json_output:
        console.print_json(json.dumps(result))
    elif result["valid"]:
        _output_success(
            f"{payload_path} passed {result['checkers']} checker(s) "
            f"({result['objects_checked']} object(s) and document)",
            quiet,
        )
    else:
        violation = result["violation"]
        if result["objects_checked"] < result["objects_total"]:
            where = f"object {result['objects_checked'] + 1} of {result['objects_total']}"
        else:
            where = "document"
        _output_error(f"{violation['type']} at {where}: {violation['message']}")

    if not result["valid"]:
        raise typer.Exit(code=EXIT_VALIDATION_FAILED)
