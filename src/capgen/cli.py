"""Shared CLI utilities for capgen commands.

Provides the common ``--out`` / ``--year`` / ``--json`` options and the
standardised output and error helpers every command uses.

Usage in a command::

    import typer
    from capgen.cli import OutOption, error_exit, json_print

    app = typer.Typer()

    @app.command()
    def main(out: str | None = OutOption) -> None:
        ...
"""

from __future__ import annotations

import json
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from capgen.errors import EXIT_ERROR, CapgenError

# Re-usable Typer option for the destination directory
OutOption: str | None = typer.Option(
    None,
    "--out",
    "-o",
    envvar="CAPGEN_OUT",
    help="Output directory for generated .bzl files. ${VAR} tokens are expanded "
    "from the environment. Defaults to [output] dir in capgen.toml.",
)

YearOption: int | None = typer.Option(
    None,
    "--year",
    help="Copyright year stamped into the header (default: current year).",
)

JsonOption: bool = typer.Option(False, "--json", help="Output results as JSON")


# ---------------------------------------------------------------------------
# Standardised output helpers
# ---------------------------------------------------------------------------

_err_console = Console(stderr=True)


def error_exit(msg: str, *, json_mode: bool = False, code: int = EXIT_ERROR) -> NoReturn:
    """Print *msg* as an error and ``raise typer.Exit(code)``."""
    if json_mode:
        print(json.dumps({"error": msg}, indent=2))
    else:
        _err_console.print(f"[red bold]error:[/red bold] {escape(msg)}", highlight=False)
    raise typer.Exit(code=code)


def fail(exc: CapgenError, *, json_mode: bool = False) -> NoReturn:
    """Report a generator error and exit with its code."""
    error_exit(str(exc), json_mode=json_mode, code=exc.code)


def json_print(data: dict[str, Any] | list[Any]) -> None:
    """Print *data* as pretty-printed JSON to stdout."""
    print(json.dumps(data, indent=2))
