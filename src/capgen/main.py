"""main.py – Umbrella CLI entry point for capgen.

Lazily imports and registers each subcommand's typer app so that a command
whose dependencies fail to import is reported instead of breaking the whole
CLI.  Each command module exposes ``app`` and a ``main`` callback, which is
registered here as a flat ``app.command()``.
"""

import importlib
import sys
from collections.abc import Callable

import typer

from capgen import __version__

app = typer.Typer(
    help="Generate Bazel capability files describing kotlinc flags.",
    rich_markup_mode="rich",
    no_args_is_help=True,
    epilog="""\
[bold]Typical workflow:[/bold]
  capgen init --out DIR        Record the output directory in capgen.toml
  capgen flags                 Review the flags that will be emitted
  capgen generate --out DIR    Write capabilities_<ver>.bzl... and templates.bzl

[dim]Run 'capgen <cmd> --help' for details.[/dim]""",
)

# ---------------------------------------------------------------------------
# Subcommand registry
# ---------------------------------------------------------------------------

_COMMANDS: list[tuple[str, str, str]] = [
    ("generate", "capgen.generate", "Regenerate kotlinc capability files for Bazel."),
    ("flags", "capgen.flags", "List the kotlinc flags that would be generated."),
    ("init", "capgen.init", "Create or update capgen.toml."),
]


def _make_stub_cmd(mod_name: str, err: ImportError) -> Callable[[], None]:
    """Create a stub command function that reports a missing dependency."""

    def _stub() -> None:
        print(f"Error: could not load '{mod_name}': {err}", file=sys.stderr)
        raise typer.Exit(code=1)

    return _stub


def _version_callback(value: bool) -> None:
    if value:
        print(f"capgen {__version__}")
        raise typer.Exit()


@app.callback()
def _root(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the capgen version and exit.",
    ),
) -> None:
    pass


for _name, _module, _help in _COMMANDS:
    try:
        _mod = importlib.import_module(_module)
        _epilog = getattr(_mod.app.info, "epilog", None)
        if not isinstance(_epilog, str):
            _epilog = None
        app.command(name=_name, help=_help, epilog=_epilog)(_mod.main)
    except ImportError as _exc:
        app.command(name=_name, help=f"[unavailable] {_help}")(_make_stub_cmd(_module, _exc))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
