"""Create or update capgen.toml in the current directory.

Uses tomlkit so that comments and ordering of an existing file survive.

Usage:
    capgen init --out src/main/starlark/core/repositories/kotlin [--year 2025]
"""

from pathlib import Path

import tomlkit
import tomlkit.exceptions
import typer

from capgen.cli import error_exit
from capgen.config import CONFIG_FILENAME

app = typer.Typer(
    help="Create or update capgen.toml.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]

capgen init --out kotlin/                  Record the output directory

capgen init --out kotlin/ --year 2025      Also pin the header year

[dim]Afterwards 'capgen generate' needs no --out.[/dim]""",
)

DEFAULT_CAPGEN_TOML = """\
# capgen configuration
# Read by 'capgen generate' when --out / CAPGEN_OUT are not given.
# Relative paths are resolved against this file's directory.
"""


def _load_toml(path: Path) -> tomlkit.TOMLDocument:
    """Load capgen.toml as a tomlkit document, or start a fresh one."""
    if path.exists():
        return tomlkit.parse(path.read_text(encoding="utf-8"))
    return tomlkit.parse(DEFAULT_CAPGEN_TOML)


def _save_toml(doc: tomlkit.TOMLDocument, path: Path) -> None:
    """Write tomlkit document back, preserving formatting."""
    path.write_text(tomlkit.dumps(doc), encoding="utf-8")


def update_config(path: Path, out: str, year: int | None = None) -> tomlkit.TOMLDocument:
    """Set ``[output] dir`` (and optionally ``year``) in the file at *path*."""
    doc = _load_toml(path)
    output = doc.get("output")
    if output is None:
        output = tomlkit.table()
        doc["output"] = output
    output["dir"] = out
    if year is not None:
        output["year"] = year
    _save_toml(doc, path)
    return doc


@app.callback(invoke_without_command=True)
def main(
    out: str = typer.Option(..., "--out", "-o", help="Output directory to record."),
    year: int | None = typer.Option(None, "--year", help="Copyright year to pin."),
) -> None:
    """Record the generator's output directory in capgen.toml."""
    path = Path.cwd() / CONFIG_FILENAME
    try:
        update_config(path, out, year)
    except tomlkit.exceptions.ParseError as exc:
        error_exit(f"{path}: {exc}")
    typer.echo(f"Wrote {path}")


def main_entry() -> None:
    """Run the init CLI app."""
    app()


if __name__ == "__main__":
    main_entry()
