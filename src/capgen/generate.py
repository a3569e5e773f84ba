"""generate.py - Regenerate kotlinc capability files for Bazel.

Writes ``capabilities_<major>.<minor>.bzl.com_github_jetbrains_kotlin.bazel``
for the latest stable Kotlin language version, then refreshes
``templates.bzl`` so it lists every capabilities file in the directory.

Usage:
    capgen generate --out src/main/starlark/core/repositories/kotlin
    capgen generate --out '${BUILD_WORKSPACE_DIRECTORY}/kotlin' --json
"""

import typer
from rich.console import Console
from rich.markup import escape

from capgen.arguments import LATEST_STABLE
from capgen.cli import JsonOption, OutOption, YearOption, error_exit, fail, json_print
from capgen.config import load_config
from capgen.emit import regenerate
from capgen.errors import CapgenError

app = typer.Typer(
    help="Regenerate kotlinc capability files for Bazel.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]

capgen generate --out kotlin/                     Write into kotlin/

capgen generate --out '${BUILD_WORKSPACE_DIRECTORY}/kotlin'   Expand env vars

capgen generate --year 2025 --json               Pin header year, JSON summary

[bold]What it writes:[/bold]

capabilities_<major>.<minor>.bzl.com_github_jetbrains_kotlin.bazel   KOTLIN_OPTS

templates.bzl                                    TEMPLATES index

[dim]The output directory may also come from CAPGEN_OUT or [output] dir in capgen.toml.[/dim]""",
)


@app.callback(invoke_without_command=True)
def main(
    out: str | None = OutOption,
    year: int | None = YearOption,
    json_output: bool = JsonOption,
) -> None:
    """Regenerate the capabilities document and the templates index."""
    try:
        cfg = load_config(out=out, year=year)
        result = regenerate(cfg.out_dir, version=LATEST_STABLE, year=cfg.year)
    except CapgenError as exc:
        fail(exc, json_mode=json_output)
    except OSError as exc:
        error_exit(str(exc), json_mode=json_output)

    if json_output:
        json_print({"language_version": LATEST_STABLE.version_string, **result.to_dict()})
        return

    console = Console(stderr=True)
    console.print(f"Wrote [bold]{result.flag_count}[/] flags to {escape(str(result.capabilities))}", highlight=False)
    console.print(f"Wrote {escape(str(result.templates))}", highlight=False)


def main_entry() -> None:
    """Run the generate CLI app."""
    app()


if __name__ == "__main__":
    main_entry()
