"""flags.py - List the kotlinc flags capgen would emit.

Prints each flag with its value placeholder, Starlark attribute type and
rendered default, as a Rich table or as JSON.  Suppressed flags are hidden
unless ``--all`` is given.
"""

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from capgen.arguments import LATEST_STABLE, K2JVMCompilerArguments
from capgen.capabilities import Capability, collect_capabilities
from capgen.cli import JsonOption, fail, json_print
from capgen.errors import CapgenError


def _first_line(text: str) -> str:
    return text.split("\n", 1)[0]


def _render_table(console: Console, capabilities: tuple[Capability, ...]) -> None:
    tbl = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    tbl.add_column("Flag", style="cyan", no_wrap=True)
    tbl.add_column("Value", style="green")
    tbl.add_column("Type", style="dim")
    tbl.add_column("Default")
    tbl.add_column("Description")

    for cap in capabilities:
        flag = f"[strike dim]{cap.flag}[/]" if cap.should_suppress() else cap.flag
        tbl.add_row(
            flag,
            escape(cap.value_description),
            cap.type.attr,
            escape(cap.default_starlark_value()),
            escape(_first_line(cap.doc)),
        )

    console.print(tbl)
    console.print(
        f"[bold]{len(capabilities)}[/] flags (Kotlin {LATEST_STABLE.version_string})",
        highlight=False,
    )


app = typer.Typer(
    help="List the kotlinc flags that would be generated.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]

capgen flags                 Table of emitted flags

capgen flags --all           Include suppressed flags (struck through)

capgen flags --json          Machine-readable JSON output""",
)


@app.callback(invoke_without_command=True)
def main(
    include_all: bool = typer.Option(False, "--all", help="Include suppressed flags"),
    json_output: bool = JsonOption,
) -> None:
    """Show flag, value placeholder, attribute type, default and description for every capability."""
    try:
        capabilities = collect_capabilities(K2JVMCompilerArguments, include_suppressed=include_all)
    except CapgenError as exc:
        fail(exc, json_mode=json_output)

    if json_output:
        json_print([c.to_dict() for c in capabilities])
        return

    _render_table(Console(), capabilities)


def main_entry() -> None:
    """Run the flags CLI app."""
    app()


if __name__ == "__main__":
    main_entry()
