#!/usr/bin/env python3
"""
replaycheck CLI - Temporal workflow replay testing

Main entrypoint for the replaycheck command-line tool.
"""

import typer
from rich.console import Console
from rich.table import Table

from replaycheck_cli.commands import run

# Initialize Typer app
app = typer.Typer(
    name="replaycheck",
    help="Replay Temporal workflow histories to catch non-deterministic changes",
    add_completion=False,
)

console = Console()

app.command(name="run")(run.run_command)


@app.command()
def version():
    """Show version information."""
    from replaycheck_cli import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]replaycheck[/bold]", f"v{__version__}")
    table.add_row("Engine", "Temporal (temporalio)")

    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
